"""Compile routes for page object documents."""

import logging

from fastapi import APIRouter, HTTPException

from src.models.compile import CompileRequestModel, CompileResponseModel
from src.service.compile_service import CompileService
from src.translator.errors import CompilerError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compile", tags=["compile"])


@router.post("", response_model=CompileResponseModel)
async def compile_page_object(request: CompileRequestModel) -> CompileResponseModel:
    """Compile one page object document to interface and implementation source.

    Compiler errors are returned as 422 with the compiler message as detail.
    """
    logger.info(f"Compile request for '{request.name}' in package '{request.package}'")
    try:
        return CompileService().compile(request.name, request.package, request.document)
    except CompilerError as e:
        logger.warning(f"Compile request for '{request.name}' failed: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
