"""Compile service - page object document to generated source.

This service:
1. Parses the document into grammar models
2. Translates it to PageObjectIR
3. Renders interface and implementation source
"""

import logging
from typing import Any

from src.models.compile import CompileResponseModel, MethodModel
from src.translator import render_implementation, render_interface, translate_page_object
from src.translator.ir import PageObjectIR

logger = logging.getLogger(__name__)


class CompileService:
    """Compiles page object documents in memory."""

    def compile(self, name: str, package: str, document: dict[str, Any]) -> CompileResponseModel:
        """Compile one document.

        Raises:
            CompilerError: If the document cannot be compiled
        """
        ir = translate_page_object(document, name, package)
        logger.info(f"Compiled page object '{ir.full_name}'")
        return self._to_response(ir)

    @staticmethod
    def _to_response(ir: PageObjectIR) -> CompileResponseModel:
        methods = list(ir.methods)
        if ir.before_load is not None:
            methods.append(ir.before_load)
        return CompileResponseModel(
            name=ir.name,
            package=ir.package,
            interface_source=render_interface(ir),
            implementation_source=render_implementation(ir),
            methods=[
                MethodModel(
                    name=method.name,
                    declaration=method.declaration.code_line,
                    code_lines=method.code_lines,
                )
                for method in methods
            ],
        )
