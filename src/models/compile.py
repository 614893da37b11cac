"""Compile request and response models for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field


class CompileRequestModel(BaseModel):
    """Request to compile one page object document."""

    name: str = Field(..., description="Generated type name (e.g., 'Home')")
    package: str = Field(default="", description="Generated package (e.g., 'my.app.pageobjects')")
    document: dict[str, Any] = Field(..., description="Page object document (JSON grammar)")


class MethodModel(BaseModel):
    """A compiled method."""

    name: str
    declaration: str = Field(..., description="Signature, e.g. 'String getTitle()'")
    code_lines: list[str] = Field(default_factory=list)


class CompileResponseModel(BaseModel):
    """Generated source for one page object."""

    name: str
    package: str
    interface_source: str
    implementation_source: str
    methods: list[MethodModel] = Field(default_factory=list)
