"""Builders for page object IR pieces."""

from .element_builder import ElementGetterBuilder

__all__ = ["ElementGetterBuilder"]
