"""PageObjectTranslator - page object document to PageObjectIR.

Uses building blocks:
- PageObjectValidator for structural checks
- TranslationContext for element lookups and type resolution
- ElementGetterBuilder for element getters
- ComposeMethodBuilder for every compose method and beforeLoad

Translation Flow:
    PageObjectSpec -> PageObjectTranslator -> PageObjectIR

1. Validate the document, reporting every structural problem at once
2. Register the root element and every declared element in the context
3. Build element getters
4. Compile each method with its own builder
5. Compile beforeLoad as ``Object load()``
"""

from __future__ import annotations

import logging
from typing import Any

from .builders import ElementGetterBuilder
from .compiler import ComposeMethodBuilder
from .context import TranslationContext, element_info, root_element_info
from .errors import CompilerError
from .grammar import ROOT_ELEMENT, MethodSpec, PageObjectSpec, load_page_object
from .ir import (
    BEFORE_LOAD_METHOD_NAME,
    MethodDeclaration,
    PageObjectIR,
    PageObjectMethod,
)
from .registries.locators import selector_annotation
from .validator import validate_page_object

logger = logging.getLogger(__name__)


class PageObjectTranslator:
    """Translates one page object document to PageObjectIR.

    A translator owns its context and builders, so independent page objects
    can be translated concurrently with one translator each.

    Example:
        translator = PageObjectTranslator(page_object, "Home", "my.app.pageobjects")
        ir = translator.translate()
    """

    def __init__(self, page_object: PageObjectSpec, name: str, package: str = "") -> None:
        """Initialize translator.

        Args:
            page_object: Parsed page object document
            name: Generated type name, e.g. ``Home``
            package: Generated package, e.g. ``my.app.pageobjects``
        """
        self.page_object = page_object
        self.ctx = TranslationContext(name=name, package=package)

    def translate(self) -> PageObjectIR:
        """Translate the page object to IR.

        Returns:
            PageObjectIR with element getters, methods and beforeLoad

        Raises:
            CompilerError: If translation fails; the message names the page object
        """
        try:
            ir = self._translate()
        except CompilerError as e:
            logger.error(f"Failed to translate page object '{self.ctx.full_name}': {e}")
            raise type(e)(f"page object '{self.ctx.full_name}': {e}") from e

        logger.info(
            f"Translated page object '{ir.full_name}': "
            f"{len(ir.elements)} element(s), {len(ir.methods)} method(s)"
        )
        return ir

    def _translate(self) -> PageObjectIR:
        page_object = self.page_object
        validate_page_object(page_object).raise_for_errors()

        self.ctx.add_element(root_element_info(page_object.type, page_object.expose_root_element))
        for spec in page_object.elements:
            self.ctx.add_element(element_info(spec))

        methods = [self._build_method(method) for method in page_object.methods]
        before_load = self._build_before_load() if page_object.before_load else None

        return PageObjectIR(
            name=self.ctx.name,
            package=self.ctx.package,
            description=page_object.description,
            is_root=page_object.root,
            root_annotation=(
                selector_annotation(page_object.selector) if page_object.selector else None
            ),
            root_interfaces=list(page_object.type),
            expose_root_element=page_object.expose_root_element,
            elements=ElementGetterBuilder.build_getters(list(self.ctx.elements.values())),
            methods=methods,
            before_load=before_load,
        )

    # =========================================================================
    # Method Builders
    # =========================================================================

    def _build_method(self, method: MethodSpec) -> PageObjectMethod:
        """Compile one compose method."""
        method_return = self.ctx.resolve_type(method.return_type, method.return_all)
        builder = ComposeMethodBuilder(self.ctx, method.name, method_return)
        body = builder.build(method.compose)
        return PageObjectMethod(
            declaration=MethodDeclaration(
                name=method.name,
                return_type=body.return_type,
                parameters=body.parameters,
            ),
            body=body,
            description=method.description,
        )

    def _build_before_load(self) -> PageObjectMethod:
        """Compile beforeLoad; statements without an element target the root."""
        builder = ComposeMethodBuilder(
            self.ctx,
            BEFORE_LOAD_METHOD_NAME,
            requires_value=True,
            default_element=ROOT_ELEMENT,
        )
        body = builder.build(self.page_object.before_load)
        return PageObjectMethod(
            declaration=MethodDeclaration(
                name=BEFORE_LOAD_METHOD_NAME,
                return_type=body.return_type,
                parameters=body.parameters,
            ),
            body=body,
            is_public=False,
        )


def translate_page_object(
    source: str | bytes | dict[str, Any], name: str, package: str = ""
) -> PageObjectIR:
    """Convenience function to parse and translate a page object document.

    Raises:
        CompilerError: If the document is invalid or cannot be translated
    """
    try:
        page_object = load_page_object(source)
    except CompilerError as e:
        full_name = f"{package}.{name}" if package else name
        raise type(e)(f"page object '{full_name}': {e}") from e
    return PageObjectTranslator(page_object, name, package).translate()
