"""Element getter builder."""

from __future__ import annotations

from src.translator.context import ElementInfo
from src.translator.ir import ElementGetter
from src.translator.registries.locators import selector_annotation


class ElementGetterBuilder:
    """Builds element getters from registered elements."""

    @staticmethod
    def build_getter(element: ElementInfo) -> ElementGetter:
        """Build the getter for one element.

        The root element has no selector of its own; its annotation lives on
        the page object class instead.
        """
        return ElementGetter(
            element_name=element.name,
            getter_name=element.getter_name,
            return_type=element.return_type,
            annotation=selector_annotation(element.selector) if element.selector else None,
            interfaces=list(element.type.interfaces or ()),
            is_public=element.is_public,
        )

    @staticmethod
    def build_getters(elements: list[ElementInfo]) -> list[ElementGetter]:
        """Build getters in declaration order."""
        return [ElementGetterBuilder.build_getter(element) for element in elements]
