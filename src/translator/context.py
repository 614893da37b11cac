"""Translation context for one page object.

Holds the page object's identity and its declared elements so every
method compiled for it can look elements up and resolve type references.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import GrammarError
from .grammar import ROOT_ELEMENT, ElementSpec, SelectorSpec
from .types import (
    ConcreteType,
    SelfType,
    TypeValue,
    basic_element_type,
    custom_type,
    list_of,
    parse_type,
)


@dataclass(frozen=True)
class ElementInfo:
    """A declared element as the compiler sees it."""

    name: str
    type: ConcreteType
    getter_name: str
    is_list: bool = False
    is_public: bool = False
    selector: SelectorSpec | None = None

    @property
    def return_type(self) -> TypeValue:
        """Type of the element getter, a list when the selector returns all matches."""
        return list_of(self.type) if self.is_list else self.type

    @property
    def is_basic(self) -> bool:
        return self.type.is_basic_element


def _capitalize(name: str) -> str:
    return name[0].upper() + name[1:]


def element_info(spec: ElementSpec) -> ElementInfo:
    """Build ElementInfo from an element declaration."""
    if spec.custom_type is not None:
        element_type = custom_type(spec.custom_type)
        getter_name = f"get{_capitalize(spec.name)}"
    else:
        element_type = basic_element_type(spec.name, spec.interfaces)
        getter_name = f"get{_capitalize(spec.name)}Element"
    return ElementInfo(
        name=spec.name,
        type=element_type,
        getter_name=getter_name,
        is_list=spec.selector.return_all,
        is_public=spec.public,
        selector=spec.selector,
    )


def root_element_info(interfaces: list[str], is_public: bool = False) -> ElementInfo:
    """ElementInfo for the page object's root element."""
    return ElementInfo(
        name=ROOT_ELEMENT,
        type=basic_element_type(ROOT_ELEMENT, interfaces),
        getter_name="getRootElement",
        is_public=is_public,
    )


@dataclass
class TranslationContext:
    """Page-object scoped lookups shared by all method builders.

    Elements are registered once before any method is compiled; method
    builders only read from the context.
    """

    name: str
    package: str = ""
    elements: dict[str, ElementInfo] = field(default_factory=dict)

    @property
    def self_type(self) -> SelfType:
        return SelfType(name=self.name)

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    def add_element(self, element: ElementInfo) -> None:
        """Register an element.

        Raises:
            GrammarError: If an element with the same name is already registered
        """
        if element.name in self.elements:
            raise GrammarError(
                f"Duplicate element '{element.name}' in page object '{self.name}'"
            )
        self.elements[element.name] = element

    def get_element(self, name: str) -> ElementInfo:
        """Look up a declared element.

        Raises:
            GrammarError: If no element with that name is declared
        """
        element = self.elements.get(name)
        if element is None:
            raise GrammarError(
                f"Unknown element '{name}' in page object '{self.name}', "
                f"declared elements: {sorted(self.elements)}"
            )
        return element

    def resolve_type(self, type_string: str | None, return_all: bool = False) -> TypeValue:
        """Resolve a declared return type, wrapping it in a list for returnAll.

        Raises:
            GrammarError: If the type is unknown or returnAll is set on void/self
        """
        resolved = parse_type(type_string, self.self_type)
        if not return_all or type_string is None:
            return resolved
        if not isinstance(resolved, ConcreteType):
            raise GrammarError(f"'returnAll' cannot be used with return type '{type_string}'")
        return list_of(resolved, return_all=True)
