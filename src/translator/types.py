"""Return-type model shared by every compiler phase.

A resolved type is one of five tagged values:

- VoidType: the statement produces nothing
- ConcreteType: a named type (String, a basic element interface, a custom page object)
- ListOfType: a list of another type, remembering whether returnAll asked for it
- SelfType: the page object being generated (``return this``)
- UnsetType: nothing was declared; the caller supplies a default

Types are frozen pydantic models so they compare by value and can be shared
freely between statements and methods.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import GrammarError


class VoidType(BaseModel):
    """No value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["void"] = "void"

    @property
    def simple_name(self) -> str:
        return "void"

    @property
    def full_name(self) -> str:
        return "void"


class ConcreteType(BaseModel):
    """A named type.

    Basic elements carry the interfaces they were declared with; custom page
    object types carry their package.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["concrete"] = "concrete"
    name: str
    package: str = ""
    interfaces: tuple[str, ...] | None = None
    element_name: str | None = None

    @property
    def simple_name(self) -> str:
        return self.name

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    @property
    def is_basic_element(self) -> bool:
        return self.interfaces is not None

    @property
    def is_custom(self) -> bool:
        return bool(self.package)


class ListOfType(BaseModel):
    """List of another type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    element: TypeValue
    return_all: bool = False

    @property
    def simple_name(self) -> str:
        return f"List<{self.element.simple_name}>"

    @property
    def full_name(self) -> str:
        return f"java.util.List<{self.element.full_name}>"


class SelfType(BaseModel):
    """The enclosing page object's own type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["self"] = "self"
    name: str = "Object"

    @property
    def simple_name(self) -> str:
        return self.name

    @property
    def full_name(self) -> str:
        return self.name


class UnsetType(BaseModel):
    """No declaration was given."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unset"] = "unset"

    @property
    def simple_name(self) -> str:
        return ""

    @property
    def full_name(self) -> str:
        return ""


# Discriminated union of all resolved type values
TypeValue = Annotated[
    VoidType | ConcreteType | ListOfType | SelfType | UnsetType,
    Field(discriminator="kind"),
]

ListOfType.model_rebuild()


VOID = VoidType()
UNSET = UnsetType()
STRING = ConcreteType(name="String")
BOOLEAN = ConcreteType(name="Boolean")
NUMBER = ConcreteType(name="Integer")
OBJECT = ConcreteType(name="Object")

# Grammar keywords for primitive types
PRIMITIVE_TYPES: dict[str, ConcreteType] = {
    "string": STRING,
    "boolean": BOOLEAN,
    "number": NUMBER,
}

RETURN_SELF = "self"
RETURN_VOID = "void"


def list_of(element: TypeValue, return_all: bool = False) -> ListOfType:
    """Wrap a type in a list."""
    return ListOfType(element=element, return_all=return_all)


def is_list(value: TypeValue | None) -> bool:
    return isinstance(value, ListOfType)


def is_void(value: TypeValue | None) -> bool:
    return isinstance(value, VoidType)


def is_unset(value: TypeValue | None) -> bool:
    return value is None or isinstance(value, UnsetType)


def is_self(value: TypeValue | None) -> bool:
    return isinstance(value, SelfType)


def same_type(left: TypeValue, right: TypeValue) -> bool:
    """Compare two types by name, ignoring the returnAll marker on lists."""
    if isinstance(left, ListOfType) and isinstance(right, ListOfType):
        return same_type(left.element, right.element)
    if isinstance(left, ConcreteType) and isinstance(right, ConcreteType):
        return left.full_name == right.full_name
    return left.kind == right.kind


def custom_type(type_string: str) -> ConcreteType:
    """Build the type of a custom page object from its grammar reference.

    ``my-app/pageObjects/nav/menu`` becomes ``my.app.pageobjects.nav.Menu``.
    """
    parts = type_string.split("/")
    if len(parts) < 2 or not all(parts):
        raise GrammarError(f"Invalid page object type reference: '{type_string}'")
    package_parts = [parts[0].replace("-", ".")] + [p.lower() for p in parts[1:-1]]
    name = parts[-1][0].upper() + parts[-1][1:]
    return ConcreteType(name=name, package=".".join(package_parts))


def basic_element_type(element_name: str, interfaces: list[str] | tuple[str, ...]) -> ConcreteType:
    """Build the generated interface type for a basic element.

    Element ``button`` becomes ``ButtonElement``.
    """
    name = element_name[0].upper() + element_name[1:] + "Element"
    return ConcreteType(
        name=name,
        interfaces=tuple(interfaces),
        element_name=element_name,
    )


def parse_type(type_string: str | None, self_type: SelfType | None = None) -> TypeValue:
    """Resolve a grammar type keyword to a type value.

    Args:
        type_string: ``string``, ``boolean``, ``number``, ``void``, ``self``,
            a custom page object reference, or None
        self_type: Type used for ``self``

    Returns:
        Resolved type value, UNSET when type_string is None
    """
    if type_string is None:
        return UNSET
    if type_string == RETURN_VOID:
        return VOID
    if type_string == RETURN_SELF:
        return self_type or SelfType()
    if type_string in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[type_string]
    if "/" in type_string:
        return custom_type(type_string)
    raise GrammarError(f"Unknown type '{type_string}'")
