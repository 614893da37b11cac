"""Intermediate Representation (IR) for page object translation.

The IR sits between the page object grammar and the source writer. It
records what code to emit: every statement with its bound variable and
resolved type, every method with its declaration, and every element getter.
Uses Pydantic so a translated page object serializes to JSON as-is.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import TypeValue

# Method name generated for the beforeLoad statements
BEFORE_LOAD_METHOD_NAME = "load"


# =============================================================================
# Parameters
# =============================================================================


class MethodParameter(BaseModel):
    """Parameter of a generated method."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeValue

    @property
    def declaration(self) -> str:
        return f"{self.type.simple_name} {self.name}"


# =============================================================================
# Statements
# =============================================================================


class EmittedStatement(BaseModel):
    """One generated statement, including any element lookup it needs.

    ``code_lines`` are written without trailing semicolons; a predicate
    closure is a single line with its body embedded.
    """

    index: int
    variable_name: str | None = None
    return_type: TypeValue
    code_lines: list[str]
    is_last: bool = False
    is_predicate: bool = False


class ComposeMethodBody(BaseModel):
    """Output of compiling one method's statements."""

    statements: list[EmittedStatement]
    return_type: TypeValue
    parameters: list[MethodParameter] = Field(default_factory=list)

    @property
    def code_lines(self) -> list[str]:
        return [line for statement in self.statements for line in statement.code_lines]


# =============================================================================
# Methods and elements
# =============================================================================


class MethodDeclaration(BaseModel):
    """Signature of a generated method."""

    name: str
    return_type: TypeValue
    parameters: list[MethodParameter] = Field(default_factory=list)

    @property
    def code_line(self) -> str:
        params = ", ".join(p.declaration for p in self.parameters)
        return f"{self.return_type.simple_name} {self.name}({params})"


class PageObjectMethod(BaseModel):
    """A generated compose method."""

    declaration: MethodDeclaration
    body: ComposeMethodBody
    is_public: bool = True
    description: str | None = None

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def code_lines(self) -> list[str]:
        return self.body.code_lines


class ElementGetter(BaseModel):
    """Getter generated for a declared element."""

    element_name: str
    getter_name: str
    return_type: TypeValue
    annotation: str | None = None
    interfaces: list[str] = Field(default_factory=list)
    is_public: bool = False

    @property
    def declaration(self) -> str:
        return f"{self.return_type.simple_name} {self.getter_name}()"


# =============================================================================
# Page object
# =============================================================================


class PageObjectIR(BaseModel):
    """Complete translation of one page object."""

    name: str
    package: str
    description: str | None = None
    is_root: bool = False
    root_annotation: str | None = None
    root_interfaces: list[str] = Field(default_factory=list)
    expose_root_element: bool = False
    elements: list[ElementGetter] = Field(default_factory=list)
    methods: list[PageObjectMethod] = Field(default_factory=list)
    before_load: PageObjectMethod | None = None

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    @property
    def impl_name(self) -> str:
        return f"{self.name}Impl"

    def get_method(self, name: str) -> PageObjectMethod | None:
        """Find a generated method by name; ``load`` finds beforeLoad."""
        if name == BEFORE_LOAD_METHOD_NAME:
            return self.before_load
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def public_elements(self) -> list[ElementGetter]:
        return [e for e in self.elements if e.is_public]
