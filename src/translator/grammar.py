"""Page object grammar.

Typed models for the declarative JSON page object documents. Field aliases
follow the document's camelCase keys; models are frozen so descriptors
cannot change once parsed.
"""

from __future__ import annotations

import json
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import GrammarError

# Apply keyword for the predicate/wait construct
WAIT_FOR = "waitFor"

# Element references that need no declaration
ROOT_ELEMENT = "root"
DOCUMENT_ELEMENT = "document"
SELF_ELEMENT = "self"
RESERVED_ELEMENTS = (ROOT_ELEMENT, DOCUMENT_ELEMENT, SELF_ELEMENT)


class GrammarModel(BaseModel):
    """Base for all grammar nodes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class SelectorSpec(GrammarModel):
    """Element selector in one of the supported dialects."""

    css: str | None = None
    accessid: str | None = None
    classchain: str | None = None
    uiautomator: str | None = None
    return_all: bool = Field(default=False, alias="returnAll")

    @model_validator(mode="after")
    def validate_single_dialect(self) -> Self:
        dialects = [d for d in ("css", "accessid", "classchain", "uiautomator") if getattr(self, d)]
        if len(dialects) != 1:
            raise ValueError(
                f"Selector must use exactly one of css, accessid, classchain, uiautomator; got {dialects}"
            )
        return self

    @property
    def dialect(self) -> str:
        for name in ("css", "accessid", "classchain", "uiautomator"):
            if getattr(self, name):
                return name
        return "css"

    @property
    def value(self) -> str:
        return getattr(self, self.dialect)


class ArgumentSpec(GrammarModel):
    """Statement or matcher argument: a literal or a method parameter."""

    name: str | None = None
    type: str | None = None
    value: bool | int | str | None = None

    @model_validator(mode="after")
    def validate_kind(self) -> Self:
        if self.value is None and (self.name is None or self.type is None):
            raise ValueError("Argument needs either 'value' or both 'name' and 'type'")
        if self.value is not None and self.name is not None:
            raise ValueError(f"Argument '{self.name}' cannot have both 'name' and 'value'")
        return self

    @property
    def is_literal(self) -> bool:
        return self.value is not None


class MatcherSpec(GrammarModel):
    """Boolean check applied to a statement's result."""

    type: str
    args: list[ArgumentSpec] = Field(default_factory=list)


class StatementSpec(GrammarModel):
    """One compose statement."""

    element: str | None = None
    apply: str | None = None
    args: list[ArgumentSpec] = Field(default_factory=list)
    return_type: str | None = Field(default=None, alias="returnType")
    return_all: bool = Field(default=False, alias="returnAll")
    chain: bool = False
    matcher: MatcherSpec | None = None
    predicate: list[StatementSpec] | None = None

    @model_validator(mode="after")
    def validate_target(self) -> Self:
        if self.chain and self.element is not None:
            raise ValueError(
                f"Statement with 'chain' cannot also reference element '{self.element}'"
            )
        if self.chain and self.apply is None:
            raise ValueError("Statement with 'chain' must have 'apply'")
        if self.element is None and self.apply is None:
            raise ValueError("Statement needs 'element' or 'apply'")
        if self.predicate is not None and self.apply != WAIT_FOR:
            raise ValueError(f"Only '{WAIT_FOR}' statements can have a predicate")
        return self

    @property
    def is_predicate(self) -> bool:
        return self.apply == WAIT_FOR


StatementSpec.model_rebuild()


class ElementSpec(GrammarModel):
    """Element declaration."""

    name: str
    type: list[str] | str | None = None
    selector: SelectorSpec
    public: bool = False

    @model_validator(mode="after")
    def validate_name(self) -> Self:
        if not self.name.isidentifier():
            raise ValueError(f"Element name '{self.name}' is not a valid identifier")
        if self.name in RESERVED_ELEMENTS:
            raise ValueError(f"Element name '{self.name}' is reserved")
        return self

    @property
    def interfaces(self) -> list[str]:
        if isinstance(self.type, list):
            return list(self.type)
        return []

    @property
    def custom_type(self) -> str | None:
        return self.type if isinstance(self.type, str) else None


class MethodSpec(GrammarModel):
    """Compose method declaration."""

    name: str
    description: str | None = None
    return_type: str | None = Field(default=None, alias="returnType")
    return_all: bool = Field(default=False, alias="returnAll")
    compose: list[StatementSpec]

    @model_validator(mode="after")
    def validate_compose(self) -> Self:
        if not self.name.isidentifier():
            raise ValueError(f"Method name '{self.name}' is not a valid identifier")
        if not self.compose:
            raise ValueError(f"Method '{self.name}' has no compose statements")
        return self


class PageObjectSpec(GrammarModel):
    """Top-level page object document."""

    description: str | None = None
    root: bool = False
    selector: SelectorSpec | None = None
    type: list[str] = Field(default_factory=list)
    expose_root_element: bool = Field(default=False, alias="exposeRootElement")
    elements: list[ElementSpec] = Field(default_factory=list)
    before_load: list[StatementSpec] = Field(default_factory=list, alias="beforeLoad")
    methods: list[MethodSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_root(self) -> Self:
        if self.root and self.selector is None:
            raise ValueError("Root page object must have a selector")
        if not self.root and self.selector is not None:
            raise ValueError("Only a root page object can have a selector")
        return self


def load_page_object(source: str | bytes | dict[str, Any]) -> PageObjectSpec:
    """Parse a page object document.

    Args:
        source: JSON text or an already decoded dict

    Returns:
        Parsed PageObjectSpec

    Raises:
        GrammarError: If the document is not valid JSON or fails validation
    """
    try:
        if isinstance(source, dict):
            return PageObjectSpec.model_validate(source)
        return PageObjectSpec.model_validate(json.loads(source))
    except json.JSONDecodeError as e:
        raise GrammarError(f"Page object is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise GrammarError(f"Page object is not valid UTF-8: {e}") from e
    except ValidationError as e:
        raise GrammarError(f"Invalid page object: {e}") from e
