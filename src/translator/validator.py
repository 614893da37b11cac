"""Page object validator - structural checks before translation.

Ensures names are unique, every element a statement references is declared,
element interfaces and selectors are supported, and beforeLoad only uses
what is available before the page object is loaded. Problems are collected
rather than raised, so one run reports all of them.
"""

from dataclasses import dataclass, field

from .errors import GrammarError, SelectorError
from .grammar import (
    DOCUMENT_ELEMENT,
    ROOT_ELEMENT,
    SELF_ELEMENT,
    PageObjectSpec,
    StatementSpec,
)
from .ir import BEFORE_LOAD_METHOD_NAME
from .registries.actions import validate_interfaces
from .registries.locators import validate_selector

ERR_BEFORE_LOAD_HAS_NO_ARGS = "beforeLoad statements cannot reference method parameters"
ERR_DISALLOWED_ELEMENT = "beforeLoad can only use 'root', 'document' or 'self'"

# Elements available to beforeLoad statements
BEFORE_LOAD_ELEMENTS = (ROOT_ELEMENT, DOCUMENT_ELEMENT, SELF_ELEMENT)


@dataclass
class ValidationError:
    """A single validation error."""

    path: str  # Where in the document the error occurred
    message: str  # What's wrong


@dataclass
class ValidationResult:
    """Result of validating a page object."""

    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, path: str, message: str) -> None:
        self.errors.append(ValidationError(path=path, message=message))

    def raise_for_errors(self) -> None:
        """Raise GrammarError listing every collected error."""
        if self.errors:
            details = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
            raise GrammarError(f"Invalid page object: {details}")


class PageObjectValidator:
    """Validates a parsed page object for internal consistency."""

    def __init__(self, page_object: PageObjectSpec):
        self.page_object = page_object
        self.result = ValidationResult()
        self.element_names: set[str] = {e.name for e in page_object.elements}

    def validate(self) -> ValidationResult:
        """Run all validations and return result."""
        self._validate_root()
        self._validate_elements()
        self._validate_methods()

        for i, statement in enumerate(self.page_object.before_load):
            self._validate_before_load(statement, f"beforeLoad[{i}]")
            self._validate_statement(statement, f"beforeLoad[{i}]")

        return self.result

    def _validate_root(self) -> None:
        try:
            validate_interfaces(self.page_object.type, ROOT_ELEMENT)
        except GrammarError as e:
            self.result.add_error("type", str(e))
        if self.page_object.selector is not None:
            self._validate_selector(self.page_object.selector, "selector")

    def _validate_elements(self) -> None:
        seen: set[str] = set()
        for i, element in enumerate(self.page_object.elements):
            path = f"elements[{i}]"
            if element.name in seen:
                self.result.add_error(path, f"Duplicate element '{element.name}'")
            seen.add(element.name)
            if element.custom_type is None:
                try:
                    validate_interfaces(element.interfaces, element.name)
                except GrammarError as e:
                    self.result.add_error(f"{path}.type", str(e))
            self._validate_selector(element.selector, f"{path}.selector")

    def _validate_methods(self) -> None:
        seen: set[str] = set()
        for i, method in enumerate(self.page_object.methods):
            path = f"methods[{i}]"
            if method.name in seen:
                self.result.add_error(path, f"Duplicate method '{method.name}'")
            if method.name == BEFORE_LOAD_METHOD_NAME and self.page_object.before_load:
                self.result.add_error(
                    path, f"Method name '{method.name}' is reserved for beforeLoad"
                )
            seen.add(method.name)
            for j, statement in enumerate(method.compose):
                self._validate_statement(statement, f"{path}.compose[{j}]")

    def _validate_selector(self, selector, path: str) -> None:
        try:
            validate_selector(selector)
        except SelectorError as e:
            self.result.add_error(path, str(e))

    def _validate_statement(self, statement: StatementSpec, path: str) -> None:
        """Check element references, recursing into predicates."""
        element = statement.element
        if (
            element is not None
            and element not in BEFORE_LOAD_ELEMENTS
            and element not in self.element_names
        ):
            self.result.add_error(
                path,
                f"References undefined element '{element}'. "
                f"Defined elements: {sorted(self.element_names)}",
            )
        if statement.is_predicate and not statement.predicate:
            self.result.add_error(path, "waitFor requires a non-empty predicate")
        for i, inner in enumerate(statement.predicate or []):
            self._validate_statement(inner, f"{path}.predicate[{i}]")

    def _validate_before_load(self, statement: StatementSpec, path: str) -> None:
        if statement.element is not None and statement.element not in BEFORE_LOAD_ELEMENTS:
            self.result.add_error(path, f"{ERR_DISALLOWED_ELEMENT}, found '{statement.element}'")
        args = list(statement.args)
        if statement.matcher is not None:
            args.extend(statement.matcher.args)
        if any(not arg.is_literal for arg in args):
            self.result.add_error(path, ERR_BEFORE_LOAD_HAS_NO_ARGS)
        for i, inner in enumerate(statement.predicate or []):
            self._validate_before_load(inner, f"{path}.predicate[{i}]")


def validate_page_object(page_object: PageObjectSpec) -> ValidationResult:
    """Convenience function to validate a page object."""
    return PageObjectValidator(page_object).validate()
