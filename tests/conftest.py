"""Shared test fixtures and helpers."""

import json
from typing import Any

import pytest

from src.translator.context import TranslationContext, element_info, root_element_info
from src.translator.grammar import ElementSpec, StatementSpec


def make_statement(**fields: Any) -> StatementSpec:
    """Build a StatementSpec from grammar field names (``returnType``, ``returnAll``)."""
    return StatementSpec.model_validate(fields)


def make_statements(*statements: dict[str, Any]) -> list[StatementSpec]:
    return [StatementSpec.model_validate(s) for s in statements]


def make_context(
    elements: list[dict[str, Any]] | None = None,
    root_interfaces: list[str] | None = None,
    name: str = "TestPage",
    package: str = "my.app.pageobjects",
) -> TranslationContext:
    """Build a TranslationContext with the root element and the given elements."""
    ctx = TranslationContext(name=name, package=package)
    ctx.add_element(root_element_info(root_interfaces or []))
    for element in elements or []:
        ctx.add_element(element_info(ElementSpec.model_validate(element)))
    return ctx


def make_document(**overrides: Any) -> dict[str, Any]:
    """Minimal root page object document."""
    document: dict[str, Any] = {
        "root": True,
        "selector": {"css": "body"},
        "elements": [],
        "methods": [],
    }
    document.update(overrides)
    return document


@pytest.fixture
def home_document() -> dict[str, Any]:
    """Page object exercising elements, lists, custom types and beforeLoad."""
    return make_document(
        description="Home page",
        type=["clickable"],
        elements=[
            {"name": "title", "selector": {"css": "h1"}, "public": True},
            {"name": "items", "type": ["clickable"], "selector": {"css": "li", "returnAll": True}},
            {"name": "search", "type": ["editable"], "selector": {"css": "input"}},
            {"name": "menu", "type": "my-app/pageObjects/nav/menu", "selector": {"css": "x-menu"}},
        ],
        beforeLoad=[
            {"element": "root", "apply": "isPresent"},
            {"element": "root", "apply": "getText", "returnType": "self"},
        ],
        methods=[
            {
                "name": "getTitleText",
                "compose": [{"element": "title", "apply": "getText"}],
            },
            {
                "name": "clickItems",
                "compose": [{"element": "items", "apply": "click"}],
            },
            {
                "name": "searchFor",
                "compose": [
                    {"element": "search", "apply": "clearAndType", "args": [{"name": "text", "type": "string"}]},
                    {"element": "search", "apply": "press", "args": [{"value": "Enter"}]},
                ],
            },
        ],
    )


@pytest.fixture
def home_json(home_document) -> str:
    return json.dumps(home_document)
