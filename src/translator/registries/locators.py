"""Selector dialect registry.

Each dialect knows how to validate a selector string and how to write the
element annotation in the generated implementation class.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable

from ..errors import SelectorError
from ..grammar import SelectorSpec

ERR_SELECTOR_UIAUTOMATOR_UNSUPPORTED_METHOD = "unsupported UiSelector method '{method}'"
ERR_SELECTOR_UIAUTOMATOR_UISCROLLABLE_UNSUPPORTED_METHOD = (
    "unsupported UiScrollable constructor method '{method}'"
)

UI_SELECTOR_PREFIX = "new UiSelector()."

# UiSelector methods usable in a uiautomator selector
UI_SELECTOR_METHODS = (
    "checkable",
    "checked",
    "className",
    "classNameMatches",
    "clickable",
    "description",
    "descriptionContains",
    "descriptionMatches",
    "descriptionStartsWith",
    "enabled",
    "focusable",
    "focused",
    "longClickable",
    "packageName",
    "packageNameMatches",
    "resourceId",
    "resourceIdMatches",
    "scrollable",
    "selected",
    "text",
    "textContains",
    "textMatches",
    "textStartsWith",
)

# UiSelector methods allowed to identify the container of a UiScrollable
UI_SCROLLABLE_METHODS = ("className", "description", "resourceId", "scrollable")

_UI_SCROLLABLE = re.compile(
    r"^new UiScrollable\((?P<container>.*)\)\.scrollIntoView\((?P<target>.*)\)$"
)
_METHOD_CALL = re.compile(r"^(?P<method>\w+)\(")


def _method_name(expression: str) -> str:
    expression = expression.strip()
    if expression.startswith(UI_SELECTOR_PREFIX):
        expression = expression[len(UI_SELECTOR_PREFIX):]
    match = _METHOD_CALL.match(expression)
    return match.group("method") if match else expression


def _validate_ui_selector(expression: str) -> None:
    method = _method_name(expression)
    if method not in UI_SELECTOR_METHODS:
        raise SelectorError(ERR_SELECTOR_UIAUTOMATOR_UNSUPPORTED_METHOD.format(method=method))


def validate_uiautomator(selector: str) -> None:
    """Validate an Android UiAutomator selector.

    Accepts a single UiSelector call, with or without the ``new UiSelector().``
    prefix, or ``new UiScrollable(<container>).scrollIntoView(<target>)``.

    Raises:
        SelectorError: If a method is not supported
    """
    scrollable = _UI_SCROLLABLE.match(selector.strip())
    if scrollable is None:
        _validate_ui_selector(selector)
        return
    container_method = _method_name(scrollable.group("container"))
    if container_method not in UI_SCROLLABLE_METHODS:
        raise SelectorError(
            ERR_SELECTOR_UIAUTOMATOR_UISCROLLABLE_UNSUPPORTED_METHOD.format(method=container_method)
        )
    _validate_ui_selector(scrollable.group("target"))


def _no_validation(selector: str) -> None:
    if not selector.strip():
        raise SelectorError("Selector string is empty")


# Registry mapping dialect names to selector validators
SELECTOR_VALIDATORS: dict[str, Callable[[str], None]] = {
    "css": _no_validation,
    "accessid": _no_validation,
    "classchain": _no_validation,
    "uiautomator": validate_uiautomator,
}


def validate_selector(selector: SelectorSpec) -> None:
    """Validate a selector with its dialect's rules.

    Raises:
        SelectorError: If the selector is not valid for its dialect
    """
    SELECTOR_VALIDATORS[selector.dialect](selector.value)


def selector_annotation(selector: SelectorSpec) -> str:
    """Element annotation written above the element field in the implementation."""
    return f"@ElementMarker.Find({selector.dialect} = {json.dumps(selector.value)})"
