"""Action catalog.

Maps element interfaces to the actions they declare. Every basic element
supports the basic actions; the interfaces listed on an element add more.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import GrammarError, UnknownActionError
from ..types import BOOLEAN, NUMBER, STRING, VOID, TypeValue

ERR_UNKNOWN_ACTION = "unknown action '{action}' for element '{element}', {declared}"
ERR_UNKNOWN_INTERFACE = "unknown interface '{interface}' for element '{element}', supported are {supported}"

BASIC_INTERFACE = "basic"


@dataclass(frozen=True)
class ActionType:
    """Signature of one element action."""

    name: str
    interface: str
    return_type: TypeValue
    parameter_types: tuple[TypeValue, ...] = ()


def _actions(interface: str, *signatures: tuple) -> dict[str, ActionType]:
    return {
        name: ActionType(name=name, interface=interface, return_type=ret, parameter_types=params)
        for name, ret, params in signatures
    }


# Registry mapping interface names to the actions each declares
ACTION_CATALOG: dict[str, dict[str, ActionType]] = {
    BASIC_INTERFACE: _actions(
        BASIC_INTERFACE,
        ("getAttribute", STRING, (STRING,)),
        ("getClassAttribute", STRING, ()),
        ("getText", STRING, ()),
        ("getTitle", STRING, ()),
        ("getValue", STRING, ()),
        ("isEnabled", BOOLEAN, ()),
        ("isFocused", BOOLEAN, ()),
        ("isPresent", BOOLEAN, ()),
        ("isVisible", BOOLEAN, ()),
        ("size", NUMBER, ()),
        ("waitForAbsence", VOID, ()),
        ("waitForVisible", VOID, ()),
        ("waitForInvisible", VOID, ()),
    ),
    "actionable": _actions(
        "actionable",
        ("blur", VOID, ()),
        ("focus", VOID, ()),
        ("moveTo", VOID, ()),
        ("scrollToCenter", VOID, ()),
        ("scrollToTop", VOID, ()),
    ),
    "clickable": _actions(
        "clickable",
        ("click", VOID, ()),
        ("doubleClick", VOID, ()),
        ("rightClick", VOID, ()),
    ),
    "editable": _actions(
        "editable",
        ("clear", VOID, ()),
        ("clearAndType", VOID, (STRING,)),
        ("press", VOID, (STRING,)),
        ("setText", VOID, (STRING,)),
    ),
    "touchable": _actions(
        "touchable",
        ("flick", VOID, (NUMBER, NUMBER)),
    ),
}

# Interfaces that include the actions of another interface
INTERFACE_PARENTS: dict[str, str] = {
    "clickable": "actionable",
    "editable": "actionable",
}

DOCUMENT_ACTIONS: dict[str, ActionType] = _actions(
    "document",
    ("getUrl", STRING, ()),
    ("waitForDocumentReady", VOID, ()),
)

SUPPORTED_INTERFACES = tuple(sorted(i for i in ACTION_CATALOG if i != BASIC_INTERFACE))


def describe_interfaces(interfaces: list[str] | tuple[str, ...]) -> str:
    """Format declared interfaces for error messages: ``declared interfaces [ a, b ]``."""
    if not interfaces:
        return "declared interfaces [ ]"
    return f"declared interfaces [ {', '.join(sorted(interfaces))} ]"


def validate_interfaces(interfaces: list[str] | tuple[str, ...], element_name: str) -> None:
    """Check that every declared interface exists.

    Raises:
        GrammarError: If an interface is unknown
    """
    for interface in interfaces:
        if interface not in SUPPORTED_INTERFACES:
            raise GrammarError(
                ERR_UNKNOWN_INTERFACE.format(
                    interface=interface,
                    element=element_name,
                    supported=list(SUPPORTED_INTERFACES),
                )
            )


def expand_interfaces(interfaces: list[str] | tuple[str, ...]) -> list[str]:
    """Declared interfaces plus the basic interface and every inherited one."""
    expanded = [BASIC_INTERFACE]
    for interface in interfaces:
        while interface is not None and interface not in expanded:
            expanded.append(interface)
            interface = INTERFACE_PARENTS.get(interface)
    return expanded


def get_action_type(
    action_name: str, interfaces: list[str] | tuple[str, ...], element_name: str
) -> ActionType:
    """Resolve an action on an element with the given interfaces.

    Raises:
        UnknownActionError: If none of the element's interfaces declares the action
    """
    for interface in expand_interfaces(interfaces):
        action = ACTION_CATALOG.get(interface, {}).get(action_name)
        if action is not None:
            return action
    raise UnknownActionError(
        ERR_UNKNOWN_ACTION.format(
            action=action_name,
            element=element_name,
            declared=describe_interfaces(interfaces),
        )
    )


def get_document_action(action_name: str) -> ActionType:
    """Resolve an action on the page document.

    Raises:
        UnknownActionError: If the document has no such action
    """
    action = DOCUMENT_ACTIONS.get(action_name)
    if action is None:
        raise UnknownActionError(
            f"unknown action '{action_name}' for document, supported are {sorted(DOCUMENT_ACTIONS)}"
        )
    return action


def list_actions(interface: str) -> list[ActionType]:
    """All actions available on an element declaring ``interface``."""
    if interface != BASIC_INTERFACE:
        validate_interfaces([interface], interface)
    actions: list[ActionType] = []
    for name in expand_interfaces([] if interface == BASIC_INTERFACE else [interface]):
        actions.extend(ACTION_CATALOG[name].values())
    return actions
