"""Tests for the action catalog."""

import re

import pytest

from src.translator.errors import GrammarError, UnknownActionError
from src.translator.registries.actions import (
    ACTION_CATALOG,
    SUPPORTED_INTERFACES,
    describe_interfaces,
    expand_interfaces,
    get_action_type,
    get_document_action,
    list_actions,
    validate_interfaces,
)
from src.translator.types import BOOLEAN, NUMBER, STRING, VOID


class TestGetActionType:
    """Tests for get_action_type."""

    def test_basic_action_on_any_element(self):
        action = get_action_type("getText", [], "title")
        assert action.return_type == STRING
        assert action.interface == "basic"

    def test_declared_interface_action(self):
        action = get_action_type("click", ["clickable"], "button")
        assert action.return_type == VOID

    def test_parent_interface_action(self):
        """Editable elements inherit actionable actions."""
        action = get_action_type("scrollToCenter", ["editable"], "input")
        assert action.interface == "actionable"

    def test_parameter_types(self):
        assert get_action_type("flick", ["touchable"], "card").parameter_types == (NUMBER, NUMBER)
        assert get_action_type("getAttribute", [], "x").parameter_types == (STRING,)

    def test_unknown_action_for_actionable_element(self):
        expected = "unknown action 'error' for element 'name', declared interfaces [ actionable ]"
        with pytest.raises(UnknownActionError, match=re.escape(expected)):
            get_action_type("error", ["actionable"], "name")

    def test_unknown_action_for_touchable_element(self):
        expected = "unknown action 'error' for element 'name', declared interfaces [ touchable ]"
        with pytest.raises(UnknownActionError, match=re.escape(expected)):
            get_action_type("error", ["touchable"], "name")

    def test_touchable_does_not_inherit_actionable(self):
        with pytest.raises(UnknownActionError):
            get_action_type("focus", ["touchable"], "card")

    def test_click_needs_clickable(self):
        with pytest.raises(UnknownActionError, match=re.escape("declared interfaces [ editable ]")):
            get_action_type("click", ["editable"], "input")


class TestInterfaces:
    """Tests for interface helpers."""

    def test_describe_sorts_interfaces(self):
        assert describe_interfaces(["touchable", "clickable"]) == (
            "declared interfaces [ clickable, touchable ]"
        )

    def test_describe_empty(self):
        assert describe_interfaces([]) == "declared interfaces [ ]"

    def test_expand_includes_basic_and_parents(self):
        assert expand_interfaces(["clickable"]) == ["basic", "clickable", "actionable"]
        assert expand_interfaces([]) == ["basic"]

    def test_validate_unknown_interface(self):
        with pytest.raises(GrammarError, match="unknown interface 'draggable' for element 'x'"):
            validate_interfaces(["draggable"], "x")

    def test_supported_interfaces_exclude_basic(self):
        assert "basic" not in SUPPORTED_INTERFACES
        assert set(SUPPORTED_INTERFACES) == set(ACTION_CATALOG) - {"basic"}


def test_document_actions():
    assert get_document_action("getUrl").return_type == STRING
    with pytest.raises(UnknownActionError, match="unknown action 'click' for document"):
        get_document_action("click")


def test_list_actions_includes_inherited():
    names = {a.name for a in list_actions("clickable")}
    assert {"click", "focus", "getText"} <= names
    assert "setText" not in names


def test_list_actions_basic():
    actions = list_actions("basic")
    assert {a.interface for a in actions} == {"basic"}
    assert any(a.name == "isPresent" and a.return_type == BOOLEAN for a in actions)


def test_list_actions_unknown_interface():
    with pytest.raises(GrammarError):
        list_actions("draggable")
