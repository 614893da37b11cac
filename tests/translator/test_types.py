"""Tests for the return-type model."""

import pytest
from pydantic import TypeAdapter

from src.translator.errors import GrammarError
from src.translator.types import (
    BOOLEAN,
    NUMBER,
    STRING,
    UNSET,
    VOID,
    ConcreteType,
    SelfType,
    TypeValue,
    basic_element_type,
    custom_type,
    is_list,
    is_self,
    is_unset,
    is_void,
    list_of,
    parse_type,
    same_type,
)


class TestParseType:
    """Tests for parse_type."""

    def test_primitives(self):
        assert parse_type("string") == STRING
        assert parse_type("boolean") == BOOLEAN
        assert parse_type("number") == NUMBER

    def test_void_and_unset(self):
        assert parse_type("void") == VOID
        assert parse_type(None) == UNSET

    def test_self_uses_page_object_type(self):
        assert parse_type("self", SelfType(name="Home")) == SelfType(name="Home")

    def test_custom_reference(self):
        resolved = parse_type("my-app/pageObjects/nav/menu")
        assert resolved.full_name == "my.app.pageobjects.nav.Menu"

    def test_unknown_type(self):
        with pytest.raises(GrammarError, match="Unknown type 'integer'"):
            parse_type("integer")


class TestCustomType:
    """Tests for custom page object type references."""

    def test_package_and_name(self):
        resolved = custom_type("utam-core/pageObjects/Dialog")
        assert resolved.package == "utam.core.pageobjects"
        assert resolved.name == "Dialog"
        assert resolved.is_custom
        assert not resolved.is_basic_element

    def test_invalid_reference(self):
        with pytest.raises(GrammarError, match="Invalid page object type reference"):
            custom_type("my-app//menu")


def test_basic_element_type():
    element_type = basic_element_type("button", ["clickable"])
    assert element_type.name == "ButtonElement"
    assert element_type.interfaces == ("clickable",)
    assert element_type.is_basic_element
    assert not element_type.is_custom


class TestPredicates:
    """Tests for type predicates and comparison."""

    def test_kind_predicates(self):
        assert is_list(list_of(STRING))
        assert is_void(VOID)
        assert is_unset(UNSET)
        assert is_unset(None)
        assert is_self(SelfType())
        assert not is_list(STRING)

    def test_same_type_ignores_return_all(self):
        assert same_type(list_of(STRING, return_all=True), list_of(STRING))
        assert not same_type(list_of(STRING), list_of(BOOLEAN))

    def test_same_type_compares_full_names(self):
        assert same_type(custom_type("a/b/c"), custom_type("a/b/c"))
        assert not same_type(custom_type("a/b/c"), ConcreteType(name="C"))
        assert not same_type(STRING, list_of(STRING))

    def test_simple_names(self):
        assert list_of(STRING).simple_name == "List<String>"
        assert VOID.simple_name == "void"


def test_type_values_round_trip_through_discriminator():
    adapter = TypeAdapter(TypeValue)
    value = list_of(custom_type("my-app/pageObjects/menu"), return_all=True)
    assert adapter.validate_python(value.model_dump()) == value
