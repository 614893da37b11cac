"""Tests for TranslationContext."""

import pytest

from src.translator.context import TranslationContext, element_info, root_element_info
from src.translator.errors import GrammarError
from src.translator.grammar import ElementSpec
from src.translator.types import STRING, UNSET, SelfType, list_of


def make_element(**fields):
    return element_info(ElementSpec.model_validate(fields))


class TestElementInfo:
    """Tests for element_info and root_element_info."""

    def test_basic_element(self):
        info = make_element(name="button", type=["clickable"], selector={"css": "b"}, public=True)
        assert info.getter_name == "getButtonElement"
        assert info.type.name == "ButtonElement"
        assert info.is_basic
        assert info.is_public
        assert info.return_type == info.type

    def test_list_element(self):
        info = make_element(name="items", selector={"css": "li", "returnAll": True})
        assert info.is_list
        assert info.return_type == list_of(info.type)

    def test_custom_element(self):
        info = make_element(name="menu", type="my-app/pageObjects/menu", selector={"css": "x"})
        assert info.getter_name == "getMenu"
        assert info.type.full_name == "my.app.pageobjects.Menu"
        assert not info.is_basic

    def test_root_element(self):
        info = root_element_info(["clickable"], is_public=True)
        assert info.name == "root"
        assert info.getter_name == "getRootElement"
        assert info.type.name == "RootElement"
        assert info.selector is None


class TestTranslationContext:
    """Tests for element registration and type resolution."""

    def test_add_and_get_element(self):
        ctx = TranslationContext(name="Home", package="my.app")
        info = make_element(name="title", selector={"css": "h1"})
        ctx.add_element(info)
        assert ctx.get_element("title") is info
        assert ctx.full_name == "my.app.Home"

    def test_duplicate_element(self):
        ctx = TranslationContext(name="Home")
        ctx.add_element(make_element(name="title", selector={"css": "h1"}))
        with pytest.raises(GrammarError, match="Duplicate element 'title'"):
            ctx.add_element(make_element(name="title", selector={"css": "h2"}))

    def test_unknown_element_lists_declared(self):
        ctx = TranslationContext(name="Home")
        ctx.add_element(make_element(name="title", selector={"css": "h1"}))
        with pytest.raises(GrammarError, match=r"Unknown element 'body'.*\['title'\]"):
            ctx.get_element("body")

    def test_resolve_type(self):
        ctx = TranslationContext(name="Home")
        assert ctx.resolve_type("string") == STRING
        assert ctx.resolve_type(None) == UNSET
        assert ctx.resolve_type("self") == SelfType(name="Home")

    def test_resolve_type_with_return_all(self):
        ctx = TranslationContext(name="Home")
        resolved = ctx.resolve_type("string", return_all=True)
        assert resolved == list_of(STRING, return_all=True)
        assert ctx.resolve_type(None, return_all=True) == UNSET

    def test_return_all_on_void(self):
        ctx = TranslationContext(name="Home")
        with pytest.raises(GrammarError, match="'returnAll' cannot be used"):
            ctx.resolve_type("void", return_all=True)
