"""Tests for PageObjectTranslator."""

import pytest

from src.translator import PageObjectTranslator, load_page_object, translate_page_object
from src.translator.errors import GrammarError, UnknownActionError
from src.translator.types import OBJECT, STRING, VOID
from tests.conftest import make_document

PACKAGE = "my.app.pageobjects"


@pytest.fixture
def home_ir(home_document):
    return translate_page_object(home_document, "Home", PACKAGE)


class TestTranslate:
    """Translation of a complete page object."""

    def test_identity(self, home_ir):
        assert home_ir.full_name == "my.app.pageobjects.Home"
        assert home_ir.impl_name == "HomeImpl"
        assert home_ir.is_root
        assert home_ir.root_annotation == '@ElementMarker.Find(css = "body")'
        assert home_ir.root_interfaces == ["clickable"]

    def test_element_getters(self, home_ir):
        getters = {g.element_name: g for g in home_ir.elements}
        assert list(getters) == ["root", "title", "items", "search", "menu"]
        assert getters["title"].declaration == "TitleElement getTitleElement()"
        assert getters["items"].declaration == "List<ItemsElement> getItemsElement()"
        assert getters["menu"].declaration == "Menu getMenu()"
        assert getters["items"].annotation == '@ElementMarker.Find(css = "li")'
        assert [g.element_name for g in home_ir.public_elements()] == ["title"]

    def test_methods(self, home_ir):
        declarations = [m.declaration.code_line for m in home_ir.methods]
        assert declarations == [
            "String getTitleText()",
            "void clickItems()",
            "void searchFor(String text)",
        ]

    def test_method_body(self, home_ir):
        method = home_ir.get_method("searchFor")
        assert method.code_lines == [
            "SearchElement search0 = this.getSearchElement()",
            "search0.clearAndType(text)",
            'search0.press("Enter")',
        ]
        assert method.declaration.return_type == VOID

    def test_before_load(self, home_ir):
        before_load = home_ir.get_method("load")
        assert before_load is home_ir.before_load
        assert before_load.declaration.code_line == "Object load()"
        assert before_load.declaration.return_type == OBJECT
        assert not before_load.is_public
        assert before_load.code_lines == [
            "RootElement root0 = this.getRootElement()",
            "Boolean statement0 = root0.isPresent()",
            "root0.getText()",
            "return this",
        ]

    def test_get_unknown_method(self, home_ir):
        assert home_ir.get_method("missing") is None

    def test_ir_serializes(self, home_ir):
        data = home_ir.model_dump()
        assert data["methods"][0]["declaration"]["return_type"] == STRING.model_dump()


def test_no_before_load():
    ir = translate_page_object(make_document(), "Empty")
    assert ir.before_load is None
    assert ir.get_method("load") is None


def test_wait_for_document_url_before_load():
    document = make_document(
        beforeLoad=[
            {
                "apply": "waitFor",
                "predicate": [
                    {
                        "element": "document",
                        "apply": "getUrl",
                        "matcher": {"type": "stringContains", "args": [{"value": "home"}]},
                    }
                ],
            },
            {"element": "root", "apply": "getText"},
        ]
    )
    ir = translate_page_object(document, "Home", PACKAGE)

    assert ir.before_load.declaration.code_line == "Object load()"
    assert ir.before_load.code_lines[1:] == [
        "RootElement root1 = this.getRootElement()",
        "String statement1 = root1.getText()",
        "return statement1",
    ]


def test_translator_reusable_per_page_object(home_document):
    page_object = load_page_object(home_document)
    first = PageObjectTranslator(page_object, "Home", PACKAGE).translate()
    second = PageObjectTranslator(page_object, "Home", PACKAGE).translate()
    assert first == second


class TestErrors:
    """Errors name the page object they come from."""

    def test_unknown_action_names_page_object(self):
        document = make_document(
            elements=[{"name": "name", "type": ["actionable"], "selector": {"css": "x"}}],
            methods=[{"name": "test", "compose": [{"element": "name", "apply": "error"}]}],
        )
        with pytest.raises(UnknownActionError) as exc_info:
            translate_page_object(document, "Broken", PACKAGE)

        message = str(exc_info.value)
        assert message.startswith("page object 'my.app.pageobjects.Broken': method 'test', statement 0")
        assert "declared interfaces [ actionable ]" in message

    def test_validation_errors(self):
        document = make_document(methods=[{"name": "x", "compose": [{"element": "nope", "apply": "click"}]}])
        with pytest.raises(GrammarError, match="page object 'Broken': Invalid page object: methods"):
            translate_page_object(document, "Broken")

    def test_grammar_errors(self):
        with pytest.raises(GrammarError, match="page object 'Broken': Page object is not valid JSON"):
            translate_page_object("{", "Broken")
