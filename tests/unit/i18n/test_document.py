"""Tests for cabra_i18n.i18n.document."""

import pytest

from cabra_i18n.document import HtmlDocument
from cabra_i18n.i18n.document import DocumentTranslator

pytestmark = pytest.mark.unit

MESSAGES = {
    "nav.home": "Home",
    "nav.news": "News",
    "greeting": "Hello {{name}}",
    "search.placeholder": "Search the site",
    "search.title": "Search",
    "search.label": "Search field",
    "logo.alt": "Cabra da Tech logo",
}


def fake_translate(key, params):
    message = MESSAGES.get(key, key)
    for name, value in (params or {}).items():
        message = message.replace("{{" + name + "}}", str(value))
    return message


def translate(markup):
    document = HtmlDocument.parse(markup)
    count = DocumentTranslator(document, fake_translate).apply()
    return document, count


class TestDocumentTranslator:
    def test_plain_text_element(self):
        document, count = translate('<a data-i18n="nav.home">Início</a>')
        assert document.select_one("a").get_text() == "Home"
        assert count == 1

    def test_mixed_content_keeps_child_elements(self):
        document, _ = translate(
            '<a data-i18n="nav.news"><i class="bi bi-newspaper"></i> Notícias <b>!</b></a>'
        )
        link = document.select_one("a")
        assert link.find("i") is not None
        assert link.find("b").get_text() == "!"
        assert "News" in link.get_text()
        assert "Notícias" not in link.get_text()

    def test_mixed_content_without_text_node(self):
        document, _ = translate('<a data-i18n="nav.news"><i class="bi"></i></a>')
        link = document.select_one("a")
        assert link.find("i") is not None
        assert link.get_text() == ""

    def test_params_interpolated(self):
        document, _ = translate('<p data-i18n="greeting" data-i18n-params=\'{"name": "Ana"}\'>Olá</p>')
        assert document.select_one("p").get_text() == "Hello Ana"

    @pytest.mark.parametrize("params", ["{not json", '["a"]'])
    def test_invalid_params_ignored(self, params):
        document, _ = translate(f"<p data-i18n=\"greeting\" data-i18n-params='{params}'>Olá</p>")
        assert document.select_one("p").get_text() == "Hello {{name}}"

    def test_attribute_targets(self):
        document, count = translate(
            '<input data-i18n-placeholder="search.placeholder" data-i18n-title="search.title">'
            '<button data-i18n-aria-label="search.label"></button>'
            '<span data-i18n-aria="search.label"></span>'
            '<img data-i18n-alt="logo.alt" src="logo.png">'
        )
        field = document.select_one("input")
        assert field["placeholder"] == "Search the site"
        assert field["title"] == "Search"
        assert document.select_one("button")["aria-label"] == "Search field"
        assert document.select_one("span")["aria-label"] == "Search field"
        assert document.select_one("img")["alt"] == "Cabra da Tech logo"
        assert count == 4

    def test_input_text_not_written(self):
        document, count = translate('<input data-i18n="nav.home" value="x">')
        assert document.select_one("input")["value"] == "x"
        assert count == 0

    def test_img_data_i18n_sets_alt(self):
        document, _ = translate('<img data-i18n="logo.alt">')
        assert document.select_one("img")["alt"] == "Cabra da Tech logo"

    def test_element_counted_once(self):
        _, count = translate('<a data-i18n="nav.home" data-i18n-title="search.title">x</a>')
        assert count == 1

    def test_scope_limits_pass(self):
        document = HtmlDocument.parse(
            '<div id="a"><span data-i18n="nav.home">x</span></div>'
            '<div id="b"><span data-i18n="nav.news">y</span></div>'
        )
        translator = DocumentTranslator(document, fake_translate)
        assert translator.apply(scope=document.get_element_by_id("b")) == 1
        assert document.get_element_by_id("a").get_text() == "x"
        assert document.get_element_by_id("b").get_text() == "News"
