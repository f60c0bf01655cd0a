"""Tests for cabra_i18n.document.html."""

import pytest

from cabra_i18n.document import HtmlDocument, format_style, parse_style

pytestmark = pytest.mark.unit


class TestParse:
    """Tests for building documents."""

    def test_fragment_gets_skeleton(self):
        document = HtmlDocument.parse("<p id='x'>Hi</p>")
        assert document.root.name == "html"
        assert document.head is not None
        assert document.body.find("p")["id"] == "x"

    def test_empty_document(self):
        document = HtmlDocument.parse()
        assert document.head is not None
        assert document.body is not None

    def test_full_page_kept(self, page_markup):
        document = HtmlDocument.parse(page_markup)
        assert document.root["lang"] == "pt-BR"
        assert document.head.find("title").get_text() == "Cabra da Tech"
        assert document.get_element_by_id("select-language") is not None

    def test_to_html_round_trips_content(self):
        document = HtmlDocument.parse("<html><head></head><body><b>x</b></body></html>")
        assert "<b>x</b>" in document.to_html()
        assert str(document) == document.to_html()


class TestQueries:
    def test_select_document_order(self, document):
        keys = [el["data-i18n"] for el in document.select("[data-i18n]")]
        assert keys == ["accessibility.skipLink", "nav.home", "nav.news", "greeting"]

    def test_select_scope_includes_matching_scope(self, document):
        nav = document.select_one("nav")
        matches = document.select("nav, a", scope=nav)
        assert matches[0] is nav
        assert len(matches) == 3

    def test_select_one_missing(self, document):
        assert document.select_one(".does-not-exist") is None


class TestMutation:
    def test_create_element_converts_underscores(self, document):
        link = document.create_element("link", rel="stylesheet", data_font_family="Amiri")
        assert link["data-font-family"] == "Amiri"
        assert link.parent is None

    def test_append_child_notifies_observers(self, document):
        added = []
        document.observe(added.extend)
        div = document.append_child(document.body, document.create_element("div"))
        assert added == [div]

    def test_insert_html_returns_top_level_elements(self, document):
        added = []
        document.observe(added.extend)
        inserted = document.insert_html(document.body, "<p>a</p> text <span>b</span>")
        assert [el.name for el in inserted] == ["p", "span"]
        assert added == inserted

    def test_disconnect_stops_notifications(self, document):
        added = []
        disconnect = document.observe(added.extend)
        disconnect()
        disconnect()
        document.insert_html(document.body, "<p>a</p>")
        assert added == []

    def test_failing_observer_does_not_break_others(self, document):
        added = []

        def broken(elements):
            raise RuntimeError("boom")

        document.observe(broken)
        document.observe(added.extend)
        document.insert_html(document.body, "<p>a</p>")
        assert len(added) == 1

    def test_remove(self, document):
        element = document.get_element_by_id("greeting")
        document.remove(element)
        assert document.get_element_by_id("greeting") is None


class TestClassHelpers:
    @pytest.fixture
    def element(self):
        return HtmlDocument.parse('<i class="bi bi-arrow-left"></i>').select_one("i")

    def test_add_and_remove(self, element):
        HtmlDocument.add_class(element, "rtl", "bi")
        assert HtmlDocument.get_classes(element) == ["bi", "bi-arrow-left", "rtl"]
        HtmlDocument.remove_class(element, "bi", "bi-arrow-left", "rtl")
        assert not element.has_attr("class")

    def test_toggle(self, element):
        assert HtmlDocument.toggle_class(element, "active") is True
        assert HtmlDocument.has_class(element, "active")
        assert HtmlDocument.toggle_class(element, "active") is False
        assert HtmlDocument.toggle_class(element, "active", force=False) is False
        assert not HtmlDocument.has_class(element, "active")

    def test_replace_keeps_position(self, element):
        assert HtmlDocument.replace_class(element, "bi-arrow-left", "bi-arrow-right") is True
        assert HtmlDocument.get_classes(element) == ["bi", "bi-arrow-right"]
        assert HtmlDocument.replace_class(element, "missing", "other") is False


class TestStyleAndText:
    def test_parse_and_format_style(self):
        styles = parse_style("Font-Family: Roboto, sans-serif; color:red;;")
        assert styles == {"font-family": "Roboto, sans-serif", "color": "red"}
        assert format_style(styles) == "font-family: Roboto, sans-serif; color: red"

    def test_set_and_remove_style(self, document):
        root = document.root
        document.set_style(root, "font-family", "Amiri, serif")
        assert document.get_style(root, "font-family") == "Amiri, serif"
        document.set_style(root, "font-family", None)
        assert not root.has_attr("style")

    def test_set_text_replaces_children(self, document):
        paragraph = document.get_element_by_id("greeting")
        document.set_text(paragraph, "Hello")
        assert document.get_text(paragraph) == "Hello"
