"""Tests for cabra_i18n.switcher.widgets."""

import pytest

from cabra_i18n.document import HtmlDocument
from cabra_i18n.switcher import LocaleToggledWidget, sign_language_widget

pytestmark = pytest.mark.unit


class TestLocaleToggledWidget:
    def test_toggles_every_match(self):
        document = HtmlDocument.parse('<body><p class="tip"></p><p class="tip"></p></body>')
        widget = LocaleToggledWidget(document, ".tip", ["ja"], enabled_class="shown")

        widget.update("ja")
        assert all(document.has_class(p, "shown") for p in document.select(".tip"))

        widget.update("en")
        assert not any(document.has_class(p, "shown") for p in document.select(".tip"))

    def test_no_matches_is_harmless(self):
        document = HtmlDocument.parse("<body></body>")
        LocaleToggledWidget(document, ".missing", ["en"]).update("en")


class TestSignLanguageWidget:
    def test_only_enabled_for_portuguese(self, document):
        widget = sign_language_widget(document)
        assert widget.is_enabled_for("pt-BR")
        assert not widget.is_enabled_for("en")

    def test_update_removes_enabled_class(self, document):
        element = document.select_one("[vw]")
        sign_language_widget(document).update("ar")
        assert not document.has_class(element, "enabled")

    def test_without_locale_never_enabled(self, document):
        assert not sign_language_widget(document, locale=None).is_enabled_for("pt-BR")
