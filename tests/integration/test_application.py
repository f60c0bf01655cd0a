"""End-to-end tests: page start-up and language changes through the
assembled application."""

import pytest

from cabra_i18n.application import I18nApplication, create_application, create_loader
from cabra_i18n.configuration import TranslationSettings
from cabra_i18n.document import HtmlDocument
from cabra_i18n.events import EventType
from cabra_i18n.i18n import FileTranslationLoader, HttpTranslationLoader
from cabra_i18n.storage import InMemoryStorage
from cabra_i18n.switcher import ANNOUNCER_ID
from tests.factories.i18n import (
    PAGE_MARKUP,
    StubStylesheetFetcher,
    StubTranslationLoader,
    make_settings,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def fetcher():
    return StubStylesheetFetcher()


@pytest.fixture
def app(fetcher) -> I18nApplication:
    return create_application(
        document=HtmlDocument.parse(PAGE_MARKUP),
        settings=make_settings(),
        storage=InMemoryStorage(),
        loader=StubTranslationLoader(),
        http_client=fetcher,
    )


def text_of(app, element_id):
    return app.document.get_element_by_id(element_id).get_text()


def button_icon_classes(app):
    return app.document.select_one("button.next i")["class"]


class TestCreateLoader:
    def test_file_loader_by_default(self):
        assert isinstance(create_loader(make_settings()), FileTranslationLoader)

    def test_http_loader_when_base_url_set(self):
        settings = make_settings(
            translations=TranslationSettings(TRANSLATIONS_BASE_URL="https://cdn.example.com/locales")
        )
        assert isinstance(create_loader(settings), HttpTranslationLoader)


class TestStartup:
    @pytest.mark.asyncio
    async def test_start_localizes_page(self, app, fetcher):
        locale = await app.start(browser_languages=["pt-BR", "en"])

        assert locale == "pt-BR"
        root = app.document.root
        assert root["lang"] == "pt-BR"
        assert root["dir"] == "ltr"
        assert text_of(app, "greeting") == "Olá Ana"
        assert app.switcher.get_selected_locale() == "pt-BR"
        assert app.document.has_class(app.document.select_one("[vw]"), "enabled")
        assert "Roboto" in app.document.get_style(root, "font-family")

        await app.close()
        assert fetcher.closed

    @pytest.mark.asyncio
    async def test_start_honours_url_parameter(self, app):
        locale = await app.start(url="https://cabradatech.com/?lang=en", browser_languages=["pt-BR"])

        assert locale == "en"
        assert text_of(app, "greeting") == "Hello Ana"
        assert app.switcher.get_selected_locale() == "en"
        assert not app.document.has_class(app.document.select_one("[vw]"), "enabled")
        await app.close()

    @pytest.mark.asyncio
    async def test_start_publishes_chain(self, app):
        seen = []
        app.bus.add_handler("*", lambda event: seen.append(event.event_type))

        await app.start(browser_languages=["pt-BR"])

        assert seen.index(EventType.LOCALE_DETECTED.value) < seen.index(EventType.I18N_READY.value)
        assert EventType.FONTS_LOADED.value in seen
        await app.close()


class TestChangeLanguage:
    @pytest.mark.asyncio
    async def test_switch_to_arabic(self, app):
        await app.start(browser_languages=["pt-BR"])

        assert await app.change_language("ar") is True

        document = app.document
        root = document.root
        assert root["lang"] == "ar"
        assert root["dir"] == "rtl"
        assert "bi-arrow-right" in button_icon_classes(app)
        assert "bi-arrow-left" in document.select_one("pre i")["class"]
        assert text_of(app, "greeting") == "مرحبا Ana"
        assert text_of(app, ANNOUNCER_ID) == "تم تغيير اللغة إلى العربية"
        assert app.switcher.get_selected_locale() == "ar"
        assert not document.has_class(document.select_one("[vw]"), "enabled")
        assert document.get_style(root, "font-family").startswith("Amiri, Noto Sans Arabic")
        await app.close()

    @pytest.mark.asyncio
    async def test_round_trip_restores_layout(self, app):
        await app.start(browser_languages=["pt-BR"])

        await app.change_language("ar")
        await app.change_language("pt-BR")

        root = app.document.root
        assert root["dir"] == "ltr"
        assert "bi-arrow-left" in button_icon_classes(app)
        assert text_of(app, "greeting") == "Olá Ana"
        assert app.document.has_class(app.document.select_one("[vw]"), "enabled")
        await app.close()

    @pytest.mark.asyncio
    async def test_missing_bundle_falls_back_to_english(self, app):
        await app.start(browser_languages=["pt-BR"])

        assert await app.change_language("ja") is True

        assert app.document.root["lang"] == "ja"
        assert text_of(app, "greeting") == "Hello Ana"
        await app.close()

    @pytest.mark.asyncio
    async def test_choice_is_persisted(self, app):
        await app.start(browser_languages=["pt-BR"])
        await app.change_language("en")

        assert app.detector.get_saved_locale() == "en"
        await app.close()
