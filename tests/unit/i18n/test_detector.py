"""Tests for cabra_i18n.i18n.detector."""

import pytest

from cabra_i18n.events import EventType
from cabra_i18n.i18n import LOCALE_FALLBACKS, SUPPORTED_LOCALES, LocaleDetector
from cabra_i18n.i18n.detector import normalize_locale, parse_accept_language
from cabra_i18n.storage import DisabledStorage
from tests.factories.i18n import make_context

pytestmark = pytest.mark.unit


@pytest.fixture
def detector(context):
    return LocaleDetector(context)


class TestNormalizeLocale:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("pt-br", "pt-BR"),
            (" PT_br ", "pt-BR"),
            ("EN", "en"),
            ("zh-hant-tw", "zh-Hant-TW"),
            ("es-419", "es-419"),
            ("en-gb", "en-GB"),
        ],
    )
    def test_casing_and_separator(self, raw, expected):
        assert normalize_locale(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_returns_default(self, raw):
        assert normalize_locale(raw, default="en") == "en"


class TestParseAcceptLanguage:
    def test_orders_by_quality(self):
        header = "en;q=0.5, pt-BR, ar;q=0.9"
        assert parse_accept_language(header) == ["pt-BR", "ar", "en"]

    def test_drops_wildcard_and_zero_quality(self):
        assert parse_accept_language("*, ja;q=0, ru") == ["ru"]

    def test_ties_keep_header_order(self):
        assert parse_accept_language("es;q=0.8, hi;q=0.8") == ["es", "hi"]

    def test_empty_header(self):
        assert parse_accept_language(None) == []
        assert parse_accept_language("") == []


class TestUrlLocale:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.org/?lang=ar", "ar"),
            ("https://example.org/?locale=pt-br", "pt-BR"),
            ("https://example.org/?lang=xx&locale=ja", "ja"),
            ("https://example.org/?lang=xx", None),
            ("https://example.org/", None),
            (None, None),
        ],
    )
    def test_get_locale_from_url(self, detector, url, expected):
        assert detector.get_locale_from_url(url) == expected


class TestBrowserLocale:
    """Tests for detect_browser_locale()."""

    @pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
    def test_every_supported_locale_is_found(self, detector, locale):
        assert detector.detect_browser_locale(["xx", locale]) == locale

    @pytest.mark.parametrize("variant,expected", sorted(LOCALE_FALLBACKS.items()))
    def test_mapped_variants(self, detector, variant, expected):
        assert detector.detect_browser_locale([variant]) == expected

    @pytest.mark.parametrize(
        "languages",
        [
            ["en-AU"],
            ["pt-AO"],
            ["es-AR", "en"],
            ["ru-UA"],
            ["ar-MA"],
            ["de-AT"],
            ["xx-YY", "zz"],
            [],
        ],
    )
    def test_result_is_always_supported(self, detector, languages):
        assert detector.detect_browser_locale(languages) in SUPPORTED_LOCALES

    def test_base_language_fallback(self, detector):
        assert detector.detect_browser_locale(["en-AU"]) == "en"
        assert detector.detect_browser_locale(["pt-AO"]) == "pt-BR"
        assert detector.detect_browser_locale(["ja-Jpan-JP"]) == "ja"

    def test_lowercase_input(self, detector):
        assert detector.detect_browser_locale(["pt-br"]) == "pt-BR"

    def test_nothing_matches_returns_default(self, detector):
        assert detector.detect_browser_locale(["xx", "yy-ZZ"]) == "pt-BR"


class TestDetect:
    """Tests for the resolution order of detect()."""

    def test_url_wins_and_is_saved(self, detector, context):
        context.storage.set_item(detector.storage_key, "ja")
        locale = detector.detect(url="https://example.org/?lang=ar", browser_languages=["en"])
        assert locale == "ar"
        assert context.storage.get_item(detector.storage_key) == "ar"

    def test_saved_beats_browser(self, detector, context):
        context.storage.set_item(detector.storage_key, "ja")
        assert detector.detect(browser_languages=["en"]) == "ja"

    def test_unsupported_saved_value_ignored(self, detector, context):
        context.storage.set_item(detector.storage_key, "klingon")
        assert detector.detect(browser_languages=["es-MX"]) == "es"

    def test_browser_result_is_saved(self, detector, context):
        assert detector.detect(browser_languages=["en-GB"]) == "en"
        assert context.storage.get_item(detector.storage_key) == "en"

    def test_default_when_nothing_known(self, detector, context):
        assert detector.detect() == "pt-BR"
        assert context.storage.get_item(detector.storage_key) is None

    def test_disabled_storage_is_not_fatal(self):
        context = make_context(storage=DisabledStorage())
        detector = LocaleDetector(context)
        assert detector.get_saved_locale() is None
        assert detector.save_locale("en") is False
        assert detector.detect(browser_languages=["en"]) == "en"


class TestApplyToDocument:
    def test_sets_lang_dir_and_class(self, detector, document):
        detector.apply_to_document("ar")
        root = document.root
        assert root["lang"] == "ar"
        assert root["dir"] == "rtl"
        assert document.has_class(root, "lang-ar")
        assert document.has_class(root, "rtl")

    def test_replaces_previous_lang_class(self, detector, document):
        detector.apply_to_document("ar")
        detector.apply_to_document("en")
        root = document.root
        assert [c for c in document.get_classes(root) if c.startswith("lang-")] == ["lang-en"]
        assert root["dir"] == "ltr"
        assert not document.has_class(root, "rtl")


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_init_sets_context_and_emits(self, detector, context, recorded_events):
        locale = await detector.init(browser_languages=["ar-EG"])

        assert locale == "ar"
        assert context.current_locale == "ar"
        assert context.document.root["dir"] == "rtl"

        event = recorded_events[-1]
        assert event.event_type == EventType.LOCALE_DETECTED.value
        assert event.get("locale") == "ar"
        assert event.get("is_rtl") is True
        assert event.get("info").code == "ar"

    @pytest.mark.asyncio
    async def test_set_locale(self, detector, context, recorded_events):
        context.current_locale = "pt-BR"

        assert await detector.set_locale("ja") is True

        assert context.current_locale == "ja"
        assert context.storage.get_item(detector.storage_key) == "ja"
        event = recorded_events[-1]
        assert event.event_type == EventType.LOCALE_CHANGED.value
        assert event.get("old_locale") == "pt-BR"
        assert event.get("locale") == "ja"

    @pytest.mark.asyncio
    async def test_set_unsupported_locale(self, detector, context, recorded_events):
        context.current_locale = "en"
        assert await detector.set_locale("xx") is False
        assert context.current_locale == "en"
        assert recorded_events == []

    def test_is_rtl(self, detector, context):
        context.current_locale = "ar"
        assert detector.is_rtl() is True
        assert detector.is_rtl("en") is False
        assert detector.is_rtl("he-IL") is True

    def test_get_locale_info_defaults_to_current(self, detector, context):
        context.current_locale = "hi"
        assert detector.get_locale_info().code == "hi"
        assert len(detector.get_supported_locales()) == 7
