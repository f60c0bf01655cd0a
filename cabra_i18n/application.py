"""Assembles the i18n components for one page.

Start-up is event driven:

    detector.init ──locale.detected──▶ translator.init ──i18n.ready──▶
        fonts.init, direction.init, formatter, switcher.setup

Afterwards the language switcher drives every locale change.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from cabra_i18n.clients.http import HttpClient
from cabra_i18n.configuration import Settings, settings as default_settings
from cabra_i18n.context import I18nContext
from cabra_i18n.direction import DirectionManager
from cabra_i18n.document import HtmlDocument
from cabra_i18n.events import Event, EventBus, EventType
from cabra_i18n.fonts import FontLoader
from cabra_i18n.formatting import IntlFormatter
from cabra_i18n.i18n import (
    FileTranslationLoader,
    HttpTranslationLoader,
    LocaleDetector,
    TranslationLoader,
    Translator,
)
from cabra_i18n.logging import get_module_logger
from cabra_i18n.storage import KeyValueStorage, create_storage
from cabra_i18n.switcher import (
    LanguageSwitcher,
    LiveRegionAnnouncer,
    LocaleWidget,
    sign_language_widget,
)

logger = get_module_logger()


def create_loader(settings: Settings, client: Optional[HttpClient] = None) -> TranslationLoader:
    """HTTP loader when TRANSLATIONS_BASE_URL is set, file loader otherwise."""
    translation_settings = settings.translations
    if translation_settings.translations_base_url:
        return HttpTranslationLoader(
            translation_settings.translations_base_url,
            client=client,
            timeout=translation_settings.http_timeout_seconds,
        )
    return FileTranslationLoader(Path(translation_settings.translations_path))


class I18nApplication:
    """The wired components of one page.

    Attributes:
        context: Shared context.
        detector, translator, fonts, direction, formatter, switcher:
            The components.
    """

    def __init__(
        self,
        context: I18nContext,
        detector: LocaleDetector,
        translator: Translator,
        fonts: FontLoader,
        direction: DirectionManager,
        formatter: IntlFormatter,
        switcher: LanguageSwitcher,
        http_client: Optional[HttpClient] = None,
    ):
        self.context = context
        self.detector = detector
        self.translator = translator
        self.fonts = fonts
        self.direction = direction
        self.formatter = formatter
        self.switcher = switcher
        self.http_client = http_client
        self._subscribe()

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    @property
    def document(self) -> HtmlDocument:
        return self.context.document

    def _subscribe(self) -> None:
        self.bus.add_handler(EventType.LOCALE_DETECTED, self._on_locale_detected)
        self.bus.add_handler(EventType.I18N_READY, self._on_ready)
        self.bus.add_handler(EventType.LANGUAGE_CHANGED, self._on_language_changed)

    async def _on_locale_detected(self, event: Event) -> None:
        await self.translator.init(event.get("locale"))

    async def _on_ready(self, event: Event) -> None:
        locale = event.get("locale")
        await self.fonts.init(locale)
        await self.direction.init(locale)
        self.formatter.set_locale(locale)
        self.formatter.format_elements()
        self.switcher.setup()

    async def _on_language_changed(self, event: Event) -> None:
        self.formatter.format_elements()

    async def start(
        self,
        url: Optional[str] = None,
        browser_languages: Optional[Iterable[str]] = None,
    ) -> str:
        """Detect the locale and run the start-up chain.

        Args:
            url: Page URL, read for ``lang``/``locale`` overrides.
            browser_languages: Preferred languages, best first.

        Returns:
            The detected locale.
        """
        locale = await self.detector.init(url=url, browser_languages=browser_languages)
        logger.info("i18n_application_started", locale=locale)
        return locale

    async def change_language(self, locale: str) -> bool:
        return await self.switcher.change_language(locale)

    async def close(self) -> None:
        """Wait for background font loads and release the HTTP session."""
        await self.fonts.wait_background()
        self.direction.stop_observer()
        if self.http_client is not None:
            self.http_client.close()


def create_application(
    document: Optional[HtmlDocument] = None,
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    loader: Optional[TranslationLoader] = None,
    http_client: Optional[HttpClient] = None,
    widgets: Optional[List[LocaleWidget]] = None,
) -> I18nApplication:
    """Build an I18nApplication with defaults for anything not given.

    Args:
        document: Page to localize. Defaults to an empty document.
        settings: Configuration. Defaults to the module-level settings.
        storage: Persistence backend. Defaults to ``create_storage``.
        loader: Translation loader. Defaults to ``create_loader``.
        http_client: Client shared by the HTTP loader and the font loader.
        widgets: Locale-dependent widgets. Defaults to the sign-language
            widget.

    Returns:
        The wired application, not started yet.
    """
    settings = settings or default_settings
    document = document or HtmlDocument.parse()
    storage = storage if storage is not None else create_storage(settings.storage)
    http_client = http_client or HttpClient(timeout=settings.translations.http_timeout_seconds)

    context = I18nContext(settings=settings, document=document, storage=storage, bus=EventBus())
    detector = LocaleDetector(context)
    translator = Translator(context, loader or create_loader(settings, client=http_client))
    fonts = FontLoader(context, fetcher=http_client)
    direction = DirectionManager(context)
    formatter = IntlFormatter(context.locale, document=document)
    switcher = LanguageSwitcher(
        context,
        detector,
        translator,
        fonts=fonts,
        direction=direction,
        formatter=formatter,
        widgets=widgets if widgets is not None else [sign_language_widget(document)],
        announcer=LiveRegionAnnouncer(document),
    )

    logger.info(
        "i18n_application_created",
        loader=type(translator.loader).__name__,
        storage=type(storage).__name__,
    )
    return I18nApplication(
        context, detector, translator, fonts, direction, formatter, switcher, http_client=http_client
    )
