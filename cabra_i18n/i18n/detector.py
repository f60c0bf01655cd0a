"""Locale detection and resolution.

Resolves the page locale from, in order: the URL (``?lang=`` or
``?locale=``), the saved preference, the browser's language list and the
configured default. URL and browser results are persisted so the next
visit starts from them.
"""

import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from cabra_i18n.context import I18nContext
from cabra_i18n.errors import StorageError
from cabra_i18n.events import EventType
from cabra_i18n.i18n import locales
from cabra_i18n.i18n.models import LocaleInfo
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

RTL_LANGUAGES = frozenset({"ar", "he", "fa", "ur"})

_SUBTAG = re.compile(r"^[A-Za-z0-9]+$")


def normalize_locale(value: Optional[str], default: str = locales.DEFAULT_LOCALE) -> str:
    """Canonicalize a language tag.

    Trims whitespace, turns ``_`` into ``-`` and applies BCP 47 casing:
    lowercase language, uppercase 2-letter or 3-digit region, title-case
    4-letter script.

    Args:
        value: Raw tag (e.g., " en_gb ", "zh-hant-tw").
        default: Returned for empty input.

    Returns:
        Normalized tag (e.g., "en-GB", "zh-Hant-TW").
    """
    if value is None:
        return default
    cleaned = value.strip().replace("_", "-")
    if not cleaned:
        return default

    parts = [p for p in cleaned.split("-") if p]
    normalized = [parts[0].lower()]
    for part in parts[1:]:
        if not _SUBTAG.match(part):
            normalized.append(part)
        elif len(part) == 4 and part.isalpha():
            normalized.append(part.title())
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            normalized.append(part.upper())
        else:
            normalized.append(part.lower())
    return "-".join(normalized)


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Order the language ranges of an Accept-Language header by quality.

    Ranges with ``q=0`` and the ``*`` wildcard are dropped. Ties keep header
    order.

    Args:
        header: Header value, e.g. "pt-BR,pt;q=0.9,en;q=0.8".

    Returns:
        Language ranges, most preferred first.
    """
    if not header:
        return []

    preferences: List[Tuple[str, float, int]] = []
    for index, part in enumerate(header.split(",")):
        pieces = part.split(";")
        lang_range = pieces[0].strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        for param in pieces[1:]:
            name, _, raw = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(raw)
                except ValueError:
                    quality = 1.0
        if quality <= 0:
            continue
        preferences.append((lang_range, quality, index))

    preferences.sort(key=lambda item: (-item[1], item[2]))
    return [lang for lang, _, _ in preferences]


class LocaleDetector:
    """Detects, applies and persists the page locale.

    Attributes:
        context: Shared i18n context; ``current_locale`` is written here.
    """

    def __init__(self, context: I18nContext):
        self.context = context
        self.log = logger.bind(default_locale=context.default_locale)

    @property
    def storage_key(self) -> str:
        return self.context.settings.locale.storage_key

    @property
    def current_locale(self) -> str:
        return self.context.locale

    def normalize_locale(self, value: Optional[str]) -> str:
        return normalize_locale(value, default=self.context.default_locale)

    def is_supported(self, locale: Optional[str]) -> bool:
        return locales.is_supported(locale)

    def get_locale_from_url(self, url: Optional[str]) -> Optional[str]:
        """Read a supported locale from the ``lang`` or ``locale`` query parameter."""
        if not url:
            return None

        query = parse_qs(urlparse(url).query)
        for param in ("lang", "locale"):
            values = query.get(param)
            if not values:
                continue
            candidate = self.normalize_locale(values[0])
            if self.is_supported(candidate):
                return candidate
            self.log.debug("unsupported_url_locale", param=param, value=values[0])
        return None

    def get_saved_locale(self) -> Optional[str]:
        """Read the persisted locale, treating storage failures as absent."""
        try:
            saved = self.context.storage.get_item(self.storage_key)
        except StorageError as e:
            self.log.warning("saved_locale_unavailable", error=str(e))
            return None

        if saved and self.is_supported(saved):
            return saved
        return None

    def save_locale(self, locale: str) -> bool:
        """Persist the locale.

        Returns:
            True if the value was written, False if storage refused it.
        """
        try:
            self.context.storage.set_item(self.storage_key, locale)
        except StorageError as e:
            self.log.warning("save_locale_failed", locale=locale, error=str(e))
            return False
        return True

    def detect_browser_locale(self, languages: Optional[Iterable[str]]) -> str:
        """Pick the best supported locale for a browser language list.

        For each language, in order: an exact supported tag, the fallback
        table entry, the base language's fallback entry, then the base
        language itself if supported.

        Returns:
            A supported locale; the default when nothing matches.
        """
        for raw in languages or []:
            if not raw:
                continue
            candidate = self.normalize_locale(raw)

            if self.is_supported(candidate):
                return candidate

            mapped = locales.LOCALE_FALLBACKS.get(candidate)
            if mapped:
                return mapped

            base = candidate.split("-")[0]
            mapped = locales.LOCALE_FALLBACKS.get(base)
            if mapped:
                return mapped

            if self.is_supported(base):
                return base

        return self.context.default_locale

    def detect(
        self,
        url: Optional[str] = None,
        browser_languages: Optional[Iterable[str]] = None,
    ) -> str:
        """Resolve the locale without touching the context or document.

        Resolution order:
        1. URL parameter (persisted)
        2. Saved preference
        3. Browser languages (persisted)
        4. Default locale
        """
        from_url = self.get_locale_from_url(url)
        if from_url:
            self.save_locale(from_url)
            self.log.info("locale_resolved", source="url", locale=from_url)
            return from_url

        saved = self.get_saved_locale()
        if saved:
            self.log.info("locale_resolved", source="storage", locale=saved)
            return saved

        languages = list(browser_languages or [])
        if languages:
            detected = self.detect_browser_locale(languages)
            self.save_locale(detected)
            self.log.info("locale_resolved", source="browser", locale=detected)
            return detected

        self.log.info("locale_resolved", source="default", locale=self.context.default_locale)
        return self.context.default_locale

    def apply_to_document(self, locale: str) -> None:
        """Set ``lang``/``dir`` on the root and keep one ``lang-<code>`` class."""
        document = self.context.document
        root = document.root
        info = self.get_locale_info(locale)

        root["lang"] = locale
        root["dir"] = info.direction.value

        stale = [c for c in document.get_classes(root) if c.startswith("lang-")]
        if stale:
            document.remove_class(root, *stale)
        document.add_class(root, f"lang-{locale}")
        document.toggle_class(root, "rtl", info.is_rtl)

    async def init(
        self,
        url: Optional[str] = None,
        browser_languages: Optional[Iterable[str]] = None,
    ) -> str:
        """Detect the locale, apply it and announce it with ``locale.detected``."""
        locale = self.detect(url=url, browser_languages=browser_languages)
        self.context.current_locale = locale
        self.apply_to_document(locale)

        info = self.get_locale_info(locale)
        await self.context.bus.emit(
            EventType.LOCALE_DETECTED,
            locale=locale,
            info=info,
            is_rtl=info.is_rtl,
        )
        return locale

    async def set_locale(self, locale: str) -> bool:
        """Switch the active locale.

        Returns:
            False if the locale is not supported, True otherwise.
        """
        if not self.is_supported(locale):
            self.log.warning("unsupported_locale", locale=locale)
            return False

        old_locale = self.context.current_locale
        self.context.current_locale = locale
        self.save_locale(locale)
        self.apply_to_document(locale)

        info = self.get_locale_info(locale)
        await self.context.bus.emit(
            EventType.LOCALE_CHANGED,
            locale=locale,
            old_locale=old_locale,
            info=info,
            is_rtl=info.is_rtl,
        )
        self.log.info("locale_changed", locale=locale, old_locale=old_locale)
        return True

    def get_locale_info(self, locale: Optional[str] = None) -> LocaleInfo:
        return locales.get_locale_info(
            locale or self.current_locale, default=self._registry_default()
        )

    def get_supported_locales(self) -> List[LocaleInfo]:
        return locales.get_supported_locales()

    def is_rtl(self, locale: Optional[str] = None) -> bool:
        """Whether a locale (default: the active one) is written right-to-left."""
        code = locale or self.current_locale
        if self.is_supported(code):
            return locales.LOCALES[code].is_rtl
        return self.normalize_locale(code).split("-")[0] in RTL_LANGUAGES

    def _registry_default(self) -> str:
        default = self.context.default_locale
        return default if self.is_supported(default) else locales.DEFAULT_LOCALE
