"""Translation store: loads bundles, looks up keys and rewrites the page.

Core component for i18n. Bundles are loaded at most once concurrently per
locale, kept in a time-limited cache and backed by a fallback locale.
Lookups never raise: a key missing everywhere comes back as itself.
"""

import asyncio
import re
from typing import Any, Dict, Optional

from cabra_i18n.context import I18nContext
from cabra_i18n.errors import TranslationLoadError
from cabra_i18n.events import EventType
from cabra_i18n.i18n.cache import TranslationCache
from cabra_i18n.i18n.document import DocumentTranslator
from cabra_i18n.i18n.loader import TranslationLoader
from cabra_i18n.i18n.models import TranslationBundle
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def interpolate(message: str, params: Optional[Dict[str, Any]]) -> str:
    """Replace ``{{name}}`` placeholders with values from params.

    Placeholders with no matching param are left as they are.
    """
    if not params:
        return message

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in params and params[name] is not None:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, message)


def plural_key(key: str, count: int) -> str:
    """Pick the plural form key: ``zero`` for 0, ``one`` for 1, else ``other``."""
    if count == 0:
        return f"{key}.zero"
    if count == 1:
        return f"{key}.one"
    return f"{key}.other"


class Translator:
    """Service for loading bundles and translating keys.

    Attributes:
        context: Shared i18n context (document, storage, bus, locale).
        loader: TranslationLoader for fetching bundles.
        cache: TTL cache persisted to context storage.
        bundles: Bundles loaded in this process, by locale.
    """

    def __init__(
        self,
        context: I18nContext,
        loader: TranslationLoader,
        cache: Optional[TranslationCache] = None,
    ):
        self.context = context
        self.loader = loader
        translation_settings = context.settings.translations
        self.cache = cache if cache is not None else TranslationCache(
            context.storage,
            translation_settings.cache_storage_key,
            ttl_seconds=translation_settings.cache_expiration_seconds,
        )
        self.bundles: Dict[str, TranslationBundle] = {}
        self._loading: Dict[str, asyncio.Task] = {}
        self.active_locale: Optional[str] = None
        logger.info("initialized_translator", fallback_locale=self.fallback_locale)

    @property
    def fallback_locale(self) -> str:
        return self.context.fallback_locale

    @property
    def current_locale(self) -> str:
        return self.context.locale

    async def load_translations(self, locale: str) -> TranslationBundle:
        """Load a locale's bundle, falling back once to the fallback locale.

        Concurrent calls for the same locale share one in-flight load.

        Args:
            locale: Locale to load.

        Returns:
            The locale's bundle, or the fallback bundle if the locale failed.

        Raises:
            TranslationLoadError: If the locale and the fallback both fail.
        """
        try:
            return await self._load_once(locale)
        except TranslationLoadError as e:
            logger.error("translations_load_failed", locale=locale, error=str(e))
            if locale == self.fallback_locale:
                raise
            logger.info("trying_fallback_translations", locale=locale, fallback=self.fallback_locale)
            return await self._load_once(self.fallback_locale)

    async def _load_once(self, locale: str) -> TranslationBundle:
        task = self._loading.get(locale)
        if task is None:
            cached = self.cache.get(locale)
            if cached is not None:
                logger.info("translations_loaded_from_cache", locale=locale)
                self.bundles[locale] = cached
                return cached

            task = asyncio.ensure_future(self._fetch(locale))
            self._loading[locale] = task
            task.add_done_callback(lambda _t: self._loading.pop(locale, None))
        return await asyncio.shield(task)

    async def _fetch(self, locale: str) -> TranslationBundle:
        try:
            bundle = await self.loader.load(locale)
        except TranslationLoadError:
            raise
        except Exception as e:
            raise TranslationLoadError(locale, str(e)) from e

        self.bundles[locale] = bundle
        self.cache.set(bundle)
        logger.info("translations_loaded", locale=locale, version=bundle.version)
        return bundle

    def _lookup(self, key: str, locale: str) -> Optional[str]:
        bundle = self.bundles.get(locale)
        if bundle is not None:
            message = bundle.get_message(key)
            if message is not None:
                return message
        else:
            logger.debug("translations_not_loaded", locale=locale)

        if locale != self.fallback_locale:
            fallback = self.bundles.get(self.fallback_locale)
            message = fallback.get_message(key) if fallback else None
            if message is not None:
                logger.debug(
                    "used_fallback_translation",
                    key=key,
                    requested_locale=locale,
                    fallback_locale=self.fallback_locale,
                )
                return message
        return None

    def translate(
        self,
        key: str,
        params: Optional[Dict[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Retrieve and interpolate a translated message.

        Args:
            key: Dotted key (e.g., "nav.home").
            params: Values for ``{{name}}`` placeholders.
            locale: Locale to translate to (default: the active locale).

        Returns:
            The translation, or the key itself if neither the locale nor the
            fallback locale has a string for it.
        """
        locale = locale or self.current_locale
        message = self._lookup(key, locale)
        if message is None:
            logger.warning("translation_not_found", key=key, locale=locale)
            return key
        return interpolate(message, params)

    t = translate

    def translate_plural(
        self,
        key: str,
        count: int,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Translate a count-dependent message.

        Uses ``key.zero``, ``key.one`` or ``key.other`` and makes ``count``
        available to the message as ``{{count}}``.
        """
        merged = dict(params or {})
        merged["count"] = count
        return self.translate(plural_key(key, count), merged)

    def has_key(self, key: str, locale: Optional[str] = None) -> bool:
        """Check if the locale's own bundle has a string for key."""
        bundle = self.bundles.get(locale or self.current_locale)
        return bundle.has_message(key) if bundle else False

    def is_loaded(self, locale: str) -> bool:
        return locale in self.bundles

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("cleared_translation_cache")

    def apply_to_document(self, locale: Optional[str] = None) -> int:
        """Translate the page's annotated elements.

        Args:
            locale: Locale to render (default: the active locale).

        Returns:
            Number of elements translated.
        """
        locale = locale or self.current_locale
        translator = DocumentTranslator(
            self.context.document,
            lambda key, params: self.translate(key, params, locale),
        )
        return translator.apply()

    async def _warm_fallback(self) -> None:
        try:
            await self._load_once(self.fallback_locale)
        except TranslationLoadError as e:
            logger.warning("fallback_translations_unavailable", error=str(e))

    async def init(self, locale: Optional[str] = None) -> TranslationBundle:
        """Load the initial locale, translate the page and publish ``i18n.ready``.

        Raises:
            TranslationLoadError: If neither the locale nor the fallback loads.
        """
        locale = locale or self.current_locale
        bundle = await self.load_translations(locale)

        if locale != self.fallback_locale:
            await self._warm_fallback()

        self.active_locale = locale
        count = self.apply_to_document(locale)
        await self.context.bus.emit(
            EventType.I18N_READY, locale=locale, translated_elements=count
        )
        logger.info("i18n_initialized", locale=locale)
        return bundle

    async def activate(self, locale: str) -> int:
        """Make a locale's translations current and re-translate the page.

        The active locale itself is owned by the detector; this only makes
        sure its bundle is loaded and the page reflects it.

        Returns:
            Number of elements translated.

        Raises:
            TranslationLoadError: If neither the locale nor the fallback loads.
        """
        old_locale = self.active_locale
        if not self.is_loaded(locale):
            await self.load_translations(locale)

        self.active_locale = locale
        count = self.apply_to_document(locale)
        await self.context.bus.emit(
            EventType.I18N_CHANGED, locale=locale, old_locale=old_locale
        )
        logger.info("i18n_changed", locale=locale, old_locale=old_locale)
        return count
