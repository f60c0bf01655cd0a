"""Per-locale web font loading.

Injects the stylesheet link for each web font a locale prefers, confirms
the stylesheet really declares the face, and writes the resulting
font-family stack on the document root.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from bs4 import Tag

from cabra_i18n.clients.http import HttpClient
from cabra_i18n.context import I18nContext
from cabra_i18n.errors import FontLoadError
from cabra_i18n.events import EventType
from cabra_i18n.fonts.config import (
    DEFAULT_PREFERRED_FONTS,
    LOCALE_SCRIPTS,
    PREFERRED_FONTS,
    SYSTEM_FONTS,
    WEB_FONTS,
    WebFont,
)
from cabra_i18n.i18n.models import Script
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()


@runtime_checkable
class StylesheetFetcher(Protocol):
    """Anything that can download a stylesheet body."""

    async def fetch_text(self, url: str) -> str:  # pragma: no cover - typing helper
        ...


def declares_font_face(stylesheet: str, family: str) -> bool:
    """Check that a stylesheet has an @font-face rule for the family."""
    pattern = re.compile(
        r"@font-face\s*\{[^}]*font-family\s*:\s*['\"]?"
        + re.escape(family)
        + r"['\"]?\s*[;}]",
        re.IGNORECASE,
    )
    return bool(pattern.search(stylesheet))


class FontLoader:
    """Loads web fonts on demand and applies per-locale font stacks.

    Attributes:
        context: Shared i18n context; confirmed fonts go in
            ``context.loaded_fonts``.
        fetcher: StylesheetFetcher used to download font stylesheets.
        timeout: Seconds allowed for one font's fetch and confirmation.
    """

    def __init__(
        self,
        context: I18nContext,
        fetcher: Optional[StylesheetFetcher] = None,
        timeout: Optional[float] = None,
    ):
        self.context = context
        font_settings = context.settings.fonts
        self.timeout = timeout if timeout is not None else font_settings.load_timeout_seconds
        self.fetcher = fetcher or HttpClient(timeout=self.timeout)
        self.essential_fonts: List[str] = list(font_settings.essential_fonts)
        self.current_locale: Optional[str] = None
        self._loading: Dict[str, asyncio.Task] = {}
        self._background: List[asyncio.Task] = []

    def get_script_for_locale(self, locale: str) -> Script:
        return LOCALE_SCRIPTS.get(locale, Script.LATIN)

    def get_preferred_fonts(self, locale: str) -> List[str]:
        return list(PREFERRED_FONTS.get(locale, DEFAULT_PREFERRED_FONTS))

    def get_system_fallbacks(self, script: Script) -> List[str]:
        return list(SYSTEM_FONTS.get(script, SYSTEM_FONTS[Script.LATIN]))

    def is_font_loaded(self, family: str) -> bool:
        return family in self.context.loaded_fonts

    def _find_link(self, url: str) -> Optional[Tag]:
        return self.context.document.soup.find("link", attrs={"href": url})

    def _inject_link(self, font: WebFont) -> Optional[Tag]:
        """Add the stylesheet link to head.

        Returns:
            The new link, or None if the page already had one for the URL.
        """
        if self._find_link(font.url) is not None:
            logger.debug("font_link_exists", family=font.family)
            return None

        document = self.context.document
        link = document.create_element(
            "link", rel="stylesheet", href=font.url, data_font_family=font.family
        )
        document.append_child(document.head, link)
        return link

    async def _confirm(self, font: WebFont) -> None:
        stylesheet = await self.fetcher.fetch_text(font.url)
        if not declares_font_face(stylesheet, font.family):
            raise FontLoadError(font.family, "stylesheet declares no matching @font-face")

    async def _load(self, font: WebFont) -> bool:
        link = self._inject_link(font)
        try:
            await asyncio.wait_for(self._confirm(font), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("font_load_timeout", family=font.family, timeout=self.timeout)
        except Exception as e:
            logger.error("font_load_failed", family=font.family, error=str(e))
        else:
            self.context.loaded_fonts.add(font.family)
            logger.info("font_loaded", family=font.family)
            return True

        if link is not None:
            link.decompose()
        return False

    async def load_font(self, family: str) -> bool:
        """Load one web font.

        Concurrent calls for the same family share a single load.

        Returns:
            True if the font is (now) loaded, False if it is unknown or
            failed. Never raises.
        """
        if self.is_font_loaded(family):
            return True

        task = self._loading.get(family)
        if task is None:
            font = WEB_FONTS.get(family)
            if font is None:
                logger.debug("font_not_configured", family=family)
                return False

            task = asyncio.ensure_future(self._load(font))
            self._loading[family] = task
            task.add_done_callback(lambda _t: self._loading.pop(family, None))

        return await asyncio.shield(task)

    async def load_fonts(self, families: List[str]) -> List[Any]:
        """Load several fonts in parallel.

        Returns:
            One entry per family: the boolean result, or the exception raised.
        """
        if not families:
            return []

        results = await asyncio.gather(
            *(self.load_font(name) for name in families), return_exceptions=True
        )
        loaded = sum(1 for r in results if r is True)
        logger.info("fonts_batch_loaded", requested=len(families), loaded=loaded)
        return results

    async def load_fonts_for_locale(self, locale: str) -> bool:
        """Load a locale's preferred fonts, then apply its font stack."""
        self.current_locale = locale
        await self.load_fonts(self.get_preferred_fonts(locale))
        await self.apply_fonts(locale)
        return True

    def build_font_stack(self, locale: str) -> List[str]:
        """Loaded preferred web fonts followed by the script's system fonts."""
        loaded = [f for f in self.get_preferred_fonts(locale) if self.is_font_loaded(f)]
        fallbacks = self.get_system_fallbacks(self.get_script_for_locale(locale))
        return loaded + fallbacks

    async def apply_fonts(self, locale: str) -> str:
        """Write the locale's font stack on the root and publish ``fonts.loaded``.

        Returns:
            The font-family value applied.
        """
        loaded = [f for f in self.get_preferred_fonts(locale) if self.is_font_loaded(f)]
        font_stack = ", ".join(self.build_font_stack(locale))

        document = self.context.document
        document.set_style(document.root, "font-family", font_stack)

        logger.info("fonts_applied", locale=locale, font_stack=font_stack)
        await self.context.bus.emit(
            EventType.FONTS_LOADED,
            locale=locale,
            fonts=loaded,
            font_stack=font_stack,
        )
        return font_stack

    async def preload_essential_fonts(self) -> List[Any]:
        return await self.load_fonts(self.essential_fonts)

    def get_font_info(self) -> Dict[str, Any]:
        locale = self.current_locale or self.context.locale
        return {
            "loaded": sorted(self.context.loaded_fonts),
            "current_locale": locale,
            "current_script": self.get_script_for_locale(locale).value,
            "available": list(WEB_FONTS.keys()),
        }

    def clear_cache(self) -> None:
        """Forget which fonts are loaded (links stay in the page)."""
        self.context.loaded_fonts.clear()
        logger.info("cleared_font_cache")

    async def init(self, locale: Optional[str] = None) -> bool:
        """Start essential fonts in the background and load the locale's fonts."""
        locale = locale or self.context.locale
        self._background.append(asyncio.ensure_future(self.preload_essential_fonts()))
        return await self.load_fonts_for_locale(locale)

    async def wait_background(self) -> None:
        """Wait for background preloads started by init()."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
            self._background.clear()
