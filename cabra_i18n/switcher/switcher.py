"""Language switcher: coordinates a user-initiated locale change.

A change runs these steps strictly in order:

1. persist and apply the new locale (detector)
2. load the locale's fonts
3. load its translations and re-translate the page
4. update the layout direction
5. update locale-aware formatters
6. update locale-dependent widgets
7. announce the change to screen readers
8. publish ``language.changed``

Only one change runs at a time. A request made while another is in
progress is rejected, not queued. If a step fails, the selector goes back
to the previous locale and an error is announced; steps already completed
are not rolled back.
"""

from enum import Enum
from typing import List, Optional, Sequence

from bs4 import Tag

from cabra_i18n.context import I18nContext
from cabra_i18n.errors import UnsupportedLocaleError
from cabra_i18n.events import EventType
from cabra_i18n.i18n.detector import LocaleDetector
from cabra_i18n.i18n.translator import Translator
from cabra_i18n.logging import bind_change_context, get_module_logger
from cabra_i18n.switcher.capabilities import (
    Announcer,
    DirectionCapability,
    FontCapability,
    FormatterCapability,
    LocaleWidget,
    NullAnnouncer,
    NullDirectionCapability,
    NullFontCapability,
    NullFormatterCapability,
)
from cabra_i18n.switcher.messages import change_announcement, error_announcement

logger = get_module_logger()

SELECT_ID = "select-language"


class SwitcherState(str, Enum):
    IDLE = "idle"
    CHANGING = "changing"


class LanguageSwitcher:
    """Drives the page's language selector.

    Attributes:
        context: Shared i18n context.
        detector: Owner of the active locale.
        translator: Translation store.
        fonts: Font capability (null object when the page has none).
        direction: Direction capability.
        formatter: Formatter capability.
        widgets: Locale-dependent widgets updated on every change.
        announcer: Live-region announcer.
        state: IDLE or CHANGING.
    """

    def __init__(
        self,
        context: I18nContext,
        detector: LocaleDetector,
        translator: Translator,
        fonts: Optional[FontCapability] = None,
        direction: Optional[DirectionCapability] = None,
        formatter: Optional[FormatterCapability] = None,
        widgets: Optional[Sequence[LocaleWidget]] = None,
        announcer: Optional[Announcer] = None,
        select_id: str = SELECT_ID,
    ):
        self.context = context
        self.detector = detector
        self.translator = translator
        self.fonts: FontCapability = fonts or NullFontCapability()
        self.direction: DirectionCapability = direction or NullDirectionCapability()
        self.formatter: FormatterCapability = formatter or NullFormatterCapability()
        self.widgets: List[LocaleWidget] = list(widgets or [])
        self.announcer: Announcer = announcer or NullAnnouncer()
        self.select_id = select_id
        self.state = SwitcherState.IDLE

    @property
    def is_changing(self) -> bool:
        return self.state == SwitcherState.CHANGING

    @property
    def select(self) -> Optional[Tag]:
        return self.context.document.get_element_by_id(self.select_id)

    def get_selected_locale(self) -> Optional[str]:
        select = self.select
        if select is None:
            return None
        option = select.find("option", selected=True) or select.find("option")
        return option.get("value") if option is not None else None

    def set_selected_locale(self, locale: str) -> None:
        """Mark the option for ``locale`` as the selected one."""
        select = self.select
        if select is None:
            return
        for option in select.find_all("option"):
            if option.get("value") == locale:
                option["selected"] = "selected"
            elif option.has_attr("selected"):
                del option["selected"]

    def _set_busy(self, busy: bool) -> None:
        select = self.select
        if select is None:
            return
        if busy:
            select["disabled"] = "disabled"
            select["aria-busy"] = "true"
        else:
            for name in ("disabled", "aria-busy"):
                if select.has_attr(name):
                    del select[name]

    def setup(self) -> None:
        """Sync the selector and widgets with the locale already active."""
        locale = self.context.locale
        self.set_selected_locale(locale)
        for widget in self.widgets:
            widget.update(locale)
        logger.info("language_switcher_ready", locale=locale)

    async def change_language(self, locale: str) -> bool:
        """Switch the page to another locale.

        Args:
            locale: Requested locale code.

        Returns:
            True if the page now shows ``locale``. False if another change
            was in progress or a step failed.
        """
        if self.is_changing:
            logger.warning("language_change_rejected", locale=locale, reason="change_in_progress")
            return False

        previous = self.context.locale
        if locale == previous:
            logger.debug("language_unchanged", locale=locale)
            self.set_selected_locale(locale)
            return True

        self.state = SwitcherState.CHANGING
        self._set_busy(True)
        with bind_change_context(from_locale=previous, to_locale=locale) as change_id:
            logger.info("language_change_started")
            try:
                await self._run_steps(locale, previous, change_id)
            except Exception as e:
                logger.exception("language_change_failed", error=str(e))
                self.set_selected_locale(previous)
                self.announcer.announce(error_announcement(previous), previous)
                return False
            else:
                logger.info("language_change_completed")
                return True
            finally:
                self._set_busy(False)
                self.state = SwitcherState.IDLE

    async def _run_steps(self, locale: str, previous: str, change_id: str) -> None:
        if not self.detector.is_supported(locale):
            raise UnsupportedLocaleError(locale)

        await self.detector.set_locale(locale)
        await self.fonts.load_fonts_for_locale(locale)
        await self.translator.activate(locale)
        await self.direction.set_direction(self.direction.get_direction(locale))
        self.formatter.set_locale(locale)
        for widget in self.widgets:
            widget.update(locale)

        self.set_selected_locale(locale)
        self.announcer.announce(change_announcement(locale), locale)
        await self.context.bus.emit(
            EventType.LANGUAGE_CHANGED,
            locale=locale,
            old_locale=previous,
            change_id=change_id,
        )
