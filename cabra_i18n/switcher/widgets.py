"""Page widgets whose visibility depends on the locale."""

from typing import Iterable, Optional

from cabra_i18n.document import HtmlDocument
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()


class LocaleToggledWidget:
    """Enables the elements matching a selector for some locales only.

    Attributes:
        document: Page holding the widget.
        selector: CSS selector of the widget elements.
        locales: Locales for which the widget is enabled.
        enabled_class: Class added while enabled.
    """

    def __init__(
        self,
        document: HtmlDocument,
        selector: str,
        locales: Iterable[str],
        enabled_class: str = "enabled",
    ):
        self.document = document
        self.selector = selector
        self.locales = frozenset(locales)
        self.enabled_class = enabled_class

    def is_enabled_for(self, locale: str) -> bool:
        return locale in self.locales

    def update(self, locale: str) -> None:
        enabled = self.is_enabled_for(locale)
        elements = self.document.select(self.selector)
        for element in elements:
            self.document.toggle_class(element, self.enabled_class, enabled)
        if elements:
            logger.debug("widget_updated", selector=self.selector, locale=locale, enabled=enabled)


def sign_language_widget(
    document: HtmlDocument, locale: Optional[str] = "pt-BR"
) -> LocaleToggledWidget:
    """VLibras (Brazilian Sign Language) widget, which only serves pt-BR."""
    return LocaleToggledWidget(document, "[vw]", [locale] if locale else [])
