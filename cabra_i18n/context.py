"""Shared state for one page's i18n components.

Every component receives the same I18nContext instead of reaching for
module globals. Only the locale detector writes ``current_locale``.
"""

from dataclasses import dataclass, field
from typing import Optional, Set

from cabra_i18n.configuration import Settings, settings as default_settings
from cabra_i18n.document import HtmlDocument
from cabra_i18n.events import EventBus
from cabra_i18n.storage import InMemoryStorage, KeyValueStorage


@dataclass
class I18nContext:
    """Collaborators and mutable state shared by the i18n components.

    Attributes:
        settings: Configuration in effect.
        document: Page being localized.
        storage: Persisted key-value store.
        bus: Event bus the components publish to.
        current_locale: Active locale, set by the detector.
        loaded_fonts: Font families confirmed loaded during this process.
    """

    settings: Settings = field(default_factory=lambda: default_settings)
    document: HtmlDocument = field(default_factory=HtmlDocument.parse)
    storage: KeyValueStorage = field(default_factory=InMemoryStorage)
    bus: EventBus = field(default_factory=EventBus)
    current_locale: Optional[str] = None
    loaded_fonts: Set[str] = field(default_factory=set)

    @property
    def default_locale(self) -> str:
        return self.settings.locale.default_locale

    @property
    def fallback_locale(self) -> str:
        return self.settings.locale.fallback_locale

    @property
    def locale(self) -> str:
        """Active locale, or the default before detection has run."""
        return self.current_locale or self.default_locale
