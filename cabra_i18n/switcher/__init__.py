"""Language switcher and its collaborator interfaces.

Public API:
    - LanguageSwitcher: runs a language change end to end
    - LiveRegionAnnouncer: screen-reader announcements
    - LocaleToggledWidget, sign_language_widget: per-locale widgets
    - FontCapability, DirectionCapability, FormatterCapability,
      LocaleWidget, Announcer: collaborator protocols
"""

from cabra_i18n.switcher.announcer import ANNOUNCER_ID, LiveRegionAnnouncer
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
from cabra_i18n.switcher.switcher import SELECT_ID, LanguageSwitcher, SwitcherState
from cabra_i18n.switcher.widgets import LocaleToggledWidget, sign_language_widget

__all__ = [
    "ANNOUNCER_ID",
    "LiveRegionAnnouncer",
    "Announcer",
    "DirectionCapability",
    "FontCapability",
    "FormatterCapability",
    "LocaleWidget",
    "NullAnnouncer",
    "NullDirectionCapability",
    "NullFontCapability",
    "NullFormatterCapability",
    "change_announcement",
    "error_announcement",
    "SELECT_ID",
    "LanguageSwitcher",
    "SwitcherState",
    "LocaleToggledWidget",
    "sign_language_widget",
]
