"""Configuration module - public API.

Centralized configuration for cabra-i18n using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    LocaleSettings, TranslationSettings, FontSettings, StorageSettings:
        Section classes (for testing/overrides)
"""

from cabra_i18n.configuration.sections import (
    FontSettings,
    LocaleSettings,
    StorageSettings,
    TranslationSettings,
)
from cabra_i18n.configuration.settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
    "LocaleSettings",
    "TranslationSettings",
    "FontSettings",
    "StorageSettings",
]
