"""Settings sections for locales, translations, fonts and storage."""

from typing import List, Optional

from pydantic import Field

from cabra_i18n.configuration.base import I18nSettings


class LocaleSettings(I18nSettings):
    """Locale resolution configuration.

    Environment Variables:
        DEFAULT_LOCALE: Locale used when nothing else matches (default: pt-BR)
        FALLBACK_LOCALE: Locale whose bundle backs up missing keys (default: en)
        LOCALE_STORAGE_KEY: Storage key holding the user's locale
    """

    default_locale: str = Field(
        default="pt-BR",
        alias="DEFAULT_LOCALE",
        description="Locale used when no URL, saved or browser locale matches",
    )
    fallback_locale: str = Field(
        default="en",
        alias="FALLBACK_LOCALE",
        description="Locale retried when a bundle or key is missing",
    )
    storage_key: str = Field(
        default="cabradatech_locale",
        alias="LOCALE_STORAGE_KEY",
        description="Storage key for the persisted locale",
    )


class TranslationSettings(I18nSettings):
    """Translation bundle loading and caching configuration.

    Environment Variables:
        TRANSLATIONS_PATH: Directory holding <locale>.json bundles
        TRANSLATIONS_BASE_URL: Base URL for bundles served over HTTP (optional)
        CACHE_EXPIRATION_SECONDS: Time-to-live of cached bundles (default: 1h)
        TRANSLATION_CACHE_STORAGE_KEY: Storage key for the raw cache blob
        TRANSLATION_HTTP_TIMEOUT_SECONDS: Timeout for HTTP bundle fetches
    """

    translations_path: str = Field(
        default="./locales",
        alias="TRANSLATIONS_PATH",
        description="Directory containing translation bundle files",
    )
    translations_base_url: Optional[str] = Field(
        default=None,
        alias="TRANSLATIONS_BASE_URL",
        description="Base URL for bundles; when set, bundles are fetched over HTTP",
    )
    cache_expiration_seconds: int = Field(
        default=3600,
        alias="CACHE_EXPIRATION_SECONDS",
        description="Seconds a cached bundle stays fresh",
    )
    cache_storage_key: str = Field(
        default="cabradatech_i18n_cache",
        alias="TRANSLATION_CACHE_STORAGE_KEY",
        description="Storage key for the persisted translation cache",
    )
    http_timeout_seconds: int = Field(
        default=10,
        alias="TRANSLATION_HTTP_TIMEOUT_SECONDS",
        description="Timeout for HTTP translation fetches (seconds)",
    )


class FontSettings(I18nSettings):
    """Web font loading configuration.

    Environment Variables:
        FONT_LOAD_TIMEOUT_SECONDS: Bound on stylesheet fetch and confirmation
        ESSENTIAL_FONTS: Fonts preloaded at startup (default: ["Roboto"])
    """

    load_timeout_seconds: float = Field(
        default=10.0,
        alias="FONT_LOAD_TIMEOUT_SECONDS",
        description="Seconds to wait for a font before giving up",
    )
    essential_fonts: List[str] = Field(
        default_factory=lambda: ["Roboto"],
        alias="ESSENTIAL_FONTS",
        description="Fonts preloaded in the background at startup",
    )


class StorageSettings(I18nSettings):
    """Key-value storage configuration.

    Storage Backends:
        - memory: In-process dictionary (development, testing)
        - file: JSON file on disk, survives restarts
    """

    backend: str = Field(
        default="memory",
        alias="STORAGE_BACKEND",
        description="Storage backend: 'memory' or 'file'",
    )
    file_path: str = Field(
        default=".cabra_i18n_storage.json",
        alias="STORAGE_FILE_PATH",
        description="Path of the JSON file used by the 'file' backend",
    )
