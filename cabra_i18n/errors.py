"""Custom exceptions for the i18n system.

Every failure raised by this package inherits from I18nError so callers can
degrade gracefully with a single except clause.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            await translator.load_translations("ar")
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class TranslationLoadError(I18nError):
    """Raised when a translation bundle cannot be fetched or parsed.

    Attributes:
        locale: Locale whose bundle failed to load.
    """

    def __init__(self, locale: str, message: str):
        self.locale = locale
        super().__init__(f"Failed to load translations for {locale}: {message}")


class FontLoadError(I18nError):
    """Raised when a web font stylesheet cannot be loaded or confirmed."""

    def __init__(self, family: str, message: str):
        self.family = family
        super().__init__(f"Failed to load font {family}: {message}")


class StorageError(I18nError):
    """Raised when the key-value storage is unavailable or corrupt.

    Mirrors a browser with disabled localStorage: callers treat it as
    "no saved value" and move on.
    """

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class UnsupportedLocaleError(I18nError):
    """Raised when a locale code is not in the supported set."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Unsupported locale: {locale}")
