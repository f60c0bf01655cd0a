"""Internationalization (i18n) core.

Provides locale detection, translation loading and lookup, and page
rewriting for the ``data-i18n`` attributes.

Public API:
    - LocaleDetector: resolve, apply and persist the page locale
    - Translator: load bundles and translate keys
    - TranslationLoader, FileTranslationLoader, HttpTranslationLoader
    - TranslationBundle, LocaleInfo, Direction, Script: models
    - BundleValidator, validate_directory: bundle consistency checks
"""

from cabra_i18n.i18n.locales import (
    DEFAULT_LOCALE,
    FALLBACK_LOCALE,
    LOCALE_FALLBACKS,
    LOCALES,
    SUPPORTED_LOCALES,
)
from cabra_i18n.i18n.models import Direction, LocaleInfo, Script, TranslationBundle
from cabra_i18n.i18n.detector import LocaleDetector, normalize_locale, parse_accept_language
from cabra_i18n.i18n.loader import (
    FileTranslationLoader,
    HttpTranslationLoader,
    TranslationLoader,
)
from cabra_i18n.i18n.cache import TranslationCache
from cabra_i18n.i18n.translator import Translator
from cabra_i18n.i18n.validation import BundleValidator, ValidationReport, validate_directory

__all__ = [
    "DEFAULT_LOCALE",
    "FALLBACK_LOCALE",
    "LOCALE_FALLBACKS",
    "LOCALES",
    "SUPPORTED_LOCALES",
    "Direction",
    "LocaleInfo",
    "Script",
    "TranslationBundle",
    "LocaleDetector",
    "normalize_locale",
    "parse_accept_language",
    "TranslationLoader",
    "FileTranslationLoader",
    "HttpTranslationLoader",
    "TranslationCache",
    "Translator",
    "BundleValidator",
    "ValidationReport",
    "validate_directory",
]
