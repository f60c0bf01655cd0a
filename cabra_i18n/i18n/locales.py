"""Locale registry: the supported locales and how other tags map onto them."""

from types import MappingProxyType
from typing import List, Mapping, Optional

from cabra_i18n.i18n.models import Direction, LocaleInfo, Script

DEFAULT_LOCALE = "pt-BR"
FALLBACK_LOCALE = "en"

LOCALES: Mapping[str, LocaleInfo] = MappingProxyType(
    {
        "pt-BR": LocaleInfo(
            code="pt-BR",
            name="Portuguese (Brazil)",
            native_name="Português (Brasil)",
            direction=Direction.LTR,
            flag="🇧🇷",
            script=Script.LATIN,
            date_format="DD/MM/YYYY",
            time_format="HH:mm",
            currency="BRL",
            currency_symbol="R$",
            decimal_separator=",",
            thousands_separator=".",
        ),
        "en": LocaleInfo(
            code="en",
            name="English",
            native_name="English (US)",
            direction=Direction.LTR,
            flag="🇺🇸",
            script=Script.LATIN,
            date_format="MM/DD/YYYY",
            time_format="hh:mm A",
            currency="USD",
            currency_symbol="$",
            decimal_separator=".",
            thousands_separator=",",
        ),
        "es": LocaleInfo(
            code="es",
            name="Spanish",
            native_name="Español",
            direction=Direction.LTR,
            flag="🇪🇸",
            script=Script.LATIN,
            date_format="DD/MM/YYYY",
            time_format="HH:mm",
            currency="EUR",
            currency_symbol="€",
            decimal_separator=",",
            thousands_separator=".",
        ),
        "ar": LocaleInfo(
            code="ar",
            name="Arabic",
            native_name="العربية",
            direction=Direction.RTL,
            flag="🇸🇦",
            script=Script.ARABIC,
            date_format="DD/MM/YYYY",
            time_format="HH:mm",
            currency="SAR",
            currency_symbol="ر.س",
            decimal_separator=".",
            thousands_separator=",",
        ),
        "hi": LocaleInfo(
            code="hi",
            name="Hindi",
            native_name="हिन्दी",
            direction=Direction.LTR,
            flag="🇮🇳",
            script=Script.DEVANAGARI,
            date_format="DD/MM/YYYY",
            time_format="HH:mm",
            currency="INR",
            currency_symbol="₹",
            decimal_separator=".",
            thousands_separator=",",
        ),
        "ja": LocaleInfo(
            code="ja",
            name="Japanese",
            native_name="日本語",
            direction=Direction.LTR,
            flag="🇯🇵",
            script=Script.JAPANESE,
            date_format="YYYY/MM/DD",
            time_format="HH:mm",
            currency="JPY",
            currency_symbol="¥",
            decimal_separator=".",
            thousands_separator=",",
        ),
        "ru": LocaleInfo(
            code="ru",
            name="Russian",
            native_name="Русский",
            direction=Direction.LTR,
            flag="🇷🇺",
            script=Script.CYRILLIC,
            date_format="DD.MM.YYYY",
            time_format="HH:mm",
            currency="RUB",
            currency_symbol="₽",
            decimal_separator=",",
            thousands_separator=" ",
        ),
    }
)

SUPPORTED_LOCALES: tuple = tuple(LOCALES.keys())

# Tags that are not supported themselves but have a supported stand-in
LOCALE_FALLBACKS: Mapping[str, str] = MappingProxyType(
    {
        "pt": "pt-BR",
        "pt-PT": "pt-BR",
        "en-US": "en",
        "en-GB": "en",
        "es-ES": "es",
        "es-MX": "es",
        "ar-SA": "ar",
        "ar-EG": "ar",
        "hi-IN": "hi",
        "ja-JP": "ja",
        "ru-RU": "ru",
        "zh": "en",
        "fr": "en",
        "de": "en",
    }
)


def is_supported(locale: Optional[str]) -> bool:
    return locale in LOCALES


def get_locale_info(locale: Optional[str], default: str = DEFAULT_LOCALE) -> LocaleInfo:
    """Get reference data for a locale, or the default locale's for unknown codes."""
    if locale in LOCALES:
        return LOCALES[locale]
    return LOCALES[default]


def get_supported_locales() -> List[LocaleInfo]:
    return list(LOCALES.values())
