"""Font catalogue: web fonts, system fallbacks and per-locale preferences."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from cabra_i18n.i18n.locales import LOCALES
from cabra_i18n.i18n.models import Script


@dataclass(frozen=True)
class WebFont:
    """A font served by a stylesheet URL.

    Attributes:
        family: CSS font-family name.
        url: Stylesheet declaring the @font-face rules.
        script: Writing system the font covers.
        weights: Weights requested from the stylesheet.
        serif: Whether the face is a serif.
    """

    family: str
    url: str
    script: Script
    weights: Tuple[int, ...]
    serif: bool = False


def google_fonts_url(family: str, weights: Tuple[int, ...]) -> str:
    """Build a Google Fonts css2 URL for a family and weights."""
    encoded = family.replace(" ", "+")
    wght = ";".join(str(w) for w in weights)
    return f"https://fonts.googleapis.com/css2?family={encoded}:wght@{wght}&display=swap"


def _web_font(family: str, script: Script, weights: Tuple[int, ...], serif: bool = False) -> WebFont:
    return WebFont(
        family=family,
        url=google_fonts_url(family, weights),
        script=script,
        weights=weights,
        serif=serif,
    )


SYSTEM_FONTS: Mapping[Script, Tuple[str, ...]] = MappingProxyType(
    {
        Script.LATIN: ("Segoe UI", "Roboto", "Arial", "sans-serif"),
        Script.ARABIC: ("Arial", "Tahoma", "sans-serif"),
        Script.DEVANAGARI: ("Mangal", "Noto Sans Devanagari", "sans-serif"),
        Script.JAPANESE: ("Yu Gothic", "Meiryo", "MS PGothic", "sans-serif"),
        Script.CYRILLIC: ("Arial", "Tahoma", "sans-serif"),
    }
)

WEB_FONTS: Mapping[str, WebFont] = MappingProxyType(
    {
        "Noto Sans Arabic": _web_font("Noto Sans Arabic", Script.ARABIC, (400, 600, 700)),
        "Noto Sans Devanagari": _web_font("Noto Sans Devanagari", Script.DEVANAGARI, (400, 600, 700)),
        "Noto Sans JP": _web_font("Noto Sans JP", Script.JAPANESE, (400, 600, 700)),
        "Amiri": _web_font("Amiri", Script.ARABIC, (400, 700), serif=True),
        "Roboto": _web_font("Roboto", Script.LATIN, (400, 500, 700)),
    }
)

LOCALE_SCRIPTS: Mapping[str, Script] = MappingProxyType(
    {code: info.script for code, info in LOCALES.items()}
)

PREFERRED_FONTS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "pt-BR": ("Roboto", "Segoe UI"),
        "en": ("Roboto", "Segoe UI"),
        "es": ("Roboto", "Segoe UI"),
        "ar": ("Amiri", "Noto Sans Arabic"),
        "hi": ("Noto Sans Devanagari",),
        "ja": ("Noto Sans JP",),
        "ru": ("Roboto",),
    }
)

DEFAULT_PREFERRED_FONTS: Tuple[str, ...] = ("Roboto",)
