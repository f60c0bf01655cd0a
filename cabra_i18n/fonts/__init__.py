"""Web font loading per locale and script."""

from cabra_i18n.fonts.config import (
    PREFERRED_FONTS,
    SYSTEM_FONTS,
    WEB_FONTS,
    WebFont,
)
from cabra_i18n.fonts.loader import FontLoader, StylesheetFetcher, declares_font_face

__all__ = [
    "FontLoader",
    "StylesheetFetcher",
    "WebFont",
    "WEB_FONTS",
    "SYSTEM_FONTS",
    "PREFERRED_FONTS",
    "declares_font_face",
]
