"""Locale and translation models.

Defines the reference data describing each supported locale and the
translation bundle loaded for it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class Direction(str, Enum):
    """Text direction of a locale."""

    LTR = "ltr"
    RTL = "rtl"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Convert string to Direction.

        Raises:
            ValueError: If value is neither "ltr" nor "rtl".
        """
        try:
            return cls(value.lower())
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid direction: {value}") from e


class Script(str, Enum):
    """Writing system families that need their own fonts."""

    LATIN = "latin"
    ARABIC = "arabic"
    DEVANAGARI = "devanagari"
    JAPANESE = "japanese"
    CYRILLIC = "cyrillic"


@dataclass(frozen=True)
class LocaleInfo:
    """Reference data for a supported locale.

    Attributes:
        code: BCP 47 tag (e.g., "pt-BR", "ar").
        name: English display name.
        native_name: Name of the language in itself.
        direction: Text direction.
        flag: Flag emoji shown in the selector.
        script: Writing system used for font selection.
        date_format: Display pattern for dates (e.g., "DD/MM/YYYY").
        time_format: Display pattern for times (e.g., "HH:mm").
        currency: ISO 4217 code used by default for money.
        currency_symbol: Symbol for the default currency.
        decimal_separator: Decimal mark.
        thousands_separator: Digit group separator.
    """

    code: str
    name: str
    native_name: str
    direction: Direction
    flag: str
    script: Script
    date_format: str
    time_format: str
    currency: str
    currency_symbol: str
    decimal_separator: str
    thousands_separator: str

    @property
    def language(self) -> str:
        """Language subtag (e.g., "pt" from "pt-BR")."""
        return self.code.split("-")[0]

    @property
    def is_rtl(self) -> bool:
        return self.direction == Direction.RTL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "nativeName": self.native_name,
            "dir": self.direction.value,
            "flag": self.flag,
            "script": self.script.value,
            "dateFormat": self.date_format,
            "timeFormat": self.time_format,
            "currency": self.currency,
            "currencySymbol": self.currency_symbol,
            "decimalSeparator": self.decimal_separator,
            "thousandsSeparator": self.thousands_separator,
        }


MISSING = object()


def lookup_path(tree: Dict[str, Any], key: str) -> Any:
    """Walk a dot-separated key through nested dicts.

    Returns:
        The value found, or the ``MISSING`` sentinel when any segment is
        absent or a non-dict is reached before the last segment.
    """
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return MISSING
        node = node[part]
    return node


@dataclass
class TranslationBundle:
    """Translations for one locale plus the metadata shipped with them.

    Attributes:
        locale: Locale code the bundle belongs to.
        translations: Nested dict {section: {key: message | subtree}}.
        language: English language name from the bundle header.
        native_name: Native language name from the bundle header.
        direction: Direction declared by the bundle ("ltr"/"rtl").
        version: Bundle version string.
        loaded_at: Timestamp (ISO 8601) when the bundle was loaded.
    """

    locale: str
    translations: Dict[str, Any] = field(default_factory=dict)
    language: Optional[str] = None
    native_name: Optional[str] = None
    direction: Optional[str] = None
    version: Optional[str] = None
    loaded_at: Optional[str] = None

    @classmethod
    def from_document(cls, locale: str, data: Any) -> "TranslationBundle":
        """Build a bundle from a decoded bundle file.

        A document with a ``translations`` object is read as header plus
        envelope; any other mapping is taken as the bare translation tree.

        Raises:
            ValueError: If the document is not a mapping.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Bundle for {locale} must be an object, got {type(data).__name__}")

        loaded_at = datetime.now(timezone.utc).isoformat()
        translations = data.get("translations")
        if not isinstance(translations, dict):
            return cls(locale=locale, translations=data, loaded_at=loaded_at)

        return cls(
            locale=locale,
            translations=translations,
            language=data.get("language"),
            native_name=data.get("nativeName"),
            direction=data.get("direction"),
            version=data.get("version"),
            loaded_at=loaded_at,
        )

    def to_document(self) -> Dict[str, Any]:
        """Serialize back to the on-disk bundle shape."""
        document: Dict[str, Any] = {"locale": self.locale}
        if self.language is not None:
            document["language"] = self.language
        if self.native_name is not None:
            document["nativeName"] = self.native_name
        if self.direction is not None:
            document["direction"] = self.direction
        if self.version is not None:
            document["version"] = self.version
        document["translations"] = self.translations
        return document

    def get_message(self, key: str) -> Optional[str]:
        """Retrieve a message by dotted key.

        Returns:
            The message string, or None if the key is absent or points to a
            subtree or a non-string value.
        """
        value = lookup_path(self.translations, key)
        if isinstance(value, str):
            return value
        return None

    def has_message(self, key: str) -> bool:
        return self.get_message(key) is not None

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get the subtree stored under a top-level key."""
        value = self.translations.get(section, {})
        return value if isinstance(value, dict) else {}
