"""Locale-aware formatting of dates, numbers, currencies and lists.

Thin layer over Babel. Babel locale objects and number patterns are cached
per (kind, locale, options), so switching locales back and forth reuses
earlier work.

Usage:
    formatter = IntlFormatter("pt-BR")
    formatter.format_currency(1234.5)        # 'R$ 1.234,50'
    formatter.set_locale("ja")
    formatter.format_date(date(2025, 1, 15))  # '2025年1月15日'
"""

import copy
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import lists as babel_lists
from babel import numbers as babel_numbers
from bs4 import Tag

from cabra_i18n.document import HtmlDocument
from cabra_i18n.i18n.locales import DEFAULT_LOCALE, LOCALES
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

DateLike = Union[date, datetime, str, int, float]

DEFAULT_CURRENCIES: Dict[str, str] = {
    code: info.currency for code, info in LOCALES.items()
}

# seconds per unit; a month is 30 days and a year 365
RELATIVE_UNITS: Tuple[Tuple[str, int], ...] = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)

FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


class IntlFormatter:
    """Formats values for the active locale.

    Attributes:
        locale: Active locale code (e.g., "pt-BR").
        document: Optional page whose ``data-format`` elements can be
            formatted in place.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        document: Optional[HtmlDocument] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.locale = locale
        self.document = document
        self._clock = clock or datetime.now
        self._cache: Dict[Tuple[Any, ...], Any] = {}

    def set_locale(self, locale: str) -> None:
        if locale != self.locale:
            self.locale = locale
            logger.info("formatter_locale_set", locale=locale)

    def get_locale(self) -> str:
        return self.locale

    def clear_cache(self) -> None:
        self._cache.clear()

    # Cached Babel objects

    def _cached(self, key: Tuple[Any, ...], factory: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]

    def _babel_locale(self) -> Locale:
        def build() -> Locale:
            try:
                return Locale.parse(self.locale, sep="-")
            except (UnknownLocaleError, ValueError) as e:
                logger.warning("unknown_babel_locale", locale=self.locale, error=str(e))
                return Locale.parse("en")

        return self._cached(("locale", self.locale), build)

    def _number_pattern(self, kind: str, fraction: Optional[Tuple[int, int]] = None):
        """Locale's decimal/percent/currency pattern with optional fraction digits."""

        def build():
            babel_locale = self._babel_locale()
            if kind == "percent":
                source = babel_locale.percent_formats[None]
            elif kind == "currency":
                source = babel_locale.currency_formats["standard"]
            else:
                source = babel_locale.decimal_formats[None]
            pattern = copy.copy(babel_numbers.parse_pattern(source))
            if fraction is not None:
                pattern.frac_prec = fraction
            return pattern

        return self._cached(("number", kind, self.locale, fraction), build)

    # Dates

    def _to_datetime(self, value: DateLike) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value)
            except (OverflowError, OSError, ValueError):
                return None
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        return None

    def _parse_date(self, value: DateLike) -> Optional[datetime]:
        parsed = self._to_datetime(value)
        if parsed is None:
            logger.warning("invalid_date", value=str(value))
        return parsed

    def format_date(self, value: Optional[DateLike], format: str = "long") -> str:
        """Format a date.

        Args:
            value: date, datetime, ISO 8601 string or epoch seconds.
            format: Babel date format ("short", "medium", "long", "full") or
                a CLDR pattern.

        Returns:
            Formatted date; "" for empty input; ``str(value)`` if invalid.
        """
        if value is None or value == "":
            return ""
        parsed = self._parse_date(value)
        if parsed is None:
            return str(value)
        return babel_dates.format_date(parsed.date(), format=format, locale=self._babel_locale())

    def format_date_short(self, value: Optional[DateLike]) -> str:
        """Numeric day, month and year in locale order (e.g., 15/01/2025)."""
        if value is None or value == "":
            return ""
        parsed = self._parse_date(value)
        if parsed is None:
            return str(value)
        return babel_dates.format_skeleton("yMd", parsed, locale=self._babel_locale())

    def format_date_long(self, value: Optional[DateLike]) -> str:
        """Date with weekday and month name."""
        return self.format_date(value, format="full")

    def format_datetime(self, value: Optional[DateLike]) -> str:
        if value is None or value == "":
            return ""
        parsed = self._parse_date(value)
        if parsed is None:
            return str(value)
        babel_locale = self._babel_locale()
        date_part = babel_dates.format_date(parsed.date(), format="medium", locale=babel_locale)
        time_part = self.format_time(parsed)
        joiner = babel_dates.get_datetime_format("medium", locale=babel_locale)
        return joiner.replace("'", "").replace("{1}", date_part).replace("{0}", time_part)

    def format_time(self, value: Optional[DateLike]) -> str:
        """Hours and minutes; 12-hour clock for English, 24-hour otherwise."""
        if value is None or value == "":
            return ""
        parsed = self._parse_date(value)
        if parsed is None:
            return str(value)
        pattern = "hh:mm a" if self.locale == "en" else "HH:mm"
        return babel_dates.format_time(parsed.time(), format=pattern, locale=self._babel_locale())

    def format_relative_time(self, value: Optional[DateLike]) -> str:
        """Describe a moment relative to now ("3 days ago", "in 2 hours").

        The unit is the largest of year, month (30 days), day, hour, minute
        and second with a magnitude of at least one.
        """
        if value is None or value == "":
            return ""
        parsed = self._parse_date(value)
        if parsed is None:
            return str(value)

        now = self._clock()
        if parsed.tzinfo is not None and now.tzinfo is None:
            now = now.astimezone(timezone.utc)
        elif parsed.tzinfo is None and now.tzinfo is not None:
            parsed = parsed.replace(tzinfo=now.tzinfo)
        diff_seconds = (parsed - now).total_seconds()

        unit, per_unit = RELATIVE_UNITS[-1]
        for candidate, seconds in RELATIVE_UNITS:
            if abs(diff_seconds) >= seconds:
                unit, per_unit = candidate, seconds
                break

        amount = int(diff_seconds / per_unit)
        return babel_dates.format_timedelta(
            timedelta(seconds=amount * per_unit),
            granularity=unit,
            threshold=math.inf,
            add_direction=True,
            locale=self._babel_locale(),
        )

    def get_month_name(self, month: int, width: str = "wide") -> str:
        """Stand-alone month name for month 1-12 ("wide" or "abbreviated")."""
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month!r}")
        names = babel_dates.get_month_names(width, context="stand-alone", locale=self._babel_locale())
        return names[month]

    def get_day_name(self, weekday: int, width: str = "wide") -> str:
        """Stand-alone weekday name, Monday being 0 as in ``date.weekday()``."""
        if not 0 <= weekday <= 6:
            raise ValueError(f"weekday must be in 0..6, got {weekday!r}")
        names = babel_dates.get_day_names(width, context="stand-alone", locale=self._babel_locale())
        return names[weekday]

    # Numbers

    @staticmethod
    def _is_number(value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not math.isnan(value)

    def format_number(self, value: Any) -> str:
        if not self._is_number(value):
            return str(value)
        return babel_numbers.format_decimal(value, locale=self._babel_locale())

    def format_integer(self, value: Any) -> str:
        if not self._is_number(value):
            return str(value)
        return self._number_pattern("decimal", (0, 0)).apply(value, self._babel_locale())

    def format_decimal(self, value: Any, decimals: int = 2) -> str:
        if not self._is_number(value):
            return str(value)
        pattern = self._number_pattern("decimal", (decimals, decimals))
        return pattern.apply(value, self._babel_locale())

    def format_percent(self, value: Any, decimals: int = 0) -> str:
        """Format a ratio as a percentage (0.15 -> 15%)."""
        if not self._is_number(value):
            return str(value)
        pattern = self._number_pattern("percent", (decimals, decimals))
        return pattern.apply(value, self._babel_locale())

    def format_compact(self, value: Any) -> str:
        """Short compact notation (1.5K, 2.3M)."""
        if not self._is_number(value):
            return str(value)
        return babel_numbers.format_compact_decimal(
            value, format_type="short", fraction_digits=1, locale=self._babel_locale()
        )

    # Currency

    def get_default_currency(self) -> str:
        return DEFAULT_CURRENCIES.get(self.locale, "USD")

    def format_currency(self, amount: Any, currency: Optional[str] = None) -> str:
        if not self._is_number(amount):
            return str(amount)
        currency = currency or self.get_default_currency()
        return babel_numbers.format_currency(amount, currency, locale=self._babel_locale())

    def format_currency_integer(self, amount: Any, currency: Optional[str] = None) -> str:
        """Currency without minor units."""
        if not self._is_number(amount):
            return str(amount)
        currency = currency or self.get_default_currency()
        pattern = self._number_pattern("currency", (0, 0))
        return pattern.apply(
            amount, self._babel_locale(), currency=currency, currency_digits=False
        )

    # Lists

    def format_list(self, items: Iterable[Any], kind: str = "and") -> str:
        """Join items with the locale's conjunction ("and") or disjunction ("or")."""
        values = [str(item) for item in items or []]
        if not values:
            return ""
        if len(values) == 1:
            return values[0]
        style = "or" if kind in ("or", "disjunction") else "standard"
        return babel_lists.format_list(values, style=style, locale=self._babel_locale())

    def format_list_and(self, items: Iterable[Any]) -> str:
        return self.format_list(items, "and")

    def format_list_or(self, items: Iterable[Any]) -> str:
        return self.format_list(items, "or")

    # Utilities

    def format_file_size(self, size: Any, decimals: int = 1) -> str:
        """Human-readable byte count on a 1024 scale."""
        if size == 0 and self._is_number(size):
            return "0 Bytes"
        if not self._is_number(size) or size < 0:
            return "-"

        index = min(int(math.floor(math.log(size, 1024))), len(FILE_SIZE_UNITS) - 1) if size >= 1 else 0
        value = size / (1024 ** index)
        # Up to ``decimals`` digits, trailing zeros dropped ("1.5 KB", "1 GB").
        pattern = self._number_pattern("decimal", (0, max(decimals, 0)))
        amount = pattern.apply(value, self._babel_locale())
        return f"{amount} {FILE_SIZE_UNITS[index]}"

    @staticmethod
    def format_duration(seconds: Any) -> str:
        """Seconds as HH:MM:SS, or MM:SS under an hour."""
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            return "00:00"
        if math.isnan(seconds) or seconds <= 0:
            return "00:00"

        total = int(seconds)
        hours, remainder = divmod(total, 3600)
        minutes, secs = divmod(remainder, 60)
        if hours > 0:
            return f"{hours:02d}:{minutes:02d}:{secs:02d}"
        return f"{minutes:02d}:{secs:02d}"

    # Page elements

    def _raw_value(self, element: Tag) -> str:
        return element.get("data-value") or element.get_text().strip()

    def _number_value(self, element: Tag) -> Any:
        raw = self._raw_value(element)
        try:
            return float(raw)
        except (TypeError, ValueError):
            return raw

    def format_elements(self, scope: Optional[Tag] = None) -> int:
        """Rewrite ``data-format`` elements of the attached document.

        Supported formats: date, datetime, time, relative, number, integer,
        decimal (``data-decimals``), percent and currency (``data-currency``).

        Returns:
            Number of elements rewritten.
        """
        if self.document is None:
            return 0

        handlers: Dict[str, Callable[[Tag], str]] = {
            "date": lambda el: self.format_date(self._raw_value(el)),
            "datetime": lambda el: self.format_datetime(self._raw_value(el)),
            "time": lambda el: self.format_time(self._raw_value(el)),
            "relative": lambda el: self.format_relative_time(self._raw_value(el)),
            "number": lambda el: self.format_number(self._number_value(el)),
            "integer": lambda el: self.format_integer(self._number_value(el)),
            "decimal": lambda el: self.format_decimal(
                self._number_value(el), int(el.get("data-decimals") or 2)
            ),
            "percent": lambda el: self.format_percent(self._number_value(el)),
            "currency": lambda el: self.format_currency(
                self._number_value(el), el.get("data-currency")
            ),
        }

        count = 0
        for element in self.document.select("[data-format]", scope):
            handler = handlers.get(element.get("data-format", ""))
            if handler is None:
                continue
            if not element.has_attr("data-value"):
                # keep the source value so the element can be re-formatted later
                element["data-value"] = element.get_text().strip()
            try:
                formatted = handler(element)
            except (TypeError, ValueError) as e:
                logger.warning(
                    "invalid_format_element",
                    format=element.get("data-format"),
                    value=element.get("data-value"),
                    error=str(e),
                )
                continue
            self.document.set_text(element, formatted)
            count += 1

        logger.debug("elements_formatted", count=count, locale=self.locale)
        return count
