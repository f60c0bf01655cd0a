"""Locale-aware value formatting."""

from cabra_i18n.formatting.formatter import DEFAULT_CURRENCIES, IntlFormatter

__all__ = ["IntlFormatter", "DEFAULT_CURRENCIES"]
