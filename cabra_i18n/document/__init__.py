"""Document model (BeautifulSoup-backed DOM stand-in)."""

from cabra_i18n.document.html import HtmlDocument, format_style, parse_style

__all__ = ["HtmlDocument", "parse_style", "format_style"]
