"""Applies translations to the ``data-i18n*`` attributes of a document."""

import json
from typing import Any, Callable, Dict, Optional

from bs4 import Comment, NavigableString, Tag

from cabra_i18n.document import HtmlDocument
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

TranslateFn = Callable[[str, Optional[Dict[str, Any]]], str]

# data attribute holding the key -> element attribute receiving the text
ATTRIBUTE_TARGETS = (
    ("data-i18n-placeholder", "placeholder"),
    ("data-i18n-title", "title"),
    ("data-i18n-aria-label", "aria-label"),
    ("data-i18n-aria", "aria-label"),
    ("data-i18n-alt", "alt"),
)

NO_TEXT_TAGS = frozenset({"input", "textarea"})


def _text_nodes(element: Tag):
    for child in element.children:
        if isinstance(child, NavigableString) and not isinstance(child, Comment):
            yield child


def _has_element_children(element: Tag) -> bool:
    return any(isinstance(child, Tag) for child in element.children)


class DocumentTranslator:
    """Rewrites translatable elements of an HtmlDocument.

    Attributes:
        document: Page to rewrite.
        translate: Callable ``(key, params) -> text`` for the active locale.
    """

    def __init__(self, document: HtmlDocument, translate: TranslateFn):
        self.document = document
        self.translate = translate

    def read_params(self, element: Tag) -> Dict[str, Any]:
        """Decode ``data-i18n-params``; invalid JSON is logged and ignored."""
        raw = element.get("data-i18n-params")
        if not raw:
            return {}
        try:
            params = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(
                "invalid_i18n_params",
                key=element.get("data-i18n"),
                params=raw,
                error=str(e),
            )
            return {}
        if not isinstance(params, dict):
            logger.warning("invalid_i18n_params", key=element.get("data-i18n"), params=raw)
            return {}
        return params

    def set_element_text(self, element: Tag, text: str) -> None:
        """Put translated text into an element without dropping child elements.

        An element with no child elements gets its content replaced. An
        element with child elements keeps them and only its first non-blank
        direct text node (or first text node, if all are blank) is replaced.
        """
        if not _has_element_children(element):
            self.document.set_text(element, text)
            return

        nodes = list(_text_nodes(element))
        if not nodes:
            return
        target = next((node for node in nodes if node.strip()), nodes[0])
        target.replace_with(NavigableString(text))

    def apply_text(self, element: Tag) -> bool:
        key = element.get("data-i18n")
        if not key:
            return False

        translation = self.translate(key, self.read_params(element))
        name = element.name.lower()
        if name in NO_TEXT_TAGS:
            return False
        if name == "img":
            element["alt"] = translation
        else:
            self.set_element_text(element, translation)
        return True

    def apply(self, scope: Optional[Tag] = None) -> int:
        """Translate every annotated element in the document (or in ``scope``).

        Returns:
            Number of distinct elements that received a translation.
        """
        translated = set()

        for element in self.document.select("[data-i18n]", scope):
            if self.apply_text(element):
                translated.add(id(element))

        for data_attr, target_attr in ATTRIBUTE_TARGETS:
            for element in self.document.select(f"[{data_attr}]", scope):
                key = element.get(data_attr)
                if not key:
                    continue
                element[target_attr] = self.translate(key, None)
                translated.add(id(element))

        logger.info("document_translated", element_count=len(translated))
        return len(translated)
