"""HTML document model used in place of the browser DOM.

Wraps a BeautifulSoup tree (``html.parser``) and adds the handful of DOM
operations the i18n components rely on: CSS selection, class and inline
style helpers, and a mutation hook so observers learn about inserted
subtrees.

Usage:
    from cabra_i18n.document import HtmlDocument

    document = HtmlDocument.parse(markup)
    for el in document.select("[data-i18n]"):
        ...
    html = document.to_html()
"""

from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import Doctype, NavigableString

from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

MutationCallback = Callable[[List[Tag]], None]

PARSER = "html.parser"


def parse_style(value: Optional[str]) -> Dict[str, str]:
    """Parse an inline ``style`` attribute into an ordered property map."""
    styles: Dict[str, str] = {}
    if not value:
        return styles
    for declaration in value.split(";"):
        if ":" not in declaration:
            continue
        prop, _, val = declaration.partition(":")
        prop = prop.strip().lower()
        if prop:
            styles[prop] = val.strip()
    return styles


def format_style(styles: Dict[str, str]) -> str:
    """Serialize a property map back to an inline ``style`` value."""
    return "; ".join(f"{prop}: {val}" for prop, val in styles.items())


class HtmlDocument:
    """A mutable HTML page with an ``<html>`` root, ``<head>`` and ``<body>``.

    Attributes:
        soup: Underlying BeautifulSoup tree.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self._ensure_skeleton()
        self._observers: List[MutationCallback] = []

    @classmethod
    def parse(cls, markup: str = "") -> "HtmlDocument":
        """Parse markup into a document, adding html/head/body if missing."""
        return cls(BeautifulSoup(markup, PARSER))

    def _ensure_skeleton(self) -> None:
        html = self.soup.find("html")
        if html is None:
            html = self.soup.new_tag("html")
            body = self.soup.new_tag("body")
            for child in list(self.soup.contents):
                if isinstance(child, Doctype):
                    continue
                body.append(child.extract())
            html.append(self.soup.new_tag("head"))
            html.append(body)
            self.soup.append(html)

        if html.find("head", recursive=False) is None:
            html.insert(0, self.soup.new_tag("head"))
        if html.find("body", recursive=False) is None:
            html.append(self.soup.new_tag("body"))

    @property
    def root(self) -> Tag:
        """The ``<html>`` element (documentElement)."""
        return self.soup.find("html")

    @property
    def head(self) -> Tag:
        return self.root.find("head", recursive=False)

    @property
    def body(self) -> Tag:
        return self.root.find("body", recursive=False)

    # Queries

    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        """Return elements matching a CSS selector, in document order.

        When ``scope`` is given, the scope element itself is included if it
        matches, followed by its matching descendants.
        """
        if scope is None:
            return list(self.soup.select(selector))
        matches: List[Tag] = []
        if scope.css.match(selector):
            matches.append(scope)
        matches.extend(scope.select(selector))
        return matches

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    # Mutation

    def create_element(self, name: str, **attrs: str) -> Tag:
        """Create a detached element with the given attributes."""
        tag = self.soup.new_tag(name)
        for key, value in attrs.items():
            tag[key.replace("_", "-")] = value
        return tag

    def append_child(self, parent: Tag, child: Tag) -> Tag:
        """Append an element and notify observers of the new subtree."""
        parent.append(child)
        self._notify([child])
        return child

    def insert_html(self, parent: Tag, markup: str) -> List[Tag]:
        """Parse markup and append its top-level elements to ``parent``.

        Returns:
            The inserted top-level elements. Observers receive the same list.
        """
        fragment = BeautifulSoup(markup, PARSER)
        inserted: List[Tag] = []
        for child in list(fragment.contents):
            node = child.extract()
            parent.append(node)
            if isinstance(node, Tag):
                inserted.append(node)
        if inserted:
            self._notify(inserted)
        return inserted

    def remove(self, element: Tag) -> None:
        """Detach an element from the document."""
        element.decompose()

    def observe(self, callback: MutationCallback) -> Callable[[], None]:
        """Register a callback for inserted subtrees.

        Returns:
            A function that disconnects the callback.
        """
        self._observers.append(callback)

        def disconnect() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return disconnect

    def _notify(self, added: List[Tag]) -> None:
        for callback in list(self._observers):
            try:
                callback(added)
            except Exception as e:
                logger.error(
                    "mutation_observer_failed",
                    callback=getattr(callback, "__name__", "unknown"),
                    error=str(e),
                )

    # Class helpers

    @staticmethod
    def get_classes(element: Tag) -> List[str]:
        classes = element.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return list(classes)

    @classmethod
    def has_class(cls, element: Tag, name: str) -> bool:
        return name in cls.get_classes(element)

    @classmethod
    def add_class(cls, element: Tag, *names: str) -> None:
        classes = cls.get_classes(element)
        for name in names:
            if name not in classes:
                classes.append(name)
        element["class"] = classes

    @classmethod
    def remove_class(cls, element: Tag, *names: str) -> None:
        classes = [c for c in cls.get_classes(element) if c not in names]
        if classes:
            element["class"] = classes
        elif element.has_attr("class"):
            del element["class"]

    @classmethod
    def toggle_class(cls, element: Tag, name: str, force: Optional[bool] = None) -> bool:
        """Add or remove a class; returns whether the class is now present."""
        present = cls.has_class(element, name)
        wanted = (not present) if force is None else force
        if wanted:
            cls.add_class(element, name)
        else:
            cls.remove_class(element, name)
        return wanted

    @classmethod
    def replace_class(cls, element: Tag, old: str, new: str) -> bool:
        """Swap one class for another in place, keeping its position."""
        classes = cls.get_classes(element)
        if old not in classes:
            return False
        index = classes.index(old)
        classes[index] = new
        # Keep the list free of duplicates if ``new`` was already present
        deduped: List[str] = []
        for name in classes:
            if name not in deduped:
                deduped.append(name)
        element["class"] = deduped
        return True

    # Style helpers

    @staticmethod
    def get_style(element: Tag, prop: str) -> Optional[str]:
        return parse_style(element.get("style")).get(prop.lower())

    @staticmethod
    def set_style(element: Tag, prop: str, value: Optional[str]) -> None:
        """Set (or, with ``None``, remove) one inline style property."""
        styles = parse_style(element.get("style"))
        if value is None:
            styles.pop(prop.lower(), None)
        else:
            styles[prop.lower()] = value
        if styles:
            element["style"] = format_style(styles)
        elif element.has_attr("style"):
            del element["style"]

    # Text helpers

    @staticmethod
    def set_text(element: Tag, text: str) -> None:
        """Replace the element's children with a single text node."""
        element.clear()
        element.append(NavigableString(text))

    @staticmethod
    def get_text(element: Tag) -> str:
        return element.get_text()

    def to_html(self) -> str:
        """Serialize the document."""
        return str(self.soup)

    def __str__(self) -> str:
        return self.to_html()


