"""Right-to-left layout support.

Switches the document between LTR and RTL and mirrors the elements that
CSS alone cannot flip: directional icons, tooltip positions, dropdown
alignment, modal direction and breadcrumb separators.

Every mirrored element is marked. An RTL pass only touches unmarked
elements and an LTR pass only restores marked ones, so passes can be
repeated freely and RTL followed by LTR gives back the original markup.
"""

from typing import Any, Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from cabra_i18n.context import I18nContext
from cabra_i18n.events import EventType
from cabra_i18n.i18n.models import Direction
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

RTL_LANGUAGES = ("ar", "he", "fa", "ur")

EXCLUDE_SELECTORS = (
    ".no-rtl",
    ".ltr-only",
    '[dir="ltr"]',
    "code",
    "pre",
    ".code-block",
)

ICON_PAIRS = (
    ("bi-arrow-left", "bi-arrow-right"),
    ("bi-chevron-left", "bi-chevron-right"),
    ("bi-caret-left", "bi-caret-right"),
)
ICON_SELECTOR = ", ".join(f".{name}" for pair in ICON_PAIRS for name in pair)

DROPDOWN_PAIR = ("dropdown-menu-right", "dropdown-menu-left")
SEPARATOR_SWAPS = {"/": "\\", ">": "<"}
SEPARATOR_RESTORES = {v: k for k, v in SEPARATOR_SWAPS.items()}

INVERTED_MARKER = "data-rtl-inverted"
TOOLTIP_MARKER = "data-tooltip-original"
DROPDOWN_MARKER = "data-rtl-swapped"
MODAL_MARKER = "data-rtl-original-dir"

STYLE_ID = "rtl-support-styles"

RTL_STYLES = """
html[dir="rtl"] input[type="tel"],
html[dir="rtl"] input[type="email"],
html[dir="rtl"] input[type="url"] {
  direction: ltr;
  text-align: left;
}

html[dir="rtl"] code,
html[dir="rtl"] pre,
html[dir="rtl"] .code-block {
  direction: ltr;
  text-align: left;
  unicode-bidi: embed;
}

.ltr-only,
[dir="ltr"] {
  direction: ltr !important;
  text-align: left !important;
}

.rtl-only,
[dir="rtl"] {
  direction: rtl !important;
  text-align: right !important;
}
"""


class DirectionManager:
    """Keeps the document's layout direction in sync with the locale.

    Attributes:
        context: Shared i18n context.
        current_direction: Direction applied last.
    """

    def __init__(self, context: I18nContext):
        self.context = context
        self.current_direction = Direction.LTR
        self._disconnect: Optional[Callable[[], None]] = None
        self._exclude_selector = ", ".join(EXCLUDE_SELECTORS)

    @property
    def document(self):
        return self.context.document

    @property
    def is_rtl(self) -> bool:
        return self.current_direction == Direction.RTL

    def is_rtl_locale(self, locale: Optional[str]) -> bool:
        if not locale:
            return False
        return locale.replace("_", "-").split("-")[0].lower() in RTL_LANGUAGES

    def get_direction(self, locale: Optional[str]) -> Direction:
        return Direction.RTL if self.is_rtl_locale(locale) else Direction.LTR

    async def set_direction(self, direction: Union[Direction, str], force: bool = False) -> bool:
        """Apply a direction to the document.

        Args:
            direction: Target direction.
            force: Re-apply even if the direction is unchanged.

        Returns:
            True if the document was updated, False for a no-op.
        """
        direction = Direction.from_string(direction) if isinstance(direction, str) else direction
        if direction == self.current_direction and not force:
            logger.debug("direction_unchanged", direction=direction.value)
            return False

        previous = self.current_direction
        root = self.document.root
        root["dir"] = direction.value
        self.document.remove_class(root, Direction.LTR.value, Direction.RTL.value)
        self.document.add_class(root, direction.value)

        self.current_direction = direction
        self.adjust_elements()
        self.adjust_scrollbar()

        logger.info("direction_changed", direction=direction.value, previous=previous.value)
        await self.context.bus.emit(
            EventType.DIRECTION_CHANGED,
            direction=direction.value,
            is_rtl=self.is_rtl,
        )
        return True

    def is_excluded(self, element: Tag) -> bool:
        """Check the element and its ancestors (below the root) against the exclusions."""
        root = self.document.root
        node: Any = element
        while isinstance(node, Tag) and not isinstance(node, BeautifulSoup) and node is not root:
            if node.css.match(self._exclude_selector):
                return True
            node = node.parent
        return False

    def adjust_elements(self, scope: Optional[Tag] = None) -> int:
        """Mirror (RTL) or restore (LTR) direction-sensitive elements.

        Args:
            scope: Limit the pass to this subtree.

        Returns:
            Number of elements changed.
        """
        changed = (
            self.adjust_icons(scope)
            + self.adjust_tooltips(scope)
            + self.adjust_dropdowns(scope)
            + self.adjust_modals(scope)
            + self.adjust_breadcrumbs(scope)
        )
        logger.debug("elements_adjusted", direction=self.current_direction.value, changed=changed)
        return changed

    def _candidates(self, selector: str, scope: Optional[Tag], marker: str) -> List[Tag]:
        elements = self.document.select(selector, scope)
        if self.is_rtl:
            return [el for el in elements if not el.has_attr(marker) and not self.is_excluded(el)]
        return [el for el in elements if el.has_attr(marker)]

    def _swap_icon_classes(self, icon: Tag) -> bool:
        swapped = False
        for left, right in ICON_PAIRS:
            if self.document.has_class(icon, left):
                swapped |= self.document.replace_class(icon, left, right)
            elif self.document.has_class(icon, right):
                swapped |= self.document.replace_class(icon, right, left)
        return swapped

    def adjust_icons(self, scope: Optional[Tag] = None) -> int:
        changed = 0
        for icon in self._candidates(ICON_SELECTOR, scope, INVERTED_MARKER):
            if self.is_rtl:
                if self._swap_icon_classes(icon):
                    icon[INVERTED_MARKER] = "true"
                    changed += 1
            else:
                self._swap_icon_classes(icon)
                del icon[INVERTED_MARKER]
                changed += 1
        return changed

    def adjust_tooltips(self, scope: Optional[Tag] = None) -> int:
        changed = 0
        for tooltip in self._candidates("[data-tooltip-position]", scope, TOOLTIP_MARKER):
            if self.is_rtl:
                position = tooltip.get("data-tooltip-position")
                if position == "left":
                    tooltip["data-tooltip-position"] = "right"
                elif position == "right":
                    tooltip["data-tooltip-position"] = "left"
                else:
                    continue
                tooltip[TOOLTIP_MARKER] = position
            else:
                tooltip["data-tooltip-position"] = tooltip[TOOLTIP_MARKER]
                del tooltip[TOOLTIP_MARKER]
            changed += 1
        return changed

    def _swap_dropdown_classes(self, dropdown: Tag) -> bool:
        right, left = DROPDOWN_PAIR
        if self.document.has_class(dropdown, right):
            return self.document.replace_class(dropdown, right, left)
        if self.document.has_class(dropdown, left):
            return self.document.replace_class(dropdown, left, right)
        return False

    def adjust_dropdowns(self, scope: Optional[Tag] = None) -> int:
        changed = 0
        for dropdown in self._candidates(".dropdown-menu", scope, DROPDOWN_MARKER):
            if self.is_rtl:
                if self._swap_dropdown_classes(dropdown):
                    dropdown[DROPDOWN_MARKER] = "true"
                    changed += 1
            else:
                self._swap_dropdown_classes(dropdown)
                del dropdown[DROPDOWN_MARKER]
                changed += 1
        return changed

    def adjust_modals(self, scope: Optional[Tag] = None) -> int:
        changed = 0
        for modal in self._candidates(".modal", scope, MODAL_MARKER):
            if self.is_rtl:
                # "" records that the modal had no dir attribute
                modal[MODAL_MARKER] = modal.get("dir", "")
                modal["dir"] = Direction.RTL.value
            else:
                original = modal[MODAL_MARKER]
                if original:
                    modal["dir"] = original
                elif modal.has_attr("dir"):
                    del modal["dir"]
                del modal[MODAL_MARKER]
            changed += 1
        return changed

    @staticmethod
    def _swap_separator(separator: Tag, table: Dict[str, str]) -> bool:
        """Replace the separator glyph in place, keeping surrounding whitespace."""
        for node in separator.find_all(string=True):
            glyph = node.strip()
            if glyph in table:
                node.replace_with(node.replace(glyph, table[glyph], 1))
                return True
        return False

    def adjust_breadcrumbs(self, scope: Optional[Tag] = None) -> int:
        changed = 0
        selector = ".breadcrumb .breadcrumb-separator"
        for separator in self._candidates(selector, scope, INVERTED_MARKER):
            if self.is_rtl:
                if not self._swap_separator(separator, SEPARATOR_SWAPS):
                    continue
                separator[INVERTED_MARKER] = "true"
            else:
                self._swap_separator(separator, SEPARATOR_RESTORES)
                del separator[INVERTED_MARKER]
            changed += 1
        return changed

    def adjust_scrollbar(self) -> None:
        self.document.toggle_class(self.document.body, "rtl-scrollbar", self.is_rtl)

    def inject_styles(self) -> bool:
        """Add the RTL helper stylesheet to head once.

        Returns:
            True if the stylesheet was added by this call.
        """
        if self.document.get_element_by_id(STYLE_ID) is not None:
            return False

        style = self.document.create_element("style", id=STYLE_ID)
        style.string = RTL_STYLES
        self.document.head.append(style)
        logger.debug("rtl_styles_injected")
        return True

    def _on_mutation(self, added: List[Tag]) -> None:
        if not self.is_rtl:
            return
        for element in added:
            self.adjust_elements(scope=element)

    def start_observer(self) -> None:
        """Mirror newly inserted subtrees while RTL is active."""
        self.stop_observer()
        self._disconnect = self.document.observe(self._on_mutation)
        logger.debug("direction_observer_started")

    def stop_observer(self) -> None:
        if self._disconnect is not None:
            self._disconnect()
            self._disconnect = None
            logger.debug("direction_observer_stopped")

    def get_state(self) -> Dict[str, Any]:
        return {
            "direction": self.current_direction.value,
            "is_rtl": self.is_rtl,
            "locale": self.context.current_locale,
            "observer_active": self._disconnect is not None,
        }

    async def init(self, locale: Optional[str] = None) -> Direction:
        """Inject styles, apply the locale's direction and start observing."""
        locale = locale or self.context.locale
        self.inject_styles()
        direction = self.get_direction(locale)
        await self.set_direction(direction, force=True)
        self.start_observer()
        return direction
