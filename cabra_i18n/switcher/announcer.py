"""Screen-reader announcements through an ARIA live region."""

from typing import Optional

from bs4 import Tag

from cabra_i18n.document import HtmlDocument
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

ANNOUNCER_ID = "language-announcer"


class LiveRegionAnnouncer:
    """Writes messages into a polite, atomic ``role="status"`` region.

    The region is created at the end of body on first use and reused after
    that. Its ``lang`` follows the message so screen readers pick the right
    voice.
    """

    def __init__(self, document: HtmlDocument, region_id: str = ANNOUNCER_ID):
        self.document = document
        self.region_id = region_id

    @property
    def region(self) -> Optional[Tag]:
        return self.document.get_element_by_id(self.region_id)

    def ensure_region(self) -> Tag:
        region = self.region
        if region is not None:
            return region

        region = self.document.create_element(
            "div",
            id=self.region_id,
            role="status",
            aria_live="polite",
            aria_atomic="true",
        )
        region["class"] = ["sr-only"]
        self.document.append_child(self.document.body, region)
        return region

    def announce(self, message: str, locale: str) -> None:
        region = self.ensure_region()
        region["lang"] = locale
        self.document.set_text(region, message)
        logger.debug("announced", locale=locale, message=message)

    def get_message(self) -> str:
        region = self.region
        return self.document.get_text(region) if region is not None else ""
