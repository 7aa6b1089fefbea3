"""
Internal hyperlinks.

Links are collected while pages are drawn and written in one pass once the
document is fully assembled, so a link may point at a page created after
its source page.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

import fitz

from .errors import GenerationError

logger = logging.getLogger(__name__)

# Jump to the top-left corner of the destination, zoom unchanged
TOP_LEFT = fitz.Point(0, 0)
KEEP_ZOOM = 0


@dataclass
class DeferredLink:
    page_num: int
    rect: fitz.Rect
    dest_page: int


class LinkEmitter:
    """Collects deferred links and applies them exactly once."""

    def __init__(self):
        self.deferred_links: List[DeferredLink] = []
        self.applied = False

    def __len__(self):
        return len(self.deferred_links)

    def add(self, page_num: int, rect: fitz.Rect, dest_page: int):
        if self.applied:
            raise GenerationError("links were already written; cannot add more")
        self.deferred_links.append(DeferredLink(page_num, fitz.Rect(rect), dest_page))

    def apply(self, doc: fitz.Document) -> int:
        """Write every collected link into `doc`; returns the number written."""
        if self.applied:
            raise GenerationError("links were already written")
        page_count = len(doc)
        for link in self.deferred_links:
            if not 0 <= link.dest_page < page_count:
                raise GenerationError(
                    f"link on page {link.page_num} points at page {link.dest_page}, "
                    f"document has {page_count} pages"
                )
            if not 0 <= link.page_num < page_count:
                raise GenerationError(f"link source page {link.page_num} does not exist")

        for link in self.deferred_links:
            doc[link.page_num].insert_link({
                "kind": fitz.LINK_GOTO,
                "from": link.rect,
                "page": link.dest_page,
                "to": TOP_LEFT,
                "zoom": KEEP_ZOOM,
            })

        self.applied = True
        logger.debug("Wrote %d links", len(self.deferred_links))
        return len(self.deferred_links)


# -----------------------------------------------------------------------------
# Read-only extraction for consumers (preview click-through)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PageLink:
    rect: fitz.Rect
    target_page: int


def extract_links(source: Union[bytes, fitz.Document]) -> List[List[PageLink]]:
    """Internal links per page, as (rectangle, destination page)."""
    doc = fitz.open(stream=source, filetype="pdf") if isinstance(source, (bytes, bytearray)) else source
    try:
        result = []
        for page in doc:
            result.append([
                PageLink(rect=fitz.Rect(link["from"]), target_page=link["page"])
                for link in page.get_links()
                if link.get("kind") == fitz.LINK_GOTO
            ])
        return result
    finally:
        if doc is not source:
            doc.close()
