"""
Index (table of contents) pages.

The index is built after every content page exists and is inserted in front
of them, at `insert_offset` (right after the cover). Each index page pushes
every content page one position further back, so index entries record the
pre-shift page of their target and are resolved through the PageShift
returned with the result, the same shift applied to the content refs.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import fitz

from .canvas import PlannerContext
from .dates import MONTH_NAMES, parse_year_month
from .layout import text_width
from .navigation import nav_items
from .refs import (
    CollectionRef,
    DailyRef,
    IndexRef,
    MonthlyRef,
    NO_SHIFT,
    PageRef,
    PageShift,
    PageType,
    WeeklyRef,
    refs_of,
)

logger = logging.getLogger(__name__)

TITLE_SIZE = 16
FONT_SIZE = 8
SMALL_FONT_SIZE = 7

ENTRY_ROW = 20
SECTION_HEADER_ROW = 20
MONTH_ROW = 22
WEEK_LINE = 12
WEEK_SPACING = 28
DAY_LINE = 14
DAY_WIDTH = 16
COLLECTION_LINE = 12
COLLECTION_SPACING = 14
MONTH_COLUMN_MAX = 80


@dataclass(frozen=True)
class IndexLink:
    page_num: int
    rect: fitz.Rect
    target_page: int        # Pre-shift physical index


@dataclass
class IndexResult:
    refs: List[IndexRef] = field(default_factory=list)
    links: List[IndexLink] = field(default_factory=list)
    shift: PageShift = NO_SHIFT

    @property
    def page_count(self) -> int:
        return len(self.refs)

    @property
    def first_page(self) -> Optional[int]:
        return self.refs[0].page_index if self.refs else None


def _entry_rect(x: float, y: float, width: float, font_size: float) -> fitz.Rect:
    return fitz.Rect(x - 2, y - 1, x + width + 2, y + font_size + 3)


class IndexBuilder:

    def __init__(self, ctx: PlannerContext, insert_offset: int):
        self.ctx = ctx
        self.insert_offset = insert_offset
        self.result = IndexResult()
        self.page: Optional[fitz.Page] = None
        self.page_index = insert_offset
        self.y = 0.0

    # -------------------------------------------------------------------------
    # Page allocation
    # -------------------------------------------------------------------------

    def new_page(self):
        number = len(self.result.refs) + 1
        self.page, self.page_index = self.ctx.new_page(pno=self.insert_offset + number - 1)
        title = "INDEX" if number == 1 else f"INDEX ({number})"
        labels = [item.label for item in nav_items(PageType.INDEX, self.ctx.flags)]
        self.y = self.ctx.draw_header(self.page, labels, title, TITLE_SIZE)
        label = "Index" if number == 1 else f"Index ({number})"
        self.result.refs.append(IndexRef(label=label, page_index=self.page_index, number=number))
        logger.debug("Allocated index page %d at position %d", number, self.page_index)

    def ensure_space(self, height: float):
        """Start a new index page when the next row would not fit."""
        if self.y + height > self.ctx.dims.bottom:
            self.new_page()

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def link(self, rect: fitz.Rect, target: PageRef):
        self.result.links.append(IndexLink(self.page_index, rect, target.page_index))

    def entry(self, label: str, x: float, target: PageRef, font_size: float = FONT_SIZE,
              arrow: str = " >") -> float:
        """Draw `label` + arrow at the current row; returns the drawn width."""
        colors = self.ctx.colors
        baseline = self.y + font_size
        width = text_width(label, font_size)
        self.ctx.add_text(self.page, label, x, baseline, font_size)
        arrow_width = text_width(arrow, font_size) if arrow else 0
        if arrow:
            self.ctx.add_text(self.page, arrow, x + width, baseline, font_size, colors.text_muted)
        self.link(_entry_rect(x, self.y, width + arrow_width, font_size), target)
        return width + arrow_width

    def section_header(self, text: str, x: Optional[float] = None):
        self.ctx.add_text(self.page, text, self.ctx.dims.left if x is None else x,
                          self.y + FONT_SIZE + 1, FONT_SIZE + 1, bold=True)

    def rule(self, faint: bool = True):
        dims, colors = self.ctx.dims, self.ctx.colors
        self.ctx.draw_line(self.page, dims.left, self.y, dims.right, self.y,
                           colors.line_faint if faint else colors.line,
                           width=0.25 if faint else 0.5)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def add_single_entries(self, key_refs: Sequence[PageRef], future_refs: Sequence[PageRef]):
        if not key_refs and not future_refs:
            return
        self.ensure_space(ENTRY_ROW)
        x = self.ctx.dims.left
        if key_refs:
            x += self.entry("Key", x, key_refs[0]) + 15
        if future_refs:
            self.entry("Future Log", x, future_refs[0])
        self.y += ENTRY_ROW

    def add_month_table(self, monthly_refs: Sequence[MonthlyRef], weekly_refs: Sequence[WeeklyRef]):
        if not monthly_refs and not weekly_refs:
            return
        dims = self.ctx.dims
        month_col = min(MONTH_COLUMN_MAX, dims.content_width * 0.25)
        week_x0 = dims.left + month_col

        # Calendar page for each month: first (canonical) part only
        months: Dict[str, Optional[MonthlyRef]] = OrderedDict()
        for ref in monthly_refs:
            if ref.year_month and ref.year_month not in months:
                months[ref.year_month] = ref
        weeks: Dict[str, List[WeeklyRef]] = {}
        for ref in weekly_refs:
            if ref.year_month:
                weeks.setdefault(ref.year_month, []).append(ref)
                months.setdefault(ref.year_month, None)
        keys = sorted(months)
        multi_year = len({key[:4] for key in keys}) > 1

        self.ensure_space(SECTION_HEADER_ROW + MONTH_ROW)
        self.section_header("Monthly")
        if weekly_refs:
            self.section_header("Weekly Reviews", week_x0)
        self.y += FONT_SIZE + 6
        self.rule(faint=False)
        self.y += SECTION_HEADER_ROW - FONT_SIZE - 6

        for key in keys:
            self.ensure_space(MONTH_ROW)
            month = parse_year_month(key)
            name = MONTH_NAMES[month.month - 1]
            if multi_year:
                name = f"{name} {month.year}"

            monthly_ref = months[key]
            if monthly_ref is not None:
                self.entry(name, dims.left, monthly_ref)
            else:
                self.ctx.add_text(self.page, name, dims.left, self.y + FONT_SIZE, FONT_SIZE,
                                  self.ctx.colors.text_muted)

            wx = week_x0
            for week_ref in weeks.get(key, []):
                if wx + WEEK_SPACING > dims.right:
                    wx = week_x0
                    self.y += WEEK_LINE
                    self.ensure_space(WEEK_LINE)
                self.entry(str(week_ref.week_index), wx, week_ref, SMALL_FONT_SIZE, arrow=">")
                wx += WEEK_SPACING

            self.y += FONT_SIZE + 4
            self.rule()
            self.y += MONTH_ROW - FONT_SIZE - 4

    def add_daily_grid(self, daily_refs: Sequence[DailyRef]):
        if not daily_refs:
            return
        dims = self.ctx.dims
        per_line = max(1, int(dims.content_width // DAY_WIDTH))

        by_month: Dict[str, List[DailyRef]] = OrderedDict()
        for ref in daily_refs:
            if ref.date is not None and ref.year_month:
                by_month.setdefault(ref.year_month, []).append(ref)
        multi_year = len({key[:4] for key in by_month}) > 1

        self.ensure_space(SECTION_HEADER_ROW + DAY_LINE * 2)
        self.section_header("Daily Logs")
        self.y += SECTION_HEADER_ROW - 2

        for key, days in by_month.items():
            self.ensure_space(DAY_LINE * 2)
            month = parse_year_month(key)
            name = MONTH_NAMES[month.month - 1]
            if multi_year:
                name = f"{name} {month.year}"
            self.ctx.add_text(self.page, name, dims.left, self.y + FONT_SIZE, FONT_SIZE)
            self.y += DAY_LINE

            for i, ref in enumerate(days):
                col = i % per_line
                if i > 0 and col == 0:
                    self.y += DAY_LINE
                    self.ensure_space(DAY_LINE)
                dx = dims.left + col * DAY_WIDTH
                self.ctx.add_text(self.page, str(ref.date.day), dx, self.y + SMALL_FONT_SIZE,
                                  SMALL_FONT_SIZE)
                self.link(fitz.Rect(dx - 2, self.y - 2, dx - 2 + DAY_WIDTH, self.y + 10), ref)

            self.y += SMALL_FONT_SIZE + 4
            self.rule()
            self.y += DAY_LINE

    def add_collection_strip(self, collection_refs: Sequence[CollectionRef]):
        if not collection_refs:
            return
        dims = self.ctx.dims

        self.ensure_space(SECTION_HEADER_ROW + COLLECTION_LINE)
        self.section_header("Collections")
        self.y += SECTION_HEADER_ROW - 5

        cx = dims.left
        for i, ref in enumerate(collection_refs):
            if cx + COLLECTION_SPACING > dims.right:
                cx = dims.left
                self.y += COLLECTION_LINE
                self.ensure_space(COLLECTION_LINE)
            self.entry(str(i + 1), cx, ref, SMALL_FONT_SIZE, arrow="")
            cx += COLLECTION_SPACING
        self.y += COLLECTION_LINE

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self, refs: Sequence[PageRef]) -> IndexResult:
        """Insert the index pages for `refs` (pre-shift) and return their shift."""
        if not refs:
            self.result.shift = PageShift(self.insert_offset, 0)
            return self.result

        self.new_page()
        self.add_single_entries(refs_of(refs, PageType.KEY), refs_of(refs, PageType.FUTURE))
        self.add_month_table(refs_of(refs, PageType.MONTHLY), refs_of(refs, PageType.WEEKLY))
        self.add_daily_grid(refs_of(refs, PageType.DAILY))
        self.add_collection_strip(refs_of(refs, PageType.COLLECTION))

        self.result.shift = PageShift(self.insert_offset, len(self.result.refs))
        logger.info("Index: %d page(s) inserted at %d", self.result.page_count, self.insert_offset)
        return self.result
