"""
Daily, weekly and monthly planners plus plain notebooks.

These share the cover, the deferred link emitter and the index shift with
the bullet journal. Navigation is a single table of contents (inserted
after the cover, paginated when long) and a centered `< | Contents | >`
row at the bottom of every page after the cover.
"""

import datetime
import logging
import math
from typing import List

import fitz

from .canvas import PlannerContext
from .config import PlannerConfig
from .cover import generate_cover, planner_title
from .dates import (
    DAY_NAMES,
    MONTH_ABBREVS,
    MONTH_NAMES,
    days_in_month,
    each_day,
    each_month,
    each_week,
    is_weekend,
    sunday_index,
)
from .layout import nav_row_width, slot_rect, text_width
from .links import LinkEmitter
from .pagination import rows_per_page
from .refs import NO_SHIFT, PageRef, PageShift, shift_refs

logger = logging.getLogger(__name__)

NOTEBOOK_PAGES = 50

HEADER_SIZE = 14
MONTH_HEADER_SIZE = 16
LABEL_SIZE = 10

TIME_SLOT_HEIGHT = 24
TIME_LABEL_WIDTH = 60
LINED_SPACING = 24          # College ruled
CALENDAR_ROW_MAX = 60
NOTES_HEIGHT = 40

TOC_TITLE_SIZE = 16
TOC_FONT_SIZE = 10
TOC_ROW = 18

FOOTER_PREV = "<"
FOOTER_CONTENTS = "Contents"
FOOTER_NEXT = ">"


def hour_label(hour: int, minute: int = 0) -> str:
    """12-hour clock label, e.g. '8:00 AM'."""
    suffix = "AM" if hour % 24 < 12 else "PM"
    return f"{(hour % 12) or 12}:{minute:02d} {suffix}"


def _long_date(day: datetime.date) -> str:
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


class SimplePlannerGenerator:

    def __init__(self, config: PlannerConfig):
        self.config = config
        self.doc = fitz.open()
        self.ctx = PlannerContext.from_config(config, self.doc)
        self.links = LinkEmitter()

        self.insert_offset = 0
        self.entries: List[PageRef] = []
        self.refs: List[PageRef] = []
        self.registry = None
        self.contents_pages: List[int] = []
        self.shift = NO_SHIFT

    @property
    def index_pages(self) -> int:
        return len(self.contents_pages)

    def _title(self, page: fitz.Page, text: str, size: float = HEADER_SIZE) -> float:
        """Draw a page heading; returns the y below it."""
        baseline = self.ctx.dims.top + size
        self.ctx.add_text(page, text, self.ctx.dims.left, baseline, size, bold=True)
        return baseline + 10

    # -------------------------------------------------------------------------
    # Daily
    # -------------------------------------------------------------------------

    def daily_page(self, day: datetime.date):
        ctx, dims, colors = self.ctx, self.ctx.dims, self.ctx.colors
        page, page_index = ctx.new_page()
        label = f"{DAY_NAMES[sunday_index(day)][:3]}, {MONTH_ABBREVS[day.month - 1]} {day.day}"
        self.entries.append(PageRef(label=label, page_index=page_index))

        y = self._title(page, f"{DAY_NAMES[sunday_index(day)]}, {_long_date(day)}") + 10

        hours = list(range(self.config.time_start, self.config.time_end + 1))
        half_hours = self.config.time_interval == 30
        slots = len(hours) * 2 - 1 if half_hours else len(hours)
        if slots <= 0:
            return
        slot_height = min(TIME_SLOT_HEIGHT, (dims.bottom - y) / slots)
        line_x = dims.left + TIME_LABEL_WIDTH

        for hour in hours:
            ctx.add_text(page, hour_label(hour), dims.left, y + LABEL_SIZE, LABEL_SIZE, colors.text_muted)
            ctx.draw_line(page, line_x, y + LABEL_SIZE - 4, dims.right, y + LABEL_SIZE - 4, width=0.5)
            y += slot_height

            if half_hours and hour < self.config.time_end:
                page.draw_line(
                    fitz.Point(line_x, y + LABEL_SIZE - 4),
                    fitz.Point(dims.right, y + LABEL_SIZE - 4),
                    color=colors.line_faint,
                    width=0.25,
                    dashes="[2 2] 0",
                )
                y += slot_height

    # -------------------------------------------------------------------------
    # Weekly
    # -------------------------------------------------------------------------

    def weekly_page(self, week_start: datetime.date):
        ctx, dims, colors = self.ctx, self.ctx.dims, self.ctx.colors
        page, page_index = ctx.new_page()
        self.entries.append(PageRef(
            label=f"Week of {MONTH_ABBREVS[week_start.month - 1]} {week_start.day}",
            page_index=page_index,
        ))

        y = self._title(page, f"Week of {_long_date(week_start)}")

        if self.config.include_weekends:
            day_indices = list(range(7))
        else:
            day_indices = list(range(1, 6))
        col_width = dims.content_width / len(day_indices)
        header_bottom = y + LABEL_SIZE + 10
        notes_top = dims.bottom - NOTES_HEIGHT

        for i, day_index in enumerate(day_indices):
            x = dims.left + i * col_width
            ctx.add_text(page, DAY_NAMES[day_index][:3], x + 4, y + LABEL_SIZE, LABEL_SIZE, bold=True)
            ctx.draw_line(page, x, header_bottom, x, notes_top, width=0.5)

        ctx.draw_line(page, dims.left, header_bottom, dims.right, header_bottom, width=0.5)
        ctx.draw_line(page, dims.left, notes_top, dims.right, notes_top, width=0.5)
        ctx.add_text(page, "Notes", dims.left, notes_top + LABEL_SIZE + 4, LABEL_SIZE,
                     colors.text_muted, bold=True)

    # -------------------------------------------------------------------------
    # Monthly
    # -------------------------------------------------------------------------

    def monthly_page(self, month: datetime.date):
        ctx, dims, colors = self.ctx, self.ctx.dims, self.ctx.colors
        page, page_index = ctx.new_page()
        title = f"{MONTH_NAMES[month.month - 1]} {month.year}"
        self.entries.append(PageRef(label=title, page_index=page_index))

        y = self._title(page, title, MONTH_HEADER_SIZE)
        col_width = dims.content_width / 7
        for i, name in enumerate(DAY_NAMES):
            x = dims.left + i * col_width + col_width / 2 - text_width(name[:3], 9, bold=True) / 2
            ctx.add_text(page, name[:3], x, y + 9, 9, colors.text_muted, bold=True)

        grid_top = y + 15
        row_height = min(CALENDAR_ROW_MAX, (dims.bottom - grid_top) / 6)
        grid_bottom = grid_top + 6 * row_height

        for row in range(7):
            ry = grid_top + row * row_height
            ctx.draw_line(page, dims.left, ry, dims.right, ry, width=0.5)
        for col in range(8):
            cx = dims.left + col * col_width
            ctx.draw_line(page, cx, grid_top, cx, grid_bottom, width=0.5)

        offset = sunday_index(month)
        for day in range(1, days_in_month(month) + 1):
            cell = offset + day - 1
            row, col = divmod(cell, 7)
            if row >= 6:
                break
            ctx.add_text(page, str(day), dims.left + col * col_width + 4,
                         grid_top + row * row_height + 14, LABEL_SIZE)

    # -------------------------------------------------------------------------
    # Notebooks
    # -------------------------------------------------------------------------

    def notebook_page(self, style: str):
        ctx, dims = self.ctx, self.ctx.dims
        page, _ = ctx.new_page()
        if style == "dotgrid":
            ctx.draw_dot_grid(page, dims.top, dims.bottom)
        elif style == "lined":
            ctx.draw_lined(page, dims.top + LINED_SPACING, dims.bottom, spacing=LINED_SPACING)

    # -------------------------------------------------------------------------
    # Table of contents
    # -------------------------------------------------------------------------

    def insert_contents(self):
        """Insert contents pages after the cover and shift every entry past them."""
        if not self.config.include_index or not self.entries:
            return
        ctx, dims, colors = self.ctx, self.ctx.dims, self.ctx.colors
        first_row = dims.top + TOC_TITLE_SIZE + 14
        per_page = rows_per_page(dims.bottom - first_row, TOC_ROW)
        count = math.ceil(len(self.entries) / per_page)
        self.shift = PageShift(self.insert_offset, count)

        for n in range(count):
            page, page_index = ctx.new_page(pno=self.insert_offset + n)
            title = "Table of Contents" if n == 0 else f"Table of Contents ({n + 1})"
            self._title(page, title, TOC_TITLE_SIZE)
            self.contents_pages.append(page_index)

            y = first_row
            for entry in self.entries[n * per_page:(n + 1) * per_page]:
                target = self.shift.apply(entry.page_index)
                baseline = y + TOC_FONT_SIZE
                number = str(target + 1)
                ctx.add_text(page, entry.label, dims.left, baseline, TOC_FONT_SIZE)
                ctx.add_text(page, number, dims.right - text_width(number, TOC_FONT_SIZE), baseline,
                             TOC_FONT_SIZE, colors.text_muted)
                self.links.add(page_index, fitz.Rect(dims.left, y, dims.right, y + TOC_ROW), target)
                y += TOC_ROW

        logger.info("Contents: %d page(s) for %d entries", count, len(self.entries))

    # -------------------------------------------------------------------------
    # Footer navigation
    # -------------------------------------------------------------------------

    def add_footer_links(self):
        ctx, dims = self.ctx, self.ctx.dims
        last = len(self.doc) - 1
        contents = self.contents_pages[0] if self.contents_pages else None
        baseline = dims.bottom + (dims.height - dims.bottom) / 2 + 2

        for page_index in range(self.insert_offset, last + 1):
            targets = []
            if page_index > 0:
                targets.append((FOOTER_PREV, page_index - 1))
            if contents is not None:
                targets.append((FOOTER_CONTENTS, contents))
            if page_index < last:
                targets.append((FOOTER_NEXT, page_index + 1))

            labels = [label for label, _ in targets]
            x = (dims.width - nav_row_width(labels)) / 2
            slots = ctx.draw_nav_row(self.doc[page_index], labels, x=x, baseline=baseline)
            for slot, (_, dest) in zip(slots, targets):
                self.links.add(page_index, slot_rect(slot, baseline), dest)

    # -------------------------------------------------------------------------
    # Main Generation
    # -------------------------------------------------------------------------

    def generate_content(self):
        config = self.config
        start, end = config.start_date, config.end_date

        if config.type == "daily":
            for day in each_day(start, end):
                if config.include_weekends or not is_weekend(day):
                    self.daily_page(day)
        elif config.type == "weekly":
            for week in each_week(start, end):
                self.weekly_page(week)
        elif config.type == "monthly":
            for month in each_month(start, end):
                self.monthly_page(month)
        else:
            for _ in range(NOTEBOOK_PAGES):
                self.notebook_page(config.type)

    def generate(self) -> fitz.Document:
        config = self.config
        logger.info("Generating %s planner %s .. %s", config.type, config.start_date, config.end_date)

        if config.include_cover:
            generate_cover(self.ctx, planner_title(config), config.start_date, config.end_date)
            self.insert_offset = len(self.doc)

        self.generate_content()
        self.insert_contents()
        self.refs = shift_refs(self.entries, self.shift)

        if self.entries:
            self.add_footer_links()
        if config.page_numbers:
            self.ctx.draw_page_numbers(first=self.insert_offset)

        count = self.links.apply(self.doc)
        logger.info("Generated %d pages, %d links", len(self.doc), count)
        return self.doc
