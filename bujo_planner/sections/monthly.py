"""
Monthly log: a calendar of day rows plus a tasks area.

A month that fits at the preferred row height shares one page with its
tasks column (registered as both the calendar and the tasks page).
Otherwise the calendar is paginated into one or more pages followed by a
separate tasks page.

CalendarGeometry is the only place row positions are computed; the link
pass uses it to put date links over the rows drawn here.
"""

import datetime
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import fitz

from ..canvas import PlannerContext
from ..config import DensityProfile
from ..dates import DAY_LETTERS, MONTH_NAMES, date_key, days_in_month, is_weekend, sunday_index, year_month
from ..layout import Dimensions, content_start
from ..navigation import nav_items
from ..pagination import RowPage, fits_on_one_page, locate_row, paginate_rows
from ..refs import MonthlyRef, MonthlyTasksRef, PageRef, PageType

DATE_LABEL_WIDTH = 28       # Day number plus day letter
DAY_LETTER_OFFSET = 18
SEPARATOR_OFFSET = 30
BOTTOM_GAP = 10
CALENDAR_COLUMN_RATIO = 0.4


@dataclass(frozen=True)
class CalendarGeometry:
    month: datetime.date
    days: int
    left: float
    top: float
    available: float
    font_size: float
    plan: Tuple[RowPage, ...]
    combined: bool

    @classmethod
    def for_month(cls, dims: Dimensions, density: DensityProfile,
                  month: datetime.date) -> "CalendarGeometry":
        month = month.replace(day=1)
        days = days_in_month(month)
        top = content_start(dims)
        available = dims.bottom - top - BOTTOM_GAP
        min_row = math.floor(density.line_height * 0.7 + 0.5)
        preferred_row = density.line_height
        return cls(
            month=month,
            days=days,
            left=dims.left,
            top=top,
            available=available,
            font_size=density.font_size,
            plan=tuple(paginate_rows(days, available, min_row, preferred_row)),
            combined=fits_on_one_page(days, available, preferred_row),
        )

    @property
    def parts(self) -> int:
        return len(self.plan)

    def row_top(self, day: int) -> Tuple[int, float]:
        """(calendar part, y of the row's top edge) for a day of the month."""
        part, slot = locate_row(list(self.plan), day - 1)
        return part, self.top + slot * self.plan[part].row_height

    def date_rect(self, day: int) -> Tuple[int, fitz.Rect]:
        """(calendar part, clickable rectangle over the day label)."""
        part, y = self.row_top(day)
        height = min(self.plan[part].row_height, self.font_size + 4)
        return part, fitz.Rect(self.left - 2, y, self.left + DATE_LABEL_WIDTH, y + height)

    def days_on_part(self, part: int) -> range:
        rows = self.plan[part]
        return range(rows.first + 1, rows.first + rows.count + 1)


def _month_title(month: datetime.date) -> str:
    return f"{MONTH_NAMES[month.month - 1]} {month.year}"


def _draw_day_rows(ctx: PlannerContext, page: fitz.Page, geometry: CalendarGeometry,
                   part: int, column_right: float):
    colors = ctx.colors
    for day in geometry.days_on_part(part):
        _, y = geometry.row_top(day)
        date = geometry.month.replace(day=day)
        weekend = is_weekend(date)
        baseline = y + geometry.font_size + 1

        ctx.add_text(page, f"{day:2d}", geometry.left, baseline, geometry.font_size,
                     colors.text_muted if weekend else colors.text)
        ctx.add_text(page, DAY_LETTERS[sunday_index(date)], geometry.left + DAY_LETTER_OFFSET,
                     baseline, geometry.font_size, colors.text_muted if weekend else colors.accent)
        ctx.draw_line(page, geometry.left + SEPARATOR_OFFSET, y, column_right, y, colors.line_faint)


def _monthly_ref_fields(month: datetime.date) -> Dict:
    return {"date": month, "month_index": month.month - 1, "year_month": year_month(month)}


def generate_monthly_log(ctx: PlannerContext, month: datetime.date) -> List[PageRef]:
    dims = ctx.dims
    geometry = CalendarGeometry.for_month(dims, ctx.density, month)
    month = geometry.month
    month_name = MONTH_NAMES[month.month - 1]
    key = year_month(month)
    fields = _monthly_ref_fields(month)

    cal_labels = [item.label for item in nav_items(PageType.MONTHLY, ctx.flags, key)]
    refs: List[PageRef] = []

    if geometry.combined:
        page, page_index = ctx.new_page()
        content_top = ctx.draw_header(page, cal_labels, _month_title(month))
        divider_x = dims.left + dims.content_width * CALENDAR_COLUMN_RATIO

        ctx.draw_line(page, divider_x, content_top, divider_x, dims.bottom, ctx.colors.line, width=0.5)
        _draw_day_rows(ctx, page, geometry, 0, divider_x - 5)

        ctx.add_text(page, "Tasks", divider_x + 8, content_top + ctx.density.font_size,
                     ctx.density.font_size, ctx.colors.accent, bold=True)
        ctx.draw_page_background(page, ctx.daily_page_style, content_top + 12 + ctx.density.font_size,
                                 dims.bottom, left=divider_x + 8)

        refs.append(MonthlyRef(label=month_name, page_index=page_index, **fields))
        refs.append(MonthlyTasksRef(label=f"{month_name} (Tasks)", page_index=page_index, **fields))
        return refs

    for part in range(geometry.parts):
        page, page_index = ctx.new_page()
        suffix = f" ({part + 1}/{geometry.parts})" if geometry.parts > 1 else ""
        ctx.draw_header(page, cal_labels, _month_title(month) + suffix)
        _draw_day_rows(ctx, page, geometry, part, dims.right)

        if geometry.parts > 1:
            label = f"{month_name} Cal {part + 1}"
        else:
            label = f"{month_name} (Calendar)"
        refs.append(MonthlyRef(label=label, page_index=page_index, part=part + 1,
                               parts=geometry.parts, **fields))

    task_labels = [item.label for item in nav_items(PageType.MONTHLY_TASKS, ctx.flags, key)]
    page, page_index = ctx.new_page()
    content_top = ctx.draw_header(page, task_labels, f"{month_name} - Tasks")
    ctx.draw_page_background(page, ctx.daily_page_style, content_top, dims.bottom)
    refs.append(MonthlyTasksRef(label=f"{month_name} (Tasks)", page_index=page_index, **fields))

    return refs


def calendar_date_links(geometry: CalendarGeometry, part_pages: Sequence[int],
                        daily_pages: Dict[str, int]) -> List[Tuple[int, fitz.Rect, int]]:
    """(source page, rect, daily page) for every calendar day with a daily page.

    `part_pages` holds the final physical page of each calendar part, in order.
    """
    links = []
    for day in range(1, geometry.days + 1):
        dest = daily_pages.get(date_key(geometry.month.replace(day=day)))
        if dest is None:
            continue
        part, rect = geometry.date_rect(day)
        if part < len(part_pages):
            links.append((part_pages[part], rect, dest))
    return links
