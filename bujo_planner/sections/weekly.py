"""Weekly review pages, one per Sunday-started week."""

import datetime
import math

import fitz

from ..canvas import PlannerContext
from ..dates import MONTH_ABBREVS, week_key, week_number, year_month
from ..navigation import nav_items
from ..refs import PageType, WeeklyRef

SECTIONS = ["What went well", "What to improve", "Goals for next week"]

# Section headings relative to the density header size
SECTION_TITLE_SCALE = 0.6


def _short_date(day: datetime.date) -> str:
    return f"{MONTH_ABBREVS[day.month - 1]} {day.day}"


def _draw_section(ctx: PlannerContext, page: fitz.Page, title: str, top: float, height: float):
    dims, colors = ctx.dims, ctx.colors
    line_height = ctx.density.line_height

    ctx.add_text(page, title, dims.left, top + 8, ctx.density.header_size * SECTION_TITLE_SCALE,
                 colors.accent, bold=True)
    ctx.draw_line(page, dims.left, top + 10, dims.right, top + 10, colors.line, width=0.5)

    for i in range(math.floor((height - 30) / line_height)):
        line_y = top + 20 + i * line_height
        ctx.draw_dot(page, dims.left + 4, line_y - 3, 1.5, colors.dot)
        ctx.draw_line(page, dims.left + 12, line_y - 3, dims.right, line_y - 3, colors.line_faint)


def generate_weekly_review(ctx: PlannerContext, week_start: datetime.date) -> WeeklyRef:
    page, page_index = ctx.new_page()
    week_num = week_number(week_start)
    ref = WeeklyRef(
        label=f"Week {week_num}",
        page_index=page_index,
        date=week_start,
        month_index=week_start.month - 1,
        year_month=year_month(week_start),
        week_index=week_num,
        week_key=week_key(week_start),
    )

    items = nav_items(PageType.WEEKLY, ctx.flags, ref.year_month, ref.week_key)
    content_top = ctx.draw_header(page, [item.label for item in items], ref.label)

    week_end = week_start + datetime.timedelta(days=6)
    content_top = ctx.draw_subtitle(page, f"{_short_date(week_start)} - {_short_date(week_end)}",
                                    content_top)

    section_height = (ctx.dims.bottom - content_top) / len(SECTIONS)
    for i, title in enumerate(SECTIONS):
        _draw_section(ctx, page, title, content_top + i * section_height, section_height)

    return ref
