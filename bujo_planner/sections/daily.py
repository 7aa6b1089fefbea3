"""Daily log pages."""

import datetime

from ..canvas import PlannerContext
from ..dates import (
    DAY_NAMES,
    MONTH_ABBREVS,
    MONTH_NAMES,
    ordinal,
    sunday_index,
    week_key,
    week_number,
    year_month,
)
from ..layout import TITLE_FONT_SIZE
from ..navigation import nav_items
from ..refs import DailyRef, PageType


def daily_title(day: datetime.date) -> str:
    """e.g. 'Monday January 5th'."""
    return f"{DAY_NAMES[sunday_index(day)]} {MONTH_NAMES[day.month - 1]} {ordinal(day.day)}"


def daily_label(day: datetime.date) -> str:
    """e.g. 'Mon, Jan 5'."""
    return f"{DAY_NAMES[sunday_index(day)][:3]}, {MONTH_ABBREVS[day.month - 1]} {day.day}"


def generate_daily_log(ctx: PlannerContext, day: datetime.date) -> DailyRef:
    page, page_index = ctx.new_page()
    ref = DailyRef(
        label=daily_label(day),
        page_index=page_index,
        date=day,
        month_index=day.month - 1,
        year_month=year_month(day),
        week_index=week_number(day),
        week_key=week_key(day),
    )

    items = nav_items(PageType.DAILY, ctx.flags, ref.year_month, ref.week_key)
    content_top = ctx.draw_header(page, [item.label for item in items], daily_title(day),
                                  TITLE_FONT_SIZE - 1)
    ctx.draw_page_background(page, ctx.daily_page_style, content_top, ctx.dims.bottom)
    return ref
