"""Cover page: title, date range and a light ornament frame."""

import datetime

import fitz

from .canvas import PlannerContext
from .config import PlannerConfig
from .dates import MONTH_NAMES
from .layout import text_width

PLANNER_TYPE_NAMES = {
    "bujo": "Bullet Journal",
    "daily": "Daily Planner",
    "weekly": "Weekly Planner",
    "monthly": "Monthly Planner",
    "dotgrid": "Dot Grid Notebook",
    "lined": "Lined Notebook",
    "blank": "Notebook",
}

CORNER_SIZE = 15
ORNAMENT_WIDTH = 40


def planner_title(config: PlannerConfig) -> str:
    return config.title or PLANNER_TYPE_NAMES.get(config.type, "Planner")


def _long_date(day: datetime.date) -> str:
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def _centered_text(ctx: PlannerContext, page: fitz.Page, text: str, baseline: float,
                   font_size: float, color, bold: bool = False):
    width = text_width(text, font_size, bold)
    ctx.add_text(page, text, (ctx.dims.width - width) / 2, baseline, font_size, color, bold=bold)


def _draw_corners(ctx: PlannerContext, page: fitz.Page):
    w, h, m = ctx.dims.width, ctx.dims.height, ctx.dims.margin
    accent = ctx.colors.accent
    for cx, cy, dx, dy in ((m, m, 1, 1), (w - m, m, -1, 1), (m, h - m, 1, -1), (w - m, h - m, -1, -1)):
        ctx.draw_line(page, cx, cy, cx + dx * CORNER_SIZE, cy, accent, width=0.75)
        ctx.draw_line(page, cx, cy, cx, cy + dy * CORNER_SIZE, accent, width=0.75)


def generate_cover(ctx: PlannerContext, title: str, start: datetime.date, end: datetime.date) -> int:
    """Append the cover page and return its index."""
    page, page_index = ctx.new_page()
    dims, colors = ctx.dims, ctx.colors
    center_x, center_y = dims.width / 2, dims.height / 2
    m = dims.margin

    # Frame lines
    ctx.draw_line(page, m * 2, m * 2, dims.width - m * 2, m * 2, colors.accent, width=1)
    ctx.draw_line(page, m * 2, dims.height - m * 2, dims.width - m * 2, dims.height - m * 2,
                  colors.accent, width=1)
    _draw_corners(ctx, page)

    # Ornament above the title
    ornament_y = center_y - 60
    ctx.draw_line(page, center_x - ORNAMENT_WIDTH, ornament_y, center_x - 8, ornament_y,
                  colors.text_muted, width=0.5)
    ctx.draw_dot(page, center_x, ornament_y, 3, colors.accent)
    ctx.draw_line(page, center_x + 8, ornament_y, center_x + ORNAMENT_WIDTH, ornament_y,
                  colors.text_muted, width=0.5)

    title_size = min(24, dims.width / 12)
    _centered_text(ctx, page, title, center_y - 20, title_size, colors.text, bold=True)

    subtitle_size = min(10, dims.width / 30)
    _centered_text(ctx, page, f"{_long_date(start)} - {_long_date(end)}", center_y + 10,
                   subtitle_size, colors.text_muted)

    ctx.draw_line(page, center_x - ORNAMENT_WIDTH, center_y + 40, center_x + ORNAMENT_WIDTH,
                  center_y + 40, colors.text_muted, width=0.5)

    return page_index
