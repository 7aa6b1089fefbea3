"""Key page: the rapid-logging signifiers."""

import fitz

from ..canvas import PlannerContext
from ..navigation import nav_items
from ..refs import KeyPageRef, PageType

BULLET_KEY = [
    ("dot", "Task", "Something to be done"),
    ("x", "Complete", "Accomplished task"),
    (">", "Migrated", "Moved to future log"),
    ("<", "Scheduled", "Moved to specific date"),
    ("circle", "Event", "Date-related entry"),
    ("-", "Note", "Facts, ideas, thoughts"),
    ("*", "Priority", "Important signifier"),
    ("!", "Inspiration", "Great ideas to revisit"),
]

SYMBOL_SIZE = 6


def draw_bullet_symbol(ctx: PlannerContext, page: fitz.Page, symbol: str,
                       x: float, y: float, size: float) -> bool:
    """Draw a vector signifier in the box (x, y, x+size, y+size); False for text symbols."""
    center = fitz.Point(x + size / 2, y + size / 2)
    if symbol == "dot":
        page.draw_circle(center, size / 2, color=ctx.colors.text, fill=ctx.colors.text)
    elif symbol == "circle":
        page.draw_circle(center, size / 2, color=ctx.colors.text,
                         fill=ctx.colors.background, width=1)
    elif symbol == "x":
        ctx.draw_line(page, x, y, x + size, y + size, ctx.colors.text, width=1.5)
        ctx.draw_line(page, x + size, y, x, y + size, ctx.colors.text, width=1.5)
    else:
        return False
    return True


def generate_key_page(ctx: PlannerContext) -> KeyPageRef:
    page, page_index = ctx.new_page()
    dims, density = ctx.dims, ctx.density

    labels = [item.label for item in nav_items(PageType.KEY, ctx.flags)]
    content_top = ctx.draw_header(page, labels, "Key")
    content_top = ctx.draw_subtitle(page, "Rapid Logging Signifiers", content_top)

    available = dims.bottom - content_top - 10
    line_height = min(available / len(BULLET_KEY), density.line_height * 2)
    y = content_top + 10

    for symbol, label, description in BULLET_KEY:
        if not draw_bullet_symbol(ctx, page, symbol, dims.left, y - SYMBOL_SIZE, SYMBOL_SIZE):
            ctx.add_text(page, symbol, dims.left, y, 10, bold=True)
        ctx.add_text(page, label, dims.left + 20, y, density.font_size, bold=True)
        ctx.add_text(page, description, dims.left + 20, y + 10, density.font_size - 1,
                     ctx.colors.text_muted)
        y += line_height

    return KeyPageRef(label="Key", page_index=page_index)
