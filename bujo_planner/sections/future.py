"""Future log: a multi-month overview for forward scheduling."""

import datetime
import math
from typing import List

from ..canvas import PlannerContext
from ..dates import MONTH_NAMES, add_months
from ..layout import content_start
from ..navigation import nav_items
from ..pagination import paginate_rows
from ..refs import FutureLogRef, PageType

MIN_MONTH_HEIGHT = 70       # Scaled by the density spacing multiplier
MAX_MONTHS_PER_PAGE = 4


def future_log_title(page_num: int) -> str:
    return "Future Log" if page_num == 0 else f"Future Log ({page_num + 1})"


def generate_future_log(ctx: PlannerContext, start: datetime.date, months: int) -> List[FutureLogRef]:
    dims, density, colors = ctx.dims, ctx.density, ctx.colors
    first_month = start.replace(day=1)

    top = content_start(dims)
    available = dims.bottom - top
    # Half a row of slack keeps floor(available / min_row) at the cap
    min_row = max(math.floor(MIN_MONTH_HEIGHT * density.spacing + 0.5),
                  available / (MAX_MONTHS_PER_PAGE + 0.5))
    plan = paginate_rows(months, available, min_row, min_row)

    labels = [item.label for item in nav_items(PageType.FUTURE, ctx.flags)]
    refs = []

    for page_num, rows in enumerate(plan):
        page, page_index = ctx.new_page()
        title = future_log_title(page_num)
        ctx.draw_header(page, labels, title)

        for slot in range(rows.count):
            month = add_months(first_month, rows.first + slot)
            month_y = top + slot * rows.row_height

            ctx.add_text(page, f"{MONTH_NAMES[month.month - 1]} {month.year}",
                         dims.left, month_y + density.font_size, density.font_size, bold=True)
            ctx.draw_line(page, dims.left, month_y + 12, dims.right, month_y + 12,
                          colors.line, width=0.5)

            note_lines = math.floor((rows.row_height - 30) / density.line_height)
            for line in range(note_lines):
                line_y = month_y + 22 + line * density.line_height
                if line_y > month_y + rows.row_height - 10:
                    break
                ctx.draw_line(page, dims.left, line_y, dims.right, line_y, colors.line_faint)

        refs.append(FutureLogRef(label=title, page_index=page_index))

    return refs
