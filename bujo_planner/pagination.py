"""
Row pagination shared by the monthly calendar, the future log and the
link pass that re-locates calendar rows.

Any caller that needs to find a row again must call paginate_rows() with
exactly the inputs used when the rows were drawn.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class RowPage:
    """Rows [first, first + count) placed on one page."""
    first: int
    count: int
    row_height: float


def fits_on_one_page(n: int, available: float, preferred_row: float) -> bool:
    return n * preferred_row <= available


def rows_per_page(available: float, min_row: float) -> int:
    return max(1, math.floor(available / min_row))


def paginate_rows(n: int, available: float, min_row: float, preferred_row: float) -> List[RowPage]:
    """Split n rows across pages of height `available`.

    Rows are stretched so every page, including a partially filled last
    page, is filled exactly: row height is available / rows on that page.
    """
    if n <= 0:
        return []
    if fits_on_one_page(n, available, preferred_row):
        return [RowPage(first=0, count=n, row_height=available / n)]

    per_page = rows_per_page(available, min_row)
    pages = []
    for page_num in range(math.ceil(n / per_page)):
        first = page_num * per_page
        count = min(per_page, n - first)
        pages.append(RowPage(first=first, count=count, row_height=available / count))
    return pages


def locate_row(pages: List[RowPage], row: int) -> Tuple[int, int]:
    """Return (page number, slot on that page) for a row."""
    for page_num, page in enumerate(pages):
        if page.first <= row < page.first + page.count:
            return page_num, row - page.first
    raise IndexError(f"row {row} is outside the paginated range")
