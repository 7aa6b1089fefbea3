"""Section page generators. Each appends pages and returns their refs."""

from .collection import generate_collection_pages
from .daily import generate_daily_log
from .future import generate_future_log
from .key import generate_key_page
from .monthly import CalendarGeometry, generate_monthly_log
from .weekly import generate_weekly_review

__all__ = [
    "CalendarGeometry",
    "generate_collection_pages",
    "generate_daily_log",
    "generate_future_log",
    "generate_key_page",
    "generate_monthly_log",
    "generate_weekly_review",
]
