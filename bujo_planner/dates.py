"""
Calendar helpers shared by every section.

Weeks start on Sunday everywhere. Week 1 is the week containing January 1,
so the last days of December can belong to week 1 of the following year.
Every week number in the planner must come from week_number(), and every
week lookup key from week_key().
"""

import calendar
import datetime
from typing import Iterator, List

MONTH_NAMES = ["January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December"]
MONTH_ABBREVS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                 "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
# Sunday-first
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DAY_LETTERS = ["S", "M", "T", "W", "T", "F", "S"]


def date_key(day: datetime.date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def year_month(day: datetime.date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def parse_year_month(key: str) -> datetime.date:
    year, month = key.split("-")
    return datetime.date(int(year), int(month), 1)


def sunday_index(day: datetime.date) -> int:
    """Day of week with Sunday = 0."""
    return (day.weekday() + 1) % 7


def is_weekend(day: datetime.date) -> bool:
    return sunday_index(day) in (0, 6)


def week_start(day: datetime.date) -> datetime.date:
    return day - datetime.timedelta(days=sunday_index(day))


def week_number(day: datetime.date) -> int:
    start = week_start(day)
    if start >= week_start(datetime.date(day.year + 1, 1, 1)):
        return 1
    first = week_start(datetime.date(day.year, 1, 1))
    return (start - first).days // 7 + 1


def week_year(day: datetime.date) -> int:
    """Year whose week numbering the week of `day` belongs to."""
    if week_start(day) >= week_start(datetime.date(day.year + 1, 1, 1)):
        return day.year + 1
    return day.year


def week_key(day: datetime.date) -> str:
    """Year-qualified week key, e.g. '2026-W01' for the week of 2025-12-28."""
    return f"{week_year(day):04d}-W{week_number(day):02d}"


def days_in_month(month: datetime.date) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def add_months(month: datetime.date, count: int) -> datetime.date:
    index = month.year * 12 + (month.month - 1) + count
    return datetime.date(index // 12, index % 12 + 1, 1)


def ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def each_day(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    day = start
    while day <= end:
        yield day
        day += datetime.timedelta(days=1)


def each_month(start: datetime.date, end: datetime.date) -> List[datetime.date]:
    """First-of-month dates for every month touched by [start, end]."""
    if end < start:
        return []
    months = []
    month = start.replace(day=1)
    while month <= end:
        months.append(month)
        month = add_months(month, 1)
    return months


def each_week(start: datetime.date, end: datetime.date) -> List[datetime.date]:
    """Sunday of every week overlapping [start, end]."""
    if end < start:
        return []
    weeks = []
    sunday = week_start(start)
    while sunday <= end:
        weeks.append(sunday)
        sunday += datetime.timedelta(days=7)
    return weeks
