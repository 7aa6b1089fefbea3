"""
Navigation label sets and target resolution.

nav_items() is the single source of a page's navigation row. Section
generators call it to draw the row while the registry does not exist yet;
the link pass calls it again with the same inputs and resolves each item
against the finished registry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .refs import PageRef, PageType
from .registry import PageRegistry


class NavTarget(str, Enum):
    INDEX = "index"
    FUTURE = "future"
    MONTHLY = "monthly"
    MONTHLY_TASKS = "monthly-tasks"
    WEEKLY = "weekly"
    PREV = "prev"
    NEXT = "next"


@dataclass(frozen=True)
class NavItem:
    label: str
    target: NavTarget
    key: Optional[str] = None


@dataclass(frozen=True)
class SectionFlags:
    """Which sections exist; decided from configuration before drawing."""
    has_index: bool = True
    has_future_log: bool = False
    has_monthly_log: bool = False
    has_weekly_review: bool = False


PREV = NavItem("<", NavTarget.PREV)
NEXT = NavItem(">", NavTarget.NEXT)


def nav_items(
    page_type: PageType,
    flags: SectionFlags,
    year_month: Optional[str] = None,
    week_key: Optional[str] = None,
) -> List[NavItem]:
    """Navigation row for a page, in drawing order."""
    items: List[NavItem] = []

    def common():
        if flags.has_index:
            items.append(NavItem("Index", NavTarget.INDEX))
        if flags.has_future_log:
            items.append(NavItem("Future Log", NavTarget.FUTURE))

    if page_type is PageType.DAILY:
        common()
        if flags.has_monthly_log:
            items.append(NavItem("Monthly", NavTarget.MONTHLY, year_month))
            items.append(NavItem("Tasks", NavTarget.MONTHLY_TASKS, year_month))
        if flags.has_weekly_review:
            items.append(NavItem("Weekly", NavTarget.WEEKLY, week_key))

    elif page_type is PageType.WEEKLY:
        items.append(PREV)
        common()
        if flags.has_monthly_log:
            items.append(NavItem("Monthly", NavTarget.MONTHLY, year_month))
            items.append(NavItem("Tasks", NavTarget.MONTHLY_TASKS, year_month))
        items.append(NEXT)

    elif page_type is PageType.MONTHLY:
        items.append(PREV)
        common()
        items.append(NavItem("Tasks", NavTarget.MONTHLY_TASKS, year_month))
        items.append(NEXT)

    elif page_type is PageType.MONTHLY_TASKS:
        items.append(PREV)
        common()
        items.append(NavItem("Calendar", NavTarget.MONTHLY, year_month))
        items.append(NEXT)

    elif page_type is PageType.FUTURE:
        if flags.has_index:
            items.append(NavItem("Index", NavTarget.INDEX))

    elif page_type is PageType.KEY:
        common()

    elif page_type is PageType.COLLECTION:
        items.append(PREV)
        if flags.has_index:
            items.append(NavItem("Index", NavTarget.INDEX))
        items.append(NEXT)

    elif page_type is PageType.INDEX:
        items.append(PREV)
        if flags.has_future_log:
            items.append(NavItem("Future Log", NavTarget.FUTURE))
        items.append(NEXT)

    return items


def nav_items_for_ref(ref: PageRef, flags: SectionFlags) -> List[NavItem]:
    return nav_items(
        ref.kind,
        flags,
        year_month=getattr(ref, "year_month", None),
        week_key=getattr(ref, "week_key", None),
    )


def resolve_nav_target(item: NavItem, ref: PageRef, registry: PageRegistry) -> Optional[int]:
    """Physical page for a nav item, or None when there is nothing to link to."""
    target = item.target

    if target is NavTarget.INDEX:
        return registry.index_page

    if target is NavTarget.FUTURE:
        return registry.future_log_pages[0] if registry.future_log_pages else None

    if target is NavTarget.MONTHLY:
        return registry.monthly_cal_pages.get(item.key) if item.key else None

    if target is NavTarget.MONTHLY_TASKS:
        return registry.monthly_tasks_pages.get(item.key) if item.key else None

    if target is NavTarget.WEEKLY:
        return registry.weekly_pages.get(item.key) if item.key else None

    if target in (NavTarget.PREV, NavTarget.NEXT):
        pages = registry.pages_by_type.get(ref.kind, [])
        if ref.page_index not in pages:
            return None
        position = pages.index(ref.page_index)
        if target is NavTarget.PREV:
            return pages[position - 1] if position > 0 else None
        return pages[position + 1] if position < len(pages) - 1 else None

    return None
