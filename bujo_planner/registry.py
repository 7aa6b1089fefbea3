"""Page registry: every page reference indexed by type and semantic key."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .dates import date_key
from .refs import (
    DailyRef,
    MonthlyRef,
    MonthlyTasksRef,
    PageRef,
    PageType,
    WeeklyRef,
)


@dataclass
class PageRegistry:
    index_page: Optional[int] = None
    future_log_pages: List[int] = field(default_factory=list)
    monthly_cal_pages: Dict[str, int] = field(default_factory=dict)
    monthly_tasks_pages: Dict[str, int] = field(default_factory=dict)
    weekly_pages: Dict[str, int] = field(default_factory=dict)
    daily_pages: Dict[str, int] = field(default_factory=dict)
    collection_pages: List[int] = field(default_factory=list)
    key_page: Optional[int] = None
    pages_by_type: Dict[PageType, List[int]] = field(
        default_factory=lambda: {kind: [] for kind in PageType}
    )

    def keys(self) -> Dict[str, List]:
        """Registry keys in a comparable form."""
        return {
            "monthly": sorted(self.monthly_cal_pages),
            "monthly-tasks": sorted(self.monthly_tasks_pages),
            "weekly": sorted(self.weekly_pages),
            "daily": sorted(self.daily_pages),
        }


def build_registry(refs: Iterable[PageRef], index_page: Optional[int]) -> PageRegistry:
    """Index final (shift-corrected) refs.

    Refs missing the key their type is looked up by are kept out of the
    keyed maps but still take part in prev/next ordering. For monthly
    calendars the first page of a month wins, so continuation pages never
    replace the canonical target.
    """
    registry = PageRegistry(index_page=index_page)

    for ref in refs:
        registry.pages_by_type[ref.kind].append(ref.page_index)

        if ref.kind is PageType.KEY:
            if registry.key_page is None:
                registry.key_page = ref.page_index
        elif ref.kind is PageType.FUTURE:
            registry.future_log_pages.append(ref.page_index)
        elif isinstance(ref, MonthlyRef):
            if ref.year_month:
                registry.monthly_cal_pages.setdefault(ref.year_month, ref.page_index)
        elif isinstance(ref, MonthlyTasksRef):
            if ref.year_month:
                registry.monthly_tasks_pages.setdefault(ref.year_month, ref.page_index)
        elif isinstance(ref, WeeklyRef):
            if ref.week_key:
                registry.weekly_pages.setdefault(ref.week_key, ref.page_index)
        elif isinstance(ref, DailyRef):
            if ref.date is not None:
                registry.daily_pages[date_key(ref.date)] = ref.page_index
        elif ref.kind is PageType.COLLECTION:
            registry.collection_pages.append(ref.page_index)

    return registry
