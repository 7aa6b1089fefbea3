"""
Typed page references.

Each section generator returns one ref per page it appends, carrying the
page's physical index at the moment it was appended. Index pages are
inserted afterwards, so content refs are remapped exactly once through a
PageShift before the registry is built.
"""

import datetime
from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Iterable, List, Optional


class PageType(str, Enum):
    KEY = "key"
    FUTURE = "future"
    MONTHLY = "monthly"
    MONTHLY_TASKS = "monthly-tasks"
    WEEKLY = "weekly"
    DAILY = "daily"
    COLLECTION = "collection"
    INDEX = "index"


@dataclass(frozen=True)
class PageRef:
    label: str
    page_index: int

    kind: ClassVar[PageType]

    def moved_to(self, page_index: int) -> "PageRef":
        return replace(self, page_index=page_index)


@dataclass(frozen=True)
class KeyPageRef(PageRef):
    kind: ClassVar[PageType] = PageType.KEY


@dataclass(frozen=True)
class FutureLogRef(PageRef):
    kind: ClassVar[PageType] = PageType.FUTURE


@dataclass(frozen=True)
class MonthlyRef(PageRef):
    """A monthly calendar page; `part` counts continuation pages from 1."""
    date: Optional[datetime.date] = None
    month_index: Optional[int] = None
    year_month: Optional[str] = None
    part: int = 1
    parts: int = 1

    kind: ClassVar[PageType] = PageType.MONTHLY


@dataclass(frozen=True)
class MonthlyTasksRef(PageRef):
    date: Optional[datetime.date] = None
    month_index: Optional[int] = None
    year_month: Optional[str] = None

    kind: ClassVar[PageType] = PageType.MONTHLY_TASKS


@dataclass(frozen=True)
class WeeklyRef(PageRef):
    date: Optional[datetime.date] = None
    month_index: Optional[int] = None
    year_month: Optional[str] = None
    week_index: Optional[int] = None
    week_key: Optional[str] = None

    kind: ClassVar[PageType] = PageType.WEEKLY


@dataclass(frozen=True)
class DailyRef(PageRef):
    date: Optional[datetime.date] = None
    month_index: Optional[int] = None
    year_month: Optional[str] = None
    week_index: Optional[int] = None
    week_key: Optional[str] = None

    kind: ClassVar[PageType] = PageType.DAILY


@dataclass(frozen=True)
class CollectionRef(PageRef):
    number: int = 0

    kind: ClassVar[PageType] = PageType.COLLECTION


@dataclass(frozen=True)
class IndexRef(PageRef):
    number: int = 1

    kind: ClassVar[PageType] = PageType.INDEX


@dataclass(frozen=True)
class PageShift:
    """`count` pages inserted at `insert_offset`; later pages move down by count."""
    insert_offset: int
    count: int

    def apply(self, page_index: int) -> int:
        if page_index >= self.insert_offset:
            return page_index + self.count
        return page_index


NO_SHIFT = PageShift(insert_offset=0, count=0)


def shift_refs(refs: Iterable[PageRef], shift: PageShift) -> List[PageRef]:
    return [ref.moved_to(shift.apply(ref.page_index)) for ref in refs]


def refs_of(refs: Iterable[PageRef], kind: PageType) -> List[PageRef]:
    return [ref for ref in refs if ref.kind is kind]
