import datetime

from bujo_planner.refs import (
    CollectionRef,
    DailyRef,
    FutureLogRef,
    IndexRef,
    KeyPageRef,
    MonthlyRef,
    MonthlyTasksRef,
    PageType,
    WeeklyRef,
)
from bujo_planner.registry import build_registry

JAN = datetime.date(2025, 1, 1)


def test_first_registration_wins_for_monthly_and_weekly():
    refs = [
        MonthlyRef("January Cal 1", 3, date=JAN, month_index=0, year_month="2025-01", part=1, parts=2),
        MonthlyRef("January Cal 2", 4, date=JAN, month_index=0, year_month="2025-01", part=2, parts=2),
        MonthlyTasksRef("January (Tasks)", 5, date=JAN, month_index=0, year_month="2025-01"),
        MonthlyTasksRef("January (Tasks)", 9, date=JAN, month_index=0, year_month="2025-01"),
        WeeklyRef("Week 1", 6, date=JAN, year_month="2024-12", week_index=1, week_key="2025-W01"),
        WeeklyRef("Week 1", 40, date=JAN, year_month="2024-12", week_index=1, week_key="2025-W01"),
    ]
    registry = build_registry(refs, index_page=1)

    assert registry.monthly_cal_pages == {"2025-01": 3}
    assert registry.monthly_tasks_pages == {"2025-01": 5}
    assert registry.weekly_pages == {"2025-W01": 6}
    assert registry.pages_by_type[PageType.MONTHLY] == [3, 4]
    assert registry.index_page == 1


def test_refs_missing_their_key_are_skipped():
    refs = [
        MonthlyRef("Orphan", 2),
        WeeklyRef("Orphan", 3),
        DailyRef("Orphan", 4),
        DailyRef("Wed", 5, date=datetime.date(2025, 1, 1), year_month="2025-01", week_index=1,
                 week_key="2025-W01"),
    ]
    registry = build_registry(refs, index_page=None)

    assert registry.monthly_cal_pages == {}
    assert registry.weekly_pages == {}
    assert registry.daily_pages == {"2025-01-01": 5}
    assert registry.pages_by_type[PageType.DAILY] == [4, 5]


def test_lists_and_singletons():
    refs = [
        IndexRef("Index", 1),
        KeyPageRef("Key", 2),
        FutureLogRef("Future Log", 3),
        FutureLogRef("Future Log (2)", 4),
        CollectionRef("Collection 1", 10, number=1),
        CollectionRef("Collection 2", 11, number=2),
    ]
    registry = build_registry(refs, index_page=1)

    assert registry.key_page == 2
    assert registry.future_log_pages == [3, 4]
    assert registry.collection_pages == [10, 11]
    assert registry.pages_by_type[PageType.INDEX] == [1]


def test_empty_registry():
    registry = build_registry([], index_page=None)

    assert registry.index_page is None
    assert registry.keys() == {"monthly": [], "monthly-tasks": [], "weekly": [], "daily": []}
    assert all(pages == [] for pages in registry.pages_by_type.values())


def test_week_one_of_next_year_gets_its_own_key():
    refs = [
        WeeklyRef("Week 1", 6, date=datetime.date(2024, 12, 29), year_month="2024-12",
                  week_index=1, week_key="2025-W01"),
        WeeklyRef("Week 1", 58, date=datetime.date(2025, 12, 28), year_month="2025-12",
                  week_index=1, week_key="2026-W01"),
    ]
    registry = build_registry(refs, index_page=1)

    assert registry.weekly_pages == {"2025-W01": 6, "2026-W01": 58}
