import dataclasses
import datetime

import pytest

from bujo_planner.refs import (
    NO_SHIFT,
    DailyRef,
    KeyPageRef,
    MonthlyRef,
    PageShift,
    PageType,
    refs_of,
    shift_refs,
)


def test_shift_moves_pages_at_or_after_the_insert_point():
    shift = PageShift(insert_offset=1, count=2)

    assert shift.apply(0) == 0
    assert shift.apply(1) == 3
    assert shift.apply(10) == 12


def test_key_page_lands_after_cover_and_index():
    # Cover at 0, key appended at 1, two index pages inserted at 1
    key = KeyPageRef(label="Key", page_index=1)
    [shifted] = shift_refs([key], PageShift(1, 2))
    assert shifted.page_index == 3


def test_shift_returns_new_refs_and_keeps_fields():
    day = datetime.date(2025, 1, 15)
    ref = DailyRef(label="Wed, Jan 15", page_index=20, date=day, month_index=0,
                   year_month="2025-01", week_index=3)
    [shifted] = shift_refs([ref], PageShift(1, 4))

    assert ref.page_index == 20
    assert shifted.page_index == 24
    assert shifted.date == day and shifted.week_index == 3
    assert isinstance(shifted, DailyRef)


def test_refs_are_immutable():
    ref = KeyPageRef(label="Key", page_index=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ref.page_index = 5


def test_no_shift_is_identity():
    assert NO_SHIFT.apply(7) == 7


def test_kind_and_filter():
    refs = [KeyPageRef("Key", 1), MonthlyRef("January", 2, year_month="2025-01")]

    assert refs[1].kind is PageType.MONTHLY
    assert refs_of(refs, PageType.KEY) == [refs[0]]
