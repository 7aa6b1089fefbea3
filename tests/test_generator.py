import datetime

import pytest

from bujo_planner.config import DENSITY_PROFILES, BujoConfig
from bujo_planner.errors import GenerationError
from bujo_planner.generator import BulletJournalGenerator, generate_planner
from bujo_planner.layout import Dimensions
from bujo_planner.links import extract_links
from bujo_planner.refs import IndexRef, MonthlyRef, PageType
from bujo_planner.sections import CalendarGeometry
from bujo_planner.sections.weekly import SECTION_TITLE_SCALE
from tests.conftest import make_config


def close(a, b, tol=0.5):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def links_at(page_links, rect):
    """Links whose rectangle contains the center of `rect`."""
    cx, cy = (rect.x0 + rect.x1) / 2, (rect.y0 + rect.y1) / 2
    return [link for link in page_links if link.rect.x0 <= cx <= link.rect.x1 and link.rect.y0 <= cy <= link.rect.y1]


@pytest.fixture(scope="module")
def january():
    return generate_planner(make_config())


@pytest.fixture(scope="module")
def january_links(january):
    return extract_links(january.pdf_bytes)


# -----------------------------------------------------------------------------
# Registry and page order
# -----------------------------------------------------------------------------


def test_every_day_has_a_daily_page(january):
    registry = january.registry

    assert len(registry.daily_pages) == 31
    assert registry.keys()["monthly"] == ["2025-01"]
    assert registry.keys()["weekly"] == ["2025-W01", "2025-W02", "2025-W03", "2025-W04", "2025-W05"]


def test_cover_index_then_content(january):
    registry = january.registry

    assert january.index_pages >= 1
    assert registry.index_page == 1
    assert registry.key_page == 1 + january.index_pages
    assert registry.future_log_pages[0] == registry.key_page + 1
    assert len(registry.future_log_pages) == 2
    assert len(registry.collection_pages) == 10
    assert registry.collection_pages[-1] == january.page_count - 1


def test_refs_match_physical_pages(january, open_pdf):
    doc = open_pdf(january.pdf_bytes)
    for ref in january.refs:
        text = doc[ref.page_index].get_text()
        if ref.kind is PageType.DAILY:
            assert f"{ref.date.day}" in text
        elif ref.kind is PageType.COLLECTION:
            assert ref.label in text
        elif ref.kind is PageType.KEY:
            assert "Rapid Logging Signifiers" in text


def test_page_indices_unique_except_combined_monthly(january):
    seen = {}
    for ref in january.refs:
        seen.setdefault(ref.page_index, []).append(ref.kind)
    for kinds in seen.values():
        assert len(kinds) == 1 or set(kinds) == {PageType.MONTHLY, PageType.MONTHLY_TASKS}


# -----------------------------------------------------------------------------
# Links
# -----------------------------------------------------------------------------


def test_all_link_destinations_exist(january, january_links):
    assert len(january_links) == january.page_count
    for page_links in january_links:
        for link in page_links:
            assert 0 <= link.target_page < january.page_count


def test_calendar_day_links_to_its_daily_page(january, january_links):
    config = make_config()
    geometry = CalendarGeometry.for_month(Dimensions.from_config(config), config.density_profile,
                                          datetime.date(2025, 1, 1))
    part, rect = geometry.date_rect(15)
    calendar_pages = sorted(
        (ref.part, ref.page_index) for ref in january.refs if isinstance(ref, MonthlyRef))
    page = calendar_pages[part][1]

    matching = [link for link in january_links[page] if close(link.rect, rect)]
    assert [link.target_page for link in matching] == [january.registry.daily_pages["2025-01-15"]]


def test_every_calendar_day_is_linked(january, january_links):
    calendar_pages = {ref.page_index for ref in january.refs if isinstance(ref, MonthlyRef)}
    daily_targets = {
        link.target_page for page in calendar_pages for link in january_links[page]
    }
    assert set(january.registry.daily_pages.values()) <= daily_targets


def test_nav_links_sit_on_drawn_labels(january, january_links, open_pdf):
    doc = open_pdf(january.pdf_bytes)
    registry = january.registry
    page_num = registry.daily_pages["2025-01-15"]
    page = doc[page_num]

    [monthly_hit] = page.search_for("Monthly")
    [weekly_hit] = page.search_for("Weekly")
    [index_hit] = page.search_for("Index")

    assert [l.target_page for l in links_at(january_links[page_num], monthly_hit)] == \
        [registry.monthly_cal_pages["2025-01"]]
    # Jan 15 2025 is in week 3
    assert [l.target_page for l in links_at(january_links[page_num], weekly_hit)] == \
        [registry.weekly_pages["2025-W03"]]
    assert [l.target_page for l in links_at(january_links[page_num], index_hit)] == [registry.index_page]


def test_year_end_weekly_link_reaches_the_last_week(open_pdf):
    result = generate_planner(make_config(
        start="2025-01-01",
        end="2025-12-31",
        bujo=BujoConfig(daily_page_style="blank", collection_page_style="blank"),
    ))
    registry = result.registry
    weekly_refs = [ref for ref in result.refs if ref.kind is PageType.WEEKLY]
    [last_week] = [ref for ref in weekly_refs if ref.date == datetime.date(2025, 12, 28)]
    [first_week] = [ref for ref in weekly_refs if ref.date == datetime.date(2024, 12, 29)]

    assert len(registry.weekly_pages) == len(weekly_refs) == 53
    assert last_week.label == first_week.label == "Week 1"
    assert registry.weekly_pages["2026-W01"] == last_week.page_index
    assert registry.weekly_pages["2025-W01"] == first_week.page_index

    page_num = registry.daily_pages["2025-12-30"]
    [weekly_hit] = open_pdf(result.pdf_bytes)[page_num].search_for("Weekly")
    page_links = extract_links(result.pdf_bytes)[page_num]
    assert [l.target_page for l in links_at(page_links, weekly_hit)] == [last_week.page_index]


def test_single_nav_row_on_combined_monthly_page():
    # Compact density on a large device keeps calendar and tasks together
    result = generate_planner(make_config(start="2025-02-01", end="2025-02-28", device="paper_pro",
                                          bujo=BujoConfig(density="compact")))
    [monthly] = [ref for ref in result.refs if ref.kind is PageType.MONTHLY]
    [tasks] = [ref for ref in result.refs if ref.kind is PageType.MONTHLY_TASKS]
    assert monthly.page_index == tasks.page_index

    page_links = extract_links(result.pdf_bytes)[monthly.page_index]
    nav_links = [link for link in page_links if link.rect.y1 < 60]
    # <, Index, Future Log, Tasks, > with no prev/next month -> Index, Future Log, Tasks
    assert len(nav_links) == 3


# -----------------------------------------------------------------------------
# Index
# -----------------------------------------------------------------------------


def test_index_entries_land_on_their_pages(january, january_links, open_pdf):
    doc = open_pdf(january.pdf_bytes)
    registry = january.registry
    index_page = doc[registry.index_page]

    [key_hit] = [hit for hit in index_page.search_for("Key") if hit.y0 > 60]
    [target] = [l.target_page for l in links_at(january_links[registry.index_page], key_hit)]
    assert target == registry.key_page
    assert "Rapid Logging Signifiers" in doc[target].get_text()

    for hit in index_page.search_for("Future Log"):
        targets = [l.target_page for l in links_at(january_links[registry.index_page], hit)]
        assert targets == [registry.future_log_pages[0]]


def test_index_links_resolve_through_the_shift():
    generator = BulletJournalGenerator(make_config())
    try:
        generator.generate()
        shift = generator.index.shift
        by_old_page = {ref.page_index: ref for ref in generator.content_refs}
        final_pages = {ref.page_index for ref in generator.refs}

        assert generator.index.links
        for link in generator.index.links:
            assert link.target_page in by_old_page
            assert shift.apply(link.target_page) in final_pages
    finally:
        generator.doc.close()


def test_index_overflow_shifts_content_by_index_page_count(open_pdf):
    config = make_config(
        start="2025-01-01",
        end="2026-12-31",
        device="move",
        bujo=BujoConfig(daily_page_style="blank", collection_page_style="blank"),
    )
    result = generate_planner(config)
    registry = result.registry

    assert result.index_pages >= 2
    assert registry.key_page == 1 + result.index_pages
    index_refs = [ref for ref in result.refs if isinstance(ref, IndexRef)]
    assert [ref.page_index for ref in index_refs] == list(range(1, 1 + result.index_pages))
    assert index_refs[1].label == "Index (2)"

    doc = open_pdf(result.pdf_bytes)
    assert "INDEX (2)" in doc[2].get_text()
    all_links = extract_links(doc)
    for page_links in all_links:
        for link in page_links:
            assert 0 <= link.target_page < result.page_count

    # The last day is reachable from the index
    last_day = registry.daily_pages["2026-12-31"]
    index_targets = {
        link.target_page
        for page in range(1, 1 + result.index_pages)
        for link in all_links[page]
    }
    assert last_day in index_targets


# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------


def test_generation_is_deterministic(january):
    again = generate_planner(make_config())

    assert again.page_count == january.page_count
    assert again.registry.keys() == january.registry.keys()
    assert [[(tuple(l.rect), l.target_page) for l in page] for page in extract_links(again.pdf_bytes)] == \
        [[(tuple(l.rect), l.target_page) for l in page] for page in extract_links(january.pdf_bytes)]


def test_without_index(open_pdf):
    result = generate_planner(make_config(include_index=False))
    doc = open_pdf(result.pdf_bytes)

    assert result.index_pages == 0
    assert result.registry.index_page is None
    assert result.registry.key_page == 1
    daily = doc[result.registry.daily_pages["2025-01-10"]]
    assert daily.search_for("Index") == []


def test_without_cover_index_comes_first():
    result = generate_planner(make_config(include_cover=False))

    assert result.registry.index_page == 0
    assert result.registry.key_page == result.index_pages


def test_weekdays_only():
    result = generate_planner(make_config(include_weekends=False))
    assert len(result.registry.daily_pages) == 23
    assert "2025-01-04" not in result.registry.daily_pages


def test_empty_range_still_renders_future_log():
    result = generate_planner(make_config(start="2025-02-01", end="2025-01-01"))
    registry = result.registry

    assert registry.daily_pages == {}
    assert registry.monthly_cal_pages == {}
    assert registry.future_log_pages
    assert registry.key_page is not None


def test_page_numbers_show_final_positions(open_pdf):
    result = generate_planner(make_config(page_numbers=True))
    doc = open_pdf(result.pdf_bytes)
    page = result.registry.collection_pages[0]

    assert str(page + 1) in doc[page].get_text().split()


@pytest.mark.parametrize("density", ["compact", "comfortable"])
def test_weekly_section_headings_scale_with_density(density, open_pdf):
    result = generate_planner(make_config(start="2025-01-05", end="2025-01-11",
                                          bujo=BujoConfig(density=density)))
    page = open_pdf(result.pdf_bytes)[result.registry.weekly_pages["2025-W02"]]
    sizes = [
        span["size"]
        for block in page.get_text("dict")["blocks"]
        for line in block.get("lines", [])
        for span in line["spans"]
        if span["text"] == "What went well"
    ]

    assert sizes == [pytest.approx(DENSITY_PROFILES[density].header_size * SECTION_TITLE_SCALE, abs=0.1)]


def test_dark_mode_has_same_structure(january):
    dark = generate_planner(make_config(dark_mode=True))
    assert dark.page_count == january.page_count
    assert dark.registry.keys() == january.registry.keys()


# -----------------------------------------------------------------------------
# Failure handling
# -----------------------------------------------------------------------------


def test_stages_run_in_order():
    generator = BulletJournalGenerator(make_config(start="2025-01-01", end="2025-01-02"))
    try:
        with pytest.raises(GenerationError):
            generator.build_registry()
        generator.generate_content()
        with pytest.raises(GenerationError):
            generator.emit_links()
    finally:
        generator.doc.close()


def test_failures_become_generation_errors(monkeypatch):
    def broken(ctx):
        raise RuntimeError("boom")

    monkeypatch.setattr("bujo_planner.generator.generate_key_page", broken)
    with pytest.raises(GenerationError, match="boom"):
        generate_planner(make_config())
