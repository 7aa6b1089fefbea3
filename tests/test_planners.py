import pytest

from bujo_planner.generator import generate_planner
from bujo_planner.links import extract_links
from bujo_planner.planners import NOTEBOOK_PAGES, hour_label
from tests.conftest import make_config


@pytest.mark.parametrize("hour, label", [(0, "12:00 AM"), (8, "8:00 AM"), (12, "12:00 PM"), (18, "6:00 PM")])
def test_hour_label(hour, label):
    assert hour_label(hour) == label


def test_daily_planner_contents_span_pages(open_pdf):
    result = generate_planner(make_config(type="daily"))
    doc = open_pdf(result.pdf_bytes)
    links = extract_links(result.pdf_bytes)

    assert result.index_pages == 2
    assert result.page_count == 1 + 2 + 31
    assert result.registry is None

    first = result.refs[0]
    assert first.label == "Wed, Jan 1"
    assert first.page_index == 3
    assert "Table of Contents" in doc[1].get_text()
    assert "Table of Contents (2)" in doc[2].get_text()

    # Contents entries point at the shifted pages
    toc_targets = [link.target_page for page in (1, 2) for link in links[page]]
    for ref in result.refs:
        assert ref.page_index in toc_targets
    assert "Wednesday, January 1, 2025" in doc[first.page_index].get_text()


def test_footer_links(open_pdf):
    result = generate_planner(make_config(type="daily"))
    links = extract_links(result.pdf_bytes)
    page = result.refs[5].page_index
    last = result.page_count - 1

    assert {link.target_page for link in links[page]} == {page - 1, 1, page + 1}
    assert {link.target_page for link in links[last]} == {last - 1, 1}
    # Cover carries no footer
    assert links[0] == []


def test_weekly_and_monthly_entries():
    weekly = generate_planner(make_config(type="weekly"))
    monthly = generate_planner(make_config(type="monthly", start="2025-01-01", end="2025-03-31"))

    assert [ref.label for ref in weekly.refs] == [
        "Week of Dec 29", "Week of Jan 5", "Week of Jan 12", "Week of Jan 19", "Week of Jan 26"]
    assert [ref.label for ref in monthly.refs] == ["January 2025", "February 2025", "March 2025"]
    assert monthly.index_pages == 1
    assert [ref.page_index for ref in monthly.refs] == [2, 3, 4]


@pytest.mark.parametrize("kind", ["dotgrid", "lined", "blank"])
def test_notebooks_have_no_contents(kind):
    result = generate_planner(make_config(type=kind))

    assert result.page_count == 1 + NOTEBOOK_PAGES
    assert result.index_pages == 0
    assert result.link_count == 0


def test_without_contents_footer_has_no_contents_link():
    result = generate_planner(make_config(type="daily", include_index=False))
    links = extract_links(result.pdf_bytes)
    page = result.refs[5].page_index

    assert result.index_pages == 0
    assert {link.target_page for link in links[page]} == {page - 1, page + 1}
