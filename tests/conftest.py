import datetime

import fitz
import pytest

from bujo_planner.config import BujoConfig, PlannerConfig


def make_config(start="2025-01-01", end="2025-01-31", bujo=None, **overrides) -> PlannerConfig:
    return PlannerConfig(
        start_date=datetime.date.fromisoformat(start),
        end_date=datetime.date.fromisoformat(end),
        bujo=bujo or BujoConfig(),
        **overrides,
    )


@pytest.fixture
def january_config():
    return make_config()


@pytest.fixture
def open_pdf():
    """Open generated bytes with PyMuPDF; documents are closed after the test."""
    docs = []

    def _open(pdf_bytes):
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        docs.append(doc)
        return doc

    yield _open
    for doc in docs:
        doc.close()
