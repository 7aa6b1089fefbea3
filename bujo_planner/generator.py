"""
Bullet journal generation pipeline.

Stages run strictly in order and each runs once:

    content pages -> index pages (shift) -> registry -> links

Content pages are appended with their physical index fixed at creation.
Index pages are then inserted after the cover, which moves every content
page back by the number of index pages; that shift is applied to the refs
exactly once before the registry is built. Every link in the document is
written in the final pass, against final page positions.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Union

import fitz

from .canvas import PlannerContext
from .config import PlannerConfig
from .cover import generate_cover, planner_title
from .dates import each_day, each_month, each_week, is_weekend
from .errors import GenerationError, PlannerError
from .index import IndexBuilder, IndexResult
from .layout import layout_nav_row, nav_link_rect
from .links import LinkEmitter
from .navigation import SectionFlags, nav_items_for_ref, resolve_nav_target
from .planners import SimplePlannerGenerator
from .refs import MonthlyRef, PageRef, shift_refs
from .registry import PageRegistry, build_registry
from .sections import (
    CalendarGeometry,
    generate_collection_pages,
    generate_daily_log,
    generate_future_log,
    generate_key_page,
    generate_monthly_log,
    generate_weekly_review,
)
from .sections.monthly import calendar_date_links

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    NEW = 0
    CONTENT = 1
    INDEX = 2
    REGISTRY = 3
    LINKS = 4


@dataclass
class PlannerResult:
    pdf_bytes: bytes
    page_count: int
    refs: List[PageRef] = field(default_factory=list)
    registry: Optional[PageRegistry] = None
    index_pages: int = 0
    link_count: int = 0


def section_flags(config: PlannerConfig) -> SectionFlags:
    """Which sections will have pages; known before anything is drawn."""
    bujo = config.bujo
    has_months = bool(each_month(config.start_date, config.end_date))
    return SectionFlags(
        has_index=config.include_index,
        has_future_log=bujo.include_future_log and bujo.future_log_months > 0,
        has_monthly_log=bujo.include_monthly_log and has_months,
        has_weekly_review=bujo.include_weekly_review and has_months,
    )


# =============================================================================
# GENERATOR CLASS
# =============================================================================


class BulletJournalGenerator:

    def __init__(self, config: PlannerConfig):
        self.config = config
        self.doc = fitz.open()
        self.ctx = PlannerContext.from_config(config, self.doc, section_flags(config))
        self.links = LinkEmitter()
        self.stage = Stage.NEW

        self.insert_offset = 0
        self.content_refs: List[PageRef] = []
        self.index = IndexResult()
        self.refs: List[PageRef] = []
        self.registry: Optional[PageRegistry] = None

    @property
    def index_pages(self) -> int:
        return self.index.page_count

    def _enter(self, stage: Stage):
        if stage != self.stage + 1:
            raise GenerationError(f"stage {stage.name} cannot run after {self.stage.name}")
        self.stage = stage

    # -------------------------------------------------------------------------
    # Stage 1: content pages
    # -------------------------------------------------------------------------

    def generate_content(self):
        self._enter(Stage.CONTENT)
        config, bujo, ctx = self.config, self.config.bujo, self.ctx
        start, end = config.start_date, config.end_date

        if config.include_cover:
            generate_cover(ctx, planner_title(config), start, end)
            self.insert_offset = len(self.doc)

        refs = self.content_refs
        if bujo.show_bullet_key:
            refs.append(generate_key_page(ctx))

        if bujo.include_future_log:
            refs.extend(generate_future_log(ctx, start, bujo.future_log_months))

        if bujo.include_monthly_log:
            first = len(self.doc)
            for month in each_month(start, end):
                refs.extend(generate_monthly_log(ctx, month))
            logger.info("  [%d-%d] Monthly pages", first, len(self.doc) - 1)

        if bujo.include_weekly_review:
            first = len(self.doc)
            for week in each_week(start, end):
                refs.append(generate_weekly_review(ctx, week))
            logger.info("  [%d-%d] Weekly pages", first, len(self.doc) - 1)

        if bujo.include_daily_log:
            first = len(self.doc)
            for day in each_day(start, end):
                if not config.include_weekends and is_weekend(day):
                    continue
                refs.append(generate_daily_log(ctx, day))
            logger.info("  [%d-%d] Daily pages", first, len(self.doc) - 1)

        if bujo.collection_pages > 0:
            refs.extend(generate_collection_pages(ctx, bujo.collection_pages))

        logger.info("Content: %d pages, %d references", len(self.doc), len(refs))

    # -------------------------------------------------------------------------
    # Stage 2: index pages
    # -------------------------------------------------------------------------

    def insert_index(self):
        self._enter(Stage.INDEX)
        if self.config.include_index:
            self.index = IndexBuilder(self.ctx, self.insert_offset).build(self.content_refs)

    # -------------------------------------------------------------------------
    # Stage 3: registry
    # -------------------------------------------------------------------------

    def build_registry(self):
        self._enter(Stage.REGISTRY)
        self.refs = list(self.index.refs) + shift_refs(self.content_refs, self.index.shift)
        self.registry = build_registry(self.refs, self.index.first_page)

    # -------------------------------------------------------------------------
    # Stage 4: links
    # -------------------------------------------------------------------------

    def primary_refs(self) -> Dict[int, PageRef]:
        """The ref whose navigation row is drawn on each physical page."""
        primary: Dict[int, PageRef] = {}
        for ref in self.refs:
            primary.setdefault(ref.page_index, ref)
        return primary

    def add_nav_links(self):
        dims, flags = self.ctx.dims, self.ctx.flags
        for page_index, ref in sorted(self.primary_refs().items()):
            items = nav_items_for_ref(ref, flags)
            slots = layout_nav_row([item.label for item in items], dims.left)
            for item, slot in zip(items, slots):
                dest = resolve_nav_target(item, ref, self.registry)
                if dest is not None:
                    self.links.add(page_index, nav_link_rect(dims, slot), dest)

    def add_calendar_links(self):
        months: Dict[str, List[MonthlyRef]] = {}
        for ref in self.refs:
            if isinstance(ref, MonthlyRef) and ref.year_month and ref.date is not None:
                months.setdefault(ref.year_month, []).append(ref)

        for month_refs in months.values():
            month_refs.sort(key=lambda r: r.part)
            geometry = CalendarGeometry.for_month(self.ctx.dims, self.ctx.density, month_refs[0].date)
            part_pages = [r.page_index for r in month_refs]
            for page_num, rect, dest in calendar_date_links(geometry, part_pages,
                                                            self.registry.daily_pages):
                self.links.add(page_num, rect, dest)

    def add_index_links(self):
        shift = self.index.shift
        for link in self.index.links:
            self.links.add(link.page_num, link.rect, shift.apply(link.target_page))

    def emit_links(self):
        self._enter(Stage.LINKS)
        self.add_nav_links()
        self.add_calendar_links()
        self.add_index_links()
        if self.config.page_numbers:
            self.ctx.draw_page_numbers(first=self.insert_offset)
        count = self.links.apply(self.doc)
        logger.info("Links: %d written", count)

    # -------------------------------------------------------------------------
    # Main Generation
    # -------------------------------------------------------------------------

    def generate(self) -> fitz.Document:
        logger.info("Generating bullet journal %s .. %s", self.config.start_date, self.config.end_date)
        self.generate_content()
        self.insert_index()
        self.build_registry()
        self.emit_links()
        logger.info("Generated %d pages", len(self.doc))
        return self.doc


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------

Generator = Union[BulletJournalGenerator, SimplePlannerGenerator]


def create_generator(config: PlannerConfig) -> Generator:
    if config.type == "bujo":
        return BulletJournalGenerator(config)
    return SimplePlannerGenerator(config)


def generate_planner(config: PlannerConfig) -> PlannerResult:
    """Run a full generation; either a finished document or an exception."""
    generator = create_generator(config)
    try:
        generator.generate()
        return PlannerResult(
            pdf_bytes=generator.doc.tobytes(garbage=3, deflate=True),
            page_count=len(generator.doc),
            refs=list(generator.refs),
            registry=generator.registry,
            index_pages=generator.index_pages,
            link_count=len(generator.links),
        )
    except PlannerError:
        raise
    except Exception as exc:
        raise GenerationError(f"planner generation failed: {exc}") from exc
    finally:
        generator.doc.close()


def generate_planner_pdf(config: PlannerConfig) -> bytes:
    return generate_planner(config).pdf_bytes
