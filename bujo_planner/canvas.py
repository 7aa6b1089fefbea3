"""
Drawing context shared by every page generator.

PlannerContext owns the PyMuPDF document for one generation run and
provides the small drawing vocabulary the sections use: text, lines,
backgrounds, the navigation row and the page title.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import fitz

from .config import Color, ColorScheme, DensityProfile, PlannerConfig
from .layout import (
    FONT_BOLD,
    FONT_REGULAR,
    NAV_FONT_SIZE,
    NAV_SEPARATOR,
    TITLE_FONT_SIZE,
    Dimensions,
    NavSlot,
    content_start,
    layout_nav_row,
    nav_baseline,
    text_width,
    title_baseline,
)
from .navigation import SectionFlags

DOT_RADIUS = 0.5
PAGE_NUMBER_SIZE = 6


@dataclass
class PlannerContext:
    doc: fitz.Document
    dims: Dimensions
    density: DensityProfile
    colors: ColorScheme
    flags: SectionFlags
    daily_page_style: str = "dotgrid"
    collection_page_style: str = "dotgrid"
    dot_spacing: float = 14

    @classmethod
    def from_config(cls, config: PlannerConfig, doc: fitz.Document,
                    flags: Optional[SectionFlags] = None) -> "PlannerContext":
        bujo = config.bujo
        return cls(
            doc=doc,
            dims=Dimensions.from_config(config),
            density=config.density_profile,
            colors=config.colors,
            flags=flags if flags is not None else SectionFlags(has_index=config.include_index),
            daily_page_style=bujo.daily_page_style,
            collection_page_style=bujo.collection_page_style,
            dot_spacing=bujo.dot_spacing,
        )

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def new_page(self, pno: int = -1) -> Tuple[fitz.Page, int]:
        """Append (or insert before `pno`) a page and return it with its index."""
        page = self.doc.new_page(pno=pno, width=self.dims.width, height=self.dims.height)
        self.draw_background(page)
        return page, page.number

    def draw_background(self, page: fitz.Page):
        """Fill the page for dark schemes; white pages stay untouched."""
        if self.colors.is_white_background:
            return
        page.draw_rect(page.rect, color=self.colors.background, fill=self.colors.background)

    # -------------------------------------------------------------------------
    # Basic drawing
    # -------------------------------------------------------------------------

    def add_text(self, page: fitz.Page, text: str, x: float, baseline: float,
                 font_size: float, color: Optional[Color] = None, bold: bool = False):
        page.insert_text(
            fitz.Point(x, baseline),
            text,
            fontsize=font_size,
            fontname=FONT_BOLD if bold else FONT_REGULAR,
            color=color if color is not None else self.colors.text,
        )

    def draw_line(self, page: fitz.Page, x0: float, y0: float, x1: float, y1: float,
                  color: Optional[Color] = None, width: float = 0.25):
        page.draw_line(
            fitz.Point(x0, y0),
            fitz.Point(x1, y1),
            color=color if color is not None else self.colors.line,
            width=width,
        )

    def draw_dot(self, page: fitz.Page, x: float, y: float, radius: float, color: Color):
        page.draw_circle(fitz.Point(x, y), radius, color=color, fill=color)

    # -------------------------------------------------------------------------
    # Backgrounds
    # -------------------------------------------------------------------------

    def draw_dot_grid(self, page: fitz.Page, start_y: float, end_y: float,
                      left: Optional[float] = None, right: Optional[float] = None):
        """Draw a vector dot grid using Shape batching."""
        left = self.dims.left if left is None else left
        right = self.dims.right if right is None else right
        shape = page.new_shape()

        y = start_y
        while y <= end_y:
            x = left
            while x <= right:
                shape.draw_circle(fitz.Point(x, y), DOT_RADIUS)
                x += self.dot_spacing
            y += self.dot_spacing

        shape.finish(color=self.colors.dot, fill=self.colors.dot)
        shape.commit()

    def draw_lined(self, page: fitz.Page, start_y: float, end_y: float,
                   left: Optional[float] = None, right: Optional[float] = None,
                   spacing: Optional[float] = None):
        left = self.dims.left if left is None else left
        right = self.dims.right if right is None else right
        spacing = self.density.line_height if spacing is None else spacing
        shape = page.new_shape()

        y = start_y
        while y <= end_y:
            shape.draw_line(fitz.Point(left, y), fitz.Point(right, y))
            y += spacing

        shape.finish(color=self.colors.line, width=0.25)
        shape.commit()

    def draw_page_background(self, page: fitz.Page, style: str, start_y: float, end_y: float,
                             left: Optional[float] = None, right: Optional[float] = None):
        if style == "dotgrid":
            self.draw_dot_grid(page, start_y, end_y, left, right)
        elif style == "lined":
            self.draw_lined(page, start_y, end_y, left, right)

    # -------------------------------------------------------------------------
    # Header
    # -------------------------------------------------------------------------

    def draw_nav_row(self, page: fitz.Page, labels: Sequence[str], x: Optional[float] = None,
                     baseline: Optional[float] = None) -> List[NavSlot]:
        """Draw the navigation row; the returned slots are where links go."""
        slots = layout_nav_row(labels, self.dims.left if x is None else x)
        if baseline is None:
            baseline = nav_baseline(self.dims)
        for i, slot in enumerate(slots):
            self.add_text(page, slot.label, slot.x, baseline, NAV_FONT_SIZE, self.colors.text_muted)
            if i < len(slots) - 1:
                self.add_text(page, NAV_SEPARATOR, slot.x + slot.width, baseline,
                              NAV_FONT_SIZE, self.colors.line)
        return slots

    def draw_page_title(self, page: fitz.Page, title: str,
                        font_size: float = TITLE_FONT_SIZE) -> float:
        """Draw the bold page title; returns the y where content starts."""
        self.add_text(page, title, self.dims.left, title_baseline(self.dims, font_size),
                      font_size, bold=True)
        return content_start(self.dims, font_size)

    def draw_header(self, page: fitz.Page, labels: Sequence[str], title: str,
                    font_size: float = TITLE_FONT_SIZE) -> float:
        self.draw_nav_row(page, labels)
        return self.draw_page_title(page, title, font_size)

    def draw_subtitle(self, page: fitz.Page, text: str, y: float) -> float:
        """Small muted line under the title; returns the y below it."""
        self.add_text(page, text, self.dims.left, y + 5, 7, self.colors.text_muted)
        return y + 10

    # -------------------------------------------------------------------------
    # Footer
    # -------------------------------------------------------------------------

    def draw_page_numbers(self, first: int = 0):
        """Number pages from `first` onwards with their final 1-based position."""
        baseline = self.dims.height - self.dims.margin / 2
        for page_index in range(first, len(self.doc)):
            text = str(page_index + 1)
            x = self.dims.right - text_width(text, PAGE_NUMBER_SIZE)
            self.add_text(self.doc[page_index], text, x, baseline, PAGE_NUMBER_SIZE,
                          self.colors.text_muted)

