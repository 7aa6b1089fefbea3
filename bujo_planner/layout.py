"""
Page geometry shared by drawing and linking.

Coordinates follow PyMuPDF: origin at the top-left corner of the page,
y growing downward. Text positions are baselines.
"""

from dataclasses import dataclass
from typing import List, Sequence

import fitz

from .config import Padding, PlannerConfig

# =============================================================================
# CONSTANTS
# =============================================================================

# Base-14 fonts, no embedding of font files required
FONT_REGULAR = "helv"
FONT_BOLD = "hebo"

NAV_FONT_SIZE = 7
NAV_SEPARATOR = "  |  "
NAV_GAP = 6                 # Below the nav baseline
NAV_LINK_PAD_X = 2
NAV_LINK_HEIGHT = 12

TITLE_FONT_SIZE = 11
TITLE_GAP = 8               # Below the title baseline


def text_width(text: str, font_size: float, bold: bool = False) -> float:
    fontname = FONT_BOLD if bold else FONT_REGULAR
    return fitz.get_text_length(text, fontname=fontname, fontsize=font_size)


# =============================================================================
# PAGE DIMENSIONS
# =============================================================================


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float
    margin: float
    padding: Padding
    toolbar_edge: str = "top"

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "Dimensions":
        device = config.device_profile
        return cls(
            width=device.width,
            height=device.height,
            margin=device.margin,
            padding=config.resolved_padding(),
            toolbar_edge=config.toolbar_edge,
        )

    @property
    def left(self) -> float:
        return self.padding.left

    @property
    def right(self) -> float:
        return self.width - self.padding.right

    @property
    def top(self) -> float:
        return self.padding.top

    @property
    def bottom(self) -> float:
        return self.height - self.padding.bottom

    @property
    def content_width(self) -> float:
        return self.right - self.left


# -----------------------------------------------------------------------------
# Page header (navigation row + title)
# -----------------------------------------------------------------------------


def nav_baseline(dims: Dimensions) -> float:
    return dims.top + NAV_FONT_SIZE + 2


def title_baseline(dims: Dimensions, title_size: float = TITLE_FONT_SIZE) -> float:
    return nav_baseline(dims) + NAV_GAP + title_size


def content_start(dims: Dimensions, title_size: float = TITLE_FONT_SIZE) -> float:
    """First y below the navigation row and page title."""
    return title_baseline(dims, title_size) + TITLE_GAP


# -----------------------------------------------------------------------------
# Navigation row
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class NavSlot:
    label: str
    x: float
    width: float


def layout_nav_row(labels: Sequence[str], x: float, font_size: float = NAV_FONT_SIZE) -> List[NavSlot]:
    """Place labels left to right with a separator between neighbours."""
    separator = text_width(NAV_SEPARATOR, font_size)
    slots = []
    for label in labels:
        width = text_width(label, font_size)
        slots.append(NavSlot(label=label, x=x, width=width))
        x += width + separator
    return slots


def nav_row_width(labels: Sequence[str], font_size: float = NAV_FONT_SIZE) -> float:
    if not labels:
        return 0.0
    separators = text_width(NAV_SEPARATOR, font_size) * (len(labels) - 1)
    return sum(text_width(label, font_size) for label in labels) + separators


def slot_rect(slot: NavSlot, baseline: float) -> fitz.Rect:
    """Clickable area over a label drawn at `baseline`."""
    return fitz.Rect(
        slot.x - NAV_LINK_PAD_X,
        baseline - NAV_LINK_HEIGHT + 3,
        slot.x + slot.width + NAV_LINK_PAD_X,
        baseline + 3,
    )


def nav_link_rect(dims: Dimensions, slot: NavSlot) -> fitz.Rect:
    """Clickable area over a drawn nav label."""
    return slot_rect(slot, nav_baseline(dims))
