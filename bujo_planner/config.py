"""
Planner configuration: device, density and color profiles plus the
top-level PlannerConfig record.

All sizes are PDF points. Colors are RGB triples in [0, 1], the form
PyMuPDF drawing calls take directly.
"""

import datetime
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .errors import ConfigError

Color = Tuple[float, float, float]

# =============================================================================
# DEVICE PROFILES
# =============================================================================


@dataclass(frozen=True)
class DeviceProfile:
    id: str
    name: str
    screen_size: str
    pixels: Tuple[int, int]
    dpi: int
    width: float
    height: float
    margin: float


DEVICE_PROFILES: Dict[str, DeviceProfile] = {
    "remarkable2": DeviceProfile(
        id="remarkable2",
        name="reMarkable 2",
        screen_size='10.3"',
        pixels=(1404, 1872),
        dpi=226,
        width=448,
        height=597,
        margin=24,
    ),
    "paper_pro": DeviceProfile(
        id="paper_pro",
        name="Paper Pro",
        screen_size='11.8"',
        pixels=(1620, 2160),
        dpi=229,
        width=510,
        height=679,
        margin=28,
    ),
    "move": DeviceProfile(
        id="move",
        name="Paper Pro Move",
        screen_size='7.3"',
        pixels=(954, 1696),
        dpi=264,
        width=260,
        height=463,
        margin=18,
    ),
}

# Toolbar height matching the reMarkable device toolbar
DEFAULT_TOOLBAR_SIZE = 40

TOOLBAR_EDGES = ("top", "bottom", "left", "right")

# =============================================================================
# DENSITY PROFILES
# =============================================================================


@dataclass(frozen=True)
class DensityProfile:
    line_height: float
    font_size: float
    header_size: float
    spacing: float


DENSITY_PROFILES: Dict[str, DensityProfile] = {
    "compact": DensityProfile(line_height=14, font_size=8, header_size=12, spacing=0.8),
    "normal": DensityProfile(line_height=18, font_size=9, header_size=14, spacing=1.0),
    "comfortable": DensityProfile(line_height=24, font_size=10, header_size=16, spacing=1.2),
}

# =============================================================================
# COLOR SCHEMES
# =============================================================================


@dataclass(frozen=True)
class ColorScheme:
    background: Color
    text: Color
    text_muted: Color
    line: Color
    line_faint: Color
    dot: Color
    accent: Color

    @property
    def is_white_background(self) -> bool:
        return all(channel >= 1 for channel in self.background)


LIGHT_COLORS = ColorScheme(
    background=(1, 1, 1),
    text=(0, 0, 0),
    text_muted=(0.4, 0.4, 0.4),
    line=(0.8, 0.8, 0.8),
    line_faint=(0.9, 0.9, 0.9),
    dot=(0.45, 0.45, 0.45),
    accent=(0.3, 0.3, 0.3),
)

DARK_COLORS = ColorScheme(
    background=(0.1, 0.1, 0.1),
    text=(1, 1, 1),
    text_muted=(0.7, 0.7, 0.7),
    line=(0.3, 0.3, 0.3),
    line_faint=(0.2, 0.2, 0.2),
    dot=(0.5, 0.5, 0.5),
    accent=(0.7, 0.7, 0.7),
)


def get_color_scheme(dark_mode: bool) -> ColorScheme:
    return DARK_COLORS if dark_mode else LIGHT_COLORS


# =============================================================================
# PLANNER CONFIG
# =============================================================================

PLANNER_TYPES = ("bujo", "daily", "weekly", "monthly", "dotgrid", "lined", "blank")
PAGE_STYLES = ("dotgrid", "lined", "blank")


@dataclass(frozen=True)
class Padding:
    top: float
    bottom: float
    left: float
    right: float


def default_padding(device: DeviceProfile, toolbar_edge: str = "top") -> Padding:
    """Device margin on every side, toolbar height on the toolbar edge."""
    sides = {edge: float(device.margin) for edge in TOOLBAR_EDGES}
    sides[toolbar_edge] = float(DEFAULT_TOOLBAR_SIZE)
    return Padding(**sides)


@dataclass
class BujoConfig:
    include_future_log: bool = True
    future_log_months: int = 6
    include_monthly_log: bool = True
    include_weekly_review: bool = True
    include_daily_log: bool = True
    collection_pages: int = 10
    show_bullet_key: bool = True
    density: str = "normal"
    daily_page_style: str = "dotgrid"
    collection_page_style: str = "dotgrid"
    dot_spacing: float = 14


@dataclass
class PlannerConfig:
    start_date: datetime.date
    end_date: datetime.date
    type: str = "bujo"
    device: str = "remarkable2"
    include_weekends: bool = True
    time_start: int = 8
    time_end: int = 18
    time_interval: int = 60
    include_index: bool = True
    include_cover: bool = True
    page_numbers: bool = False
    dark_mode: bool = False
    title: Optional[str] = None
    toolbar_edge: str = "top"
    padding: Optional[Padding] = None
    bujo: BujoConfig = field(default_factory=BujoConfig)

    @property
    def device_profile(self) -> DeviceProfile:
        try:
            return DEVICE_PROFILES[self.device]
        except KeyError:
            raise ConfigError(f"Unknown device profile: {self.device!r}") from None

    @property
    def density_profile(self) -> DensityProfile:
        try:
            return DENSITY_PROFILES[self.bujo.density]
        except KeyError:
            raise ConfigError(f"Unknown density profile: {self.bujo.density!r}") from None

    @property
    def colors(self) -> ColorScheme:
        return get_color_scheme(self.dark_mode)

    def resolved_padding(self) -> Padding:
        if self.padding is not None:
            return self.padding
        if self.toolbar_edge not in TOOLBAR_EDGES:
            raise ConfigError(f"Unknown toolbar edge: {self.toolbar_edge!r}")
        return default_padding(self.device_profile, self.toolbar_edge)


# -----------------------------------------------------------------------------
# Loading from files
# -----------------------------------------------------------------------------


def _parse_date(value: Any, key: str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"{key}: expected YYYY-MM-DD, got {value!r}") from exc


def _pick(cls, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} option(s): {', '.join(unknown)}")
    return dict(data)


def config_from_dict(data: Dict[str, Any]) -> PlannerConfig:
    """Build a PlannerConfig from plain mapping data (parsed YAML/JSON)."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    values = _pick(PlannerConfig, data, "planner")
    for key in ("start_date", "end_date"):
        if key not in values:
            raise ConfigError(f"Missing required option: {key}")
        values[key] = _parse_date(values[key], key)

    bujo_data = values.pop("bujo", None) or {}
    if not isinstance(bujo_data, dict):
        raise ConfigError("bujo: expected a mapping")
    values["bujo"] = BujoConfig(**_pick(BujoConfig, bujo_data, "bujo"))

    padding_data = values.pop("padding", None)
    if padding_data is not None:
        if not isinstance(padding_data, dict):
            raise ConfigError("padding: expected a mapping")
        try:
            values["padding"] = Padding(**{k: float(v) for k, v in padding_data.items()})
        except TypeError as exc:
            raise ConfigError(f"padding: {exc}") from exc

    config = PlannerConfig(**values)
    if config.type not in PLANNER_TYPES:
        raise ConfigError(f"Unknown planner type: {config.type!r}")
    # Fail early on unknown profile names.
    config.device_profile
    config.density_profile
    return config


def load_config(path: Union[str, Path]) -> PlannerConfig:
    """Load a YAML (or JSON) configuration file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse config {path}: {exc}") from exc
    return config_from_dict(data or {})
