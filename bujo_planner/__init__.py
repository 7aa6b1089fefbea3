"""
Hyperlinked bullet journal and planner PDFs for reMarkable tablets.

    from bujo_planner import PlannerConfig, generate_planner_pdf
    pdf = generate_planner_pdf(PlannerConfig(start_date=..., end_date=...))
"""

from .config import BujoConfig, Padding, PlannerConfig, config_from_dict, load_config
from .errors import ConfigError, GenerationError, PlannerError
from .generator import PlannerResult, generate_planner, generate_planner_pdf
from .links import PageLink, extract_links

__version__ = "0.1.0"

__all__ = [
    "BujoConfig",
    "ConfigError",
    "GenerationError",
    "Padding",
    "PageLink",
    "PlannerConfig",
    "PlannerError",
    "PlannerResult",
    "config_from_dict",
    "extract_links",
    "generate_planner",
    "generate_planner_pdf",
    "load_config",
]
