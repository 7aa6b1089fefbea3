"""Command-line entry point: configuration file and/or flags in, PDF out."""

import argparse
import dataclasses
import datetime
import logging
from pathlib import Path
from typing import List, Optional

from .config import DENSITY_PROFILES, DEVICE_PROFILES, PLANNER_TYPES, PlannerConfig, load_config
from .errors import ConfigError, PlannerError
from .generator import generate_planner
from .links import extract_links
from .logging_utils import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output/planner.pdf"


def _date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bujo-planner",
        description="Generate a hyperlinked planner PDF for e-ink tablets",
    )
    parser.add_argument("--config", type=Path, help="YAML or JSON configuration file")
    parser.add_argument("--start", type=_date, help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", type=_date, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--type", choices=PLANNER_TYPES, help="Planner type (default: bujo)")
    parser.add_argument("--device", choices=sorted(DEVICE_PROFILES), help="Target device")
    parser.add_argument("--density", choices=sorted(DENSITY_PROFILES), help="Bullet journal density")
    parser.add_argument("--title", help="Cover title")
    parser.add_argument("--dark", action="store_true", help="Dark color scheme")
    parser.add_argument("--page-numbers", action="store_true", help="Print page numbers")
    parser.add_argument("--no-index", action="store_true", help="Skip the index pages")
    parser.add_argument("--no-cover", action="store_true", help="Skip the cover page")
    parser.add_argument("--output", "-o", type=Path, default=Path(DEFAULT_OUTPUT),
                        help=f"Output PDF path (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--dump-links", action="store_true",
                        help="Print every internal link after generation")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def resolve_config(args: argparse.Namespace) -> PlannerConfig:
    """Configuration file first, then command-line overrides."""
    if args.config is not None:
        config = load_config(args.config)
    elif args.start is None or args.end is None:
        raise ConfigError("--start and --end are required without --config")
    else:
        config = PlannerConfig(start_date=args.start, end_date=args.end)

    overrides = {}
    if args.start is not None:
        overrides["start_date"] = args.start
    if args.end is not None:
        overrides["end_date"] = args.end
    if args.type:
        overrides["type"] = args.type
    if args.device:
        overrides["device"] = args.device
    if args.title:
        overrides["title"] = args.title
    if args.dark:
        overrides["dark_mode"] = True
    if args.page_numbers:
        overrides["page_numbers"] = True
    if args.no_index:
        overrides["include_index"] = False
    if args.no_cover:
        overrides["include_cover"] = False
    if args.density:
        overrides["bujo"] = dataclasses.replace(config.bujo, density=args.density)

    return dataclasses.replace(config, **overrides)


def dump_links(pdf_bytes: bytes):
    for page_num, links in enumerate(extract_links(pdf_bytes)):
        for link in links:
            r = link.rect
            print(f"page {page_num}: ({r.x0:.1f}, {r.y0:.1f}, {r.x1:.1f}, {r.y1:.1f}) -> {link.target_page}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        config = resolve_config(args)
        result = generate_planner(config)
    except PlannerError as exc:
        logger.error("%s", exc)
        return 1

    output_path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf_bytes)

    if args.dump_links:
        dump_links(result.pdf_bytes)

    device = config.device_profile
    print("\n" + "=" * 50)
    print("GENERATION COMPLETE")
    print("=" * 50)
    print(f"Output: {output_path}")
    print(f"Device: {device.name} ({device.width} x {device.height} pt)")
    print(f"Pages: {result.page_count} ({result.index_pages} index)")
    print(f"Links: {result.link_count}")
    return 0
