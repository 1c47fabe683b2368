#!/usr/bin/env python3
"""
The Jar capacity CLI - weekly capacity summary from a JSON export.

Input is either {"profile": {...}, "commitments": [...]} or a bare list of
commitment rows.

Usage:
    python -m cli.capacity commitments.json
    python -m cli.capacity commitments.json --week 2026-10-19 --hours 36
    python -m cli.capacity commitments.json --json
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from jar import config
from jar.capacity import CapacityEngine, CapacityError, CapacityResult, load_thresholds
from jar.capacity.weeks import week_of
from jar.contracts import load_commitments, load_profile
from jar.observability import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2

BAR_WIDTH = 40
BAR_CHARS = {"water": "~", "rock": "#", "pebble": "o", "sand": ".", "empty": " "}


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [max(len(str(row[i])) for row in [headers] + rows) for i in range(len(headers))]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def render_bar(engine: CapacityEngine, result: CapacityResult, width: int = BAR_WIDTH) -> str:
    """Stacked capacity bar as text, one character per unit of width."""
    segments = engine.bar_segments(result, width).to_dict()
    bar = "".join(BAR_CHARS[name] * round(value) for name, value in segments.items())
    return f"[{bar[:width].ljust(width)}]"


def read_export(path: Path) -> tuple[dict | None, list[dict]]:
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, list):
        profile, commitments = None, data
    elif isinstance(data, dict):
        profile = data.get("profile")
        commitments = data.get("commitments", [])
    else:
        raise ValueError(f"{path}: expected an object or a list of commitments")

    if profile is not None and not isinstance(profile, dict):
        raise ValueError(f"{path}: profile must be an object")
    if not isinstance(commitments, list):
        raise ValueError(f"{path}: commitments must be a list")
    if not all(isinstance(row, dict) for row in commitments):
        raise ValueError(f"{path}: every commitment must be an object")
    return profile, commitments


def print_summary(engine: CapacityEngine, result: CapacityResult):
    print_header(f"MY JAR - week of {week_of(result.week_start)}")
    print(f"  {render_bar(engine, result)}  {result.fill_level}% Full")
    print(f"  {result.status.value} - {result.weekly_remaining:g}h remaining")
    if result.is_overloaded:
        print("  SHIELD UP: commitments exceed real capacity")
    print()
    print_table(
        ["Bucket", "Hours"],
        [
            ["Rocks", f"{result.rock_hours:g}h"],
            ["Pebbles", f"{result.pebble_hours:g}h"],
            ["Sand", f"{result.sand_hours:g}h"],
            ["Water", f"{result.water_hours:g}h"],
        ],
    )
    print()
    print_table(
        ["Day", "Hours", ""],
        [
            [
                d.strftime("%a %d"),
                f"{hours:g}h",
                "OVERLOAD" if d in result.overloaded_days else "",
            ]
            for d, hours in result.daily_loads.items()
        ],
    )
    print(f"\n  Load {result.weekly_load:g}h of {result.real_capacity:g}h real capacity")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jar-capacity", description=__doc__.splitlines()[1])
    p.add_argument("file", type=Path, help="JSON export of commitments")
    p.add_argument(
        "--week",
        type=date.fromisoformat,
        default=None,
        help="Any day (YYYY-MM-DD) of the week to scope to",
    )
    p.add_argument("--hours", type=float, default=None, help="Override nominal weekly hours")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")
    p.add_argument("--log-level", default=config.LOG_LEVEL)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, config.LOG_JSON)

    engine = CapacityEngine(load_thresholds())
    try:
        profile_row, rows = read_export(args.file)
        if args.hours is not None:
            profile_row = {**(profile_row or {}), "capacity_hours": args.hours}
        profile = load_profile(
            profile_row,
            overhead_factor=engine.thresholds.overhead_factor,
            default_hours=engine.thresholds.default_weekly_hours,
        )
        result = engine.compute(profile, load_commitments(rows), args.week)
    except CapacityError as e:
        print(f"error [{e.code}]: {e}", file=sys.stderr)
        return EXIT_INVALID
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        data = result.to_dict()
        data["bar_segments"] = engine.bar_segments(result).to_dict()
        print(json.dumps(data, indent=2))
    else:
        print_summary(engine, result)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
