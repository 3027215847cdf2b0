"""
CLI (Command Line Interface).

Commands:

    hoopfinder fetch                 download court + center GeoJSON
    hoopfinder build                 merge sources, write dataset + calendar feeds
    hoopfinder schedule [--day Mon]  show the basketball schedule for one day
    hoopfinder export <file.ics>     export current events as a calendar file

Global options --today and --season-year pin the date used to decide
which programs are current, so output can be reproduced.
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List

import requests
from rich import box
from rich.console import Console
from rich.table import Table

from hoopfinder.config import (
    CAL_DIR,
    CURATED_DIR,
    DATASET_PATH,
    DEFAULT_CAL_NAME,
    SEASON_LABEL,
    SEASON_YEAR,
    SOURCES_DIR,
    TODAY,
)
from hoopfinder.export_ics import export_events_to_ics, write_calendar_files
from hoopfinder.fetch import fetch_sources
from hoopfinder.filters import (
    ALL_AGE_GROUPS,
    ALL_COSTS,
    ALL_GENDERS,
    FilterSet,
    classify_cost,
    cost_label,
    events_for_day,
    is_season_expired,
    select_events,
)
from hoopfinder.flatten import flatten_events
from hoopfinder.merge import build_dataset
from hoopfinder.model import FlatEvent, locations_from_payload
from hoopfinder.parse import DAYS, resolve_day
from hoopfinder.storage import load_json, load_locations, save_json


console = Console()


def _today_weekday(today: date) -> str:
    # date.weekday() is Monday-first, DAYS is Sunday-first
    return DAYS[(today.weekday() + 1) % 7]


def _filters_from_args(args: argparse.Namespace) -> FilterSet:
    return FilterSet(
        ages=frozenset(args.age or ALL_AGE_GROUPS),
        genders=frozenset(args.gender or ALL_GENDERS),
        costs=frozenset(args.cost or ALL_COSTS),
    )


def _load_events(args: argparse.Namespace) -> List[FlatEvent]:
    return flatten_events(load_locations(args.data))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Download the GIS sources into the sources directory.
    """
    try:
        counts = fetch_sources(args.sources_dir, timeout=args.timeout)
    except requests.RequestException as exc:
        print(f"Fetch failed: {exc}")
        return 1

    print("Done!")
    for filename, n in counts.items():
        print(f"  {filename}: {n} locations")
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """
    Merge sources with curated schedules and write dataset + .ics feeds.
    """
    courts_geo = load_json(args.sources_dir / "courts.geojson")
    centers_geo = load_json(args.sources_dir / "centers.geojson")
    if courts_geo is None or centers_geo is None:
        print("Source data not found. Run `hoopfinder fetch` first.")
        return 1

    schedules = load_json(args.curated_dir / "schedules.json", default={"events": []})

    generated_at = datetime.now(timezone.utc).isoformat()
    dataset, report = build_dataset(courts_geo, centers_geo, schedules, generated_at)

    print(f"Schedule matching: {report.matched} matched, {report.unmatched} unmatched")
    for name in report.unmatched_names:
        print(f'  - "{name}"')

    locations = locations_from_payload(dataset)
    with_programs = sum(1 for loc in locations if loc.programs)
    print(f"Locations with scheduled events: {with_programs}")

    save_json(dataset, args.out)
    print(f"Wrote {len(locations)} locations to {args.out}")

    events = flatten_events(locations)
    print(f"Calendar generation: {len(events)} flattened events")
    counts = write_calendar_files(events, args.cal_dir, season_year=args.season_year)
    for slug, n in counts.items():
        print(f"  {slug}.ics - {n} events")
    return 0


def _cmd_schedule(args: argparse.Namespace) -> int:
    """
    Print current events for one weekday as a table.
    """
    day = resolve_day(args.day) if args.day else _today_weekday(args.today)
    if day is None:
        print(f"Unknown day: {args.day!r}")
        return 1

    events = _load_events(args)
    if is_season_expired(events, args.today, args.season_year):
        console.print(f"[bold]{SEASON_LABEL} schedule has ended.[/bold] Check back for updated programming.")

    todays = events_for_day(events, day, _filters_from_args(args), args.today, args.season_year)
    if not todays:
        print(f"No basketball events on {day}s")
        return 0

    table = Table(title=f"{day} basketball", box=box.SIMPLE_HEAVY)
    table.add_column("Time", no_wrap=True)
    table.add_column("Program")
    table.add_column("Center")
    table.add_column("Ages")
    table.add_column("Cost")
    table.add_column("Dates", no_wrap=True)

    for ev in todays:
        style = "green" if classify_cost(ev.cost) == "free" else "yellow"
        table.add_row(
            ev.time,
            ev.program,
            f"{ev.location_name} - {ev.address}",
            ev.ages,
            f"[{style}]{cost_label(ev.cost)}[/{style}]",
            ev.date_range or "",
        )

    console.print(table)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export current events matching the filters into an .ics file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    events = select_events(_load_events(args), _filters_from_args(args), args.today, args.season_year)
    if not events:
        print("No events match the current filters.")
        return 0

    n = export_events_to_ics(events, out_path, cal_name=args.name, season_year=args.season_year)
    print(f"Exported {n} events to: {out_path}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--data", type=Path, default=DATASET_PATH, help="Merged dataset (hoop-finder.json)")
    p.add_argument("--age", action="append", choices=sorted(ALL_AGE_GROUPS), help="Age bracket (repeatable)")
    p.add_argument("--gender", action="append", choices=sorted(ALL_GENDERS), help="Gender category (repeatable)")
    p.add_argument("--cost", action="append", choices=sorted(ALL_COSTS), help="free or paid (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="hoopfinder", description="HoopFinder CLI")
    parser.add_argument("--today", type=date.fromisoformat, default=TODAY, help="Date used as today (YYYY-MM-DD)")
    parser.add_argument("--season-year", type=int, default=SEASON_YEAR, help="Year of the M/D date ranges")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log dropped entries and matching details")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Fetch courts and community centers from ArcGIS")
    p_fetch.add_argument("--sources-dir", type=Path, default=SOURCES_DIR)
    p_fetch.add_argument("--timeout", type=float, default=30, help="HTTP timeout in seconds")

    p_build = sub.add_parser("build", help="Build dataset and calendar feeds")
    p_build.add_argument("--sources-dir", type=Path, default=SOURCES_DIR)
    p_build.add_argument("--curated-dir", type=Path, default=CURATED_DIR)
    p_build.add_argument("--out", type=Path, default=DATASET_PATH)
    p_build.add_argument("--cal-dir", type=Path, default=CAL_DIR)

    p_schedule = sub.add_parser("schedule", help="Show the schedule for one day")
    p_schedule.add_argument("--day", type=str, default=None, help="Weekday (default: today)")
    _add_filter_args(p_schedule)

    p_export = sub.add_parser("export", help="Export current events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. hoopfinder.ics)")
    p_export.add_argument("--name", type=str, default=DEFAULT_CAL_NAME, help="Calendar display name")
    _add_filter_args(p_export)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))
    if args.command == "build":
        raise SystemExit(_cmd_build(args))
    if args.command == "schedule":
        raise SystemExit(_cmd_schedule(args))
    if args.command == "export":
        raise SystemExit(_cmd_export(args))

    raise SystemExit(2)
