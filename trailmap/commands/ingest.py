"""CLI command `ingest`: parse activity files and print a summary table."""

import argparse
import datetime
from typing import Any

import dateparser
import pytz
from tabulate import tabulate

from trailmap.activity import Activity
from trailmap.filters import filter_activities, sort_by_start, summarize
from trailmap.ingest import input_files_from_paths, parse_files
from trailmap.sport import parse_sport
from trailmap.utils import format_distance, format_duration, format_start_time


def parse_date_arg(value: str | None, home_timezone: str) -> datetime.date | None:
    """Parse a human date ("2024-05-01", "3 weeks ago") into a calendar date."""
    if not value:
        return None
    parsed = dateparser.parse(value, settings={"TIMEZONE": home_timezone, "PREFER_DATES_FROM": "past"})
    if parsed is None:
        raise SystemExit(f"Could not understand date: {value}")
    return parsed.date()


def print_progress(current: int, total: int, filename: str) -> None:
    print(f"[{current}/{total}] {filename}")


def activity_rows(activities: list[Activity], home_timezone: str) -> list[list[Any]]:
    rows = []
    for act in activities:
        stats = act.stats
        rows.append(
            [
                format_start_time(act.start_time, home_timezone),
                act.name[:40],
                act.type.value,
                format_distance(stats.distance),
                format_duration(stats.duration),
                f"{stats.avg_speed:.1f}",
                f"{stats.min_ele:.0f}-{stats.max_ele:.0f}",
            ]
        )
    return rows


def run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    home_timezone = config.get("home_timezone", "UTC")
    try:
        pytz.timezone(home_timezone)
    except pytz.UnknownTimeZoneError as e:
        raise SystemExit(f"Unknown home timezone: {home_timezone}") from e
    paths = args.paths or [config.get("data_folder", "activities")]

    try:
        sport = parse_sport(args.sport) if args.sport else None
    except ValueError as e:
        raise SystemExit(str(e)) from e
    date_from = parse_date_arg(args.date_from, home_timezone)
    date_to = parse_date_arg(args.date_to, home_timezone)

    files = input_files_from_paths(paths)
    if not files:
        print(f"No activity files found in: {', '.join(paths)}")
        return 1

    activities = parse_files(files, on_progress=print_progress)
    print(f"Parsed {len(activities)} of {len(files)} files")

    shown = sort_by_start(
        filter_activities(
            activities,
            sport=sport,
            start=date_from,
            end=date_to,
            search=args.search,
            timezone=home_timezone,
        )
    )
    if not shown:
        print("No activities match.")
        return 0

    print()
    print(
        tabulate(
            activity_rows(shown, home_timezone),
            headers=["Start", "Name", "Sport", "Distance", "Time", "Avg km/h", "Elevation (m)"],
            tablefmt="simple",
        )
    )
    totals = summarize(shown)
    print(
        f"\n{totals.count} activities, total distance {format_distance(totals.distance)}, "
        f"total time {format_duration(totals.duration)}"
    )
    return 0
