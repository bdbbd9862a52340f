"""CLI command `export`: re-write activity files as normalized GPX."""

import argparse
from typing import Any

from trailmap.export import write_gpx
from trailmap.ingest import input_files_from_paths, parse_files


def run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    paths = args.paths or [config.get("data_folder", "activities")]
    out_folder = args.out or config.get("export_folder", "exports")

    files = input_files_from_paths(paths)
    if not files:
        print(f"No activity files found in: {', '.join(paths)}")
        return 1

    activities = parse_files(files)
    for activity in activities:
        path = write_gpx(activity, out_folder)
        print(f"Exported {activity.name} -> {path}")

    print(f"Exported {len(activities)} of {len(files)} files to {out_folder}")
    return 0
