# pylint: disable=import-outside-toplevel
"""Main entry point for the trailmap CLI.

This module provides the command-line interface for trailmap, allowing users
to ingest GPX/FIT activity files, list and filter the resulting activities,
export them as GPX and configure their environment.
"""

import argparse
import logging

from dotenv import load_dotenv

load_dotenv()


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    """Main function for the trailmap CLI."""
    parser = argparse.ArgumentParser(description="trailmap CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest_parser = subparsers.add_parser("ingest", help="Parse activity files and list the resulting activities")
    ingest_parser.add_argument(
        "paths",
        nargs="*",
        help="Files or folders to ingest (default: the configured data folder)",
    )
    ingest_parser.add_argument("--sport", help="Only show one sport type, e.g. 'Running' or 'trail_running'")
    ingest_parser.add_argument("--from", dest="date_from", help="Earliest start date, e.g. 2024-05-01 or 'last month'")
    ingest_parser.add_argument("--to", dest="date_to", help="Latest start date (inclusive)")
    ingest_parser.add_argument("--search", help="Case-insensitive substring of the activity name")

    export_parser = subparsers.add_parser("export", help="Convert activity files to normalized GPX")
    export_parser.add_argument("paths", nargs="*", help="Files or folders to export")
    export_parser.add_argument("--out", help="Output folder (default: the configured export folder)")

    subparsers.add_parser("configure", help="Configure trailmap for your environment")
    subparsers.add_parser("help", help="Show usage and documentation")

    args = parser.parse_args(argv)

    from trailmap.appconfig import load_config

    config = load_config()
    _configure_logging(config.get("debug", False))

    if args.command == "ingest":
        from trailmap.commands.ingest import run

        return run(args, config)
    elif args.command == "export":
        from trailmap.commands.export import run

        return run(args, config)
    elif args.command == "configure":
        from trailmap.commands.configure import run

        run()
    elif args.command == "help":
        print(
            """
trailmap - Turn GPX and FIT recordings into normalized activities.

Usage:
    python -m trailmap <command>

Commands:
    ingest      Parse .gpx/.fit files (or folders of them) and list the
                activities with distance, duration, speed and elevation.
                Filter with --sport, --from, --to and --search.
    export      Re-write activity files as normalized GPX 1.1 tracks
    configure   Configure trailmap for your environment (timezone, folders)
    help        Show this help and usage documentation

Setup:
    1. Run 'python -m trailmap configure' to set up some basics
    2. Drop .gpx and .fit files into your data folder
    3. Use 'python -m trailmap ingest' to list them

See README.md for more details.
"""
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
