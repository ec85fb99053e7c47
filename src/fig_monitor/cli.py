"""
Command-line interface for the fig monitor.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from fig_monitor import __version__
from fig_monitor.analysis.observation_weather import (
    available_years,
    context_lines,
    date_span,
    join_weather,
    records_between,
    records_for_year,
)
from fig_monitor.config import get_settings
from fig_monitor.datasources.sheets import SheetImportError, import_sheet
from fig_monitor.datasources.weather import fetch_weather_range
from fig_monitor.flows.refresh import open_store, refresh_all
from fig_monitor.ingest import import_text, new_observation
from fig_monitor.parsing.dates import parse_date
from fig_monitor.parsing.records import export_csv


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="fig-monitor",
        description="Fig phenology and fruit-bat monitoring log with weather context",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    list_parser = subparsers.add_parser("list", help="List stored observations")
    list_parser.add_argument("--year", type=str, default=None, help="Only show this year")

    add_parser = subparsers.add_parser("add", help="Add or update one day's observation")
    add_parser.add_argument("--date", type=str, default=None, help="Date (default: today)")
    add_parser.add_argument("--figs", type=int, default=0, help="Ripe figs, 0-100")
    add_parser.add_argument("--bats", type=int, default=0, help="Bat activity, 0-100")
    add_parser.add_argument("--leaves", type=int, default=50, help="Leaf cover, 0-100")

    delete_parser = subparsers.add_parser("delete", help="Delete an observation by id")
    delete_parser.add_argument("id", type=str, help="Observation id")

    text_parser = subparsers.add_parser(
        "import-text", help="Replace the dataset with pasted CSV/TSV rows"
    )
    text_parser.add_argument("file", type=str, help="File to read, or '-' for stdin")
    text_parser.add_argument(
        "--strict-dates", action="store_true", help="Reject dates that don't exist"
    )

    sheet_parser = subparsers.add_parser(
        "import-sheet", help="Replace the dataset with a Google Sheet's rows"
    )
    sheet_parser.add_argument(
        "url", type=str, nargs="?", default=None, help="Sheet URL (default from settings)"
    )
    sheet_parser.add_argument(
        "--strict-dates", action="store_true", help="Reject dates that don't exist"
    )

    export_parser = subparsers.add_parser("export", help="Print the dataset as CSV")
    export_parser.add_argument(
        "-o", "--output", type=str, default=None, help="Write to a file instead of stdout"
    )

    weather_parser = subparsers.add_parser(
        "weather", help="Show observations alongside daily weather"
    )
    weather_parser.add_argument("--start", type=str, default=None, help="First day (ISO)")
    weather_parser.add_argument("--end", type=str, default=None, help="Last day (ISO)")
    weather_parser.add_argument(
        "--log", action="store_true", help="Print the combined observation and weather log"
    )

    subparsers.add_parser("refresh", help="Seed data if empty and fetch weather")

    return parser


def _fmt(value: float | None, unit: str) -> str:
    return "-" if value is None else f"{value:g}{unit}"


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Location: ({settings.lat}, {settings.lon}) {settings.timezone}")
    print(f"Data dir: {settings.data_dir}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Handle the 'list' command."""
    records = open_store().list()
    years = ", ".join(available_years(records))
    if args.year:
        records = records_for_year(records, args.year)
    if not records:
        print(f"No observations. Years: {years}")
        return 0
    for r in records:
        print(f"{r.id}  {r.date}  figs={r.figs:>3}  bats={r.bats:>3}  leaves={r.leaves:>3}")
    print(f"{len(records)} observations. Years: {years}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Handle the 'add' command."""
    iso = parse_date(args.date) if args.date else date.today().isoformat()
    if iso is None:
        print(f"Error: unrecognized date {args.date!r}", file=sys.stderr)
        return 1

    record = new_observation(iso, figs=args.figs, bats=args.bats, leaves=args.leaves)
    store = open_store()
    store.upsert(record)
    saved = store.get_by_date(iso)
    print(f"Saved {iso} (id {saved.id if saved else record.id})")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Handle the 'delete' command."""
    store = open_store()
    before = len(store.list())
    after = len(store.delete(args.id))
    if before == after:
        print(f"No observation with id {args.id}")
    else:
        print(f"Deleted {args.id}")
    return 0


def cmd_import_text(args: argparse.Namespace) -> int:
    """Handle the 'import-text' command."""
    text = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
    records = import_text(text, open_store(), strict_dates=args.strict_dates)
    if not records:
        print(
            "Error: could not parse data. Ensure date format is DD/MM/YYYY or DDMMYYYY.",
            file=sys.stderr,
        )
        return 1
    print(f"Imported {len(records)} observations.")
    return 0


def cmd_import_sheet(args: argparse.Namespace) -> int:
    """Handle the 'import-sheet' command."""
    url = args.url or get_settings().default_sheet_url
    try:
        records = import_sheet(url, open_store(), strict_dates=args.strict_dates)
    except SheetImportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Imported {len(records)} observations from sheet.")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Handle the 'export' command."""
    csv_text = export_csv(open_store().list())
    if args.output:
        Path(args.output).write_text(csv_text + "\n", encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        print(csv_text)
    return 0


def cmd_weather(args: argparse.Namespace) -> int:
    """Handle the 'weather' command."""
    settings = get_settings()
    records = open_store().list()
    span_start, span_end = date_span(records)
    start = parse_date(args.start) if args.start else span_start
    end = parse_date(args.end) if args.end else span_end
    if start is None or end is None:
        print("Error: unrecognized --start/--end date", file=sys.stderr)
        return 1

    weather = fetch_weather_range(
        start,
        end,
        lat=settings.lat,
        lon=settings.lon,
        timezone=settings.timezone,
        lag_days=settings.archive_lag_days,
    )
    if not weather:
        print(f"No weather data for {start} to {end}.")
    else:
        print(f"{len(weather)} weather days for {start} to {end}.")

    window = records_between(records, start, end)
    if args.log:
        print(context_lines(window, weather))
        return 0

    for row in join_weather(window, weather):
        print(
            f"{row.date}  figs={row.figs:>3}  bats={row.bats:>3}  leaves={row.leaves:>3}"
            f"  rain={_fmt(row.rain, 'mm')}  max={_fmt(row.temp_max, 'C')}"
        )
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: seed data if needed and fetch weather."""
    settings = get_settings()
    print(f"Refreshing data for ({settings.lat}, {settings.lon})...")
    result = refresh_all(sheet_url=settings.default_sheet_url)
    print(f"{result['observations']} observations, {result['weather_days']} weather days.")
    return 0 if result["observations"] else 1


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "list": cmd_list,
        "add": cmd_add,
        "delete": cmd_delete,
        "import-text": cmd_import_text,
        "import-sheet": cmd_import_sheet,
        "export": cmd_export,
        "weather": cmd_weather,
        "refresh": cmd_refresh,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
