"""Print a rendered appointment calendar as JSON."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

if __package__ is None or __package__ == "":  # pragma: no cover - runtime safety for script execution
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from calendar_engine import CalendarState, ViewMode, render, resolve_range, status_legend
from connector import AppointmentSource, ClinicAPIClient, ClinicAPIError, JsonFileAppointmentSource

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}; expected YYYY-MM-DD") from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clinic appointment calendar")
    parser.add_argument(
        "command",
        nargs="?",
        choices=("month", "week", "day", "legend"),
        default="month",
        help="View to render, or 'legend' to list appointment statuses",
    )
    parser.add_argument("--date", type=_iso_date, help="Reference date (defaults to today)")
    parser.add_argument("--today", type=_iso_date, help="Date treated as today (defaults to the system date)")
    parser.add_argument("--doctor", help="Only show appointments for this doctor reference")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--source", type=Path, help="JSON file with appointment records")
    source.add_argument("--api", action="store_true", help="Fetch appointments from the clinic API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_source(args: argparse.Namespace) -> AppointmentSource:
    if args.api:
        return ClinicAPIClient()
    return JsonFileAppointmentSource(args.source)


def legend_payload() -> List[dict]:
    return [
        {"status": entry.status.value, "category": entry.category.value, "label": entry.label}
        for entry in status_legend()
    ]


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    if args.command == "legend":
        print(json.dumps(legend_payload(), indent=2))
        return 0

    today = args.today or date.today()
    state = CalendarState(
        reference_date=args.date or today,
        view_mode=ViewMode(args.command),
        doctor_filter=args.doctor or None,
    )
    start, end = resolve_range(state)

    try:
        appointments = build_source(args).fetch_appointments(start, end, state.doctor_filter)
    except (ClinicAPIError, ValueError) as exc:
        logger.error("Unable to load appointments: %s", exc)
        return 1

    view = render(state, appointments, today)
    print(json.dumps(view.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
