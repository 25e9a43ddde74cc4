"""JSON web surface for the appointment calendar.

This module exposes a small Flask application that renders calendar views
for a presentation layer. Appointment data comes from an injected source so
the application can run against the clinic API, a JSON file or test data.
"""
from __future__ import annotations

import logging
import os
from datetime import date
from typing import Callable, Optional

from flask import Flask, Response, jsonify, request

from calendar_engine import CalendarState, coerce_view_mode, render, resolve_range, status_legend
from connector import AppointmentSource, ClinicAPIError, JsonFileAppointmentSource

DATE_FORMAT = "%Y-%m-%d"

logger = logging.getLogger(__name__)


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def create_app(
    source: Optional[AppointmentSource] = None,
    today_provider: Callable[[], date] = date.today,
) -> Flask:
    """Build the Flask application around ``source``."""

    app = Flask(__name__)
    appointment_source = source or JsonFileAppointmentSource()

    @app.route("/legend", methods=["GET"])
    def legend() -> Response:
        return jsonify(
            [
                {"status": entry.status.value, "category": entry.category.value, "label": entry.label}
                for entry in status_legend()
            ]
        )

    @app.route("/calendar", methods=["GET"])
    def calendar_view() -> Response | tuple[Response, int]:
        today = today_provider()
        try:
            reference = parse_iso_date(request.args.get("date")) or today
        except ValueError:
            return _error(f"Dates must use the {DATE_FORMAT} format", 400)
        try:
            view_mode = coerce_view_mode(request.args.get("view") or "month")
        except ValueError as exc:
            return _error(str(exc), 400)

        state = CalendarState(
            reference_date=reference,
            view_mode=view_mode,
            doctor_filter=request.args.get("doctor") or None,
        )
        start, end = resolve_range(state)
        try:
            appointments = appointment_source.fetch_appointments(start, end, state.doctor_filter)
        except ClinicAPIError as exc:
            logger.error("Appointment source failed: %s", exc)
            return _error("Appointment data is unavailable", 502)
        except ValueError as exc:
            logger.error("Appointment data is invalid: %s", exc)
            return _error("Appointment data is invalid", 502)

        return jsonify(render(state, appointments, today).to_dict())

    return app


if __name__ == "__main__":
    create_app().run(
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "5000")),
        debug=False,
    )
