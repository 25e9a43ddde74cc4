"""Appointment sources feeding the calendar engine."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from calendar_engine import Appointment

from .clinic_client import ClinicAPIClient, ClinicAPIError

__all__ = [
    "AppointmentSource",
    "ClinicAPIClient",
    "ClinicAPIError",
    "InMemoryAppointmentSource",
    "JsonFileAppointmentSource",
    "DEFAULT_APPOINTMENTS_FILE",
]

logger = logging.getLogger(__name__)

DEFAULT_APPOINTMENTS_FILE = Path(
    os.getenv(
        "APPOINTMENTS_FILE",
        str(Path(__file__).resolve().parents[1] / "data" / "appointments.json"),
    )
)


class AppointmentSource(Protocol):
    """Interface for collaborators that supply appointment records."""

    def fetch_appointments(
        self, start: date, end: date, doctor_ref: Optional[str] = None
    ) -> List[Appointment]:
        """Return the appointments dated between ``start`` and ``end`` inclusive."""


def _select(
    appointments: Iterable[Appointment], start: date, end: date, doctor_ref: Optional[str]
) -> List[Appointment]:
    return [
        appointment
        for appointment in appointments
        if start <= appointment.date <= end
        and (not doctor_ref or appointment.doctor_ref == doctor_ref)
    ]


class InMemoryAppointmentSource:
    """List-backed appointment source."""

    def __init__(self, appointments: Iterable[Appointment] = ()) -> None:
        self._appointments: List[Appointment] = list(appointments)

    def add(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)

    def fetch_appointments(
        self, start: date, end: date, doctor_ref: Optional[str] = None
    ) -> List[Appointment]:
        return _select(self._appointments, start, end, doctor_ref)


class JsonFileAppointmentSource:
    """Reads appointment records from a JSON list on disk."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else DEFAULT_APPOINTMENTS_FILE

    def load(self) -> List[Appointment]:
        if not self._path.exists():
            logger.info("Appointment file %s not found; using an empty list", self._path)
            return []

        raw_content = self._path.read_text(encoding="utf-8").strip()
        if not raw_content:
            return []
        try:
            payload = json.loads(raw_content)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid appointment data in {self._path}: {exc.msg}") from exc
        if not isinstance(payload, list):
            raise ValueError("Appointment data must be a list of records.")
        appointments: List[Appointment] = []
        for entry in payload:
            try:
                appointments.append(Appointment.from_mapping(entry))
            except ValueError as exc:
                logger.warning("Skipping malformed appointment record in %s: %s", self._path, exc)
        return appointments

    def fetch_appointments(
        self, start: date, end: date, doctor_ref: Optional[str] = None
    ) -> List[Appointment]:
        return _select(self.load(), start, end, doctor_ref)
