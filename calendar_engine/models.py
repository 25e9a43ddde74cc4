"""Data shapes consumed and produced by the calendar engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .errors import CalendarError


class ViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


def coerce_date(value: object) -> date:
    """Return a ``date`` for date, datetime or ISO formatted string values."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as exc:
            raise ValueError(f"Appointment dates must be ISO formatted: {value!r}") from exc
    raise ValueError(f"Unsupported appointment date format: {value!r}")


def _extract_first(row: Mapping[str, Any], keys: Sequence[str], *, allow_missing: bool = False) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    if allow_missing:
        return None
    raise ValueError(f"Expected one of {tuple(keys)!r} in appointment payload")


def _reference(value: Any) -> Tuple[str, Optional[str]]:
    """Split a reference that is either a bare identifier or a nested object."""

    if isinstance(value, Mapping):
        identifier = _extract_first(value, ("_id", "id"))
        name = value.get("name")
        if name is None and ("firstName" in value or "lastName" in value):
            name = " ".join(
                str(part) for part in (value.get("firstName"), value.get("lastName")) if part
            )
        return str(identifier), str(name) if name else None
    return str(value), None


@dataclass(frozen=True)
class Appointment:
    """An appointment record as supplied by the data source."""

    id: str
    patient_ref: str
    doctor_ref: str
    date: date
    start_time: str
    end_time: str
    status: str
    reason: str = ""
    patient_name: Optional[str] = None
    doctor_name: Optional[str] = None

    def __post_init__(self) -> None:
        # Buckets are keyed by calendar day; a datetime would never match one.
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Appointment":
        """Build an appointment from a REST or JSON payload."""

        if not isinstance(row, Mapping):
            raise ValueError("Each appointment entry must be a mapping")

        identifier = _extract_first(row, ("id", "_id", "appointment_id"))
        patient_ref, patient_name = _reference(
            _extract_first(row, ("patientRef", "patient_ref", "patientId", "patient_id", "patient"))
        )
        doctor_ref, doctor_name = _reference(
            _extract_first(row, ("doctorRef", "doctor_ref", "doctorId", "doctor_id", "doctor"))
        )
        return cls(
            id=str(identifier),
            patient_ref=patient_ref,
            doctor_ref=doctor_ref,
            date=coerce_date(_extract_first(row, ("date", "appointmentDate", "appointment_date"))),
            start_time=str(_extract_first(row, ("startTime", "start_time"))),
            end_time=str(_extract_first(row, ("endTime", "end_time"))),
            status=str(_extract_first(row, ("status",))),
            reason=str(row.get("reason") or ""),
            patient_name=patient_name or row.get("patientName") or row.get("patient_name"),
            doctor_name=doctor_name or row.get("doctorName") or row.get("doctor_name"),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "patient_ref": self.patient_ref,
            "doctor_ref": self.doctor_ref,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "status": self.status,
            "reason": self.reason,
            "patient_name": self.patient_name,
            "doctor_name": self.doctor_name,
        }


@dataclass(frozen=True)
class CalendarCell:
    """One day in a month grid."""

    date: date
    is_current_period: bool
    is_today: bool
    appointments: Tuple[Appointment, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "is_current_period": self.is_current_period,
            "is_today": self.is_today,
            "appointments": [appointment.to_dict() for appointment in self.appointments],
        }


@dataclass(frozen=True)
class Slot:
    """One business hour on one day in a week or day view."""

    date: date
    hour: int
    appointments: Tuple[Appointment, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "hour": self.hour,
            "appointments": [appointment.to_dict() for appointment in self.appointments],
        }


@dataclass(frozen=True)
class AppointmentIssue:
    """A per-appointment data defect found while bucketing."""

    appointment_id: str
    kind: str
    message: str
    error: CalendarError = field(compare=False, repr=False)

    @classmethod
    def from_error(cls, appointment_id: str, error: CalendarError) -> "AppointmentIssue":
        return cls(
            appointment_id=appointment_id,
            kind=type(error).__name__,
            message=str(error),
            error=error,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "appointment_id": self.appointment_id,
            "kind": self.kind,
            "message": self.message,
        }


@dataclass(frozen=True)
class CalendarState:
    """Navigation state owned by the caller between rebuilds."""

    reference_date: date
    view_mode: ViewMode = ViewMode.MONTH
    doctor_filter: Optional[str] = None


@dataclass(frozen=True)
class CalendarView:
    """Result of rendering a :class:`CalendarState` against appointment data."""

    state: CalendarState
    title: str
    range_start: date
    range_end: date
    cells: Tuple[CalendarCell, ...] = ()
    slots: Tuple[Slot, ...] = ()
    errors: Tuple[AppointmentIssue, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "reference_date": self.state.reference_date.isoformat(),
            "view_mode": self.state.view_mode.value,
            "doctor_filter": self.state.doctor_filter,
            "title": self.title,
            "range_start": self.range_start.isoformat(),
            "range_end": self.range_end.isoformat(),
            "cells": [cell.to_dict() for cell in self.cells],
            "slots": [slot.to_dict() for slot in self.slots],
            "errors": [issue.to_dict() for issue in self.errors],
        }
