"""Assignment of appointments to month cells and hour slots."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .datemath import hour_of, minute_of
from .errors import CalendarError, MalformedTimeError
from .models import Appointment, AppointmentIssue, CalendarCell, Slot
from .status import parse_status

logger = logging.getLogger(__name__)

# Sorts after every valid minutes-since-midnight value.
_UNPARSABLE_SORT_KEY = 24 * 60


def filter_by_doctor(
    appointments: Iterable[Appointment], doctor_filter: Optional[str]
) -> List[Appointment]:
    """Return the appointments matching ``doctor_filter``, or all of them when unset."""

    if not doctor_filter:
        return list(appointments)
    return [appointment for appointment in appointments if appointment.doctor_ref == doctor_filter]


def _start_sort_key(appointment: Appointment) -> int:
    try:
        return minute_of(appointment.start_time)
    except MalformedTimeError:
        return _UNPARSABLE_SORT_KEY


def _record_issue(issues: List[AppointmentIssue], appointment: Appointment, error: CalendarError) -> None:
    logger.warning("Excluding appointment %s from calendar: %s", appointment.id, error)
    issues.append(AppointmentIssue.from_error(appointment.id, error))


def bucket_cells(
    cells: Sequence[CalendarCell],
    appointments: Iterable[Appointment],
    doctor_filter: Optional[str] = None,
) -> Tuple[List[CalendarCell], List[AppointmentIssue]]:
    """Return copies of ``cells`` holding the matching appointments.

    Each cell's appointments are ordered by start time, keeping input order
    for equal times. Appointments outside the grid are dropped silently.
    Appointments with an unknown status are excluded and reported; a bad
    time does not matter here because month cells only need the date.
    """

    by_date: Dict[date, List[Appointment]] = {cell.date: [] for cell in cells}
    issues: List[AppointmentIssue] = []

    for appointment in filter_by_doctor(appointments, doctor_filter):
        bucket = by_date.get(appointment.date)
        if bucket is None:
            logger.debug("Appointment %s on %s is outside the grid", appointment.id, appointment.date)
            continue
        try:
            parse_status(appointment.status)
        except CalendarError as exc:
            _record_issue(issues, appointment, exc)
            continue
        bucket.append(appointment)

    filled = [
        replace(cell, appointments=tuple(sorted(by_date[cell.date], key=_start_sort_key)))
        for cell in cells
    ]
    return filled, issues


def bucket_slots(
    slots: Sequence[Slot],
    appointments: Iterable[Appointment],
    doctor_filter: Optional[str] = None,
) -> Tuple[List[Slot], List[AppointmentIssue]]:
    """Return copies of ``slots`` holding the appointments starting in each hour.

    Appointments whose start or end time cannot be parsed, or whose status is
    unknown, are excluded and reported instead of aborting the build.
    Appointments outside the slot dates or business hours are dropped silently.
    """

    by_key: Dict[Tuple[date, int], List[Appointment]] = {(slot.date, slot.hour): [] for slot in slots}
    dates = {slot.date for slot in slots}
    issues: List[AppointmentIssue] = []

    for appointment in filter_by_doctor(appointments, doctor_filter):
        if appointment.date not in dates:
            logger.debug("Appointment %s on %s is outside the slot range", appointment.id, appointment.date)
            continue
        try:
            parse_status(appointment.status)
            hour = hour_of(appointment.start_time)
            minute_of(appointment.end_time)
        except CalendarError as exc:
            _record_issue(issues, appointment, exc)
            continue
        bucket = by_key.get((appointment.date, hour))
        if bucket is None:
            logger.debug("Appointment %s at %s is outside the slot hours", appointment.id, appointment.start_time)
            continue
        bucket.append(appointment)

    filled = [
        replace(slot, appointments=tuple(sorted(by_key[(slot.date, slot.hour)], key=_start_sort_key)))
        for slot in slots
    ]
    return filled, issues
