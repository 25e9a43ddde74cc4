"""Appointment lifecycle states and their presentation categories."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, NamedTuple

from .errors import UnknownStatusError


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class StatusCategory(str, Enum):
    """Stable legend identifiers a presentation layer can map to colors."""

    INFO = "info"
    SUCCESS = "success"
    COMPLETE = "complete"
    DANGER = "danger"
    WARNING = "warning"


STATUS_CATEGORIES: Dict[AppointmentStatus, StatusCategory] = {
    AppointmentStatus.SCHEDULED: StatusCategory.INFO,
    AppointmentStatus.CONFIRMED: StatusCategory.SUCCESS,
    AppointmentStatus.COMPLETED: StatusCategory.COMPLETE,
    AppointmentStatus.CANCELLED: StatusCategory.DANGER,
    AppointmentStatus.NO_SHOW: StatusCategory.WARNING,
}


class LegendEntry(NamedTuple):
    status: AppointmentStatus
    category: StatusCategory
    label: str


def parse_status(value: object) -> AppointmentStatus:
    """Return the taxonomy member for ``value``.

    Matching ignores case and surrounding whitespace, and ``no_show`` is read
    as ``no-show``. Any other value raises :class:`UnknownStatusError`.
    """

    if isinstance(value, AppointmentStatus):
        return value
    if not isinstance(value, str):
        raise UnknownStatusError(value)
    normalized = value.strip().lower().replace("_", "-")
    try:
        return AppointmentStatus(normalized)
    except ValueError as exc:
        raise UnknownStatusError(value) from exc


def category_for(status: object) -> StatusCategory:
    return STATUS_CATEGORIES[parse_status(status)]


def status_label(status: object) -> str:
    value = parse_status(status).value
    return value[:1].upper() + value[1:]


def status_legend() -> List[LegendEntry]:
    """Return one legend entry per status in lifecycle order."""

    return [
        LegendEntry(status=status, category=STATUS_CATEGORIES[status], label=status_label(status))
        for status in AppointmentStatus
    ]
