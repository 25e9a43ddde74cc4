"""Render a calendar state and appointment list into a view structure."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from .bucketer import bucket_cells, bucket_slots
from .grid import BUSINESS_HOURS, build_day_slots, build_month_grid, build_week_slots, resolve_range
from .models import Appointment, CalendarState, CalendarView, ViewMode

logger = logging.getLogger(__name__)


def view_title(state: CalendarState) -> str:
    """Return the heading for the period shown by ``state``."""

    reference = state.reference_date
    if state.view_mode is ViewMode.MONTH:
        return f"{reference.strftime('%B')} {reference.year}"
    if state.view_mode is ViewMode.DAY:
        return f"{reference.strftime('%A, %B')} {reference.day}, {reference.year}"

    start, end = resolve_range(state)
    if start.year != end.year:
        return (
            f"{start.strftime('%b')} {start.day}, {start.year} - "
            f"{end.strftime('%b')} {end.day}, {end.year}"
        )
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


def render(
    state: CalendarState,
    appointments: Iterable[Appointment],
    today: date,
    hours: Iterable[int] = BUSINESS_HOURS,
) -> CalendarView:
    """Build the cells or slots for ``state`` and fill them with ``appointments``.

    ``today`` is supplied by the caller so repeated renders of the same
    inputs are identical. The appointment list is never modified.
    """

    appointment_list: List[Appointment] = list(appointments)
    range_start, range_end = resolve_range(state)
    title = view_title(state)

    if state.view_mode is ViewMode.MONTH:
        cells, issues = bucket_cells(
            build_month_grid(state.reference_date, today), appointment_list, state.doctor_filter
        )
        view = CalendarView(
            state=state,
            title=title,
            range_start=range_start,
            range_end=range_end,
            cells=tuple(cells),
            errors=tuple(issues),
        )
    else:
        if state.view_mode is ViewMode.WEEK:
            empty_slots = build_week_slots(state.reference_date, hours)
        else:
            empty_slots = build_day_slots(state.reference_date, hours)
        slots, issues = bucket_slots(empty_slots, appointment_list, state.doctor_filter)
        view = CalendarView(
            state=state,
            title=title,
            range_start=range_start,
            range_end=range_end,
            slots=tuple(slots),
            errors=tuple(issues),
        )

    logger.debug(
        "Rendered %s view for %s (%d appointments in, %d issues)",
        state.view_mode.value,
        state.reference_date.isoformat(),
        len(appointment_list),
        len(view.errors),
    )
    return view
