"""Construction of empty month grids and hour slot sequences."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Tuple

from .datemath import end_of_month, is_same_day, start_of_month, week_start, weekday_index
from .models import CalendarCell, CalendarState, Slot, ViewMode

# Hours 08:00 through 17:00, one slot each.
BUSINESS_HOURS = range(8, 18)

DAYS_PER_WEEK = 7


def month_bounds(reference: date) -> Tuple[date, date]:
    """Return the first and last dates shown by the month grid for ``reference``.

    The bounds include the padding days borrowed from the neighbouring months.
    """

    first = start_of_month(reference)
    last = end_of_month(reference)
    grid_start = first - timedelta(days=weekday_index(first))
    grid_end = last + timedelta(days=6 - weekday_index(last))
    return grid_start, grid_end


def build_month_grid(reference: date, today: date) -> List[CalendarCell]:
    """Return the cells of the month containing ``reference`` in complete weeks.

    Leading cells come from the previous month and trailing cells from the
    next, each flagged with ``is_current_period=False``. ``today`` is used
    only to flag the matching cell.
    """

    first = start_of_month(reference)
    last = end_of_month(reference)
    grid_start, grid_end = month_bounds(reference)

    cells: List[CalendarCell] = []
    current = grid_start
    while current <= grid_end:
        cells.append(
            CalendarCell(
                date=current,
                is_current_period=first <= current <= last,
                is_today=is_same_day(current, today),
            )
        )
        current += timedelta(days=1)
    return cells


def build_day_slots(day: date, hours: Iterable[int] = BUSINESS_HOURS) -> List[Slot]:
    return [Slot(date=day, hour=hour) for hour in _validated_hours(hours)]


def build_week_slots(reference: date, hours: Iterable[int] = BUSINESS_HOURS) -> List[Slot]:
    """Return slots for the Sunday-to-Saturday week containing ``reference``.

    Slots are ordered by date, then by hour.
    """

    hour_list = _validated_hours(hours)
    start = week_start(reference)
    slots: List[Slot] = []
    for offset in range(DAYS_PER_WEEK):
        day = start + timedelta(days=offset)
        slots.extend(Slot(date=day, hour=hour) for hour in hour_list)
    return slots


def resolve_range(state: CalendarState) -> Tuple[date, date]:
    """Return the inclusive date range displayed for ``state``."""

    reference = state.reference_date
    if state.view_mode is ViewMode.MONTH:
        return month_bounds(reference)
    if state.view_mode is ViewMode.WEEK:
        start = week_start(reference)
        return start, start + timedelta(days=DAYS_PER_WEEK - 1)
    return reference, reference


def _validated_hours(hours: Iterable[int]) -> List[int]:
    hour_list = sorted(set(hours))
    for hour in hour_list:
        if not 0 <= hour <= 23:
            raise ValueError(f"Slot hour {hour} is outside 0-23")
    return hour_list
