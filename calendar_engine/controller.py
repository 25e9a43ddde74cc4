"""Navigation transitions over :class:`CalendarState`.

Every transition is a pure function returning a new state. The
``ViewController`` class wraps the same functions for callers that prefer
to hold the current state in one object.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Optional, Union

from .datemath import add_months
from .models import CalendarState, ViewMode


def coerce_view_mode(mode: Union[ViewMode, str]) -> ViewMode:
    if isinstance(mode, ViewMode):
        return mode
    try:
        return ViewMode(str(mode).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unknown view mode {mode!r}; expected month, week or day") from exc


def _shift(state: CalendarState, step: int) -> CalendarState:
    reference = state.reference_date
    if state.view_mode is ViewMode.MONTH:
        reference = add_months(reference, step)
    elif state.view_mode is ViewMode.WEEK:
        reference = reference + timedelta(days=7 * step)
    else:
        reference = reference + timedelta(days=step)
    return replace(state, reference_date=reference)


def next_period(state: CalendarState) -> CalendarState:
    return _shift(state, 1)


def previous_period(state: CalendarState) -> CalendarState:
    return _shift(state, -1)


def go_to_today(state: CalendarState, today: date) -> CalendarState:
    return replace(state, reference_date=today)


def set_view_mode(state: CalendarState, mode: Union[ViewMode, str]) -> CalendarState:
    return replace(state, view_mode=coerce_view_mode(mode))


def set_doctor_filter(state: CalendarState, doctor_ref: Optional[str]) -> CalendarState:
    return replace(state, doctor_filter=doctor_ref or None)


class ViewController:
    """Holds the current calendar state and applies transitions to it."""

    def __init__(self, state: CalendarState) -> None:
        self._state = state

    @classmethod
    def starting_at(
        cls,
        reference_date: date,
        view_mode: Union[ViewMode, str] = ViewMode.MONTH,
        doctor_filter: Optional[str] = None,
    ) -> "ViewController":
        return cls(
            CalendarState(
                reference_date=reference_date,
                view_mode=coerce_view_mode(view_mode),
                doctor_filter=doctor_filter or None,
            )
        )

    @property
    def state(self) -> CalendarState:
        return self._state

    def _apply(self, state: CalendarState) -> CalendarState:
        self._state = state
        return state

    def go_to_next_period(self) -> CalendarState:
        return self._apply(next_period(self._state))

    def go_to_previous_period(self) -> CalendarState:
        return self._apply(previous_period(self._state))

    def go_to_today(self, today: date) -> CalendarState:
        return self._apply(go_to_today(self._state, today))

    def set_view_mode(self, mode: Union[ViewMode, str]) -> CalendarState:
        return self._apply(set_view_mode(self._state, mode))

    def set_doctor_filter(self, doctor_ref: Optional[str]) -> CalendarState:
        return self._apply(set_doctor_filter(self._state, doctor_ref))
