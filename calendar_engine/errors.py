"""Exceptions raised by the appointment calendar engine."""

from __future__ import annotations

__all__ = ["CalendarError", "MalformedTimeError", "UnknownStatusError"]


class CalendarError(ValueError):
    """Base exception for per-appointment data defects."""


class MalformedTimeError(CalendarError):
    """Raised when a time-of-day string is not a valid ``HH:MM`` value."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Time value {value!r} is not a valid HH:MM time")
        self.value = value


class UnknownStatusError(CalendarError):
    """Raised when an appointment status is outside the closed taxonomy."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown appointment status {value!r}")
        self.value = value
