"""Date helpers shared by the grid builder, bucketer and view controller."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Tuple

from .errors import MalformedTimeError

TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(a: date, b: date) -> bool:
    """Return True when both values fall on the same calendar day."""

    a = _as_date(a)
    b = _as_date(b)
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def start_of_month(d: date) -> date:
    return _as_date(d).replace(day=1)


def end_of_month(d: date) -> date:
    d = _as_date(d)
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def weekday_index(d: date) -> int:
    """Return the day of week with Sunday as 0 and Saturday as 6."""

    # date.weekday() counts from Monday.
    return (_as_date(d).weekday() + 1) % 7


def week_start(d: date) -> date:
    """Return the Sunday on or before ``d``."""

    d = _as_date(d)
    return d - timedelta(days=weekday_index(d))


def add_months(d: date, months: int) -> date:
    """Shift ``d`` by whole calendar months, clamping the day to the month length."""

    d = _as_date(d)
    month_index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _parse_time(value: str) -> Tuple[int, int]:
    if not isinstance(value, str):
        raise MalformedTimeError(value)
    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedTimeError(value)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise MalformedTimeError(value)
    return hour, minute


def hour_of(value: str) -> int:
    """Return the hour (0-23) of an ``HH:MM`` time string."""

    return _parse_time(value)[0]


def minute_of(value: str) -> int:
    """Return the minutes since midnight of an ``HH:MM`` time string."""

    hour, minute = _parse_time(value)
    return hour * 60 + minute


def format_time_12h(value: str) -> str:
    """Format ``"14:05"`` as ``"2:05 PM"``."""

    hour, minute = _parse_time(value)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"
