"""Appointment calendar engine for the clinic front end."""

from .bucketer import bucket_cells, bucket_slots, filter_by_doctor
from .controller import (
    ViewController,
    coerce_view_mode,
    go_to_today,
    next_period,
    previous_period,
    set_doctor_filter,
    set_view_mode,
)
from .datemath import (
    add_months,
    end_of_month,
    format_time_12h,
    hour_of,
    is_same_day,
    minute_of,
    start_of_month,
    week_start,
    weekday_index,
)
from .engine import render, view_title
from .errors import CalendarError, MalformedTimeError, UnknownStatusError
from .grid import (
    BUSINESS_HOURS,
    build_day_slots,
    build_month_grid,
    build_week_slots,
    month_bounds,
    resolve_range,
)
from .models import (
    Appointment,
    AppointmentIssue,
    CalendarCell,
    CalendarState,
    CalendarView,
    Slot,
    ViewMode,
    coerce_date,
)
from .status import (
    AppointmentStatus,
    LegendEntry,
    StatusCategory,
    category_for,
    parse_status,
    status_label,
    status_legend,
)

__all__ = [
    "Appointment",
    "AppointmentIssue",
    "AppointmentStatus",
    "BUSINESS_HOURS",
    "CalendarCell",
    "CalendarError",
    "CalendarState",
    "CalendarView",
    "LegendEntry",
    "MalformedTimeError",
    "Slot",
    "StatusCategory",
    "UnknownStatusError",
    "ViewController",
    "ViewMode",
    "add_months",
    "bucket_cells",
    "bucket_slots",
    "build_day_slots",
    "build_month_grid",
    "build_week_slots",
    "category_for",
    "coerce_date",
    "coerce_view_mode",
    "end_of_month",
    "filter_by_doctor",
    "format_time_12h",
    "go_to_today",
    "hour_of",
    "is_same_day",
    "minute_of",
    "month_bounds",
    "next_period",
    "parse_status",
    "previous_period",
    "render",
    "resolve_range",
    "set_doctor_filter",
    "set_view_mode",
    "start_of_month",
    "status_label",
    "status_legend",
    "view_title",
    "week_start",
]
