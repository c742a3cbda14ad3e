"""
business.calendar
~~~~~~~~~~~~~~~~~

Business-day arithmetic.  A Calendar knows which weekdays are worked, which
dates are holidays and which dates are worked regardless of their weekday.

Basic usage::

    from datetime import date
    from business.calendar import Calendar

    xmas = date(2020, 12, 25)                       # Friday
    cal = Calendar.with_holidays([xmas])

    cal.is_business_day(xmas)                       # → False
    cal.roll_forward(xmas)                          # → 2020-12-28
    cal.add_business_days(date(2020, 12, 24), 2)    # → 2020-12-29

From YAML::

    cal = Calendar.load("cal.yml")

NumPy arrays of dates are accepted by ``is_business_day``::

    import numpy as np
    days = np.arange("2022-10-01", "2022-10-08", dtype="datetime64[D]")
    mask = cal.is_business_day(days)

Public API
----------
Calendar            The main class.
Weekday, WORKWEEK   Weekday numbering and the default Mon–Fri working days.
DateLike            Protocol for date types the calendar operates on.
CalendarError       Base exception for all calendar-related errors.
ValidationError     Holidays overlap extra working dates.
ConfigParseError    Malformed calendar config.
NoBusinessDayError  ``max_steps`` exceeded while searching for a business day.
"""

from __future__ import annotations

from business.calendar._exceptions import (
    CalendarError,
    ConfigParseError,
    NoBusinessDayError,
    ValidationError,
)
from business.calendar.calendar import Calendar
from business.calendar.config import CalendarConfig, load, loads, parse_config
from business.calendar.dates import WORKWEEK, DateLike, Weekday

__all__ = [
    "Calendar",
    "CalendarConfig",
    "CalendarError",
    "ConfigParseError",
    "DateLike",
    "NoBusinessDayError",
    "ValidationError",
    "WORKWEEK",
    "Weekday",
    "load",
    "loads",
    "parse_config",
]
