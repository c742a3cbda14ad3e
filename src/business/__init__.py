"""Business-day calendars."""

from business.calendar import (
    WORKWEEK,
    Calendar,
    CalendarError,
    ConfigParseError,
    NoBusinessDayError,
    ValidationError,
    Weekday,
)

__all__ = [
    "Calendar",
    "CalendarError",
    "ConfigParseError",
    "NoBusinessDayError",
    "ValidationError",
    "WORKWEEK",
    "Weekday",
]
