from __future__ import annotations

from datetime import date


class CalendarError(Exception):
    """Base class for all calendar-related errors."""


class ValidationError(CalendarError, ValueError):
    """Holidays and extra working dates claim the same date."""

    def __init__(self, overlap: frozenset[date]) -> None:
        self.overlap = frozenset(overlap)
        days = ", ".join(d.isoformat() for d in sorted(self.overlap))
        super().__init__(
            f"Holidays and extra working dates must not overlap; got {days}."
        )

    def __reduce__(self):
        return (type(self), (self.overlap,))


class ConfigParseError(CalendarError, ValueError):
    """The calendar config is malformed."""


class NoBusinessDayError(CalendarError):
    """No business day was found within the calendar's step limit."""
