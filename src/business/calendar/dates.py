from __future__ import annotations

import enum
from datetime import date, timedelta
from typing import Protocol, TypeVar

ONE_DAY = timedelta(days=1)

D = TypeVar("D", bound="DateLike")


class DateLike(Protocol):
    """
    Anything with a calendar date and day arithmetic.

    ``datetime.date``, ``datetime.datetime`` and ``pandas.Timestamp`` all
    qualify.  Adding or subtracting a ``timedelta`` must return a value of
    the same type.
    """

    @property
    def year(self) -> int: ...

    @property
    def month(self) -> int: ...

    @property
    def day(self) -> int: ...

    def weekday(self) -> int: ...

    def __add__(self: D, other: timedelta) -> D: ...

    def __sub__(self: D, other: timedelta) -> D: ...


class Weekday(enum.IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, name: str) -> Weekday:
        """Full name or three-letter abbreviation, any case."""
        key = name.strip().upper()
        for day in cls:
            if key == day.name or key == day.name[:3]:
                return day
        raise ValueError(f"Unknown weekday {name!r}.")


WORKWEEK: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)


def as_date(d: DateLike) -> date:
    """Project a date-like value onto a plain ``datetime.date``."""
    if type(d) is date:
        return d
    return date(d.year, d.month, d.day)
