from __future__ import annotations

import logging
from datetime import date, timedelta
from os import PathLike
from typing import Any, Iterable, Mapping, Optional, Union

import numpy as np

from ._exceptions import NoBusinessDayError, ValidationError
from .dates import D, ONE_DAY, WORKWEEK, DateLike, Weekday, as_date

logger = logging.getLogger(__name__)

DateArrayLike = Union[DateLike, np.datetime64, Iterable[DateLike], "np.ndarray"]

# 1970-01-01, day zero of datetime64[D], was a Thursday.
_EPOCH_WEEKDAY = int(Weekday.THURSDAY)


class Calendar:
    """
    Immutable business-day calendar.

    A date is a business day when its weekday is a working day or it is an
    extra working date, and it is not a holiday.  Holidays and extra working
    dates may not overlap; the constructor raises ``ValidationError`` if they
    do.

    Every rolling and stepping method works on any ``DateLike`` value and
    returns a value of the same type.  The scans are unbounded unless
    ``max_steps`` is given: a calendar without any working day and without
    extra working dates never finds a business day.
    """

    __slots__ = (
        "_working_days",
        "_holidays",
        "_extra_working_dates",
        "_max_steps",
        "_np_working_days",
        "_np_holidays",
        "_np_extra_working_dates",
    )

    def __init__(
        self,
        working_days: Optional[Iterable[int]] = None,
        holidays: Optional[Iterable[DateLike]] = None,
        extra_working_dates: Optional[Iterable[DateLike]] = None,
        *,
        max_steps: Optional[int] = None,
    ) -> None:
        if working_days is None:
            working_days = WORKWEEK
        if holidays is None:
            holidays = ()
        if extra_working_dates is None:
            extra_working_dates = ()
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1; got {max_steps}.")

        self._working_days: frozenset[Weekday] = frozenset(
            Weekday(d) for d in working_days
        )
        self._holidays: frozenset[date] = frozenset(as_date(d) for d in holidays)
        self._extra_working_dates: frozenset[date] = frozenset(
            as_date(d) for d in extra_working_dates
        )

        overlap = self._holidays & self._extra_working_dates
        if overlap:
            raise ValidationError(overlap)

        self._max_steps: Optional[int] = max_steps

        self._np_working_days = np.array(sorted(self._working_days), dtype=np.int64)
        self._np_holidays = np.array(sorted(self._holidays), dtype="datetime64[D]")
        self._np_extra_working_dates = np.array(
            sorted(self._extra_working_dates), dtype="datetime64[D]"
        )

        if not self._working_days and not self._extra_working_dates:
            logger.warning(
                "Calendar has no working days and no extra working dates; "
                "rolling or stepping will never find a business day."
            )
        logger.debug(
            f"Built calendar with {len(self._working_days)} working days, "
            f"{len(self._holidays)} holidays, "
            f"{len(self._extra_working_dates)} extra working dates"
        )

    # ── alternative constructors ─────────────────────────────────────────

    @classmethod
    def workweek(cls) -> Calendar:
        """Monday to Friday, no holidays."""
        return cls(WORKWEEK)

    @classmethod
    def with_holidays(cls, holidays: Iterable[DateLike]) -> Calendar:
        """Monday to Friday with the given holidays."""
        return cls(WORKWEEK, holidays)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Calendar:
        from .config import parse_config

        return parse_config(data).to_calendar(calendar_cls=cls)

    @classmethod
    def from_yaml(cls, text: str) -> Calendar:
        from .config import loads

        return loads(text, calendar_cls=cls)

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> Calendar:
        from .config import load

        return load(path, calendar_cls=cls)

    # ── predicates ───────────────────────────────────────────────────────

    def is_business_day(self, date: DateArrayLike) -> Union[bool, np.ndarray]:
        """
        True if ``date`` falls on a working day (or an extra working date)
        and is not a holiday.

        Arrays and sequences of dates give a boolean array of the same shape.
        """
        if isinstance(date, np.datetime64) or np.ndim(date) > 0:
            result = self._business_day_mask(_to_day_array(date))
            return bool(result) if result.ndim == 0 else result
        return self._is_business_day(date)

    def _is_business_day(self, date: DateLike) -> bool:
        day = as_date(date)
        if day in self._holidays:
            return False
        return date.weekday() in self._working_days or day in self._extra_working_dates

    def _business_day_mask(self, days: np.ndarray) -> np.ndarray:
        weekdays = (days.astype(np.int64) + _EPOCH_WEEKDAY) % 7
        working = np.isin(weekdays, self._np_working_days)
        working |= np.isin(days, self._np_extra_working_dates)
        return working & ~np.isin(days, self._np_holidays)

    # ── rolling and stepping ─────────────────────────────────────────────

    def roll_forward(self, date: D) -> D:
        """``date`` itself if it is a business day, else the next one."""
        return self._scan(date, ONE_DAY)

    def roll_backward(self, date: D) -> D:
        """``date`` itself if it is a business day, else the previous one."""
        return self._scan(date, -ONE_DAY)

    def next_business_day(self, date: D) -> D:
        """First business day strictly after ``date``."""
        return self._scan(date + ONE_DAY, ONE_DAY)

    def previous_business_day(self, date: D) -> D:
        """Last business day strictly before ``date``."""
        return self._scan(date - ONE_DAY, -ONE_DAY)

    def add_business_days(self, date: D, n: int) -> D:
        """
        Move ``n`` business days forward.  A non-business start date is first
        rolled forward, so counting starts at the next business day.
        """
        _check_count(n)
        result = self.roll_forward(date)
        for _ in range(n):
            result = self.next_business_day(result)
        return result

    def subtract_business_days(self, date: D, n: int) -> D:
        """
        Move ``n`` business days backward.  A non-business start date is first
        rolled backward, so counting starts at the previous business day.
        """
        _check_count(n)
        result = self.roll_backward(date)
        for _ in range(n):
            result = self.previous_business_day(result)
        return result

    def _scan(self, start: D, step: timedelta) -> D:
        candidate = start
        examined = 0
        while not self._is_business_day(candidate):
            examined += 1
            if self._max_steps is not None and examined >= self._max_steps:
                raise NoBusinessDayError(
                    f"No business day within {self._max_steps} days of "
                    f"{as_date(start).isoformat()}."
                )
            candidate = candidate + step
        return candidate

    # ── ranges ───────────────────────────────────────────────────────────

    def business_days_between(self, start: DateLike, end: DateLike) -> int:
        """
        Number of business days in ``[start, end)``.  Negative when ``end``
        precedes ``start``.
        """
        first, last = as_date(start), as_date(end)
        if last < first:
            return -self.business_days_between(end, start)
        days = np.arange(
            np.datetime64(first, "D"), np.datetime64(last, "D"), dtype="datetime64[D]"
        )
        return int(self._business_day_mask(days).sum())

    def business_days_in_range(self, start: D, end: DateLike) -> list[D]:
        """Business days in ``[start, end]``, ascending."""
        last = as_date(end)
        result: list[D] = []
        current = start
        while as_date(current) <= last:
            if self._is_business_day(current):
                result.append(current)
            current = current + ONE_DAY
        return result

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def working_days(self) -> frozenset[Weekday]:
        return self._working_days

    @property
    def holidays(self) -> frozenset[date]:
        return self._holidays

    @property
    def extra_working_dates(self) -> frozenset[date]:
        return self._extra_working_dates

    @property
    def max_steps(self) -> Optional[int]:
        return self._max_steps

    def _key(self) -> tuple[frozenset, frozenset, frozenset]:
        return (self._working_days, self._holidays, self._extra_working_dates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        days = [d.name.lower() for d in sorted(self._working_days)]
        return (
            f"Calendar(working_days={days}, "
            f"holidays={len(self._holidays)}, "
            f"extra_working_dates={len(self._extra_working_dates)})"
        )


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"Business day count must be non-negative; got {n}.")


def _to_day_array(dates: DateArrayLike) -> np.ndarray:
    arr = np.asarray(dates)
    if arr.dtype.kind == "M":
        return arr.astype("datetime64[D]")
    flat = [_to_day(d) for d in arr.ravel()]
    return np.array(flat, dtype="datetime64[D]").reshape(arr.shape)


def _to_day(d: Any) -> np.datetime64:
    if isinstance(d, np.datetime64):
        return d.astype("datetime64[D]")
    if isinstance(d, bytes):
        d = d.decode("ascii")
    if isinstance(d, str):
        return np.datetime64(d).astype("datetime64[D]")
    return np.datetime64(as_date(d), "D")
