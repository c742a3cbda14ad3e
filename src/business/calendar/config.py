"""
Build calendars from structured config.

The YAML layout is::

    # Defaults to Mon-Fri if omitted
    working_days:
      - monday
      - tuesday
      - wednesday
      - thursday
      - friday
    # ISO 8601 dates, default to none if omitted
    holidays:
      - 2017-12-25
      - 2017-12-26
    extra_working_dates:
      - 2017-12-30

Loading happens in two steps: ``parse_config`` turns the raw mapping into a
``CalendarConfig`` with optional fields, and ``CalendarConfig.to_calendar``
hands them to the ``Calendar`` constructor, which fills in defaults and does
the validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from os import PathLike
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ._exceptions import ConfigParseError
from .calendar import Calendar
from .dates import Weekday

logger = logging.getLogger(__name__)

_KEYS = ("working_days", "holidays", "extra_working_dates")


@dataclass(frozen=True, slots=True)
class CalendarConfig:
    working_days: Optional[tuple[Weekday, ...]] = None
    holidays: Optional[tuple[date, ...]] = None
    extra_working_dates: Optional[tuple[date, ...]] = None

    def to_calendar(
        self,
        *,
        max_steps: Optional[int] = None,
        calendar_cls: type[Calendar] = Calendar,
    ) -> Calendar:
        return calendar_cls(
            self.working_days,
            self.holidays,
            self.extra_working_dates,
            max_steps=max_steps,
        )


def parse_config(data: Optional[Mapping[str, Any]]) -> CalendarConfig:
    """Parse a raw config mapping.  Missing keys stay ``None``."""
    if data is None:
        return CalendarConfig()
    if not isinstance(data, Mapping):
        raise ConfigParseError(
            f"Calendar config must be a mapping; got {type(data).__name__}."
        )

    unknown = sorted(str(k) for k in data if k not in _KEYS)
    if unknown:
        logger.debug(f"Ignoring unknown calendar config keys: {unknown}")

    working_days = _get_list(data, "working_days")
    holidays = _get_list(data, "holidays")
    extra = _get_list(data, "extra_working_dates")

    return CalendarConfig(
        working_days=(
            None if working_days is None else tuple(_parse_weekday(v) for v in working_days)
        ),
        holidays=None if holidays is None else tuple(_parse_date(v) for v in holidays),
        extra_working_dates=(
            None if extra is None else tuple(_parse_date(v) for v in extra)
        ),
    )


def loads(
    text: str,
    *,
    max_steps: Optional[int] = None,
    calendar_cls: type[Calendar] = Calendar,
) -> Calendar:
    """Build a calendar from a YAML document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Invalid calendar YAML: {exc}") from exc
    return parse_config(data).to_calendar(max_steps=max_steps, calendar_cls=calendar_cls)


def load(
    path: Union[str, PathLike],
    *,
    max_steps: Optional[int] = None,
    calendar_cls: type[Calendar] = Calendar,
) -> Calendar:
    """Build a calendar from a YAML file."""
    path = Path(path)
    logger.debug(f"Loading calendar from {path}")
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    try:
        return loads(text, max_steps=max_steps, calendar_cls=calendar_cls)
    except ConfigParseError as exc:
        raise ConfigParseError(f"{path}: {exc}") from exc


# ── field parsers ─────────────────────────────────────────────────────────────

def _get_list(data: Mapping[str, Any], key: str) -> Optional[list[Any]]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ConfigParseError(f"'{key}' must be a list; got {type(value).__name__}.")
    return list(value)


def _parse_weekday(value: Any) -> Weekday:
    if not isinstance(value, str):
        raise ConfigParseError(f"Weekday must be a name; got {value!r}.")
    try:
        return Weekday.parse(value)
    except ValueError as exc:
        raise ConfigParseError(str(exc)) from exc


def _parse_date(value: Any) -> date:
    # YAML decodes unquoted ISO dates itself; quoted ones arrive as strings.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError as exc:
            raise ConfigParseError(f"Invalid ISO 8601 date {value!r}.") from exc
    raise ConfigParseError(f"Date must be an ISO 8601 string; got {value!r}.")
