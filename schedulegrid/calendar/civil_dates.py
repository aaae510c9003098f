"""Civil date helpers shared by the recurrence and block extraction engines.

A civil date is a plain ``datetime.date``: year, month and day with no
time-of-day and no timezone. Timestamps are never converted between zones;
their wall-clock components are read as supplied.
"""

import calendar
import logging
import re
from datetime import date, datetime
from typing import Union

from dateutil.parser import isoparse

from ..exceptions import CivilDateParseError

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{1,2}))?(?::\d{1,2})?$")

DateLike = Union[date, datetime]
TimestampLike = Union[datetime, str]


def parse_civil_date(date_string: str) -> date:
    """Parse a canonical ``YYYY-MM-DD`` string using its literal components.

    Args:
        date_string: Date string such as ``"2026-03-09"``

    Returns:
        The corresponding civil date

    Raises:
        CivilDateParseError: If the string is malformed or not a real date
    """
    match = _DATE_RE.match(date_string.strip()) if isinstance(date_string, str) else None
    if match is None:
        raise CivilDateParseError(f"Malformed civil date: {date_string!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise CivilDateParseError(f"Invalid civil date: {date_string!r}") from exc


def start_of_day(value: DateLike) -> date:
    """Strip the time-of-day from a timestamp, returning its civil date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date_key(value: DateLike) -> str:
    """Format the canonical zero-padded ``YYYY-MM-DD`` key for a day."""
    day = start_of_day(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month, honoring leap years."""
    return calendar.monthrange(year, month)[1]


def clamp_day_of_month(year: int, month: int, day_of_month: int) -> date:
    """Return ``day_of_month`` in the given month, clamped to the month's last day."""
    return date(year, month, min(day_of_month, days_in_month(year, month)))


def weekday_number(value: DateLike) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (start_of_day(value).weekday() + 1) % 7


def minute_of_day(value: datetime) -> int:
    """Minutes elapsed since midnight for a timestamp's wall-clock time."""
    return value.hour * 60 + value.minute


def parse_time_of_day(time_string: str) -> int:
    """Parse ``HH:MM`` (or ``HH``/``HH:MM:SS``) into minutes since midnight.

    Raises:
        CivilDateParseError: If the string does not look like a time of day
    """
    match = _TIME_RE.match(time_string.strip()) if isinstance(time_string, str) else None
    if match is None:
        raise CivilDateParseError(f"Malformed time of day: {time_string!r}")
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    if minutes > 59 or hours * 60 + minutes > MINUTES_PER_DAY:
        raise CivilDateParseError(f"Time of day out of range: {time_string!r}")
    return hours * 60 + minutes


def parse_timestamp(value: TimestampLike) -> datetime:
    """Coerce an ISO-8601 string or datetime into a datetime.

    Strings are parsed with ``dateutil.parser.isoparse``; the resulting offset
    is kept as-is and never used to shift the wall-clock time.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return isoparse(value)
    raise TypeError(f"Expected datetime or ISO-8601 string, got {type(value).__name__}")
