# frontdesk/utils/date_utils.py
"""
Date and time utility functions used across the project.

Notes:
- Stay instants are stored as naive UTC datetimes.
- A bare `date` is read as midnight of that day.
- Aware datetimes are converted to UTC and then stripped of tzinfo.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Iterator, Union

UTC = timezone.utc

DateLike = Union[date, datetime]


def now_utc() -> datetime:
    """Return current UTC datetime (naive, matching stored columns)."""
    return datetime.now(UTC).replace(tzinfo=None)


def today_utc() -> date:
    """Return today's date in UTC."""
    return datetime.now(UTC).date()


def to_naive_utc(value: DateLike) -> datetime:
    """
    Normalize a date or datetime to a naive UTC datetime.

    Dates become midnight; aware datetimes are converted to UTC first.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def start_of_day(d: date) -> datetime:
    """Return midnight of a given date."""
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    """Return the last microsecond of a given date."""
    return datetime.combine(d, time.max)


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield each day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current = date.fromordinal(current.toordinal() + 1)


def coerce_stay_instant(value):
    """
    Pydantic ``before`` hook for stay datetimes.

    Accepts a ``date`` or a bare ``YYYY-MM-DD`` string as midnight; anything
    else is passed through to normal datetime validation.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and len(value.strip()) == 10:
        return datetime.combine(date.fromisoformat(value.strip()), time.min)
    return value
