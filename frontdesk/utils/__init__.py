"""Shared helpers."""

from frontdesk.utils.date_utils import (
    coerce_stay_instant,
    date_range,
    end_of_day,
    now_utc,
    start_of_day,
    to_naive_utc,
    today_utc,
)

__all__ = [
    "coerce_stay_instant",
    "date_range",
    "end_of_day",
    "now_utc",
    "start_of_day",
    "to_naive_utc",
    "today_utc",
]
