from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Optional

_SECONDS_PER_DAY = 24 * 60 * 60


def as_datetime(value: date) -> datetime:
    """Promote a plain date to midnight so dates and datetimes compare."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _aligned(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    # naive values are read as local time when the other side is aware
    if left.tzinfo is not None and right.tzinfo is None:
        right = right.astimezone()
    elif right.tzinfo is not None and left.tzinfo is None:
        left = left.astimezone()
    return left, right


def days_between(start: date, end: date) -> int:
    """Calendar-day difference rounded up; a same-day span is 0."""
    a, b = _aligned(as_datetime(start), as_datetime(end))
    return math.ceil((b - a).total_seconds() / _SECONDS_PER_DAY)


def is_before(left: date, right: date) -> bool:
    a, b = _aligned(as_datetime(left), as_datetime(right))
    return a < b


def shift_days(value: Optional[date], days: int) -> Optional[date]:
    if value is None:
        return None
    return value + timedelta(days=days)


def sort_key(value: date) -> float:
    return as_datetime(value).timestamp()


__all__ = ["as_datetime", "days_between", "is_before", "shift_days", "sort_key"]
