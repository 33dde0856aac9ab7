"""Calendar-day helpers used to scope schedules to a single day."""

from datetime import date, datetime, timedelta
from typing import Union

DayLike = Union[date, datetime]


def normalize_to_day(value: DayLike) -> date:
    """Drop the time-of-day component, keeping only the calendar day."""
    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def tomorrow_of(value: DayLike) -> date:
    return normalize_to_day(value) + timedelta(days=1)


def is_same_day(first: DayLike, second: DayLike) -> bool:
    return normalize_to_day(first) == normalize_to_day(second)


def day_label(value: DayLike, today: DayLike) -> str:
    """Human label for a schedule day: Today, Tomorrow or the ISO date."""
    day = normalize_to_day(value)
    if is_same_day(day, today):
        return "Today"
    if day == tomorrow_of(today):
        return "Tomorrow"
    return day.isoformat()
