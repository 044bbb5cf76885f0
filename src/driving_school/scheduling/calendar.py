"""
Date and time helpers for lesson scheduling.

Dates travel through the system as ISO strings (YYYY-MM-DD) because that
is how the store persists them; these helpers accept ``date``,
``datetime`` or ISO strings and normalize them.
"""

from datetime import date, datetime, timedelta
from typing import List, Union

from ..models.people import WEEKDAYS


DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Normalize a date-like value to ``date``, ignoring any time of day.

    Raises:
        ValueError: If a string is not in YYYY-MM-DD format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def to_iso_date(value: DateLike) -> str:
    """
    Format a date-like value as YYYY-MM-DD.

    Examples:
        >>> to_iso_date(datetime(2025, 10, 15, 14, 30))
        '2025-10-15'
    """
    return to_date(value).isoformat()


def weekday_name(value: DateLike) -> str:
    """
    Get the lowercase English weekday name of a date.

    Examples:
        >>> weekday_name("2025-10-15")
        'wednesday'
    """
    return WEEKDAYS[to_date(value).weekday()]


def parse_hour(time_str: str) -> int:
    """
    Get the integer hour of an HH:MM (or HH:MM:SS) string.

    Raises:
        ValueError: If the string is not a valid time
    """
    try:
        hour = int(time_str.split(":")[0])
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time: {time_str!r} (expected HH:MM)")
    if not 0 <= hour <= 24:
        raise ValueError(f"Invalid time: {time_str!r} (hour out of range)")
    return hour


def format_slot(hour: int) -> str:
    """
    Format an hour as a slot label.

    Examples:
        >>> format_slot(8)
        '08:00'
    """
    return f"{hour:02d}:00"


def week_days(value: DateLike) -> List[date]:
    """
    Get the seven days of the week containing ``value``, Sunday first.
    """
    day = to_date(value)
    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return [start + timedelta(days=offset) for offset in range(7)]
