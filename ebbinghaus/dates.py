"""
ebbinghaus.dates
----------------

Day-resolution date helpers used for review scheduling.

All due dates are calendar days in the local timezone. Dates are serialized as
zero-padded ISO strings (YYYY-MM-DD), so string and date ordering agree.
"""

from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import overload


def current_date() -> date:
    """
    Returns today's calendar date in the local timezone.
    """

    return date.today()


def parse_date(value: date | str) -> date:
    """
    Converts a date or a YYYY-MM-DD string to a date.

    Raises:
        ValueError: If the string is not a valid ISO calendar date.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


@overload
def add_days(day: date, days: int) -> date: ...


@overload
def add_days(day: str, days: int) -> str: ...


def add_days(day: date | str, days: int) -> date | str:
    """
    Adds a number of days to a date, rolling over months and years.

    Args:
        day: A date or a YYYY-MM-DD string.
        days: Number of days to add. May be negative.

    Returns:
        The resulting day, as a date if a date was given or as a YYYY-MM-DD string if a string was given.
    """

    result = parse_date(day) + timedelta(days=days)
    if isinstance(day, str):
        return result.isoformat()
    return result


__all__ = ["current_date", "parse_date", "add_days"]
