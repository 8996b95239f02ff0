"""
Cargo ERP Core Time — Temporal Helpers
========================================
Pure functions for calendar-day arithmetic.
All functions take explicit date arguments. No hidden clock access.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """
    Normalise a date, datetime or ISO-8601 string to a calendar date.

    Aware datetimes keep their own wall-clock date. Malformed strings
    raise ValueError.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}.")


def as_datetime(value: DateLike) -> datetime:
    """
    Normalise a database timestamp to a datetime.

    Dates become midnight. Strings are parsed as ISO-8601, including the
    forms Postgres emits ("2025-03-01 10:00:00.12345+00", trailing "Z").
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}.")


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (as_date(end) - as_date(start)).days


def calculate_days_past_due(due_date: DateLike, reference: DateLike) -> int:
    """Days past due; zero on the due date, negative before it."""
    return days_between(due_date, reference)


def calculate_days_overdue(due_date: DateLike, reference: DateLike) -> int:
    """Days past due, floored at zero."""
    return max(0, calculate_days_past_due(due_date, reference))
