"""
Cargo ERP Core Time — Reporting Periods
=========================================
Week / month / quarter boundaries for dashboard KPIs.

A Period is a closed interval [start, end]:
    week    — Monday 00:00:00 .. Sunday 23:59:59.999999
    month   — first day 00:00:00 .. last day 23:59:59.999999
    quarter — first day of the quarter .. last day of the quarter

The previous period is the period containing the instant just before
start, so it is adjacent (no gap) and ends strictly before start.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

from core.errors import InvalidPeriodError


class PeriodType(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


@dataclass(frozen=True)
class Period:
    """
    A closed reporting interval.

    Invariant: start <= end (enforced at construction).
    """

    type: PeriodType
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.type, PeriodType):
            raise InvalidPeriodError(f"type must be PeriodType, got {self.type!r}.")
        if self.start > self.end:
            raise InvalidPeriodError(
                f"Period start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: Union[date, datetime]) -> bool:
        """
        Check if an instant (or a whole date's start) falls within the period.

        A naive period compares aware instants by their own wall-clock time;
        an aware period reads naive instants in its own timezone.
        """
        if not isinstance(dt, datetime):
            dt = datetime.combine(dt, time.min, tzinfo=self.start.tzinfo)
        elif self.start.tzinfo is None and dt.tzinfo is not None:
            dt = dt.replace(tzinfo=None)
        elif self.start.tzinfo is not None and dt.tzinfo is None:
            dt = dt.replace(tzinfo=self.start.tzinfo)
        return self.start <= dt <= self.end

    def overlaps(self, other: Period) -> bool:
        return self.start <= other.end and other.start <= self.end

    def duration(self) -> timedelta:
        return self.end - self.start


def _start_of_day(day: date, tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def _end_of_day(day: date, tzinfo) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tzinfo)


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def get_period_dates(period_type, reference: Union[date, datetime]) -> Period:
    """Return the period of the given type containing reference."""
    try:
        period_type = PeriodType(period_type)
    except ValueError:
        raise InvalidPeriodError(f"Unknown period type {period_type!r}.") from None

    if isinstance(reference, datetime):
        tzinfo = reference.tzinfo
        day = reference.date()
    elif isinstance(reference, date):
        tzinfo = None
        day = reference
    else:
        raise InvalidPeriodError(
            f"reference must be date or datetime, got {type(reference).__name__}."
        )

    if period_type is PeriodType.WEEK:
        first = day - timedelta(days=day.weekday())
        last = first + timedelta(days=6)
    elif period_type is PeriodType.MONTH:
        first = day.replace(day=1)
        last = _last_day_of_month(day.year, day.month)
    else:
        first_month = (day.month - 1) // 3 * 3 + 1
        first = date(day.year, first_month, 1)
        last = _last_day_of_month(day.year, first_month + 2)

    return Period(
        type=period_type,
        start=_start_of_day(first, tzinfo),
        end=_end_of_day(last, tzinfo),
    )


def get_previous_period_dates(period: Period) -> Period:
    """Return the immediately preceding period of the same type."""
    day_before = period.start.date() - timedelta(days=1)
    return get_period_dates(
        period.type,
        datetime.combine(day_before, time.min, tzinfo=period.start.tzinfo),
    )
