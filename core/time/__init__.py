"""
Cargo ERP Core Time — Public API
==================================
Explicit clock protocol, calendar-day helpers and reporting periods.
Doctrine: NO datetime.now() in rule logic.
"""

from core.time.clock import Clock, FixedClock, SystemClock
from core.time.periods import (
    Period,
    PeriodType,
    get_period_dates,
    get_previous_period_dates,
)
from core.time.temporal import (
    as_date,
    as_datetime,
    calculate_days_overdue,
    calculate_days_past_due,
    days_between,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "Period",
    "PeriodType",
    "get_period_dates",
    "get_previous_period_dates",
    "as_date",
    "as_datetime",
    "days_between",
    "calculate_days_past_due",
    "calculate_days_overdue",
]
