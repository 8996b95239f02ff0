"""
Tests for core.time — Clock protocol, temporal helpers and reporting periods.
"""

import pytest
from datetime import date, datetime, time, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from core.errors import InvalidPeriodError
from core.time.clock import FixedClock, SystemClock
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


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc

    def test_today_is_a_date(self):
        assert isinstance(SystemClock().today(), date)


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed  # Same every time

    def test_today(self):
        clock = FixedClock(datetime(2025, 6, 15, 23, 0, tzinfo=timezone.utc))
        assert clock.today() == date(2025, 6, 15)

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))


# ── Temporal Helpers ─────────────────────────────────────────

class TestAsDate:
    def test_date_passthrough(self):
        assert as_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_datetime_truncated(self):
        assert as_date(datetime(2025, 3, 1, 18, 30)) == date(2025, 3, 1)

    def test_iso_date_string(self):
        assert as_date("2025-03-01") == date(2025, 3, 1)

    def test_iso_timestamp_with_z(self):
        assert as_date("2025-03-01T10:00:00Z") == date(2025, 3, 1)

    def test_malformed_string(self):
        with pytest.raises(ValueError):
            as_date("not-a-date")

    def test_postgres_timestamp(self):
        assert as_date("2025-03-01 10:00:00.12345+00") == date(2025, 3, 1)

    def test_aware_timestamp_keeps_own_date(self):
        assert as_date("2025-03-01T23:30:00-05:00") == date(2025, 3, 1)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            as_date(20250301)


class TestAsDatetime:
    def test_datetime_passthrough(self):
        dt = datetime(2025, 3, 1, 10, tzinfo=timezone.utc)
        assert as_datetime(dt) is dt

    def test_date_becomes_midnight(self):
        assert as_datetime(date(2025, 3, 1)) == datetime(2025, 3, 1, 0, 0)

    def test_postgres_timestamp(self):
        dt = as_datetime("2025-03-01 10:00:00.12345+00")
        assert dt == datetime(2025, 3, 1, 10, 0, 0, 123450, tzinfo=timezone.utc)

    def test_trailing_z(self):
        assert as_datetime("2025-03-01T10:00:00Z") == datetime(2025, 3, 1, 10, tzinfo=timezone.utc)

    def test_naive_string(self):
        assert as_datetime(" 2025-03-01T10:00:00 ").tzinfo is None

    def test_malformed_string(self):
        with pytest.raises(ValueError):
            as_datetime("yesterday")

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            as_datetime(1740823200)


class TestDaysPastDue:
    def test_on_due_date_is_zero(self):
        assert calculate_days_past_due(date(2025, 1, 10), date(2025, 1, 10)) == 0

    def test_before_due_date_is_negative(self):
        assert calculate_days_past_due(date(2025, 1, 10), date(2025, 1, 5)) == -5

    def test_whole_days_ignore_time_of_day(self):
        due = datetime(2025, 1, 10, 23, 59)
        assert calculate_days_past_due(due, datetime(2025, 1, 11, 0, 1)) == 1

    def test_across_month_boundary(self):
        assert days_between("2025-01-31", "2025-03-01") == 29

    def test_days_overdue_floors_at_zero(self):
        assert calculate_days_overdue(date(2025, 1, 10), date(2025, 1, 1)) == 0
        assert calculate_days_overdue(date(2025, 1, 10), date(2025, 1, 15)) == 5


# ── Periods ──────────────────────────────────────────────────

class TestGetPeriodDates:
    def test_week_runs_monday_to_sunday(self):
        # 2025-01-15 is a Wednesday
        period = get_period_dates(PeriodType.WEEK, date(2025, 1, 15))
        assert period.start == datetime(2025, 1, 13, 0, 0, 0)
        assert period.end == datetime(2025, 1, 19, 23, 59, 59, 999999)

    def test_week_on_sunday(self):
        period = get_period_dates("week", date(2025, 1, 19))
        assert period.start.date() == date(2025, 1, 13)

    def test_month(self):
        period = get_period_dates(PeriodType.MONTH, date(2024, 2, 10))
        assert period.start == datetime(2024, 2, 1)
        assert period.end == datetime.combine(date(2024, 2, 29), time.max)

    def test_quarter(self):
        period = get_period_dates(PeriodType.QUARTER, date(2025, 8, 20))
        assert period.start.date() == date(2025, 7, 1)
        assert period.end.date() == date(2025, 9, 30)

    def test_keeps_tzinfo(self):
        ref = datetime(2025, 5, 5, 10, tzinfo=timezone.utc)
        period = get_period_dates(PeriodType.MONTH, ref)
        assert period.start.tzinfo is timezone.utc
        assert period.end.tzinfo is timezone.utc

    def test_unknown_period_type(self):
        with pytest.raises(InvalidPeriodError, match="Unknown period type"):
            get_period_dates("fortnight", date(2025, 1, 1))

    def test_bad_reference(self):
        with pytest.raises(InvalidPeriodError):
            get_period_dates(PeriodType.WEEK, "2025-01-01")


class TestPreviousPeriod:
    def test_previous_month_across_year(self):
        current = get_period_dates(PeriodType.MONTH, date(2025, 1, 15))
        previous = get_previous_period_dates(current)
        assert previous.start == datetime(2024, 12, 1)
        assert previous.end.date() == date(2024, 12, 31)

    def test_previous_quarter(self):
        current = get_period_dates(PeriodType.QUARTER, date(2025, 2, 1))
        previous = get_previous_period_dates(current)
        assert previous.start.date() == date(2024, 10, 1)
        assert previous.type is PeriodType.QUARTER

    @given(
        st.sampled_from(list(PeriodType)),
        st.dates(min_value=date(1901, 1, 1), max_value=date(2099, 12, 31)),
    )
    def test_previous_is_adjacent_and_strictly_before(self, period_type, day):
        current = get_period_dates(period_type, day)
        previous = get_previous_period_dates(current)
        assert previous.end < current.start
        assert previous.end + timedelta(microseconds=1) == current.start
        assert not previous.overlaps(current)


class TestPeriod:
    def test_contains(self):
        period = get_period_dates(PeriodType.WEEK, date(2025, 1, 15))
        assert period.contains(date(2025, 1, 19))
        assert period.contains(datetime(2025, 1, 19, 23, 59, 59))
        assert not period.contains(date(2025, 1, 20))

    def test_naive_period_reads_aware_wall_clock(self):
        period = get_period_dates(PeriodType.MONTH, date(2025, 1, 15))
        late = datetime(2025, 1, 31, 23, 0, tzinfo=timezone(timedelta(hours=7)))
        assert period.contains(late)
        assert not period.contains(datetime(2025, 2, 1, 0, 30, tzinfo=timezone.utc))

    def test_aware_period_reads_naive_in_own_zone(self):
        jakarta = timezone(timedelta(hours=7))
        period = get_period_dates(PeriodType.MONTH, datetime(2025, 1, 15, tzinfo=jakarta))
        assert period.contains(datetime(2025, 1, 1, 0, 0))
        assert period.contains(date(2025, 1, 31))
        assert not period.contains(datetime(2024, 12, 31, 16, 0, tzinfo=timezone.utc))

    def test_overlaps(self):
        month = get_period_dates(PeriodType.MONTH, date(2025, 3, 31))
        week = get_period_dates(PeriodType.WEEK, date(2025, 3, 31))
        assert month.overlaps(week)
        assert week.overlaps(month)

    def test_start_after_end_rejected(self):
        with pytest.raises(InvalidPeriodError):
            Period(PeriodType.WEEK, datetime(2025, 1, 2), datetime(2025, 1, 1))

    def test_frozen(self):
        period = get_period_dates(PeriodType.WEEK, date(2025, 1, 15))
        with pytest.raises(AttributeError):
            period.start = datetime(2020, 1, 1)
