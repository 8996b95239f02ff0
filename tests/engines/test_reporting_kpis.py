"""
Tests for engines.reporting — finance KPIs, period revenue comparison,
recent payments and the PJO pipeline.
"""

import logging
import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from hypothesis import given
from hypothesis import strategies as st

from core.time.periods import PeriodType, get_period_dates
from engines.job_orders import PJOStatus
from engines.reporting import (
    RevenueTrend,
    calculate_finance_kpis,
    calculate_period_revenue,
    filter_recent_payments,
    filter_records_by_period,
    group_pjos_by_status,
)


def _jo(status, completed_at, revenue, id="jo"):
    return {"id": id, "status": status, "completed_at": completed_at, "final_revenue": revenue}


# Completed around the 2024/2025 year boundary.
YEAR_END_JOBS = [
    _jo("completed", "2025-01-10T08:00:00", 5000000, "jo-1"),
    _jo("submitted_to_finance", "2025-01-31 23:59:59.12345+00", 2000000, "jo-2"),
    _jo("completed", date(2025, 1, 12), None, "jo-3"),
    _jo("invoiced", "2024-12-20 09:00:00.12345+00", 3000000, "jo-4"),
    _jo("closed", datetime(2024, 12, 31, 23, 59, 59), 1000000, "jo-5"),
    _jo("completed", "2025-12-05", 9000000, "jo-6"),
    _jo("completed", "2023-12-05", 9000000, "jo-7"),
    _jo("active", "2025-01-11", 7000000, "jo-8"),
    _jo("completed", None, 7000000, "jo-9"),
]


# ══════════════════════════════════════════════════════════════
# PERIOD REVENUE
# ══════════════════════════════════════════════════════════════

class TestPeriodRevenue:
    def test_january_compares_with_previous_december(self):
        revenue = calculate_period_revenue(YEAR_END_JOBS, date(2025, 1, 15))
        assert revenue.period.start == datetime(2025, 1, 1)
        assert revenue.previous_period.start == datetime(2024, 12, 1)
        assert revenue.previous_period.end.date() == date(2024, 12, 31)
        assert revenue.current == Decimal("7000000")
        assert revenue.current_count == 3
        assert revenue.previous == Decimal("4000000")
        assert revenue.previous_count == 2
        assert revenue.trend is RevenueTrend.UP

    def test_quarter_compares_with_previous_year_q4(self):
        revenue = calculate_period_revenue(YEAR_END_JOBS, date(2025, 2, 10), PeriodType.QUARTER)
        assert revenue.previous_period.start == datetime(2024, 10, 1)
        assert revenue.current == Decimal("7000000")
        assert revenue.previous == Decimal("4000000")

    def test_aware_reference(self):
        reference = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        revenue = calculate_period_revenue(YEAR_END_JOBS, reference)
        assert revenue.period.start.tzinfo is timezone.utc
        assert revenue.current_count == 3
        assert revenue.previous_count == 2

    def test_string_reference(self):
        revenue = calculate_period_revenue(YEAR_END_JOBS, "2025-01-15")
        assert revenue.current == Decimal("7000000")

    def test_trend_down(self):
        jobs = [_jo("completed", "2025-02-03", 100), _jo("completed", "2025-01-03", 200)]
        assert calculate_period_revenue(jobs, date(2025, 2, 15)).trend is RevenueTrend.DOWN

    def test_no_revenue_is_stable(self):
        revenue = calculate_period_revenue([], date(2025, 2, 15))
        assert revenue.current == revenue.previous == 0
        assert revenue.trend is RevenueTrend.STABLE

    def test_missing_completed_at_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="cargo.reporting"):
            calculate_period_revenue([_jo("completed", None, 1, "jo-x")], date(2025, 2, 15))
        assert "jo-x" in caplog.text

    def test_to_dict(self):
        data = calculate_period_revenue(YEAR_END_JOBS, date(2025, 1, 15)).to_dict()
        assert data["period_type"] == "month"
        assert data["current"] == "7000000"
        assert data["trend"] == "up"

    @given(
        st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31)),
        st.sampled_from(list(PeriodType)),
    )
    def test_day_before_period_counts_as_previous(self, reference, period_type):
        period_start = get_period_dates(period_type, reference).start.date()
        jobs = [
            _jo("completed", reference, 10),
            _jo("closed", period_start - timedelta(days=1), 3),
        ]
        revenue = calculate_period_revenue(jobs, reference, period_type)
        assert revenue.current == 10
        assert revenue.previous == 3
        assert revenue.trend is RevenueTrend.UP


# ══════════════════════════════════════════════════════════════
# RECENT PAYMENTS
# ══════════════════════════════════════════════════════════════

class TestRecentPayments:
    INVOICES = [
        {"id": "inv-1", "status": "paid", "paid_at": "2025-02-13 08:00:00+00",
         "total_amount": 200, "invoice_number": "INV-2025-0001"},
        {"id": "inv-2", "status": "paid", "paid_at": "2025-03-10T10:00:00Z",
         "total_amount": "1500000", "notes": "TRX-1", "customer_name": "PT Maju"},
        {"id": "inv-3", "status": "paid", "paid_at": "2025-02-12T23:00:00", "total_amount": 1},
        {"id": "inv-4", "status": "sent", "paid_at": "2025-03-01", "total_amount": 1},
        {"id": "inv-5", "status": "paid", "paid_at": None, "total_amount": 1},
    ]

    def test_last_thirty_days_most_recent_first(self):
        payments = filter_recent_payments(self.INVOICES, date(2025, 3, 15))
        assert [p.id for p in payments] == ["inv-2", "inv-1"]
        assert payments[0].payment_reference == "TRX-1"
        assert payments[0].amount == Decimal("1500000")
        assert payments[0].customer_name == "PT Maju"
        assert payments[1].payment_reference is None

    def test_custom_window(self):
        payments = filter_recent_payments(self.INVOICES, date(2025, 3, 15), days=7)
        assert [p.id for p in payments] == ["inv-2"]

    def test_to_dict(self):
        payment = filter_recent_payments(self.INVOICES, date(2025, 3, 15))[0]
        assert payment.to_dict()["paid_at"] == "2025-03-10T10:00:00+00:00"


# ══════════════════════════════════════════════════════════════
# FINANCE KPIs
# ══════════════════════════════════════════════════════════════

class TestFinanceKPIs:
    INVOICES = [
        {"id": "a", "status": "sent", "total_amount": 1000000, "due_date": "2025-03-20"},
        {"id": "b", "status": "overdue", "total_amount": 2000000, "due_date": "2025-02-01"},
        {"id": "c", "status": "sent", "total_amount": 500000, "due_date": "2024-12-01"},
        {"id": "d", "status": "paid", "total_amount": 9000000, "due_date": "2025-01-01"},
        {"id": "e", "status": "draft", "total_amount": 100, "due_date": "2025-01-01"},
    ]
    JOBS = [
        _jo("completed", "2025-03-02", 1000000),
        _jo("closed", "2025-02-27", 2000000),
    ]

    def test_kpis(self):
        kpis = calculate_finance_kpis(self.INVOICES, self.JOBS, date(2025, 3, 15))
        assert kpis.outstanding_count == 3
        assert kpis.outstanding_amount == Decimal("3500000")
        assert kpis.overdue_count == 2
        assert kpis.overdue_amount == Decimal("2500000")
        assert kpis.critical_overdue_count == 1
        assert kpis.monthly_revenue == Decimal("1000000")
        assert kpis.monthly_job_order_count == 1
        assert kpis.previous_month_revenue == Decimal("2000000")
        assert kpis.revenue_trend is RevenueTrend.DOWN

    def test_empty(self):
        kpis = calculate_finance_kpis([], [], date(2025, 3, 15))
        assert kpis.outstanding_count == kpis.overdue_count == 0
        assert kpis.revenue_trend is RevenueTrend.STABLE

    def test_to_dict(self):
        data = calculate_finance_kpis(self.INVOICES, self.JOBS, date(2025, 3, 15)).to_dict()
        assert data["outstanding_amount"] == "3500000"
        assert data["revenue_trend"] == "down"


# ══════════════════════════════════════════════════════════════
# PJO PIPELINE
# ══════════════════════════════════════════════════════════════

class TestPipeline:
    def test_group_by_status(self):
        stages = group_pjos_by_status([
            {"status": "draft", "total_revenue_calculated": 100},
            {"status": "draft", "total_revenue_calculated": None},
            {"status": "pending_approval", "total_revenue_calculated": "50.5"},
            {"status": "approved", "total_revenue_calculated": 200, "is_active": False},
            {"status": "rejected", "total_revenue_calculated": 10, "is_active": True},
            {"status": "archived", "total_revenue_calculated": 999},
        ])
        assert [s.status for s in stages] == list(PJOStatus)
        assert [(s.count, s.total_value) for s in stages] == [
            (2, Decimal("100")),
            (1, Decimal("50.5")),
            (0, Decimal("0")),
            (1, Decimal("10")),
        ]

    def test_empty_has_every_stage(self):
        stages = group_pjos_by_status([])
        assert len(stages) == 4
        assert all(s.count == 0 for s in stages)
        assert stages[0].to_dict() == {"status": "draft", "count": 0, "total_value": "0"}


class TestFilterRecordsByPeriod:
    def test_month(self):
        period = get_period_dates(PeriodType.MONTH, date(2025, 1, 15))
        rows = [
            {"id": 1, "created_at": "2025-01-01T00:00:00"},
            {"id": 2, "created_at": "2024-12-31T23:59:59.999999"},
            {"id": 3, "created_at": None},
            {"id": 4},
            {"id": 5, "created_at": "2025-01-31 23:59:59+07"},
            {"id": 6, "created_at": "2025-02-01T00:00:00Z"},
        ]
        assert [r["id"] for r in filter_records_by_period(rows, period)] == [1, 5]

    def test_other_field(self):
        period = get_period_dates(PeriodType.WEEK, date(2025, 1, 1))
        rows = [{"submitted_at": "2024-12-30"}, {"submitted_at": "2024-12-29"}]
        assert filter_records_by_period(rows, period, field="submitted_at") == [rows[0]]
