"""
Cargo ERP Reporting Engine — Finance KPIs
===========================================
Dashboard figures computed from invoice and job order rows:

- outstanding receivables (sent / overdue invoices)
- overdue and critically overdue (> 60 days) receivables
- revenue of job orders completed in the current period, compared with
  the previous period (up / down / stable)
- payments received in the last 30 days

Rows are mappings as read from the database. Timestamps may be
datetimes, dates or ISO-8601 strings. A naive reference date yields a
naive period; aware timestamps are then compared by their own wall
clock.

All calculators take an explicit reference. No clock access.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Union

from core.primitives.money import ZERO, require_non_negative
from core.time.periods import (
    Period,
    PeriodType,
    get_period_dates,
    get_previous_period_dates,
)
from core.time.temporal import DateLike, as_date, as_datetime
from engines.invoicing.statuses import INVOICE_WORKFLOW, InvoiceStatus
from engines.job_orders.statuses import COMPLETED_STATUSES, JOB_ORDER_WORKFLOW
from engines.receivables.aging import (
    OverdueSeverity,
    ReceivableInvoice,
    filter_overdue_invoices,
)

logger = logging.getLogger("cargo.reporting")

RECENT_PAYMENT_DAYS = 30


class RevenueTrend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


def _as_reference(reference: DateLike) -> Union[date, datetime]:
    if isinstance(reference, str):
        return as_datetime(reference)
    return reference


def _amount(row: Mapping[str, Any], field_name: str) -> Decimal:
    value = row.get(field_name)
    if value is None:
        return ZERO
    return require_non_negative(value, field_name)


# ══════════════════════════════════════════════════════════════
# PERIOD REVENUE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PeriodRevenue:
    period: Period
    previous_period: Period
    current: Decimal
    previous: Decimal
    current_count: int
    previous_count: int
    trend: RevenueTrend

    def to_dict(self) -> dict:
        return {
            "period_type": self.period.type.value,
            "period_start": self.period.start.isoformat(),
            "period_end": self.period.end.isoformat(),
            "current": str(self.current),
            "previous": str(self.previous),
            "current_count": self.current_count,
            "previous_count": self.previous_count,
            "trend": self.trend.value,
        }


def _revenue_trend(current: Decimal, previous: Decimal) -> RevenueTrend:
    if current > previous:
        return RevenueTrend.UP
    if current < previous:
        return RevenueTrend.DOWN
    return RevenueTrend.STABLE


def calculate_period_revenue(
    job_orders: Iterable[Mapping[str, Any]],
    reference: DateLike,
    period_type: Any = PeriodType.MONTH,
) -> PeriodRevenue:
    """
    Revenue of job orders completed in the period containing reference,
    against the immediately preceding period.

    A job order counts when its status is completed or later and it has
    a completed_at. A missing final_revenue counts as zero.
    """
    period = get_period_dates(period_type, _as_reference(reference))
    previous_period = get_previous_period_dates(period)

    current = previous = ZERO
    current_count = previous_count = 0
    for row in job_orders:
        if JOB_ORDER_WORKFLOW.coerce(row.get("status")) not in COMPLETED_STATUSES:
            continue
        completed_at = row.get("completed_at")
        if not completed_at:
            logger.debug(f"Revenue: job order {row.get('id')} has no completed_at, excluded")
            continue
        completed_at = as_datetime(completed_at)
        if period.contains(completed_at):
            current += _amount(row, "final_revenue")
            current_count += 1
        elif previous_period.contains(completed_at):
            previous += _amount(row, "final_revenue")
            previous_count += 1

    return PeriodRevenue(
        period=period,
        previous_period=previous_period,
        current=current,
        previous=previous,
        current_count=current_count,
        previous_count=previous_count,
        trend=_revenue_trend(current, previous),
    )


# ══════════════════════════════════════════════════════════════
# RECENT PAYMENTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RecentPayment:
    id: str
    invoice_number: str
    customer_name: str
    amount: Decimal
    paid_at: datetime
    payment_reference: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "amount": str(self.amount),
            "paid_at": self.paid_at.isoformat(),
            "payment_reference": self.payment_reference,
        }


def _wall_clock(value: datetime) -> datetime:
    return value.replace(tzinfo=None)


def filter_recent_payments(
    invoices: Iterable[Mapping[str, Any]],
    reference: DateLike,
    days: int = RECENT_PAYMENT_DAYS,
) -> List[RecentPayment]:
    """
    Paid invoices whose paid_at falls on or after the day `days` days
    before reference, most recent first.

    The invoice notes are reported as the payment reference.
    """
    window_start = as_date(reference) - timedelta(days=days)
    payments = []
    for row in invoices:
        if INVOICE_WORKFLOW.coerce(row.get("status")) is not InvoiceStatus.PAID:
            continue
        if not row.get("paid_at"):
            continue
        paid_at = as_datetime(row["paid_at"])
        if paid_at.date() < window_start:
            continue
        amount = row.get("total_amount")
        if amount is None:
            amount = row.get("amount", ZERO)
        payments.append(
            RecentPayment(
                id=str(row["id"]),
                invoice_number=row.get("invoice_number") or "",
                customer_name=row.get("customer_name") or "",
                amount=require_non_negative(amount, "amount"),
                paid_at=paid_at,
                payment_reference=row.get("notes"),
            )
        )
    payments.sort(key=lambda payment: _wall_clock(payment.paid_at), reverse=True)
    return payments


# ══════════════════════════════════════════════════════════════
# FINANCE KPIs
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FinanceKPIs:
    outstanding_amount: Decimal
    outstanding_count: int
    overdue_amount: Decimal
    overdue_count: int
    critical_overdue_count: int
    monthly_revenue: Decimal
    monthly_job_order_count: int
    previous_month_revenue: Decimal
    revenue_trend: RevenueTrend

    def to_dict(self) -> dict:
        return {
            "outstanding_amount": str(self.outstanding_amount),
            "outstanding_count": self.outstanding_count,
            "overdue_amount": str(self.overdue_amount),
            "overdue_count": self.overdue_count,
            "critical_overdue_count": self.critical_overdue_count,
            "monthly_revenue": str(self.monthly_revenue),
            "monthly_job_order_count": self.monthly_job_order_count,
            "previous_month_revenue": str(self.previous_month_revenue),
            "revenue_trend": self.revenue_trend.value,
        }


def calculate_finance_kpis(
    invoices: Iterable[Any],
    job_orders: Iterable[Mapping[str, Any]],
    reference: DateLike,
) -> FinanceKPIs:
    """Headline numbers of the finance dashboard."""
    receivables = [
        invoice if isinstance(invoice, ReceivableInvoice)
        else ReceivableInvoice.from_record(invoice)
        for invoice in invoices
    ]
    outstanding = [invoice for invoice in receivables if invoice.is_unpaid]
    overdue = filter_overdue_invoices(outstanding, as_date(reference))
    revenue = calculate_period_revenue(job_orders, reference, PeriodType.MONTH)

    return FinanceKPIs(
        outstanding_amount=sum((i.amount for i in outstanding), ZERO),
        outstanding_count=len(outstanding),
        overdue_amount=sum((i.amount for i in overdue), ZERO),
        overdue_count=len(overdue),
        critical_overdue_count=sum(
            1 for i in overdue if i.severity is OverdueSeverity.CRITICAL
        ),
        monthly_revenue=revenue.current,
        monthly_job_order_count=revenue.current_count,
        previous_month_revenue=revenue.previous,
        revenue_trend=revenue.trend,
    )
