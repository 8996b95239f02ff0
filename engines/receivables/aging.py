"""
Cargo ERP Receivables Engine — Aging
======================================
Classifies outstanding invoices by days past due.

Only unpaid invoices (sent / overdue) WITH a due date participate.
An invoice without a due date is left out of every bucket; it is not
treated as current.

All calculators take an explicit reference date. No clock access.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from core.config.rules import DEFAULT_AGING_SCHEDULE, AgingSchedule
from core.primitives.money import ZERO, require_non_negative
from core.time.temporal import DateLike, as_date, calculate_days_past_due
from engines.invoicing.statuses import INVOICE_WORKFLOW, UNPAID_STATUSES

logger = logging.getLogger("cargo.receivables")


class OverdueSeverity(str, Enum):
    WARNING = "warning"
    ORANGE = "orange"
    CRITICAL = "critical"


# ══════════════════════════════════════════════════════════════
# INPUT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReceivableInvoice:
    """
    The slice of an invoice row that aging needs.

    status is kept as given; unknown values simply never participate.
    """
    id: str
    status: str
    amount: Decimal
    due_date: Optional[date] = None
    invoice_number: str = ""
    customer_name: str = ""

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("id must be non-empty string.")
        object.__setattr__(self, "status", getattr(self.status, "value", self.status))
        object.__setattr__(self, "amount", require_non_negative(self.amount, "amount"))
        if self.due_date is not None:
            object.__setattr__(self, "due_date", as_date(self.due_date))

    @property
    def is_unpaid(self) -> bool:
        return INVOICE_WORKFLOW.coerce(self.status) in UNPAID_STATUSES

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> ReceivableInvoice:
        """Build from a row shaped {id, status, total_amount, due_date, ...}."""
        amount = record.get("total_amount")
        if amount is None:
            amount = record.get("amount", ZERO)
        return cls(
            id=str(record["id"]),
            status=record["status"],
            amount=amount,
            due_date=record.get("due_date") or None,
            invoice_number=record.get("invoice_number") or "",
            customer_name=record.get("customer_name") or "",
        )


def _as_receivable(invoice: Any) -> ReceivableInvoice:
    if isinstance(invoice, ReceivableInvoice):
        return invoice
    if isinstance(invoice, Mapping):
        return ReceivableInvoice.from_record(invoice)
    raise TypeError(
        f"Expected ReceivableInvoice or mapping, got {type(invoice).__name__}."
    )


def _aged(
    invoices: Iterable[Any],
    reference: DateLike,
) -> List[Tuple[ReceivableInvoice, int]]:
    """Unpaid invoices with a due date, paired with their days past due."""
    aged = []
    for invoice in map(_as_receivable, invoices):
        if not invoice.is_unpaid:
            continue
        if invoice.due_date is None:
            logger.debug(f"Aging: invoice {invoice.id} has no due date, excluded")
            continue
        aged.append((invoice, calculate_days_past_due(invoice.due_date, reference)))
    return aged


# ══════════════════════════════════════════════════════════════
# BUCKETS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AgingBucket:
    label: str
    min_days: Optional[int]
    max_days: Optional[int]
    is_overdue: bool
    count: int
    total_amount: Decimal
    invoice_ids: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "min_days": self.min_days,
            "max_days": self.max_days,
            "is_overdue": self.is_overdue,
            "count": self.count,
            "total_amount": str(self.total_amount),
            "invoice_ids": list(self.invoice_ids),
        }


@dataclass(frozen=True)
class AgingSummary:
    total_count: int
    total_amount: Decimal
    overdue_count: int
    overdue_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "total_count": self.total_count,
            "total_amount": str(self.total_amount),
            "overdue_count": self.overdue_count,
            "overdue_amount": str(self.overdue_amount),
        }


def get_aging_bucket_index(
    days_past_due: int,
    schedule: AgingSchedule = DEFAULT_AGING_SCHEDULE,
) -> int:
    """Index of the bucket holding days_past_due (0..4 for the default schedule)."""
    if isinstance(days_past_due, bool) or not isinstance(days_past_due, int):
        raise TypeError("days_past_due must be int.")
    return schedule.index_for(days_past_due)


def calculate_aging_buckets(
    invoices: Iterable[Any],
    reference: DateLike,
    schedule: AgingSchedule = DEFAULT_AGING_SCHEDULE,
) -> List[AgingBucket]:
    """
    Bucket outstanding invoices by days past reference.

    Always returns one bucket per schedule entry, in order, including
    empty ones. Amounts are summed exactly without rounding.
    """
    counts = [0] * len(schedule)
    totals = [ZERO] * len(schedule)
    ids: List[List[str]] = [[] for _ in schedule.buckets]

    for invoice, days in _aged(invoices, reference):
        index = schedule.index_for(days)
        counts[index] += 1
        totals[index] += invoice.amount
        ids[index].append(invoice.id)

    return [
        AgingBucket(
            label=definition.label,
            min_days=definition.min_days,
            max_days=definition.max_days,
            is_overdue=definition.is_overdue,
            count=counts[index],
            total_amount=totals[index],
            invoice_ids=tuple(ids[index]),
        )
        for index, definition in enumerate(schedule.buckets)
    ]


def summarize_aging(buckets: Iterable[AgingBucket]) -> AgingSummary:
    total_count = overdue_count = 0
    total_amount = overdue_amount = ZERO
    for bucket in buckets:
        total_count += bucket.count
        total_amount += bucket.total_amount
        if bucket.is_overdue:
            overdue_count += bucket.count
            overdue_amount += bucket.total_amount
    return AgingSummary(
        total_count=total_count,
        total_amount=total_amount,
        overdue_count=overdue_count,
        overdue_amount=overdue_amount,
    )


# ══════════════════════════════════════════════════════════════
# OVERDUE LIST
# ══════════════════════════════════════════════════════════════

def get_overdue_severity(days_overdue: int) -> OverdueSeverity:
    if days_overdue <= 30:
        return OverdueSeverity.WARNING
    if days_overdue <= 60:
        return OverdueSeverity.ORANGE
    return OverdueSeverity.CRITICAL


@dataclass(frozen=True)
class OverdueInvoice:
    id: str
    invoice_number: str
    customer_name: str
    amount: Decimal
    due_date: date
    days_overdue: int
    severity: OverdueSeverity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "amount": str(self.amount),
            "due_date": self.due_date.isoformat(),
            "days_overdue": self.days_overdue,
            "severity": self.severity.value,
        }


def filter_overdue_invoices(
    invoices: Iterable[Any],
    reference: DateLike,
) -> List[OverdueInvoice]:
    """Unpaid invoices past their due date, most days overdue first."""
    overdue = [
        OverdueInvoice(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_name=invoice.customer_name,
            amount=invoice.amount,
            due_date=invoice.due_date,
            days_overdue=days,
            severity=get_overdue_severity(days),
        )
        for invoice, days in _aged(invoices, reference)
        if days > 0
    ]
    overdue.sort(key=lambda item: item.days_overdue, reverse=True)
    return overdue
