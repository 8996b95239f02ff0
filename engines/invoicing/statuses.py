"""Cargo ERP Invoicing Engine - invoice statuses and transition table."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from core.primitives.workflow import WorkflowDefinition


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


INVOICE_WORKFLOW = WorkflowDefinition(
    name="Invoice",
    status_type=InvoiceStatus,
    initial_status=InvoiceStatus.DRAFT,
    terminal_statuses=frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
    transitions={
        InvoiceStatus.DRAFT: frozenset({InvoiceStatus.SENT, InvoiceStatus.CANCELLED}),
        InvoiceStatus.SENT: frozenset({
            InvoiceStatus.PAID,
            InvoiceStatus.OVERDUE,
            InvoiceStatus.CANCELLED,
        }),
        InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
        InvoiceStatus.PAID: frozenset(),
        InvoiceStatus.CANCELLED: frozenset(),
    },
)

# Outstanding receivables: issued to the customer and not yet settled.
UNPAID_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.OVERDUE})

# Timestamp column stamped when an invoice enters the status.
STATUS_TIMESTAMP_FIELDS = MappingProxyType({
    InvoiceStatus.SENT: "sent_at",
    InvoiceStatus.PAID: "paid_at",
    InvoiceStatus.CANCELLED: "cancelled_at",
})
