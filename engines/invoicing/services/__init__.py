"""Cargo ERP Invoicing Engine - status update planning."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.policy.rejection import TransitionResult
from core.primitives.workflow import StatusChange, TransitionPlan
from core.time.clock import Clock
from core.time.temporal import DateLike
from engines.invoicing.policies import due_date_must_have_passed_policy
from engines.invoicing.statuses import (
    INVOICE_WORKFLOW,
    STATUS_TIMESTAMP_FIELDS,
    InvoiceStatus,
)
from engines.job_orders.statuses import linked_job_order_status

logger = logging.getLogger("cargo.workflow")


def plan_invoice_status_update(
    current: Any,
    target: Any,
    *,
    due_date: Optional[DateLike],
    clock: Clock,
    notes: Optional[str] = None,
    changed_by: Optional[str] = None,
) -> TransitionPlan:
    """
    Plan an invoice status change without writing anything.

    On success the plan holds:
        updates:          status, updated_at and the entered status'
                          timestamp column (sent_at / paid_at / cancelled_at)
        job_order_status: closed on paid, submitted_to_finance on cancelled
        history:          StatusChange for the status-history table
    """
    result = INVOICE_WORKFLOW.check(current, target)
    if not result:
        return TransitionPlan.rejected(result)

    rejection = due_date_must_have_passed_policy(target, due_date, clock.today())
    if rejection is not None:
        logger.debug(f"Invoice: {rejection.code} for due_date={due_date!r}")
        return TransitionPlan.rejected(
            TransitionResult(allowed=False, rejection=rejection)
        )

    source = INVOICE_WORKFLOW.coerce(current)
    status = INVOICE_WORKFLOW.coerce(target)
    now = clock.now_utc()

    updates: Dict[str, Any] = {"status": status.value, "updated_at": now}
    timestamp_field = STATUS_TIMESTAMP_FIELDS.get(status)
    if timestamp_field is not None:
        updates[timestamp_field] = now

    return TransitionPlan(
        result=result,
        updates=updates,
        history=StatusChange(
            entity_kind="invoice",
            previous_status=source.value,
            new_status=status.value,
            changed_at=now,
            notes=notes,
            changed_by=changed_by,
        ),
        job_order_status=linked_job_order_status(status),
    )


def plan_mark_overdue(
    current: Any,
    *,
    due_date: Optional[DateLike],
    clock: Clock,
) -> TransitionPlan:
    """Shortcut for the scheduled overdue sweep."""
    return plan_invoice_status_update(
        current, InvoiceStatus.OVERDUE, due_date=due_date, clock=clock
    )
