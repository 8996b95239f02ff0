"""Cargo ERP Job Order Engine - statuses, transition tables and derived rules."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, List, Optional

from core.primitives.workflow import WorkflowDefinition


class JobOrderStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    SUBMITTED_TO_FINANCE = "submitted_to_finance"
    INVOICED = "invoiced"
    CLOSED = "closed"


class PJOStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class JobOrderAction(str, Enum):
    MARK_COMPLETED = "mark_completed"
    SUBMIT_TO_FINANCE = "submit_to_finance"
    CREATE_INVOICE = "create_invoice"


# invoiced → submitted_to_finance is the revert applied when the
# linked invoice is cancelled.
JOB_ORDER_WORKFLOW = WorkflowDefinition(
    name="JobOrder",
    status_type=JobOrderStatus,
    initial_status=JobOrderStatus.ACTIVE,
    terminal_statuses=frozenset({JobOrderStatus.CLOSED}),
    transitions={
        JobOrderStatus.ACTIVE: frozenset({JobOrderStatus.COMPLETED}),
        JobOrderStatus.COMPLETED: frozenset({JobOrderStatus.SUBMITTED_TO_FINANCE}),
        JobOrderStatus.SUBMITTED_TO_FINANCE: frozenset({JobOrderStatus.INVOICED}),
        JobOrderStatus.INVOICED: frozenset({
            JobOrderStatus.CLOSED,
            JobOrderStatus.SUBMITTED_TO_FINANCE,
        }),
        JobOrderStatus.CLOSED: frozenset(),
    },
)

PJO_WORKFLOW = WorkflowDefinition(
    name="PJO",
    status_type=PJOStatus,
    initial_status=PJOStatus.DRAFT,
    terminal_statuses=frozenset({PJOStatus.APPROVED, PJOStatus.REJECTED}),
    transitions={
        PJOStatus.DRAFT: frozenset({PJOStatus.PENDING_APPROVAL}),
        PJOStatus.PENDING_APPROVAL: frozenset({PJOStatus.APPROVED, PJOStatus.REJECTED}),
        PJOStatus.APPROVED: frozenset(),
        PJOStatus.REJECTED: frozenset(),
    },
)

JOB_ORDER_STATUS_ON_INVOICE_CREATED = JobOrderStatus.INVOICED

# Operational work is finished from completed onwards.
COMPLETED_STATUSES = frozenset({
    JobOrderStatus.COMPLETED,
    JobOrderStatus.SUBMITTED_TO_FINANCE,
    JobOrderStatus.INVOICED,
    JobOrderStatus.CLOSED,
})

_ACTIONS_BY_STATUS = MappingProxyType({
    JobOrderStatus.ACTIVE: (JobOrderAction.MARK_COMPLETED,),
    JobOrderStatus.COMPLETED: (JobOrderAction.SUBMIT_TO_FINANCE,),
    JobOrderStatus.SUBMITTED_TO_FINANCE: (JobOrderAction.CREATE_INVOICE,),
})

# Keyed by invoice status value to avoid importing the invoicing engine.
_STATUS_ON_INVOICE_CHANGE = MappingProxyType({
    "paid": JobOrderStatus.CLOSED,
    "cancelled": JobOrderStatus.SUBMITTED_TO_FINANCE,
})


def can_invoice_job_order(status: Any) -> bool:
    """Only a job order submitted to finance may be converted to an invoice."""
    return JOB_ORDER_WORKFLOW.coerce(status) is JobOrderStatus.SUBMITTED_TO_FINANCE


def linked_job_order_status(invoice_status: Any) -> Optional[JobOrderStatus]:
    """
    Job order status forced by an invoice moving to invoice_status.

    paid → closed; cancelled → submitted_to_finance; anything else → None.
    """
    value = invoice_status.value if isinstance(invoice_status, Enum) else invoice_status
    return _STATUS_ON_INVOICE_CHANGE.get(value)


def available_job_order_actions(status: Any) -> List[JobOrderAction]:
    member = JOB_ORDER_WORKFLOW.coerce(status)
    return list(_ACTIONS_BY_STATUS.get(member, ()))


def can_create_job_order(
    pjo_status: Any,
    all_costs_confirmed: Optional[bool],
    converted_to_jo: Optional[bool],
) -> bool:
    """
    A PJO converts to a job order only when approved, with every cost
    confirmed, and not already converted. None counts as not confirmed.
    """
    return (
        PJO_WORKFLOW.coerce(pjo_status) is PJOStatus.APPROVED
        and all_costs_confirmed is True
        and converted_to_jo is not True
    )
