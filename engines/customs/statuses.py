"""Cargo ERP Customs Engine - PIB import declaration statuses."""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.primitives.workflow import WorkflowDefinition


class PIBStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    DOCUMENT_CHECK = "document_check"
    PHYSICAL_CHECK = "physical_check"
    DUTIES_PAID = "duties_paid"
    RELEASED = "released"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Red lane inspections go through physical_check; green lane skips it.
PIB_WORKFLOW = WorkflowDefinition(
    name="PIB",
    status_type=PIBStatus,
    initial_status=PIBStatus.DRAFT,
    terminal_statuses=frozenset({PIBStatus.COMPLETED, PIBStatus.CANCELLED}),
    transitions={
        PIBStatus.DRAFT: frozenset({PIBStatus.SUBMITTED, PIBStatus.CANCELLED}),
        PIBStatus.SUBMITTED: frozenset({PIBStatus.DOCUMENT_CHECK}),
        PIBStatus.DOCUMENT_CHECK: frozenset({
            PIBStatus.PHYSICAL_CHECK,
            PIBStatus.DUTIES_PAID,
        }),
        PIBStatus.PHYSICAL_CHECK: frozenset({PIBStatus.DUTIES_PAID}),
        PIBStatus.DUTIES_PAID: frozenset({PIBStatus.RELEASED}),
        PIBStatus.RELEASED: frozenset({PIBStatus.COMPLETED}),
        PIBStatus.COMPLETED: frozenset(),
        PIBStatus.CANCELLED: frozenset(),
    },
)

PENDING_CLEARANCE_STATUSES = frozenset({
    PIBStatus.SUBMITTED,
    PIBStatus.DOCUMENT_CHECK,
    PIBStatus.PHYSICAL_CHECK,
})

RELEASED_STATUSES = frozenset({PIBStatus.RELEASED, PIBStatus.COMPLETED})


def is_pib_editable(status: Any) -> bool:
    """Header and line items may only change while the PIB is a draft."""
    return PIB_WORKFLOW.coerce(status) is PIBStatus.DRAFT
