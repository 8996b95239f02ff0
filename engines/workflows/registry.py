"""
Cargo ERP Workflow Registry
=============================
One transition table per entity kind, looked up by name.

Unknown entity kinds and unknown statuses fail closed: lookups answer
False or an empty set, never raise.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Optional

from core.policy.rejection import ReasonCode, TransitionResult
from core.primitives.workflow import WorkflowDefinition
from engines.customs.statuses import PIB_WORKFLOW
from engines.invoicing.statuses import INVOICE_WORKFLOW
from engines.job_orders.statuses import JOB_ORDER_WORKFLOW, PJO_WORKFLOW

logger = logging.getLogger("cargo.workflow")


class EntityKind(str, Enum):
    INVOICE = "invoice"
    JOB_ORDER = "job_order"
    PJO = "pjo"
    PIB = "pib"


WORKFLOWS = MappingProxyType({
    EntityKind.INVOICE: INVOICE_WORKFLOW,
    EntityKind.JOB_ORDER: JOB_ORDER_WORKFLOW,
    EntityKind.PJO: PJO_WORKFLOW,
    EntityKind.PIB: PIB_WORKFLOW,
})


def get_workflow(entity_kind: Any) -> Optional[WorkflowDefinition]:
    """Return the definition for entity_kind, or None when unknown."""
    try:
        kind = EntityKind(entity_kind)
    except ValueError:
        return None
    return WORKFLOWS[kind]


def is_valid_transition(entity_kind: Any, from_status: Any, to_status: Any) -> bool:
    workflow = get_workflow(entity_kind)
    if workflow is None:
        logger.debug(f"Unknown entity kind {entity_kind!r}")
        return False
    return workflow.is_valid_transition(from_status, to_status)


def check_transition(entity_kind: Any, from_status: Any, to_status: Any) -> TransitionResult:
    workflow = get_workflow(entity_kind)
    if workflow is None:
        return TransitionResult.blocked(
            ReasonCode.UNKNOWN_ENTITY_KIND,
            f"'{entity_kind}' is not a known entity kind.",
            "entity_kind_must_be_known_policy",
        )
    return workflow.check(from_status, to_status)


def allowed_next_statuses(entity_kind: Any, status: Any) -> FrozenSet[Enum]:
    workflow = get_workflow(entity_kind)
    if workflow is None:
        return frozenset()
    return workflow.allowed_next_statuses(status)


def is_terminal(entity_kind: Any, status: Any) -> bool:
    workflow = get_workflow(entity_kind)
    return workflow is not None and workflow.is_terminal(status)
