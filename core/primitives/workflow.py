"""
Cargo ERP Workflow Primitive — Status Transition Tables
========================================================

The Workflow Primitive provides a generic, deterministic transition table
used by every document that tracks lifecycle status.

Used by:
    Invoicing  — Invoice (DRAFT → SENT → PAID | OVERDUE | CANCELLED)
    Job Orders — JO (ACTIVE → COMPLETED → SUBMITTED_TO_FINANCE → INVOICED → CLOSED)
                 PJO (DRAFT → PENDING_APPROVAL → APPROVED | REJECTED)
    Customs    — PIB (DRAFT → SUBMITTED → ... → RELEASED → COMPLETED)

RULES:
- Lookups are pure (same input → same output)
- Invalid or unknown transitions answer False, never raise
- Definitions are immutable once constructed
- Terminal statuses have no outgoing transitions

This file contains NO persistence logic. Callers apply a validated
transition to their own store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Type

from core.errors import WorkflowDefinitionError
from core.policy.rejection import ReasonCode, TransitionResult

logger = logging.getLogger("cargo.workflow")


# ══════════════════════════════════════════════════════════════
# WORKFLOW DEFINITION (transition table)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WorkflowDefinition:
    """
    Defines the valid statuses and transitions for one document kind.

    Shared across all documents of that kind (e.g. all invoices).

    Fields:
        name:              Identifier for this workflow (e.g. "Invoice")
        status_type:       str-valued Enum listing every status
        initial_status:    Status assigned to new documents
        terminal_statuses: Statuses with no outgoing transitions
        transitions:       {from_status → frozenset(allowed_to_statuses)}
    """
    name: str
    status_type: Type[Enum]
    initial_status: Enum
    terminal_statuses: FrozenSet[Enum]
    transitions: Mapping[Enum, FrozenSet[Enum]]

    def __post_init__(self):
        if not self.name:
            raise WorkflowDefinitionError(repr(self.name), "name must be non-empty.")

        members = set(self.status_type)
        table = {
            status: frozenset(targets)
            for status, targets in self.transitions.items()
        }

        missing = members - set(table)
        if missing:
            raise WorkflowDefinitionError(
                self.name,
                f"statuses missing from table: {sorted(s.value for s in missing)}",
            )
        for status, targets in table.items():
            if not isinstance(status, self.status_type):
                raise WorkflowDefinitionError(
                    self.name, f"'{status}' is not a {self.status_type.__name__}."
                )
            foreign = [t for t in targets if not isinstance(t, self.status_type)]
            if foreign:
                raise WorkflowDefinitionError(
                    self.name, f"'{status.value}' targets unknown statuses {foreign}."
                )
            is_terminal = status in self.terminal_statuses
            if is_terminal and targets:
                raise WorkflowDefinitionError(
                    self.name, f"terminal status '{status.value}' has outgoing transitions."
                )
            if not is_terminal and not targets:
                raise WorkflowDefinitionError(
                    self.name, f"non-terminal status '{status.value}' has no targets."
                )

        if self.initial_status not in members:
            raise WorkflowDefinitionError(
                self.name, f"initial_status '{self.initial_status}' not in table."
            )

        object.__setattr__(self, "terminal_statuses", frozenset(self.terminal_statuses))
        object.__setattr__(self, "transitions", MappingProxyType(table))

    def coerce(self, value: Any) -> Optional[Enum]:
        """Return the status member for value, or None when unknown."""
        if isinstance(value, self.status_type):
            return value
        if isinstance(value, Enum):
            return None
        try:
            return self.status_type(value)
        except ValueError:
            return None

    def is_valid_transition(self, from_status: Any, to_status: Any) -> bool:
        """Check if a transition is allowed by this definition."""
        source = self.coerce(from_status)
        target = self.coerce(to_status)
        if source is None or target is None:
            logger.debug(
                f"{self.name}: unknown status in {from_status!r} → {to_status!r}"
            )
            return False
        return target in self.transitions[source]

    def check(self, from_status: Any, to_status: Any) -> TransitionResult:
        """Like is_valid_transition, but explains a blocked transition."""
        policy_name = f"{self.name.lower()}_transition_policy"
        source = self.coerce(from_status)
        target = self.coerce(to_status)
        if source is None or target is None:
            unknown = from_status if source is None else to_status
            return TransitionResult.blocked(
                ReasonCode.UNKNOWN_STATUS,
                f"'{unknown}' is not a valid {self.name} status.",
                policy_name,
            )
        if source in self.terminal_statuses:
            logger.debug(f"{self.name}: '{source.value}' is terminal")
            return TransitionResult.blocked(
                ReasonCode.TERMINAL_STATUS,
                f"Cannot transition from terminal status '{source.value}'.",
                policy_name,
            )
        if target not in self.transitions[source]:
            allowed = sorted(s.value for s in self.transitions[source])
            logger.debug(f"{self.name}: blocked {source.value} → {target.value}")
            return TransitionResult.blocked(
                ReasonCode.INVALID_TRANSITION,
                f"Cannot transition from {source.value} to {target.value}. "
                f"Allowed: {allowed}.",
                policy_name,
            )
        return TransitionResult.ok()

    def is_terminal(self, status: Any) -> bool:
        member = self.coerce(status)
        return member is not None and member in self.terminal_statuses

    def allowed_next_statuses(self, from_status: Any) -> FrozenSet[Enum]:
        member = self.coerce(from_status)
        if member is None:
            return frozenset()
        return self.transitions[member]


# ══════════════════════════════════════════════════════════════
# STATUS CHANGE RECORD (history entry)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StatusChange:
    """
    An immutable record of a single status change, ready to be
    written to a status-history table by the caller.
    """
    entity_kind: str
    previous_status: str
    new_status: str
    changed_at: datetime
    notes: Optional[str] = None
    changed_by: Optional[str] = None

    def __post_init__(self):
        if not self.entity_kind or not isinstance(self.entity_kind, str):
            raise ValueError("entity_kind must be non-empty string.")
        if not self.previous_status or not isinstance(self.previous_status, str):
            raise ValueError("previous_status must be non-empty string.")
        if not self.new_status or not isinstance(self.new_status, str):
            raise ValueError("new_status must be non-empty string.")
        if not isinstance(self.changed_at, datetime):
            raise TypeError("changed_at must be datetime.")

    def to_dict(self) -> dict:
        return {
            "entity_kind": self.entity_kind,
            "previous_status": self.previous_status,
            "new_status": self.new_status,
            "changed_at": self.changed_at.isoformat(),
            "notes": self.notes,
            "changed_by": self.changed_by,
        }


# ══════════════════════════════════════════════════════════════
# TRANSITION PLAN (what the caller should write)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransitionPlan:
    """
    Planned effect of a status change.

    A blocked plan carries the rejection, no column updates and no
    history entry. An allowed plan carries the column values to write,
    the history record and, for invoices, the status the linked job
    order must move to (None when unaffected).
    """
    result: TransitionResult
    updates: Mapping[str, Any]
    history: Optional[StatusChange] = None
    job_order_status: Optional[Enum] = None

    def __post_init__(self):
        if not isinstance(self.result, TransitionResult):
            raise TypeError("result must be TransitionResult.")
        if not self.result.allowed and (self.updates or self.history is not None):
            raise ValueError("A blocked plan cannot carry updates or history.")
        object.__setattr__(self, "updates", MappingProxyType(dict(self.updates)))

    @property
    def allowed(self) -> bool:
        return self.result.allowed

    @classmethod
    def rejected(cls, result: TransitionResult) -> TransitionPlan:
        return cls(result=result, updates={})

    def to_dict(self) -> dict:
        updates = {
            key: value.isoformat() if hasattr(value, "isoformat") else value
            for key, value in self.updates.items()
        }
        return {
            "result": self.result.to_dict(),
            "updates": updates,
            "history": None if self.history is None else self.history.to_dict(),
            "job_order_status": (
                None if self.job_order_status is None else self.job_order_status.value
            ),
        }
