"""
Cargo ERP Workflows — Public API
==================================
Entity-kind dispatch over the invoice, job order, PJO and PIB
transition tables.
"""

from engines.workflows.registry import (
    WORKFLOWS,
    EntityKind,
    allowed_next_statuses,
    check_transition,
    get_workflow,
    is_terminal,
    is_valid_transition,
)

__all__ = [
    "EntityKind",
    "WORKFLOWS",
    "get_workflow",
    "is_valid_transition",
    "check_transition",
    "allowed_next_statuses",
    "is_terminal",
]
