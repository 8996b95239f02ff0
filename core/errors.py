"""
Cargo ERP Core — Errors
=========================
Structured errors for invalid input.

These are programmer errors, NOT business rejections.
Business rejections flow through RejectionReason → TransitionResult.
"""

from __future__ import annotations

from typing import Any


class CargoRulesError(Exception):
    """Base error for the rules library."""
    pass


class InvalidAmountError(CargoRulesError, ValueError):
    """A monetary or quantity input is negative, NaN, infinite or not numeric."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name}={value!r} is invalid: {reason}.")


class InvalidPeriodError(CargoRulesError, ValueError):
    """Period type or boundaries are not valid."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class WorkflowDefinitionError(CargoRulesError, ValueError):
    """A transition table violates its structural invariants."""

    def __init__(self, workflow_name: str, detail: str):
        self.workflow_name = workflow_name
        self.detail = detail
        super().__init__(f"Workflow '{workflow_name}': {detail}")
