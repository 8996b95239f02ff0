"""
Cargo ERP Policy — Rejection Model
=====================================
Structured rejection reasons for blocked status changes.

A rejection is an expected business outcome, not a fault.
It is returned as a value and never raised.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a blocked operation.

    Fields:
        code:        Machine-readable rejection code (e.g. 'TERMINAL_STATUS').
        message:     Human-readable explanation.
        policy_name: Name of the rule that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Workflow ──────────────────────────────────────────────
    UNKNOWN_ENTITY_KIND = "UNKNOWN_ENTITY_KIND"
    UNKNOWN_STATUS = "UNKNOWN_STATUS"
    TERMINAL_STATUS = "TERMINAL_STATUS"
    INVALID_TRANSITION = "INVALID_TRANSITION"

    # ── Invoicing ─────────────────────────────────────────────
    DUE_DATE_NOT_PASSED = "DUE_DATE_NOT_PASSED"
    JOB_ORDER_NOT_READY = "JOB_ORDER_NOT_READY"
    TERMS_TOTAL_INVALID = "TERMS_TOTAL_INVALID"
    TERM_ALREADY_INVOICED = "TERM_ALREADY_INVOICED"
    TERM_LOCKED = "TERM_LOCKED"

    # ── Customs ───────────────────────────────────────────────
    DOCUMENT_LOCKED = "DOCUMENT_LOCKED"


# ══════════════════════════════════════════════════════════════
# TRANSITION RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of a transition check.

    allowed=True carries no rejection; allowed=False always carries one.
    """

    allowed: bool
    rejection: Optional[RejectionReason] = None

    def __post_init__(self):
        if not isinstance(self.allowed, bool):
            raise ValueError("allowed must be a bool.")
        if self.allowed and self.rejection is not None:
            raise ValueError("An allowed result cannot carry a rejection.")
        if not self.allowed and self.rejection is None:
            raise ValueError("A blocked result must carry a rejection.")

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def ok(cls) -> TransitionResult:
        return cls(allowed=True)

    @classmethod
    def blocked(cls, code: str, message: str, policy_name: str) -> TransitionResult:
        return cls(
            allowed=False,
            rejection=RejectionReason(
                code=code, message=message, policy_name=policy_name
            ),
        )

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "rejection": None if self.rejection is None else self.rejection.to_dict(),
        }
