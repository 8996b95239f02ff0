"""
Cargo ERP Policy — Public API
===============================
Rejections are values, not exceptions.
"""

from core.policy.rejection import ReasonCode, RejectionReason, TransitionResult

__all__ = [
    "ReasonCode",
    "RejectionReason",
    "TransitionResult",
]
