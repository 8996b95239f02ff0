"""Cargo ERP Customs Engine - policies."""

from __future__ import annotations

from typing import Any

from core.policy.rejection import ReasonCode, RejectionReason
from engines.customs.statuses import is_pib_editable


def pib_must_be_draft_policy(status: Any) -> RejectionReason | None:
    if is_pib_editable(status):
        return None
    return RejectionReason(
        code=ReasonCode.DOCUMENT_LOCKED,
        message=(
            f"PIB is '{getattr(status, 'value', status)}'; "
            f"only draft documents can be modified."
        ),
        policy_name="pib_must_be_draft_policy",
    )
