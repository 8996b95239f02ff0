"""
Cargo ERP Customs Engine — Public API
=======================================
PIB (customs import declaration) lifecycle rules.
"""

from engines.customs.policies import pib_must_be_draft_policy
from engines.customs.services import (
    PIBStatistics,
    calculate_pib_statistics,
    plan_pib_status_update,
)
from engines.customs.statuses import (
    PENDING_CLEARANCE_STATUSES,
    PIB_WORKFLOW,
    RELEASED_STATUSES,
    PIBStatus,
    is_pib_editable,
)

__all__ = [
    "PIBStatus",
    "PIB_WORKFLOW",
    "PENDING_CLEARANCE_STATUSES",
    "RELEASED_STATUSES",
    "is_pib_editable",
    "pib_must_be_draft_policy",
    "plan_pib_status_update",
    "PIBStatistics",
    "calculate_pib_statistics",
]
