"""Cargo ERP Customs Engine - PIB status planning and dashboard counts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from core.primitives.workflow import StatusChange, TransitionPlan
from core.time.clock import Clock
from core.time.temporal import DateLike, as_date
from engines.customs.statuses import (
    PENDING_CLEARANCE_STATUSES,
    PIB_WORKFLOW,
    RELEASED_STATUSES,
    PIBStatus,
)

logger = logging.getLogger("cargo.customs")


def plan_pib_status_update(
    current: Any,
    target: Any,
    *,
    clock: Clock,
    aju_number: Optional[str] = None,
    pib_number: Optional[str] = None,
    sppb_number: Optional[str] = None,
    sppb_date: Optional[DateLike] = None,
    notes: Optional[str] = None,
    changed_by: Optional[str] = None,
) -> TransitionPlan:
    """
    Plan a PIB status change.

    Entering submitted stamps submitted_at (and aju_number when given),
    duties_paid stamps duties_paid_at (and pib_number), released stamps
    released_at (and sppb_number / sppb_date). Reference numbers passed
    for any other target are ignored.
    """
    result = PIB_WORKFLOW.check(current, target)
    if not result:
        logger.debug(f"PIB: {result.rejection.code} {current!r} → {target!r}")
        return TransitionPlan.rejected(result)

    source = PIB_WORKFLOW.coerce(current)
    status = PIB_WORKFLOW.coerce(target)
    now = clock.now_utc()

    updates: Dict[str, Any] = {"status": status.value, "updated_at": now}
    if status is PIBStatus.SUBMITTED:
        updates["submitted_at"] = now
        if aju_number:
            updates["aju_number"] = aju_number
    elif status is PIBStatus.DUTIES_PAID:
        updates["duties_paid_at"] = now
        if pib_number:
            updates["pib_number"] = pib_number
    elif status is PIBStatus.RELEASED:
        updates["released_at"] = now
        if sppb_number:
            updates["sppb_number"] = sppb_number
        if sppb_date:
            updates["sppb_date"] = as_date(sppb_date)

    logger.info(f"PIB: planned {source.value} → {status.value}")
    return TransitionPlan(
        result=result,
        updates=updates,
        history=StatusChange(
            entity_kind="pib",
            previous_status=source.value,
            new_status=status.value,
            changed_at=now,
            notes=notes,
            changed_by=changed_by,
        ),
    )


# ══════════════════════════════════════════════════════════════
# DASHBOARD COUNTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PIBStatistics:
    active: int
    pending_clearance: int
    awaiting_release: int
    released_this_month: int

    def to_dict(self) -> dict:
        return {
            "active": self.active,
            "pending_clearance": self.pending_clearance,
            "awaiting_release": self.awaiting_release,
            "released_this_month": self.released_this_month,
        }


def calculate_pib_statistics(
    documents: Iterable[Mapping[str, Any]],
    reference: DateLike,
) -> PIBStatistics:
    """
    Count PIB documents for the customs dashboard.

    documents are rows shaped {status, released_at?}. Rows with an
    unknown status are counted nowhere. released_this_month counts
    released or completed documents released on or after the first
    day of the reference month.
    """
    month_start = as_date(reference).replace(day=1)
    active = pending = awaiting = released = 0

    for row in documents:
        status = PIB_WORKFLOW.coerce(row.get("status"))
        if status is None:
            logger.debug(f"PIB statistics: skipping unknown status {row.get('status')!r}")
            continue
        if not PIB_WORKFLOW.is_terminal(status):
            active += 1
        if status in PENDING_CLEARANCE_STATUSES:
            pending += 1
        if status is PIBStatus.DUTIES_PAID:
            awaiting += 1
        released_at = row.get("released_at")
        if status in RELEASED_STATUSES and released_at:
            if as_date(released_at) >= month_start:
                released += 1

    return PIBStatistics(
        active=active,
        pending_clearance=pending,
        awaiting_release=awaiting,
        released_this_month=released,
    )
