"""Cargo ERP Reporting Engine - PJO pipeline and period filters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from core.primitives.money import ZERO, require_non_negative
from core.time.periods import Period
from core.time.temporal import as_datetime
from engines.job_orders.statuses import PJO_WORKFLOW, PJOStatus

logger = logging.getLogger("cargo.reporting")


@dataclass(frozen=True)
class PipelineStage:
    status: PJOStatus
    count: int
    total_value: Decimal

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "count": self.count,
            "total_value": str(self.total_value),
        }


def group_pjos_by_status(pjos: Iterable[Mapping[str, Any]]) -> List[PipelineStage]:
    """
    Count and value of active PJOs per status.

    Returns one stage per PJO status in workflow order, including empty
    ones. Rows flagged is_active=False are skipped; so are unknown
    statuses. A missing total_revenue_calculated counts as zero.
    """
    counts: Dict[PJOStatus, int] = {status: 0 for status in PJOStatus}
    totals: Dict[PJOStatus, Decimal] = {status: ZERO for status in PJOStatus}

    for row in pjos:
        if row.get("is_active") is False:
            continue
        status = PJO_WORKFLOW.coerce(row.get("status"))
        if status is None:
            logger.debug(f"Pipeline: PJO {row.get('id')} has unknown status {row.get('status')!r}")
            continue
        value = row.get("total_revenue_calculated")
        counts[status] += 1
        if value is not None:
            totals[status] += require_non_negative(value, "total_revenue_calculated")

    return [
        PipelineStage(status=status, count=counts[status], total_value=totals[status])
        for status in PJOStatus
    ]


def filter_records_by_period(
    rows: Iterable[Mapping[str, Any]],
    period: Period,
    field: str = "created_at",
) -> List[Mapping[str, Any]]:
    """Rows whose timestamp field falls within period. Rows without it are dropped."""
    return [
        row for row in rows
        if row.get(field) and period.contains(as_datetime(row[field]))
    ]
