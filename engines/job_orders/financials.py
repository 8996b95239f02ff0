"""Cargo ERP Job Order Engine - final revenue, cost, profit and margin."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

from core.primitives.money import (
    ZERO,
    calculate_margin,
    calculate_profit,
    require_non_negative,
    round_money,
)


@dataclass(frozen=True)
class JobOrderFinancials:
    final_revenue: Decimal
    final_cost: Decimal
    final_profit: Decimal
    final_margin: Decimal  # percent, 0 when revenue is 0

    def to_dict(self) -> dict:
        return {
            "final_revenue": str(self.final_revenue),
            "final_cost": str(self.final_cost),
            "final_profit": str(self.final_profit),
            "final_margin": str(self.final_margin),
        }


def calculate_job_order_financials(
    revenue_subtotals: Iterable[Any],
    actual_costs: Iterable[Optional[Any]],
) -> JobOrderFinancials:
    """
    Roll PJO revenue subtotals and confirmed actual costs into job order
    financials. A cost item without an actual amount counts as zero.
    """
    revenue = ZERO
    for subtotal in revenue_subtotals:
        revenue += require_non_negative(subtotal, "subtotal")

    cost = ZERO
    for actual in actual_costs:
        if actual is None:
            continue
        cost += require_non_negative(actual, "actual_amount")

    return JobOrderFinancials(
        final_revenue=round_money(revenue),
        final_cost=round_money(cost),
        final_profit=calculate_profit(revenue, cost),
        final_margin=calculate_margin(revenue, cost),
    )
