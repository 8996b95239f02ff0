"""
Cargo ERP Money Primitive — Decimal Amounts
=============================================

Shared monetary helpers used by Invoicing, Job Orders and Receivables.

RULES:
- All amounts are Decimal. Floats are converted through str() so that
  0.1 stays 0.1 and not 0.1000000000000000055511151231257827.
- Rounding is to 2 places, half away from zero (ROUND_HALF_UP on Decimal).
- Sums accumulate unrounded; rounding happens once, at the end.
- NaN, Infinity, booleans and non-numeric values are rejected loudly.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from core.errors import InvalidAmountError


MONEY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """Convert an int, float, str or Decimal to a finite Decimal."""
    if isinstance(value, bool):
        raise InvalidAmountError(field_name, value, "booleans are not amounts")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(field_name, value, "not a number") from None
    else:
        raise InvalidAmountError(
            field_name, value, f"unsupported type {type(value).__name__}"
        )
    if not result.is_finite():
        raise InvalidAmountError(field_name, value, "must be finite")
    return result


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise InvalidAmountError(field_name, value, "must be >= 0")
    return amount


def require_positive(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount <= 0:
        raise InvalidAmountError(field_name, value, "must be > 0")
    return amount


def round_money(value: Any, field_name: str = "amount") -> Decimal:
    """Round to cents, half away from zero."""
    amount = to_decimal(value, field_name)
    try:
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # quantize needs more digits than the context precision allows
        raise InvalidAmountError(field_name, value, "too large") from None


def sum_amounts(values: Iterable[Any], field_name: str = "amount") -> Decimal:
    """Unrounded sum of amounts. Empty input sums to 0."""
    total = ZERO
    for value in values:
        total += to_decimal(value, field_name)
    return total


def calculate_profit(revenue: Any, cost: Any) -> Decimal:
    return round_money(to_decimal(revenue, "revenue") - to_decimal(cost, "cost"))


def calculate_margin(revenue: Any, cost: Any) -> Decimal:
    """Profit as a percentage of revenue. 0 when revenue is 0."""
    revenue_amount = to_decimal(revenue, "revenue")
    if revenue_amount == 0:
        return ZERO
    profit = revenue_amount - to_decimal(cost, "cost")
    return round_money(profit / revenue_amount * 100)
