"""
Cargo ERP Invoicing Engine — Line Items and Totals
====================================================

    subtotal    = Σ quantity × unit_price   (accumulated unrounded, then rounded)
    tax_amount  = round(subtotal × rate)     (rate defaults to VAT 11%)
    grand_total = round(subtotal + tax_amount)

All results are Decimal, rounded to cents half away from zero.
Negative quantities or prices are rejected, never clamped.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Union

from core.config.rules import DEFAULT_VAT_RULE, TaxRule
from core.primitives.money import (
    ZERO,
    require_non_negative,
    require_positive,
    round_money,
)


@dataclass(frozen=True)
class LineItem:
    """
    One billable line. Constructed per calculation, never persisted here.

    quantity must be > 0; unit_price must be >= 0.
    """

    quantity: Decimal
    unit_price: Decimal
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "quantity", require_positive(self.quantity, "quantity"))
        object.__setattr__(
            self, "unit_price", require_non_negative(self.unit_price, "unit_price")
        )
        if not isinstance(self.description, str):
            raise ValueError("description must be a string.")

    @property
    def amount(self) -> Decimal:
        """Unrounded quantity × unit_price."""
        return self.quantity * self.unit_price

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> LineItem:
        """Build from a database row shaped {quantity, unit_price, description?}."""
        return cls(
            quantity=record["quantity"],
            unit_price=record["unit_price"],
            description=record.get("description") or "",
        )


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    grand_total: Decimal

    def to_dict(self) -> dict:
        return {
            "subtotal": str(self.subtotal),
            "tax_amount": str(self.tax_amount),
            "grand_total": str(self.grand_total),
        }


def calculate_line_item_subtotal(quantity, unit_price) -> Decimal:
    """quantity × unit_price, rounded to cents."""
    return round_money(LineItem(quantity=quantity, unit_price=unit_price).amount)


def _as_line_item(item: Union[LineItem, Mapping[str, Any]]) -> LineItem:
    if isinstance(item, LineItem):
        return item
    if isinstance(item, Mapping):
        return LineItem.from_record(item)
    raise TypeError(f"Expected LineItem or mapping, got {type(item).__name__}.")


def calculate_invoice_totals(
    line_items: Iterable[Union[LineItem, Mapping[str, Any]]],
    tax_rule: TaxRule = DEFAULT_VAT_RULE,
) -> InvoiceTotals:
    """Compute invoice totals. An empty collection yields all zeros."""
    raw_subtotal = ZERO
    for item in line_items:
        raw_subtotal += _as_line_item(item).amount

    subtotal = round_money(raw_subtotal, "subtotal")
    tax_amount = tax_rule.compute_tax(subtotal)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        grand_total=round_money(subtotal + tax_amount),
    )
