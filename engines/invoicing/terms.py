"""
Cargo ERP Invoicing Engine — Payment Terms
============================================
A job order's revenue may be invoiced in several terms, each a
percentage of the revenue released by a trigger:

    single             100                       (on JO creation)
    dp_final           30 / 70                   (JO creation, delivery)
    dp_delivery_final  30 / 50 / 20              (JO creation, surat jalan,
                                                  berita acara)

Percentages are Decimal. A valid term set totals exactly 100.
Each term is invoiced with its own VAT, rounded per term.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from core.config.rules import DEFAULT_VAT_RULE, TaxRule
from core.primitives.money import (
    ZERO,
    require_non_negative,
    round_money,
    to_decimal,
)
from engines.invoicing.totals import InvoiceTotals
from engines.job_orders.statuses import COMPLETED_STATUSES, JOB_ORDER_WORKFLOW

HUNDRED = Decimal("100")
DEFAULT_DISCREPANCY_TOLERANCE = Decimal("0.01")


class TermTrigger(str, Enum):
    JO_CREATED = "jo_created"
    SURAT_JALAN = "surat_jalan"
    BERITA_ACARA = "berita_acara"
    DELIVERY = "delivery"


class TermPreset(str, Enum):
    SINGLE = "single"
    DP_FINAL = "dp_final"
    DP_DELIVERY_FINAL = "dp_delivery_final"
    CUSTOM = "custom"


class TermStatus(str, Enum):
    READY = "ready"
    LOCKED = "locked"
    INVOICED = "invoiced"


# ══════════════════════════════════════════════════════════════
# INVOICE TERM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InvoiceTerm:
    """
    One slice of a job order's revenue.

    percentage is 0..100 (a fresh custom term starts at 0).
    """

    term: str
    percentage: Decimal
    description: str = ""
    trigger: TermTrigger = TermTrigger.JO_CREATED
    invoiced: bool = False
    invoice_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.term, str):
            raise ValueError("term must be a string.")
        percentage = require_non_negative(self.percentage, "percentage")
        if percentage > HUNDRED:
            raise ValueError(f"percentage must be <= 100, got {self.percentage}.")
        object.__setattr__(self, "percentage", percentage)
        object.__setattr__(self, "trigger", TermTrigger(self.trigger))
        if not isinstance(self.invoiced, bool):
            raise ValueError("invoiced must be a bool.")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> InvoiceTerm:
        """Build from one entry of a job order's invoice_terms JSON."""
        return cls(
            term=record.get("term") or "",
            percentage=record["percentage"],
            description=record.get("description") or "",
            trigger=record.get("trigger") or TermTrigger.JO_CREATED,
            invoiced=bool(record.get("invoiced", False)),
            invoice_id=record.get("invoice_id"),
        )

    def to_dict(self) -> dict:
        return {
            "term": self.term,
            "percentage": str(self.percentage),
            "description": self.description,
            "trigger": self.trigger.value,
            "invoiced": self.invoiced,
            "invoice_id": self.invoice_id,
        }


def _term(term: str, percentage: str, description: str, trigger: TermTrigger) -> InvoiceTerm:
    return InvoiceTerm(term, Decimal(percentage), description, trigger)


INVOICE_TERM_PRESETS = MappingProxyType({
    TermPreset.SINGLE: (
        _term("full", "100", "Full Payment", TermTrigger.JO_CREATED),
    ),
    TermPreset.DP_FINAL: (
        _term("down_payment", "30", "Down Payment", TermTrigger.JO_CREATED),
        _term("final", "70", "Final Payment", TermTrigger.DELIVERY),
    ),
    TermPreset.DP_DELIVERY_FINAL: (
        _term("down_payment", "30", "Down Payment", TermTrigger.JO_CREATED),
        _term("delivery", "50", "Upon Delivery", TermTrigger.SURAT_JALAN),
        _term("final", "20", "After Handover", TermTrigger.BERITA_ACARA),
    ),
})

LOCKED_TRIGGER_DESCRIPTIONS = MappingProxyType({
    TermTrigger.SURAT_JALAN: "Requires Surat Jalan document",
    TermTrigger.BERITA_ACARA: "Requires Berita Acara document",
    TermTrigger.DELIVERY: "Requires JO completion",
})


def get_preset_terms(preset: Any) -> List[InvoiceTerm]:
    """Terms of a preset, in invoicing order. Custom has none."""
    return list(INVOICE_TERM_PRESETS.get(TermPreset(preset), ()))


def _signature(terms: Sequence[InvoiceTerm]) -> Tuple[Tuple[str, Decimal], ...]:
    return tuple((t.term, t.percentage) for t in terms)


def detect_preset(terms: Sequence[InvoiceTerm]) -> TermPreset:
    """The preset whose term names and percentages match, else custom."""
    signature = _signature(terms)
    for preset, preset_terms in INVOICE_TERM_PRESETS.items():
        if signature and signature == _signature(preset_terms):
            return preset
    return TermPreset.CUSTOM


# ══════════════════════════════════════════════════════════════
# PERCENTAGES
# ══════════════════════════════════════════════════════════════

def calculate_terms_percentage_total(terms: Iterable[InvoiceTerm]) -> Decimal:
    return sum((t.percentage for t in terms), ZERO)


def validate_terms_total(terms: Sequence[InvoiceTerm]) -> bool:
    """True when there is at least one term and they total exactly 100."""
    return bool(terms) and calculate_terms_percentage_total(terms) == HUNDRED


# ══════════════════════════════════════════════════════════════
# AMOUNTS
# ══════════════════════════════════════════════════════════════

def calculate_term_amount(revenue: Any, percentage: Any) -> Decimal:
    """revenue × percentage / 100, rounded to cents."""
    amount = to_decimal(revenue, "revenue") * to_decimal(percentage, "percentage") / HUNDRED
    return round_money(amount, "term_amount")


def calculate_term_invoice_totals(
    revenue: Any,
    percentage: Any,
    tax_rule: TaxRule = DEFAULT_VAT_RULE,
) -> InvoiceTotals:
    subtotal = calculate_term_amount(revenue, percentage)
    tax_amount = tax_rule.compute_tax(subtotal)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        grand_total=round_money(subtotal + tax_amount),
    )


def calculate_total_invoiceable_amount(
    revenue: Any,
    tax_rule: TaxRule = DEFAULT_VAT_RULE,
) -> Decimal:
    """Revenue plus its VAT."""
    subtotal = round_money(revenue, "revenue")
    return round_money(subtotal + tax_rule.compute_tax(subtotal))


def calculate_total_invoiced_from_terms(
    terms: Iterable[InvoiceTerm],
    revenue: Any,
    tax_rule: TaxRule = DEFAULT_VAT_RULE,
) -> Decimal:
    """Sum of grand totals (VAT included) of the terms already invoiced."""
    total = ZERO
    for term in terms:
        if term.invoiced:
            total += calculate_term_invoice_totals(revenue, term.percentage, tax_rule).grand_total
    return total


@dataclass(frozen=True)
class UninvoicedRevenue:
    amount: Decimal
    percentage: Decimal

    def to_dict(self) -> dict:
        return {"amount": str(self.amount), "percentage": str(self.percentage)}


def calculate_uninvoiced_revenue(
    terms: Iterable[InvoiceTerm],
    revenue: Any,
) -> UninvoicedRevenue:
    """Revenue (before VAT) not yet covered by an invoiced term."""
    invoiced = calculate_terms_percentage_total(t for t in terms if t.invoiced)
    remaining = HUNDRED - invoiced
    return UninvoicedRevenue(
        amount=calculate_term_amount(revenue, remaining),
        percentage=remaining,
    )


# ══════════════════════════════════════════════════════════════
# TERM STATUS
# ══════════════════════════════════════════════════════════════

def get_term_status(
    term: InvoiceTerm,
    job_order_status: Any,
    has_surat_jalan: bool = False,
    has_berita_acara: bool = False,
) -> TermStatus:
    """
    Whether a term can be invoiced now.

    jo_created terms are always ready; delivery terms wait for the job
    order to be completed; surat_jalan and berita_acara terms wait for
    their document.
    """
    if term.invoiced:
        return TermStatus.INVOICED
    if term.trigger is TermTrigger.JO_CREATED:
        ready = True
    elif term.trigger is TermTrigger.DELIVERY:
        ready = JOB_ORDER_WORKFLOW.coerce(job_order_status) in COMPLETED_STATUSES
    elif term.trigger is TermTrigger.SURAT_JALAN:
        ready = has_surat_jalan
    else:
        ready = has_berita_acara
    return TermStatus.READY if ready else TermStatus.LOCKED


# ══════════════════════════════════════════════════════════════
# REVENUE DISCREPANCY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RevenueDiscrepancy:
    has_discrepancy: bool
    pjo_revenue_total: Decimal
    jo_final_revenue: Decimal
    difference: Decimal
    difference_percent: Decimal

    def to_dict(self) -> dict:
        return {
            "has_discrepancy": self.has_discrepancy,
            "pjo_revenue_total": str(self.pjo_revenue_total),
            "jo_final_revenue": str(self.jo_final_revenue),
            "difference": str(self.difference),
            "difference_percent": str(self.difference_percent),
        }


def check_revenue_discrepancy(
    pjo_revenue_total: Any,
    jo_final_revenue: Any,
    tolerance: Any = DEFAULT_DISCREPANCY_TOLERANCE,
) -> RevenueDiscrepancy:
    """
    Compare the PJO's revenue items with the job order's final revenue.

    tolerance is a fraction (0.01 = 1%). With zero final revenue, any
    PJO revenue counts as a 100% difference.
    """
    pjo_total = to_decimal(pjo_revenue_total, "pjo_revenue_total")
    final = to_decimal(jo_final_revenue, "jo_final_revenue")
    limit = require_non_negative(tolerance, "tolerance") * HUNDRED

    difference = pjo_total - final
    if final > 0:
        percent = difference / final * HUNDRED
    elif pjo_total > 0:
        percent = HUNDRED
    else:
        percent = ZERO

    return RevenueDiscrepancy(
        has_discrepancy=abs(percent) > limit,
        pjo_revenue_total=pjo_total,
        jo_final_revenue=final,
        difference=round_money(difference, "difference"),
        difference_percent=round_money(percent, "difference_percent"),
    )
