"""
Cargo ERP Core Config — Compiled-In Rules
============================================
Tax rates and aging boundaries are data, not branches in engine logic.

Defaults are compiled in. Callers override them by passing a different
rule object as a parameter; there are no environment variables and no
config files.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Protocol, Tuple

from core.primitives.money import round_money, to_decimal


# ══════════════════════════════════════════════════════════════
# TAX RULE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxRule:
    """
    Tax calculation rule (VAT, GST, sales tax, etc).

    rate is a Decimal fraction: Decimal("0.11") means 11%.
    """

    country_code: str
    tax_type: str  # VAT | GST | SALES_TAX | WITHHOLDING
    rate: Decimal

    def __post_init__(self) -> None:
        rate = to_decimal(self.rate, "rate")
        if not 0 <= rate <= 1:
            raise ValueError(f"Tax rate must be between 0 and 1, got {self.rate}.")
        object.__setattr__(self, "rate", rate)

    def compute_tax(self, amount) -> Decimal:
        """Compute tax for a base amount, rounded to cents."""
        return round_money(to_decimal(amount) * self.rate)


VAT_RATE = Decimal("0.11")

DEFAULT_VAT_RULE = TaxRule(country_code="ID", tax_type="VAT", rate=VAT_RATE)


# ══════════════════════════════════════════════════════════════
# AGING BUCKETS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AgingBucketDefinition:
    """
    One days-past-due range. Bounds are inclusive; None means unbounded.
    """

    label: str
    min_days: Optional[int]
    max_days: Optional[int]
    is_overdue: bool

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("label must be non-empty.")
        if (
            self.min_days is not None
            and self.max_days is not None
            and self.min_days > self.max_days
        ):
            raise ValueError(
                f"Bucket '{self.label}': min_days {self.min_days} > max_days {self.max_days}."
            )

    def contains(self, days: int) -> bool:
        if self.min_days is not None and days < self.min_days:
            return False
        if self.max_days is not None and days > self.max_days:
            return False
        return True


@dataclass(frozen=True)
class AgingSchedule:
    """
    Ordered bucket definitions that partition the integer line.

    Invariant (enforced at construction): the first bucket is unbounded
    below, the last unbounded above, and each bucket starts exactly one
    day after the previous one ends.
    """

    buckets: Tuple[AgingBucketDefinition, ...]

    def __post_init__(self) -> None:
        buckets = tuple(self.buckets)
        if not buckets:
            raise ValueError("AgingSchedule needs at least one bucket.")
        if buckets[0].min_days is not None:
            raise ValueError("First bucket must be unbounded below.")
        if buckets[-1].max_days is not None:
            raise ValueError("Last bucket must be unbounded above.")
        for previous, current in zip(buckets, buckets[1:]):
            if previous.max_days is None or current.min_days is None:
                raise ValueError(
                    f"Only the outer buckets may be unbounded "
                    f"('{previous.label}' / '{current.label}')."
                )
            if current.min_days != previous.max_days + 1:
                raise ValueError(
                    f"Buckets '{previous.label}' and '{current.label}' "
                    f"leave a gap or overlap."
                )
        object.__setattr__(self, "buckets", buckets)

    def index_for(self, days: int) -> int:
        for index, bucket in enumerate(self.buckets):
            if bucket.contains(days):
                return index
        raise ValueError(f"No bucket for {days} days; schedule is not a partition.")

    def __len__(self) -> int:
        return len(self.buckets)


DEFAULT_AGING_SCHEDULE = AgingSchedule(
    buckets=(
        AgingBucketDefinition("Current", None, 0, is_overdue=False),
        AgingBucketDefinition("1-30 days", 1, 30, is_overdue=True),
        AgingBucketDefinition("31-60 days", 31, 60, is_overdue=True),
        AgingBucketDefinition("61-90 days", 61, 90, is_overdue=True),
        AgingBucketDefinition("90+ days", 91, None, is_overdue=True),
    )
)


# ══════════════════════════════════════════════════════════════
# CONFIG STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class ConfigStore(Protocol):
    """
    Protocol for rule lookup by country.

    Implementations may back this with a database; this library ships
    only the in-memory store.
    """

    def get_tax_rule(self, country_code: str, tax_type: str) -> Optional[TaxRule]:
        ...  # pragma: no cover


class InMemoryConfigStore:
    """In-memory rule store, seeded with the default VAT rule."""

    def __init__(self, *, include_defaults: bool = True) -> None:
        self._tax_rules: Dict[Tuple[str, str], TaxRule] = {}
        if include_defaults:
            self.add_tax_rule(DEFAULT_VAT_RULE)

    def add_tax_rule(self, rule: TaxRule) -> None:
        self._tax_rules[(rule.country_code, rule.tax_type)] = rule

    def get_tax_rule(self, country_code: str, tax_type: str) -> Optional[TaxRule]:
        return self._tax_rules.get((country_code, tax_type))
