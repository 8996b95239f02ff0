"""
Cargo ERP Documents - Numbering Engine
========================================
Deterministic document number formatting and parsing.

Formats:
    Invoice    — INV-YYYY-NNNN            e.g. INV-2025-0001
    Job Order  — JO-NNNN/CARGO/MM/YYYY    e.g. JO-0001/CARGO/XII/2025
                 (MM is the Roman numeral month)

Doctrine:
- Stateless: the same (year, sequence) always produces the same number.
- Sequence state is managed externally (the database counts issued documents).
- Dates are passed explicitly — never read from the system clock here.
"""

from __future__ import annotations

import re
from datetime import date
from typing import NamedTuple, Optional

INVOICE_PREFIX = "INV"
JOB_ORDER_PREFIX = "JO"
JOB_ORDER_DIVISION = "CARGO"
SEQUENCE_PADDING = 4
MAX_INVOICE_SEQUENCE = 9999

_INVOICE_NUMBER_RE = re.compile(r"^INV-(\d{4})-(\d{4})$")
_JOB_ORDER_NUMBER_RE = re.compile(
    r"^JO-(\d{4,})/CARGO/(I|II|III|IV|V|VI|VII|VIII|IX|X|XI|XII)/(\d{4})$"
)

ROMAN_MONTHS = (
    "I", "II", "III", "IV", "V", "VI",
    "VII", "VIII", "IX", "X", "XI", "XII",
)


class InvoiceNumberParts(NamedTuple):
    year: int
    sequence: int


class JobOrderNumberParts(NamedTuple):
    sequence: int
    month: int
    year: int


def _require_int(value, name: str, low: int, high: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be int.")
    if value < low or (high is not None and value > high):
        bound = f"between {low} and {high}" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bound}, got {value}.")
    return value


# ---------------------------------------------------------------------------
# Invoice numbers
# ---------------------------------------------------------------------------

def format_invoice_number(year: int, sequence: int) -> str:
    """
    Format an invoice number.

    Args:
        year: four-digit calendar year
        sequence: 1-based position within the year (1..9999)

    Returns:
        e.g. "INV-2025-0001"
    """
    _require_int(year, "year", 1000, 9999)
    _require_int(sequence, "sequence", 1, MAX_INVOICE_SEQUENCE)
    return f"{INVOICE_PREFIX}-{year}-{str(sequence).zfill(SEQUENCE_PADDING)}"


def parse_invoice_number(text: str) -> Optional[InvoiceNumberParts]:
    """Parse "INV-YYYY-NNNN" back to (year, sequence). None when malformed."""
    if not isinstance(text, str):
        return None
    match = _INVOICE_NUMBER_RE.match(text.strip())
    if match is None:
        return None
    sequence = int(match.group(2))
    if sequence < 1:
        return None
    return InvoiceNumberParts(year=int(match.group(1)), sequence=sequence)


# ---------------------------------------------------------------------------
# Job order numbers
# ---------------------------------------------------------------------------

def to_roman_month(month: int) -> str:
    """Convert a month number (1-12) to its Roman numeral."""
    _require_int(month, "month", 1, 12)
    return ROMAN_MONTHS[month - 1]


def format_job_order_number(sequence: int, on_date: date) -> str:
    """Format a job order number for the month of on_date."""
    _require_int(sequence, "sequence", 1)
    if not isinstance(on_date, date):
        raise ValueError("on_date must be date or datetime.")
    padded = str(sequence).zfill(SEQUENCE_PADDING)
    return (
        f"{JOB_ORDER_PREFIX}-{padded}/{JOB_ORDER_DIVISION}/"
        f"{to_roman_month(on_date.month)}/{on_date.year}"
    )


def parse_job_order_number(text: str) -> Optional[JobOrderNumberParts]:
    """Parse "JO-NNNN/CARGO/MM/YYYY". None when malformed."""
    if not isinstance(text, str):
        return None
    match = _JOB_ORDER_NUMBER_RE.match(text.strip())
    if match is None:
        return None
    sequence = int(match.group(1))
    if sequence < 1:
        return None
    return JobOrderNumberParts(
        sequence=sequence,
        month=ROMAN_MONTHS.index(match.group(2)) + 1,
        year=int(match.group(3)),
    )
