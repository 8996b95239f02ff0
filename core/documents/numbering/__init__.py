"""
Cargo ERP Documents - Numbering Engine Public API
===================================================
"""

from core.documents.numbering.engine import (
    ROMAN_MONTHS,
    InvoiceNumberParts,
    JobOrderNumberParts,
    format_invoice_number,
    format_job_order_number,
    parse_invoice_number,
    parse_job_order_number,
    to_roman_month,
)

__all__ = [
    "ROMAN_MONTHS",
    "InvoiceNumberParts",
    "JobOrderNumberParts",
    "format_invoice_number",
    "parse_invoice_number",
    "to_roman_month",
    "format_job_order_number",
    "parse_job_order_number",
]
