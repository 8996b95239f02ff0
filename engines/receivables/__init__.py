"""
Cargo ERP Receivables Engine — Public API
===========================================
Accounts-receivable aging and overdue lists.
"""

from engines.receivables.aging import (
    AgingBucket,
    AgingSummary,
    OverdueInvoice,
    OverdueSeverity,
    ReceivableInvoice,
    calculate_aging_buckets,
    filter_overdue_invoices,
    get_aging_bucket_index,
    get_overdue_severity,
    summarize_aging,
)

__all__ = [
    "ReceivableInvoice",
    "AgingBucket",
    "AgingSummary",
    "OverdueInvoice",
    "OverdueSeverity",
    "get_aging_bucket_index",
    "calculate_aging_buckets",
    "summarize_aging",
    "get_overdue_severity",
    "filter_overdue_invoices",
]
