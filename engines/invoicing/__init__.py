"""
Cargo ERP Invoicing Engine — Public API
=========================================
Invoice lifecycle, totals, payment terms and overdue rules.
"""

from engines.invoicing.policies import (
    can_mark_overdue,
    due_date_must_have_passed_policy,
    is_invoice_overdue,
    job_order_must_be_submitted_to_finance_policy,
    term_must_be_ready_policy,
    terms_must_total_hundred_policy,
)
from engines.invoicing.services import plan_invoice_status_update, plan_mark_overdue
from engines.invoicing.statuses import (
    INVOICE_WORKFLOW,
    STATUS_TIMESTAMP_FIELDS,
    UNPAID_STATUSES,
    InvoiceStatus,
)
from engines.invoicing.terms import (
    INVOICE_TERM_PRESETS,
    InvoiceTerm,
    RevenueDiscrepancy,
    TermPreset,
    TermStatus,
    TermTrigger,
    UninvoicedRevenue,
    calculate_term_amount,
    calculate_term_invoice_totals,
    calculate_terms_percentage_total,
    calculate_total_invoiceable_amount,
    calculate_total_invoiced_from_terms,
    calculate_uninvoiced_revenue,
    check_revenue_discrepancy,
    detect_preset,
    get_preset_terms,
    get_term_status,
    validate_terms_total,
)
from engines.invoicing.totals import (
    InvoiceTotals,
    LineItem,
    calculate_invoice_totals,
    calculate_line_item_subtotal,
)

__all__ = [
    "InvoiceStatus",
    "INVOICE_WORKFLOW",
    "UNPAID_STATUSES",
    "STATUS_TIMESTAMP_FIELDS",
    "LineItem",
    "InvoiceTotals",
    "calculate_line_item_subtotal",
    "calculate_invoice_totals",
    "TermTrigger",
    "TermPreset",
    "TermStatus",
    "InvoiceTerm",
    "INVOICE_TERM_PRESETS",
    "get_preset_terms",
    "detect_preset",
    "calculate_terms_percentage_total",
    "validate_terms_total",
    "calculate_term_amount",
    "calculate_term_invoice_totals",
    "calculate_total_invoiceable_amount",
    "calculate_total_invoiced_from_terms",
    "UninvoicedRevenue",
    "calculate_uninvoiced_revenue",
    "get_term_status",
    "RevenueDiscrepancy",
    "check_revenue_discrepancy",
    "can_mark_overdue",
    "is_invoice_overdue",
    "due_date_must_have_passed_policy",
    "job_order_must_be_submitted_to_finance_policy",
    "terms_must_total_hundred_policy",
    "term_must_be_ready_policy",
    "plan_invoice_status_update",
    "plan_mark_overdue",
]
