"""Cargo ERP Invoicing Engine - policies."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from core.policy.rejection import ReasonCode, RejectionReason
from core.time.temporal import DateLike, as_date
from engines.invoicing.statuses import INVOICE_WORKFLOW, InvoiceStatus
from engines.invoicing.terms import (
    LOCKED_TRIGGER_DESCRIPTIONS,
    InvoiceTerm,
    TermStatus,
    calculate_terms_percentage_total,
    get_term_status,
    validate_terms_total,
)
from engines.job_orders.statuses import can_invoice_job_order


def can_mark_overdue(due_date: Optional[DateLike], today: DateLike) -> bool:
    """An invoice may be marked overdue only once its due date has passed."""
    if due_date is None:
        return False
    return as_date(due_date) < as_date(today)


def is_invoice_overdue(due_date: Optional[DateLike], status: Any, today: DateLike) -> bool:
    """Only a sent invoice with a past due date is overdue."""
    if INVOICE_WORKFLOW.coerce(status) is not InvoiceStatus.SENT:
        return False
    return can_mark_overdue(due_date, today)


def job_order_must_be_submitted_to_finance_policy(
    job_order_status: Any,
) -> RejectionReason | None:
    if can_invoice_job_order(job_order_status):
        return None
    return RejectionReason(
        code=ReasonCode.JOB_ORDER_NOT_READY,
        message=(
            f"Job order status is '{getattr(job_order_status, 'value', job_order_status)}'; "
            f"only submitted_to_finance can be invoiced."
        ),
        policy_name="job_order_must_be_submitted_to_finance_policy",
    )


def due_date_must_have_passed_policy(
    target_status: Any,
    due_date: Optional[DateLike],
    today: DateLike,
) -> RejectionReason | None:
    if INVOICE_WORKFLOW.coerce(target_status) is not InvoiceStatus.OVERDUE:
        return None
    if can_mark_overdue(due_date, today):
        return None
    return RejectionReason(
        code=ReasonCode.DUE_DATE_NOT_PASSED,
        message="Cannot mark as overdue - due date has not passed.",
        policy_name="due_date_must_have_passed_policy",
    )


def terms_must_total_hundred_policy(
    terms: Sequence[InvoiceTerm],
) -> RejectionReason | None:
    if validate_terms_total(terms):
        return None
    return RejectionReason(
        code=ReasonCode.TERMS_TOTAL_INVALID,
        message=(
            f"Invoice terms total {calculate_terms_percentage_total(terms)}%; "
            f"they must total exactly 100%."
        ),
        policy_name="terms_must_total_hundred_policy",
    )


def term_must_be_ready_policy(
    term: InvoiceTerm,
    job_order_status: Any,
    has_surat_jalan: bool = False,
    has_berita_acara: bool = False,
) -> RejectionReason | None:
    status = get_term_status(term, job_order_status, has_surat_jalan, has_berita_acara)
    if status is TermStatus.READY:
        return None
    if status is TermStatus.INVOICED:
        return RejectionReason(
            code=ReasonCode.TERM_ALREADY_INVOICED,
            message=f"Term '{term.term}' is already invoiced.",
            policy_name="term_must_be_ready_policy",
        )
    return RejectionReason(
        code=ReasonCode.TERM_LOCKED,
        message=f"Term '{term.term}' is locked: {LOCKED_TRIGGER_DESCRIPTIONS[term.trigger]}.",
        policy_name="term_must_be_ready_policy",
    )
