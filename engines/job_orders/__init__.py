"""
Cargo ERP Job Order Engine — Public API
=========================================
Job order (JO) and proforma job order (PJO) lifecycle rules.
"""

from engines.job_orders.financials import (
    JobOrderFinancials,
    calculate_job_order_financials,
)
from engines.job_orders.statuses import (
    COMPLETED_STATUSES,
    JOB_ORDER_STATUS_ON_INVOICE_CREATED,
    JOB_ORDER_WORKFLOW,
    PJO_WORKFLOW,
    JobOrderAction,
    JobOrderStatus,
    PJOStatus,
    available_job_order_actions,
    can_create_job_order,
    can_invoice_job_order,
    linked_job_order_status,
)

__all__ = [
    "JobOrderStatus",
    "PJOStatus",
    "JobOrderAction",
    "JOB_ORDER_WORKFLOW",
    "PJO_WORKFLOW",
    "JOB_ORDER_STATUS_ON_INVOICE_CREATED",
    "COMPLETED_STATUSES",
    "can_invoice_job_order",
    "linked_job_order_status",
    "available_job_order_actions",
    "can_create_job_order",
    "JobOrderFinancials",
    "calculate_job_order_financials",
]
