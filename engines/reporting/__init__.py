"""
Cargo ERP Reporting Engine — Public API
=========================================
Finance dashboard KPIs, period revenue comparison and the PJO pipeline.
"""

from engines.reporting.kpis import (
    RECENT_PAYMENT_DAYS,
    FinanceKPIs,
    PeriodRevenue,
    RecentPayment,
    RevenueTrend,
    calculate_finance_kpis,
    calculate_period_revenue,
    filter_recent_payments,
)
from engines.reporting.pipeline import (
    PipelineStage,
    filter_records_by_period,
    group_pjos_by_status,
)

__all__ = [
    "RevenueTrend",
    "PeriodRevenue",
    "calculate_period_revenue",
    "RECENT_PAYMENT_DAYS",
    "RecentPayment",
    "filter_recent_payments",
    "FinanceKPIs",
    "calculate_finance_kpis",
    "PipelineStage",
    "group_pjos_by_status",
    "filter_records_by_period",
]
