"""
Cargo ERP Core Config — Public API
=====================================
Compiled-in rules (tax, aging boundaries) with parameter injection.
"""

from core.config.rules import (
    DEFAULT_AGING_SCHEDULE,
    DEFAULT_VAT_RULE,
    VAT_RATE,
    AgingBucketDefinition,
    AgingSchedule,
    ConfigStore,
    InMemoryConfigStore,
    TaxRule,
)

__all__ = [
    "TaxRule",
    "VAT_RATE",
    "DEFAULT_VAT_RULE",
    "AgingBucketDefinition",
    "AgingSchedule",
    "DEFAULT_AGING_SCHEDULE",
    "ConfigStore",
    "InMemoryConfigStore",
]
