"""Calculators: one stateless calculator per comparability adjustment.

- Working capital: financing burden of receivables/payables/inventory
- Risk: FAR analysis over the eight risk categories
- Capacity utilization: unabsorbed fixed cost below normal capacity
- Geographic: weighted regional cost and market indices
- Accounting: reconciliation of line items across standards
"""

from .accounting import (
    AccountingReconciler,
    AccountingReconciliationInput,
    AccountingReconciliationResult,
    ReconciledItem,
)
from .capacity_utilization import (
    CapacityAdjustmentInput,
    CapacityAdjustmentResult,
    CapacityParty,
    CapacityUtilizationAdjustment,
)
from .geographic import (
    GeographicAdjustment,
    GeographicAdjustmentInput,
    GeographicAdjustmentResult,
)
from .risk import (
    RiskAdjustment,
    RiskAdjustmentInput,
    RiskAdjustmentResult,
    RiskContribution,
    RiskParty,
)
from .working_capital import (
    WorkingCapitalAdjustment,
    WorkingCapitalInput,
    WorkingCapitalParty,
    WorkingCapitalResult,
    days_outstanding,
)

__all__ = [
    "WorkingCapitalAdjustment",
    "WorkingCapitalInput",
    "WorkingCapitalParty",
    "WorkingCapitalResult",
    "days_outstanding",
    "RiskAdjustment",
    "RiskAdjustmentInput",
    "RiskAdjustmentResult",
    "RiskContribution",
    "RiskParty",
    "CapacityUtilizationAdjustment",
    "CapacityAdjustmentInput",
    "CapacityAdjustmentResult",
    "CapacityParty",
    "GeographicAdjustment",
    "GeographicAdjustmentInput",
    "GeographicAdjustmentResult",
    "AccountingReconciler",
    "AccountingReconciliationInput",
    "AccountingReconciliationResult",
    "ReconciledItem",
]
