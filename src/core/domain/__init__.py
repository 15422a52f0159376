"""
Domain models and value objects.

Contains the benchmarking entities: FinancialProfile, ComparableEntity,
TestedPartyData, AdjustmentResult, StatisticalRange and the analysis result.
"""

from src.core.domain.adjustment import (
    AdjustedComparable,
    AdjustmentResult,
    AdjustmentType,
)
from src.core.domain.analysis import (
    ArmLengthRange,
    ComparabilityAnalysisResult,
    CompliancePosition,
    ComplianceResult,
    StatisticalRange,
)
from src.core.domain.entity import (
    AccountingLineItem,
    AccountingStandard,
    ComparableEntity,
    FinancialProfile,
    IndustryType,
    OperationalProfile,
    RiskAssumption,
    RiskLevel,
    RiskType,
    TestedPartyData,
)
from src.core.domain.pli import PLI_DISPLAY_NAMES, PLIType, compute_pli

__all__ = [
    # Entities
    "AccountingLineItem",
    "AccountingStandard",
    "ComparableEntity",
    "FinancialProfile",
    "IndustryType",
    "OperationalProfile",
    "RiskAssumption",
    "RiskLevel",
    "RiskType",
    "TestedPartyData",
    # PLI
    "PLIType",
    "PLI_DISPLAY_NAMES",
    "compute_pli",
    # Adjustments
    "AdjustmentType",
    "AdjustmentResult",
    "AdjustedComparable",
    # Analysis
    "StatisticalRange",
    "ArmLengthRange",
    "CompliancePosition",
    "ComplianceResult",
    "ComparabilityAnalysisResult",
]
