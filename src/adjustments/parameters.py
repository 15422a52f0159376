"""
Adjustment Parameters: Static benchmark tables

Industry, risk, geographic and PLI parameters consumed by the adjustment
calculators and the materiality gate. Every table keyed by an enum covers
all of its members (checked by the unit tests).
"""

from dataclasses import dataclass
from typing import Final

from src.core.domain.adjustment import AdjustmentType
from src.core.domain.entity import IndustryType, RiskLevel, RiskType
from src.core.domain.pli import PLIType


# =============================================================================
# WORKING CAPITAL
# =============================================================================

DAYS_IN_YEAR: Final[int] = 365


# =============================================================================
# RISK
# =============================================================================


@dataclass(frozen=True)
class RiskAdjustmentFactor:
    """Weight and adjustment range (percent) of one risk category."""

    risk_type: RiskType
    description: str
    weight: float
    range_min: float
    range_max: float


# Weights sum to 1.0
RISK_ADJUSTMENT_FACTORS: Final[tuple[RiskAdjustmentFactor, ...]] = (
    RiskAdjustmentFactor(RiskType.MARKET, "Demand fluctuation and market price changes", 0.20, -3.0, 3.0),
    RiskAdjustmentFactor(RiskType.INVENTORY, "Inventory obsolescence and carrying costs", 0.15, -2.0, 2.0),
    RiskAdjustmentFactor(RiskType.CREDIT, "Customer default on receivables", 0.15, -1.5, 1.5),
    RiskAdjustmentFactor(RiskType.FOREIGN_EXCHANGE, "Currency fluctuations", 0.15, -2.0, 2.0),
    RiskAdjustmentFactor(RiskType.PRODUCT_LIABILITY, "Product defects and liability claims", 0.10, -1.5, 1.5),
    RiskAdjustmentFactor(RiskType.WARRANTY, "Warranty claims and after-sales support", 0.10, -1.0, 1.0),
    RiskAdjustmentFactor(RiskType.R_AND_D, "R&D failure or delayed commercialization", 0.10, -2.0, 2.0),
    RiskAdjustmentFactor(RiskType.BUSINESS_CONTINUITY, "Business disruption and operational failures", 0.05, -1.0, 1.0),
)

RISK_LEVEL_MULTIPLIERS: Final[dict[RiskLevel, float]] = {
    RiskLevel.LOW: 0.5,
    RiskLevel.MEDIUM: 1.0,
    RiskLevel.HIGH: 1.5,
}


# =============================================================================
# CAPACITY UTILIZATION
# =============================================================================


@dataclass(frozen=True)
class CapacityParameters:
    """Normal utilization and fixed cost share of an industry."""

    normal_utilization: float
    fixed_cost_percentage: float


INDUSTRY_CAPACITY_PARAMETERS: Final[dict[IndustryType, CapacityParameters]] = {
    IndustryType.MANUFACTURING: CapacityParameters(0.80, 0.35),
    IndustryType.SERVICES: CapacityParameters(0.85, 0.60),
    IndustryType.TRADING: CapacityParameters(0.90, 0.20),
    IndustryType.IT_ITES: CapacityParameters(0.85, 0.70),
    IndustryType.PHARMACEUTICALS: CapacityParameters(0.75, 0.40),
    IndustryType.AUTOMOTIVE: CapacityParameters(0.80, 0.45),
    IndustryType.FINANCIAL_SERVICES: CapacityParameters(0.90, 0.65),
    IndustryType.RETAIL: CapacityParameters(0.85, 0.50),
    IndustryType.FMCG: CapacityParameters(0.85, 0.30),
    IndustryType.TELECOM: CapacityParameters(0.80, 0.70),
}


# =============================================================================
# GEOGRAPHIC
# =============================================================================


@dataclass(frozen=True)
class GeographicFactor:
    """Cost and market indices of a region (India = 100)."""

    labor_cost_index: float
    overhead_cost_index: float
    market_size_index: float


GEOGRAPHIC_FACTORS: Final[dict[str, GeographicFactor]] = {
    "India": GeographicFactor(100, 100, 100),
    "USA": GeographicFactor(450, 300, 350),
    "UK": GeographicFactor(380, 280, 200),
    "Germany": GeographicFactor(420, 290, 220),
    "Japan": GeographicFactor(350, 320, 250),
    "China": GeographicFactor(150, 120, 300),
    "Singapore": GeographicFactor(300, 250, 80),
    "UAE": GeographicFactor(200, 180, 90),
    "Australia": GeographicFactor(400, 280, 120),
    "Brazil": GeographicFactor(120, 130, 180),
}


# =============================================================================
# PLI THRESHOLDS
# =============================================================================


@dataclass(frozen=True)
class PLIThreshold:
    """Materiality threshold and maximum reasonable adjustment (fractions)."""

    materiality_threshold: float
    max_reasonable_adjustment: float


# Applied to any PLI without its own entry
DEFAULT_PLI_THRESHOLD: Final[PLIThreshold] = PLIThreshold(0.005, 0.10)

PLI_ADJUSTMENT_THRESHOLDS: Final[dict[PLIType, PLIThreshold]] = {
    PLIType.OP_OC: PLIThreshold(0.005, 0.05),
    PLIType.OP_OR: PLIThreshold(0.005, 0.05),
    PLIType.NET_COST_PLUS: PLIThreshold(0.01, 0.08),
    PLIType.OP_CE: PLIThreshold(0.01, 0.10),
    PLIType.BERRY_RATIO: PLIThreshold(0.05, 0.20),
}


def get_pli_threshold(pli_type: PLIType) -> PLIThreshold:
    """Thresholds of a PLI, DEFAULT_PLI_THRESHOLD when it has none."""
    return PLI_ADJUSTMENT_THRESHOLDS.get(pli_type, DEFAULT_PLI_THRESHOLD)


# =============================================================================
# DOCUMENTATION
# =============================================================================

ADJUSTMENT_DOCUMENTATION: Final[dict[AdjustmentType, tuple[str, ...]]] = {
    AdjustmentType.WORKING_CAPITAL: (
        "Working capital calculation sheet",
        "Interest rate justification",
        "Receivables/Payables/Inventory aging",
    ),
    AdjustmentType.RISK: (
        "Risk analysis report",
        "FAR analysis highlighting risk assumption",
        "Risk allocation matrix",
    ),
    AdjustmentType.CAPACITY_UTILIZATION: (
        "Capacity utilization report",
        "Fixed vs variable cost segregation",
        "Industry capacity benchmarks",
    ),
    AdjustmentType.GEOGRAPHIC: (
        "Geographic market study",
        "Labor cost analysis",
        "Market size comparison",
    ),
    AdjustmentType.ACCOUNTING: (
        "Accounting policy reconciliation",
        "GAAP difference analysis",
        "Restated financial statements",
    ),
}


def required_documentation(adjustment_types: list[AdjustmentType] | tuple[AdjustmentType, ...]) -> list[str]:
    """
    Supporting documents for a set of adjustments.

    Returns:
        De-duplicated list, in the order the types (and their documents)
        are given
    """
    docs: list[str] = []
    for adjustment_type in adjustment_types:
        for doc in ADJUSTMENT_DOCUMENTATION[adjustment_type]:
            if doc not in docs:
                docs.append(doc)
    return docs
