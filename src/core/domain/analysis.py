"""
Analysis: Statistical ranges, compliance and the comparability result

Immutable Pydantic models produced by the statistics, compliance and
orchestration layers. ComparabilityAnalysisResult is the output contract
toward the reporting layer (contracts/schema/comparability_analysis.json).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .adjustment import AdjustedComparable, AdjustmentType
from .entity import ComparableEntity, TestedPartyData
from .pli import PLIType


# =============================================================================
# ENUMS
# =============================================================================


class CompliancePosition(str, Enum):
    """Position of the tested party relative to the interquartile range."""

    BELOW = "below"
    WITHIN = "within"
    ABOVE = "above"


# =============================================================================
# RANGES
# =============================================================================


class StatisticalRange(BaseModel):
    """
    Descriptive statistics of a PLI set, rounded to 2 decimals.

    For a non-empty set min <= q1 <= median <= q3 <= max and
    min <= mean <= max. An empty set yields all-zero fields.

    The 35th/65th percentile band is the narrower arm's-length range used
    under the Indian transfer pricing rules (Rule 10CA) for six or more
    comparables.
    """

    count: int = Field(0, ge=0, description="Number of values")
    min: float = Field(0.0, description="Minimum")
    q1: float = Field(0.0, description="25th percentile (interpolated)")
    median: float = Field(0.0, description="50th percentile (interpolated)")
    q3: float = Field(0.0, description="75th percentile (interpolated)")
    max: float = Field(0.0, description="Maximum")
    mean: float = Field(0.0, description="Arithmetic mean")
    interquartile_range: float = Field(0.0, ge=0, description="q3 - q1")
    standard_deviation: float = Field(0.0, ge=0, description="Sample standard deviation (n - 1)")
    lower_fence: float = Field(0.0, description="Tukey lower fence q1 - 1.5 * IQR")
    upper_fence: float = Field(0.0, description="Tukey upper fence q3 + 1.5 * IQR")
    percentile_35: float = Field(0.0, description="35th percentile (interpolated)")
    percentile_65: float = Field(0.0, description="65th percentile (interpolated)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ordering(self) -> "StatisticalRange":
        """Quartile ordering min <= q1 <= median <= q3 <= max, mean inside [min, max]."""
        if not (self.min <= self.q1 <= self.median <= self.q3 <= self.max):
            raise ValueError(
                f"Range ordering violated: min={self.min}, q1={self.q1}, "
                f"median={self.median}, q3={self.q3}, max={self.max}"
            )
        if not (self.min <= self.mean <= self.max):
            raise ValueError(f"Mean {self.mean} outside [{self.min}, {self.max}]")
        return self


class ArmLengthRange(BaseModel):
    """
    Headline arm's-length band.

    Quartiles are picked by truncated index (sorted[floor(n * p)]), not
    interpolated; see src.core.math.statistics.index_quartiles.
    """

    lower_quartile: float = Field(0.0, description="sorted[floor(n * 0.25)]")
    median: float = Field(0.0, description="sorted[floor(n * 0.5)]")
    upper_quartile: float = Field(0.0, description="sorted[floor(n * 0.75)]")

    model_config = {"frozen": True}


# =============================================================================
# COMPLIANCE
# =============================================================================


class ComplianceResult(BaseModel):
    """Arm's-length classification of the tested party margin."""

    tested_party_margin: float = Field(..., description="Tested party PLI (%)")
    position: CompliancePosition = Field(..., description="below / within / above")
    compliant: bool = Field(..., description="At arm's length")
    adjustment_required: float = Field(..., ge=0, description="Adjustment to the median (%)")
    explanation: str = Field(..., description="Rule-based explanation")
    within_interquartile_range: bool = Field(..., description="q1 <= margin <= q3")
    within_percentile_band: bool = Field(
        ..., description="35th percentile <= margin <= 65th percentile"
    )
    percentile: float | None = Field(
        None,
        ge=0,
        le=100,
        description="Share of comparables at or below the margin (%), None without values",
    )

    model_config = {"frozen": True}


# =============================================================================
# COMPARABILITY ANALYSIS
# =============================================================================


class ComparabilityAnalysisResult(BaseModel):
    """
    Full comparability analysis of one tested party against a comparable set.

    Ranges, the arm's-length band and total_adjustment_impact are in
    percentage points (margin * 100).
    """

    tested_party: TestedPartyData = Field(..., description="Tested party")
    comparables: tuple[ComparableEntity, ...] = Field(default=(), description="Comparable set")
    adjusted_comparables: tuple[AdjustedComparable, ...] = Field(
        default=(), description="Comparables after adjustments, in input order"
    )
    pli_type: PLIType = Field(..., description="PLI governing the materiality gate")
    tested_party_pli: float = Field(
        ..., description="Tested party value of pli_type (percent; Berry as a ratio)"
    )
    unadjusted_range: StatisticalRange = Field(..., description="Range of original margins")
    adjusted_range: StatisticalRange = Field(..., description="Range of adjusted margins")
    arm_length_range: ArmLengthRange = Field(..., description="Index-based quartile band")
    total_adjustment_impact: float = Field(
        ..., description="adjusted_range.median - unadjusted_range.median"
    )
    recommended_adjustments: tuple[AdjustmentType, ...] = Field(
        default=(), description="Adjustment types applied"
    )
    documentation_required: tuple[str, ...] = Field(
        default=(), description="Consolidated supporting documents"
    )
    compliance: ComplianceResult | None = Field(
        None, description="Tested party margin against the adjusted range"
    )

    model_config = {"frozen": True}

    def to_contract(self) -> dict[str, Any]:
        """JSON-compatible dict of the output contract."""
        return self.model_dump(mode="json")
