"""
Adjustment: Applied comparability adjustments

Immutable Pydantic models for the per-comparable output of the
orchestrator: one AdjustmentResult per computed adjustment type (gated or
not) and the AdjustedComparable that sums the gated ones.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .entity import ComparableEntity


# =============================================================================
# ENUMS
# =============================================================================


class AdjustmentType(str, Enum):
    """Comparability adjustments the engine can compute."""

    WORKING_CAPITAL = "working_capital"
    RISK = "risk"
    CAPACITY_UTILIZATION = "capacity_utilization"
    GEOGRAPHIC = "geographic"
    ACCOUNTING = "accounting"

    @property
    def label(self) -> str:
        """Human readable name ('capacity utilization')."""
        return self.value.replace("_", " ")


# =============================================================================
# MODELS
# =============================================================================


class AdjustmentResult(BaseModel):
    """
    One computed adjustment with its gate decision.

    amount is a signed fraction added to the comparable's margin when the
    adjustment is both material and reasonable.
    """

    adjustment_type: AdjustmentType = Field(..., description="Adjustment type")
    amount: float = Field(..., description="Signed adjustment (fraction)")
    percentage_impact: float = Field(..., description="amount * 100")
    is_material: bool = Field(..., description="|amount| above the PLI materiality threshold")
    is_reasonable: bool = Field(..., description="|amount| within the PLI maximum")
    max_allowed: float = Field(..., ge=0, description="Maximum reasonable |amount| for the PLI")
    methodology: str = Field(..., description="Methodology narrative")

    model_config = {"frozen": True}

    @property
    def is_applied(self) -> bool:
        """True if the adjustment enters the adjusted margin."""
        return self.is_material and self.is_reasonable


class AdjustedComparable(BaseModel):
    """
    A comparable after the selected adjustments.

    adjusted_margin == original_margin + total_adjustment, where
    total_adjustment sums only the applied adjustments.
    """

    original_entity: ComparableEntity = Field(..., description="Comparable as supplied")
    original_margin: float = Field(..., description="Operating profit / operating expenses")
    adjustments: tuple[AdjustmentResult, ...] = Field(
        default=(), description="Every computed adjustment, gated or not"
    )
    total_adjustment: float = Field(..., description="Sum of applied adjustments")
    adjusted_margin: float = Field(..., description="original_margin + total_adjustment")
    adjustment_summary: str = Field(..., description="Human readable summary")
    documentation: tuple[str, ...] = Field(default=(), description="Supporting documents")

    model_config = {"frozen": True}

    @property
    def applied_adjustments(self) -> tuple[AdjustmentResult, ...]:
        """Adjustments that passed the materiality gate."""
        return tuple(a for a in self.adjustments if a.is_applied)
