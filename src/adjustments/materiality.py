"""Materiality Gate: decides which adjustments enter the adjusted margin

Every computed adjustment is recorded. Only an adjustment that is both
material and reasonable for the selected PLI is summed into the
comparable's adjusted margin:

- material:   |amount| >  materiality_threshold
- reasonable: |amount| <= max_reasonable_adjustment

A PLI without its own thresholds uses DEFAULT_PLI_THRESHOLD
(0.5% materiality, 10% maximum).
"""

from dataclasses import dataclass
from typing import Mapping

from src.adjustments.parameters import (
    DEFAULT_PLI_THRESHOLD,
    PLI_ADJUSTMENT_THRESHOLDS,
    PLIThreshold,
)
from src.core.domain.adjustment import AdjustmentResult, AdjustmentType
from src.core.domain.pli import PLIType
from src.core.math.numerical_safeguards import validate_number


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ReasonablenessCheck:
    """Outcome of the reasonableness bound."""

    reasonable: bool
    max_allowed: float


# =============================================================================
# GATE
# =============================================================================


class MaterialityGate:
    """Per-PLI materiality and reasonableness gate.

    Stateless apart from the threshold table, which is injected once and
    never mutated.
    """

    def __init__(
        self,
        thresholds: Mapping[PLIType, PLIThreshold] | None = None,
        default: PLIThreshold = DEFAULT_PLI_THRESHOLD,
    ):
        self._thresholds = dict(thresholds) if thresholds is not None else dict(PLI_ADJUSTMENT_THRESHOLDS)
        self._default = default

    def threshold_for(self, pli_type: PLIType) -> PLIThreshold:
        return self._thresholds.get(pli_type, self._default)

    def is_material(self, amount: float, pli_type: PLIType) -> bool:
        """True if |amount| exceeds the PLI's materiality threshold."""
        value = validate_number(amount, "amount")
        return abs(value) > self.threshold_for(pli_type).materiality_threshold

    def check_reasonable(self, amount: float, pli_type: PLIType) -> ReasonablenessCheck:
        """Compare |amount| to the PLI's maximum reasonable adjustment."""
        value = validate_number(amount, "amount")
        max_allowed = self.threshold_for(pli_type).max_reasonable_adjustment
        return ReasonablenessCheck(reasonable=abs(value) <= max_allowed, max_allowed=max_allowed)

    def evaluate(
        self,
        adjustment_type: AdjustmentType,
        amount: float,
        pli_type: PLIType,
        methodology: str,
    ) -> AdjustmentResult:
        """Gate one computed adjustment.

        Args:
            adjustment_type: Which adjustment produced amount
            amount: Signed adjustment (fraction)
            pli_type: PLI selecting the thresholds
            methodology: Calculator's methodology narrative

        Returns:
            AdjustmentResult carrying both gate decisions

        Raises:
            InputValidationError: If amount is not a finite number
        """
        material = self.is_material(amount, pli_type)
        check = self.check_reasonable(amount, pli_type)

        return AdjustmentResult(
            adjustment_type=adjustment_type,
            amount=amount,
            percentage_impact=amount * 100,
            is_material=material,
            is_reasonable=check.reasonable,
            max_allowed=check.max_allowed,
            methodology=methodology,
        )
