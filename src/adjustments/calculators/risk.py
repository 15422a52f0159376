"""Risk Adjustment

Compares the functional risk profiles (FAR analysis) of the tested party
and the comparable over the eight fixed risk categories.

A party bears a risk when it is assumed AND not mitigated. Per category:
- tested party bears it, comparable does not: + range_max * weight
- comparable bears it, tested party does not: + range_min * weight
- both or neither: 0

net_adjustment = sum of contributions / 100 (fraction).

Risk score of a party = 100 * sum(weight * level multiplier) over the
risks it bears (low 0.5, medium 1.0, high 1.5).
"""

import logging
from dataclasses import dataclass
from typing import Final

from src.adjustments.parameters import RISK_ADJUSTMENT_FACTORS, RISK_LEVEL_MULTIPLIERS
from src.core.domain.entity import IndustryType, RiskAssumption, RiskType

logger = logging.getLogger(__name__)


METHODOLOGY: Final[str] = (
    "Risk adjustment based on comparative FAR analysis. "
    "Each risk factor weighted by significance and adjusted based on "
    "assumption/mitigation status."
)


@dataclass(frozen=True)
class RiskParty:
    """Risk profile of one party."""

    risk_profile: tuple[RiskAssumption, ...]
    industry: IndustryType | None = None

    def find(self, risk_type: RiskType) -> RiskAssumption | None:
        """First assumption recorded for the category, or None."""
        for risk in self.risk_profile:
            if risk.risk_type == risk_type:
                return risk
        return None


@dataclass(frozen=True)
class RiskAdjustmentInput:
    tested_party: RiskParty
    comparable: RiskParty


@dataclass(frozen=True)
class RiskContribution:
    """Per-category breakdown."""

    risk_type: RiskType
    tested_party_bears: bool
    comparable_bears: bool
    contribution: float  # percent points before the /100 conversion


@dataclass(frozen=True)
class RiskAdjustmentResult:
    net_adjustment: float  # fraction
    risk_score_tested_party: float  # 0-150
    risk_score_comparable: float
    breakdown: tuple[RiskContribution, ...]
    methodology: str


class RiskAdjustment:
    """Risk adjustment calculator (stateless)."""

    def calculate(self, data: RiskAdjustmentInput) -> RiskAdjustmentResult:
        """Compute the risk adjustment and both parties' risk scores."""
        breakdown: list[RiskContribution] = []
        total = 0.0
        tp_score = 0.0
        comp_score = 0.0

        for factor in RISK_ADJUSTMENT_FACTORS:
            tp_risk = data.tested_party.find(factor.risk_type)
            comp_risk = data.comparable.find(factor.risk_type)

            tp_bears = tp_risk is not None and tp_risk.is_borne
            comp_bears = comp_risk is not None and comp_risk.is_borne

            if tp_bears:
                tp_score += factor.weight * RISK_LEVEL_MULTIPLIERS[tp_risk.level]
            if comp_bears:
                comp_score += factor.weight * RISK_LEVEL_MULTIPLIERS[comp_risk.level]

            contribution = 0.0
            if tp_bears and not comp_bears:
                contribution = factor.range_max * factor.weight
            elif comp_bears and not tp_bears:
                contribution = factor.range_min * factor.weight

            total += contribution
            breakdown.append(
                RiskContribution(
                    risk_type=factor.risk_type,
                    tested_party_bears=tp_bears,
                    comparable_bears=comp_bears,
                    contribution=contribution,
                )
            )

        net_adjustment = total / 100
        logger.debug(
            "risk: tp_score=%.1f comp_score=%.1f net=%.6f",
            tp_score * 100, comp_score * 100, net_adjustment,
        )

        return RiskAdjustmentResult(
            net_adjustment=net_adjustment,
            risk_score_tested_party=tp_score * 100,
            risk_score_comparable=comp_score * 100,
            breakdown=tuple(breakdown),
            methodology=METHODOLOGY,
        )
