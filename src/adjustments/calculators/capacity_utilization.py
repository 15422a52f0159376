"""Capacity Utilization Adjustment

Normalizes for the unabsorbed fixed cost of running below normal capacity.

normal_utilization = mean of both parties' industry benchmarks. For each
party below normal:

    adjustment = operating_cost * fixed_cost_pct * (normal - actual) / actual

net_adjustment = tp_adjustment / tp_operating_cost
                 - comp_adjustment / comp_operating_cost   (fraction)

Zero actual utilization or zero operating cost resolve to a neutral 0 for
that party; a missing industry benchmark resolves to a zero adjustment.
"""

import logging
from dataclasses import dataclass
from typing import Final

from src.adjustments.parameters import INDUSTRY_CAPACITY_PARAMETERS
from src.core.domain.entity import IndustryType
from src.core.math.numerical_safeguards import safe_divide, validate_in_range

logger = logging.getLogger(__name__)


METHODOLOGY: Final[str] = (
    "Capacity adjustment computed based on deviation from normal industry utilization. "
    "Adjustment = (Fixed Cost % x Operating Cost x Utilization Gap) / Actual Utilization"
)


@dataclass(frozen=True)
class CapacityParty:
    """Capacity data of one party."""

    actual_utilization: float  # 0-1
    operating_cost: float
    industry: IndustryType

    def __post_init__(self) -> None:
        validate_in_range(self.actual_utilization, "actual_utilization", min_value=0.0, max_value=1.0)
        validate_in_range(self.operating_cost, "operating_cost", min_value=0.0)


@dataclass(frozen=True)
class CapacityAdjustmentInput:
    tested_party: CapacityParty
    comparable: CapacityParty


@dataclass(frozen=True)
class CapacityAdjustmentResult:
    tested_party_adjustment: float  # currency
    comparable_adjustment: float  # currency
    net_adjustment: float  # fraction of operating cost
    normal_utilization: float
    methodology: str


def unabsorbed_fixed_cost(
    actual_utilization: float,
    normal_utilization: float,
    fixed_cost_percentage: float,
    operating_cost: float,
) -> float:
    """
    Fixed cost not absorbed because of under-utilization.

    Returns 0 at or above normal utilization, and 0 for zero actual
    utilization (the ratio is undefined).
    """
    if actual_utilization >= normal_utilization:
        return 0.0

    gap = normal_utilization - actual_utilization
    fixed_cost = operating_cost * fixed_cost_percentage
    return safe_divide(fixed_cost * gap, actual_utilization, fallback=0.0)


class CapacityUtilizationAdjustment:
    """Capacity utilization adjustment calculator (stateless)."""

    def calculate(self, data: CapacityAdjustmentInput) -> CapacityAdjustmentResult:
        """Compute the capacity utilization adjustment."""
        tp_params = INDUSTRY_CAPACITY_PARAMETERS.get(data.tested_party.industry)
        comp_params = INDUSTRY_CAPACITY_PARAMETERS.get(data.comparable.industry)

        if tp_params is None or comp_params is None:
            return CapacityAdjustmentResult(
                tested_party_adjustment=0.0,
                comparable_adjustment=0.0,
                net_adjustment=0.0,
                normal_utilization=0.0,
                methodology="Capacity adjustment not computed - industry benchmark not available",
            )

        normal = (tp_params.normal_utilization + comp_params.normal_utilization) / 2

        tp_adjustment = unabsorbed_fixed_cost(
            data.tested_party.actual_utilization,
            normal,
            tp_params.fixed_cost_percentage,
            data.tested_party.operating_cost,
        )
        comp_adjustment = unabsorbed_fixed_cost(
            data.comparable.actual_utilization,
            normal,
            comp_params.fixed_cost_percentage,
            data.comparable.operating_cost,
        )

        net_adjustment = (
            safe_divide(tp_adjustment, data.tested_party.operating_cost, fallback=0.0)
            - safe_divide(comp_adjustment, data.comparable.operating_cost, fallback=0.0)
        )

        notes = []
        for label, party in (("tested party", data.tested_party), ("comparable", data.comparable)):
            if party.actual_utilization == 0:
                notes.append(f"{label} reports zero utilization; its adjustment is taken as 0")
            if party.operating_cost == 0:
                notes.append(f"{label} reports zero operating cost; its adjustment is taken as 0")

        methodology = METHODOLOGY
        if notes:
            methodology += ". " + "; ".join(notes)

        logger.debug(
            "capacity: normal=%.3f tp=%.2f comp=%.2f net=%.6f",
            normal, tp_adjustment, comp_adjustment, net_adjustment,
        )

        return CapacityAdjustmentResult(
            tested_party_adjustment=tp_adjustment,
            comparable_adjustment=comp_adjustment,
            net_adjustment=net_adjustment,
            normal_utilization=normal,
            methodology=methodology,
        )
