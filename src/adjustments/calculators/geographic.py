"""Geographic Adjustment

Normalizes for regional differences in labor cost, overhead cost and market
size between the tested party and the comparable.

For each index (labor, overhead, market size):

    differential = (tested_party_index - comparable_index) / comparable_index

net_adjustment = labor_weight * labor_diff
               + overhead_weight * overhead_diff
               + market_weight * market_diff          (fraction)

Identical regions always give exactly 0. A region missing from
GEOGRAPHIC_FACTORS gives a zero adjustment with an explanatory methodology.
"""

import logging
from dataclasses import dataclass
from typing import Final

from src.adjustments.parameters import GEOGRAPHIC_FACTORS
from src.core.math.numerical_safeguards import InputValidationError, safe_divide, validate_number

logger = logging.getLogger(__name__)


MISSING_REGION_METHODOLOGY: Final[str] = (
    "Geographic adjustment not computed - region data not available"
)

# Float slack on the weights sum
_WEIGHT_SUM_TOLERANCE: Final[float] = 1e-9


@dataclass(frozen=True)
class GeographicAdjustmentInput:
    """Regions of both parties and the index weights (sum <= 1)."""

    tested_party_region: str
    comparable_region: str
    labor_cost_weight: float = 0.50
    overhead_weight: float = 0.30
    market_weight: float = 0.20

    def __post_init__(self) -> None:
        weights = []
        for name in ("labor_cost_weight", "overhead_weight", "market_weight"):
            weight = validate_number(getattr(self, name), name)
            if weight < 0:
                raise InputValidationError(f"{name} must be >= 0, got {weight}")
            weights.append(weight)
        if sum(weights) > 1.0 + _WEIGHT_SUM_TOLERANCE:
            raise InputValidationError(
                f"geographic weights must sum to <= 1, got {sum(weights)}"
            )


@dataclass(frozen=True)
class GeographicAdjustmentResult:
    labor_cost_adjustment: float  # weighted fraction
    overhead_adjustment: float
    market_adjustment: float
    net_adjustment: float
    methodology: str
    region_data_available: bool = True


class GeographicAdjustment:
    """Geographic adjustment calculator (stateless)."""

    def calculate(self, data: GeographicAdjustmentInput) -> GeographicAdjustmentResult:
        """Compute the geographic adjustment.

        Args:
            data: regions and index weights

        Returns:
            GeographicAdjustmentResult; all-zero when a region is unknown
        """
        tp_factors = GEOGRAPHIC_FACTORS.get(data.tested_party_region)
        comp_factors = GEOGRAPHIC_FACTORS.get(data.comparable_region)

        if tp_factors is None or comp_factors is None:
            logger.debug(
                "geographic: region data missing (tp=%s comp=%s)",
                data.tested_party_region, data.comparable_region,
            )
            return GeographicAdjustmentResult(
                labor_cost_adjustment=0.0,
                overhead_adjustment=0.0,
                market_adjustment=0.0,
                net_adjustment=0.0,
                methodology=MISSING_REGION_METHODOLOGY,
                region_data_available=False,
            )

        labor_diff = safe_divide(
            tp_factors.labor_cost_index - comp_factors.labor_cost_index,
            comp_factors.labor_cost_index,
        )
        overhead_diff = safe_divide(
            tp_factors.overhead_cost_index - comp_factors.overhead_cost_index,
            comp_factors.overhead_cost_index,
        )
        market_diff = safe_divide(
            tp_factors.market_size_index - comp_factors.market_size_index,
            comp_factors.market_size_index,
        )

        labor = labor_diff * data.labor_cost_weight
        overhead = overhead_diff * data.overhead_weight
        market = market_diff * data.market_weight
        net_adjustment = labor + overhead + market

        methodology = (
            f"Geographic adjustment between {data.tested_party_region} and "
            f"{data.comparable_region} using weighted cost indices: "
            f"labor cost ({data.labor_cost_weight * 100:.0f}%), "
            f"overhead ({data.overhead_weight * 100:.0f}%), "
            f"market size ({data.market_weight * 100:.0f}%)"
        )

        logger.debug(
            "geographic: %s vs %s net=%.6f",
            data.tested_party_region, data.comparable_region, net_adjustment,
        )

        return GeographicAdjustmentResult(
            labor_cost_adjustment=labor,
            overhead_adjustment=overhead,
            market_adjustment=market,
            net_adjustment=net_adjustment,
            methodology=methodology,
        )
