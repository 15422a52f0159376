"""Arm's-Length Compliance: tested party margin against the interquartile range

- margin < q1: below, not compliant, adjustment to the median required
- margin > q3: above, compliant (no adjustment)
- otherwise:   within, compliant

The result also reports whether the margin sits inside the 35th/65th
percentile band and, when the comparable margins are supplied, the
percentile rank of the margin within them.

Margins and range bounds are in percentage points.
"""

import logging
from collections.abc import Iterable

from src.core.domain.analysis import CompliancePosition, ComplianceResult, StatisticalRange
from src.core.math.numerical_safeguards import round_half_away_from_zero, validate_number
from src.core.math.statistics import percentile_rank

logger = logging.getLogger(__name__)


class ArmLengthComplianceEvaluator:
    """Classifies a tested party margin (stateless)."""

    def evaluate(
        self,
        tested_party_margin: float,
        statistical_range: StatisticalRange,
        comparable_margins: Iterable[float] | None = None,
    ) -> ComplianceResult:
        """Classify the tested party margin against the range.

        Args:
            tested_party_margin: Tested party PLI (%)
            statistical_range: Range of comparable PLIs (%)
            comparable_margins: Comparable PLIs (%) the range was built from;
                percentile is None when omitted

        Returns:
            ComplianceResult with a rule-based explanation

        Raises:
            InputValidationError: If the margin or a comparable margin is not a finite number
        """
        margin = validate_number(tested_party_margin, "tested_party_margin")
        q1 = statistical_range.q1
        q3 = statistical_range.q3
        median = statistical_range.median

        percentile = None
        if comparable_margins is not None:
            percentile = percentile_rank(margin, comparable_margins)

        position_fields = {
            "tested_party_margin": margin,
            "within_interquartile_range": q1 <= margin <= q3,
            "within_percentile_band": (
                statistical_range.percentile_35 <= margin <= statistical_range.percentile_65
            ),
            "percentile": percentile,
        }

        if margin < q1:
            required = round_half_away_from_zero(median - margin)
            result = ComplianceResult(
                **position_fields,
                position=CompliancePosition.BELOW,
                compliant=False,
                adjustment_required=required,
                explanation=(
                    f"Tested party margin of {margin:.2f}% is below the interquartile range "
                    f"({q1:.2f}% - {q3:.2f}%). An adjustment to the median of "
                    f"{median:.2f}% may be required."
                ),
            )
        elif margin > q3:
            result = ComplianceResult(
                **position_fields,
                position=CompliancePosition.ABOVE,
                compliant=True,
                adjustment_required=0.0,
                explanation=(
                    f"Tested party margin of {margin:.2f}% is above the interquartile range "
                    f"({q1:.2f}% - {q3:.2f}%) but still arm's length. No adjustment required."
                ),
            )
        else:
            result = ComplianceResult(
                **position_fields,
                position=CompliancePosition.WITHIN,
                compliant=True,
                adjustment_required=0.0,
                explanation=(
                    f"Tested party margin of {margin:.2f}% falls within the interquartile range "
                    f"({q1:.2f}% - {q3:.2f}%). The transaction is at arm's length."
                ),
            )

        logger.debug(
            "compliance: margin=%.2f position=%s percentile=%s",
            margin, result.position.value, percentile,
        )
        return result
