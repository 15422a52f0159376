"""Comparability Orchestrator: adjusts a comparable set and benchmarks the tested party

Pipeline per comparable (apply_all_adjustments):
1. Derive each calculator's inputs from the two entities
2. Run the calculator for every selected adjustment type (enum order,
   duplicates applied once)
3. Gate every result through the MaterialityGate
4. adjusted_margin = original_margin + sum of applied adjustments

Analysis (perform_comparability_analysis):
- One AdjustedComparable per comparable, in input order (optionally fanned
  out on a concurrent.futures.Executor)
- Unadjusted and adjusted StatisticalRange over margins in percent
- Arm's-length band by truncated-index quartiles over the sorted adjusted
  margins (kept distinct from the interpolated range quartiles)
- Median shift, consolidated documentation and the tested party's
  compliance against the adjusted range, with its percentile rank
- The tested party's value of the configured PLI

Margins are fractions on AdjustedComparable; every range, band and impact
on ComparabilityAnalysisResult is in percentage points.
"""

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import Executor
from functools import partial
from typing import Final

from src.adjustments.calculators.accounting import AccountingReconciler, AccountingReconciliationInput
from src.adjustments.calculators.capacity_utilization import (
    CapacityAdjustmentInput,
    CapacityParty,
    CapacityUtilizationAdjustment,
)
from src.adjustments.calculators.geographic import GeographicAdjustment, GeographicAdjustmentInput
from src.adjustments.calculators.risk import RiskAdjustment, RiskAdjustmentInput, RiskParty
from src.adjustments.calculators.working_capital import (
    WorkingCapitalAdjustment,
    WorkingCapitalInput,
    WorkingCapitalParty,
    days_outstanding,
)
from src.adjustments.materiality import MaterialityGate
from src.adjustments.parameters import required_documentation
from src.benchmarking.compliance import ArmLengthComplianceEvaluator
from src.core.config import ComparabilityConfig
from src.core.domain.adjustment import AdjustedComparable, AdjustmentResult, AdjustmentType
from src.core.domain.analysis import ComparabilityAnalysisResult
from src.core.domain.entity import ComparableEntity, TestedPartyData
from src.core.domain.pli import PLI_DISPLAY_NAMES, compute_pli
from src.core.math.numerical_safeguards import (
    round_half_away_from_zero,
    safe_divide,
    validate_in_range,
)
from src.core.math.statistics import compute_range, index_quartiles

logger = logging.getLogger(__name__)


NO_MATERIAL_ADJUSTMENTS: Final[str] = "No material adjustments were required for this comparable."


def normalize_adjustment_types(
    adjustment_types: Iterable[AdjustmentType | str],
) -> list[AdjustmentType]:
    """
    Selected adjustment types in enum order, each at most once.

    Raises:
        ValueError: If an entry is not a known adjustment type
    """
    selected = {AdjustmentType(t) for t in adjustment_types}
    return [t for t in AdjustmentType if t in selected]


def summarize_adjustments(adjustments: Sequence[AdjustmentResult]) -> str:
    """Summary of the applied adjustments ('risk: +1.50%; geographic: -0.75%')."""
    applied = [a for a in adjustments if a.is_applied]
    if not applied:
        return NO_MATERIAL_ADJUSTMENTS

    parts = [f"{a.adjustment_type.label}: {a.percentage_impact:+.2f}%" for a in applied]
    return "Adjustments applied: " + "; ".join(parts)


class ComparabilityOrchestrator:
    """Runs the adjustment calculators and builds the comparability analysis.

    Holds no mutable state: the configuration and the calculators are
    injected once at construction, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        config: ComparabilityConfig | None = None,
        *,
        working_capital: WorkingCapitalAdjustment | None = None,
        risk: RiskAdjustment | None = None,
        capacity: CapacityUtilizationAdjustment | None = None,
        geographic: GeographicAdjustment | None = None,
        accounting: AccountingReconciler | None = None,
        materiality_gate: MaterialityGate | None = None,
        compliance_evaluator: ArmLengthComplianceEvaluator | None = None,
    ):
        self.config = config or ComparabilityConfig()
        self._working_capital = working_capital or WorkingCapitalAdjustment()
        self._risk = risk or RiskAdjustment()
        self._capacity = capacity or CapacityUtilizationAdjustment()
        self._geographic = geographic or GeographicAdjustment()
        self._accounting = accounting or AccountingReconciler()
        self._gate = materiality_gate or MaterialityGate()
        self._compliance = compliance_evaluator or ArmLengthComplianceEvaluator()

    # =========================================================================
    # PER COMPARABLE
    # =========================================================================

    def apply_all_adjustments(
        self,
        tested_party: TestedPartyData,
        comparable: ComparableEntity,
        adjustment_types: Iterable[AdjustmentType | str],
        interest_rate: float | None = None,
    ) -> AdjustedComparable:
        """Apply the selected adjustments to one comparable.

        Args:
            tested_party: Tested party
            comparable: Comparable to adjust
            adjustment_types: Adjustment types to compute
            interest_rate: Working capital interest rate (default: config)

        Returns:
            AdjustedComparable; with no adjustment types the adjusted
            margin equals the original margin

        Raises:
            InputValidationError: If interest_rate is not a finite number in [0, 1]
            ValueError: If an adjustment type is unknown
        """
        rate = self._resolve_interest_rate(interest_rate)
        selected = normalize_adjustment_types(adjustment_types)
        original_margin = comparable.operating_margin

        results: list[AdjustmentResult] = []
        for adjustment_type in selected:
            amount, methodology = self._compute(adjustment_type, tested_party, comparable, rate)
            results.append(
                self._gate.evaluate(adjustment_type, amount, self.config.pli_type, methodology)
            )

        total_adjustment = sum(r.amount for r in results if r.is_applied)

        return AdjustedComparable(
            original_entity=comparable,
            original_margin=original_margin,
            adjustments=tuple(results),
            total_adjustment=total_adjustment,
            adjusted_margin=original_margin + total_adjustment,
            adjustment_summary=summarize_adjustments(results),
            documentation=tuple(required_documentation(selected)),
        )

    # =========================================================================
    # ANALYSIS
    # =========================================================================

    def perform_comparability_analysis(
        self,
        tested_party: TestedPartyData,
        comparables: Sequence[ComparableEntity],
        adjustment_types: Iterable[AdjustmentType | str],
        interest_rate: float | None = None,
        executor: Executor | None = None,
    ) -> ComparabilityAnalysisResult:
        """Adjust every comparable and benchmark the tested party.

        Args:
            tested_party: Tested party
            comparables: Comparable set (any size, including empty)
            adjustment_types: Adjustment types to compute
            interest_rate: Working capital interest rate (default: config)
            executor: Optional executor for the per-comparable work; output
                order always equals input order

        Returns:
            ComparabilityAnalysisResult (ranges in percent)
        """
        rate = self._resolve_interest_rate(interest_rate)
        selected = normalize_adjustment_types(adjustment_types)
        comparables = list(comparables)

        if len(comparables) < self.config.minimum_comparables:
            logger.warning(
                "Comparable set of %d is below the recommended minimum of %d",
                len(comparables), self.config.minimum_comparables,
            )

        adjust = partial(
            self.apply_all_adjustments,
            tested_party,
            adjustment_types=selected,
            interest_rate=rate,
        )
        if executor is None:
            adjusted = [adjust(c) for c in comparables]
        else:
            adjusted = list(executor.map(adjust, comparables))

        unadjusted_margins = [c.operating_margin * 100 for c in comparables]
        adjusted_margins = [a.adjusted_margin * 100 for a in adjusted]

        unadjusted_range = compute_range(unadjusted_margins)
        adjusted_range = compute_range(adjusted_margins)
        arm_length_range = index_quartiles(sorted(adjusted_margins))

        impact = round_half_away_from_zero(adjusted_range.median - unadjusted_range.median)
        compliance = self._compliance.evaluate(
            tested_party.operating_margin * 100, adjusted_range, adjusted_margins
        )
        tested_party_pli = round_half_away_from_zero(
            compute_pli(tested_party.financials, self.config.pli_type)
        )

        logger.info(
            "Comparability analysis: %d comparables, %s, adjusted median=%.2f%%, "
            "tested party %s (percentile %.2f)",
            len(comparables), PLI_DISPLAY_NAMES[self.config.pli_type], adjusted_range.median,
            compliance.position.value, compliance.percentile,
        )

        return ComparabilityAnalysisResult(
            tested_party=tested_party,
            comparables=tuple(comparables),
            adjusted_comparables=tuple(adjusted),
            pli_type=self.config.pli_type,
            tested_party_pli=tested_party_pli,
            unadjusted_range=unadjusted_range,
            adjusted_range=adjusted_range,
            arm_length_range=arm_length_range,
            total_adjustment_impact=impact,
            recommended_adjustments=tuple(selected),
            documentation_required=tuple(required_documentation(selected)),
            compliance=compliance,
        )

    # =========================================================================
    # CALCULATOR DISPATCH
    # =========================================================================

    def _resolve_interest_rate(self, interest_rate: float | None) -> float:
        if interest_rate is None:
            return self.config.interest_rate
        validate_in_range(interest_rate, "interest_rate", min_value=0.0, max_value=1.0)
        return float(interest_rate)

    def _compute(
        self,
        adjustment_type: AdjustmentType,
        tested_party: TestedPartyData,
        comparable: ComparableEntity,
        interest_rate: float,
    ) -> tuple[float, str]:
        """Signed adjustment (fraction) and methodology of one adjustment type."""
        if adjustment_type is AdjustmentType.WORKING_CAPITAL:
            result = self._working_capital.calculate(
                WorkingCapitalInput(
                    tested_party=_working_capital_party(tested_party),
                    comparable=_working_capital_party(comparable),
                    interest_rate=interest_rate,
                )
            )
            return result.net_adjustment, result.methodology

        if adjustment_type is AdjustmentType.RISK:
            result = self._risk.calculate(
                RiskAdjustmentInput(
                    tested_party=RiskParty(tested_party.operational.risk_profile, tested_party.industry),
                    comparable=RiskParty(comparable.operational.risk_profile, comparable.industry),
                )
            )
            return result.net_adjustment, result.methodology

        if adjustment_type is AdjustmentType.CAPACITY_UTILIZATION:
            result = self._capacity.calculate(
                CapacityAdjustmentInput(
                    tested_party=_capacity_party(tested_party),
                    comparable=_capacity_party(comparable),
                )
            )
            return result.net_adjustment, result.methodology

        if adjustment_type is AdjustmentType.GEOGRAPHIC:
            result = self._geographic.calculate(
                GeographicAdjustmentInput(
                    tested_party_region=tested_party.region,
                    comparable_region=comparable.region,
                    labor_cost_weight=self.config.labor_cost_weight,
                    overhead_weight=self.config.overhead_weight,
                    market_weight=self.config.market_weight,
                )
            )
            return result.net_adjustment, result.methodology

        if adjustment_type is AdjustmentType.ACCOUNTING:
            result = self._accounting.reconcile(
                AccountingReconciliationInput(
                    tested_party_standard=tested_party.accounting_standard,
                    comparable_standard=comparable.accounting_standard,
                    items=comparable.accounting_items,
                )
            )
            # Monetary restatement as a margin impact on the comparable's cost base
            amount = safe_divide(
                result.net_adjustment, comparable.financials.operating_expenses, fallback=0.0
            )
            return amount, result.methodology

        raise ValueError(f"Unknown adjustment type: {adjustment_type!r}")


def _working_capital_party(entity: ComparableEntity) -> WorkingCapitalParty:
    financials = entity.financials
    return WorkingCapitalParty(
        receivable_days=days_outstanding(financials.trade_receivables, financials.revenue),
        payable_days=days_outstanding(financials.trade_payables, financials.cost_of_sales),
        inventory_days=days_outstanding(financials.inventory, financials.cost_of_sales),
        revenue=financials.revenue,
        cost_of_sales=financials.cost_of_sales,
    )


def _capacity_party(entity: ComparableEntity) -> CapacityParty:
    return CapacityParty(
        actual_utilization=entity.operational.capacity_utilization,
        operating_cost=entity.financials.total_operating_cost,
        industry=entity.industry,
    )
