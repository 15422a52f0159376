"""Tests for the static adjustment parameter tables."""

from dataclasses import fields

import pytest

from src.adjustments.parameters import (
    ADJUSTMENT_DOCUMENTATION,
    DEFAULT_PLI_THRESHOLD,
    GEOGRAPHIC_FACTORS,
    INDUSTRY_CAPACITY_PARAMETERS,
    CapacityParameters,
    GeographicFactor,
    PLIThreshold,
    RISK_ADJUSTMENT_FACTORS,
    RISK_LEVEL_MULTIPLIERS,
    get_pli_threshold,
    required_documentation,
)
from src.core.domain import AdjustmentType, IndustryType, PLIType, RiskLevel, RiskType


class TestTableCoverage:
    def test_every_risk_type_has_a_factor(self) -> None:
        assert [f.risk_type for f in RISK_ADJUSTMENT_FACTORS] == list(RiskType)

    def test_risk_weights_sum_to_one(self) -> None:
        assert sum(f.weight for f in RISK_ADJUSTMENT_FACTORS) == pytest.approx(1.0)

    def test_risk_ranges_symmetric(self) -> None:
        for factor in RISK_ADJUSTMENT_FACTORS:
            assert factor.range_min == -factor.range_max

    def test_every_level_has_a_multiplier(self) -> None:
        assert set(RISK_LEVEL_MULTIPLIERS) == set(RiskLevel)

    def test_every_industry_has_capacity_parameters(self) -> None:
        assert set(INDUSTRY_CAPACITY_PARAMETERS) == set(IndustryType)
        for params in INDUSTRY_CAPACITY_PARAMETERS.values():
            assert 0 < params.normal_utilization <= 1
            assert 0 < params.fixed_cost_percentage < 1

    def test_every_adjustment_type_documented(self) -> None:
        assert set(ADJUSTMENT_DOCUMENTATION) == set(AdjustmentType)

    def test_india_is_the_geographic_base(self) -> None:
        india = GEOGRAPHIC_FACTORS["India"]
        assert (india.labor_cost_index, india.overhead_cost_index, india.market_size_index) == (100, 100, 100)
        assert len(GEOGRAPHIC_FACTORS) == 10

    def test_rows_carry_only_the_columns_the_calculators_read(self) -> None:
        assert [f.name for f in fields(CapacityParameters)] == ["normal_utilization", "fixed_cost_percentage"]
        assert [f.name for f in fields(GeographicFactor)] == [
            "labor_cost_index", "overhead_cost_index", "market_size_index"
        ]
        assert [f.name for f in fields(PLIThreshold)] == [
            "materiality_threshold", "max_reasonable_adjustment"
        ]


class TestPLIThresholds:
    def test_known_pli(self) -> None:
        threshold = get_pli_threshold(PLIType.BERRY_RATIO)
        assert threshold.materiality_threshold == 0.05
        assert threshold.max_reasonable_adjustment == 0.20

    def test_pli_without_entry_uses_default(self) -> None:
        assert get_pli_threshold(PLIType.OP_TA) is DEFAULT_PLI_THRESHOLD
        assert DEFAULT_PLI_THRESHOLD.materiality_threshold == 0.005
        assert DEFAULT_PLI_THRESHOLD.max_reasonable_adjustment == 0.10


class TestRequiredDocumentation:
    def test_single_type(self) -> None:
        assert required_documentation([AdjustmentType.RISK]) == list(
            ADJUSTMENT_DOCUMENTATION[AdjustmentType.RISK]
        )

    def test_order_preserving_without_duplicates(self) -> None:
        docs = required_documentation(
            [AdjustmentType.GEOGRAPHIC, AdjustmentType.WORKING_CAPITAL, AdjustmentType.GEOGRAPHIC]
        )
        assert docs[0] == "Geographic market study"
        assert docs[3] == "Working capital calculation sheet"
        assert len(docs) == len(set(docs)) == 6

    def test_empty(self) -> None:
        assert required_documentation([]) == []
