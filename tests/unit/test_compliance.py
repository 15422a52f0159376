"""Tests for the Arm's-Length Compliance Evaluator."""

import pytest

from src.benchmarking.compliance import ArmLengthComplianceEvaluator
from src.core.domain import CompliancePosition, StatisticalRange
from src.core.math.numerical_safeguards import InputValidationError


@pytest.fixture
def evaluator() -> ArmLengthComplianceEvaluator:
    return ArmLengthComplianceEvaluator()


@pytest.fixture
def benchmark_range() -> StatisticalRange:
    return StatisticalRange(
        count=6,
        min=10.0,
        q1=12.5,
        median=15.0,
        q3=17.5,
        max=20.0,
        mean=15.0,
        interquartile_range=5.0,
        percentile_35=13.5,
        percentile_65=16.5,
    )


class TestArmLengthComplianceEvaluator:
    def test_below_range(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(8.0, benchmark_range)

        assert result.position is CompliancePosition.BELOW
        assert not result.compliant
        assert result.adjustment_required == 7.00
        assert result.explanation == (
            "Tested party margin of 8.00% is below the interquartile range "
            "(12.50% - 17.50%). An adjustment to the median of 15.00% may be required."
        )

    def test_above_range(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(19.0, benchmark_range)

        assert result.position is CompliancePosition.ABOVE
        assert result.compliant
        assert result.adjustment_required == 0
        assert "above the interquartile range" in result.explanation
        assert "No adjustment required" in result.explanation

    def test_within_range(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(14.0, benchmark_range)

        assert result.position is CompliancePosition.WITHIN
        assert result.compliant
        assert result.adjustment_required == 0
        assert result.explanation.endswith("The transaction is at arm's length.")

    @pytest.mark.parametrize("margin", [12.5, 17.5])
    def test_bounds_are_within(self, evaluator, benchmark_range, margin: float) -> None:
        assert evaluator.evaluate(margin, benchmark_range).position is CompliancePosition.WITHIN

    def test_required_adjustment_rounded(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(10.125, benchmark_range)
        assert result.adjustment_required == 4.88

    def test_empty_range(self, evaluator) -> None:
        result = evaluator.evaluate(0.0, StatisticalRange())
        assert result.position is CompliancePosition.WITHIN

    def test_non_numeric_margin_rejected(self, evaluator, benchmark_range) -> None:
        with pytest.raises(InputValidationError):
            evaluator.evaluate("8", benchmark_range)


class TestPositionDetails:
    MARGINS = [10.0, 12.0, 14.0, 16.0, 18.0, 20.0]

    def test_percentile_rank_of_margin(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(14.0, benchmark_range, self.MARGINS)
        assert result.percentile == 50.0

    def test_percentile_none_without_margins(self, evaluator, benchmark_range) -> None:
        assert evaluator.evaluate(14.0, benchmark_range).percentile is None

    def test_below_range_percentile(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(8.0, benchmark_range, self.MARGINS)
        assert result.percentile == 0.0
        assert not result.within_interquartile_range
        assert not result.within_percentile_band

    def test_inside_iqr_outside_band(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(13.0, benchmark_range, self.MARGINS)
        assert result.within_interquartile_range
        assert not result.within_percentile_band
        assert result.position is CompliancePosition.WITHIN

    @pytest.mark.parametrize("margin", [13.5, 15.0, 16.5])
    def test_inside_percentile_band(self, evaluator, benchmark_range, margin: float) -> None:
        result = evaluator.evaluate(margin, benchmark_range, self.MARGINS)
        assert result.within_percentile_band
        assert result.within_interquartile_range

    def test_above_range_flags(self, evaluator, benchmark_range) -> None:
        result = evaluator.evaluate(19.0, benchmark_range, self.MARGINS)
        assert result.percentile == pytest.approx(83.33)
        assert not result.within_interquartile_range

    def test_malformed_comparable_margin_rejected(self, evaluator, benchmark_range) -> None:
        with pytest.raises(InputValidationError):
            evaluator.evaluate(14.0, benchmark_range, [10.0, "12"])
