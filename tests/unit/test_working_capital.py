"""
Tests for the Working Capital Adjustment

Covers:
- Day-count derivation
- Per-party factors and net adjustment
- Antisymmetry under party swap
- Zero revenue neutrality
- Batch computation
"""

import pytest

from src.adjustments.calculators.working_capital import (
    WorkingCapitalAdjustment,
    WorkingCapitalInput,
    WorkingCapitalParty,
    days_outstanding,
)
from src.core.math.numerical_safeguards import InputValidationError


@pytest.fixture
def calculator() -> WorkingCapitalAdjustment:
    return WorkingCapitalAdjustment()


@pytest.fixture
def tested() -> WorkingCapitalParty:
    # net days = 60 - 30 + 40 = 70
    return WorkingCapitalParty(
        receivable_days=60.0,
        payable_days=30.0,
        inventory_days=40.0,
        revenue=1_000_000.0,
        cost_of_sales=600_000.0,
    )


@pytest.fixture
def comparable() -> WorkingCapitalParty:
    # net days = 45 - 45 + 30 = 30
    return WorkingCapitalParty(
        receivable_days=45.0,
        payable_days=45.0,
        inventory_days=30.0,
        revenue=2_000_000.0,
        cost_of_sales=1_500_000.0,
    )


class TestDaysOutstanding:
    def test_balance_over_turnover(self) -> None:
        assert days_outstanding(100_000.0, 365_000.0) == pytest.approx(100.0)

    def test_zero_turnover_gives_zero_days(self) -> None:
        assert days_outstanding(100_000.0, 0.0) == 0.0


class TestWorkingCapitalParty:
    def test_net_days(self, tested: WorkingCapitalParty) -> None:
        assert tested.net_working_capital_days == 70.0

    def test_negative_revenue_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            WorkingCapitalParty(10.0, 10.0, 10.0, revenue=-1.0, cost_of_sales=0.0)

    def test_non_numeric_days_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            WorkingCapitalParty("10", 10.0, 10.0, revenue=1.0, cost_of_sales=1.0)


class TestWorkingCapitalAdjustment:
    def test_factors_and_net_adjustment(
        self,
        calculator: WorkingCapitalAdjustment,
        tested: WorkingCapitalParty,
        comparable: WorkingCapitalParty,
    ) -> None:
        result = calculator.calculate(WorkingCapitalInput(tested, comparable, interest_rate=0.10))

        # factor = net_days / 365 * rate
        assert result.tested_party_factor == pytest.approx(70 / 365 * 0.10)
        assert result.comparable_factor == pytest.approx(30 / 365 * 0.10)
        assert result.net_adjustment == pytest.approx(40 / 365 * 0.10)
        assert result.day_difference == pytest.approx(40.0)

    def test_intermediate_figures(
        self,
        calculator: WorkingCapitalAdjustment,
        tested: WorkingCapitalParty,
        comparable: WorkingCapitalParty,
    ) -> None:
        result = calculator.calculate(WorkingCapitalInput(tested, comparable, interest_rate=0.10))

        assert result.tested_party.net_wc_days == 70.0
        assert result.tested_party.working_capital_required == pytest.approx(70 * 1_000_000 / 365)
        assert result.tested_party.interest_cost == pytest.approx(70 * 1_000_000 / 365 * 0.10)
        assert "Mentor Graphics" in result.methodology

    def test_antisymmetric_under_swap(
        self,
        calculator: WorkingCapitalAdjustment,
        tested: WorkingCapitalParty,
        comparable: WorkingCapitalParty,
    ) -> None:
        forward = calculator.calculate(WorkingCapitalInput(tested, comparable, interest_rate=0.12))
        backward = calculator.calculate(WorkingCapitalInput(comparable, tested, interest_rate=0.12))

        assert forward.net_adjustment == pytest.approx(-backward.net_adjustment)

    def test_identical_parties_zero(
        self, calculator: WorkingCapitalAdjustment, tested: WorkingCapitalParty
    ) -> None:
        result = calculator.calculate(WorkingCapitalInput(tested, tested, interest_rate=0.10))
        assert result.net_adjustment == 0.0

    def test_zero_revenue_neutral_factor(
        self, calculator: WorkingCapitalAdjustment, tested: WorkingCapitalParty
    ) -> None:
        idle = WorkingCapitalParty(0.0, 0.0, 0.0, revenue=0.0, cost_of_sales=0.0)
        result = calculator.calculate(WorkingCapitalInput(tested, idle, interest_rate=0.10))

        assert result.comparable_factor == 0.0
        assert result.net_adjustment == pytest.approx(result.tested_party_factor)
        assert "Zero revenue" in result.methodology

    def test_non_numeric_interest_rate_rejected(
        self, tested: WorkingCapitalParty, comparable: WorkingCapitalParty
    ) -> None:
        with pytest.raises(InputValidationError):
            WorkingCapitalInput(tested, comparable, interest_rate="0.1")

    def test_batch_preserves_order(
        self,
        calculator: WorkingCapitalAdjustment,
        tested: WorkingCapitalParty,
        comparable: WorkingCapitalParty,
    ) -> None:
        results = calculator.calculate_batch(tested, [comparable, tested], interest_rate=0.10)

        assert len(results) == 2
        assert results[0].net_adjustment == pytest.approx(40 / 365 * 0.10)
        assert results[1].net_adjustment == 0.0
