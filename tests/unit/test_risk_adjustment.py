"""
Tests for the Risk Adjustment

Covers:
- Contribution rules (tested party only / comparable only / both / neither)
- Mitigated risks are not borne
- Risk scores with level multipliers
- Per-category breakdown
"""

import pytest

from src.adjustments.calculators.risk import RiskAdjustment, RiskAdjustmentInput, RiskParty
from src.core.domain import RiskAssumption, RiskLevel, RiskType


@pytest.fixture
def calculator() -> RiskAdjustment:
    return RiskAdjustment()


def _party(*risks: RiskAssumption) -> RiskParty:
    return RiskParty(risk_profile=tuple(risks))


def _borne(risk_type: RiskType, level: RiskLevel = RiskLevel.MEDIUM) -> RiskAssumption:
    return RiskAssumption(risk_type=risk_type, assumed=True, level=level)


class TestRiskAdjustment:
    def test_identical_profiles_zero(self, calculator: RiskAdjustment, entrepreneur_risks) -> None:
        party = _party(*entrepreneur_risks)
        result = calculator.calculate(RiskAdjustmentInput(party, party))
        assert result.net_adjustment == 0.0

    def test_empty_profiles_zero(self, calculator: RiskAdjustment) -> None:
        result = calculator.calculate(RiskAdjustmentInput(_party(), _party()))
        assert result.net_adjustment == 0.0
        assert result.risk_score_tested_party == 0.0

    def test_tested_party_bears_market_risk(self, calculator: RiskAdjustment) -> None:
        result = calculator.calculate(
            RiskAdjustmentInput(_party(_borne(RiskType.MARKET)), _party())
        )
        # range_max 3.0 * weight 0.20 = 0.6 points
        assert result.net_adjustment == pytest.approx(0.006)

    def test_comparable_bears_market_risk(self, calculator: RiskAdjustment) -> None:
        result = calculator.calculate(
            RiskAdjustmentInput(_party(), _party(_borne(RiskType.MARKET)))
        )
        assert result.net_adjustment == pytest.approx(-0.006)

    def test_mitigated_risk_ignored(self, calculator: RiskAdjustment) -> None:
        mitigated = RiskAssumption(risk_type=RiskType.CREDIT, assumed=True, mitigated=True)
        result = calculator.calculate(RiskAdjustmentInput(_party(mitigated), _party()))
        assert result.net_adjustment == 0.0

    def test_entrepreneur_against_routine_comparable(
        self, calculator: RiskAdjustment, entrepreneur_risks
    ) -> None:
        result = calculator.calculate(RiskAdjustmentInput(_party(*entrepreneur_risks), _party()))

        expected_points = (
            3.0 * 0.20 + 2.0 * 0.15 + 1.5 * 0.15 + 2.0 * 0.15
            + 1.5 * 0.10 + 1.0 * 0.10 + 2.0 * 0.10 + 1.0 * 0.05
        )
        assert result.net_adjustment == pytest.approx(expected_points / 100)

    def test_antisymmetric_under_swap(self, calculator: RiskAdjustment) -> None:
        a = _party(_borne(RiskType.MARKET), _borne(RiskType.WARRANTY))
        b = _party(_borne(RiskType.INVENTORY))
        forward = calculator.calculate(RiskAdjustmentInput(a, b))
        backward = calculator.calculate(RiskAdjustmentInput(b, a))
        assert forward.net_adjustment == pytest.approx(-backward.net_adjustment)

    def test_risk_scores_use_level_multipliers(self, calculator: RiskAdjustment) -> None:
        tested = _party(_borne(RiskType.MARKET, RiskLevel.HIGH))
        comparable = _party(_borne(RiskType.MARKET, RiskLevel.LOW))
        result = calculator.calculate(RiskAdjustmentInput(tested, comparable))

        assert result.risk_score_tested_party == pytest.approx(0.20 * 1.5 * 100)
        assert result.risk_score_comparable == pytest.approx(0.20 * 0.5 * 100)
        # Both bear the risk: no adjustment regardless of level
        assert result.net_adjustment == 0.0

    def test_full_medium_profile_scores_100(self, calculator: RiskAdjustment, entrepreneur_risks) -> None:
        party = _party(*entrepreneur_risks)
        result = calculator.calculate(RiskAdjustmentInput(party, _party()))
        assert result.risk_score_tested_party == pytest.approx(100.0)

    def test_breakdown_covers_every_category(self, calculator: RiskAdjustment) -> None:
        result = calculator.calculate(
            RiskAdjustmentInput(_party(_borne(RiskType.FOREIGN_EXCHANGE)), _party())
        )

        assert [c.risk_type for c in result.breakdown] == [
            RiskType.MARKET,
            RiskType.INVENTORY,
            RiskType.CREDIT,
            RiskType.FOREIGN_EXCHANGE,
            RiskType.PRODUCT_LIABILITY,
            RiskType.WARRANTY,
            RiskType.R_AND_D,
            RiskType.BUSINESS_CONTINUITY,
        ]
        fx = result.breakdown[3]
        assert fx.tested_party_bears and not fx.comparable_bears
        assert fx.contribution == pytest.approx(0.30)
        assert "FAR analysis" in result.methodology


class TestRiskParty:
    def test_find_first_assumption_of_category(self) -> None:
        market = _borne(RiskType.MARKET)
        party = _party(market, _borne(RiskType.MARKET, RiskLevel.HIGH))
        assert party.find(RiskType.MARKET) == market

    def test_find_missing_category(self) -> None:
        assert _party(_borne(RiskType.MARKET)).find(RiskType.WARRANTY) is None
