"""Shared fixtures: tested party, comparable and risk profiles."""

import pytest

from src.core.domain import (
    ComparableEntity,
    RiskAssumption,
    RiskLevel,
    RiskType,
    TestedPartyData,
)
from tests.factories import make_comparable, make_tested_party


@pytest.fixture
def tested_party() -> TestedPartyData:
    return make_tested_party()


@pytest.fixture
def comparable() -> ComparableEntity:
    return make_comparable()


@pytest.fixture
def entrepreneur_risks() -> tuple[RiskAssumption, ...]:
    """Full-fledged risk profile: every category assumed, none mitigated."""
    return tuple(
        RiskAssumption(risk_type=risk_type, assumed=True, level=RiskLevel.MEDIUM)
        for risk_type in RiskType
    )
