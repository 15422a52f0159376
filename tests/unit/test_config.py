"""Tests for ComparabilityConfig and the logging helper."""

import logging
from dataclasses import FrozenInstanceError

import pytest

import src.core.utils.logging as logging_utils
from src.core.config import DEFAULT_INTEREST_RATE, ComparabilityConfig
from src.core.domain import PLIType
from src.core.math.numerical_safeguards import InputValidationError


class TestComparabilityConfig:
    def test_defaults(self) -> None:
        config = ComparabilityConfig()
        assert config.pli_type is PLIType.OP_OC
        assert config.interest_rate == DEFAULT_INTEREST_RATE == 0.10
        assert (config.labor_cost_weight, config.overhead_weight, config.market_weight) == (0.50, 0.30, 0.20)
        assert config.minimum_comparables == 3

    def test_frozen(self) -> None:
        config = ComparabilityConfig()
        with pytest.raises(FrozenInstanceError):
            config.interest_rate = 0.2

    def test_weights_above_one_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            ComparabilityConfig(labor_cost_weight=0.8)

    def test_negative_interest_rate_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            ComparabilityConfig(interest_rate=-0.01)

    def test_pli_must_be_enum(self) -> None:
        with pytest.raises(ValueError):
            ComparabilityConfig(pli_type="OP/OC")

    def test_negative_minimum_rejected(self) -> None:
        with pytest.raises(ValueError):
            ComparabilityConfig(minimum_comparables=-1)


class TestFromEnv:
    def test_no_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("TP_PLI_TYPE", "TP_INTEREST_RATE", "TP_MINIMUM_COMPARABLES"):
            monkeypatch.delenv(name, raising=False)
        assert ComparabilityConfig.from_env() == ComparabilityConfig()

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TP_PLI_TYPE", "berry")
        monkeypatch.setenv("TP_INTEREST_RATE", " 0.085 ")
        monkeypatch.setenv("TP_MINIMUM_COMPARABLES", "5")

        config = ComparabilityConfig.from_env()

        assert config.pli_type is PLIType.BERRY_RATIO
        assert config.interest_rate == 0.085
        assert config.minimum_comparables == 5

    @pytest.mark.parametrize("value, expected", [("OP/OR", PLIType.OP_OR), ("op_ce", PLIType.OP_CE)])
    def test_pli_by_value_or_name(self, monkeypatch: pytest.MonkeyPatch, value, expected) -> None:
        monkeypatch.setenv("TP_PLI_TYPE", value)
        assert ComparabilityConfig.from_env().pli_type is expected

    def test_unparsable_values_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TP_PLI_TYPE", "EBITDA")
        monkeypatch.setenv("TP_INTEREST_RATE", "ten percent")
        monkeypatch.setenv("TP_MINIMUM_COMPARABLES", "many")

        assert ComparabilityConfig.from_env() == ComparabilityConfig()

    @pytest.mark.parametrize("value", ["nan", "inf", "-Infinity"])
    def test_non_finite_interest_rate_ignored(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.delenv("TP_PLI_TYPE", raising=False)
        monkeypatch.delenv("TP_MINIMUM_COMPARABLES", raising=False)
        monkeypatch.setenv("TP_INTEREST_RATE", value)

        assert ComparabilityConfig.from_env().interest_rate == DEFAULT_INTEREST_RATE


class TestConfigureLogging:
    def test_installs_rich_handler_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(logging_utils, "_LOGGER_CONFIGURED", False)
        monkeypatch.setattr(logging_utils.logging, "basicConfig", lambda **kw: calls.append(kw))

        logging_utils.configure_logging(debug=True)
        logging_utils.configure_logging()

        assert len(calls) == 1
        assert calls[0]["level"] == logging.DEBUG
        assert type(calls[0]["handlers"][0]).__name__ == "RichHandler"

    def test_explicit_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(logging_utils, "_LOGGER_CONFIGURED", False)
        monkeypatch.setattr(logging_utils.logging, "basicConfig", lambda **kw: calls.append(kw))

        logging_utils.configure_logging(level=logging.WARNING)

        assert calls[0]["level"] == logging.WARNING
