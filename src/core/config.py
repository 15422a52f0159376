"""
ComparabilityConfig: Engine configuration

One immutable configuration object is built per process (or per request)
and injected into the orchestrator. Nothing mutates it after construction.
"""

import os
from dataclasses import dataclass
from typing import Final

from src.core.domain.pli import PLIType
from src.core.math.numerical_safeguards import is_valid_float, validate_in_range

# Default opportunity cost of working capital (PLR + margin)
DEFAULT_INTEREST_RATE: Final[float] = 0.10

# Minimum comparable set size callers should enforce
DEFAULT_MINIMUM_COMPARABLES: Final[int] = 3


def _to_float(value: str | None) -> float | None:
    """Parse a finite float env var, returning None on failure."""
    if value is None:
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    return parsed if is_valid_float(parsed) else None


def _to_int(value: str | None) -> int | None:
    """Parse an integer env var, returning None on failure."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _to_pli(value: str | None) -> PLIType | None:
    """Parse a PLI by value ('OP/OC') or name ('OP_OC')."""
    if value is None:
        return None
    cleaned = value.strip()
    for pli in PLIType:
        if cleaned.upper() in (pli.value, pli.name):
            return pli
    return None


@dataclass(frozen=True)
class ComparabilityConfig:
    """Configuration of the comparability engine.

    pli_type selects the materiality/reasonableness thresholds. The
    geographic weights are applied to the labor cost, overhead and market
    size indices and must sum to at most 1.
    """

    pli_type: PLIType = PLIType.OP_OC
    interest_rate: float = DEFAULT_INTEREST_RATE
    labor_cost_weight: float = 0.50
    overhead_weight: float = 0.30
    market_weight: float = 0.20
    minimum_comparables: int = DEFAULT_MINIMUM_COMPARABLES

    def __post_init__(self) -> None:
        if not isinstance(self.pli_type, PLIType):
            raise ValueError(f"pli_type must be a PLIType, got {self.pli_type!r}")
        validate_in_range(self.interest_rate, "interest_rate", min_value=0.0, max_value=1.0)
        for name in ("labor_cost_weight", "overhead_weight", "market_weight"):
            validate_in_range(getattr(self, name), name, min_value=0.0, max_value=1.0)
        validate_in_range(
            self.labor_cost_weight + self.overhead_weight + self.market_weight,
            "geographic weights sum",
            max_value=1.0 + 1e-9,
        )
        if self.minimum_comparables < 0:
            raise ValueError(f"minimum_comparables must be >= 0, got {self.minimum_comparables}")

    @classmethod
    def from_env(cls) -> "ComparabilityConfig":
        """Build a configuration using environment overrides.

        TP_PLI_TYPE, TP_INTEREST_RATE and TP_MINIMUM_COMPARABLES override the
        defaults; unparsable values are ignored.
        """
        defaults = cls()
        pli_type = _to_pli(os.getenv("TP_PLI_TYPE"))
        interest_rate = _to_float(os.getenv("TP_INTEREST_RATE"))
        minimum = _to_int(os.getenv("TP_MINIMUM_COMPARABLES"))

        return cls(
            pli_type=pli_type if pli_type is not None else defaults.pli_type,
            interest_rate=interest_rate if interest_rate is not None else defaults.interest_rate,
            minimum_comparables=minimum if minimum is not None else defaults.minimum_comparables,
        )
