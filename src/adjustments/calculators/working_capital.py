"""Working Capital Adjustment

Normalizes the comparable's margin for the financing burden of its
receivables, payables and inventory relative to the tested party.

For each party:
- net_wc_days = receivable_days - payable_days + inventory_days
- working_capital_required = net_wc_days * revenue / 365
- interest_cost = working_capital_required * interest_rate
- wc_factor = interest_cost / revenue

net_adjustment = tested_party_factor - comparable_factor (signed fraction,
added to the comparable's margin). The result is antisymmetric in the two
parties. Zero revenue gives a neutral factor of 0.
"""

import logging
from dataclasses import dataclass
from typing import Final

from src.adjustments.parameters import DAYS_IN_YEAR
from src.core.math.numerical_safeguards import safe_divide, validate_in_range, validate_number

logger = logging.getLogger(__name__)


METHODOLOGY: Final[str] = (
    "Working capital adjustment computed using the Mentor Graphics methodology. "
    "Net working capital = Receivables + Inventory - Payables. "
    "Adjustment = (WC Days x Daily Revenue x Interest Rate) / Revenue"
)


def days_outstanding(balance: float, turnover: float) -> float:
    """
    Balance expressed in days of turnover: balance / turnover * 365.

    Zero turnover resolves to 0 days.
    """
    return safe_divide(balance, turnover, fallback=0.0) * DAYS_IN_YEAR


# =============================================================================
# INPUT / RESULT
# =============================================================================


@dataclass(frozen=True)
class WorkingCapitalParty:
    """Working capital profile of one party."""

    receivable_days: float
    payable_days: float
    inventory_days: float
    revenue: float
    cost_of_sales: float

    def __post_init__(self) -> None:
        for name in ("receivable_days", "payable_days", "inventory_days"):
            validate_number(getattr(self, name), name)
        validate_in_range(self.revenue, "revenue", min_value=0.0)
        validate_in_range(self.cost_of_sales, "cost_of_sales", min_value=0.0)

    @property
    def net_working_capital_days(self) -> float:
        return self.receivable_days - self.payable_days + self.inventory_days


@dataclass(frozen=True)
class WorkingCapitalInput:
    """Both parties and the annual interest rate (fraction)."""

    tested_party: WorkingCapitalParty
    comparable: WorkingCapitalParty
    interest_rate: float

    def __post_init__(self) -> None:
        validate_number(self.interest_rate, "interest_rate")


@dataclass(frozen=True)
class PartyWorkingCapital:
    """Intermediate figures of one party (for the audit narrative)."""

    net_wc_days: float
    working_capital_required: float
    interest_cost: float
    wc_factor: float


@dataclass(frozen=True)
class WorkingCapitalResult:
    """Result of the working capital adjustment."""

    tested_party: PartyWorkingCapital
    comparable: PartyWorkingCapital
    day_difference: float  # tested party net days - comparable net days
    net_adjustment: float  # signed fraction
    methodology: str

    @property
    def tested_party_factor(self) -> float:
        return self.tested_party.wc_factor

    @property
    def comparable_factor(self) -> float:
        return self.comparable.wc_factor


# =============================================================================
# CALCULATOR
# =============================================================================


class WorkingCapitalAdjustment:
    """Working capital adjustment calculator (stateless)."""

    def calculate(self, data: WorkingCapitalInput) -> WorkingCapitalResult:
        """Compute the working capital adjustment.

        Args:
            data: both parties' working capital profiles and the interest rate

        Returns:
            WorkingCapitalResult with per-party figures and net adjustment
        """
        tested = self._party_figures(data.tested_party, data.interest_rate)
        comparable = self._party_figures(data.comparable, data.interest_rate)

        net_adjustment = tested.wc_factor - comparable.wc_factor

        methodology = METHODOLOGY
        if data.tested_party.revenue == 0 or data.comparable.revenue == 0:
            methodology += ". Zero revenue: the affected party's factor is taken as 0"

        logger.debug(
            "working capital: tp_days=%.2f comp_days=%.2f net=%.6f",
            tested.net_wc_days, comparable.net_wc_days, net_adjustment,
        )

        return WorkingCapitalResult(
            tested_party=tested,
            comparable=comparable,
            day_difference=tested.net_wc_days - comparable.net_wc_days,
            net_adjustment=net_adjustment,
            methodology=methodology,
        )

    def calculate_batch(
        self,
        tested_party: WorkingCapitalParty,
        comparables: list[WorkingCapitalParty],
        interest_rate: float,
    ) -> list[WorkingCapitalResult]:
        """One result per comparable, in input order."""
        return [
            self.calculate(
                WorkingCapitalInput(
                    tested_party=tested_party,
                    comparable=comparable,
                    interest_rate=interest_rate,
                )
            )
            for comparable in comparables
        ]

    @staticmethod
    def _party_figures(party: WorkingCapitalParty, interest_rate: float) -> PartyWorkingCapital:
        net_days = party.net_working_capital_days
        daily_revenue = party.revenue / DAYS_IN_YEAR
        wc_required = net_days * daily_revenue
        interest_cost = wc_required * interest_rate

        return PartyWorkingCapital(
            net_wc_days=net_days,
            working_capital_required=wc_required,
            interest_cost=interest_cost,
            wc_factor=safe_divide(interest_cost, party.revenue, fallback=0.0),
        )
