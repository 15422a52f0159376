"""
PLI: Profit Level Indicators

The PLI selects the materiality thresholds of the adjustment gate and is
the reported tested party indicator of an analysis. compute_pli is a pure
function of a FinancialProfile; a non-positive denominator yields a neutral
0.0. The benchmarked range itself is always built on OP/OC margins.
"""

from enum import Enum

from .entity import FinancialProfile


class PLIType(str, Enum):
    """Profit level indicators supported by the engine."""

    OP_OC = "OP/OC"  # Operating Profit / Operating Cost
    OP_OR = "OP/OR"  # Operating Profit / Operating Revenue
    OP_TA = "OP/TA"  # Operating Profit / Total Assets
    OP_CE = "OP/CE"  # Operating Profit / Capital Employed (ROCE)
    BERRY_RATIO = "BERRY"  # Gross Profit / Operating Expenses
    NET_COST_PLUS = "NCP"  # (Revenue - Total Cost) / Total Cost


PLI_DISPLAY_NAMES: dict[PLIType, str] = {
    PLIType.OP_OC: "Operating Profit/Operating Cost (OP/OC)",
    PLIType.OP_OR: "Operating Profit/Operating Revenue (OP/OR)",
    PLIType.OP_TA: "Operating Profit/Total Assets (OP/TA)",
    PLIType.OP_CE: "Return on Capital Employed (ROCE)",
    PLIType.BERRY_RATIO: "Berry Ratio (GP/Operating Expenses)",
    PLIType.NET_COST_PLUS: "Net Cost Plus (NCP)",
}


def _ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def compute_pli(financials: FinancialProfile, pli_type: PLIType) -> float:
    """
    PLI value of one financial profile.

    Percentage indicators are returned in percent (15.0 == 15%); the Berry
    ratio is a plain ratio.

    Args:
        financials: Financial statements
        pli_type: Indicator to compute

    Returns:
        PLI value, 0.0 when its denominator is not positive
    """
    if pli_type is PLIType.OP_OC:
        return _ratio(financials.operating_profit, financials.operating_expenses) * 100
    if pli_type is PLIType.OP_OR:
        return _ratio(financials.operating_profit, financials.revenue) * 100
    if pli_type is PLIType.OP_TA:
        return _ratio(financials.operating_profit, financials.total_assets) * 100
    if pli_type is PLIType.OP_CE:
        return _ratio(financials.operating_profit, financials.capital_employed) * 100
    if pli_type is PLIType.BERRY_RATIO:
        return _ratio(financials.gross_profit, financials.operating_expenses)
    if pli_type is PLIType.NET_COST_PLUS:
        total_cost = financials.total_operating_cost
        return _ratio(financials.revenue - total_cost, total_cost) * 100

    raise ValueError(f"Unknown PLI type: {pli_type!r}")
