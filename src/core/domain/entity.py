"""
Entity: Tested party and comparable company records

Immutable Pydantic models for the records the engine benchmarks:
financial profile, operational profile (capacity, risk assumptions),
comparable entity and tested party.

Numeric fields are strict and finite: a string, a bool or NaN where an
amount is expected raises pydantic.ValidationError instead of being coerced.
Internal consistency (gross_profit == revenue - cost_of_sales) is NOT
validated; the engine only reads the fields it needs.
"""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class IndustryType(str, Enum):
    """Industry classification used for capacity and risk benchmarks."""

    MANUFACTURING = "manufacturing"
    SERVICES = "services"
    TRADING = "trading"
    IT_ITES = "it_ites"
    PHARMACEUTICALS = "pharmaceuticals"
    AUTOMOTIVE = "automotive"
    FINANCIAL_SERVICES = "financial_services"
    RETAIL = "retail"
    FMCG = "fmcg"
    TELECOM = "telecom"


class RiskType(str, Enum):
    """Functional risk categories of the FAR analysis."""

    MARKET = "market_risk"
    INVENTORY = "inventory_risk"
    CREDIT = "credit_risk"
    FOREIGN_EXCHANGE = "foreign_exchange_risk"
    PRODUCT_LIABILITY = "product_liability_risk"
    WARRANTY = "warranty_risk"
    R_AND_D = "r_and_d_risk"
    BUSINESS_CONTINUITY = "business_continuity_risk"


class RiskLevel(str, Enum):
    """Qualitative intensity of a borne risk."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AccountingStandard(str, Enum):
    """Accounting framework of the reported financials."""

    IND_AS = "ind_as"
    IGAAP = "igaap"
    US_GAAP = "us_gaap"
    IFRS = "ifrs"


def _amount(description: str):
    return Field(..., ge=0, strict=True, allow_inf_nan=False, description=description)


# =============================================================================
# NESTED MODELS
# =============================================================================


class FinancialProfile(BaseModel):
    """
    Financial statements of one entity for one financial year.

    All monetary fields are non-negative.
    """

    revenue: float = _amount("Operating revenue")
    cost_of_sales: float = _amount("Cost of sales")
    gross_profit: float = _amount("Gross profit")
    operating_expenses: float = _amount("Operating expenses")
    operating_profit: float = _amount("Operating profit")
    total_assets: float = _amount("Total assets")
    current_assets: float = _amount("Current assets")
    current_liabilities: float = _amount("Current liabilities")
    trade_receivables: float = _amount("Trade receivables")
    trade_payables: float = _amount("Trade payables")
    inventory: float = _amount("Inventory")
    fixed_assets: float = _amount("Fixed assets")

    model_config = {"frozen": True}

    @property
    def capital_employed(self) -> float:
        """Total assets less current liabilities, floored at zero."""
        return max(self.total_assets - self.current_liabilities, 0.0)

    @property
    def total_operating_cost(self) -> float:
        """Cost of sales plus operating expenses."""
        return self.cost_of_sales + self.operating_expenses


class RiskAssumption(BaseModel):
    """
    One risk category as allocated to an entity.

    Only a risk that is assumed AND not mitigated counts as borne.
    """

    risk_type: RiskType = Field(..., description="Risk category")
    assumed: bool = Field(..., strict=True, description="Risk contractually assumed")
    mitigated: bool = Field(False, strict=True, description="Risk mitigated or passed on")
    level: RiskLevel = Field(RiskLevel.MEDIUM, description="Qualitative risk level")

    model_config = {"frozen": True}

    @property
    def is_borne(self) -> bool:
        """True if the entity actually bears the risk."""
        return self.assumed and not self.mitigated


class OperationalProfile(BaseModel):
    """Capacity and risk data of one entity."""

    capacity_utilization: float = Field(
        ..., ge=0, le=1, strict=True, allow_inf_nan=False, description="Actual utilization (0-1)"
    )
    risk_profile: tuple[RiskAssumption, ...] = Field(
        default=(), description="Risk assumptions by category"
    )
    employee_count: int | None = Field(None, ge=0, strict=True, description="Headcount")
    years_in_business: int | None = Field(None, ge=0, strict=True, description="Age of the business")

    model_config = {"frozen": True}


class AccountingLineItem(BaseModel):
    """
    One reconciling item between two accounting standards.

    adjusted_value None means "not restated": the comparable value stands.
    """

    item: str = Field(..., min_length=1, description="Line item (e.g. 'Depreciation')")
    tested_party_value: float = Field(..., strict=True, allow_inf_nan=False)
    comparable_value: float = Field(..., strict=True, allow_inf_nan=False)
    adjusted_value: float | None = Field(None, strict=True, allow_inf_nan=False)
    adjustment_reason: str = Field("", description="Why the item was restated")

    model_config = {"frozen": True}

    @property
    def effective_adjusted_value(self) -> float:
        """Restated value, defaulting to the comparable value."""
        if self.adjusted_value is None:
            return self.comparable_value
        return self.adjusted_value


# =============================================================================
# ENTITY MODELS
# =============================================================================


class ComparableEntity(BaseModel):
    """
    An independent company used as a benchmark.

    Comparable datasets arrive already normalized from the persistence layer.
    """

    name: str = Field(..., min_length=1, description="Company name")
    financial_year: str = Field(..., min_length=1, description="Financial year (e.g. '2023-24')")
    industry: IndustryType = Field(..., description="Industry classification")
    region: str = Field(..., min_length=1, description="Country/region of operation")
    financials: FinancialProfile = Field(..., description="Financial statements")
    operational: OperationalProfile = Field(..., description="Capacity and risk data")
    accounting_standard: AccountingStandard = Field(..., description="Reporting framework")
    accounting_items: tuple[AccountingLineItem, ...] = Field(
        default=(), description="Reconciling items against the tested party's standard"
    )

    model_config = {"frozen": True}

    @property
    def operating_margin(self) -> float:
        """
        Operating profit over operating expenses (fraction).

        Zero operating expenses resolve to a neutral 0.0.
        """
        if self.financials.operating_expenses == 0:
            return 0.0
        return self.financials.operating_profit / self.financials.operating_expenses


class TestedPartyData(ComparableEntity):
    """The related-party participant whose pricing is examined."""

    # Keeps pytest from collecting the model as a test class
    __test__: ClassVar[bool] = False

    transaction_value: float = Field(
        ..., ge=0, strict=True, allow_inf_nan=False, description="Value of the controlled transaction"
    )
    related_party_percentage: float = Field(
        ..., ge=0, le=100, strict=True, allow_inf_nan=False, description="Share of related-party revenue (%)"
    )
