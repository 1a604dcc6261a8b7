# src/dealforge/domain/deals.py
"""
Immutable input records, one per deal type.

Percent fields are expressed as 0-100 (7.0 means 7%). Range checks run when a
model is constructed, which is the host boundary; calculators trust whatever
they are handed and only guard divisions.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Percent = Annotated[float, Field(ge=0.0, le=100.0)]
GrowthPercent = Annotated[float, Field(ge=-100.0, le=100.0)]
Money = Annotated[float, Field(ge=0.0)]


class _DealModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ----------------------------
# Rental
# ----------------------------

class RentalInputs(_DealModel):
    deal_type: Literal["rental"] = "rental"

    purchase_price: Money = Field(..., description="Asking or assumed purchase price")
    closing_costs: Money = 0.0
    rehab_costs: Money = 0.0

    down_payment_percent: Percent = Field(..., description="20.0 means 20% down")
    interest_rate: Percent = Field(..., description="Annual rate, 7.0 for 7% APR")
    loan_term_years: int = Field(..., ge=1, description="Amortization period in years")

    monthly_rent: Money
    other_income: Money = 0.0
    vacancy_rate: Percent = 5.0

    property_tax_annual: Money = 0.0
    insurance_annual: Money = 0.0
    hoa_monthly: Money = 0.0
    maintenance_percent: Percent = 0.0
    capex_percent: Percent = 0.0
    management_percent: Percent = 0.0


# ----------------------------
# BRRRR
# ----------------------------

class BrrrrInputs(_DealModel):
    deal_type: Literal["brrrr"] = "brrrr"

    purchase_price: Money
    closing_costs: Money = 0.0
    rehab_costs: Money = 0.0

    # acquisition (hard money) financing, interest-only
    initial_loan_percent: Percent = Field(..., description="Acquisition LTV on purchase price")
    initial_interest_rate: Percent
    initial_points_percent: Percent = 0.0
    initial_term_months: int = Field(default=12, ge=1)

    rehab_duration_months: int = Field(default=0, ge=0)
    holding_costs_monthly: Money = 0.0

    # refinance into the permanent loan
    after_repair_value: Money
    refinance_ltv: Percent
    refinance_rate: Percent
    refinance_term_years: int = Field(default=30, ge=1)
    refinance_closing_costs: Money = 0.0

    monthly_rent: Money
    other_income: Money = 0.0
    vacancy_rate: Percent = 5.0

    property_tax_annual: Money = 0.0
    insurance_annual: Money = 0.0
    hoa_monthly: Money = 0.0
    maintenance_percent: Percent = 0.0
    capex_percent: Percent = 0.0
    management_percent: Percent = 0.0

    @model_validator(mode="after")
    def _rehab_within_initial_term(self) -> "BrrrrInputs":
        # the hard-money loan must still be outstanding when the refinance closes
        if self.rehab_duration_months > self.initial_term_months:
            raise ValueError("rehab_duration_months cannot exceed initial_term_months")
        return self


# ----------------------------
# Flip
# ----------------------------

class FlipInputs(_DealModel):
    deal_type: Literal["flip"] = "flip"

    purchase_price: Money
    closing_costs_buy_percent: Percent = 0.0
    rehab_costs: Money = 0.0

    after_repair_value: Money
    agent_commission_percent: Percent = 0.0
    closing_costs_sell_percent: Percent = 0.0

    holding_period_months: int = Field(default=6, ge=0)
    holding_costs_monthly: Money = 0.0

    use_loan: bool = False
    loan_to_value_percent: Percent = 0.0
    loan_interest_rate: Percent = 0.0
    loan_points_percent: Percent = 0.0
    include_rehab_in_loan: bool = False


# ----------------------------
# House hack
# ----------------------------

class FinancingType(str, Enum):
    CONVENTIONAL = "conventional"
    FHA = "fha"
    VA = "va"
    CASH = "cash"


class HouseHackInputs(_DealModel):
    deal_type: Literal["house_hack"] = "house_hack"

    purchase_price: Money
    closing_costs: Money = 0.0
    rehab_costs: Money = 0.0

    financing_type: FinancingType = FinancingType.CONVENTIONAL
    down_payment_percent: Percent
    interest_rate: Percent
    loan_term_years: int = Field(default=30, ge=1)
    pmi_rate: Percent = 0.0

    unit_rents: tuple[Money, ...] = Field(..., min_length=2, max_length=4)
    owner_unit: int = Field(default=1, ge=1, description="1-based index of the owner-occupied unit")
    owner_equivalent_rent: Money = Field(
        default=0.0,
        description="Market rent for the owner's unit; also what the owner would pay elsewhere",
    )

    vacancy_rate: Percent = 5.0
    property_tax_annual: Money = 0.0
    insurance_annual: Money = 0.0
    hoa_monthly: Money = 0.0
    utilities_monthly: Money = 0.0
    maintenance_percent: Percent = 0.0
    capex_percent: Percent = 0.0
    management_percent: Percent = 0.0

    @model_validator(mode="after")
    def _owner_unit_in_range(self) -> "HouseHackInputs":
        if self.owner_unit > len(self.unit_rents):
            raise ValueError("owner_unit must reference one of the units")
        return self


# ----------------------------
# Multifamily
# ----------------------------

class UnitMixTier(_DealModel):
    label: str = ""
    count: int = Field(..., ge=0)
    monthly_rent: Money


class MultifamilyInputs(_DealModel):
    deal_type: Literal["multifamily"] = "multifamily"

    purchase_price: Money
    total_units: int = Field(default=0, ge=0, description="Used when unit_mix is empty")
    square_footage: Money = 0.0
    unit_mix: tuple[UnitMixTier, ...] = ()

    # ancillary income, monthly
    laundry_income: Money = 0.0
    parking_income: Money = 0.0
    storage_income: Money = 0.0
    pet_fees: Money = 0.0
    other_income: Money = 0.0

    vacancy_rate: Percent = 5.0
    credit_loss_rate: Percent = 0.0

    use_expense_ratio: bool = True
    expense_ratio: Percent = 45.0

    # itemized, annual
    property_tax_annual: Money = 0.0
    insurance_annual: Money = 0.0
    utilities_annual: Money = 0.0
    repairs_maintenance_annual: Money = 0.0
    management_percent: Percent = 0.0
    payroll_annual: Money = 0.0
    advertising_annual: Money = 0.0
    legal_accounting_annual: Money = 0.0
    landscaping_annual: Money = 0.0
    contract_services_annual: Money = 0.0
    reserves_percent: Percent = 0.0

    down_payment_percent: Percent
    interest_rate: Percent
    amortization_years: int = Field(default=30, ge=1)
    closing_costs_percent: Percent = 0.0
    loan_points_percent: Percent = 0.0

    market_cap_rate: Percent = 0.0


# ----------------------------
# Manufactured housing park
# ----------------------------

class MhParkInputs(_DealModel):
    deal_type: Literal["mh_park"] = "mh_park"

    lot_count: int = Field(..., ge=0)
    avg_lot_rent: Money
    occupancy_rate: Percent = 100.0
    other_income_monthly: Money = 0.0
    expense_ratio: Percent = 35.0

    purchase_price: Money
    down_payment_percent: Percent
    interest_rate: Percent
    amortization_years: int = Field(default=25, ge=1)
    closing_costs_percent: Percent = 0.0

    market_cap_rate: Percent = 0.0


# ----------------------------
# Syndication
# ----------------------------

class WaterfallTier(_DealModel):
    lp_split: Percent
    gp_split: Percent
    irr_hurdle: Percent | None = Field(
        default=None,
        description="LP IRR (percent) that must be cleared before this tier receives cash",
    )

    @model_validator(mode="after")
    def _splits_sum_to_100(self) -> "WaterfallTier":
        if abs(self.lp_split + self.gp_split - 100.0) > 1e-6:
            raise ValueError("lp_split + gp_split must equal 100")
        return self


class CatchUpPolicy(str, Enum):
    NONE = "none"
    # GP takes 100% after the pref until it holds its first-tier share of profits
    FULL = "full"


def _default_tiers() -> tuple[WaterfallTier, ...]:
    return (
        WaterfallTier(lp_split=80.0, gp_split=20.0),
        WaterfallTier(lp_split=70.0, gp_split=30.0, irr_hurdle=13.0),
        WaterfallTier(lp_split=60.0, gp_split=40.0, irr_hurdle=18.0),
    )


class SyndicationInputs(_DealModel):
    deal_type: Literal["syndication"] = "syndication"

    # capitalization
    purchase_price: Money
    closing_costs: Money = 0.0
    capex_reserve: Money = 0.0
    acquisition_fee_percent: Percent = 0.0

    # debt
    loan_to_value: Percent
    interest_rate: Percent
    amortization_years: int = Field(default=30, ge=1)
    interest_only: bool = False
    interest_only_years: int = Field(default=0, ge=0)

    # operations, year 1 annual figures
    gross_potential_rent: Money
    other_income: Money = 0.0
    vacancy_rate: Percent = 5.0
    operating_expense_ratio: Percent = 40.0
    rent_growth_rate: GrowthPercent = 3.0
    expense_growth_rate: GrowthPercent = 3.0
    asset_management_fee_percent: Percent = 0.0

    # exit
    hold_period_years: int = Field(..., ge=1)
    exit_cap_rate: Percent
    disposition_fee_percent: Percent = 0.0

    # equity & waterfall
    lp_equity_percent: Percent = 90.0
    gp_equity_percent: Percent = 10.0
    preferred_return: Percent = 8.0
    tiers: tuple[WaterfallTier, ...] = Field(default_factory=_default_tiers, min_length=1)
    catch_up: CatchUpPolicy = CatchUpPolicy.NONE

    @model_validator(mode="after")
    def _check_structure(self) -> "SyndicationInputs":
        if abs(self.lp_equity_percent + self.gp_equity_percent - 100.0) > 1e-6:
            raise ValueError("lp_equity_percent + gp_equity_percent must equal 100")
        if self.tiers[0].irr_hurdle is not None:
            raise ValueError("the first waterfall tier applies right after the pref and takes no hurdle")
        previous = self.preferred_return
        for tier in self.tiers[1:]:
            if tier.irr_hurdle is None:
                raise ValueError("every tier after the first needs an irr_hurdle")
            if tier.irr_hurdle <= previous:
                raise ValueError("waterfall hurdles must be strictly increasing")
            previous = tier.irr_hurdle
        return self


DealInputs = Annotated[
    Union[
        RentalInputs,
        BrrrrInputs,
        FlipInputs,
        HouseHackInputs,
        MultifamilyInputs,
        MhParkInputs,
        SyndicationInputs,
    ],
    Field(discriminator="deal_type"),
]
