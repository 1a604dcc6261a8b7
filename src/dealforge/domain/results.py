from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class RentalResults:
    # key metrics
    cash_on_cash_return: float   # percent
    cap_rate: float              # percent, NOI / price
    total_roi: float             # 5-year total return / 5
    monthly_cash_flow: float
    annual_cash_flow: float

    # breakdown
    total_investment: float
    loan_amount: float
    monthly_mortgage: float
    gross_monthly_income: float
    effective_gross_income: float    # monthly
    total_monthly_expenses: float
    net_operating_income: float      # annual
    debt_service_coverage_ratio: float

    year1_principal_paydown: float
    year1_interest_paid: float

    five_year_equity: float
    five_year_total_return: float


@dataclass(frozen=True)
class BrrrrResults(RentalResults):
    initial_loan_amount: float
    initial_down_payment: float
    initial_points_cost: float
    initial_monthly_payment: float
    total_holding_costs: float
    total_holding_interest: float

    all_in_cost: float
    cash_left_in_deal: float
    cash_recovered_at_refi: float
    cash_recovered_percent: float
    equity_at_refi: float
    new_loan_amount: float
    new_monthly_payment: float
    infinite_return: bool


@dataclass(frozen=True)
class FlipResults:
    closing_costs_buy: float
    total_acquisition_cost: float

    loan_amount: float
    down_payment: float
    loan_points: float
    monthly_loan_payment: float
    total_loan_interest: float

    total_holding_costs: float

    agent_commission: float
    closing_costs_sell: float
    total_selling_costs: float

    total_project_cost: float
    total_cash_required: float

    gross_profit: float
    net_profit: float
    profit_margin: float
    roi: float
    annualized_roi: float

    break_even_price: float
    max_allowable_offer: float
    meets_seventy_percent_rule: bool


@dataclass(frozen=True)
class HouseHackResults:
    loan_amount: float
    down_payment: float
    total_investment: float
    monthly_mortgage: float
    monthly_pmi: float
    total_monthly_debt_service: float

    gross_potential_rent: float          # all units at listed rent
    rental_income_monthly: float         # non-owner units only
    effective_rental_income: float
    owner_unit_potential_rent: float

    monthly_property_tax: float
    monthly_insurance: float
    monthly_maintenance: float
    monthly_capex: float
    monthly_management: float
    total_monthly_expenses: float

    # living in the property
    gross_monthly_cost: float
    net_housing_cost: float
    savings_vs_renting: float
    effective_housing_cost: float
    lives_for_free: bool

    # owner moves out
    gross_rent_if_all_rented: float
    cash_flow_if_rented: float
    annual_cash_flow_if_rented: float
    cash_on_cash_if_rented: float
    cap_rate: float
    net_operating_income: float
    debt_service_coverage_ratio: float

    break_even_rent: float
    rent_coverage_ratio: float


@dataclass(frozen=True)
class MultifamilyResults:
    total_units: int
    gross_potential_rent: float          # annual
    gross_potential_rent_monthly: float
    other_income_annual: float
    gross_potential_income: float
    vacancy_loss: float
    credit_loss: float
    effective_gross_income: float
    effective_gross_income_monthly: float

    total_operating_expenses: float
    total_operating_expenses_monthly: float
    expense_ratio_actual: float

    net_operating_income: float
    net_operating_income_monthly: float

    loan_amount: float
    down_payment: float
    closing_costs: float
    loan_points: float
    total_investment: float
    monthly_debt_service: float
    annual_debt_service: float

    cap_rate: float
    market_cap_rate: float
    debt_service_coverage_ratio: float
    cash_on_cash_return: float
    monthly_cash_flow: float
    annual_cash_flow: float

    price_per_unit: float
    price_per_sq_ft: float
    gross_rent_multiplier: float
    estimated_market_value: float

    break_even_occupancy: float
    break_even_rent_per_unit: float

    noi_per_unit: float
    expenses_per_unit: float
    rent_per_unit: float


@dataclass(frozen=True)
class MhParkResults:
    occupancy_rate: float
    occupied_lots: float

    gross_potential_income: float        # lots * rent * 12
    vacancy_loss: float
    other_income_annual: float
    effective_gross_income: float

    total_operating_expenses: float
    net_operating_income: float
    noi_per_lot: float

    loan_amount: float
    down_payment: float
    closing_costs: float
    total_investment: float
    monthly_debt_service: float
    annual_debt_service: float

    cap_rate: float
    cash_on_cash_return: float
    debt_service_coverage_ratio: float
    monthly_cash_flow: float
    annual_cash_flow: float

    price_per_lot: float
    gross_rent_multiplier: float
    estimated_market_value: float


@dataclass(frozen=True)
class SyndicationYear:
    year: int
    gross_potential_rent: float
    other_income: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float
    debt_service: float
    interest_paid: float
    principal_paid: float
    asset_management_fee: float
    cash_flow: float                   # after debt service and fees
    distributable_cash: float          # cash flow net of carried shortfall, plus sale at exit
    lp_distribution: float
    gp_distribution: float
    cumulative_lp_distributions: float
    cumulative_gp_distributions: float
    ending_loan_balance: float
    cash_on_cash: float


@dataclass(frozen=True)
class SensitivityRow:
    exit_cap_rate: float
    rent_growth_rate: float
    exit_value: float
    lp_irr: Optional[float]
    gp_irr: Optional[float]
    lp_equity_multiple: float
    gp_equity_multiple: float


@dataclass(frozen=True)
class SyndicationResults:
    # capitalization
    total_capitalization: float
    loan_amount: float
    total_equity: float
    lp_equity_contribution: float
    gp_equity_contribution: float

    # exit
    exit_noi: float
    exit_value: float
    disposition_costs: float
    loan_balance_at_exit: float
    net_sale_proceeds: float

    # waterfall
    total_distributable_cash: float
    lp_total_distributions: float
    gp_total_distributions: float
    lp_equity_multiple: float
    gp_equity_multiple: float
    lp_irr: Optional[float]            # percent; None when undefined
    gp_irr: Optional[float]
    gp_irr_with_fees: Optional[float]
    gp_promote: float
    gp_catch_up: float
    tier_distributions: tuple[float, ...]   # pref tier first, then each configured tier

    # fees
    total_acquisition_fees: float
    total_asset_management_fees: float

    # operations
    year1_noi: float
    year1_debt_service_coverage_ratio: float
    average_cash_on_cash: float
    total_project_profit: float

    yearly: tuple[SyndicationYear, ...]
    sensitivity: tuple[SensitivityRow, ...]


DealResults = Union[
    RentalResults,
    BrrrrResults,
    FlipResults,
    HouseHackResults,
    MultifamilyResults,
    MhParkResults,
    SyndicationResults,
]
