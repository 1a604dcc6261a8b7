from __future__ import annotations

from dealforge.analysis.operations import pct, ratio, ratio_pct
from dealforge.domain.deals import MultifamilyInputs
from dealforge.domain.finance import monthly_payment, monthly_rate
from dealforge.domain.results import MultifamilyResults


def _aggregate_rent(inputs: MultifamilyInputs) -> float:
    """Annual gross potential rent across every unit-mix tier."""
    return sum(tier.count * tier.monthly_rent for tier in inputs.unit_mix) * 12.0


def _ancillary_income_annual(inputs: MultifamilyInputs) -> float:
    return (
        inputs.laundry_income
        + inputs.parking_income
        + inputs.storage_income
        + inputs.pet_fees
        + inputs.other_income
    ) * 12.0


def _itemized_expenses(inputs: MultifamilyInputs, egi: float) -> float:
    return (
        inputs.property_tax_annual
        + inputs.insurance_annual
        + inputs.utilities_annual
        + inputs.repairs_maintenance_annual
        + pct(egi, inputs.management_percent)
        + inputs.payroll_annual
        + inputs.advertising_annual
        + inputs.legal_accounting_annual
        + inputs.landscaping_annual
        + inputs.contract_services_annual
        + pct(egi, inputs.reserves_percent)
    )


def calculate_multifamily(inputs: MultifamilyInputs) -> MultifamilyResults:
    # --- income ---
    gpr = _aggregate_rent(inputs)
    other_income = _ancillary_income_annual(inputs)
    gross_potential_income = gpr + other_income

    # vacancy and credit loss hit rent only, not ancillary income
    vacancy_loss = pct(gpr, inputs.vacancy_rate)
    credit_loss = pct(gpr, inputs.credit_loss_rate)
    egi = gross_potential_income - vacancy_loss - credit_loss

    # --- expenses ---
    if inputs.use_expense_ratio:
        opex = pct(egi, inputs.expense_ratio)
    else:
        opex = _itemized_expenses(inputs, egi)

    noi = egi - opex

    # --- financing (payment runs on the amortization period, not the loan term) ---
    down_payment = pct(inputs.purchase_price, inputs.down_payment_percent)
    loan_amount = inputs.purchase_price - down_payment
    closing_costs = pct(inputs.purchase_price, inputs.closing_costs_percent)
    loan_points = pct(loan_amount, inputs.loan_points_percent)
    total_investment = down_payment + closing_costs + loan_points

    monthly_debt_service = monthly_payment(
        loan_amount,
        monthly_rate(inputs.interest_rate),
        inputs.amortization_years * 12,
    )
    annual_debt_service = monthly_debt_service * 12.0
    annual_cash_flow = noi - annual_debt_service

    total_units = sum(tier.count for tier in inputs.unit_mix) or inputs.total_units

    # share of potential rent needed to cover expenses + debt service
    costs_to_cover = opex + annual_debt_service

    return MultifamilyResults(
        total_units=total_units,
        gross_potential_rent=gpr,
        gross_potential_rent_monthly=gpr / 12.0,
        other_income_annual=other_income,
        gross_potential_income=gross_potential_income,
        vacancy_loss=vacancy_loss,
        credit_loss=credit_loss,
        effective_gross_income=egi,
        effective_gross_income_monthly=egi / 12.0,
        total_operating_expenses=opex,
        total_operating_expenses_monthly=opex / 12.0,
        expense_ratio_actual=ratio_pct(opex, egi),
        net_operating_income=noi,
        net_operating_income_monthly=noi / 12.0,
        loan_amount=loan_amount,
        down_payment=down_payment,
        closing_costs=closing_costs,
        loan_points=loan_points,
        total_investment=total_investment,
        monthly_debt_service=monthly_debt_service,
        annual_debt_service=annual_debt_service,
        cap_rate=ratio_pct(noi, inputs.purchase_price),
        market_cap_rate=inputs.market_cap_rate,
        debt_service_coverage_ratio=ratio(noi, annual_debt_service),
        cash_on_cash_return=ratio_pct(annual_cash_flow, total_investment),
        monthly_cash_flow=annual_cash_flow / 12.0,
        annual_cash_flow=annual_cash_flow,
        price_per_unit=ratio(inputs.purchase_price, total_units),
        price_per_sq_ft=ratio(inputs.purchase_price, inputs.square_footage),
        gross_rent_multiplier=ratio(inputs.purchase_price, gpr),
        estimated_market_value=ratio(noi, inputs.market_cap_rate / 100.0),
        break_even_occupancy=ratio_pct(costs_to_cover, gross_potential_income),
        break_even_rent_per_unit=ratio(costs_to_cover / 12.0, total_units),
        noi_per_unit=ratio(noi, total_units),
        expenses_per_unit=ratio(opex, total_units),
        rent_per_unit=ratio(gpr / 12.0, total_units),
    )
