from __future__ import annotations

from dealforge.analysis.operations import pct, ratio, ratio_pct
from dealforge.domain.deals import FinancingType, HouseHackInputs
from dealforge.domain.finance import monthly_payment, monthly_rate
from dealforge.domain.results import HouseHackResults

# conventional/FHA loans carry PMI below this down payment
PMI_DOWN_PAYMENT_THRESHOLD = 20.0


def _rented_units_income(inputs: HouseHackInputs) -> float:
    """Rent from every unit except the one the owner lives in."""
    return sum(
        rent
        for unit_number, rent in enumerate(inputs.unit_rents, start=1)
        if unit_number != inputs.owner_unit
    )


def calculate_house_hack(inputs: HouseHackInputs) -> HouseHackResults:
    """
    Owner-occupied 2-4 unit analysis.

    Two scenarios share one expense base:
      - living there: only the other units' rent offsets the owner's costs
      - moved out: every unit rented, the owner's unit at its equivalent market rent
    """
    financed = inputs.financing_type != FinancingType.CASH

    if financed:
        down_payment = pct(inputs.purchase_price, inputs.down_payment_percent)
    else:
        down_payment = inputs.purchase_price
    loan_amount = inputs.purchase_price - down_payment
    total_investment = down_payment + inputs.closing_costs + inputs.rehab_costs

    mortgage = monthly_payment(
        loan_amount,
        monthly_rate(inputs.interest_rate),
        inputs.loan_term_years * 12,
    )

    requires_pmi = (
        inputs.down_payment_percent < PMI_DOWN_PAYMENT_THRESHOLD
        and inputs.financing_type not in (FinancingType.CASH, FinancingType.VA)
    )
    monthly_pmi = pct(loan_amount, inputs.pmi_rate) / 12.0 if requires_pmi else 0.0
    debt_service = mortgage + monthly_pmi

    # --- income ---
    gross_potential_rent = sum(inputs.unit_rents)
    owner_unit_rent = inputs.unit_rents[inputs.owner_unit - 1]
    rental_income = _rented_units_income(inputs)
    effective_rental_income = rental_income - pct(rental_income, inputs.vacancy_rate)

    # --- shared expense base ---
    monthly_tax = inputs.property_tax_annual / 12.0
    monthly_insurance = inputs.insurance_annual / 12.0
    monthly_maintenance = pct(gross_potential_rent, inputs.maintenance_percent)
    monthly_capex = pct(gross_potential_rent, inputs.capex_percent)
    fixed_expenses = (
        monthly_tax
        + monthly_insurance
        + inputs.hoa_monthly
        + monthly_maintenance
        + monthly_capex
        + inputs.utilities_monthly
    )

    monthly_management = pct(effective_rental_income, inputs.management_percent)
    total_expenses = fixed_expenses + monthly_management

    gross_monthly_cost = debt_service + total_expenses
    net_housing_cost = gross_monthly_cost - effective_rental_income

    # --- owner moves out ---
    owner_market_rent = inputs.owner_equivalent_rent or owner_unit_rent
    gross_if_rented = rental_income + owner_market_rent
    effective_if_rented = gross_if_rented - pct(gross_if_rented, inputs.vacancy_rate)
    expenses_if_rented = fixed_expenses + pct(effective_if_rented, inputs.management_percent)

    noi = (effective_if_rented - expenses_if_rented) * 12.0
    cash_flow_if_rented = effective_if_rented - expenses_if_rented - debt_service
    annual_cash_flow_if_rented = cash_flow_if_rented * 12.0

    return HouseHackResults(
        loan_amount=loan_amount,
        down_payment=down_payment,
        total_investment=total_investment,
        monthly_mortgage=mortgage,
        monthly_pmi=monthly_pmi,
        total_monthly_debt_service=debt_service,
        gross_potential_rent=gross_potential_rent,
        rental_income_monthly=rental_income,
        effective_rental_income=effective_rental_income,
        owner_unit_potential_rent=owner_unit_rent,
        monthly_property_tax=monthly_tax,
        monthly_insurance=monthly_insurance,
        monthly_maintenance=monthly_maintenance,
        monthly_capex=monthly_capex,
        monthly_management=monthly_management,
        total_monthly_expenses=total_expenses,
        gross_monthly_cost=gross_monthly_cost,
        net_housing_cost=net_housing_cost,
        savings_vs_renting=inputs.owner_equivalent_rent - net_housing_cost,
        effective_housing_cost=max(0.0, net_housing_cost),
        lives_for_free=net_housing_cost <= 0,
        gross_rent_if_all_rented=gross_if_rented,
        cash_flow_if_rented=cash_flow_if_rented,
        annual_cash_flow_if_rented=annual_cash_flow_if_rented,
        cash_on_cash_if_rented=ratio_pct(annual_cash_flow_if_rented, total_investment),
        cap_rate=ratio_pct(noi, inputs.purchase_price),
        net_operating_income=noi,
        debt_service_coverage_ratio=ratio(noi, debt_service * 12.0),
        break_even_rent=gross_monthly_cost,
        rent_coverage_ratio=ratio(effective_rental_income, gross_monthly_cost),
    )
