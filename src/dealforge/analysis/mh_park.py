from __future__ import annotations

from dealforge.analysis.operations import pct, ratio, ratio_pct
from dealforge.domain.deals import MhParkInputs
from dealforge.domain.finance import monthly_payment, monthly_rate
from dealforge.domain.results import MhParkResults


def calculate_mh_park(inputs: MhParkInputs) -> MhParkResults:
    """
    Simplified manufactured-housing park valuation:
    lots x lot rent -> less vacancy -> blended expense ratio -> NOI.
    Per-lot figures make parks of different sizes comparable.
    """
    gross_potential_income = inputs.lot_count * inputs.avg_lot_rent * 12.0
    vacancy_loss = pct(gross_potential_income, 100.0 - inputs.occupancy_rate)
    other_income = inputs.other_income_monthly * 12.0
    egi = gross_potential_income - vacancy_loss + other_income

    opex = pct(egi, inputs.expense_ratio)
    noi = egi - opex

    down_payment = pct(inputs.purchase_price, inputs.down_payment_percent)
    loan_amount = inputs.purchase_price - down_payment
    closing_costs = pct(inputs.purchase_price, inputs.closing_costs_percent)
    total_investment = down_payment + closing_costs

    monthly_debt_service = monthly_payment(
        loan_amount,
        monthly_rate(inputs.interest_rate),
        inputs.amortization_years * 12,
    )
    annual_debt_service = monthly_debt_service * 12.0
    annual_cash_flow = noi - annual_debt_service

    return MhParkResults(
        occupancy_rate=inputs.occupancy_rate if inputs.lot_count > 0 else 0.0,
        occupied_lots=pct(inputs.lot_count, inputs.occupancy_rate),
        gross_potential_income=gross_potential_income,
        vacancy_loss=vacancy_loss,
        other_income_annual=other_income,
        effective_gross_income=egi,
        total_operating_expenses=opex,
        net_operating_income=noi,
        noi_per_lot=ratio(noi, inputs.lot_count),
        loan_amount=loan_amount,
        down_payment=down_payment,
        closing_costs=closing_costs,
        total_investment=total_investment,
        monthly_debt_service=monthly_debt_service,
        annual_debt_service=annual_debt_service,
        cap_rate=ratio_pct(noi, inputs.purchase_price),
        cash_on_cash_return=ratio_pct(annual_cash_flow, total_investment),
        debt_service_coverage_ratio=ratio(noi, annual_debt_service),
        monthly_cash_flow=annual_cash_flow / 12.0,
        annual_cash_flow=annual_cash_flow,
        price_per_lot=ratio(inputs.purchase_price, inputs.lot_count),
        gross_rent_multiplier=ratio(inputs.purchase_price, gross_potential_income),
        estimated_market_value=ratio(noi, inputs.market_cap_rate / 100.0),
    )
