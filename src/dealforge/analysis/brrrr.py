from __future__ import annotations

import math

from dealforge.analysis.operations import monthly_operations, pct, ratio, ratio_pct
from dealforge.domain.deals import BrrrrInputs
from dealforge.domain.finance import amortize, interest_only_payment, monthly_payment, monthly_rate
from dealforge.domain.results import BrrrrResults


def calculate_brrrr(inputs: BrrrrInputs) -> BrrrrResults:
    """
    Buy-Rehab-Rent-Refinance-Repeat.

    Two independent loans: a short interest-only acquisition loan, paid off by
    the permanent loan sized on ARV at refinance. When the refinance hands back
    every dollar put in (cash_left_in_deal <= 0) the cash-on-cash, 5-year and
    total ROI figures are math.inf and `infinite_return` is set.
    """

    # --- phase 1: acquisition ---
    initial_loan = pct(inputs.purchase_price, inputs.initial_loan_percent)
    initial_down_payment = inputs.purchase_price - initial_loan
    initial_points = pct(initial_loan, inputs.initial_points_percent)
    initial_payment = interest_only_payment(initial_loan, inputs.initial_interest_rate)

    # --- phase 2: rehab / holding ---
    total_holding_costs = inputs.holding_costs_monthly * inputs.rehab_duration_months
    total_holding_interest = initial_payment * inputs.rehab_duration_months

    all_in_cost = (
        initial_down_payment
        + inputs.closing_costs
        + initial_points
        + inputs.rehab_costs
        + total_holding_costs
        + total_holding_interest
    )

    # --- phase 3: refinance ---
    new_loan = pct(inputs.after_repair_value, inputs.refinance_ltv)
    cash_recovered = new_loan - initial_loan - inputs.refinance_closing_costs
    cash_left_in_deal = all_in_cost - cash_recovered
    infinite_return = cash_left_in_deal <= 0
    equity_at_refi = inputs.after_repair_value - new_loan

    refi_rate = monthly_rate(inputs.refinance_rate)
    new_payment = monthly_payment(new_loan, refi_rate, inputs.refinance_term_years * 12)

    # --- phase 4: rent (post-refinance) ---
    ops = monthly_operations(inputs)
    noi = ops.noi_annual
    monthly_cash_flow = ops.effective_gross_income - ops.total_monthly_expenses - new_payment
    annual_cash_flow = monthly_cash_flow * 12.0
    annual_debt_service = new_payment * 12.0

    year1 = amortize(new_loan, refi_rate, new_payment, 12)
    five_year_principal = amortize(new_loan, refi_rate, new_payment, 60).principal_paid

    if infinite_return:
        cash_on_cash = math.inf
        five_year_total_return = math.inf
        total_roi = math.inf
    else:
        cash_on_cash = ratio_pct(annual_cash_flow, cash_left_in_deal)
        five_year_total_return = ratio_pct(annual_cash_flow * 5 + five_year_principal, cash_left_in_deal)
        total_roi = five_year_total_return / 5

    return BrrrrResults(
        cash_on_cash_return=cash_on_cash,
        cap_rate=ratio_pct(noi, inputs.after_repair_value),
        total_roi=total_roi,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        total_investment=cash_left_in_deal if cash_left_in_deal > 0 else all_in_cost,
        loan_amount=new_loan,
        monthly_mortgage=new_payment,
        gross_monthly_income=ops.gross_monthly_income,
        effective_gross_income=ops.effective_gross_income,
        total_monthly_expenses=ops.total_monthly_expenses,
        net_operating_income=noi,
        debt_service_coverage_ratio=ratio(noi, annual_debt_service),
        year1_principal_paydown=year1.principal_paid,
        year1_interest_paid=year1.interest_paid,
        five_year_equity=equity_at_refi + five_year_principal,
        five_year_total_return=five_year_total_return,
        initial_loan_amount=initial_loan,
        initial_down_payment=initial_down_payment,
        initial_points_cost=initial_points,
        initial_monthly_payment=initial_payment,
        total_holding_costs=total_holding_costs,
        total_holding_interest=total_holding_interest,
        all_in_cost=all_in_cost,
        cash_left_in_deal=cash_left_in_deal,
        cash_recovered_at_refi=cash_recovered,
        cash_recovered_percent=ratio_pct(cash_recovered, all_in_cost),
        equity_at_refi=equity_at_refi,
        new_loan_amount=new_loan,
        new_monthly_payment=new_payment,
        infinite_return=infinite_return,
    )
