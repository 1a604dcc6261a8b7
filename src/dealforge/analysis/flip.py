from __future__ import annotations

from dealforge.analysis.operations import pct, ratio_pct
from dealforge.domain.deals import FlipInputs
from dealforge.domain.finance import interest_only_payment
from dealforge.domain.results import FlipResults

# 70% rule: never pay more than 70% of ARV less rehab
MAO_ARV_FACTOR = 0.70


def calculate_flip(inputs: FlipInputs) -> FlipResults:
    """Single-transaction fix-and-flip: profit, ROI, break-even and the 70% rule."""
    price = inputs.purchase_price
    arv = inputs.after_repair_value
    holding_months = inputs.holding_period_months

    closing_costs_buy = pct(price, inputs.closing_costs_buy_percent)
    total_acquisition_cost = price + closing_costs_buy + inputs.rehab_costs

    # --- financing (interest-only hard money, if any) ---
    loan_amount = 0.0
    down_payment = price
    loan_points = 0.0
    monthly_loan_payment = 0.0
    total_loan_interest = 0.0

    leveraged = inputs.use_loan and inputs.loan_to_value_percent > 0
    if leveraged:
        purchase_loan = pct(price, inputs.loan_to_value_percent)
        loan_amount = purchase_loan + (inputs.rehab_costs if inputs.include_rehab_in_loan else 0.0)

        down_payment = price - purchase_loan
        if not inputs.include_rehab_in_loan:
            down_payment += inputs.rehab_costs

        loan_points = pct(loan_amount, inputs.loan_points_percent)
        monthly_loan_payment = interest_only_payment(loan_amount, inputs.loan_interest_rate)
        total_loan_interest = monthly_loan_payment * holding_months

    carrying_costs = inputs.holding_costs_monthly * holding_months
    total_holding_costs = carrying_costs + total_loan_interest

    # --- selling ---
    agent_commission = pct(arv, inputs.agent_commission_percent)
    closing_costs_sell = pct(arv, inputs.closing_costs_sell_percent)
    total_selling_costs = agent_commission + closing_costs_sell

    total_project_cost = (
        price
        + closing_costs_buy
        + inputs.rehab_costs
        + loan_points
        + total_holding_costs
        + total_selling_costs
    )

    if leveraged:
        total_cash_required = down_payment + closing_costs_buy + loan_points + carrying_costs
    else:
        total_cash_required = total_acquisition_cost + carrying_costs

    gross_profit = arv - price - inputs.rehab_costs
    net_profit = arv - total_project_cost
    roi = ratio_pct(net_profit, total_cash_required)
    annualized_roi = roi * (12 / holding_months) if holding_months > 0 else 0.0

    # Sale price * (1 - selling%) must cover every cost that does not scale with price
    fixed_costs = price + closing_costs_buy + inputs.rehab_costs + loan_points + total_holding_costs
    selling_cost_fraction = (inputs.agent_commission_percent + inputs.closing_costs_sell_percent) / 100.0
    if selling_cost_fraction < 1:
        break_even_price = fixed_costs / (1 - selling_cost_fraction)
    else:
        break_even_price = fixed_costs

    max_allowable_offer = arv * MAO_ARV_FACTOR - inputs.rehab_costs

    return FlipResults(
        closing_costs_buy=closing_costs_buy,
        total_acquisition_cost=total_acquisition_cost,
        loan_amount=loan_amount,
        down_payment=down_payment,
        loan_points=loan_points,
        monthly_loan_payment=monthly_loan_payment,
        total_loan_interest=total_loan_interest,
        total_holding_costs=total_holding_costs,
        agent_commission=agent_commission,
        closing_costs_sell=closing_costs_sell,
        total_selling_costs=total_selling_costs,
        total_project_cost=total_project_cost,
        total_cash_required=total_cash_required,
        gross_profit=gross_profit,
        net_profit=net_profit,
        profit_margin=ratio_pct(net_profit, arv),
        roi=roi,
        annualized_roi=annualized_roi,
        break_even_price=break_even_price,
        max_allowable_offer=max_allowable_offer,
        meets_seventy_percent_rule=price <= max_allowable_offer,
    )
