from __future__ import annotations

from dealforge.analysis.operations import monthly_operations, pct, ratio, ratio_pct
from dealforge.domain.deals import RentalInputs
from dealforge.domain.finance import amortize, monthly_payment, monthly_rate
from dealforge.domain.results import RentalResults


def calculate_rental(inputs: RentalInputs) -> RentalResults:
    """
    Buy-and-hold rental underwriting.
    Returns metrics that investors and lenders actually care about.
    """

    # --- financing basics ---
    down_payment = pct(inputs.purchase_price, inputs.down_payment_percent)
    loan_amount = inputs.purchase_price - down_payment
    total_investment = down_payment + inputs.closing_costs + inputs.rehab_costs

    rate = monthly_rate(inputs.interest_rate)
    num_payments = inputs.loan_term_years * 12
    mortgage = monthly_payment(loan_amount, rate, num_payments)

    # --- income & operating expenses ---
    ops = monthly_operations(inputs)
    noi = ops.noi_annual

    # --- cash flow after debt ---
    monthly_cash_flow = ops.effective_gross_income - ops.total_monthly_expenses - mortgage
    annual_cash_flow = monthly_cash_flow * 12.0
    annual_debt_service = mortgage * 12.0

    # --- amortization ---
    year1 = amortize(loan_amount, rate, mortgage, 12)
    five_year_principal = amortize(loan_amount, rate, mortgage, 60).principal_paid

    # --- 5-year projection (no appreciation) ---
    five_year_total_return = ratio_pct(annual_cash_flow * 5 + five_year_principal, total_investment)

    return RentalResults(
        cash_on_cash_return=ratio_pct(annual_cash_flow, total_investment),
        cap_rate=ratio_pct(noi, inputs.purchase_price),
        total_roi=five_year_total_return / 5,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        total_investment=total_investment,
        loan_amount=loan_amount,
        monthly_mortgage=mortgage,
        gross_monthly_income=ops.gross_monthly_income,
        effective_gross_income=ops.effective_gross_income,
        total_monthly_expenses=ops.total_monthly_expenses,
        net_operating_income=noi,
        debt_service_coverage_ratio=ratio(noi, annual_debt_service),
        year1_principal_paydown=year1.principal_paid,
        year1_interest_paid=year1.interest_paid,
        five_year_equity=down_payment + five_year_principal,
        five_year_total_return=five_year_total_return,
    )
