import math

import pytest

from dealforge.analysis.rental import calculate_rental

from fixtures.deals import rental_deal


def test_rental_reference_scenario():
    r = calculate_rental(rental_deal())

    assert r.loan_amount == pytest.approx(160_000.0)
    assert r.monthly_mortgage == pytest.approx(1064.48, abs=0.01)
    assert math.isfinite(r.cash_on_cash_return)

    # income: 1800 gross, 5% vacancy
    assert r.gross_monthly_income == pytest.approx(1_800.0)
    assert r.effective_gross_income == pytest.approx(1_710.0)

    # tax 200 + insurance 100 + maintenance 90 + capex 90 + management 180
    assert r.total_monthly_expenses == pytest.approx(660.0)
    assert r.net_operating_income == pytest.approx((1_710.0 - 660.0) * 12)
    assert r.cap_rate == pytest.approx(12_600.0 / 200_000.0 * 100)

    assert r.total_investment == pytest.approx(44_000.0)
    assert r.monthly_cash_flow == pytest.approx(1_710.0 - 660.0 - r.monthly_mortgage)
    assert r.cash_on_cash_return == pytest.approx(r.annual_cash_flow / 44_000.0 * 100)
    assert r.debt_service_coverage_ratio == pytest.approx(12_600.0 / (r.monthly_mortgage * 12))


def test_rental_equity_and_total_return():
    r = calculate_rental(rental_deal())

    assert r.year1_principal_paydown > 0
    assert r.year1_interest_paid > r.year1_principal_paydown
    assert r.five_year_equity > 40_000.0 + r.year1_principal_paydown
    assert r.total_roi == pytest.approx(r.five_year_total_return / 5)


def test_rental_all_cash_has_no_debt_service():
    r = calculate_rental(rental_deal(down_payment_percent=100.0))
    assert r.loan_amount == 0.0
    assert r.monthly_mortgage == 0.0
    assert r.debt_service_coverage_ratio == 0.0
    assert r.year1_principal_paydown == 0.0


def test_rental_full_vacancy_is_not_an_error():
    r = calculate_rental(rental_deal(vacancy_rate=100.0))
    assert r.effective_gross_income == 0.0
    assert r.net_operating_income < 0
    assert math.isfinite(r.cash_on_cash_return)


def test_rental_short_term_loan_is_paid_off_within_five_years():
    r = calculate_rental(rental_deal(loan_term_years=3))

    # 40k down plus the 160k loan fully repaid by year three
    assert r.five_year_equity == pytest.approx(200_000.0)
    assert r.five_year_equity <= 200_000.0 + 1e-4
