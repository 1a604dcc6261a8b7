import pytest

from dealforge.analysis.flip import calculate_flip

from fixtures.deals import flip_deal


def test_flip_all_cash_profit_and_roi():
    r = calculate_flip(flip_deal())

    assert r.closing_costs_buy == pytest.approx(2_000.0)
    assert r.total_acquisition_cost == pytest.approx(132_000.0)
    assert r.total_holding_costs == pytest.approx(6_000.0)
    assert r.total_selling_costs == pytest.approx(12_000.0)
    assert r.total_project_cost == pytest.approx(150_000.0)

    assert r.loan_amount == 0.0
    assert r.total_loan_interest == 0.0
    assert r.total_cash_required == pytest.approx(138_000.0)

    assert r.gross_profit == pytest.approx(70_000.0)
    assert r.net_profit == pytest.approx(50_000.0)
    assert r.roi == pytest.approx(50_000.0 / 138_000.0 * 100)
    assert r.annualized_roi == pytest.approx(r.roi * 2)
    assert r.profit_margin == pytest.approx(25.0)


def test_flip_seventy_percent_rule():
    r = calculate_flip(flip_deal())
    assert r.max_allowable_offer == pytest.approx(200_000.0 * 0.70 - 30_000.0)
    assert r.meets_seventy_percent_rule is True

    r = calculate_flip(flip_deal(purchase_price=120_000.0))
    assert r.meets_seventy_percent_rule is False


def test_flip_break_even_price_covers_costs():
    r = calculate_flip(flip_deal())
    # at the break-even price, net proceeds after 6% selling costs cover fixed costs
    assert r.break_even_price == pytest.approx(138_000.0 / 0.94)
    assert r.break_even_price * 0.94 == pytest.approx(138_000.0)


def test_flip_leverage_adds_financing_cost():
    r = calculate_flip(
        flip_deal(
            use_loan=True,
            loan_to_value_percent=80.0,
            loan_interest_rate=12.0,
            loan_points_percent=2.0,
        )
    )
    assert r.loan_amount == pytest.approx(80_000.0)
    # rehab stays out of the loan, so the borrower funds it
    assert r.down_payment == pytest.approx(20_000.0 + 30_000.0)
    assert r.loan_points == pytest.approx(1_600.0)
    assert r.monthly_loan_payment == pytest.approx(800.0)
    assert r.total_loan_interest == pytest.approx(4_800.0)
    assert r.net_profit == pytest.approx(50_000.0 - 1_600.0 - 4_800.0)
    assert r.total_cash_required < 138_000.0


def test_flip_financed_rehab_rolls_into_loan():
    r = calculate_flip(
        flip_deal(use_loan=True, loan_to_value_percent=80.0, include_rehab_in_loan=True)
    )
    assert r.loan_amount == pytest.approx(110_000.0)
    assert r.down_payment == pytest.approx(20_000.0)


def test_flip_zero_holding_months_has_no_annualized_roi():
    r = calculate_flip(flip_deal(holding_period_months=0))
    assert r.annualized_roi == 0.0
