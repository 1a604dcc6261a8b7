import pytest
from pydantic import ValidationError

from dealforge.analysis.house_hack import calculate_house_hack
from dealforge.domain.deals import FinancingType

from fixtures.deals import house_hack_deal


def test_house_hack_living_there():
    r = calculate_house_hack(house_hack_deal())

    assert r.down_payment == pytest.approx(10_500.0)
    assert r.loan_amount == pytest.approx(289_500.0)
    # FHA under 20% down carries PMI
    assert r.monthly_pmi == pytest.approx(289_500.0 * 0.0085 / 12)

    # only the tenant's unit earns rent while the owner lives there
    assert r.rental_income_monthly == pytest.approx(1_200.0)
    assert r.effective_rental_income == pytest.approx(1_140.0)
    assert r.net_housing_cost == pytest.approx(r.gross_monthly_cost - 1_140.0)
    assert r.savings_vs_renting == pytest.approx(1_300.0 - r.net_housing_cost)
    assert r.lives_for_free is False
    assert r.break_even_rent == pytest.approx(r.gross_monthly_cost)


def test_house_hack_moved_out_uses_owner_equivalent_rent():
    r = calculate_house_hack(house_hack_deal())
    assert r.gross_rent_if_all_rented == pytest.approx(1_200.0 + 1_300.0)
    assert r.owner_unit_potential_rent == pytest.approx(1_200.0)


def test_house_hack_scenarios_share_expense_base():
    r = calculate_house_hack(house_hack_deal())
    # maintenance + capex are charged on listed rent in both scenarios
    assert r.monthly_maintenance == pytest.approx(2_400.0 * 0.05)
    assert r.monthly_capex == pytest.approx(2_400.0 * 0.05)

    expenses_if_rented = r.total_monthly_expenses  # management is 0 here
    effective_if_rented = 2_500.0 * 0.95
    assert r.cash_flow_if_rented == pytest.approx(
        effective_if_rented - expenses_if_rented - r.total_monthly_debt_service
    )


def test_house_hack_va_and_cash_skip_pmi():
    va = calculate_house_hack(house_hack_deal(financing_type=FinancingType.VA, down_payment_percent=0.0))
    assert va.monthly_pmi == 0.0
    assert va.loan_amount == pytest.approx(300_000.0)

    cash = calculate_house_hack(house_hack_deal(financing_type=FinancingType.CASH))
    assert cash.loan_amount == 0.0
    assert cash.down_payment == pytest.approx(300_000.0)
    assert cash.monthly_mortgage == 0.0
    assert cash.monthly_pmi == 0.0
    assert cash.total_investment == pytest.approx(306_000.0)


def test_house_hack_rich_rents_live_for_free():
    r = calculate_house_hack(
        house_hack_deal(unit_rents=(1_200.0, 2_500.0, 2_500.0, 2_500.0), owner_unit=1)
    )
    assert r.lives_for_free is True
    assert r.effective_housing_cost == 0.0


def test_house_hack_owner_unit_must_exist():
    with pytest.raises(ValidationError):
        house_hack_deal(owner_unit=3)


def test_house_hack_unit_count_limits():
    with pytest.raises(ValidationError):
        house_hack_deal(unit_rents=(1_000.0,))
    with pytest.raises(ValidationError):
        house_hack_deal(unit_rents=(1_000.0,) * 5)
