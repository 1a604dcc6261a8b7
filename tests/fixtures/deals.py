# tests/fixtures/deals.py

from datetime import date

from dealforge.domain.deals import (
    BrrrrInputs,
    FinancingType,
    FlipInputs,
    HouseHackInputs,
    MhParkInputs,
    MultifamilyInputs,
    RentalInputs,
    SyndicationInputs,
    UnitMixTier,
)
from dealforge.domain.distress import LienAggregate

AS_OF = date(2024, 6, 15)


def rental_deal(**overrides) -> RentalInputs:
    """200k single family, 20% down at 7%, 1800/mo rent."""
    fields = dict(
        purchase_price=200_000.0,
        closing_costs=4_000.0,
        rehab_costs=0.0,
        down_payment_percent=20.0,
        interest_rate=7.0,
        loan_term_years=30,
        monthly_rent=1_800.0,
        vacancy_rate=5.0,
        property_tax_annual=2_400.0,
        insurance_annual=1_200.0,
        hoa_monthly=0.0,
        maintenance_percent=5.0,
        capex_percent=5.0,
        management_percent=10.0,
    )
    fields.update(overrides)
    return RentalInputs(**fields)


def brrrr_deal(**overrides) -> BrrrrInputs:
    """
    100k purchase on 100% hard money, 30k rehab, ARV 200k refinanced at 75%.
    The refinance pulls out more than went in: infinite return.
    """
    fields = dict(
        purchase_price=100_000.0,
        closing_costs=3_000.0,
        rehab_costs=30_000.0,
        initial_loan_percent=100.0,
        initial_interest_rate=10.0,
        initial_points_percent=0.0,
        rehab_duration_months=3,
        holding_costs_monthly=0.0,
        after_repair_value=200_000.0,
        refinance_ltv=75.0,
        refinance_rate=7.0,
        refinance_term_years=30,
        refinance_closing_costs=3_000.0,
        monthly_rent=1_800.0,
        vacancy_rate=5.0,
        property_tax_annual=2_400.0,
        insurance_annual=1_200.0,
        maintenance_percent=5.0,
        capex_percent=5.0,
        management_percent=8.0,
    )
    fields.update(overrides)
    return BrrrrInputs(**fields)


def flip_deal(**overrides) -> FlipInputs:
    fields = dict(
        purchase_price=100_000.0,
        closing_costs_buy_percent=2.0,
        rehab_costs=30_000.0,
        after_repair_value=200_000.0,
        agent_commission_percent=5.0,
        closing_costs_sell_percent=1.0,
        holding_period_months=6,
        holding_costs_monthly=1_000.0,
    )
    fields.update(overrides)
    return FlipInputs(**fields)


def house_hack_deal(**overrides) -> HouseHackInputs:
    """FHA duplex: owner lives in unit 1, rents unit 2."""
    fields = dict(
        purchase_price=300_000.0,
        closing_costs=6_000.0,
        financing_type=FinancingType.FHA,
        down_payment_percent=3.5,
        interest_rate=6.5,
        loan_term_years=30,
        pmi_rate=0.85,
        unit_rents=(1_200.0, 1_200.0),
        owner_unit=1,
        owner_equivalent_rent=1_300.0,
        vacancy_rate=5.0,
        property_tax_annual=4_800.0,
        insurance_annual=1_800.0,
        maintenance_percent=5.0,
        capex_percent=5.0,
        management_percent=0.0,
    )
    fields.update(overrides)
    return HouseHackInputs(**fields)


def multifamily_deal(**overrides) -> MultifamilyInputs:
    """20 units in two tiers plus laundry, blended 45% expense ratio."""
    fields = dict(
        purchase_price=1_800_000.0,
        unit_mix=(
            UnitMixTier(label="1br", count=10, monthly_rent=1_000.0),
            UnitMixTier(label="2br", count=10, monthly_rent=1_200.0),
        ),
        laundry_income=500.0,
        vacancy_rate=5.0,
        use_expense_ratio=True,
        expense_ratio=45.0,
        down_payment_percent=25.0,
        interest_rate=6.5,
        amortization_years=30,
        closing_costs_percent=2.0,
        market_cap_rate=7.0,
    )
    fields.update(overrides)
    return MultifamilyInputs(**fields)


def mh_park_deal(**overrides) -> MhParkInputs:
    """50 lots at 350/mo, 85% occupied, 35% expense ratio."""
    fields = dict(
        lot_count=50,
        avg_lot_rent=350.0,
        occupancy_rate=85.0,
        expense_ratio=35.0,
        purchase_price=1_500_000.0,
        down_payment_percent=25.0,
        interest_rate=7.0,
        amortization_years=25,
    )
    fields.update(overrides)
    return MhParkInputs(**fields)


def syndication_deal(**overrides) -> SyndicationInputs:
    """
    10M apartment syndication: 70% LTV with two interest-only years,
    five-year hold, 6% exit cap, default 8% pref and 13/18 hurdles.
    """
    fields = dict(
        purchase_price=10_000_000.0,
        closing_costs=200_000.0,
        capex_reserve=300_000.0,
        acquisition_fee_percent=1.0,
        loan_to_value=70.0,
        interest_rate=6.0,
        amortization_years=30,
        interest_only=True,
        interest_only_years=2,
        gross_potential_rent=1_200_000.0,
        other_income=60_000.0,
        vacancy_rate=5.0,
        operating_expense_ratio=40.0,
        rent_growth_rate=3.0,
        expense_growth_rate=3.0,
        asset_management_fee_percent=2.0,
        hold_period_years=5,
        exit_cap_rate=6.0,
        disposition_fee_percent=1.0,
    )
    fields.update(overrides)
    return SyndicationInputs(**fields)


def distressed_park(**overrides) -> LienAggregate:
    """25 liens on 50 lots, 125k owed, last lien 3 months before AS_OF, 2 tax years."""
    fields = dict(
        park_id="park-001",
        county="Wayne",
        active_lien_count=25,
        total_tax_owed=125_000.0,
        most_recent_lien_date=date(2024, 3, 15),
        lot_count=50,
        distinct_tax_years_with_liens=2,
    )
    fields.update(overrides)
    return LienAggregate(**fields)
