import pytest
from pydantic import ValidationError

from dealforge.analysis.engine import calculate, parse_deal_inputs, supported_deal_types
from dealforge.domain.deals import RentalInputs, SyndicationInputs, WaterfallTier
from dealforge.domain.results import (
    BrrrrResults,
    FlipResults,
    HouseHackResults,
    MhParkResults,
    MultifamilyResults,
    RentalResults,
    SyndicationResults,
)

from fixtures.deals import (
    brrrr_deal,
    flip_deal,
    house_hack_deal,
    mh_park_deal,
    multifamily_deal,
    rental_deal,
    syndication_deal,
)


@pytest.mark.parametrize(
    "factory, result_type",
    [
        (rental_deal, RentalResults),
        (brrrr_deal, BrrrrResults),
        (flip_deal, FlipResults),
        (house_hack_deal, HouseHackResults),
        (multifamily_deal, MultifamilyResults),
        (mh_park_deal, MhParkResults),
        (syndication_deal, SyndicationResults),
    ],
)
def test_calculate_dispatches_on_deal_type(factory, result_type, default_sensitivity_steps):
    assert isinstance(calculate(factory()), result_type)


def test_calculate_rejects_unknown_inputs():
    with pytest.raises(TypeError):
        calculate({"deal_type": "rental"})


@pytest.mark.parametrize(
    "factory",
    [rental_deal, house_hack_deal, multifamily_deal, mh_park_deal],
)
def test_zero_price_gives_zero_cap_rate(factory):
    r = calculate(factory(purchase_price=0.0))
    assert r.cap_rate == 0.0


def test_zero_price_brrrr_uses_arv_and_does_not_raise():
    r = calculate(brrrr_deal(purchase_price=0.0, after_repair_value=0.0, refinance_ltv=0.0))
    assert r.cap_rate == 0.0


def test_zero_price_flip_does_not_raise():
    r = calculate(
        flip_deal(purchase_price=0.0, after_repair_value=0.0, rehab_costs=0.0, holding_costs_monthly=0.0)
    )
    assert r.profit_margin == 0.0
    assert r.roi == 0.0


def test_parse_deal_inputs_picks_variant_by_tag():
    payload = rental_deal().model_dump()
    parsed = parse_deal_inputs(payload)
    assert isinstance(parsed, RentalInputs)
    assert parsed == rental_deal()


def test_parse_deal_inputs_syndication_tiers_from_json_shape():
    payload = syndication_deal().model_dump(mode="json")
    parsed = parse_deal_inputs(payload)
    assert isinstance(parsed, SyndicationInputs)
    assert parsed.tiers[1] == WaterfallTier(lp_split=70.0, gp_split=30.0, irr_hurdle=13.0)


@pytest.mark.parametrize(
    "payload",
    [
        {"deal_type": "timeshare", "purchase_price": 1.0},
        {"purchase_price": 1.0},
        {"deal_type": "rental", "purchase_price": "lots"},
        {"deal_type": "rental", "purchase_price": 100_000.0},  # missing rate, term, rent
    ],
)
def test_parse_deal_inputs_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        parse_deal_inputs(payload)


def test_percentages_outside_range_are_rejected_at_construction():
    with pytest.raises(ValidationError):
        rental_deal(vacancy_rate=120.0)
    with pytest.raises(ValidationError):
        rental_deal(down_payment_percent=-1.0)


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        rental_deal(monthly_rnet=1_000.0)


def test_waterfall_structure_is_validated():
    with pytest.raises(ValidationError):
        WaterfallTier(lp_split=70.0, gp_split=20.0)
    # hurdles must rise tier over tier, above the pref
    with pytest.raises(ValidationError):
        syndication_deal(
            tiers=(
                WaterfallTier(lp_split=80.0, gp_split=20.0),
                WaterfallTier(lp_split=70.0, gp_split=30.0, irr_hurdle=15.0),
                WaterfallTier(lp_split=60.0, gp_split=40.0, irr_hurdle=12.0),
            )
        )
    with pytest.raises(ValidationError):
        syndication_deal(preferred_return=14.0)
    with pytest.raises(ValidationError):
        syndication_deal(lp_equity_percent=80.0, gp_equity_percent=10.0)


def test_supported_deal_types():
    assert supported_deal_types() == [
        "rental", "brrrr", "flip", "house_hack", "multifamily", "mh_park", "syndication",
    ]
