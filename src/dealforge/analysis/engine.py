from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from pydantic import TypeAdapter

from dealforge.adapters.logging_utils import get_logger, log_event
from dealforge.analysis.brrrr import calculate_brrrr
from dealforge.analysis.flip import calculate_flip
from dealforge.analysis.house_hack import calculate_house_hack
from dealforge.analysis.mh_park import calculate_mh_park
from dealforge.analysis.multifamily import calculate_multifamily
from dealforge.analysis.rental import calculate_rental
from dealforge.analysis.syndication import calculate_syndication
from dealforge.domain.deals import (
    BrrrrInputs,
    DealInputs,
    FlipInputs,
    HouseHackInputs,
    MhParkInputs,
    MultifamilyInputs,
    RentalInputs,
    SyndicationInputs,
)
from dealforge.domain.results import DealResults

logger = get_logger(__name__)

_CALCULATORS: dict[type, Callable[[Any], DealResults]] = {
    RentalInputs: calculate_rental,
    BrrrrInputs: calculate_brrrr,
    FlipInputs: calculate_flip,
    HouseHackInputs: calculate_house_hack,
    MultifamilyInputs: calculate_multifamily,
    MhParkInputs: calculate_mh_park,
    SyndicationInputs: calculate_syndication,
}

_deal_inputs_adapter: TypeAdapter[DealInputs] = TypeAdapter(DealInputs)


def parse_deal_inputs(payload: Mapping[str, Any]) -> DealInputs:
    """
    Validate a host payload into the matching input model, picked by its
    `deal_type` tag. Raises pydantic.ValidationError on bad or unknown input.
    """
    return _deal_inputs_adapter.validate_python(payload)


def calculate(inputs: DealInputs) -> DealResults:
    """Run the calculator for whichever deal type `inputs` is."""
    calculator = _CALCULATORS.get(type(inputs))
    if calculator is None:
        raise TypeError(f"no calculator for {type(inputs).__name__}")

    log_event(logger, "calculating deal", level=logging.DEBUG, deal_type=inputs.deal_type)
    return calculator(inputs)


def supported_deal_types() -> list[str]:
    return [model.model_fields["deal_type"].default for model in _CALCULATORS]
