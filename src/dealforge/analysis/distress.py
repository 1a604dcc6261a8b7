"""
Weighted distress score over tax-lien signals.

  score = 0.4 * lien_density + 0.3 * tax_burden + 0.2 * recency + 0.1 * chronicity

Each sub-score is clamped to [0, 100] before weighting, so the score is
bounded and never decreases as any signal gets worse.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from dealforge.domain.distress import DistressBreakdown, LienAggregate

WEIGHT_LIEN_DENSITY = 0.40
WEIGHT_TAX_BURDEN = 0.30
WEIGHT_RECENCY = 0.20
WEIGHT_CHRONICITY = 0.10

# tax owed is measured against this much per lot
TAX_BASELINE_PER_LOT = 10_000.0

# (months strictly below, score); anything older scores RECENCY_FLOOR
RECENCY_STEPS = ((6, 100.0), (12, 70.0), (24, 40.0))
RECENCY_FLOOR = 20.0

CHRONICITY_PER_YEAR = 25.0


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def months_between(earlier: date, later: date) -> int:
    """Whole calendar months from `earlier` to `later`; negative if reversed."""
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if later.day < earlier.day:
        months -= 1
    return months


def lien_density_score(active_lien_count: int, lot_count: Optional[int]) -> float:
    if not lot_count:
        return 0.0
    return _clamp(active_lien_count / lot_count * 100.0)


def tax_burden_score(total_tax_owed: float, lot_count: Optional[int]) -> float:
    if not lot_count:
        return 0.0
    return _clamp(total_tax_owed / (lot_count * TAX_BASELINE_PER_LOT) * 100.0)


def recency_score(months_since_last_lien: Optional[int]) -> float:
    if months_since_last_lien is None:
        return 0.0
    for limit, score in RECENCY_STEPS:
        if months_since_last_lien < limit:
            return score
    return RECENCY_FLOOR


def chronicity_score(distinct_tax_years: int) -> float:
    return _clamp(distinct_tax_years * CHRONICITY_PER_YEAR)


def distress_breakdown(agg: LienAggregate, as_of: date | None = None) -> DistressBreakdown:
    as_of = as_of or date.today()

    months = (
        months_between(agg.most_recent_lien_date, as_of)
        if agg.most_recent_lien_date is not None
        else None
    )

    lien_density = lien_density_score(agg.active_lien_count, agg.lot_count)
    tax_burden = tax_burden_score(agg.total_tax_owed, agg.lot_count)
    recency = recency_score(months)
    chronicity = chronicity_score(agg.distinct_tax_years_with_liens)

    score = (
        lien_density * WEIGHT_LIEN_DENSITY
        + tax_burden * WEIGHT_TAX_BURDEN
        + recency * WEIGHT_RECENCY
        + chronicity * WEIGHT_CHRONICITY
    )

    return DistressBreakdown(
        score=round(score, 2),
        lien_density=lien_density,
        tax_burden=tax_burden,
        recency=recency,
        chronicity=chronicity,
        months_since_last_lien=months,
        active_lien_count=agg.active_lien_count,
        total_tax_owed=agg.total_tax_owed,
        lot_count=agg.lot_count,
        distinct_tax_years_with_liens=agg.distinct_tax_years_with_liens,
        park_id=agg.park_id,
        county=agg.county,
    )


def score_distress(agg: LienAggregate, as_of: date | None = None) -> float:
    """0-100 distress score for one property."""
    return distress_breakdown(agg, as_of).score
