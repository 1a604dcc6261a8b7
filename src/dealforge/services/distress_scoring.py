"""
Batch distress scoring.

Each property scores independently, so this is a plain parallel map
(joblib) followed by a sort. Two paths are offered:

  - score_aggregates: per-record scoring of LienAggregate objects, fanned
    out across workers, returning full breakdowns
  - score_frame: vectorized scoring of a whole DataFrame in one pass
"""
from __future__ import annotations

import math
from datetime import date
from typing import Any, Iterable, List, Optional

import pandas as pd
from joblib import Parallel, delayed

from dealforge.adapters.config import config
from dealforge.adapters.logging_utils import get_logger, log_event
from dealforge.analysis.distress import distress_breakdown
from dealforge.analysis.distress_batch import compute_distress_scores_df
from dealforge.domain.distress import DistressBreakdown, LienAggregate

logger = get_logger(__name__)


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def aggregate_from_record(record: dict[str, Any]) -> LienAggregate:
    """Build a LienAggregate from a CSV / DataFrame row; blanks become None / 0."""
    cleaned = {k: (None if _blank(v) else v) for k, v in record.items()}
    lien_date = cleaned.get("most_recent_lien_date")
    if isinstance(lien_date, pd.Timestamp):
        cleaned["most_recent_lien_date"] = lien_date.date()
    # pydantic coerces numeric cells; anything unparseable surfaces as a ValidationError
    for key in ("active_lien_count", "distinct_tax_years_with_liens", "total_tax_owed"):
        if cleaned.get(key) is None:
            cleaned[key] = 0
    for key in ("park_id", "county"):
        if cleaned.get(key) is not None:
            cleaned[key] = str(cleaned[key])
    return LienAggregate.model_validate(cleaned)


def aggregates_from_frame(df: pd.DataFrame) -> list[LienAggregate]:
    return [aggregate_from_record(rec) for rec in df.to_dict(orient="records")]


def _matches_county(agg: LienAggregate, county: Optional[str]) -> bool:
    if county is None:
        return True
    return (agg.county or "").strip().lower() == county.strip().lower()


def score_aggregates(
    aggregates: Iterable[LienAggregate],
    *,
    as_of: date | None = None,
    county: Optional[str] = None,
    n_jobs: Optional[int] = None,
) -> List[DistressBreakdown]:
    """
    Score every aggregate (optionally only one county), highest score first.
    """
    as_of = as_of or date.today()
    n_jobs = n_jobs if n_jobs is not None else config.DISTRESS_N_JOBS

    selected = [agg for agg in aggregates if _matches_county(agg, county)]
    if not selected:
        log_event(logger, "no properties to score", county=county)
        return []

    results: List[DistressBreakdown] = Parallel(n_jobs=n_jobs)(
        delayed(distress_breakdown)(agg, as_of) for agg in selected
    )
    ranked = sorted(results, key=lambda b: b.score, reverse=True)

    log_event(
        logger,
        "distress scoring complete",
        scored=len(ranked),
        county=county,
        n_jobs=n_jobs,
        max_score=ranked[0].score,
        mean_score=round(sum(b.score for b in ranked) / len(ranked), 2),
    )
    return ranked


def score_frame(
    df: pd.DataFrame,
    *,
    as_of: date | None = None,
    county: Optional[str] = None,
) -> pd.DataFrame:
    """
    Vectorized scoring: returns `df` (county-filtered) with sub-score and
    `distress_score` columns appended, sorted by score descending.
    """
    if county is not None:
        if "county" not in df.columns:
            raise KeyError("county filter requested but frame has no 'county' column")
        df = df[df["county"].astype(str).str.strip().str.lower() == county.strip().lower()]

    if df.empty:
        log_event(logger, "no properties to score", county=county)
        return df.assign(distress_score=pd.Series(dtype=float))

    scores = compute_distress_scores_df(df, as_of=as_of).to_frame(index=df.index)
    out = pd.concat([df, scores], axis=1).sort_values("distress_score", ascending=False)

    log_event(
        logger,
        "distress scoring complete",
        scored=int(out.shape[0]),
        county=county,
        max_score=float(out["distress_score"].max()),
        mean_score=round(float(out["distress_score"].mean()), 2),
    )
    return out
