from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import numpy as np
import pandas as pd

from dealforge.analysis.distress import (
    CHRONICITY_PER_YEAR,
    RECENCY_FLOOR,
    RECENCY_STEPS,
    TAX_BASELINE_PER_LOT,
    WEIGHT_CHRONICITY,
    WEIGHT_LIEN_DENSITY,
    WEIGHT_RECENCY,
    WEIGHT_TAX_BURDEN,
)

REQUIRED_COLUMNS = (
    "active_lien_count",
    "total_tax_owed",
    "most_recent_lien_date",
    "lot_count",
    "distinct_tax_years_with_liens",
)


@dataclass
class BatchDistressResult:
    score: np.ndarray
    lien_density: np.ndarray
    tax_burden: np.ndarray
    recency: np.ndarray
    chronicity: np.ndarray
    months_since_last_lien: np.ndarray  # float, NaN where no lien date

    def to_frame(self, index: pd.Index | None = None) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "distress_score": self.score,
                "lien_density": self.lien_density,
                "tax_burden": self.tax_burden,
                "recency": self.recency,
                "chronicity": self.chronicity,
                "months_since_last_lien": self.months_since_last_lien,
            },
            index=index,
        )


def _months_since(dates: pd.Series, as_of: date) -> np.ndarray:
    ts = pd.to_datetime(dates, errors="coerce")
    months = (
        (as_of.year - ts.dt.year) * 12
        + (as_of.month - ts.dt.month)
        - (as_of.day < ts.dt.day).astype(float)
    )
    return months.to_numpy(dtype=float)


def compute_distress_scores_df(df: pd.DataFrame, *, as_of: date | None = None) -> BatchDistressResult:
    """
    Vectorized distress scoring over a DataFrame of lien aggregates.

    Expected columns on df:
      - active_lien_count
      - total_tax_owed
      - most_recent_lien_date (date / ISO string, blank for none)
      - lot_count (blank or 0 means unknown)
      - distinct_tax_years_with_liens

    Row i scores exactly as score_distress() would for the same aggregate.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"missing columns: {', '.join(missing)}")

    as_of = as_of or date.today()

    liens = df["active_lien_count"].fillna(0).to_numpy(dtype=float)
    tax_owed = df["total_tax_owed"].fillna(0).to_numpy(dtype=float)
    lots = df["lot_count"].fillna(0).to_numpy(dtype=float)
    tax_years = df["distinct_tax_years_with_liens"].fillna(0).to_numpy(dtype=float)

    # --- lien density / tax burden (0 where lot count unknown) ---
    lien_density = np.zeros_like(liens, dtype=float)
    tax_burden = np.zeros_like(liens, dtype=float)
    mask_lots = lots > 0
    lien_density[mask_lots] = liens[mask_lots] / lots[mask_lots] * 100.0
    tax_burden[mask_lots] = tax_owed[mask_lots] / (lots[mask_lots] * TAX_BASELINE_PER_LOT) * 100.0
    lien_density = np.clip(lien_density, 0.0, 100.0)
    tax_burden = np.clip(tax_burden, 0.0, 100.0)

    # --- recency step function ---
    months = _months_since(df["most_recent_lien_date"], as_of)
    has_date = ~np.isnan(months)
    conditions = [has_date & (months < limit) for limit, _ in RECENCY_STEPS]
    choices = [score for _, score in RECENCY_STEPS]
    recency = np.select(conditions, choices, default=RECENCY_FLOOR)
    recency[~has_date] = 0.0

    chronicity = np.clip(tax_years * CHRONICITY_PER_YEAR, 0.0, 100.0)

    score = (
        lien_density * WEIGHT_LIEN_DENSITY
        + tax_burden * WEIGHT_TAX_BURDEN
        + recency * WEIGHT_RECENCY
        + chronicity * WEIGHT_CHRONICITY
    )

    return BatchDistressResult(
        score=np.round(score, 2),
        lien_density=lien_density,
        tax_burden=tax_burden,
        recency=recency,
        chronicity=chronicity,
        months_since_last_lien=months,
    )
