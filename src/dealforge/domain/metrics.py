from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from dealforge.domain.results import (
    DealResults,
    FlipResults,
    HouseHackResults,
    SyndicationResults,
)


@dataclass
class PortfolioMetrics:
    """
    Aggregated CoC / DSCR / cap-rate stats across a batch of analyzed deals.

    This is the 'reduction' result of a map-style per-deal computation.
    Infinite cash-on-cash returns (money-out BRRRRs) are counted in
    `n_infinite_coc` and left out of the CoC mean and quantiles.
    """
    n_deals: int
    n_infinite_coc: int
    mean_coc: float
    p5_coc: float
    p50_coc: float
    p95_coc: float
    mean_dscr: float
    p5_dscr: float
    p50_dscr: float
    p95_dscr: float
    mean_cap_rate: float


@dataclass(frozen=True)
class HeadlineMetrics:
    cash_on_cash: float
    dscr: float
    cap_rate: float


def headline_metrics(result: DealResults) -> HeadlineMetrics:
    """
    Pull the comparable return figures out of any result record.
    Fields a deal type does not have come back as NaN.
    """
    if isinstance(result, FlipResults):
        # one-shot trade: ROI stands in for cash-on-cash
        return HeadlineMetrics(cash_on_cash=result.roi, dscr=np.nan, cap_rate=np.nan)
    if isinstance(result, HouseHackResults):
        return HeadlineMetrics(
            cash_on_cash=result.cash_on_cash_if_rented,
            dscr=result.debt_service_coverage_ratio,
            cap_rate=result.cap_rate,
        )
    if isinstance(result, SyndicationResults):
        return HeadlineMetrics(
            cash_on_cash=result.average_cash_on_cash,
            dscr=result.year1_debt_service_coverage_ratio,
            cap_rate=np.nan,
        )
    return HeadlineMetrics(
        cash_on_cash=result.cash_on_cash_return,
        dscr=result.debt_service_coverage_ratio,
        cap_rate=result.cap_rate,
    )


def summarize_portfolio(
    coc: Sequence[float] | np.ndarray,
    dscr: Sequence[float] | np.ndarray,
    cap_rate: Sequence[float] | np.ndarray,
    mask: Optional[np.ndarray] = None,
) -> PortfolioMetrics:
    """
    Reduction step: take per-deal CoC / DSCR / cap-rate arrays and collapse
    them into summary statistics for the whole portfolio.
    """
    coc = np.asarray(coc, dtype=float)
    dscr = np.asarray(dscr, dtype=float)
    cap_rate = np.asarray(cap_rate, dtype=float)

    if mask is not None:
        mask = np.asarray(mask, dtype=bool)
        coc = coc[mask]
        dscr = dscr[mask]
        cap_rate = cap_rate[mask]

    n = int(coc.shape[0])
    n_infinite = int(np.isposinf(coc).sum())

    # averaging an infinity would swamp every other deal
    finite_coc = np.where(np.isfinite(coc), coc, np.nan)
    finite_dscr = np.where(np.isfinite(dscr), dscr, np.nan)
    finite_cap = np.where(np.isfinite(cap_rate), cap_rate, np.nan)

    def _stat(fn, x: np.ndarray, *args) -> float:
        if x.size == 0 or np.all(np.isnan(x)):
            return float("nan")
        return float(fn(x, *args))

    return PortfolioMetrics(
        n_deals=n,
        n_infinite_coc=n_infinite,
        mean_coc=_stat(np.nanmean, finite_coc),
        p5_coc=_stat(np.nanquantile, finite_coc, 0.05),
        p50_coc=_stat(np.nanquantile, finite_coc, 0.50),
        p95_coc=_stat(np.nanquantile, finite_coc, 0.95),
        mean_dscr=_stat(np.nanmean, finite_dscr),
        p5_dscr=_stat(np.nanquantile, finite_dscr, 0.05),
        p50_dscr=_stat(np.nanquantile, finite_dscr, 0.50),
        p95_dscr=_stat(np.nanquantile, finite_dscr, 0.95),
        mean_cap_rate=_stat(np.nanmean, finite_cap),
    )
