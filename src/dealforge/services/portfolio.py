from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from joblib import Parallel, delayed

from dealforge.adapters.logging_utils import get_logger, log_event
from dealforge.analysis.engine import calculate
from dealforge.domain.deals import DealInputs
from dealforge.domain.metrics import PortfolioMetrics, headline_metrics, summarize_portfolio
from dealforge.domain.results import DealResults

logger = get_logger(__name__)


@dataclass
class PortfolioAnalysis:
    results: List[DealResults]
    metrics: PortfolioMetrics


def analyze_portfolio(deals: Sequence[DealInputs], *, n_jobs: int = 1) -> PortfolioAnalysis:
    """
    Map: run every deal through its calculator.
    Reduce: collapse the headline figures into portfolio stats.
    """
    if n_jobs == 1:
        results = [calculate(deal) for deal in deals]
    else:
        results = Parallel(n_jobs=n_jobs)(delayed(calculate)(deal) for deal in deals)

    headlines = [headline_metrics(r) for r in results]
    metrics = summarize_portfolio(
        coc=np.array([h.cash_on_cash for h in headlines], dtype=float),
        dscr=np.array([h.dscr for h in headlines], dtype=float),
        cap_rate=np.array([h.cap_rate for h in headlines], dtype=float),
    )

    log_event(
        logger,
        "portfolio analyzed",
        n_deals=metrics.n_deals,
        n_infinite_coc=metrics.n_infinite_coc,
        mean_coc=metrics.mean_coc,
        mean_dscr=metrics.mean_dscr,
    )
    return PortfolioAnalysis(results=list(results), metrics=metrics)
