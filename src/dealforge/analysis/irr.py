"""
IRR over evenly spaced (annual) cash flows.

Newton's method from a 10% guess, falling back to bisection on a bracketed
root when Newton wanders outside the configured bounds or stalls. Rates are
solved as decimals and reported as percents. When there is no sign change,
or neither method converges, the IRR is undefined and `None` is returned
instead of a misleading number.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from dealforge.adapters.config import config
from dealforge.adapters.logging_utils import get_logger, log_event

logger = get_logger(__name__)


def npv(rate: float, cash_flows: Sequence[float]) -> float:
    """NPV at `rate` (decimal) with the first flow at t=0."""
    cf = np.asarray(cash_flows, dtype=float)
    t = np.arange(cf.shape[0], dtype=float)
    return float(np.sum(cf / (1.0 + rate) ** t))


def _npv_derivative(rate: float, cf: np.ndarray, t: np.ndarray) -> float:
    return float(np.sum(-t * cf / (1.0 + rate) ** (t + 1.0)))


def _bisect(
    cf: np.ndarray,
    lo: float,
    hi: float,
    tolerance: float,
    max_iterations: int,
) -> Optional[float]:
    f_lo = npv(lo, cf)
    f_hi = npv(hi, cf)
    if f_lo == 0:
        return lo
    if f_hi == 0:
        return hi
    if np.sign(f_lo) == np.sign(f_hi):
        return None

    for _ in range(max_iterations):
        mid = (lo + hi) / 2.0
        f_mid = npv(mid, cf)
        if f_mid == 0 or (hi - lo) / 2.0 < tolerance:
            return mid
        if np.sign(f_mid) == np.sign(f_lo):
            lo, f_lo = mid, f_mid
        else:
            hi = mid
    return None


def irr(
    cash_flows: Sequence[float],
    *,
    guess: float = 0.10,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> Optional[float]:
    """
    Internal rate of return as a percent (12.5 for 12.5%), or None if undefined.

    Flows that change sign more than once have no unique rate and are treated
    as undefined.
    """
    tolerance = tolerance if tolerance is not None else config.IRR_TOLERANCE
    max_iterations = max_iterations if max_iterations is not None else config.IRR_MAX_ITERATIONS
    lo_bound = config.IRR_LOWER_BOUND
    hi_bound = config.IRR_UPPER_BOUND

    cf = np.asarray(cash_flows, dtype=float)
    if cf.shape[0] < 2 or not np.all(np.isfinite(cf)):
        return None
    if not (np.any(cf < 0) and np.any(cf > 0)):
        return None
    signs = np.sign(cf[cf != 0])
    if np.count_nonzero(signs[1:] != signs[:-1]) > 1:
        # more than one sign change admits several roots
        return None

    t = np.arange(cf.shape[0], dtype=float)

    # both methods stop once the rate moves less than `tolerance`
    rate = guess
    for _ in range(max_iterations):
        value = npv(rate, cf)
        if value == 0:
            return rate * 100.0
        slope = _npv_derivative(rate, cf, t)
        if slope == 0 or not np.isfinite(slope):
            break
        next_rate = rate - value / slope
        if not (lo_bound < next_rate < hi_bound) or not np.isfinite(next_rate):
            break
        if abs(next_rate - rate) < tolerance:
            return next_rate * 100.0
        rate = next_rate

    root = _bisect(cf, lo_bound, hi_bound, tolerance, max_iterations * 4)
    if root is None:
        log_event(
            logger,
            "irr did not converge",
            level=logging.WARNING,
            periods=int(cf.shape[0]),
            total_in=float(-cf[cf < 0].sum()),
            total_out=float(cf[cf > 0].sum()),
        )
        return None
    return root * 100.0


def equity_multiple(distributions: float, contributed: float) -> float:
    if contributed > 0:
        return distributions / contributed
    return 0.0
