"""
Tiered LP/GP distribution waterfall driven by LP IRR hurdles.

Each hurdle (the preferred return, then every later tier's irr_hurdle) keeps
an LP "hurdle account": LP capital compounded annually at the hurdle rate,
less every dollar the LP has received. An account at zero means the LP's IRR
has reached that hurdle. Cash in a period flows:

  1. pref tier:   100% to the LP until the preferred-return account clears
                  (this returns LP capital and any unpaid pref, compounded)
  2. catch-up:    optional, 100% to the GP until it holds its first-tier share
                  of the profit paid so far
  3. tier k:      split lp_split/gp_split until the LP account at tier k+1's
                  hurdle clears; the amount is closed-form, remaining / lp_split
  4. last tier:   everything left

Every dollar handed in is handed out, so LP + GP totals equal the cash.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from dealforge.domain.deals import CatchUpPolicy, WaterfallTier


@dataclass(frozen=True)
class WaterfallPeriod:
    period: int
    cash: float
    lp: float
    gp: float
    pref_paid: float
    catch_up_paid: float
    tier_paid: tuple[float, ...]


@dataclass(frozen=True)
class WaterfallResult:
    periods: tuple[WaterfallPeriod, ...]
    lp_total: float
    gp_total: float
    pref_total: float
    catch_up_total: float
    tier_totals: tuple[float, ...]

    @property
    def lp_by_period(self) -> list[float]:
        return [p.lp for p in self.periods]

    @property
    def gp_by_period(self) -> list[float]:
        return [p.gp for p in self.periods]


def _catch_up_due(
    tier: WaterfallTier,
    lp_pref_received: float,
    lp_equity: float,
    catch_up_paid: float,
) -> float:
    if tier.lp_split <= 0:
        return 0.0
    pref_profit = max(0.0, lp_pref_received - lp_equity)
    target = pref_profit * tier.gp_split / tier.lp_split
    return max(0.0, target - catch_up_paid)


def distribute(
    cash_by_period: Sequence[float],
    lp_equity: float,
    preferred_return: float,
    tiers: Sequence[WaterfallTier],
    catch_up: CatchUpPolicy = CatchUpPolicy.NONE,
) -> WaterfallResult:
    """
    Run `cash_by_period` (periods 1..N, non-negative) through the waterfall.

    `preferred_return` and tier hurdles are annual percents; the LP contributed
    `lp_equity` at period 0.
    """
    if not tiers:
        raise ValueError("waterfall needs at least one tier")

    hurdle_rates = [preferred_return] + [t.irr_hurdle or 0.0 for t in tiers[1:]]
    accounts = [max(lp_equity, 0.0)] * len(hurdle_rates)

    periods: list[WaterfallPeriod] = []
    tier_totals = [0.0] * len(tiers)
    lp_total = gp_total = pref_total = catch_up_total = 0.0
    lp_pref_received = 0.0

    def pay_lp(amount: float) -> None:
        for j in range(len(accounts)):
            accounts[j] = max(0.0, accounts[j] - amount)

    for period, cash in enumerate(cash_by_period, start=1):
        accounts = [a * (1.0 + rate / 100.0) for a, rate in zip(accounts, hurdle_rates)]
        remaining = max(float(cash), 0.0)
        lp = gp = 0.0

        # 1. preferred return / return of capital
        pref_paid = min(remaining, accounts[0])
        remaining -= pref_paid
        lp += pref_paid
        lp_pref_received += pref_paid
        pay_lp(pref_paid)

        # 2. GP catch-up
        catch_up_paid = 0.0
        if catch_up == CatchUpPolicy.FULL and remaining > 0 and accounts[0] <= 0:
            due = _catch_up_due(tiers[0], lp_pref_received, lp_equity, catch_up_total)
            catch_up_paid = min(remaining, due)
            remaining -= catch_up_paid
            gp += catch_up_paid
            catch_up_total += catch_up_paid

        # 3./4. split tiers
        tier_paid = [0.0] * len(tiers)
        for i, tier in enumerate(tiers):
            if remaining <= 0:
                break
            is_last = i == len(tiers) - 1
            if is_last or tier.lp_split <= 0:
                cap = math.inf
            else:
                cap = accounts[i + 1] / (tier.lp_split / 100.0)
            amount = min(remaining, cap)
            if amount <= 0:
                continue
            lp_part = amount * tier.lp_split / 100.0
            gp_part = amount - lp_part
            lp += lp_part
            gp += gp_part
            pay_lp(lp_part)
            remaining -= amount
            tier_paid[i] = amount
            tier_totals[i] += amount

        periods.append(
            WaterfallPeriod(
                period=period,
                cash=float(cash),
                lp=lp,
                gp=gp,
                pref_paid=pref_paid,
                catch_up_paid=catch_up_paid,
                tier_paid=tuple(tier_paid),
            )
        )
        lp_total += lp
        gp_total += gp
        pref_total += pref_paid

    return WaterfallResult(
        periods=tuple(periods),
        lp_total=lp_total,
        gp_total=gp_total,
        pref_total=pref_total,
        catch_up_total=catch_up_total,
        tier_totals=tuple(tier_totals),
    )
