from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AmortizationStep:
    period: int
    interest: float
    principal: float
    ending_balance: float


@dataclass(frozen=True)
class PaydownSplit:
    principal_paid: float
    interest_paid: float


def monthly_rate(annual_rate_percent: float) -> float:
    """Annual percent (e.g. 7.0) -> monthly decimal rate."""
    return annual_rate_percent / 100.0 / 12.0


def monthly_payment(principal: float, monthly_rate: float, num_payments: int) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]

    Returns 0 for a non-positive principal and straight-line principal / n
    when the rate is zero.
    """
    if principal <= 0 or num_payments <= 0:
        return 0.0
    r = monthly_rate
    n = num_payments
    if r == 0:
        return principal / n

    growth = (1 + r) ** n
    if growth == 1:
        # rate too small to register in float precision
        return principal / n
    return principal * (r * growth) / (growth - 1)


def interest_only_payment(principal: float, annual_rate_percent: float) -> float:
    if principal <= 0 or annual_rate_percent <= 0:
        return 0.0
    return principal * monthly_rate(annual_rate_percent)


def amortization_schedule(
    principal: float,
    monthly_rate: float,
    payment: float,
    periods: int,
) -> list[AmortizationStep]:
    """
    Period-by-period schedule: interest = balance * rate, principal = payment - interest.

    Every year-1 / 5-year / exit-balance figure is derived from this loop rather
    than a closed form so results line up with a printed amortization table.

    The final payment is capped at the remaining balance plus interest; periods
    past payoff are zero steps.
    """
    if principal <= 0 or payment <= 0:
        return []

    steps: list[AmortizationStep] = []
    balance = principal
    for period in range(1, periods + 1):
        if balance <= 0:
            steps.append(AmortizationStep(period=period, interest=0.0, principal=0.0, ending_balance=0.0))
            continue
        interest = balance * monthly_rate
        principal_part = min(payment - interest, balance)
        balance -= principal_part
        steps.append(
            AmortizationStep(
                period=period,
                interest=interest,
                principal=principal_part,
                ending_balance=balance,
            )
        )
    return steps


def amortize(principal: float, monthly_rate: float, payment: float, periods: int) -> PaydownSplit:
    """Sum principal and interest over the first `periods` payments."""
    steps = amortization_schedule(principal, monthly_rate, payment, periods)
    return PaydownSplit(
        principal_paid=sum(s.principal for s in steps),
        interest_paid=sum(s.interest for s in steps),
    )


def remaining_balance(principal: float, monthly_rate: float, payment: float, periods: int) -> float:
    if principal <= 0:
        return 0.0
    steps = amortization_schedule(principal, monthly_rate, payment, periods)
    if not steps:
        return principal
    return max(steps[-1].ending_balance, 0.0)
