from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


def pct(value: float, percent: float) -> float:
    """`percent` of `value`, percent given as 0-100."""
    return value * (percent / 100.0)


def ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Division guarded against a non-positive denominator."""
    if denominator > 0:
        return numerator / denominator
    return default


def ratio_pct(numerator: float, denominator: float, default: float = 0.0) -> float:
    if denominator > 0:
        return numerator / denominator * 100.0
    return default


class SingleDoorAssumptions(Protocol):
    monthly_rent: float
    other_income: float
    vacancy_rate: float
    property_tax_annual: float
    insurance_annual: float
    hoa_monthly: float
    maintenance_percent: float
    capex_percent: float
    management_percent: float


@dataclass(frozen=True)
class MonthlyOperations:
    gross_monthly_income: float
    vacancy_loss: float
    effective_gross_income: float
    total_monthly_expenses: float

    @property
    def noi_annual(self) -> float:
        # NOI is income after vacancy + operating expenses, BEFORE debt.
        return (self.effective_gross_income - self.total_monthly_expenses) * 12.0


def monthly_operations(inputs: SingleDoorAssumptions) -> MonthlyOperations:
    """
    Income and operating expenses for a rental-style deal (rental, BRRRR).

    Operating expenses do NOT include the mortgage. Percentage buckets
    (maintenance, capex, management) are charged on gross monthly income.
    """
    gross = inputs.monthly_rent + inputs.other_income
    vacancy_loss = pct(gross, inputs.vacancy_rate)
    effective = gross - vacancy_loss

    expenses = (
        inputs.property_tax_annual / 12.0
        + inputs.insurance_annual / 12.0
        + inputs.hoa_monthly
        + pct(gross, inputs.maintenance_percent)
        + pct(gross, inputs.capex_percent)
        + pct(gross, inputs.management_percent)
    )

    return MonthlyOperations(
        gross_monthly_income=gross,
        vacancy_loss=vacancy_loss,
        effective_gross_income=effective,
        total_monthly_expenses=expenses,
    )
