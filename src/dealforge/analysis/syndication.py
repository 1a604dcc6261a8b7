"""
Multi-year syndication projection.

capitalization -> monthly debt schedule (interest-only then amortizing)
-> yearly operations with rent/expense growth -> exit at a cap rate
-> tiered LP/GP waterfall -> IRRs, multiples and a sensitivity grid.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dealforge.adapters.config import config
from dealforge.adapters.logging_utils import get_logger, log_event
from dealforge.analysis.irr import equity_multiple, irr
from dealforge.analysis.operations import pct, ratio, ratio_pct
from dealforge.analysis.waterfall import WaterfallResult, distribute
from dealforge.domain.deals import SyndicationInputs
from dealforge.domain.finance import amortization_schedule, monthly_payment, monthly_rate
from dealforge.domain.results import SensitivityRow, SyndicationResults, SyndicationYear

logger = get_logger(__name__)


@dataclass(frozen=True)
class _DebtYear:
    debt_service: float
    interest: float
    principal: float
    ending_balance: float


@dataclass(frozen=True)
class _OperatingYear:
    gross_potential_rent: float
    other_income: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float


@dataclass(frozen=True)
class _Projection:
    total_capitalization: float
    acquisition_fee: float
    loan_amount: float
    total_equity: float
    lp_equity: float
    gp_equity: float
    operations: list[_OperatingYear]
    debt: list[_DebtYear]
    asset_management_fees: list[float]
    cash_flows: list[float]
    distributable: list[float]
    exit_noi: float
    exit_value: float
    disposition_costs: float
    loan_balance_at_exit: float
    net_sale_proceeds: float
    waterfall: WaterfallResult


def _debt_by_year(inputs: SyndicationInputs, loan_amount: float) -> list[_DebtYear]:
    """
    Monthly loop rolled up to years. Interest-only months pay interest on the
    full balance; amortization then runs over `amortization_years` from
    whatever balance remains.
    """
    hold_months = inputs.hold_period_years * 12
    io_months = inputs.interest_only_years * 12 if inputs.interest_only else 0
    io_months = min(io_months, hold_months)
    rate = monthly_rate(inputs.interest_rate)

    # (interest, principal, ending balance) per month
    months: list[tuple[float, float, float]] = [
        (loan_amount * rate, 0.0, loan_amount) for _ in range(io_months)
    ]
    amortizing_months = hold_months - io_months
    if amortizing_months > 0:
        payment = monthly_payment(loan_amount, rate, inputs.amortization_years * 12)
        steps = amortization_schedule(loan_amount, rate, payment, amortizing_months)
        if steps:
            months.extend((s.interest, s.principal, s.ending_balance) for s in steps)
        else:
            months.extend((0.0, 0.0, loan_amount) for _ in range(amortizing_months))

    years: list[_DebtYear] = []
    for y in range(inputs.hold_period_years):
        chunk = months[y * 12:(y + 1) * 12]
        interest = sum(m[0] for m in chunk)
        principal = sum(m[1] for m in chunk)
        years.append(
            _DebtYear(
                debt_service=interest + principal,
                interest=interest,
                principal=principal,
                ending_balance=max(chunk[-1][2], 0.0),
            )
        )
    return years


def _operating_year(inputs: SyndicationInputs, year: int, rent_growth_rate: float) -> _OperatingYear:
    """Year `year` (1-based) of operations; expenses grow off the year-1 ratio."""
    rent_factor = (1.0 + rent_growth_rate / 100.0) ** (year - 1)
    expense_factor = (1.0 + inputs.expense_growth_rate / 100.0) ** (year - 1)

    gpr = inputs.gross_potential_rent * rent_factor
    other = inputs.other_income * rent_factor
    vacancy = pct(gpr, inputs.vacancy_rate)
    egi = gpr + other - vacancy

    year1_egi = (
        inputs.gross_potential_rent
        + inputs.other_income
        - pct(inputs.gross_potential_rent, inputs.vacancy_rate)
    )
    opex = pct(year1_egi, inputs.operating_expense_ratio) * expense_factor

    return _OperatingYear(
        gross_potential_rent=gpr,
        other_income=other,
        vacancy_loss=vacancy,
        effective_gross_income=egi,
        operating_expenses=opex,
        net_operating_income=egi - opex,
    )


def _distributable_cash(cash_flows: list[float]) -> list[float]:
    """A negative year is carried forward and netted against later cash."""
    out: list[float] = []
    shortfall = 0.0
    for cash in cash_flows:
        net = cash - shortfall
        if net >= 0:
            out.append(net)
            shortfall = 0.0
        else:
            out.append(0.0)
            shortfall = -net
    return out


def _project(inputs: SyndicationInputs, exit_cap_rate: float, rent_growth_rate: float) -> _Projection:
    acquisition_fee = pct(inputs.purchase_price, inputs.acquisition_fee_percent)
    total_capitalization = (
        inputs.purchase_price + inputs.closing_costs + inputs.capex_reserve + acquisition_fee
    )
    loan_amount = pct(inputs.purchase_price, inputs.loan_to_value)
    total_equity = max(0.0, total_capitalization - loan_amount)
    lp_equity = pct(total_equity, inputs.lp_equity_percent)
    gp_equity = pct(total_equity, inputs.gp_equity_percent)

    debt = _debt_by_year(inputs, loan_amount)
    operations = [
        _operating_year(inputs, year, rent_growth_rate)
        for year in range(1, inputs.hold_period_years + 1)
    ]
    am_fees = [
        pct(op.effective_gross_income, inputs.asset_management_fee_percent) for op in operations
    ]
    cash_flows = [
        op.net_operating_income - d.debt_service - fee
        for op, d, fee in zip(operations, debt, am_fees)
    ]

    # --- exit on forward (year N+1) NOI ---
    exit_noi = _operating_year(
        inputs, inputs.hold_period_years + 1, rent_growth_rate
    ).net_operating_income
    exit_value = ratio(exit_noi, exit_cap_rate / 100.0)
    disposition_costs = pct(exit_value, inputs.disposition_fee_percent)
    loan_balance_at_exit = debt[-1].ending_balance
    net_sale_proceeds = exit_value - disposition_costs - loan_balance_at_exit

    period_cash = list(cash_flows)
    period_cash[-1] += net_sale_proceeds
    distributable = _distributable_cash(period_cash)

    waterfall = distribute(
        distributable,
        lp_equity=lp_equity,
        preferred_return=inputs.preferred_return,
        tiers=inputs.tiers,
        catch_up=inputs.catch_up,
    )

    return _Projection(
        total_capitalization=total_capitalization,
        acquisition_fee=acquisition_fee,
        loan_amount=loan_amount,
        total_equity=total_equity,
        lp_equity=lp_equity,
        gp_equity=gp_equity,
        operations=operations,
        debt=debt,
        asset_management_fees=am_fees,
        cash_flows=cash_flows,
        distributable=distributable,
        exit_noi=exit_noi,
        exit_value=exit_value,
        disposition_costs=disposition_costs,
        loan_balance_at_exit=loan_balance_at_exit,
        net_sale_proceeds=net_sale_proceeds,
        waterfall=waterfall,
    )


def _lp_flows(p: _Projection) -> list[float]:
    return [-p.lp_equity] + p.waterfall.lp_by_period


def _gp_flows(p: _Projection, include_fees: bool = False) -> list[float]:
    flows = [-p.gp_equity] + p.waterfall.gp_by_period
    if include_fees:
        flows[0] += p.acquisition_fee
        for i, fee in enumerate(p.asset_management_fees, start=1):
            flows[i] += fee
    return flows


def sensitivity_grid(inputs: SyndicationInputs) -> list[SensitivityRow]:
    """
    LP/GP returns across exit-cap and rent-growth offsets. Offsets come from
    config; a grid point with a non-positive exit cap has no meaningful
    value and is skipped.
    """
    rows: list[SensitivityRow] = []
    for cap_step in config.SENSITIVITY_EXIT_CAP_STEPS:
        exit_cap = inputs.exit_cap_rate + cap_step
        if exit_cap <= 0:
            continue
        for growth_step in config.SENSITIVITY_RENT_GROWTH_STEPS:
            growth = inputs.rent_growth_rate + growth_step
            p = _project(inputs, exit_cap, growth)
            rows.append(
                SensitivityRow(
                    exit_cap_rate=exit_cap,
                    rent_growth_rate=growth,
                    exit_value=p.exit_value,
                    lp_irr=irr(_lp_flows(p)),
                    gp_irr=irr(_gp_flows(p)),
                    lp_equity_multiple=equity_multiple(p.waterfall.lp_total, p.lp_equity),
                    gp_equity_multiple=equity_multiple(p.waterfall.gp_total, p.gp_equity),
                )
            )
    return rows


def calculate_syndication(inputs: SyndicationInputs, with_sensitivity: bool = True) -> SyndicationResults:
    p = _project(inputs, inputs.exit_cap_rate, inputs.rent_growth_rate)
    wf = p.waterfall

    yearly: list[SyndicationYear] = []
    cum_lp = cum_gp = 0.0
    for i, (op, d) in enumerate(zip(p.operations, p.debt)):
        period = wf.periods[i]
        cum_lp += period.lp
        cum_gp += period.gp
        yearly.append(
            SyndicationYear(
                year=i + 1,
                gross_potential_rent=op.gross_potential_rent,
                other_income=op.other_income,
                vacancy_loss=op.vacancy_loss,
                effective_gross_income=op.effective_gross_income,
                operating_expenses=op.operating_expenses,
                net_operating_income=op.net_operating_income,
                debt_service=d.debt_service,
                interest_paid=d.interest,
                principal_paid=d.principal,
                asset_management_fee=p.asset_management_fees[i],
                cash_flow=p.cash_flows[i],
                distributable_cash=p.distributable[i],
                lp_distribution=period.lp,
                gp_distribution=period.gp,
                cumulative_lp_distributions=cum_lp,
                cumulative_gp_distributions=cum_gp,
                ending_loan_balance=d.ending_balance,
                cash_on_cash=ratio_pct(p.cash_flows[i], p.total_equity),
            )
        )

    total_distributable = float(np.sum(p.distributable))
    total_distributions = wf.lp_total + wf.gp_total
    gp_pro_rata = pct(total_distributions, inputs.gp_equity_percent)

    lp_irr = irr(_lp_flows(p))
    gp_irr = irr(_gp_flows(p))
    gp_irr_with_fees = irr(_gp_flows(p, include_fees=True))

    sensitivity = sensitivity_grid(inputs) if with_sensitivity else []

    log_event(
        logger,
        "syndication projected",
        hold_period_years=inputs.hold_period_years,
        total_equity=p.total_equity,
        lp_irr=lp_irr,
        gp_irr=gp_irr,
        sensitivity_points=len(sensitivity),
    )

    return SyndicationResults(
        total_capitalization=p.total_capitalization,
        loan_amount=p.loan_amount,
        total_equity=p.total_equity,
        lp_equity_contribution=p.lp_equity,
        gp_equity_contribution=p.gp_equity,
        exit_noi=p.exit_noi,
        exit_value=p.exit_value,
        disposition_costs=p.disposition_costs,
        loan_balance_at_exit=p.loan_balance_at_exit,
        net_sale_proceeds=p.net_sale_proceeds,
        total_distributable_cash=total_distributable,
        lp_total_distributions=wf.lp_total,
        gp_total_distributions=wf.gp_total,
        lp_equity_multiple=equity_multiple(wf.lp_total, p.lp_equity),
        gp_equity_multiple=equity_multiple(wf.gp_total, p.gp_equity),
        lp_irr=lp_irr,
        gp_irr=gp_irr,
        gp_irr_with_fees=gp_irr_with_fees,
        gp_promote=max(0.0, wf.gp_total - gp_pro_rata),
        gp_catch_up=wf.catch_up_total,
        tier_distributions=(wf.pref_total,) + wf.tier_totals,
        total_acquisition_fees=p.acquisition_fee,
        total_asset_management_fees=float(np.sum(p.asset_management_fees)),
        year1_noi=p.operations[0].net_operating_income,
        year1_debt_service_coverage_ratio=ratio(
            p.operations[0].net_operating_income, p.debt[0].debt_service
        ),
        average_cash_on_cash=float(np.mean([y.cash_on_cash for y in yearly])),
        total_project_profit=total_distributions - p.total_equity,
        yearly=tuple(yearly),
        sensitivity=tuple(sensitivity),
    )
