"""
calculators.py

Provides the core calculation logic for:
- compound future value of a single amount
- projected value of the current holdings at the horizon
- the inflation-adjusted goal
- the additional annual savings needed to close the shortfall
"""

import logging
from typing import Dict, Iterable, Sequence

import pandas as pd

from config import FUTURE_VALUE_HORIZONS
from models import InvestmentEntry

logger = logging.getLogger(__name__)


def future_value(amount: float, rate_percent: float, years: int) -> float:
    """Value of `amount` after `years` of annual compounding at `rate_percent`."""
    return amount * ((1 + rate_percent / 100) ** years)


def inflation_factor(inflation_rate: float, years: int) -> float:
    return (1 + inflation_rate / 100) ** years


def inflation_adjusted_goal(retirement_goal: float, inflation_rate: float, years: int) -> float:
    """The goal expressed in money of the horizon year."""
    return retirement_goal * inflation_factor(inflation_rate, years)


def projected_future_value(investments: Iterable[InvestmentEntry], years: int) -> float:
    """
    Sums the future value of every holding after 'years', each compounding
    at its own return rate.
    """
    total = 0.0
    for investment in investments:
        total += investment.project_growth(years)
    return total


def annuity_payment(target: float, annual_rate: float, years: int) -> float:
    """
    Level end-of-year payment whose future value after `years` at `annual_rate`
    (a fraction) equals `target`.
    With a zero rate the payment is target / years; with no years left the whole
    target is due at once.
    """
    if years <= 0:
        return target
    if annual_rate == 0:
        return target / years
    return (target * annual_rate) / ((1 + annual_rate) ** years - 1)


def required_annual_savings(
    retirement_goal: float,
    inflation_rate: float,
    years_to_retirement: int,
    investments: Sequence[InvestmentEntry],
    weighted_return: float,
    yearly_contribution: float = 0.0,
) -> Dict[str, float]:
    """
    Extra yearly savings, beyond the planned contribution, needed to reach the
    inflation-adjusted goal. Never negative.

    Returns a dict with real_goal, projected_future_value, shortfall and
    required_annual_savings.
    """
    real_goal = inflation_adjusted_goal(retirement_goal, inflation_rate, years_to_retirement)
    projected = projected_future_value(investments, years_to_retirement)
    shortfall = real_goal - projected

    if years_to_retirement == 0:
        logger.warning("Zero-year horizon: the shortfall is due immediately")
    elif weighted_return == 0:
        logger.warning("Zero weighted return: spreading the shortfall evenly over %d years",
                       years_to_retirement)

    payment = annuity_payment(shortfall, weighted_return, years_to_retirement)
    required = max(0.0, payment - yearly_contribution)

    return {
        "real_goal": real_goal,
        "projected_future_value": projected,
        "shortfall": shortfall,
        "required_annual_savings": required,
    }


def future_value_table(
    investments: Iterable[InvestmentEntry],
    horizons: Sequence[int] = FUTURE_VALUE_HORIZONS,
) -> pd.DataFrame:
    """
    Future value of each holding at fixed horizons, indexed by entry id.
    Columns are the horizons in years.
    """
    rows = {
        inv.id: {years: future_value(inv.amount, inv.return_rate, years) for years in horizons}
        for inv in investments
    }
    frame = pd.DataFrame.from_dict(rows, orient="index", columns=list(horizons))
    return frame.astype(float)


def future_value_totals(
    investments: Iterable[InvestmentEntry],
    inflation_rate: float,
    horizons: Sequence[int] = FUTURE_VALUE_HORIZONS,
) -> pd.DataFrame:
    """
    Summed future value of all holdings at each horizon, as projected and in
    today's money. Rows are 'Total' and 'Inflation-Adjusted Total'; 'Amount'
    is today's total in both.
    """
    investments = list(investments)
    amount = sum(inv.amount for inv in investments)
    nominal = {
        years: sum(future_value(inv.amount, inv.return_rate, years) for inv in investments)
        for years in horizons
    }
    real = {years: nominal[years] / inflation_factor(inflation_rate, years) for years in horizons}
    rows = {
        "Total": {"Amount": amount, **nominal},
        "Inflation-Adjusted Total": {"Amount": amount, **real},
    }
    frame = pd.DataFrame.from_dict(rows, orient="index", columns=["Amount"] + list(horizons))
    return frame.astype(float)


def future_value_growth(totals: pd.DataFrame) -> pd.DataFrame:
    """Percent growth of each horizon total over 'Amount'; 0 when nothing is held."""
    amount = totals["Amount"]
    growth = totals.drop(columns="Amount").div(amount.where(amount != 0), axis=0)
    return ((growth - 1) * 100).fillna(0.0)
