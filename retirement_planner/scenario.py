"""
scenario.py

Encapsulates projection runs:
- aggregates the current holdings
- solves for the additional annual savings
- year-by-year simulation for charting and tables
"""

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Optional

import numpy as np

import calculators
from aggregation import summarize
from models import (
    AssetTypeTable,
    Category,
    InvestmentEntry,
    ProjectionParameters,
    ProjectionPoint,
    ProjectionResult,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def project(
    investments: Iterable[InvestmentEntry],
    parameters: ProjectionParameters,
    asset_types: Optional[AssetTypeTable] = None,
) -> ProjectionResult:
    """
    Full projection for a snapshot of holdings. Pure: the entries are not modified
    and identical inputs give identical results.

    Each holding compounds at its own rate. Planned contributions and the required
    savings are added at the start of every year and the running savings pot then
    grows at the snapshot's weighted average return.
    """
    investments: List[InvestmentEntry] = list(investments)
    asset_types = asset_types if asset_types is not None else AssetTypeTable()
    years = parameters.years_to_retirement

    summary = summarize(investments, asset_types)
    weighted_return = summary.weighted_average_return
    if summary.total_assets == 0:
        logger.warning("No invested assets; using the %.0f%% fallback return", weighted_return * 100)

    solved = calculators.required_annual_savings(
        parameters.retirement_goal,
        parameters.inflation_rate,
        years,
        investments,
        weighted_return,
        parameters.yearly_contribution,
    )
    annual_savings = solved["required_annual_savings"]

    # 1) Working copy of each principal
    amounts = np.array([inv.amount for inv in investments], dtype=float)
    growth = np.array([1 + inv.return_rate / 100 for inv in investments], dtype=float)

    type_names = list(summary.asset_type_totals)
    type_masks = {
        name: np.array([inv.asset_type == name for inv in investments], dtype=bool)
        for name in type_names
    }
    category_masks = {
        category.value: np.array([inv.category == category for inv in investments], dtype=bool)
        for category in Category
    }

    cumulative_savings = 0.0
    points = []

    # 2) Loop through each year, recording first and growing after
    for year in range(years + 1):
        by_type = {name: round_half_up(float(amounts[mask].sum())) for name, mask in type_masks.items()}
        by_category = {name: round_half_up(float(amounts[mask].sum())) for name, mask in category_masks.items()}

        total = float(amounts.sum()) + cumulative_savings
        factor = calculators.inflation_factor(parameters.inflation_rate, year)

        points.append(ProjectionPoint(
            year=year,
            total_assets=round_half_up(total),
            real_value=round_half_up(total / factor),
            target_goal=round_half_up(parameters.retirement_goal * factor),
            additional_savings=round_half_up(cumulative_savings),
            by_asset_type=by_type,
            by_category=by_category,
        ))
        logger.debug("Year %d: total=%.2f savings=%.2f", year, total, cumulative_savings)

        if year < years:
            amounts = amounts * growth
            cumulative_savings = (
                cumulative_savings + parameters.yearly_contribution + annual_savings
            ) * (1 + weighted_return)

    logger.info(
        "Projected %d years: goal %.0f, weighted return %.2f%%, required savings %.0f/yr",
        years, solved["real_goal"], weighted_return * 100, annual_savings,
    )

    return ProjectionResult(
        parameters=parameters,
        summary=summary,
        real_goal=solved["real_goal"],
        projected_future_value=solved["projected_future_value"],
        shortfall=solved["shortfall"],
        required_annual_savings=annual_savings,
        points=tuple(points),
    )


class ScenarioManager:
    """
    Pairs an investment store with the current parameters and reruns the
    projection from scratch whenever asked.
    """

    def __init__(self, store, parameters: Optional[ProjectionParameters] = None):
        self.store = store
        self.parameters = parameters or ProjectionParameters()

    def update_parameters(self, **changes) -> ProjectionParameters:
        self.parameters = replace(self.parameters, **changes)
        return self.parameters

    def run(self) -> ProjectionResult:
        return project(self.store.entries(), self.parameters, self.store.asset_types)
