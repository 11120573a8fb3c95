"""
aggregation.py

Portfolio-level sums over a snapshot of investment entries:
- total and per-category / per-asset-type subtotals
- allocation percentages
- amount-weighted average return
"""

from typing import Dict, Iterable, List, Optional

from config import FALLBACK_WEIGHTED_RETURN
from models import AssetTypeTable, Category, InvestmentEntry, PortfolioSummary


def total_assets(entries: Iterable[InvestmentEntry]) -> float:
    return sum((inv.amount for inv in entries), 0.0)


def category_totals(entries: Iterable[InvestmentEntry]) -> Dict[str, float]:
    """Subtotal per category; every category is present, empty ones at 0."""
    totals = {category.value: 0.0 for category in Category}
    for inv in entries:
        totals[inv.category.value] += inv.amount
    return totals


def asset_type_totals(entries: Iterable[InvestmentEntry],
                      asset_types: Optional[AssetTypeTable] = None) -> Dict[str, float]:
    """
    Subtotal per asset type. Types from `asset_types` come first (zero-filled),
    followed by any other type that appears in the entries.
    """
    totals = {name: 0.0 for name in (asset_types or [])}
    for inv in entries:
        totals[inv.asset_type] = totals.get(inv.asset_type, 0.0) + inv.amount
    return totals


def weighted_average_return(entries: Iterable[InvestmentEntry]) -> float:
    """
    Amount-weighted mean of the entry return rates, as a fraction (0.08 for 8%).
    Falls back to 5% when there is nothing to weight.
    """
    entries = list(entries)
    total = total_assets(entries)
    if total == 0:
        return FALLBACK_WEIGHTED_RETURN
    return sum((inv.amount / total) * (inv.return_rate / 100) for inv in entries)


def compute_allocations(entries: Iterable[InvestmentEntry]) -> Dict[str, float]:
    """Percent of total assets per entry id; all zero when the total is zero."""
    entries = list(entries)
    total = total_assets(entries)
    if total == 0:
        return {inv.id: 0.0 for inv in entries}
    return {inv.id: inv.amount / total * 100 for inv in entries}


def apply_allocations(entries: List[InvestmentEntry]) -> None:
    """Write freshly computed allocations back onto the entries."""
    allocations = compute_allocations(entries)
    for inv in entries:
        inv.allocation = allocations[inv.id]


def summarize(entries: Iterable[InvestmentEntry],
              asset_types: Optional[AssetTypeTable] = None) -> PortfolioSummary:
    entries = list(entries)
    return PortfolioSummary(
        total_assets=total_assets(entries),
        category_totals=category_totals(entries),
        asset_type_totals=asset_type_totals(entries, asset_types),
        weighted_average_return=weighted_average_return(entries),
        allocations=compute_allocations(entries),
    )
