import numpy as np
import pytest

from aggregation import (
    apply_allocations,
    asset_type_totals,
    category_totals,
    compute_allocations,
    summarize,
    total_assets,
    weighted_average_return,
)
from models import AssetTypeTable, Category, InvestmentEntry


# =====================================================
# Tests for totals
# =====================================================
def test_total_assets(sample_entries):
    assert total_assets(sample_entries) == 500000


def test_category_totals_cover_every_category(sample_entries):
    totals = category_totals(sample_entries)
    assert totals == {"US": 300000, "India": 200000, "Property": 0.0}
    assert sum(totals.values()) == total_assets(sample_entries)


def test_asset_type_totals_zero_filled(sample_entries):
    totals = asset_type_totals(sample_entries, AssetTypeTable())
    assert totals["Stocks"] == 100000
    assert totals["401K"] == 150000
    assert totals["Cash"] == 50000
    assert totals["Real Estate"] == 200000
    assert totals["Private Equity"] == 0.0
    assert list(totals)[:7] == list(AssetTypeTable())


def test_asset_type_totals_keeps_unregistered_types():
    entries = [InvestmentEntry("us1", "Crypto", "Crypto", 1000, 20.0, Category.US)]
    totals = asset_type_totals(entries, AssetTypeTable())
    assert list(totals)[-1] == "Crypto"
    assert totals["Crypto"] == 1000


# =====================================================
# Tests for weighted_average_return
# =====================================================
def test_weighted_average_return(sample_entries):
    expected = (100000 * 0.08 + 150000 * 0.07 + 50000 * 0.015 + 200000 * 0.05) / 500000
    assert np.isclose(weighted_average_return(sample_entries), expected)


def test_weighted_average_return_empty_fallback():
    assert weighted_average_return([]) == 0.05


def test_weighted_average_return_zero_total_fallback():
    entries = [InvestmentEntry("us1", "Empty", "Stocks", 0, 8.0, Category.US)]
    assert weighted_average_return(entries) == 0.05


# =====================================================
# Tests for allocations
# =====================================================
def test_allocations_sum_to_hundred(sample_entries):
    allocations = compute_allocations(sample_entries)
    assert np.isclose(sum(allocations.values()), 100.0)
    assert np.isclose(allocations["in1"], 40.0)


@pytest.mark.parametrize("amounts", [
    [1, 2, 3],
    [0.01, 1_000_000_000],
    [333.33, 333.33, 333.34, 0],
])
def test_allocations_sum_to_hundred_parametrized(amounts):
    entries = [
        InvestmentEntry(f"us{i}", f"Holding {i}", "Stocks", amount, 8.0, Category.US)
        for i, amount in enumerate(amounts)
    ]
    assert np.isclose(sum(compute_allocations(entries).values()), 100.0)


def test_allocations_zero_total():
    entries = [InvestmentEntry("us1", "Empty", "Stocks", 0, 8.0, Category.US)]
    assert compute_allocations(entries) == {"us1": 0.0}


def test_apply_allocations_writes_back(sample_entries):
    for inv in sample_entries:
        inv.allocation = -1
    apply_allocations(sample_entries)
    assert np.isclose(sum(inv.allocation for inv in sample_entries), 100.0)


def test_summarize(sample_entries):
    summary = summarize(sample_entries, AssetTypeTable())
    assert summary.total_assets == 500000
    assert summary.category_totals["India"] == 200000
    assert np.isclose(summary.weighted_average_return, 0.0585)
