import numpy as np
import pytest

from errors import UnknownAssetTypeError, UnknownCategoryError, UnknownInvestmentError
from models import AssetTypeTable, Category
from store import InvestmentStore


# =====================================================
# Tests for add / remove
# =====================================================
def test_add_uses_asset_type_default_rate():
    store = InvestmentStore()
    entry = store.add("Angel Round", "Private Equity", 25000, "us")
    assert entry.return_rate == 12.0
    assert entry.category is Category.US
    assert entry.id.startswith("us")
    assert store.get(entry.id) is entry


def test_add_with_explicit_rate_and_ids_are_unique():
    store = InvestmentStore()
    first = store.add("Fund A", "Stocks", 1000, "India", return_rate=9.5)
    second = store.add("Fund B", "Stocks", 1000, "India")
    assert first.return_rate == 9.5
    assert first.id != second.id
    assert first.id.startswith("india")


def test_add_unknown_asset_type_rejected():
    store = InvestmentStore()
    with pytest.raises(UnknownAssetTypeError):
        store.add("Beanie Babies", "Collectibles", 1000, "US")
    assert len(store) == 0


def test_add_registered_asset_type():
    table = AssetTypeTable()
    table.register("Crypto", 15.0)
    store = InvestmentStore(asset_types=table)
    assert store.add("Coins", "crypto", 1000, "US").return_rate == 15.0


def test_add_unknown_category_rejected():
    with pytest.raises(UnknownCategoryError):
        InvestmentStore().add("Fund", "Stocks", 1000, "Mars")


def test_add_negative_amount_rejected():
    store = InvestmentStore()
    with pytest.raises(ValueError):
        store.add("Loan", "Cash", -100, "US")
    assert len(store) == 0


def test_remove(sample_store):
    sample_store.remove("us3")
    assert sample_store.total() == 450000
    with pytest.raises(UnknownInvestmentError):
        sample_store.get("us3")


def test_remove_unknown_is_key_error(sample_store):
    with pytest.raises(KeyError):
        sample_store.remove("nope")


# =====================================================
# Tests for update / move
# =====================================================
def test_update_amount_refreshes_allocations(sample_store):
    sample_store.update("in1", "amount", 500000)
    entry = sample_store.get("in1")
    assert np.isclose(entry.allocation, 62.5)
    assert np.isclose(sum(inv.allocation for inv in sample_store.entries()), 100.0)


def test_update_asset_type_resets_return_rate(sample_store):
    sample_store.update("us1", "return_rate", 10.0)
    entry = sample_store.update("us1", "asset_type", "Cash Deposit")
    assert entry.asset_type == "Cash Deposit"
    assert entry.return_rate == 2.0


def test_update_rejects_unknown_field(sample_store):
    with pytest.raises(ValueError):
        sample_store.update("us1", "id", "hacked")


def test_update_negative_amount_rejected(sample_store):
    with pytest.raises(ValueError):
        sample_store.update("us1", "amount", -100000)
    assert sample_store.get("us1").amount == 100000
    assert np.isclose(sum(inv.allocation for inv in sample_store.entries()), 100.0)


def test_move_between_categories(sample_store):
    sample_store.move("us1", "US", "Property")
    assert sample_store.get("us1").category is Category.PROPERTY
    assert [inv.id for inv in sample_store.entries_in("Property")] == ["us1"]
    assert "us1" not in [inv.id for inv in sample_store.entries_in("US")]
    assert sample_store.total() == 500000


def test_move_from_wrong_category(sample_store):
    with pytest.raises(UnknownCategoryError):
        sample_store.move("us1", "India", "Property")
    assert sample_store.get("us1").category is Category.US


# =====================================================
# Tests for allocations, totals and snapshots
# =====================================================
def test_allocations_sum_to_hundred(sample_store):
    assert np.isclose(sum(inv.allocation for inv in sample_store.entries()), 100.0)


def test_allocations_zero_total():
    store = InvestmentStore()
    entry = store.add("Empty", "Cash", 0, "US")
    assert entry.allocation == 0.0


def test_rescale_total_proportional(sample_store):
    sample_store.rescale_total(1_000_000)
    assert np.isclose(sample_store.total(), 1_000_000)
    assert np.isclose(sample_store.get("in1").amount, 400000)


def test_rescale_total_negative_rejected(sample_store):
    with pytest.raises(ValueError):
        sample_store.rescale_total(-1)
    assert sample_store.total() == 500000


def test_rescale_total_from_zero_splits_by_category():
    store = InvestmentStore()
    us_a = store.add("A", "Stocks", 0, "US")
    us_b = store.add("B", "Stocks", 0, "US")
    india = store.add("C", "Real Estate", 0, "India")
    store.rescale_total(300000)
    assert np.isclose(us_a.amount, 50000)
    assert np.isclose(us_b.amount, 50000)
    assert np.isclose(india.amount, 100000)


def test_reset_restores_sample_data(sample_store):
    sample_store.replace_all([])
    assert len(sample_store) == 0
    sample_store.reset()
    assert sample_store.total() == 500000
    assert len(sample_store.entries_in("US")) == 3


def test_snapshot_round_trip(sample_store):
    snapshot = sample_store.snapshot()
    assert set(snapshot) == {"US", "India", "Property"}
    assert snapshot["Property"] == []
    restored = InvestmentStore.from_snapshot(snapshot)
    assert [inv.to_dict() for inv in restored.entries()] == [inv.to_dict() for inv in sample_store.entries()]
