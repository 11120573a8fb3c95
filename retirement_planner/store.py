"""
store.py

InvestmentStore keeps every holding in one ordered collection, each entry
tagged with its category. Allocations are refreshed after every change.
"""

import logging
import threading
import uuid
from typing import Dict, Iterable, List, Optional

from aggregation import apply_allocations, total_assets
from errors import UnknownCategoryError, UnknownInvestmentError
from models import AssetTypeTable, Category, InvestmentEntry
from sample_data import SAMPLE_INVESTMENTS

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "asset_type", "amount", "return_rate", "category")


def generate_id(category: Category) -> str:
    return f"{category.key}{uuid.uuid4().hex[:10]}"


def _check_amount(amount) -> float:
    amount = float(amount)
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got {amount}")
    return amount


class InvestmentStore:
    """
    Manages the investment entries. Reads that accompany a write are serialized
    through a re-entrant lock so the store can be shared between sessions.
    """

    def __init__(self, entries: Iterable[InvestmentEntry] = (),
                 asset_types: Optional[AssetTypeTable] = None):
        self.asset_types = asset_types if asset_types is not None else AssetTypeTable()
        self._lock = threading.RLock()
        self._entries: List[InvestmentEntry] = []
        self.replace_all(entries)

    # ---------- reads ----------
    def entries(self) -> List[InvestmentEntry]:
        with self._lock:
            return list(self._entries)

    def entries_in(self, category) -> List[InvestmentEntry]:
        category = Category.parse(category)
        with self._lock:
            return [inv for inv in self._entries if inv.category == category]

    def get(self, investment_id: str) -> InvestmentEntry:
        with self._lock:
            for inv in self._entries:
                if inv.id == investment_id:
                    return inv
        raise UnknownInvestmentError(investment_id)

    def total(self) -> float:
        with self._lock:
            return total_assets(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    # ---------- writes ----------
    def add(self, name: str, asset_type: str, amount: float, category,
            return_rate: Optional[float] = None) -> InvestmentEntry:
        category = Category.parse(category)
        asset_type = self.asset_types.require(asset_type)
        amount = _check_amount(amount)
        if return_rate is None:
            return_rate = self.asset_types.default_rate(asset_type)
        entry = InvestmentEntry(
            id=generate_id(category),
            name=name,
            asset_type=asset_type,
            amount=amount,
            return_rate=float(return_rate),
            category=category,
        )
        with self._lock:
            self._entries.append(entry)
            self._refresh()
        logger.info("Added %s (%s, %s) to %s", entry.id, name, asset_type, category.value)
        return entry

    def remove(self, investment_id: str) -> InvestmentEntry:
        with self._lock:
            entry = self.get(investment_id)
            self._entries.remove(entry)
            self._refresh()
        logger.info("Removed %s", investment_id)
        return entry

    def update(self, investment_id: str, field: str, value) -> InvestmentEntry:
        """
        Edit one field of an entry. Changing the asset type also resets the
        return rate to that type's default.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Cannot edit field {field!r}; editable fields are {', '.join(EDITABLE_FIELDS)}")
        with self._lock:
            entry = self.get(investment_id)
            if field == "name":
                entry.name = str(value)
            elif field == "amount":
                entry.amount = _check_amount(value)
            elif field == "return_rate":
                entry.return_rate = float(value)
            elif field == "asset_type":
                entry.asset_type = self.asset_types.require(value)
                entry.return_rate = self.asset_types.default_rate(entry.asset_type)
            elif field == "category":
                entry.category = Category.parse(value)
            self._refresh()
        logger.info("Updated %s.%s", investment_id, field)
        return entry

    def move(self, investment_id: str, from_category, to_category) -> InvestmentEntry:
        from_category = Category.parse(from_category)
        to_category = Category.parse(to_category)
        with self._lock:
            entry = self.get(investment_id)
            if entry.category != from_category:
                raise UnknownCategoryError(
                    f"Investment {investment_id!r} is in {entry.category.value}, not {from_category.value}"
                )
            entry.category = to_category
            self._refresh()
        logger.info("Moved %s from %s to %s", investment_id, from_category.value, to_category.value)
        return entry

    def replace_all(self, entries: Iterable[InvestmentEntry]) -> None:
        entries = list(entries)
        with self._lock:
            self._entries = entries
            self._refresh()
        logger.info("Loaded %d investments", len(entries))

    def reset(self, snapshot: Optional[Dict[str, list]] = None) -> None:
        """Replace everything with `snapshot`, or the bundled sample data."""
        if snapshot is None:
            snapshot = SAMPLE_INVESTMENTS
        self.replace_all(entries_from_snapshot(snapshot))

    def rescale_total(self, new_total: float) -> None:
        """
        Set the total assets, scaling every amount by the same ratio. From a zero
        total the new total is split in thirds across the categories and evenly
        within each non-empty one.
        """
        new_total = _check_amount(new_total)
        with self._lock:
            current = total_assets(self._entries)
            if current == 0:
                share = new_total / len(Category)
                for category in Category:
                    members = [inv for inv in self._entries if inv.category == category]
                    for inv in members:
                        inv.amount = share / len(members)
            else:
                ratio = new_total / current
                for inv in self._entries:
                    inv.amount *= ratio
            self._refresh()
        logger.info("Rescaled total assets to %.2f", new_total)

    def _refresh(self) -> None:
        apply_allocations(self._entries)

    # ---------- snapshots ----------
    def snapshot(self) -> Dict[str, list]:
        with self._lock:
            return {
                category.value: [inv.to_dict() for inv in self._entries if inv.category == category]
                for category in Category
            }

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, list],
                      asset_types: Optional[AssetTypeTable] = None) -> "InvestmentStore":
        return cls(entries_from_snapshot(snapshot), asset_types)


def entries_from_snapshot(snapshot: Dict[str, list]) -> List[InvestmentEntry]:
    """Flatten a {category: [entry dicts]} snapshot into tagged entries."""
    entries = []
    for category_name, rows in snapshot.items():
        category = Category.parse(category_name)
        for row in rows:
            entries.append(InvestmentEntry.from_dict(row, category=category))
    return entries
