"""
models.py

Contains the data classes shared by every part of the planner:
- Category (the fixed US / India / Property partitions)
- AssetTypeTable (asset type -> default annual return)
- InvestmentEntry (one holding)
- ProjectionParameters (goal, horizon, inflation, planned contribution)
- PortfolioSummary, ProjectionPoint, ProjectionResult (derived outputs)
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

import pandas as pd

from config import DEFAULTS, DEFAULT_ASSET_TYPE_RETURNS, UNKNOWN_ASSET_TYPE_RETURN
from errors import UnknownAssetTypeError, UnknownCategoryError


class Category(str, Enum):
    US = "US"
    INDIA = "India"
    PROPERTY = "Property"

    @property
    def key(self) -> str:
        """Lower-case key, used as the id prefix."""
        return self.value.lower()

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for category in cls:
            if category.key == text:
                return category
        raise UnknownCategoryError(
            f"Unknown location {value!r}; expected one of {', '.join(c.value for c in cls)}"
        )


class AssetTypeTable:
    """
    Ordered table of asset types and their default annual return (%).
    Seeded from the config defaults; extended only through register().
    """

    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self._rates: Dict[str, float] = dict(DEFAULT_ASSET_TYPE_RETURNS if rates is None else rates)

    def register(self, name: str, default_rate: float) -> None:
        name = name.strip()
        if not name:
            raise UnknownAssetTypeError("Asset type name must not be blank")
        self._rates[name] = float(default_rate)

    def default_rate(self, name: str) -> float:
        return self._rates.get(name, UNKNOWN_ASSET_TYPE_RETURN)

    def require(self, name: str) -> str:
        """Return the canonical spelling of a registered asset type."""
        if name in self._rates:
            return name
        lowered = str(name).strip().lower()
        for known in self._rates:
            if known.lower() == lowered:
                return known
        raise UnknownAssetTypeError(
            f"Unknown asset type {name!r}; expected one of {', '.join(self._rates)}"
        )

    def names(self) -> Tuple[str, ...]:
        return tuple(self._rates)

    def as_dict(self) -> Dict[str, float]:
        return dict(self._rates)

    def __contains__(self, name) -> bool:
        return name in self._rates

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)


@dataclass
class InvestmentEntry:
    """
    A single holding. `allocation` is derived (percent of total assets) and is
    only meaningful for the snapshot it was last computed against.
    """
    id: str
    name: str
    asset_type: str
    amount: float
    return_rate: float
    category: Category
    allocation: float = 0.0

    def project_growth(self, years: int) -> float:
        """Value of this holding after `years` of compounding at its own rate."""
        return self.amount * ((1 + self.return_rate / 100) ** years)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: dict, category=None) -> "InvestmentEntry":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            asset_type=str(data["asset_type"]),
            amount=float(data.get("amount", 0.0)),
            return_rate=float(data.get("return_rate", 0.0)),
            category=Category.parse(category if category is not None else data["category"]),
            allocation=float(data.get("allocation", 0.0)),
        )


@dataclass(frozen=True)
class ProjectionParameters:
    """
    Externally supplied projection inputs.
    inflation_rate is a whole percent; retirement_goal is in today's money.
    """
    retirement_goal: float = DEFAULTS["retirement_goal"]
    years_to_retirement: int = DEFAULTS["years_to_retirement"]
    inflation_rate: float = DEFAULTS["inflation_rate"]
    yearly_contribution: float = DEFAULTS["yearly_contribution"]

    def __post_init__(self):
        if int(self.years_to_retirement) != self.years_to_retirement or self.years_to_retirement < 0:
            raise ValueError("years_to_retirement must be a non-negative integer.")
        if self.yearly_contribution < 0:
            raise ValueError("yearly_contribution must not be negative.")
        object.__setattr__(self, "years_to_retirement", int(self.years_to_retirement))


@dataclass(frozen=True)
class PortfolioSummary:
    total_assets: float
    category_totals: Dict[str, float]
    asset_type_totals: Dict[str, float]
    weighted_average_return: float
    allocations: Dict[str, float]


@dataclass(frozen=True)
class ProjectionPoint:
    """One year of the projection. Money fields are rounded to whole units."""
    year: int
    total_assets: int
    real_value: int
    target_goal: int
    additional_savings: int
    by_asset_type: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)

    def as_row(self) -> dict:
        row = {
            "year": self.year,
            "totalAssets": self.total_assets,
            "realValue": self.real_value,
            "targetGoal": self.target_goal,
            "additionalSavings": self.additional_savings,
        }
        row.update(self.by_asset_type)
        row.update(self.by_category)
        return row


@dataclass(frozen=True)
class ProjectionResult:
    parameters: ProjectionParameters
    summary: PortfolioSummary
    real_goal: float
    projected_future_value: float
    shortfall: float
    required_annual_savings: float
    points: Tuple[ProjectionPoint, ...]

    @property
    def weighted_average_return(self) -> float:
        return self.summary.weighted_average_return

    def to_frame(self) -> pd.DataFrame:
        """One row per year, columns keyed the way the chart series are named."""
        return pd.DataFrame([p.as_row() for p in self.points])
