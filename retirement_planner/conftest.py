import pytest

from models import Category, InvestmentEntry, ProjectionParameters
from store import InvestmentStore


@pytest.fixture
def sample_store():
    store = InvestmentStore()
    store.reset()
    return store


@pytest.fixture
def sample_entries(sample_store):
    return sample_store.entries()


@pytest.fixture
def single_stock():
    return InvestmentEntry(
        id="us1",
        name="US Stock Fund",
        asset_type="Stocks",
        amount=100000,
        return_rate=8.0,
        category=Category.US,
    )


@pytest.fixture
def default_parameters():
    return ProjectionParameters(
        retirement_goal=5_000_000,
        years_to_retirement=15,
        inflation_rate=3.0,
        yearly_contribution=0,
    )
