"""
config.py

Default assumptions and display tables shared by the engine and the shell.
Return rates are whole percents (8.0 means 8%).
"""

import logging
import os

APP_NAME = "Retirement Calculator"

DEFAULTS = {
    "retirement_goal": 5_000_000,
    "years_to_retirement": 15,
    "inflation_rate": 3.0,
    "yearly_contribution": 0,
}

# Default annual return per asset type (%)
DEFAULT_ASSET_TYPE_RETURNS = {
    "Private Equity": 12.0,
    "Stocks": 8.0,
    "Real Estate": 5.0,
    "Cash Deposit": 2.0,
    "Cash": 1.5,
    "401K": 7.0,
    "Bonus": 0.0,
}

UNKNOWN_ASSET_TYPE_RETURN = 5.0

# Weighted return used when the portfolio is empty
FALLBACK_WEIGHTED_RETURN = 0.05

FUTURE_VALUE_HORIZONS = (1, 3, 5, 10, 15)

CATEGORY_COLORS = {
    "US": "#34d399",
    "India": "#fbbf24",
    "Property": "#c084fc",
}

ASSET_TYPE_COLORS = {
    "Private Equity": "#ec4899",
    "Stocks": "#3b82f6",
    "Real Estate": "#8b5cf6",
    "Cash Deposit": "#10b981",
    "Cash": "#14b8a6",
    "401K": "#6366f1",
    "Bonus": "#f97316",
}
OTHER_COLOR = "#9ca3af"

SERIES_COLORS = {
    "totalAssets": "#ffffff",
    "targetGoal": "#ef4444",
    "additionalSavings": "#a5b4fc",
}

DEFAULT_VISIBLE_SERIES = {
    "totalAssets": True,
    "targetGoal": True,
    "additionalSavings": True,
    "Private Equity": True,
    "Stocks": True,
    "Real Estate": True,
    "Cash Deposit": False,
    "Cash": False,
    "401K": False,
    "Bonus": False,
    "US": False,
    "India": False,
    "Property": False,
}

LOG_LEVEL = os.environ.get("RETIREMENT_PLANNER_LOG_LEVEL", "INFO")
SNAPSHOT_PATH = os.environ.get("RETIREMENT_PLANNER_SNAPSHOT", "retirement_investments.json")


def configure_logging(level=None):
    """Set up root logging for the interactive shell."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
