"""
formatting.py

Display helpers for money and percentages.
"""

import pandas as pd


def format_currency(value, decimals: int = 0) -> str:
    """Format as US dollars, e.g. 1234.5 -> '$1,235' and -50 -> '-$50'."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(float(value)):,.{decimals}f}"


def format_currency_value(value, decimals: int = 0) -> str:
    """Same as format_currency without the dollar sign."""
    return format_currency(value, decimals).replace("$", "", 1)


def format_percentage(value, decimals: int = 2) -> str:
    """`value` is a whole percent: 8 -> '8.00%'."""
    return f"{float(value):,.{decimals}f}%"


# -----------------------------------------------
# Helper: Safe Formatter for Pandas Styler
# -----------------------------------------------
def safe_formatter(fmt):
    def formatter(x):
        if x is None or pd.isna(x):
            return ""
        return fmt.format(x)
    return formatter
