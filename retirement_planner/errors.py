"""
errors.py

Exceptions raised by the store, importer and persistence layers.
The numeric engine itself never raises for degenerate input.
"""

from typing import List, Optional


class PlannerError(Exception):
    """Base class for all planner errors."""


class UnknownInvestmentError(PlannerError, KeyError):
    def __init__(self, investment_id: str):
        super().__init__(investment_id)
        self.investment_id = investment_id

    def __str__(self):
        return f"No investment with id {self.investment_id!r}"


class UnknownCategoryError(PlannerError, ValueError):
    pass


class UnknownAssetTypeError(PlannerError, ValueError):
    pass


class SnapshotError(PlannerError):
    pass


class ImportValidationError(PlannerError, ValueError):
    """
    Raised when an uploaded investment file cannot be imported.
    Nothing in the store is changed when this is raised.
    """

    def __init__(self, message: str, missing_columns: Optional[List[str]] = None,
                 row_errors: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_columns = list(missing_columns or [])
        self.row_errors = list(row_errors or [])
