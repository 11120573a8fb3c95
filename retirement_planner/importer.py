"""
importer.py

Bulk import of investments from an Excel or CSV file.

Required columns (matched case-insensitively):
    Location, Name, Asset Type, Amount, Return Rate

Return Rate is a whole percent (8 means 8%). Rows with a blank name or a zero or
blank amount are skipped. Any other bad row fails the whole import, and the
store is only touched once every row has been validated.
"""

import logging
import math
import os
from typing import List, Optional

import pandas as pd

from errors import ImportValidationError, UnknownAssetTypeError, UnknownCategoryError
from models import AssetTypeTable, Category, InvestmentEntry
from store import generate_id

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Location", "Name", "Asset Type", "Amount", "Return Rate"]
EXCEL_SUFFIXES = (".xlsx", ".xls")


def read_investment_file(source, filename: Optional[str] = None) -> pd.DataFrame:
    """
    Load the first sheet of an Excel workbook, or a CSV file, into a DataFrame.
    `source` may be a path or a file-like object; `filename` decides the format
    when the object carries no name.
    """
    name = filename or getattr(source, "name", None) or (source if isinstance(source, str) else "")
    suffix = os.path.splitext(str(name))[1].lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(source, sheet_name=0)
    if suffix == ".csv":
        return pd.read_csv(source)
    raise ImportValidationError(
        f"Unsupported file type {suffix or '(none)'}; upload an Excel (.xlsx) or CSV file"
    )


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def _to_number(value) -> float:
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


def parse_investment_rows(frame: pd.DataFrame,
                          asset_types: Optional[AssetTypeTable] = None) -> List[InvestmentEntry]:
    """Validate every row and build the replacement entry set."""
    asset_types = asset_types if asset_types is not None else AssetTypeTable()

    if frame is None or frame.empty:
        raise ImportValidationError("File is empty")

    columns = {str(col).strip().lower(): col for col in frame.columns}
    missing = [col for col in REQUIRED_COLUMNS if col.lower() not in columns]
    if missing:
        raise ImportValidationError(f"Missing required columns: {', '.join(missing)}",
                                    missing_columns=missing)

    def cell(row, column):
        return row[columns[column.lower()]]

    entries = []
    row_errors = []
    skipped = 0
    # Spreadsheet row numbers: the header is row 1
    for row_number, (_, row) in enumerate(frame.iterrows(), start=2):
        name = cell(row, "Name")
        amount_raw = cell(row, "Amount")
        if _is_blank(name) or _is_blank(amount_raw):
            skipped += 1
            continue

        errors = []
        try:
            amount = _to_number(amount_raw)
        except (TypeError, ValueError):
            errors.append(f"Amount {amount_raw!r} is not a number")
            amount = None
        if amount is not None and amount < 0:
            errors.append("Amount must not be negative")
        if amount == 0:
            skipped += 1
            continue

        try:
            category = Category.parse(cell(row, "Location"))
        except UnknownCategoryError as exc:
            errors.append(str(exc))
            category = None

        try:
            asset_type = asset_types.require(str(cell(row, "Asset Type")).strip())
        except UnknownAssetTypeError as exc:
            errors.append(str(exc))
            asset_type = None

        rate_raw = cell(row, "Return Rate")
        return_rate = None
        if _is_blank(rate_raw):
            if asset_type is not None:
                return_rate = asset_types.default_rate(asset_type)
        else:
            try:
                return_rate = _to_number(rate_raw)
            except (TypeError, ValueError):
                errors.append(f"Return Rate {rate_raw!r} is not a number")
        if return_rate is not None and return_rate < 0:
            errors.append("Return Rate must not be negative")

        if errors:
            row_errors.extend(f"row {row_number}: {message}" for message in errors)
            continue

        entries.append(InvestmentEntry(
            id=generate_id(category),
            name=str(name).strip(),
            asset_type=asset_type,
            amount=amount,
            return_rate=return_rate,
            category=category,
        ))

    if row_errors:
        raise ImportValidationError(
            f"Cannot import file: {len(row_errors)} problem(s) found. " + "; ".join(row_errors),
            row_errors=row_errors,
        )
    if skipped:
        logger.warning("Skipped %d row(s) with a blank name or amount", skipped)
    if not entries:
        raise ImportValidationError("File has no importable rows: every row has a blank name or a zero amount")
    return entries


def import_investments(store, source, filename: Optional[str] = None) -> int:
    """
    Replace every investment in `store` with the rows of the uploaded file.
    Returns the number of imported entries. The store is unchanged on failure.
    """
    frame = read_investment_file(source, filename)
    entries = parse_investment_rows(frame, store.asset_types)
    store.replace_all(entries)
    logger.info("Imported %d investments from %s", len(entries), filename or getattr(source, "name", source))
    return len(entries)
