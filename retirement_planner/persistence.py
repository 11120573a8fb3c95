"""
persistence.py

Saves and restores the investment snapshot as a small JSON document:
{"investments": {"US": [...], "India": [...], "Property": [...]}, "last_updated": "..."}
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, Optional

from errors import SnapshotError

logger = logging.getLogger(__name__)


def save_snapshot(store, path: str) -> None:
    document = {
        "investments": store.snapshot(),
        "last_updated": datetime.now().isoformat(timespec="seconds"),
    }
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(document, fh, indent=2)
    logger.info("Investments saved to %s", path)


def load_snapshot(path: str) -> Optional[Dict[str, list]]:
    """
    Return the saved snapshot, or None if nothing has been saved yet.
    Raises SnapshotError when the file exists but cannot be used.
    """
    if not os.path.exists(path):
        return None
    try:
        with open(path, encoding="utf-8") as fh:
            document = json.load(fh)
        investments = document["investments"]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise SnapshotError(f"Cannot read saved investments from {path}: {exc}") from exc
    if not isinstance(investments, dict):
        raise SnapshotError(f"Saved investments in {path} are not a category mapping")
    logger.info("Investments loaded from %s (last updated: %s)", path, document.get("last_updated", "unknown"))
    return investments


def clear_snapshot(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)
        logger.info("Cleared saved investments at %s", path)
