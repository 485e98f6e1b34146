"""JSON key/value store for the allocation, locks, expenses and income settings.

Every record is stored under its own key in a single JSON file.  Reads never
fail: a missing file, a corrupt file, or a malformed record falls back to the
default value for that record only.  Writes are fire-and-forget; failures are
logged and swallowed so a read-only or full disk never breaks the dashboard.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from . import config
from .allocator import CATEGORIES, LockVector, PercentVector, to_points
from .income import IncomeSettings
from .ledger import ExpenseLedger

logger = logging.getLogger(__name__)


class BudgetStore:
    """Handles reading and writing persisted records."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else config.STORE_PATH

    # Raw records -----------------------------------------------------------

    def load_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read budget store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring budget store %s: expected an object", self.path)
            return {}
        return data

    def get(self, key: str) -> Any:
        return self.load_all().get(key)

    def put(self, key: str, value: Any) -> bool:
        """Write one record, keeping the others.  Returns False on failure."""
        data = self.load_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save %s to %s: %s", key, self.path, exc)
            return False
        return True

    # Typed records -----------------------------------------------------------

    def load_percents(self) -> PercentVector:
        return deserialize_percents(self.get(config.STORAGE_PERCENTS))

    def save_percents(self, percents: PercentVector) -> bool:
        return self.put(config.STORAGE_PERCENTS, serialize_percents(percents))

    def load_locks(self) -> LockVector:
        return deserialize_locks(self.get(config.STORAGE_LOCKS))

    def save_locks(self, locks: LockVector) -> bool:
        return self.put(config.STORAGE_LOCKS, serialize_locks(locks))

    def load_expenses(self) -> ExpenseLedger:
        return ExpenseLedger.from_dict(self.get(config.STORAGE_EXPENSES))

    def save_expenses(self, ledger: ExpenseLedger) -> bool:
        return self.put(config.STORAGE_EXPENSES, ledger.to_dict())

    def load_income(self) -> IncomeSettings:
        return IncomeSettings.from_dict(self.get(config.STORAGE_INCOME))

    def save_income(self, settings: IncomeSettings) -> bool:
        return self.put(config.STORAGE_INCOME, settings.to_dict())


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def serialize_percents(percents: PercentVector) -> Dict[str, float]:
    return percents.as_fractions()


def deserialize_percents(raw: Any) -> PercentVector:
    """Restore a percent vector from its ``{category: fraction}`` form.

    Missing or malformed fields take their default; if the restored values
    do not add up to 100 the whole record falls back to the default split.
    """
    default = PercentVector.default()
    if raw is None:
        return default
    if not isinstance(raw, dict):
        logger.warning("Malformed %s record, using defaults", config.STORAGE_PERCENTS)
        return default
    points = {}
    for category in CATEGORIES:
        value = raw.get(category.value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            points[category] = default[category]
        else:
            points[category] = to_points(min(1.0, max(0.0, float(value))))
    try:
        return PercentVector.from_points(points)
    except ValueError as exc:
        logger.warning("Discarding stored %s: %s", config.STORAGE_PERCENTS, exc)
        return default


def serialize_locks(locks: LockVector) -> Dict[str, bool]:
    return locks.as_dict()


def deserialize_locks(raw: Any) -> LockVector:
    if raw is None:
        return LockVector()
    if not isinstance(raw, dict):
        logger.warning("Malformed %s record, using defaults", config.STORAGE_LOCKS)
        return LockVector()
    values = {}
    for category in CATEGORIES:
        value = raw.get(category.value)
        values[category.value] = value if isinstance(value, bool) else False
    return LockVector(**values)
