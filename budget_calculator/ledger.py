"""Expense line items grouped under the three budget categories."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pandas as pd

from . import config
from .allocator import CATEGORIES, Category
from .formatting import to_amount

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class ExpenseItem:
    id: str
    name: str = ''
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        self.name = str(self.name or '')
        self.amount = to_amount(self.amount)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'amount': float(self.amount)}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["ExpenseItem"]:
        if not isinstance(raw, dict):
            return None
        item_id = raw.get('id')
        if not isinstance(item_id, str) or not item_id:
            return None
        return cls(id=item_id, name=raw.get('name') or '', amount=raw.get('amount', 0))


@dataclass
class ExpenseLedger:
    """One ordered list of expense items per category."""

    items: Dict[Category, List[ExpenseItem]] = field(
        default_factory=lambda: {c: [] for c in CATEGORIES}
    )

    # Public API -------------------------------------------------------------

    def entries(self, category: Category | str) -> List[ExpenseItem]:
        return list(self.items[Category.parse(category)])

    def add(self, category: Category | str, name: str = '', amount: Any = 0) -> ExpenseItem:
        item = ExpenseItem(id=new_id(), name=name, amount=amount)
        self.items[Category.parse(category)].append(item)
        return item

    def remove(self, category: Category | str, item_id: str) -> bool:
        bucket = self.items[Category.parse(category)]
        kept = [item for item in bucket if item.id != item_id]
        if len(kept) == len(bucket):
            return False
        bucket[:] = kept
        return True

    def rename(self, category: Category | str, item_id: str, name: str) -> None:
        item = self._find(category, item_id)
        if item is not None:
            item.name = str(name or '')

    def set_amount(self, category: Category | str, item_id: str, amount: Any) -> None:
        item = self._find(category, item_id)
        if item is not None:
            item.amount = to_amount(amount)

    def total(self, category: Category | str) -> Decimal:
        return sum((item.amount for item in self.items[Category.parse(category)]), Decimal(0))

    def totals(self) -> Dict[Category, Decimal]:
        return {c: self.total(c) for c in CATEGORIES}

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                'Category': config.CATEGORY_LABELS[category.value],
                'Item': item.name,
                'Amount': float(item.amount),
            }
            for category in CATEGORIES
            for item in self.items[category]
        ]
        return pd.DataFrame(rows, columns=['Category', 'Item', 'Amount'])

    # Persistence -------------------------------------------------------------

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {c.value: [item.to_dict() for item in self.items[c]] for c in CATEGORIES}

    @classmethod
    def from_dict(cls, raw: Any) -> "ExpenseLedger":
        ledger = cls()
        if raw is None:
            return ledger
        if not isinstance(raw, dict):
            logger.warning("Malformed %s record, using an empty ledger", config.STORAGE_EXPENSES)
            return ledger
        for category in CATEGORIES:
            entries = raw.get(category.value)
            if not isinstance(entries, list):
                continue
            for entry in entries:
                item = ExpenseItem.from_dict(entry)
                if item is None:
                    logger.warning("Skipping malformed expense in %s: %r", category.value, entry)
                    continue
                ledger.items[category].append(item)
        return ledger

    # Internal ----------------------------------------------------------------

    def _find(self, category: Category | str, item_id: str) -> Optional[ExpenseItem]:
        for item in self.items[Category.parse(category)]:
            if item.id == item_id:
                return item
        return None
