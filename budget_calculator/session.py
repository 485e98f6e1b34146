"""Session state glue between Streamlit, the allocator and the store.

Streamlit reruns the page script on every interaction, so the allocator,
ledger and income settings are kept in ``st.session_state`` and restored from
the store only on the first run of a session.  Functions here accept any
mutable mapping as ``state`` so they can be exercised without Streamlit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, MutableMapping, Optional

from .allocator import Allocator, Category, LockVector, PercentVector, coerce_points
from .income import IncomeSettings
from .ledger import ExpenseLedger
from .storage import BudgetStore

logger = logging.getLogger(__name__)

ALLOCATOR_KEY = 'allocator'
LEDGER_KEY = 'expense_ledger'
INCOME_KEY = 'income_settings'
ENTRY_KEY = 'percent_entry'
STORE_KEY = '_budget_store'


def persist_allocation(store: BudgetStore) -> Callable[[PercentVector, LockVector], None]:
    def _save(percents: PercentVector, locks: LockVector) -> None:
        store.save_percents(percents)
        store.save_locks(locks)
    return _save


def ensure_state(state: MutableMapping[str, Any], store: Optional[BudgetStore] = None) -> None:
    """Populate session state from the store on the first run of a session."""
    store = state.setdefault(STORE_KEY, store or BudgetStore())
    if ALLOCATOR_KEY not in state:
        state[ALLOCATOR_KEY] = Allocator(
            percents=store.load_percents(),
            locks=store.load_locks(),
            on_change=persist_allocation(store),
        )
        logger.info("Restored allocation %s", state[ALLOCATOR_KEY].percents.as_fractions())
    if LEDGER_KEY not in state:
        state[LEDGER_KEY] = store.load_expenses()
    if INCOME_KEY not in state:
        state[INCOME_KEY] = store.load_income()
    if ENTRY_KEY not in state:
        state[ENTRY_KEY] = PercentEntry()


def get_store(state: MutableMapping[str, Any]) -> BudgetStore:
    return state[STORE_KEY]


def get_allocator(state: MutableMapping[str, Any]) -> Allocator:
    return state[ALLOCATOR_KEY]


def get_ledger(state: MutableMapping[str, Any]) -> ExpenseLedger:
    return state[LEDGER_KEY]


def get_income(state: MutableMapping[str, Any]) -> IncomeSettings:
    return state[INCOME_KEY]


def get_entry(state: MutableMapping[str, Any]) -> "PercentEntry":
    return state[ENTRY_KEY]


def persist_ledger(state: MutableMapping[str, Any]) -> None:
    get_store(state).save_expenses(get_ledger(state))


def update_income(state: MutableMapping[str, Any], pay_amount: Any, frequency: Any) -> IncomeSettings:
    settings = IncomeSettings(pay_amount=pay_amount, frequency=frequency)
    current = state.get(INCOME_KEY)
    state[INCOME_KEY] = settings
    if settings != current:
        get_store(state).save_income(settings)
    return settings


@dataclass
class PercentEntry:
    """Draft value of the typed percentage field.

    Only one category is edited at a time.  ``commit`` hands the draft to the
    allocator (Enter or blur); ``cancel`` drops it (Escape).
    """

    category: Optional[Category] = None
    draft: int = 0

    @property
    def active(self) -> bool:
        return self.category is not None

    def begin(self, category: Category | str, current: int) -> None:
        self.category = Category.parse(category)
        self.draft = coerce_points(current)

    def update(self, raw: Any) -> int:
        self.draft = coerce_points(raw)
        return self.draft

    def commit(self, allocator: Allocator) -> Optional[PercentVector]:
        if self.category is None:
            return None
        category, draft = self.category, self.draft
        self.cancel()
        return allocator.rebalance(category, draft)

    def cancel(self) -> None:
        self.category = None
        self.draft = 0
