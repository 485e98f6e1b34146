"""Configuration management for the budget calculator.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict

# Base project root - assumes this file is in budget_calculator/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGETCALC_DATA_DIR", _PROJECT_ROOT / "data"))

# Key/value store backing every persisted record
STORE_PATH = Path(
    os.getenv("BUDGETCALC_STORE_PATH", DATA_DIR / "budget_store.json")
).resolve()

LOG_LEVEL = os.getenv("BUDGETCALC_LOG_LEVEL", "INFO").upper()

# Record keys in the store
STORAGE_PERCENTS = "budget_percents_v1"
STORAGE_LOCKS = "budget_locks_v1"
STORAGE_EXPENSES = "budget_expenses_v1"
STORAGE_INCOME = "budget_income_v1"

# Allocation defaults, in integer percentage points
DEFAULT_PERCENTS: Dict[str, int] = {
    "needs": 50,
    "wants": 30,
    "savings": 20,
}

CATEGORY_LABELS: Dict[str, str] = {
    "needs": "Needs",
    "wants": "Wants",
    "savings": "Savings / Debt",
}

# Pay frequency -> paychecks per month
FREQUENCY_MULTIPLIERS: Dict[str, float] = {
    "weekly": 3.8,
    "biweekly": 2,
    "monthly": 1,
}
FREQUENCY_LABELS: Dict[str, str] = {
    "weekly": "Weekly",
    "biweekly": "Bi-Weekly",
    "monthly": "Monthly",
}
DEFAULT_FREQUENCY = "weekly"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    for directory in [DATA_DIR, STORE_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the Streamlit process."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
