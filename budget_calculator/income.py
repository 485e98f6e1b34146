"""Monthly income derived from a paycheck amount and pay frequency."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Tuple

from . import config
from .formatting import to_amount

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def frequency_options() -> List[Tuple[str, str]]:
    """(value, label) pairs in display order."""
    return [(key, config.FREQUENCY_LABELS[key]) for key in config.FREQUENCY_MULTIPLIERS]


def normalize_frequency(value: Any) -> str:
    key = str(value or '').strip().lower()
    if key not in config.FREQUENCY_MULTIPLIERS:
        return config.DEFAULT_FREQUENCY
    return key


def monthly_income(pay_amount: Any, frequency: Any) -> Decimal:
    """Convert a paycheck amount to a monthly figure, rounded to cents."""
    multiplier = Decimal(str(config.FREQUENCY_MULTIPLIERS[normalize_frequency(frequency)]))
    return (to_amount(pay_amount) * multiplier).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class IncomeSettings:
    pay_amount: Decimal = Decimal(0)
    frequency: str = config.DEFAULT_FREQUENCY

    def __post_init__(self) -> None:
        self.pay_amount = to_amount(self.pay_amount)
        self.frequency = normalize_frequency(self.frequency)

    def monthly_income(self) -> Decimal:
        return monthly_income(self.pay_amount, self.frequency)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pay_amount': float(self.pay_amount),
            'frequency': self.frequency,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "IncomeSettings":
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            logger.warning("Malformed %s record, using defaults", config.STORAGE_INCOME)
            return cls()
        return cls(
            pay_amount=raw.get('pay_amount', 0),
            frequency=raw.get('frequency', config.DEFAULT_FREQUENCY),
        )
