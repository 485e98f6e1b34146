"""Needs/wants/savings allocation vector and its rebalancing rules.

The allocation is held as integer percentage points (0..100) and only
converted to fractions at the presentation and storage boundary.  Every
transition keeps three invariants:

* the three values sum to exactly 100,
* each value stays within [0, 100],
* a locked category never moves as a side effect of another edit.

The rebalancing algorithm lives in :func:`redistribute`; :class:`Allocator`
wraps it with the current vector, the lock flags and a change callback used
for persistence.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from . import config

logger = logging.getLogger(__name__)

TOTAL_POINTS = 100


class Category(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"

    @property
    def label(self) -> str:
        return config.CATEGORY_LABELS[self.value]

    @classmethod
    def parse(cls, value: Any) -> "Category":
        """Return the category for an enum member or its (case-insensitive) key."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown budget category: {value!r}") from None


# Iteration order matters for rounding tie-breaks.
CATEGORIES: tuple[Category, ...] = (Category.NEEDS, Category.WANTS, Category.SAVINGS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def clamp(value: int, lo: int = 0, hi: int = TOTAL_POINTS) -> int:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going towards positive infinity."""
    return int(math.floor(value + 0.5))


def coerce_points(value: Any) -> int:
    """Turn user input into a percentage point in [0, 100].

    Non-numeric and non-finite values become 0; everything else is rounded
    and clamped.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return clamp(round_half_up(number))


def to_points(fraction: Any) -> int:
    """Convert a 0..1 fraction to integer percentage points."""
    try:
        number = float(fraction)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return clamp(round_half_up(number * TOTAL_POINTS))


def to_fraction(points: int) -> float:
    return points / TOTAL_POINTS


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PercentVector:
    """Integer percentage points for the three categories.

    Construction fails with ``ValueError`` if the values leave [0, 100] or do
    not sum to 100; callers restoring untrusted data should catch it and fall
    back to :meth:`default`.
    """

    needs: int
    wants: int
    savings: int

    def __post_init__(self) -> None:
        values = [self.needs, self.wants, self.savings]
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Percentages must be integers, got {value!r}")
            if not 0 <= value <= TOTAL_POINTS:
                raise ValueError(f"Percentage out of range: {value}")
        if sum(values) != TOTAL_POINTS:
            raise ValueError(f"Percentages must sum to {TOTAL_POINTS}, got {sum(values)}")

    def __getitem__(self, category: Category | str) -> int:
        return getattr(self, Category.parse(category).value)

    @property
    def total(self) -> int:
        return self.needs + self.wants + self.savings

    @classmethod
    def default(cls) -> "PercentVector":
        return cls.from_points(config.DEFAULT_PERCENTS)

    @classmethod
    def from_points(cls, points: Mapping[Any, int]) -> "PercentVector":
        values = {Category.parse(key).value: value for key, value in points.items()}
        return cls(**{c.value: values[c.value] for c in CATEGORIES})

    @classmethod
    def from_fractions(cls, fractions: Mapping[Any, Any]) -> "PercentVector":
        return cls.from_points({key: to_points(value) for key, value in fractions.items()})

    def as_points(self) -> Dict[Category, int]:
        return {c: self[c] for c in CATEGORIES}

    def as_fractions(self) -> Dict[str, float]:
        return {c.value: to_fraction(self[c]) for c in CATEGORIES}


@dataclass(frozen=True)
class LockVector:
    needs: bool = False
    wants: bool = False
    savings: bool = False

    def __getitem__(self, category: Category | str) -> bool:
        return getattr(self, Category.parse(category).value)

    def toggled(self, category: Category | str) -> "LockVector":
        key = Category.parse(category).value
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values[key] = not values[key]
        return LockVector(**values)

    def locked(self) -> List[Category]:
        return [c for c in CATEGORIES if self[c]]

    def as_dict(self) -> Dict[str, bool]:
        return {c.value: self[c] for c in CATEGORIES}


# ---------------------------------------------------------------------------
# Rebalancing
# ---------------------------------------------------------------------------


def _absorber(provisional: Mapping[Category, int], candidates: Iterable[Category], fix: int) -> Category:
    """Pick the category that soaks up the rounding drift.

    A positive fix goes to the smallest value (last one wins a tie); a
    negative fix comes out of the largest value (first one wins a tie).
    """
    pick: Optional[Category] = None
    for category in candidates:
        if pick is None:
            pick = category
        elif fix > 0 and provisional[category] <= provisional[pick]:
            pick = category
        elif fix < 0 and provisional[category] > provisional[pick]:
            pick = category
    assert pick is not None
    return pick


def redistribute(
    current: Mapping[Category, int],
    locks: LockVector,
    target: Category,
    desired: Any,
) -> Dict[Category, int]:
    """Move ``target`` towards ``desired`` and rebalance the unlocked others.

    Args:
        current: Integer points per category, summing to 100
        locks: Lock flags; locked categories are never changed
        target: Category being edited
        desired: Requested points for ``target`` (clamped to [0, 100])

    Returns:
        New points per category, summing to 100
    """
    points = {c: int(current[c]) for c in CATEGORIES}
    if locks[target]:
        return points

    others = [c for c in CATEGORIES if c is not target]
    others_locked = [c for c in others if locks[c]]
    others_unlocked = [c for c in others if not locks[c]]

    if not others_unlocked:
        # Nothing can absorb a change, so the target is pinned to the remainder.
        points[target] = clamp(TOTAL_POINTS - sum(points[c] for c in others_locked))
        return points

    desired_points = coerce_points(desired)
    delta = desired_points - points[target]

    unlocked_sum = sum(points[c] for c in others_unlocked)
    dec_capacity = unlocked_sum
    inc_capacity = sum(TOTAL_POINTS - points[c] for c in others_unlocked)

    next_target = desired_points
    if delta > dec_capacity:
        next_target = points[target] + dec_capacity
    elif -delta > inc_capacity:
        next_target = points[target] - inc_capacity
    capped_delta = next_target - points[target]

    provisional = dict(points)
    provisional[target] = next_target
    for category in others_unlocked:
        if unlocked_sum:
            weight = points[category] / unlocked_sum
        else:
            # Equal split when the unlocked others are all at zero.
            weight = 1 / len(others_unlocked)
        provisional[category] = clamp(points[category] + round_half_up(weight * -capped_delta))

    fix = TOTAL_POINTS - sum(provisional.values())
    if fix:
        pick = _absorber(provisional, others_unlocked, fix)
        provisional[pick] = clamp(provisional[pick] + fix)

    return provisional


class Allocator:
    """Owns the current allocation and lock state.

    ``on_change`` is invoked with ``(percents, locks)`` after every mutation;
    the dashboard uses it to persist state.  It is expected not to raise.
    """

    def __init__(
        self,
        percents: Optional[PercentVector] = None,
        locks: Optional[LockVector] = None,
        on_change: Optional[Callable[[PercentVector, LockVector], None]] = None,
    ) -> None:
        self._percents = percents or PercentVector.default()
        self._locks = locks or LockVector()
        self._on_change = on_change

    @property
    def percents(self) -> PercentVector:
        return self._percents

    @property
    def locks(self) -> LockVector:
        return self._locks

    # Public API -------------------------------------------------------------

    def rebalance(self, target: Category | str, desired: Any) -> PercentVector:
        category = Category.parse(target)
        if self._locks[category]:
            logger.debug("Ignoring edit of locked category %s", category.value)
            return self._percents
        points = redistribute(self._percents.as_points(), self._locks, category, desired)
        self._percents = PercentVector.from_points(points)
        logger.debug(
            "Rebalanced %s -> %s: %s", category.value, desired, self._percents.as_fractions()
        )
        self._notify()
        return self._percents

    def toggle_lock(self, category: Category | str) -> LockVector:
        self._locks = self._locks.toggled(category)
        logger.debug("Locks now %s", self._locks.as_dict())
        self._notify()
        return self._locks

    def reset(self) -> PercentVector:
        self._percents = PercentVector.default()
        logger.debug("Allocation reset to defaults")
        self._notify()
        return self._percents

    # Internal ----------------------------------------------------------------

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._percents, self._locks)
