"""Allocated, spent and remaining amounts per category.

This module joins the allocation percentages, the monthly income and the
expense ledger totals into a single table that the dashboard and the charts
read from.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping

import pandas as pd

from .allocator import CATEGORIES, Category, PercentVector, to_fraction
from .formatting import to_amount

SUMMARY_COLUMNS = [
    'Percent',
    'Allocated',
    'Spent',
    'Remaining',
    'Over Budget',
    'Progress %',
    'Over By %',
]


def allocated_amounts(percents: PercentVector, income: Any) -> Dict[Category, Decimal]:
    """Split the monthly income according to the allocation.

    Args:
        percents: Current allocation
        income: Monthly income

    Returns:
        Dictionary mapping each category to its allocated amount
    """
    monthly = to_amount(income)
    return {c: monthly * Decimal(percents[c]) / Decimal(100) for c in CATEGORIES}


def budget_summary(
    percents: PercentVector,
    income: Any,
    spent: Mapping[Category, Any],
) -> pd.DataFrame:
    """Build the per-category budget table.

    Args:
        percents: Current allocation
        income: Monthly income
        spent: Expense total per category (missing categories count as zero)

    Returns:
        DataFrame indexed by category label with the columns in SUMMARY_COLUMNS

    Example:
        >>> frame = budget_summary(PercentVector(50, 30, 20), 1000, {Category.NEEDS: 600})
        >>> bool(frame.loc['Needs', 'Over Budget'])
        True
    """
    allocated = allocated_amounts(percents, income)
    rows = []
    for category in CATEGORIES:
        alloc = allocated[category]
        used = to_amount(spent.get(category, 0))
        remaining = alloc - used
        over = remaining < 0
        progress = float(min(Decimal(100), max(Decimal(0), used / alloc * 100))) if alloc > 0 else 0.0
        over_by = round(float(abs(remaining) / alloc * 100)) if over and alloc > 0 else float('nan')
        rows.append({
            'Category': category.label,
            'Percent': percents[category],
            'Fraction': to_fraction(percents[category]),
            'Allocated': float(alloc),
            'Spent': float(used),
            'Remaining': float(remaining),
            'Over Budget': over,
            'Progress %': progress,
            'Over By %': over_by,
        })
    frame = pd.DataFrame(rows).set_index('Category')
    return frame[['Fraction'] + SUMMARY_COLUMNS]
