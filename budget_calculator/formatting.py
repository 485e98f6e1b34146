"""Formatting utilities for currency entry and display."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Union

_NON_AMOUNT = re.compile(r'[^\d.]')

Number = Union[Decimal, float, int]


def parse_currency(text: Any) -> Decimal:
    """Parse loosely typed currency text into a non-negative amount.
    
    Everything except digits and dots is dropped, and only the first two
    digits after the first dot are kept. Text that still isn't a number
    parses as zero.
    
    Args:
        text: Raw text from an input field (e.g., "$1,234.567")
        
    Returns:
        Parsed amount (e.g., Decimal("1234.56"))
        
    Example:
        >>> parse_currency("$1,234.567")
        Decimal('1234.56')
        >>> parse_currency("abc")
        Decimal('0')
    """
    if text is None:
        return Decimal(0)
    cleaned = _NON_AMOUNT.sub('', str(text))
    whole, _, rest = cleaned.partition('.')
    fraction = rest.split('.')[0][:2]
    repaired = f"{whole}.{fraction}" if fraction else whole
    if not repaired:
        return Decimal(0)
    try:
        return Decimal(repaired)
    except InvalidOperation:
        return Decimal(0)


def to_amount(value: Any) -> Decimal:
    """Coerce a stored or typed value into a finite, non-negative Decimal."""
    if isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, str):
        return parse_currency(value)
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal(0)
    if not amount.is_finite() or amount < 0:
        return Decimal(0)
    return amount


def format_currency(amount: Number, include_sign: bool = True) -> str:
    """Format a currency amount for display.
    
    Negative and non-finite amounts are shown as zero.
    
    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign
        
    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")
        
    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-5)
        '$0.00'
    """
    value = Decimal(str(amount))
    if not value.is_finite() or value < 0:
        value = Decimal(0)
    formatted = f"{value:,.2f}"
    return f"${formatted}" if include_sign else formatted


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown doesn't treat them as LaTeX."""
    return text.replace("$", "\\$")
