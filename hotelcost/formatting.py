"""Formatting helpers for estimate output.

Provides human-readable formatting for currency amounts the way
development teams quote hotel budgets (e.g. '$12.4M' instead of
'$12,437,892.34').
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding; quantities and room
    counts must round 2.5 to 3.
    """
    return math.floor(value + 0.5)


def format_currency(amount: float) -> str:
    """Format a currency amount as a human-readable string.

    - Amounts >= $10,000: no cents, with comma separators (e.g., '$1,234,567')
    - Amounts < $10,000: with cents (e.g., '$9,876.54')
    """
    if amount >= 10_000:
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def format_compact_currency(amount: float) -> str:
    """Format a currency amount compactly.

    - Millions (>= $1M): '$X.XM'
    - Thousands (>= $10K): '$XXXK'
    - Below: full amount via ``format_currency``
    """
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    if amount >= 10_000:
        return f"${amount / 1_000:,.0f}K"
    return format_currency(amount)
