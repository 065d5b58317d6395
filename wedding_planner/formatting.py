"""Formatting utilities for currency amounts and pricing multipliers."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from .pricing import round_currency

Number = Union[float, int, Decimal]


def format_currency(amount: Number, include_sign: bool = True) -> str:
    """Format a currency amount with comma separators and two decimals.

    Negative amounts put the minus sign ahead of the dollar sign.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-50)
        '-$50.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = "-" if amount < 0 else ""
    return f"{prefix}${formatted}" if include_sign else f"{prefix}{formatted}"


def format_compact_currency(amount: Number) -> str:
    """Format an amount in thousands once it reaches 1,000.

    Example:
        >>> format_compact_currency(12500)
        '$13k'
        >>> format_compact_currency(950)
        '$950'
    """
    if amount >= 1000:
        return f"${round_currency(amount / 1000)}k"
    return f"${amount:,}"


def format_multiplier(multiplier: float) -> str:
    """Describe a multiplier as a saving or premium against base price.

    Example:
        >>> format_multiplier(0.85)
        '15% savings'
        >>> format_multiplier(1.5)
        '50% premium'
    """
    if multiplier == 1.0:
        return "Base price"
    percent = round_currency((1 - multiplier) * 100)
    if percent > 0:
        return f"{percent}% savings"
    return f"{abs(percent)}% premium"
