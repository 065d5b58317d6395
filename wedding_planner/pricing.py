"""Guest bracket classification, multiplier composition and cost refinement.

The composed multiplier is the product of four independent factors:

    venue class × vendor tier × guest bracket × city

Refined ranges scale a base ``[low, high]`` range by that multiplier and round
each bound to the nearest whole currency unit (half-up).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from .rates import (
    DEFAULT_RATE_TABLES,
    GuestBracket,
    RateTables,
    VendorTier,
    VenueClass,
)

# Lower bound of every bracket after the first, in ascending order
BRACKET_THRESHOLDS = (100, 200, 300)
_BRACKETS_IN_ORDER = (
    GuestBracket.UNDER_100,
    GuestBracket.FROM_100_TO_200,
    GuestBracket.FROM_200_TO_300,
    GuestBracket.OVER_300,
)


@dataclass(frozen=True)
class PricingContext:
    """Situational parameters of a wedding used to scale every estimate."""
    venue_class: VenueClass
    vendor_tier: VendorTier
    guest_count: int
    city: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'venue_class', VenueClass(self.venue_class))
        object.__setattr__(self, 'vendor_tier', VendorTier(self.vendor_tier))

    @property
    def guest_bracket(self) -> GuestBracket:
        return classify_guest_count(self.guest_count)


DEFAULT_PRICING_CONTEXT = PricingContext(
    venue_class=VenueClass.COMMUNITY_HALL,
    vendor_tier=VendorTier.STANDARD,
    guest_count=150,
)


@dataclass(frozen=True)
class CostRange:
    low: int
    high: int
    single: int

    def as_dict(self) -> Dict[str, int]:
        return {'low': self.low, 'high': self.high, 'single': self.single}


def round_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up.

    Example:
        >>> round_currency(2.5)
        3
        >>> round_currency(686.375)
        686
    """
    whole = math.floor(value)
    return int(whole + 1 if value - whole >= 0.5 else whole)


def classify_guest_count(guest_count: int) -> GuestBracket:
    """Map a raw guest count to its bracket.

    Thresholds start the next bracket, so 100 falls in ``100_200``.  Negative
    counts are not validated and land in ``under_100``.

    Example:
        >>> classify_guest_count(99).value
        'under_100'
        >>> classify_guest_count(300).value
        'over_300'
    """
    if guest_count < 100:
        return GuestBracket.UNDER_100
    if guest_count < 200:
        return GuestBracket.FROM_100_TO_200
    if guest_count < 300:
        return GuestBracket.FROM_200_TO_300
    return GuestBracket.OVER_300


def classify_guest_counts(guest_counts: pd.Series) -> pd.Series:
    """Vectorised ``classify_guest_count`` over a Series of guest counts."""
    positions = np.digitize(guest_counts.to_numpy(dtype=float), BRACKET_THRESHOLDS, right=False)
    labels = np.array([bracket.value for bracket in _BRACKETS_IN_ORDER], dtype=object)
    return pd.Series(labels[positions], index=guest_counts.index, name='Guest Bracket')


def compose_multiplier(context: PricingContext, tables: RateTables = DEFAULT_RATE_TABLES) -> float:
    """Combine the four pricing axes into one scalar multiplier."""
    bracket = classify_guest_count(context.guest_count)
    return (
        tables.venue_factor(context.venue_class)
        * tables.tier_factor(context.vendor_tier)
        * tables.bracket_factor(bracket)
        * tables.city_factor(context.city)
    )


def refine_cost_range(
    base_low: Union[int, float],
    base_high: Union[int, float],
    context: PricingContext,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> CostRange:
    """Scale a base cost range by the composed multiplier for ``context``.

    Args:
        base_low: Lower bound of the unadjusted range
        base_high: Upper bound of the unadjusted range
        context: Pricing context supplying the multiplier axes
        tables: Rate tables to read factors from

    Returns:
        ``CostRange`` with rounded ``low`` and ``high`` and their rounded
        midpoint ``single``

    Example:
        >>> ctx = PricingContext('hotel_ballroom', 'premium', 150)
        >>> refine_cost_range(1000, 2000, ctx).as_dict()
        {'low': 950, 'high': 1900, 'single': 1425}
    """
    multiplier = compose_multiplier(context, tables)
    low = round_currency(base_low * multiplier)
    high = round_currency(base_high * multiplier)
    single = round_currency((low + high) / 2)
    return CostRange(low=low, high=high, single=single)
