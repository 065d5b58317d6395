"""Line item estimation for budget catalog entries.

Each catalog rule carries a base ``[low, high]`` cost and a unit telling how
that cost scales: once per event, per guest, or per hour of service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .pricing import PricingContext, classify_guest_counts, compose_multiplier, round_currency
from .rates import DEFAULT_RATE_TABLES, RateTables

logger = logging.getLogger(__name__)

DEFAULT_HOURS_LOW = 3
DEFAULT_HOURS_HIGH = 4

# Per-guest range used when an event has no line item breakdown
FALLBACK_PER_GUEST_LOW = 50
FALLBACK_PER_GUEST_HIGH = 100

ESTIMATE_COLUMNS = ['Category', 'Unit', 'Low', 'High', 'Midpoint', 'Guest Bracket']


class CostUnit(str, Enum):
    FIXED = "fixed"
    PER_PERSON = "per_person"
    PER_HOUR = "per_hour"

    @classmethod
    def parse(cls, value: Any) -> "CostUnit":
        """Return the matching unit, treating missing or unknown values as ``FIXED``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            if value not in (None, ''):
                logger.debug("Unknown cost unit %r; treating as fixed", value)
            return cls.FIXED


@dataclass(frozen=True)
class LineItemCost:
    """One budget estimator rule from the static catalog."""
    category: str
    low_cost: float
    high_cost: float
    unit: CostUnit = CostUnit.FIXED
    hours_low: Optional[float] = None
    hours_high: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'unit', CostUnit.parse(self.unit))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LineItemCost":
        """Build an item from a catalog record using either snake_case or camelCase keys."""
        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if record.get(key) is not None:
                    return record[key]
            return default

        def hours(*keys: str) -> Optional[float]:
            value = pick(*keys)
            return float(value) if value is not None else None

        return cls(
            category=pick('category', default=''),
            low_cost=float(pick('low_cost', 'lowCost', default=0)),
            high_cost=float(pick('high_cost', 'highCost', default=0)),
            unit=CostUnit.parse(pick('unit')),
            hours_low=hours('hours_low', 'hoursLow'),
            hours_high=hours('hours_high', 'hoursHigh'),
        )


@dataclass(frozen=True)
class CostEstimate:
    low: int
    high: int

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2

    def as_dict(self) -> Dict[str, int]:
        return {'low': self.low, 'high': self.high}


def _estimate_with_multiplier(item: LineItemCost, guest_count: int, multiplier: float) -> CostEstimate:
    if item.unit is CostUnit.PER_PERSON:
        return CostEstimate(
            low=round_currency(item.low_cost * guest_count * multiplier),
            high=round_currency(item.high_cost * guest_count * multiplier),
        )
    if item.unit is CostUnit.PER_HOUR:
        hours_low = item.hours_low if item.hours_low is not None else DEFAULT_HOURS_LOW
        hours_high = item.hours_high if item.hours_high is not None else DEFAULT_HOURS_HIGH
        return CostEstimate(
            low=round_currency(item.low_cost * hours_low * multiplier),
            high=round_currency(item.high_cost * hours_high * multiplier),
        )
    if item.unit is CostUnit.FIXED:
        return CostEstimate(
            low=round_currency(item.low_cost * multiplier),
            high=round_currency(item.high_cost * multiplier),
        )
    raise ValueError(f"Unhandled cost unit: {item.unit!r}")


def estimate_line_item(
    item: LineItemCost,
    guest_count: int,
    context: PricingContext,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> CostEstimate:
    """Estimate the refined ``[low, high]`` cost of a single catalog item.

    Args:
        item: Catalog rule to estimate
        guest_count: Guests attending the event the item belongs to
        context: Pricing context supplying the multiplier
        tables: Rate tables to read factors from

    Example:
        >>> item = LineItemCost('Catering', 10, 20, CostUnit.PER_PERSON)
        >>> estimate_line_item(item, 100, DEFAULT_PRICING_CONTEXT).as_dict()
        {'low': 686, 'high': 1373}
    """
    return _estimate_with_multiplier(item, guest_count, compose_multiplier(context, tables))


def estimate_event_cost(
    items: Sequence[LineItemCost],
    guest_count: int,
    context: PricingContext,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> CostEstimate:
    """Total the estimates of an event's line items.

    Events without a breakdown fall back to a flat 50–100 per guest range.
    """
    multiplier = compose_multiplier(context, tables)
    if not items:
        return CostEstimate(
            low=round_currency(FALLBACK_PER_GUEST_LOW * guest_count * multiplier),
            high=round_currency(FALLBACK_PER_GUEST_HIGH * guest_count * multiplier),
        )

    total_low = 0
    total_high = 0
    for item in items:
        estimate = _estimate_with_multiplier(item, guest_count, multiplier)
        total_low += estimate.low
        total_high += estimate.high
    return CostEstimate(low=total_low, high=total_high)


def estimate_line_items_frame(
    items: Iterable[LineItemCost],
    guest_count: int,
    context: PricingContext,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> pd.DataFrame:
    """Create DataFrame of per-item estimates.

    Returns:
        DataFrame with columns: Category, Unit, Low, High, Midpoint, Guest Bracket
    """
    multiplier = compose_multiplier(context, tables)
    rows = []
    for item in items:
        estimate = _estimate_with_multiplier(item, guest_count, multiplier)
        rows.append({
            'Category': item.category,
            'Unit': item.unit.value,
            'Low': estimate.low,
            'High': estimate.high,
            'Midpoint': estimate.midpoint,
        })

    if not rows:
        return pd.DataFrame(columns=ESTIMATE_COLUMNS)
    frame = pd.DataFrame(rows, columns=ESTIMATE_COLUMNS[:-1])
    frame['Guest Bracket'] = classify_guest_counts(pd.Series(guest_count, index=frame.index))
    return frame


@dataclass(frozen=True)
class EventGuestPlan:
    """Guest counts for one event before and after the couple trims the list."""
    name: str
    items: Sequence[LineItemCost]
    original_guests: int
    current_guests: int


def guest_reduction_savings(
    plans: Iterable[EventGuestPlan],
    context: PricingContext,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> Dict[str, Any]:
    """Compare estimated totals at original and current guest counts.

    Each event is priced with its own guest count; the other axes of
    ``context`` are shared.  Savings compare range midpoints.

    Returns:
        Dictionary with ``original`` and ``current`` ``CostEstimate`` totals,
        ``savings`` (midpoint difference), ``guests_reduced`` and ``events``,
        a per-event list of dictionaries.
    """
    original_low = original_high = current_low = current_high = 0
    guests_reduced = 0
    events: List[Dict[str, Any]] = []

    for plan in plans:
        original = estimate_event_cost(
            plan.items, plan.original_guests, replace(context, guest_count=plan.original_guests), tables
        )
        current = estimate_event_cost(
            plan.items, plan.current_guests, replace(context, guest_count=plan.current_guests), tables
        )
        original_low += original.low
        original_high += original.high
        current_low += current.low
        current_high += current.high
        guests_reduced += plan.original_guests - plan.current_guests
        events.append({
            'name': plan.name,
            'original': original,
            'current': current,
            'savings': original.midpoint - current.midpoint,
        })

    original_total = CostEstimate(low=original_low, high=original_high)
    current_total = CostEstimate(low=current_low, high=current_high)
    return {
        'original': original_total,
        'current': current_total,
        'savings': original_total.midpoint - current_total.midpoint,
        'guests_reduced': guests_reduced,
        'events': events,
    }
