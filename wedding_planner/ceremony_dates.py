"""Derive ceremony dates from the wedding date and a day-offset table.

Offsets in the table count days *before* the wedding, so ``mehndi`` at 3 lands
three days early and ``walima`` at -1 lands the day after.  Main ceremonies
always fall on the wedding date itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar, Union

import pandas as pd

from .rates import DEFAULT_CEREMONY_TABLE, CeremonyTable

PRE_WEDDING = 'pre-wedding'
WEDDING_DAY = 'wedding-day'
POST_WEDDING = 'post-wedding'

TIMING_LABELS: Dict[str, str] = {
    PRE_WEDDING: 'Pre-Wedding',
    WEDDING_DAY: 'Wedding Day',
    POST_WEDDING: 'Post-Wedding',
}

ITINERARY_COLUMNS = ['Ceremony', 'Offset', 'Date', 'Timing']


@dataclass(frozen=True)
class TraditionRitual:
    """A ritual record carrying its own offset, as stored per tradition."""
    slug: str
    name: str = ''
    tradition: str = ''
    days_before_wedding: Optional[int] = None


Ceremony = TypeVar('Ceremony', str, TraditionRitual)


def get_ceremony_days_offset(ceremony_id: str, table: CeremonyTable = DEFAULT_CEREMONY_TABLE) -> int:
    """Return the table offset for ``ceremony_id``, or 1 when it is unmapped."""
    return table.offset_for(ceremony_id)


def schedule_date(
    wedding_date: date,
    ceremony_id: str,
    table: CeremonyTable = DEFAULT_CEREMONY_TABLE,
) -> date:
    """Calculate the date of ``ceremony_id`` relative to the wedding date.

    Main ceremonies return ``wedding_date`` unchanged, even when the offset
    table also lists them.  Every other id is shifted back by its offset,
    with unmapped ids treated as one day before.

    Example:
        >>> schedule_date(date(2025, 6, 20), 'walima')
        datetime.date(2025, 6, 21)
        >>> schedule_date(date(2025, 6, 20), 'unknown_ritual')
        datetime.date(2025, 6, 19)
    """
    if table.is_main_ceremony(ceremony_id):
        return wedding_date
    return wedding_date - timedelta(days=table.offset_for(ceremony_id))


def calculate_due_date(wedding_date: date, days_before_wedding: int) -> date:
    """Return the deadline ``days_before_wedding`` days ahead of the wedding."""
    return wedding_date - timedelta(days=days_before_wedding)


def timing_for_offset(offset: int) -> str:
    """Classify an offset value into a timing group.

    Offsets below -1 group as pre-wedding and above 1 as post-wedding.  This
    reads the offset in the opposite direction to ``schedule_date`` and is
    kept that way for compatibility with stored ritual groupings.
    """
    if offset < -1:
        return PRE_WEDDING
    if offset > 1:
        return POST_WEDDING
    return WEDDING_DAY


def _offset_of(ceremony: Union[str, TraditionRitual], table: CeremonyTable) -> int:
    if isinstance(ceremony, TraditionRitual):
        return ceremony.days_before_wedding if ceremony.days_before_wedding is not None else 0
    return get_ceremony_days_offset(ceremony, table)


def group_by_timing(
    ceremonies: Iterable[Ceremony],
    table: CeremonyTable = DEFAULT_CEREMONY_TABLE,
) -> Dict[str, List[Ceremony]]:
    """Group ceremonies by the timing of their offset value.

    Args:
        ceremonies: Ceremony id strings (offset read from ``table``) or
            ``TraditionRitual`` records (offset read from the record, missing
            treated as 0)
        table: Offset table used for string ids

    Returns:
        Dictionary with keys 'pre-wedding', 'wedding-day' and 'post-wedding'
        (always present, in that order), each holding its ceremonies sorted by
        descending offset
    """
    groups: Dict[str, List[Tuple[int, Ceremony]]] = {
        PRE_WEDDING: [],
        WEDDING_DAY: [],
        POST_WEDDING: [],
    }
    for ceremony in ceremonies:
        offset = _offset_of(ceremony, table)
        groups[timing_for_offset(offset)].append((offset, ceremony))

    return {
        timing: [ceremony for _, ceremony in sorted(members, key=lambda pair: pair[0], reverse=True)]
        for timing, members in groups.items()
    }


def build_itinerary(
    wedding_date: Union[date, str],
    ceremony_ids: Iterable[str],
    table: CeremonyTable = DEFAULT_CEREMONY_TABLE,
) -> pd.DataFrame:
    """Create DataFrame of scheduled ceremonies in calendar order.

    Args:
        wedding_date: Wedding date, or an ISO date string
        ceremony_ids: Ceremony ids to schedule
        table: Offset table

    Returns:
        DataFrame with columns: Ceremony, Offset (table offset), Date, Timing.
        Ceremonies sharing a date keep their input order.
    """
    anchor = pd.Timestamp(wedding_date).date() if isinstance(wedding_date, str) else wedding_date

    rows = []
    for ceremony_id in ceremony_ids:
        offset = get_ceremony_days_offset(ceremony_id, table)
        rows.append({
            'Ceremony': ceremony_id,
            'Offset': offset,
            'Date': schedule_date(anchor, ceremony_id, table),
            'Timing': timing_for_offset(offset),
        })

    if not rows:
        return pd.DataFrame(columns=ITINERARY_COLUMNS)
    itinerary = pd.DataFrame(rows, columns=ITINERARY_COLUMNS)
    return itinerary.sort_values('Date', kind='mergesort').reset_index(drop=True)
