#!/usr/bin/env python3
"""Print refined line item estimates for a wedding pricing context."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wedding_planner import config
from wedding_planner.estimator import LineItemCost, estimate_event_cost, estimate_line_items_frame
from wedding_planner.formatting import format_currency, format_multiplier
from wedding_planner.pricing import PricingContext, compose_multiplier
from wedding_planner.rates import VendorTier, VenueClass

logger = logging.getLogger(__name__)


def load_items(path: Path) -> List[LineItemCost]:
    with path.open('r', encoding='utf-8') as handle:
        records = json.load(handle)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a list of line items")
    return [LineItemCost.from_record(record) for record in records]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Estimate wedding line item costs.')
    parser.add_argument('items', type=Path, help='JSON file with a list of line items')
    parser.add_argument('--venue', choices=[v.value for v in VenueClass], default=VenueClass.COMMUNITY_HALL.value)
    parser.add_argument('--tier', choices=[t.value for t in VendorTier], default=VendorTier.STANDARD.value)
    parser.add_argument('--guests', type=int, default=150, help='Guest count')
    parser.add_argument('--city', default=None, help='City key, e.g. bay_area or nyc')
    parser.add_argument('--log-level', default=None, help='Override WEDDING_PLANNER_LOG_LEVEL')
    args = parser.parse_args(argv)

    config.configure_logging(args.log_level)

    try:
        items = load_items(args.items)
    except (OSError, ValueError) as exc:
        logger.error("Could not load line items: %s", exc)
        return 1

    context = PricingContext(args.venue, args.tier, args.guests, args.city)
    multiplier = compose_multiplier(context)
    print(f"Multiplier: {multiplier:.4f} ({format_multiplier(multiplier)})")

    frame = estimate_line_items_frame(items, args.guests, context)
    if frame.empty:
        print("No line items to estimate.")
        return 0
    print(frame.to_string(index=False))

    total = estimate_event_cost(items, args.guests, context)
    print(f"\nTotal: {format_currency(total.low)} – {format_currency(total.high)}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
