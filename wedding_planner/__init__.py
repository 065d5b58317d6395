"""Top‑level package for the Wedding Planner estimation engine.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``rates`` – venue, vendor, guest and city multiplier tables plus the
  ceremony day-offset table
* ``pricing`` – guest brackets, multiplier composition and cost refinement
* ``estimator`` – per-item and per-event cost estimates
* ``ceremony_dates`` – ceremony scheduling relative to the wedding date
* ``ceremonies`` – the ceremony catalog and tradition defaults
* ``budget`` – budget totals, status and alerts

To print an estimate from the command line you can execute:

```bash
python scripts/estimate_budget.py --venue hotel_ballroom --tier premium --guests 150
```
"""

from . import rates  # noqa: F401  # re-exported for convenience
from . import pricing  # noqa: F401  # re-exported for convenience
from .budget import BudgetCategory, BudgetSummary, aggregate_budget
from .ceremony_dates import group_by_timing, schedule_date
from .estimator import CostUnit, LineItemCost, estimate_line_item
from .pricing import (
    DEFAULT_PRICING_CONTEXT,
    PricingContext,
    classify_guest_count,
    compose_multiplier,
    refine_cost_range,
)

__all__ = [
    "rates",
    "pricing",
    "BudgetCategory",
    "BudgetSummary",
    "aggregate_budget",
    "group_by_timing",
    "schedule_date",
    "CostUnit",
    "LineItemCost",
    "estimate_line_item",
    "DEFAULT_PRICING_CONTEXT",
    "PricingContext",
    "classify_guest_count",
    "compose_multiplier",
    "refine_cost_range",
]
