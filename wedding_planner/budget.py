"""Budget aggregation over a snapshot of the couple's budget categories.

This module totals allocated and spent amounts, derives the remaining
balance and usage percentage, and classifies the overall status against the
total budget.  Amounts are handled as ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

Amount = Union[Decimal, int, float, str, None]

ZERO = Decimal('0')
HUNDRED = Decimal('100')

STATUS_NORMAL = 'normal'
STATUS_APPROACHING = 'approaching limit'
STATUS_OVER = 'over budget'

# Overall usage above this percentage (and up to 100) is flagged as approaching
APPROACHING_THRESHOLD = Decimal('90')
# Category usage percentages that raise alerts
CATEGORY_OVER_THRESHOLD = Decimal('100')
CATEGORY_WARNING_THRESHOLD = Decimal('80')

BREAKDOWN_COLUMNS = ['Category', 'Allocated', 'Spent', 'Remaining', 'Percent Used', 'Over Budget']


def coerce_amount(value: Amount) -> Decimal:
    """Parse an amount into a ``Decimal``.

    None and empty strings count as zero.  Floats go through ``str`` so that
    ``0.1`` becomes ``Decimal('0.1')`` rather than its binary expansion.

    Raises:
        ValueError: If ``value`` is not a finite number

    Example:
        >>> coerce_amount('450.50')
        Decimal('450.50')
        >>> coerce_amount(None)
        Decimal('0')
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            parsed = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"Not a valid amount: {value!r}") from exc
        if not parsed.is_finite():
            raise ValueError(f"Not a valid amount: {value!r}")
        return parsed
    parsed = Decimal(str(value))
    if not parsed.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    return parsed


@dataclass(frozen=True)
class BudgetCategory:
    """Read-only snapshot of one budget category."""
    id: Any
    allocated_amount: Decimal
    spent_amount: Optional[Decimal] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'allocated_amount', coerce_amount(self.allocated_amount))
        if self.spent_amount is not None:
            object.__setattr__(self, 'spent_amount', coerce_amount(self.spent_amount))

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "BudgetCategory":
        """Build a category from a persistence record with string or numeric amounts."""
        return cls(
            id=record.get('id'),
            allocated_amount=record.get('allocated_amount', record.get('allocatedAmount')),
            spent_amount=record.get('spent_amount', record.get('spentAmount')),
            name=record.get('name') or record.get('category'),
        )

    @property
    def spent(self) -> Decimal:
        return self.spent_amount if self.spent_amount is not None else ZERO

    @property
    def label(self) -> str:
        return self.name or str(self.id)


@dataclass(frozen=True)
class BudgetSummary:
    total_budget: Decimal
    total_spent: Decimal
    total_allocated: Decimal
    remaining: Decimal
    usage_percent: Decimal
    status: str
    overage: Decimal = ZERO

    @property
    def unallocated(self) -> Decimal:
        return max(ZERO, self.total_budget - self.total_allocated)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'total_budget': self.total_budget,
            'total_spent': self.total_spent,
            'total_allocated': self.total_allocated,
            'remaining': self.remaining,
            'usage_percent': self.usage_percent,
            'status': self.status,
            'overage': self.overage,
            'unallocated': self.unallocated,
        }


def usage_status(usage_percent: Decimal) -> str:
    if usage_percent > HUNDRED:
        return STATUS_OVER
    if usage_percent > APPROACHING_THRESHOLD:
        return STATUS_APPROACHING
    return STATUS_NORMAL


def aggregate_budget(categories: Iterable[BudgetCategory], total_budget: Amount) -> BudgetSummary:
    """Summarize spending across categories against the total budget.

    Args:
        categories: Category snapshots; a missing spent amount counts as zero
        total_budget: The couple's total budget

    Returns:
        ``BudgetSummary``; ``usage_percent`` is 0 when the total budget is not
        positive, and ``overage`` is only non-zero when over budget

    Example:
        >>> cats = [BudgetCategory(1, Decimal(500), Decimal(450)),
        ...         BudgetCategory(2, Decimal(300), Decimal(100))]
        >>> aggregate_budget(cats, 1000).usage_percent
        Decimal('55')
    """
    budget = coerce_amount(total_budget)
    total_spent = ZERO
    total_allocated = ZERO
    for category in categories:
        total_spent += category.spent
        total_allocated += category.allocated_amount

    usage_percent = (total_spent / budget) * HUNDRED if budget > ZERO else ZERO
    status = usage_status(usage_percent)
    overage = total_spent - budget if status == STATUS_OVER else ZERO

    return BudgetSummary(
        total_budget=budget,
        total_spent=total_spent,
        total_allocated=total_allocated,
        remaining=budget - total_spent,
        usage_percent=usage_percent,
        status=status,
        overage=overage,
    )


def category_percent_used(category: BudgetCategory) -> Decimal:
    if category.allocated_amount > ZERO:
        return category.spent / category.allocated_amount * HUNDRED
    return ZERO


def category_breakdown(categories: Iterable[BudgetCategory]) -> pd.DataFrame:
    """Create DataFrame of per-category spending against allocation.

    Returns:
        DataFrame with columns: Category, Allocated, Spent, Remaining,
        Percent Used, Over Budget
    """
    rows = []
    for category in categories:
        rows.append({
            'Category': category.label,
            'Allocated': float(category.allocated_amount),
            'Spent': float(category.spent),
            'Remaining': float(category.allocated_amount - category.spent),
            'Percent Used': float(category_percent_used(category)),
            'Over Budget': category.spent > category.allocated_amount,
        })

    if not rows:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def budget_alerts(categories: Iterable[BudgetCategory], total_budget: Amount) -> List[Dict[str, Any]]:
    """Build dashboard alerts for the overall budget and each category.

    Returns:
        List of dictionaries with id, type ('danger' or 'warning'), title,
        message and, for category alerts, category_id
    """
    categories = list(categories)
    summary = aggregate_budget(categories, total_budget)
    alerts: List[Dict[str, Any]] = []

    if summary.status == STATUS_OVER:
        alerts.append({
            'id': 'over-budget',
            'type': 'danger',
            'title': 'Over Budget',
            'message': f"You've exceeded your total budget by ${summary.overage:,.2f}",
        })
    elif summary.status == STATUS_APPROACHING:
        alerts.append({
            'id': 'near-budget',
            'type': 'warning',
            'title': 'Approaching Budget Limit',
            'message': f"You've used {summary.usage_percent:.0f}% of your total budget",
        })

    for category in categories:
        percent = category_percent_used(category)
        if percent >= CATEGORY_OVER_THRESHOLD:
            alerts.append({
                'id': f"cat-over-{category.id}",
                'type': 'danger',
                'title': f"{category.label} Over Budget",
                'message': f"Spent ${category.spent:,.2f} of ${category.allocated_amount:,.2f} allocated",
                'category_id': category.id,
            })
        elif percent >= CATEGORY_WARNING_THRESHOLD:
            alerts.append({
                'id': f"cat-warn-{category.id}",
                'type': 'warning',
                'title': f"{category.label} at {percent:.0f}%",
                'message': f"${category.allocated_amount - category.spent:,.2f} remaining in this category",
                'category_id': category.id,
            })

    return alerts
