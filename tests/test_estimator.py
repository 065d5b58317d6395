"""Unit tests for wedding_planner.estimator."""

from __future__ import annotations

import pytest

from wedding_planner.estimator import (
    CostEstimate,
    CostUnit,
    EventGuestPlan,
    LineItemCost,
    estimate_event_cost,
    estimate_line_item,
    estimate_line_items_frame,
    guest_reduction_savings,
)
from wedding_planner.pricing import DEFAULT_PRICING_CONTEXT, PricingContext


def _flat_context():
    # hotel/premium/200 guests/no city multiplies by exactly 1.0
    return PricingContext("hotel_ballroom", "premium", 200)


def test_per_person_with_default_context() -> None:
    item = LineItemCost("Catering", 10, 20, CostUnit.PER_PERSON)
    result = estimate_line_item(item, 100, DEFAULT_PRICING_CONTEXT)
    # 0.85 * 0.85 * 0.95 = 0.686375
    assert result.as_dict() == {"low": 686, "high": 1373}


def test_per_hour_uses_default_hours() -> None:
    item = LineItemCost("DJ", 100, 200, "per_hour")
    result = estimate_line_item(item, 150, _flat_context())
    assert result == CostEstimate(low=300, high=800)


def test_per_hour_uses_explicit_hours() -> None:
    item = LineItemCost("Photography", 100, 200, CostUnit.PER_HOUR, hours_low=5, hours_high=8)
    result = estimate_line_item(item, 150, _flat_context())
    assert result == CostEstimate(low=500, high=1600)


def test_fixed_ignores_guest_count() -> None:
    item = LineItemCost("Decor", 1000, 2000)
    assert estimate_line_item(item, 10, _flat_context()) == estimate_line_item(item, 500, _flat_context())
    assert estimate_line_item(item, 10, _flat_context()).as_dict() == {"low": 1000, "high": 2000}


@pytest.mark.parametrize("unit", [None, "", "per_day", "FIXED"])
def test_unknown_units_default_to_fixed(unit) -> None:
    item = LineItemCost("Misc", 100, 200, unit)
    assert item.unit is CostUnit.FIXED


def test_from_record_accepts_camel_case() -> None:
    item = LineItemCost.from_record(
        {"category": "Band", "lowCost": 150, "highCost": 300, "unit": "per_hour", "hoursLow": 2}
    )
    assert item.unit is CostUnit.PER_HOUR
    assert item.hours_low == 2
    assert item.hours_high is None


def test_from_record_converts_string_hours() -> None:
    item = LineItemCost.from_record(
        {"category": "DJ", "lowCost": "100", "highCost": "200", "unit": "per_hour", "hoursLow": "3", "hoursHigh": "5"}
    )
    assert item.hours_low == 3.0
    assert item.hours_high == 5.0
    assert estimate_line_item(item, 100, _flat_context()).as_dict() == {"low": 300, "high": 1000}
    assert estimate_line_item(item, 100, _flat_context()).as_dict() == {"low": 300, "high": 1200}


def test_estimates_are_never_negative() -> None:
    ctx = PricingContext("home", "budget", 0)
    for unit in CostUnit:
        result = estimate_line_item(LineItemCost("X", 0, 5, unit), 0, ctx)
        assert result.low >= 0
        assert result.high >= 0


def test_event_cost_sums_items() -> None:
    items = [
        LineItemCost("Catering", 10, 20, CostUnit.PER_PERSON),
        LineItemCost("DJ", 100, 200, CostUnit.PER_HOUR),
        LineItemCost("Decor", 1000, 2000),
    ]
    total = estimate_event_cost(items, 200, _flat_context())
    assert total == CostEstimate(low=2000 + 300 + 1000, high=4000 + 800 + 2000)


def test_event_cost_falls_back_to_per_guest_range() -> None:
    total = estimate_event_cost([], 100, _flat_context())
    assert total == CostEstimate(low=5000, high=10000)


def test_line_items_frame_columns() -> None:
    items = [LineItemCost("Catering", 10, 20, CostUnit.PER_PERSON), LineItemCost("Decor", 1000, 2000)]
    frame = estimate_line_items_frame(items, 200, _flat_context())
    assert list(frame.columns) == ["Category", "Unit", "Low", "High", "Midpoint", "Guest Bracket"]
    assert frame["Low"].tolist() == [2000, 1000]
    assert frame.loc[frame["Category"] == "Decor", "Midpoint"].item() == 1500
    assert frame["Guest Bracket"].tolist() == ["200_300", "200_300"]


def test_line_items_frame_empty() -> None:
    frame = estimate_line_items_frame([], 100, _flat_context())
    assert frame.empty
    assert list(frame.columns) == ["Category", "Unit", "Low", "High", "Midpoint", "Guest Bracket"]


def test_guest_reduction_savings() -> None:
    items = [LineItemCost("Catering", 10, 20, CostUnit.PER_PERSON)]
    plans = [
        EventGuestPlan("Reception", items, original_guests=250, current_guests=200),
        EventGuestPlan("Mehndi", items, original_guests=220, current_guests=220),
    ]
    result = guest_reduction_savings(plans, _flat_context())

    # 250 and 220 guests both sit in the 200_300 bracket (factor 1.0)
    assert result["original"] == CostEstimate(low=4700, high=9400)
    assert result["current"] == CostEstimate(low=4200, high=8400)
    assert result["savings"] == pytest.approx(750)
    assert result["guests_reduced"] == 50
    assert [event["name"] for event in result["events"]] == ["Reception", "Mehndi"]
    assert result["events"][1]["savings"] == 0


def test_guest_reduction_uses_bracket_of_each_count() -> None:
    items = [LineItemCost("Catering", 10, 10, CostUnit.PER_PERSON)]
    plans = [EventGuestPlan("Reception", items, original_guests=200, current_guests=150)]
    result = guest_reduction_savings(plans, _flat_context())
    assert result["original"].low == 2000
    # 150 guests drop into the 100_200 bracket (0.95)
    assert result["current"].low == 1425
