"""Unit tests for wedding_planner.ceremonies."""

from __future__ import annotations

import pytest

from wedding_planner.ceremonies import (
    build_catalog,
    ceremony_cost_range,
    get_ceremonies_for_tradition,
    get_ceremony_by_id,
    get_default_ceremonies_for_tradition,
)
from wedding_planner.estimator import CostEstimate
from wedding_planner.pricing import PricingContext
from wedding_planner.rates import RateTableError


def test_get_ceremony_by_id() -> None:
    walima = get_ceremony_by_id("muslim_walima")
    assert walima is not None
    assert walima.name == "Walima"
    assert walima.default_guests == 250
    assert get_ceremony_by_id("missing") is None


def test_ceremonies_for_tradition() -> None:
    ids = [c.id for c in get_ceremonies_for_tradition("gujarati")]
    assert "gujarati_garba" in ids
    assert "reception" in ids
    assert "muslim_nikah" not in ids


def test_default_ceremonies_for_tradition() -> None:
    assert get_default_ceremonies_for_tradition("sikh") == ["sikh_anand_karaj", "reception"]
    assert get_default_ceremonies_for_tradition("klingon") == ["general_wedding", "reception"]


def test_ceremony_cost_range_uses_default_guests() -> None:
    assert ceremony_cost_range("hindu_haldi") == CostEstimate(low=30 * 75, high=60 * 75)


def test_ceremony_cost_range_with_context() -> None:
    ctx = PricingContext("hotel_ballroom", "premium", 999)
    # 100 guests -> 100_200 bracket (0.95); context guest count is replaced
    assert ceremony_cost_range("hindu_mehndi", 100, ctx) == CostEstimate(low=3800, high=7600)


def test_ceremony_cost_range_unknown() -> None:
    assert ceremony_cost_range("missing", 100) is None


def test_build_catalog_rejects_bad_entries() -> None:
    with pytest.raises(RateTableError):
        build_catalog({"catalog": [{"id": "x"}]})
