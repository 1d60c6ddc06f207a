"""Tests for report/formatting.py and the truck/category lookup tables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from truck_tco.config import TRUCK_PROFILES, TruckType, get_truck_profile
from truck_tco.models.results import CostCategory
from truck_tco.report.formatting import (
    CATEGORY_DISPLAY,
    category_color,
    category_label,
    format_currency,
    format_number,
    format_percentage,
)


def test_currency():
    assert format_currency(810_000) == "$810,000"
    assert format_currency(2219.178) == "$2,219"
    assert format_currency(0) == "$0"
    assert format_currency(-1500) == "-$1,500"
    assert format_currency(-0.4) == "$0"
    assert format_currency(-0.6) == "-$1"
    assert format_currency(999.5) == "$1,000"


def test_number():
    assert format_number(100_000) == "100,000"
    assert format_number(6, 1) == "6.0"
    assert format_number(1234.5678, 2) == "1,234.57"


def test_percentage():
    assert format_percentage(49.382716) == "49.4%"
    assert format_percentage(100) == "100.0%"
    assert format_percentage(12.3456, 2) == "12.35%"


def test_category_display_covers_all_categories():
    assert list(CATEGORY_DISPLAY) == list(CostCategory)
    assert category_label(CostCategory.LICENSES) == "Licenses and permits"
    assert category_label("fuel") == "Fuel"
    assert category_color(CostCategory.FUEL) == "#f57c00"
    assert all(display.color.startswith("#") and len(display.color) == 7 for display in CATEGORY_DISPLAY.values())


def test_category_display_is_read_only():
    with pytest.raises(TypeError):
        CATEGORY_DISPLAY[CostCategory.FUEL] = ("x", "#000000")


def test_unknown_category_rejected():
    with pytest.raises(ValueError):
        category_label("parking")


# ═══════════════════════════════════════════════════════════════════════════
# Truck profiles
# ═══════════════════════════════════════════════════════════════════════════

def test_exactly_four_profiles():
    assert set(TRUCK_PROFILES) == set(TruckType)
    assert len(TRUCK_PROFILES) == 4


def test_profile_values():
    medium = TRUCK_PROFILES[TruckType.MEDIUM]
    assert medium.depreciation_rate == 0.18
    assert medium.maintenance_cost_per_distance == 1.20
    assert medium.tire_cost_per_distance_unit == 25_000
    assert medium.insurance_rate == 0.07
    assert medium.default_fuel_efficiency == 6.0
    assert TRUCK_PROFILES[TruckType.EXTRA_HEAVY].default_fuel_efficiency == 2.8


def test_profiles_are_immutable():
    with pytest.raises(TypeError):
        TRUCK_PROFILES[TruckType.LIGHT] = TRUCK_PROFILES[TruckType.HEAVY]
    with pytest.raises(ValidationError):
        TRUCK_PROFILES[TruckType.LIGHT].depreciation_rate = 0.5


def test_lookup_by_string():
    assert get_truck_profile("heavy") is TRUCK_PROFILES[TruckType.HEAVY]


def test_lookup_unknown_raises():
    with pytest.raises(KeyError, match="available"):
        get_truck_profile("unknown")
