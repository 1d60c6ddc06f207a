"""Presentation helpers — number formatting and category labels/colours."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

from truck_tco.models.results import CostCategory


class CategoryDisplay(NamedTuple):
    label: str
    color: str


CATEGORY_DISPLAY: Mapping[CostCategory, CategoryDisplay] = MappingProxyType({
    CostCategory.DEPRECIATION: CategoryDisplay("Depreciation", "#1976d2"),
    CostCategory.FUEL: CategoryDisplay("Fuel", "#f57c00"),
    CostCategory.MAINTENANCE: CategoryDisplay("Maintenance", "#d32f2f"),
    CostCategory.TIRES: CategoryDisplay("Tires", "#388e3c"),
    CostCategory.INSURANCE: CategoryDisplay("Insurance", "#7b1fa2"),
    CostCategory.FINANCING: CategoryDisplay("Financing", "#00796b"),
    CostCategory.TOLLS: CategoryDisplay("Tolls", "#f44336"),
    CostCategory.LICENSES: CategoryDisplay("Licenses and permits", "#3f51b5"),
    CostCategory.OTHER: CategoryDisplay("Other costs", "#9e9e9e"),
})


def category_label(category: CostCategory | str) -> str:
    return CATEGORY_DISPLAY[CostCategory(category)].label


def category_color(category: CostCategory | str) -> str:
    return CATEGORY_DISPLAY[CostCategory(category)].color


def format_currency(amount: float) -> str:
    """Whole currency units with thousands separators, e.g. ``$810,000``."""
    whole = round(amount)
    if whole < 0:
        return f"-${-whole:,}"
    return f"${whole:,}"


def format_number(value: float, decimals: int = 0) -> str:
    return f"{value:,.{decimals}f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """``value`` is already a percentage (49.38 → ``49.4%``)."""
    return f"{format_number(value, decimals)}%"
