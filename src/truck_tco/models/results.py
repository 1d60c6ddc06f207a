"""Result types — the contract between engine, storage, reports and UI.

Amounts are annual currency values unless the field name says otherwise.
Nothing here is rounded; rounding is a presentation concern.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from truck_tco.config.inputs import TCOInputs
from truck_tco.config.truck import TruckProfile, TruckType


class CostCategory(str, Enum):
    """The nine annual cost categories, in declaration order."""

    DEPRECIATION = "depreciation"
    FUEL = "fuel"
    MAINTENANCE = "maintenance"
    TIRES = "tires"
    INSURANCE = "insurance"
    FINANCING = "financing"
    TOLLS = "tolls"
    LICENSES = "licenses"
    OTHER = "other"


# ═══════════════════════════════════════════════════════════════════════════
# Annual costs
# ═══════════════════════════════════════════════════════════════════════════

class AnnualCosts(BaseModel):
    """Annual cost per category.  All nine are always present, zero or not."""

    depreciation: float = Field(ge=0)
    """truck_value × depreciation_rate."""

    fuel: float = Field(ge=0)
    """(annual_distance / fuel_efficiency) × fuel_price."""

    maintenance: float = Field(ge=0)
    """annual_distance × maintenance_cost_per_distance."""

    tires: float = Field(ge=0)
    """(annual_distance / 100,000) × tire_cost_per_distance_unit."""

    insurance: float = Field(ge=0)
    """truck_value × insurance_rate."""

    financing: float = Field(ge=0)
    """loan_amount × interest_rate, zero without financing."""

    tolls: float = Field(ge=0)
    """annual_distance × toll_cost_per_distance."""

    licenses: float = Field(ge=0)
    other: float = Field(ge=0)

    def items(self) -> Iterator[tuple[CostCategory, float]]:
        """Yield ``(category, amount)`` in declaration order."""
        for category in CostCategory:
            yield category, getattr(self, category.value)

    def total(self) -> float:
        """Sum of all categories, always added in declaration order."""
        total = 0.0
        for _, amount in self.items():
            total += amount
        return total


class CostBreakdownEntry(BaseModel):
    """One row of the sorted breakdown."""

    category: CostCategory
    amount: float = Field(ge=0)
    percentage: float = Field(ge=0, le=100)
    """Share of the total annual cost (0–100)."""


# ═══════════════════════════════════════════════════════════════════════════
# Full result
# ═══════════════════════════════════════════════════════════════════════════

class TCOResult(BaseModel):
    """Everything one calculation produces."""

    annual_costs: AnnualCosts

    total_annual_cost: float
    total_period_cost: float
    """total_annual_cost × operation_years."""

    cost_per_distance: float
    """total_annual_cost / annual_distance ($/km)."""

    cost_per_day: float
    """total_annual_cost / 365."""

    total_distance: float
    """annual_distance × operation_years."""

    initial_investment: float
    """The truck value."""

    total_investment: float
    """truck_value + total_period_cost."""

    roi_percent: float
    """(total_period_cost / truck_value) × 100."""

    cost_breakdown: list[CostBreakdownEntry]
    """All nine categories, largest amount first; ties keep declaration order."""

    truck_type: TruckType
    truck_profile: TruckProfile
    fuel_efficiency_used: float
    """Custom fuel efficiency when given, else the profile default (km/L)."""

    def breakdown_for(self, category: CostCategory) -> CostBreakdownEntry:
        for entry in self.cost_breakdown:
            if entry.category == category:
                return entry
        raise KeyError(category)


# ═══════════════════════════════════════════════════════════════════════════
# Comparison of several calculations
# ═══════════════════════════════════════════════════════════════════════════

class ComparisonEntry(BaseModel):
    label: str
    rank: int
    """1 = cheapest per km."""
    cost_per_distance: float
    total_annual_cost: float
    savings_vs_best: float
    """Extra annual cost compared with the cheapest total annual cost."""
    result: TCOResult


class TCOComparison(BaseModel):
    """Side-by-side ranking of several calculations (cheapest per km first)."""

    best_label: str
    average_cost_per_distance: float
    total_savings: float
    """Spread between the most and least expensive total annual cost."""
    entries: list[ComparisonEntry]


# ═══════════════════════════════════════════════════════════════════════════
# Saved history
# ═══════════════════════════════════════════════════════════════════════════

class SavedCalculation(BaseModel):
    """A snapshot kept in the calculation history."""

    id: int
    """Milliseconds since the epoch at save time."""
    timestamp: str
    """ISO-8601 save time (UTC)."""
    customer_name: str
    inputs: TCOInputs
    results: TCOResult
