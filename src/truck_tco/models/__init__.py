"""Result models — calculation output contracts."""

from truck_tco.models.results import (
    AnnualCosts,
    ComparisonEntry,
    CostBreakdownEntry,
    CostCategory,
    SavedCalculation,
    TCOComparison,
    TCOResult,
)

__all__ = [
    "AnnualCosts",
    "ComparisonEntry",
    "CostBreakdownEntry",
    "CostCategory",
    "SavedCalculation",
    "TCOComparison",
    "TCOResult",
]
