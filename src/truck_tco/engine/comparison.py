"""Compare several TCO results — which truck is cheapest per km?"""

from __future__ import annotations

from typing import Mapping

from truck_tco.models.results import ComparisonEntry, TCOComparison, TCOResult


def compare_tco(results: Mapping[str, TCOResult]) -> TCOComparison:
    """Rank labelled results by cost per km (rank 1 = cheapest).

    Ties keep the mapping's insertion order.
    """
    if not results:
        raise ValueError("compare_tco needs at least one result")

    ranked = sorted(results.items(), key=lambda item: item[1].cost_per_distance)
    annual_totals = [r.total_annual_cost for r in results.values()]
    cheapest_annual = min(annual_totals)

    entries = [
        ComparisonEntry(
            label=label,
            rank=rank,
            cost_per_distance=result.cost_per_distance,
            total_annual_cost=result.total_annual_cost,
            savings_vs_best=result.total_annual_cost - cheapest_annual,
            result=result,
        )
        for rank, (label, result) in enumerate(ranked, start=1)
    ]

    return TCOComparison(
        best_label=entries[0].label,
        average_cost_per_distance=sum(r.cost_per_distance for r in results.values()) / len(results),
        total_savings=max(annual_totals) - cheapest_annual,
        entries=entries,
    )
