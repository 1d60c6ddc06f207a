"""Tests for engine/comparison.py."""

from __future__ import annotations

import pytest

from truck_tco.config import TCOInputs, TruckType
from truck_tco.engine.comparison import compare_tco
from truck_tco.engine.tco import compute_tco


def _result(truck_type: TruckType, **overrides):
    data = dict(
        customer_name="Fleet",
        truck_type=truck_type,
        truck_value=800_000,
        annual_distance=100_000,
        operation_years=5,
        fuel_price=24,
    )
    data.update(overrides)
    return compute_tco(TCOInputs(**data))


def test_ranks_by_cost_per_km():
    results = {
        "heavy": _result(TruckType.HEAVY),
        "light": _result(TruckType.LIGHT),
        "medium": _result(TruckType.MEDIUM),
    }
    comparison = compare_tco(results)

    per_km = [e.cost_per_distance for e in comparison.entries]
    assert per_km == sorted(per_km)
    assert [e.rank for e in comparison.entries] == [1, 2, 3]
    assert comparison.best_label == comparison.entries[0].label
    assert comparison.best_label == "light"


def test_savings_and_average():
    results = {
        "medium": _result(TruckType.MEDIUM),
        "extra": _result(TruckType.EXTRA_HEAVY),
    }
    comparison = compare_tco(results)

    totals = [r.total_annual_cost for r in results.values()]
    assert comparison.total_savings == pytest.approx(max(totals) - min(totals))
    assert comparison.average_cost_per_distance == pytest.approx(
        sum(r.cost_per_distance for r in results.values()) / 2
    )
    best = comparison.entries[0]
    assert best.savings_vs_best == pytest.approx(0)
    assert comparison.entries[1].savings_vs_best == pytest.approx(comparison.total_savings)


def test_single_result():
    comparison = compare_tco({"only": _result(TruckType.MEDIUM)})
    assert comparison.best_label == "only"
    assert comparison.total_savings == 0
    assert comparison.entries[0].rank == 1


def test_ties_keep_insertion_order():
    same = _result(TruckType.MEDIUM)
    comparison = compare_tco({"first": same, "second": same})
    assert [e.label for e in comparison.entries] == ["first", "second"]


def test_empty_rejected():
    with pytest.raises(ValueError):
        compare_tco({})
