"""TCO engine — validated inputs → annual cost breakdown.

Pure arithmetic, no hidden state:

  depreciation = truck_value × depreciation_rate
  fuel         = (annual_distance / fuel_efficiency) × fuel_price
  maintenance  = annual_distance × maintenance_cost_per_distance
  tires        = (annual_distance / 100,000) × tire_cost_per_distance_unit
  insurance    = truck_value × insurance_rate
  financing    = loan_amount × interest_rate   (0 without financing)
  tolls        = annual_distance × toll_cost_per_distance
  licenses     = annual_license_cost
  other        = other_annual_costs

Divisions by a non-positive quantity raise ``DivisionUndefinedError`` and
amounts that overflow raise ``NonFiniteResultError``; no inf/NaN is ever
returned.
"""

from __future__ import annotations

import math

from truck_tco.config.inputs import TCOInputs
from truck_tco.config.truck import TIRE_DISTANCE_UNIT, TruckProfile, get_truck_profile
from truck_tco.models.results import AnnualCosts, CostBreakdownEntry, TCOResult

DAYS_PER_YEAR = 365


class DivisionUndefinedError(ArithmeticError):
    """A derived metric would divide by zero (or by a negative quantity)."""

    def __init__(self, quantity: str, divisor: str, value: float):
        self.quantity = quantity
        self.divisor = divisor
        self.value = value
        super().__init__(f"Cannot compute {quantity}: {divisor} is {value!r}")


class NonFiniteResultError(ArithmeticError):
    """A computed amount overflowed to infinity (or became NaN)."""

    def __init__(self, quantity: str, value: float):
        self.quantity = quantity
        self.value = value
        super().__init__(f"Cannot compute {quantity}: result is {value!r}")


def _require_positive(quantity: str, divisor: str, value: float) -> None:
    if not value > 0:
        raise DivisionUndefinedError(quantity, divisor, value)


def _require_finite(quantity: str, value: float) -> float:
    if not math.isfinite(value):
        raise NonFiniteResultError(quantity, value)
    return value


def resolve_fuel_efficiency(inputs: TCOInputs, profile: TruckProfile) -> float:
    """Custom fuel efficiency when given, else the profile default."""
    if inputs.custom_fuel_efficiency is not None:
        return inputs.custom_fuel_efficiency
    return profile.default_fuel_efficiency


def compute_annual_costs(inputs: TCOInputs, profile: TruckProfile, fuel_efficiency: float) -> AnnualCosts:
    """Annual cost per category for one truck."""
    _require_positive("fuel cost", "fuel efficiency", fuel_efficiency)
    distance = inputs.annual_distance

    financing = (
        inputs.effective_loan_amount * inputs.interest_rate
        if inputs.has_financing else 0.0
    )

    return AnnualCosts(
        depreciation=inputs.truck_value * profile.depreciation_rate,
        fuel=(distance / fuel_efficiency) * inputs.fuel_price,
        maintenance=distance * profile.maintenance_cost_per_distance,
        tires=(distance / TIRE_DISTANCE_UNIT) * profile.tire_cost_per_distance_unit,
        insurance=inputs.truck_value * profile.insurance_rate,
        financing=financing,
        tolls=distance * inputs.toll_cost_per_distance,
        licenses=inputs.annual_license_cost,
        other=inputs.other_annual_costs,
    )


def build_cost_breakdown(annual_costs: AnnualCosts, total_annual_cost: float) -> list[CostBreakdownEntry]:
    """Percentage share per category, largest first.

    ``sorted`` is stable, so equal amounts keep declaration order.
    """
    _require_positive("cost percentages", "total annual cost", total_annual_cost)
    entries = [
        CostBreakdownEntry(
            category=category,
            amount=amount,
            percentage=(amount / total_annual_cost) * 100,
        )
        for category, amount in annual_costs.items()
    ]
    return sorted(entries, key=lambda entry: entry.amount, reverse=True)


def compute_tco(inputs: TCOInputs) -> TCOResult:
    """Compute the full TCO result for validated inputs.

    Callers run :func:`truck_tco.engine.validation.parse_inputs` first; the
    engine does not re-validate.
    """
    profile = get_truck_profile(inputs.truck_type)
    _require_positive("cost per distance", "annual distance", inputs.annual_distance)
    _require_positive("ROI", "truck value", inputs.truck_value)

    fuel_efficiency = resolve_fuel_efficiency(inputs, profile)
    annual_costs = compute_annual_costs(inputs, profile, fuel_efficiency)
    for category, amount in annual_costs.items():
        _require_finite(f"{category.value} cost", amount)

    total_annual_cost = _require_finite("total annual cost", annual_costs.total())
    total_period_cost = _require_finite("total period cost", total_annual_cost * inputs.operation_years)

    return TCOResult(
        annual_costs=annual_costs,
        total_annual_cost=total_annual_cost,
        total_period_cost=total_period_cost,
        cost_per_distance=_require_finite("cost per distance", total_annual_cost / inputs.annual_distance),
        cost_per_day=total_annual_cost / DAYS_PER_YEAR,
        total_distance=_require_finite("total distance", inputs.annual_distance * inputs.operation_years),
        initial_investment=inputs.truck_value,
        total_investment=_require_finite("total investment", inputs.truck_value + total_period_cost),
        roi_percent=_require_finite("ROI", (total_period_cost / inputs.truck_value) * 100),
        cost_breakdown=build_cost_breakdown(annual_costs, total_annual_cost),
        truck_type=inputs.truck_type,
        truck_profile=profile,
        fuel_efficiency_used=fuel_efficiency,
    )
