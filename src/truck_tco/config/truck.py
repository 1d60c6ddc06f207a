"""Truck profiles — the static per-type cost table.

Exactly four truck types exist.  Lookups never fall through: an unknown
type is rejected by the validator and, if it still reaches the engine,
raises ``KeyError``.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class TruckType(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    EXTRA_HEAVY = "extra_heavy"


class TruckProfile(BaseModel):
    """Cost constants for one truck type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Human label shown in forms and reports")
    depreciation_rate: float = Field(gt=0, le=1.0, description="Annual depreciation (fraction of truck value)")
    maintenance_cost_per_distance: float = Field(ge=0, description="Maintenance cost per km")
    tire_cost_per_distance_unit: float = Field(ge=0, description="Tire cost per 100,000 km")
    insurance_rate: float = Field(ge=0, le=1.0, description="Annual insurance premium (fraction of truck value)")
    default_fuel_efficiency: float = Field(gt=0, description="Typical fuel efficiency (km/L)")


TIRE_DISTANCE_UNIT = 100_000
"""Distance covered by one ``tire_cost_per_distance_unit``."""


TRUCK_PROFILES: Mapping[TruckType, TruckProfile] = MappingProxyType({
    TruckType.LIGHT: TruckProfile(
        name="Light truck (3.5-7.5 t)",
        depreciation_rate=0.20,
        maintenance_cost_per_distance=0.85,
        tire_cost_per_distance_unit=15_000,
        insurance_rate=0.08,
        default_fuel_efficiency=8.5,
    ),
    TruckType.MEDIUM: TruckProfile(
        name="Medium truck (7.5-16 t)",
        depreciation_rate=0.18,
        maintenance_cost_per_distance=1.20,
        tire_cost_per_distance_unit=25_000,
        insurance_rate=0.07,
        default_fuel_efficiency=6.0,
    ),
    TruckType.HEAVY: TruckProfile(
        name="Heavy truck (16-26 t)",
        depreciation_rate=0.15,
        maintenance_cost_per_distance=1.80,
        tire_cost_per_distance_unit=45_000,
        insurance_rate=0.06,
        default_fuel_efficiency=3.5,
    ),
    TruckType.EXTRA_HEAVY: TruckProfile(
        name="Extra heavy truck (26 t+)",
        depreciation_rate=0.12,
        maintenance_cost_per_distance=2.50,
        tire_cost_per_distance_unit=65_000,
        insurance_rate=0.05,
        default_fuel_efficiency=2.8,
    ),
})


def get_truck_profile(truck_type: TruckType | str) -> TruckProfile:
    """Return the profile for ``truck_type`` (enum member or its string value)."""
    try:
        return TRUCK_PROFILES[TruckType(truck_type)]
    except ValueError as exc:
        available = ", ".join(t.value for t in TRUCK_PROFILES)
        raise KeyError(f"Unknown truck type '{truck_type}' (available: {available})") from exc
