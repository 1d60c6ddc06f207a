"""Configuration models — truck profiles, calculation inputs, app settings."""

from truck_tco.config.truck import TRUCK_PROFILES, TruckProfile, TruckType, get_truck_profile
from truck_tco.config.inputs import TCOInputs
from truck_tco.config.settings import AppSettings, get_settings

__all__ = [
    "TRUCK_PROFILES",
    "TruckProfile",
    "TruckType",
    "get_truck_profile",
    "TCOInputs",
    "AppSettings",
    "get_settings",
]
