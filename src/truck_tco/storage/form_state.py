"""Current form snapshot — restored on start, saved on every edit."""

from __future__ import annotations

from typing import Any, Mapping

from truck_tco.storage.local_store import FORM_KEY, LocalStore

DEFAULT_FORM_DATA: dict[str, Any] = {
    "customer_name": "",
    "truck_type": "medium",
    "truck_value": 800_000,
    "annual_distance": 100_000,
    "operation_years": 5,
    "fuel_price": 24,
    "custom_fuel_efficiency": "",
    "has_financing": False,
    "loan_amount": "",
    "interest_rate": 0.12,
    "toll_cost_per_distance": 0.5,
    "annual_license_cost": 15_000,
    "other_annual_costs": 0,
}


def load_form_data(store: LocalStore) -> dict[str, Any]:
    """Defaults overlaid with whatever known fields the store holds."""
    data = dict(DEFAULT_FORM_DATA)
    stored = store.get(FORM_KEY)
    if isinstance(stored, dict):
        data.update({k: v for k, v in stored.items() if k in DEFAULT_FORM_DATA})
    return data


def save_form_data(store: LocalStore, data: Mapping[str, Any]) -> None:
    """Persist the known form fields; unknown keys are dropped."""
    snapshot = {k: data.get(k, default) for k, default in DEFAULT_FORM_DATA.items()}
    store.set(FORM_KEY, snapshot)
