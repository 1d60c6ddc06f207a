"""Shared test fixtures — the medium-truck reference scenario."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from truck_tco.config import AppSettings, TCOInputs, TruckType
from truck_tco.engine.tco import compute_tco
from truck_tco.models.results import TCOResult
from truck_tco.storage import CalculationHistory, LocalStore


@pytest.fixture
def raw_form() -> dict:
    """Form values as the UI sends them (medium truck, no financing, default extras)."""
    return {
        "customer_name": "Gonzalez Transport",
        "truck_type": "medium",
        "truck_value": 800_000,
        "annual_distance": 100_000,
        "operation_years": 5,
        "fuel_price": 24,
        "custom_fuel_efficiency": "",
        "has_financing": False,
        "loan_amount": "",
    }


@pytest.fixture
def medium_inputs() -> TCOInputs:
    return TCOInputs(
        customer_name="Gonzalez Transport",
        truck_type=TruckType.MEDIUM,
        truck_value=800_000,
        annual_distance=100_000,
        operation_years=5,
        fuel_price=24,
    )


@pytest.fixture
def medium_result(medium_inputs: TCOInputs) -> TCOResult:
    return compute_tco(medium_inputs)


@pytest.fixture
def financed_inputs() -> TCOInputs:
    return TCOInputs(
        customer_name="Norte Freight",
        truck_type=TruckType.HEAVY,
        truck_value=1_500_000,
        annual_distance=150_000,
        operation_years=7,
        fuel_price=23.5,
        has_financing=True,
        interest_rate=0.10,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(storage_dir=tmp_path / "storage")


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(tmp_path / "storage")


@pytest.fixture
def history(store: LocalStore) -> CalculationHistory:
    return CalculationHistory(store, capacity=10)
