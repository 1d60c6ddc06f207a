"""Input validation — raw form data → per-field error messages.

All field rules run on every call; several fields can fail at once and
every failure is reported.  The engine only ever receives a ``TCOInputs``
that passed here.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import ValidationError

from truck_tco.config.inputs import (
    MAX_ANNUAL_COST,
    MAX_ANNUAL_DISTANCE,
    MAX_FUEL_PRICE,
    MAX_INTEREST_RATE,
    MAX_TOLL_COST_PER_DISTANCE,
    MAX_TRUCK_VALUE,
    TCOInputs,
)


class InputField(str, Enum):
    CUSTOMER_NAME = "customer_name"
    TRUCK_TYPE = "truck_type"
    TRUCK_VALUE = "truck_value"
    ANNUAL_DISTANCE = "annual_distance"
    OPERATION_YEARS = "operation_years"
    FUEL_PRICE = "fuel_price"
    CUSTOM_FUEL_EFFICIENCY = "custom_fuel_efficiency"
    HAS_FINANCING = "has_financing"
    LOAN_AMOUNT = "loan_amount"
    INTEREST_RATE = "interest_rate"
    TOLL_COST_PER_DISTANCE = "toll_cost_per_distance"
    ANNUAL_LICENSE_COST = "annual_license_cost"
    OTHER_ANNUAL_COSTS = "other_annual_costs"


FIELD_MESSAGES: Mapping[InputField, str] = MappingProxyType({
    InputField.CUSTOMER_NAME: "Customer name is required",
    InputField.TRUCK_TYPE: "Select a truck type",
    InputField.TRUCK_VALUE: "Truck value must be greater than 0",
    InputField.ANNUAL_DISTANCE: "Annual distance must be greater than 0",
    InputField.OPERATION_YEARS: "Operation years must be between 1 and 20",
    InputField.FUEL_PRICE: "Fuel price must be greater than 0",
    InputField.CUSTOM_FUEL_EFFICIENCY: "Custom fuel efficiency must be greater than 0",
    InputField.HAS_FINANCING: "Financing must be yes or no",
    InputField.LOAN_AMOUNT: "Loan amount cannot be negative",
    InputField.INTEREST_RATE: "Interest rate cannot be negative",
    InputField.TOLL_COST_PER_DISTANCE: "Toll cost cannot be negative",
    InputField.ANNUAL_LICENSE_COST: "License cost cannot be negative",
    InputField.OTHER_ANNUAL_COSTS: "Other costs cannot be negative",
})

# Used instead of FIELD_MESSAGES when a value is above the field's upper limit.
LIMIT_MESSAGES: Mapping[InputField, str] = MappingProxyType({
    InputField.TRUCK_VALUE: f"Truck value cannot exceed ${MAX_TRUCK_VALUE:,.0f}",
    InputField.ANNUAL_DISTANCE: f"Annual distance cannot exceed {MAX_ANNUAL_DISTANCE:,.0f} km",
    InputField.FUEL_PRICE: f"Fuel price cannot exceed ${MAX_FUEL_PRICE:,.0f} per litre",
    InputField.LOAN_AMOUNT: f"Loan amount cannot exceed ${MAX_TRUCK_VALUE:,.0f}",
    InputField.INTEREST_RATE: f"Interest rate cannot exceed {MAX_INTEREST_RATE:.0%}",
    InputField.TOLL_COST_PER_DISTANCE: f"Toll cost cannot exceed ${MAX_TOLL_COST_PER_DISTANCE:,.0f} per km",
    InputField.ANNUAL_LICENSE_COST: f"License cost cannot exceed ${MAX_ANNUAL_COST:,.0f} per year",
    InputField.OTHER_ANNUAL_COSTS: f"Other costs cannot exceed ${MAX_ANNUAL_COST:,.0f} per year",
})

_FIELD_BY_NAME = {field.value: field for field in InputField}


class InputValidationError(ValueError):
    """Raised by :func:`parse_inputs`; ``errors`` maps each bad field to its message."""

    def __init__(self, errors: dict[InputField, str]):
        self.errors = errors
        fields = ", ".join(field.value for field in errors)
        super().__init__(f"Invalid calculation inputs: {fields}")


def _collect_errors(exc: ValidationError) -> dict[InputField, str]:
    errors: dict[InputField, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = _FIELD_BY_NAME.get(loc[0]) if loc else None
        if field is None:
            raise TypeError(f"Unexpected validation error: {error.get('msg')}") from exc
        if error.get("type") == "less_than_equal" and field in LIMIT_MESSAGES:
            errors.setdefault(field, LIMIT_MESSAGES[field])
        else:
            errors.setdefault(field, FIELD_MESSAGES[field])
    # Report in form order, independent of pydantic's ordering.
    return {field: errors[field] for field in InputField if field in errors}


def parse_inputs(data: Mapping[str, Any] | TCOInputs) -> TCOInputs:
    """Validate raw form data and return the typed inputs.

    Raises :class:`InputValidationError` listing every failing field.
    """
    if isinstance(data, TCOInputs):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        raise TypeError(f"Inputs must be a mapping, got {type(data).__name__}")
    try:
        return TCOInputs.model_validate(dict(data))
    except ValidationError as exc:
        raise InputValidationError(_collect_errors(exc)) from exc


def validate_inputs(data: Mapping[str, Any] | TCOInputs) -> dict[InputField, str]:
    """Return ``{field: message}`` for every failing field (empty = valid)."""
    try:
        parse_inputs(data)
    except InputValidationError as exc:
        return exc.errors
    return {}
