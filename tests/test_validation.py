"""Validator tests — every field rule triggers on its own, all errors are reported.

Each test starts from the valid reference form and breaks exactly one field.
"""

from __future__ import annotations

import math

import pytest

from truck_tco.config import TCOInputs, TruckType
from truck_tco.engine.validation import (
    FIELD_MESSAGES,
    LIMIT_MESSAGES,
    InputField,
    InputValidationError,
    parse_inputs,
    validate_inputs,
)


def _with(raw_form: dict, **changes) -> dict:
    data = dict(raw_form)
    data.update(changes)
    return data


def _without(raw_form: dict, field: str) -> dict:
    data = dict(raw_form)
    del data[field]
    return data


# ═══════════════════════════════════════════════════════════════════════════
# Valid input
# ═══════════════════════════════════════════════════════════════════════════

class TestValidInput:

    def test_reference_form_is_valid(self, raw_form):
        assert validate_inputs(raw_form) == {}

    def test_parse_returns_typed_inputs(self, raw_form):
        inputs = parse_inputs(raw_form)
        assert isinstance(inputs, TCOInputs)
        assert inputs.truck_type is TruckType.MEDIUM
        assert inputs.operation_years == 5

    def test_numeric_strings_are_coerced(self, raw_form):
        inputs = parse_inputs(_with(raw_form, truck_value="800000", operation_years="5", fuel_price="24.5"))
        assert inputs.truck_value == 800_000.0
        assert inputs.operation_years == 5
        assert inputs.fuel_price == 24.5

    def test_customer_name_is_trimmed(self, raw_form):
        inputs = parse_inputs(_with(raw_form, customer_name="  ACME Logistics  "))
        assert inputs.customer_name == "ACME Logistics"

    def test_validated_model_is_accepted(self, medium_inputs):
        assert validate_inputs(medium_inputs) == {}

    def test_boundary_years_accepted(self, raw_form):
        assert validate_inputs(_with(raw_form, operation_years=1)) == {}
        assert validate_inputs(_with(raw_form, operation_years=20)) == {}

    @pytest.mark.parametrize("truck_type", ["light", "medium", "heavy", "extra_heavy"])
    def test_every_truck_type_accepted(self, raw_form, truck_type):
        assert validate_inputs(_with(raw_form, truck_type=truck_type)) == {}


# ═══════════════════════════════════════════════════════════════════════════
# Required fields, one at a time
# ═══════════════════════════════════════════════════════════════════════════

class TestCustomerName:

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_rejected(self, raw_form, name):
        errors = validate_inputs(_with(raw_form, customer_name=name))
        assert errors == {InputField.CUSTOMER_NAME: FIELD_MESSAGES[InputField.CUSTOMER_NAME]}

    def test_missing_rejected(self, raw_form):
        errors = validate_inputs(_without(raw_form, "customer_name"))
        assert list(errors) == [InputField.CUSTOMER_NAME]


class TestTruckType:

    def test_unknown_rejected(self, raw_form):
        errors = validate_inputs(_with(raw_form, truck_type="unknown"))
        assert list(errors) == [InputField.TRUCK_TYPE]

    def test_empty_rejected(self, raw_form):
        errors = validate_inputs(_with(raw_form, truck_type=""))
        assert list(errors) == [InputField.TRUCK_TYPE]

    def test_missing_rejected(self, raw_form):
        errors = validate_inputs(_without(raw_form, "truck_type"))
        assert list(errors) == [InputField.TRUCK_TYPE]


@pytest.mark.parametrize("field", [
    InputField.TRUCK_VALUE,
    InputField.ANNUAL_DISTANCE,
    InputField.FUEL_PRICE,
])
class TestPositiveNumbers:

    def test_zero_rejected(self, raw_form, field):
        assert list(validate_inputs(_with(raw_form, **{field.value: 0}))) == [field]

    def test_negative_rejected(self, raw_form, field):
        assert list(validate_inputs(_with(raw_form, **{field.value: -1}))) == [field]

    def test_missing_rejected(self, raw_form, field):
        assert list(validate_inputs(_without(raw_form, field.value))) == [field]

    def test_blank_rejected(self, raw_form, field):
        assert list(validate_inputs(_with(raw_form, **{field.value: ""}))) == [field]

    def test_non_numeric_rejected(self, raw_form, field):
        assert list(validate_inputs(_with(raw_form, **{field.value: "lots"}))) == [field]

    @pytest.mark.parametrize("value", [math.inf, math.nan])
    def test_non_finite_rejected(self, raw_form, field, value):
        assert list(validate_inputs(_with(raw_form, **{field.value: value}))) == [field]

    def test_tiny_positive_accepted(self, raw_form, field):
        assert validate_inputs(_with(raw_form, **{field.value: 0.01})) == {}


class TestUpperLimits:

    @pytest.mark.parametrize("field,value", [
        (InputField.TRUCK_VALUE, 1e308),
        (InputField.ANNUAL_DISTANCE, 1e308),
        (InputField.FUEL_PRICE, 1e308),
        (InputField.LOAN_AMOUNT, 1e308),
        (InputField.INTEREST_RATE, 1.5),
        (InputField.TOLL_COST_PER_DISTANCE, 1e308),
        (InputField.ANNUAL_LICENSE_COST, 1e308),
        (InputField.OTHER_ANNUAL_COSTS, 1e308),
    ])
    def test_above_limit_rejected_with_limit_message(self, raw_form, field, value):
        errors = validate_inputs(_with(raw_form, has_financing=True, **{field.value: value}))
        assert errors == {field: LIMIT_MESSAGES[field]}

    def test_limit_message_wording(self):
        assert LIMIT_MESSAGES[InputField.TRUCK_VALUE] == "Truck value cannot exceed $100,000,000"
        assert LIMIT_MESSAGES[InputField.INTEREST_RATE] == "Interest rate cannot exceed 100%"

    def test_values_at_limit_accepted(self, raw_form):
        assert validate_inputs(_with(
            raw_form, truck_type="extra_heavy", truck_value=100_000_000, annual_distance=2_000_000,
            fuel_price=1_000, operation_years=20,
        )) == {}

    def test_upper_limit_of_years_keeps_range_message(self, raw_form):
        errors = validate_inputs(_with(raw_form, operation_years=21))
        assert errors == {InputField.OPERATION_YEARS: FIELD_MESSAGES[InputField.OPERATION_YEARS]}


class TestOperationYears:

    @pytest.mark.parametrize("years", [0, -3, 21, 100])
    def test_out_of_range_rejected(self, raw_form, years):
        errors = validate_inputs(_with(raw_form, operation_years=years))
        assert errors == {InputField.OPERATION_YEARS: "Operation years must be between 1 and 20"}

    def test_fractional_rejected(self, raw_form):
        assert list(validate_inputs(_with(raw_form, operation_years=2.5))) == [InputField.OPERATION_YEARS]

    def test_missing_rejected(self, raw_form):
        assert list(validate_inputs(_without(raw_form, "operation_years"))) == [InputField.OPERATION_YEARS]


class TestCustomFuelEfficiency:

    @pytest.mark.parametrize("value", ["", None, "  "])
    def test_absent_is_valid(self, raw_form, value):
        assert validate_inputs(_with(raw_form, custom_fuel_efficiency=value)) == {}
        assert parse_inputs(_with(raw_form, custom_fuel_efficiency=value)).custom_fuel_efficiency is None

    def test_omitted_is_valid(self, raw_form):
        assert validate_inputs(_without(raw_form, "custom_fuel_efficiency")) == {}

    @pytest.mark.parametrize("value", [0, -2.5])
    def test_non_positive_rejected(self, raw_form, value):
        errors = validate_inputs(_with(raw_form, custom_fuel_efficiency=value))
        assert list(errors) == [InputField.CUSTOM_FUEL_EFFICIENCY]

    def test_positive_accepted(self, raw_form):
        assert parse_inputs(_with(raw_form, custom_fuel_efficiency=7.2)).custom_fuel_efficiency == 7.2


# ═══════════════════════════════════════════════════════════════════════════
# Optional cost fields
# ═══════════════════════════════════════════════════════════════════════════

class TestOptionalCosts:

    def test_defaults_applied_when_omitted(self, raw_form):
        inputs = parse_inputs(raw_form)
        assert inputs.loan_amount is None
        assert inputs.interest_rate == 0.12
        assert inputs.toll_cost_per_distance == 0.5
        assert inputs.annual_license_cost == 15_000
        assert inputs.other_annual_costs == 0

    def test_blank_strings_fall_back_to_defaults(self, raw_form):
        inputs = parse_inputs(_with(
            raw_form, interest_rate="", toll_cost_per_distance="",
            annual_license_cost=None, other_annual_costs="", has_financing="",
        ))
        assert inputs.interest_rate == 0.12
        assert inputs.toll_cost_per_distance == 0.5
        assert inputs.annual_license_cost == 15_000
        assert inputs.other_annual_costs == 0
        assert inputs.has_financing is False

    def test_explicit_zero_is_kept(self, raw_form):
        inputs = parse_inputs(_with(
            raw_form, loan_amount=0, interest_rate=0, toll_cost_per_distance=0, annual_license_cost=0,
        ))
        assert inputs.loan_amount == 0
        assert inputs.interest_rate == 0
        assert inputs.toll_cost_per_distance == 0
        assert inputs.annual_license_cost == 0

    @pytest.mark.parametrize("field", [
        InputField.LOAN_AMOUNT,
        InputField.INTEREST_RATE,
        InputField.TOLL_COST_PER_DISTANCE,
        InputField.ANNUAL_LICENSE_COST,
        InputField.OTHER_ANNUAL_COSTS,
    ])
    def test_negative_rejected(self, raw_form, field):
        assert list(validate_inputs(_with(raw_form, **{field.value: -1}))) == [field]

    def test_effective_loan_amount_defaults_to_80_percent(self, raw_form):
        inputs = parse_inputs(_with(raw_form, has_financing=True))
        assert inputs.effective_loan_amount == pytest.approx(640_000)


# ═══════════════════════════════════════════════════════════════════════════
# Several errors at once
# ═══════════════════════════════════════════════════════════════════════════

class TestMultipleErrors:

    def test_all_errors_reported(self):
        errors = validate_inputs({
            "customer_name": " ",
            "truck_type": "unknown",
            "truck_value": 0,
            "annual_distance": -5,
            "operation_years": 21,
            "fuel_price": 0,
            "custom_fuel_efficiency": -1,
        })
        assert list(errors) == [
            InputField.CUSTOMER_NAME,
            InputField.TRUCK_TYPE,
            InputField.TRUCK_VALUE,
            InputField.ANNUAL_DISTANCE,
            InputField.OPERATION_YEARS,
            InputField.FUEL_PRICE,
            InputField.CUSTOM_FUEL_EFFICIENCY,
        ]
        for field, message in errors.items():
            assert message == FIELD_MESSAGES[field]

    def test_empty_record_reports_every_required_field(self):
        errors = validate_inputs({})
        assert set(errors) == {
            InputField.CUSTOMER_NAME,
            InputField.TRUCK_TYPE,
            InputField.TRUCK_VALUE,
            InputField.ANNUAL_DISTANCE,
            InputField.OPERATION_YEARS,
            InputField.FUEL_PRICE,
        }

    def test_parse_raises_with_error_mapping(self, raw_form):
        with pytest.raises(InputValidationError) as excinfo:
            parse_inputs(_with(raw_form, operation_years=21, truck_type="unknown"))
        assert set(excinfo.value.errors) == {InputField.OPERATION_YEARS, InputField.TRUCK_TYPE}
        assert isinstance(excinfo.value, ValueError)

    def test_non_mapping_rejected(self):
        with pytest.raises(TypeError):
            validate_inputs(["not", "a", "mapping"])

    def test_validation_has_no_side_effects(self, raw_form):
        snapshot = dict(raw_form)
        validate_inputs(raw_form)
        assert raw_form == snapshot

    def test_every_field_has_a_message(self):
        assert set(FIELD_MESSAGES) == set(InputField)
        assert {f.value for f in InputField} == set(TCOInputs.model_fields)
