"""Engine — validation, TCO computation, comparison and debounced recompute."""

from truck_tco.engine.validation import (
    FIELD_MESSAGES,
    LIMIT_MESSAGES,
    InputField,
    InputValidationError,
    parse_inputs,
    validate_inputs,
)
from truck_tco.engine.tco import DivisionUndefinedError, NonFiniteResultError, compute_tco
from truck_tco.engine.comparison import compare_tco
from truck_tco.engine.recompute import DebouncedCalculator

__all__ = [
    "FIELD_MESSAGES",
    "LIMIT_MESSAGES",
    "InputField",
    "InputValidationError",
    "parse_inputs",
    "validate_inputs",
    "DivisionUndefinedError",
    "NonFiniteResultError",
    "compute_tco",
    "compare_tco",
    "DebouncedCalculator",
]
