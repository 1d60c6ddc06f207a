"""Calculation inputs — one customer, one truck, one operating scenario."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from truck_tco.config.truck import TruckType


DEFAULT_LOAN_SHARE = 0.80
"""Share of the truck value financed when no loan amount is given."""

# Upper limits keep every derived amount finite.
MAX_TRUCK_VALUE = 100_000_000.0
MAX_ANNUAL_DISTANCE = 2_000_000.0
MAX_FUEL_PRICE = 1_000.0
MAX_INTEREST_RATE = 1.0
MAX_TOLL_COST_PER_DISTANCE = 1_000.0
MAX_ANNUAL_COST = 100_000_000.0


class TCOInputs(BaseModel):
    """Validated operating parameters for one TCO calculation.

    Optional cost fields left blank fall back to their defaults.  An explicit
    zero is a real value, not a blank: zero tolls means no tolls.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    customer_name: str = Field(description="Customer the calculation is prepared for")
    truck_type: TruckType = Field(description="Selects the truck profile")
    truck_value: float = Field(gt=0, le=MAX_TRUCK_VALUE, description="Purchase price of the truck ($)")
    annual_distance: float = Field(gt=0, le=MAX_ANNUAL_DISTANCE, description="Distance driven per year (km)")
    operation_years: int = Field(ge=1, le=20, description="Years the truck stays in service")
    fuel_price: float = Field(gt=0, le=MAX_FUEL_PRICE, description="Fuel price ($/L)")
    custom_fuel_efficiency: float | None = Field(
        default=None, gt=0,
        description="Measured fuel efficiency (km/L). Blank = truck profile default.",
    )

    # --- Financing ---
    has_financing: bool = Field(default=False, description="Whether the truck is bought on credit")
    loan_amount: float | None = Field(
        default=None, ge=0, le=MAX_TRUCK_VALUE,
        description="Financed amount ($). Blank = 80% of the truck value.",
    )
    interest_rate: float = Field(
        default=0.12, ge=0, le=MAX_INTEREST_RATE,
        description="Annual interest rate (fraction, at most 1.0)",
    )

    # --- Other operating costs ---
    toll_cost_per_distance: float = Field(
        default=0.5, ge=0, le=MAX_TOLL_COST_PER_DISTANCE, description="Tolls ($/km)",
    )
    annual_license_cost: float = Field(
        default=15_000.0, ge=0, le=MAX_ANNUAL_COST, description="Licenses and permits ($/year)",
    )
    other_annual_costs: float = Field(
        default=0.0, ge=0, le=MAX_ANNUAL_COST, description="Any other operating costs ($/year)",
    )

    @field_validator("customer_name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("customer name is blank")
        return value

    @field_validator("custom_fuel_efficiency", "loan_amount", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if _is_blank(value):
            return None
        return value

    @field_validator(
        "has_financing", "interest_rate", "toll_cost_per_distance",
        "annual_license_cost", "other_annual_costs",
        mode="before",
    )
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if _is_blank(value):
            return cls.model_fields[info.field_name].default
        return value

    @property
    def effective_loan_amount(self) -> float:
        """Financed amount, resolving a blank loan to the default share."""
        if self.loan_amount is None:
            return self.truck_value * DEFAULT_LOAN_SHARE
        return self.loan_amount


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
