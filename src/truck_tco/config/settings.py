"""Application settings — storage location, history size, recompute delay.

Every field has a default; ``AppSettings.from_env`` overrides them from
``TRUCK_TCO_*`` environment variables.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, Field

ENV_PREFIX = "TRUCK_TCO_"


class AppSettings(BaseModel):
    """Runtime settings shared by the dashboard and the API server."""

    app_name: str = Field(default="Truck TCO Calculator", description="Shown in reports and exports")
    version: str = Field(default="2.0.0", description="Written into JSON exports")
    storage_dir: Path = Field(
        default=Path.home() / ".truck_tco",
        description="Directory holding the saved form and calculation history",
    )
    history_capacity: int = Field(default=10, ge=1, le=100, description="Saved calculations kept")
    recompute_delay_seconds: float = Field(
        default=0.3, ge=0,
        description="Debounce delay between an input change and the recomputation",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Build settings from ``TRUCK_TCO_<FIELD>`` variables (unset = default)."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for name in cls.model_fields:
            value = environ.get(ENV_PREFIX + name.upper())
            if value is not None and value != "":
                overrides[name] = value
        if "log_level" in overrides:
            overrides["log_level"] = overrides["log_level"].upper()
        return cls(**overrides)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings.from_env()
