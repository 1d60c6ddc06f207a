"""Persistence — local key-value store, saved history, form snapshot."""

from truck_tco.storage.local_store import FORM_KEY, HISTORY_KEY, LocalStore
from truck_tco.storage.history import CalculationHistory
from truck_tco.storage.form_state import DEFAULT_FORM_DATA, load_form_data, save_form_data

__all__ = [
    "FORM_KEY",
    "HISTORY_KEY",
    "LocalStore",
    "CalculationHistory",
    "DEFAULT_FORM_DATA",
    "load_form_data",
    "save_form_data",
]
