"""Saved-calculation history — bounded, most recent first."""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError

from truck_tco.config.inputs import TCOInputs
from truck_tco.models.results import SavedCalculation, TCOResult
from truck_tco.report.files import epoch_millis, iso_timestamp, utc_now
from truck_tco.storage.local_store import HISTORY_KEY, LocalStore

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class CalculationHistory:
    """Keeps at most ``capacity`` saved calculations; saving beyond that evicts the oldest."""

    def __init__(self, store: LocalStore, capacity: int = DEFAULT_CAPACITY, key: str = HISTORY_KEY):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.store = store
        self.capacity = capacity
        self.key = key

    def entries(self) -> list[SavedCalculation]:
        raw = self.store.get(self.key, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed history under %s", self.key)
            return []
        entries = []
        for item in raw:
            try:
                entries.append(SavedCalculation.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping unreadable saved calculation: %s", exc)
        return entries

    def save(self, inputs: TCOInputs, results: TCOResult, now: datetime | None = None) -> SavedCalculation:
        moment = now or utc_now()
        existing = self.entries()

        calc_id = epoch_millis(moment)
        taken = {entry.id for entry in existing}
        while calc_id in taken:
            calc_id += 1

        saved = SavedCalculation(
            id=calc_id,
            timestamp=iso_timestamp(moment),
            customer_name=inputs.customer_name,
            inputs=inputs,
            results=results,
        )
        kept = [saved, *existing][: self.capacity]
        self.store.set(self.key, [entry.model_dump(mode="json") for entry in kept])
        logger.info("Saved calculation %d for %s (%d in history)", saved.id, saved.customer_name, len(kept))
        return saved

    def get(self, calc_id: int) -> SavedCalculation:
        for entry in self.entries():
            if entry.id == calc_id:
                return entry
        raise KeyError(calc_id)

    def clear(self) -> None:
        self.store.set(self.key, [])

    def __len__(self) -> int:
        return len(self.entries())
