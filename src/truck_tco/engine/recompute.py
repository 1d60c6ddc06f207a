"""Debounced recomputation — validate on every change, compute once input settles.

Each ``submit`` bumps a generation counter and cancels whatever computation
was still waiting.  A computation only publishes its result when its
generation is still the newest, so a result for superseded input is never
delivered.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Any, Callable, Mapping

from truck_tco.config.inputs import TCOInputs
from truck_tco.engine.tco import DivisionUndefinedError, NonFiniteResultError, compute_tco
from truck_tco.engine.validation import InputField, InputValidationError, parse_inputs
from truck_tco.models.results import TCOResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[TCOResult], None]
InvalidCallback = Callable[[dict[InputField, str]], None]


class DebouncedCalculator:
    """Cancellable, debounced wrapper around validation + :func:`compute_tco`.

    ``timer_factory(delay, callback)`` must return an object with ``start()``
    and ``cancel()``; it defaults to :class:`threading.Timer`.
    """

    def __init__(
        self,
        on_result: ResultCallback | None = None,
        on_invalid: InvalidCallback | None = None,
        delay_seconds: float = 0.3,
        timer_factory: Callable[[float, Callable[[], Any]], Any] = threading.Timer,
    ):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._on_result = on_result
        self._on_invalid = on_invalid
        self._delay = delay_seconds
        self._timer_factory = timer_factory

        self._lock = threading.Lock()
        self._generation = 0
        self._timer: Any = None
        self._pending: tuple[int, TCOInputs] | None = None
        self._latest_result: TCOResult | None = None
        self._latest_errors: dict[InputField, str] = {}

    # ── State ──────────────────────────────────────────────────────────

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def latest_result(self) -> TCOResult | None:
        return self._latest_result

    @property
    def latest_errors(self) -> dict[InputField, str]:
        return dict(self._latest_errors)

    # ── Operations ─────────────────────────────────────────────────────

    def submit(self, data: Mapping[str, Any] | TCOInputs) -> int:
        """Register a new input snapshot and return its generation."""
        try:
            inputs = parse_inputs(data)
            errors: dict[InputField, str] = {}
        except InputValidationError as exc:
            inputs = None
            errors = exc.errors

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._cancel_timer()
            self._latest_errors = errors
            if inputs is None:
                self._pending = None
                self._latest_result = None
            else:
                self._pending = (generation, inputs)
                self._timer = self._timer_factory(self._delay, partial(self._run, generation))
                if hasattr(self._timer, "daemon"):
                    self._timer.daemon = True
                self._timer.start()

        if errors and self._on_invalid is not None:
            self._on_invalid(errors)
        return generation

    def flush(self) -> TCOResult | None:
        """Run the waiting computation immediately; ``None`` if nothing waits."""
        with self._lock:
            pending = self._pending
            self._cancel_timer()
        if pending is None:
            return None
        return self._run(pending[0])

    def cancel(self) -> None:
        """Drop the waiting computation, if any."""
        with self._lock:
            self._cancel_timer()
            self._pending = None

    # ── Internals ──────────────────────────────────────────────────────

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _run(self, generation: int) -> TCOResult | None:
        with self._lock:
            if self._pending is None or self._pending[0] != generation:
                logger.debug("Computation for generation %d superseded", generation)
                return None
            inputs = self._pending[1]
            self._pending = None
            self._timer = None

        try:
            result = compute_tco(inputs)
        except (DivisionUndefinedError, NonFiniteResultError) as exc:
            logger.warning("Generation %d cannot be computed: %s", generation, exc)
            with self._lock:
                if generation == self._generation:
                    self._latest_result = None
            return None

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale result for generation %d", generation)
                return None
            self._latest_result = result

        if self._on_result is not None:
            self._on_result(result)
        return result
