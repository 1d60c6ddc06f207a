"""File-backed key-value store — one JSON file per key.

Mirrors what the calculator needs from browser local storage: read with a
default, write, change notifications, and picking up writes made by another
process (``refresh``; the last writer wins).  I/O failures are logged and
never raised: the in-memory value is the source of truth for this process.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

FORM_KEY = "tco-form-data"
HISTORY_KEY = "tco-saved-calculations"

ChangeCallback = Callable[[str, Any, Any], None]
"""``callback(key, new_value, old_value)``."""

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_MISSING = object()


class LocalStore:
    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._cache: dict[str, Any] = {}
        self._signatures: dict[str, tuple[int, int, int]] = {}
        self._subscribers: dict[str, list[ChangeCallback]] = {}

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key {key!r}")
        return self.directory / f"{key}.json"

    # ── Reading ────────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value for ``key`` (a copy), or ``default`` when absent/unreadable."""
        if key not in self._cache:
            value = self._read(key)
            if value is _MISSING:
                return default
            self._cache[key] = value
        return copy.deepcopy(self._cache[key])

    def _read(self, key: str) -> Any:
        path = self.path_for(key)
        try:
            stat = path.stat()
            value = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return _MISSING
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return _MISSING
        self._signatures[key] = (stat.st_mtime_ns, stat.st_size, stat.st_ino)
        return value

    # ── Writing ────────────────────────────────────────────────────────

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` (must be JSON-serializable) and notify subscribers."""
        path = self.path_for(key)
        old_value = self.get(key)
        payload = json.dumps(value, indent=2, ensure_ascii=False)
        self._cache[key] = json.loads(payload)

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_name(path.name + ".tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
            stat = path.stat()
            self._signatures[key] = (stat.st_mtime_ns, stat.st_size, stat.st_ino)
        except OSError as exc:
            logger.warning("Could not write %s: %s", path, exc)

        self._notify(key, self.get(key), old_value)

    # ── Change notification ────────────────────────────────────────────

    def subscribe(self, key: str, callback: ChangeCallback) -> Callable[[], None]:
        """Call ``callback`` whenever ``key`` changes; returns an unsubscribe function."""
        self.path_for(key)
        callbacks = self._subscribers.setdefault(key, [])
        callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def refresh(self) -> list[str]:
        """Reload keys whose files were rewritten or removed elsewhere; return the keys that changed."""
        changed: list[str] = []
        for key in sorted(set(self._cache) | set(self._subscribers)):
            path = self.path_for(key)
            try:
                stat = path.stat()
            except FileNotFoundError:
                # Only a file this store has seen counts as removed elsewhere.
                if self._signatures.pop(key, None) is not None and key in self._cache:
                    old_value = self._cache.pop(key)
                    changed.append(key)
                    logger.debug("Picked up external removal of %s", key)
                    self._notify(key, None, copy.deepcopy(old_value))
                continue
            except OSError as exc:
                logger.warning("Could not stat %s: %s", path, exc)
                continue
            if self._signatures.get(key) == (stat.st_mtime_ns, stat.st_size, stat.st_ino):
                continue

            old_value = self._cache.get(key)
            new_value = self._read(key)
            if new_value is _MISSING or new_value == old_value:
                continue
            self._cache[key] = new_value
            changed.append(key)
            logger.debug("Picked up external change to %s", key)
            self._notify(key, copy.deepcopy(new_value), copy.deepcopy(old_value))
        return changed

    def _notify(self, key: str, new_value: Any, old_value: Any) -> None:
        for callback in list(self._subscribers.get(key, ())):
            callback(key, new_value, old_value)
