"""Deterministic artifact names and writing report/export files to disk."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_customer_name(name: str) -> str:
    """Whitespace runs → ``_``; characters not allowed in file names → ``_``."""
    cleaned = _UNSAFE.sub("_", _WHITESPACE.sub("_", name.strip()))
    return cleaned or "customer"


def export_filename(customer_name: str, extension: str, now: datetime | None = None) -> str:
    """``TCO_<customer>_<epoch ms>.<extension>``."""
    moment = now or utc_now()
    return f"TCO_{sanitize_customer_name(customer_name)}_{epoch_millis(moment)}.{extension.lstrip('.')}"


def write_artifact(directory: str | Path, filename: str, payload: bytes | str) -> Path:
    """Write one report/export file, creating ``directory`` if needed."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename
    if isinstance(payload, str):
        path.write_text(payload, encoding="utf-8")
    else:
        path.write_bytes(payload)
    logger.info("Wrote %s (%d bytes)", path, path.stat().st_size)
    return path
