"""JSON export — one self-describing document per calculation.

Shape::

    {timestamp, version, customer, results,
     metadata: {generatedBy, exportType}}

Floats are written with Python's shortest round-trip repr, so loading an
export gives back exactly the same numbers.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from truck_tco.config.inputs import TCOInputs
from truck_tco.config.settings import AppSettings, get_settings
from truck_tco.models.results import TCOResult
from truck_tco.report.files import export_filename, iso_timestamp, utc_now, write_artifact


class ExportMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_by: str = Field(alias="generatedBy")
    export_type: str = Field(default="JSON", alias="exportType")


class ExportDocument(BaseModel):
    timestamp: str
    version: str
    customer: TCOInputs
    results: TCOResult
    metadata: ExportMetadata


def build_export_document(
    inputs: TCOInputs,
    results: TCOResult,
    *,
    now: datetime | None = None,
    settings: AppSettings | None = None,
) -> ExportDocument:
    settings = settings or get_settings()
    return ExportDocument(
        timestamp=iso_timestamp(now or utc_now()),
        version=settings.version,
        customer=inputs,
        results=results,
        metadata=ExportMetadata(generated_by=settings.app_name),
    )


def export_json(
    inputs: TCOInputs,
    results: TCOResult,
    *,
    now: datetime | None = None,
    settings: AppSettings | None = None,
) -> str:
    """Serialize the export document (2-space indented JSON)."""
    document = build_export_document(inputs, results, now=now, settings=settings)
    return document.model_dump_json(indent=2, by_alias=True)


def load_export(text: str | bytes) -> ExportDocument:
    """Parse a document produced by :func:`export_json`."""
    return ExportDocument.model_validate_json(text)


def write_json_export(
    inputs: TCOInputs,
    results: TCOResult,
    directory: str | Path,
    *,
    now: datetime | None = None,
    settings: AppSettings | None = None,
) -> Path:
    moment = now or utc_now()
    payload = export_json(inputs, results, now=moment, settings=settings)
    return write_artifact(directory, export_filename(inputs.customer_name, "json", moment), payload)
