"""FastAPI server — the calculator over HTTP.

Run with:
    uvicorn truck_tco.api.server:app --reload --port 8000

Or:
    python -m truck_tco.api.server

Endpoints:
    GET    /truck-profiles      — the four truck profiles
    GET    /form/defaults       — default form values
    POST   /validate            — field errors for a raw input record
    POST   /calculate           — full TCO result (422 + field errors when invalid)
    POST   /calculate/compare   — rank several labelled input records
    POST   /export/json         — JSON export document as a download
    POST   /export/pdf          — PDF report as a download
    GET    /history             — saved calculations, newest first
    POST   /history             — calculate and save
    GET    /history/{id}        — one saved calculation
    DELETE /history             — clear the history
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from truck_tco.config.inputs import TCOInputs
from truck_tco.config.settings import get_settings
from truck_tco.config.truck import TRUCK_PROFILES
from truck_tco.engine.comparison import compare_tco
from truck_tco.engine.tco import DivisionUndefinedError, NonFiniteResultError, compute_tco
from truck_tco.engine.validation import InputValidationError, parse_inputs, validate_inputs
from truck_tco.log import configure_logging
from truck_tco.models.results import SavedCalculation, TCOComparison, TCOResult
from truck_tco.report.files import export_filename, utc_now
from truck_tco.report.json_export import export_json
from truck_tco.report.pdf import generate_tco_report
from truck_tco.storage.form_state import DEFAULT_FORM_DATA
from truck_tco.storage.history import CalculationHistory
from truck_tco.storage.local_store import LocalStore

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Truck TCO Calculator API",
    version=get_settings().version,
    description=(
        "Total Cost of Ownership for trucks: validate operating parameters, "
        "compute the nine-category annual cost breakdown, compare trucks, "
        "export JSON/PDF and keep a short history of saved calculations."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body carrying one raw input record (form values)."""
    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw form values. Example: {'customer_name': 'ACME', 'truck_type': 'medium', "
                    "'truck_value': 800000, 'annual_distance': 100000, 'operation_years': 5, 'fuel_price': 24}",
    )


class CompareRequest(BaseModel):
    """Request body for /calculate/compare."""
    scenarios: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Label → raw input record. Example: {'Medium': {...}, 'Heavy': {...}}",
    )


class ValidateResponse(BaseModel):
    valid: bool
    errors: dict[str, str]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def get_history() -> CalculationHistory:
    """History backed by the configured storage directory (overridable in tests)."""
    settings = get_settings()
    return CalculationHistory(LocalStore(settings.storage_dir), capacity=settings.history_capacity)


def _error_payload(errors: dict) -> dict[str, str]:
    return {field.value: message for field, message in errors.items()}


def _calculate(raw: dict[str, Any]) -> tuple[TCOInputs, TCOResult]:
    inputs = parse_inputs(raw)
    return inputs, compute_tco(inputs)


def _attachment(content: bytes | str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.exception_handler(InputValidationError)
async def _invalid_inputs(request: Request, exc: InputValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": _error_payload(exc.errors)})


@app.exception_handler(DivisionUndefinedError)
@app.exception_handler(NonFiniteResultError)
async def _uncomputable(request: Request, exc: ArithmeticError) -> JSONResponse:
    logger.warning("Rejected uncomputable inputs: %s", exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/truck-profiles")
def truck_profiles():
    """The four truck profiles keyed by truck type."""
    return {truck_type.value: profile.model_dump() for truck_type, profile in TRUCK_PROFILES.items()}


@app.get("/form/defaults")
def form_defaults():
    return dict(DEFAULT_FORM_DATA)


@app.post("/validate", response_model=ValidateResponse)
def validate(req: CalculateRequest):
    """Field errors for a raw input record; an empty mapping means valid."""
    errors = validate_inputs(req.inputs)
    return ValidateResponse(valid=not errors, errors=_error_payload(errors))


@app.post("/calculate", response_model=TCOResult)
def calculate(req: CalculateRequest):
    """Validate and compute.  Invalid input → 422 ``{"errors": {field: message}}``."""
    _, result = _calculate(req.inputs)
    return result


@app.post("/calculate/compare", response_model=TCOComparison)
def calculate_compare(req: CompareRequest):
    """Compute every labelled scenario and rank them by cost per km."""
    if not req.scenarios:
        raise HTTPException(status_code=422, detail="At least one scenario is required")

    results: dict[str, TCOResult] = {}
    errors: dict[str, dict[str, str]] = {}
    for label, raw in req.scenarios.items():
        try:
            results[label] = _calculate(raw)[1]
        except InputValidationError as exc:
            errors[label] = _error_payload(exc.errors)
    if errors:
        return JSONResponse(status_code=422, content={"errors": errors})
    return compare_tco(results)


@app.post("/export/json")
def export_json_document(req: CalculateRequest):
    inputs, result = _calculate(req.inputs)
    now = utc_now()
    return _attachment(
        export_json(inputs, result, now=now),
        "application/json",
        export_filename(inputs.customer_name, "json", now),
    )


@app.post("/export/pdf")
def export_pdf_report(req: CalculateRequest):
    inputs, result = _calculate(req.inputs)
    now = utc_now()
    try:
        pdf = generate_tco_report(inputs, result, generated_at=now)
    except (RuntimeError, ValueError) as exc:
        logger.exception("PDF generation failed for %s", inputs.customer_name)
        raise HTTPException(status_code=500, detail="Could not generate the PDF report") from exc
    return _attachment(pdf, "application/pdf", export_filename(inputs.customer_name, "pdf", now))


@app.get("/history", response_model=list[SavedCalculation])
def list_history(history: CalculationHistory = Depends(get_history)):
    return history.entries()


@app.post("/history", response_model=SavedCalculation, status_code=201)
def save_to_history(req: CalculateRequest, history: CalculationHistory = Depends(get_history)):
    inputs, result = _calculate(req.inputs)
    return history.save(inputs, result)


@app.get("/history/{calc_id}", response_model=SavedCalculation)
def get_saved(calc_id: int, history: CalculationHistory = Depends(get_history)):
    try:
        return history.get(calc_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"No saved calculation {calc_id}") from None


@app.delete("/history")
def clear_history(history: CalculationHistory = Depends(get_history)):
    history.clear()
    return {"cleared": True}


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    configure_logging(get_settings().log_level)
    uvicorn.run(
        "truck_tco.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
