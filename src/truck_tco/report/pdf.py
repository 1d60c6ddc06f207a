"""PDF report — one customer-facing TCO summary rendered with PyMuPDF.

Layout (top to bottom): header band, customer block, calculation
parameters, highlighted total cost of ownership, two-column key metrics,
and the annual cost breakdown table ending in a ``100.0%`` totals row.
Whenever the next block does not fit above the bottom margin a new page is
started; every page gets the footer.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import fitz  # PyMuPDF

from truck_tco.config.inputs import TCOInputs
from truck_tco.config.settings import AppSettings, get_settings
from truck_tco.models.results import TCOResult
from truck_tco.report.files import export_filename, utc_now, write_artifact
from truck_tco.report.formatting import (
    category_label,
    format_currency,
    format_number,
    format_percentage,
)

A4 = (595.0, 842.0)
"""Page size in points."""

LEFT = 56.0
TOP_MARGIN = 56.0
BOTTOM_MARGIN = 60.0
HEADER_HEIGHT = 85.0
LINE = 16.0
HEADING = 22.0
SECTION_GAP = 12.0
ROW = 17.0
TABLE_WIDTH = 425.0
COLUMNS = (LEFT + 14, LEFT + 184, LEFT + 326)

BRAND_BLUE = (13 / 255, 71 / 255, 161 / 255)
LIGHT_GREY = (245 / 255, 245 / 255, 245 / 255)
TABLE_GREY = (240 / 255, 240 / 255, 240 / 255)
FOOTER_GREY = (100 / 255, 100 / 255, 100 / 255)
BLACK = (0.0, 0.0, 0.0)
WHITE = (1.0, 1.0, 1.0)

REGULAR = "helv"
BOLD = "hebo"


class _ReportCanvas:
    """Tracks the current page and vertical cursor; adds pages on overflow."""

    def __init__(self, doc: fitz.Document, page_size: tuple[float, float]):
        self.doc = doc
        self.width, self.height = page_size
        self.page = doc.new_page(width=self.width, height=self.height)
        self.y = 0.0

    def ensure_space(self, height: float) -> None:
        if self.y + height > self.height - BOTTOM_MARGIN:
            self.page = self.doc.new_page(width=self.width, height=self.height)
            self.y = TOP_MARGIN

    def text(self, x: float, y: float, text: str, *, size: float = 11, bold: bool = False,
             color: tuple[float, float, float] = BLACK) -> None:
        self.page.insert_text(
            fitz.Point(x, y), text,
            fontsize=size, fontname=BOLD if bold else REGULAR, color=color,
        )

    def box(self, x0: float, y0: float, x1: float, y1: float, fill: tuple[float, float, float]) -> None:
        self.page.draw_rect(fitz.Rect(x0, y0, x1, y1), color=None, fill=fill, width=0)

    def heading(self, title: str) -> None:
        self.ensure_space(HEADING + LINE)
        self.text(LEFT, self.y + 14, title, size=12, bold=True)
        self.y += HEADING

    def line(self, text: str) -> None:
        self.ensure_space(LINE)
        self.text(LEFT, self.y + 11, text)
        self.y += LINE


def _draw_header(canvas: _ReportCanvas, settings: AppSettings) -> None:
    canvas.box(0, 0, canvas.width, HEADER_HEIGHT, BRAND_BLUE)
    canvas.text(LEFT, 42, settings.app_name.upper(), size=20, bold=True, color=WHITE)
    canvas.text(LEFT, 68, "Total Cost of Ownership (TCO) report", size=14, color=WHITE)
    canvas.y = HEADER_HEIGHT + 27


def _draw_customer(canvas: _ReportCanvas, inputs: TCOInputs, results: TCOResult, generated_at: datetime) -> None:
    canvas.heading("CUSTOMER INFORMATION")
    canvas.line(f"Customer: {inputs.customer_name}")
    canvas.line(f"Date: {generated_at:%Y-%m-%d}")
    canvas.line(f"Truck type: {results.truck_profile.name}")
    canvas.y += SECTION_GAP


def _draw_parameters(canvas: _ReportCanvas, inputs: TCOInputs, results: TCOResult) -> None:
    canvas.heading("CALCULATION PARAMETERS")
    canvas.line(f"Truck value: {format_currency(inputs.truck_value)}")
    canvas.line(f"Annual distance: {format_number(inputs.annual_distance)} km")
    canvas.line(f"Operation years: {inputs.operation_years} years")
    canvas.line(f"Fuel price: ${inputs.fuel_price:,.2f} per liter")
    canvas.line(f"Fuel efficiency: {format_number(results.fuel_efficiency_used, 1)} km/L")
    if inputs.has_financing:
        canvas.line(
            f"Financing: {format_currency(inputs.effective_loan_amount)} "
            f"at {format_percentage(inputs.interest_rate * 100)} per year"
        )
    canvas.y += SECTION_GAP


def _draw_total(canvas: _ReportCanvas, inputs: TCOInputs, results: TCOResult) -> None:
    height = 70.0
    canvas.ensure_space(height)
    top = canvas.y
    canvas.box(LEFT - 14, top, canvas.width - LEFT + 14, top + height, LIGHT_GREY)
    canvas.text(LEFT, top + 20, "TOTAL COST OF OWNERSHIP", size=14, bold=True)
    canvas.text(LEFT, top + 46, format_currency(results.total_period_cost), size=18, bold=True, color=BRAND_BLUE)
    canvas.text(LEFT, top + 62, f"({inputs.operation_years} years of operation)", size=10)
    canvas.y = top + height + 24


def _draw_metrics(canvas: _ReportCanvas, results: TCOResult) -> None:
    right = LEFT + 254
    canvas.heading("KEY METRICS")
    rows = [
        (f"Annual cost: {format_currency(results.total_annual_cost)}",
         f"Cost per km: ${results.cost_per_distance:,.2f}"),
        (f"Cost per day: {format_currency(results.cost_per_day)}",
         f"Total distance: {format_number(results.total_distance)} km"),
    ]
    for left_text, right_text in rows:
        canvas.ensure_space(LINE)
        canvas.text(LEFT, canvas.y + 11, left_text)
        canvas.text(right, canvas.y + 11, right_text)
        canvas.y += LINE
    canvas.y += 24


def _table_row(canvas: _ReportCanvas, cells: tuple[str, str, str], *, bold: bool = False,
               fill: tuple[float, float, float] | None = None,
               color: tuple[float, float, float] = BLACK, height: float = ROW) -> None:
    canvas.ensure_space(height)
    if fill is not None:
        canvas.box(LEFT, canvas.y, LEFT + TABLE_WIDTH, canvas.y + height, fill)
    baseline = canvas.y + height / 2 + 4
    for x, cell in zip(COLUMNS, cells):
        canvas.text(x, baseline, cell, bold=bold, color=color)
    canvas.y += height


def _draw_breakdown(canvas: _ReportCanvas, results: TCOResult) -> None:
    canvas.heading("ANNUAL COST BREAKDOWN")
    _table_row(canvas, ("Category", "Annual cost", "Share"), bold=True, fill=TABLE_GREY, height=22)
    for entry in results.cost_breakdown:
        _table_row(canvas, (
            category_label(entry.category),
            format_currency(entry.amount),
            format_percentage(entry.percentage),
        ))
    canvas.y += 10
    _table_row(
        canvas,
        ("TOTAL ANNUAL COST", format_currency(results.total_annual_cost), "100.0%"),
        bold=True, fill=BRAND_BLUE, color=WHITE, height=22,
    )


def _draw_footers(doc: fitz.Document, settings: AppSettings, generated_at: datetime) -> None:
    for page in doc:
        height = page.rect.height
        page.insert_text(fitz.Point(LEFT, height - 40), settings.app_name,
                         fontsize=8, fontname=REGULAR, color=FOOTER_GREY)
        page.insert_text(fitz.Point(LEFT, height - 28), f"Generated {generated_at:%Y-%m-%d %H:%M %Z}".rstrip(),
                         fontsize=8, fontname=REGULAR, color=FOOTER_GREY)
        page.insert_text(fitz.Point(page.rect.width - LEFT - 50, height - 28),
                         f"Page {page.number + 1} of {doc.page_count}",
                         fontsize=8, fontname=REGULAR, color=FOOTER_GREY)


def generate_tco_report(
    inputs: TCOInputs,
    results: TCOResult,
    *,
    generated_at: datetime | None = None,
    page_size: tuple[float, float] = A4,
    settings: AppSettings | None = None,
) -> bytes:
    """Render the report and return the PDF bytes."""
    settings = settings or get_settings()
    generated_at = generated_at or utc_now()

    doc = fitz.open()
    try:
        doc.set_metadata({
            "title": f"TCO report: {inputs.customer_name}",
            "author": settings.app_name,
            "subject": "Total Cost of Ownership",
            "creator": settings.app_name,
        })
        canvas = _ReportCanvas(doc, page_size)
        _draw_header(canvas, settings)
        _draw_customer(canvas, inputs, results, generated_at)
        _draw_parameters(canvas, inputs, results)
        _draw_total(canvas, inputs, results)
        _draw_metrics(canvas, results)
        _draw_breakdown(canvas, results)
        _draw_footers(doc, settings, generated_at)
        return doc.tobytes(garbage=3, deflate=True)
    finally:
        doc.close()


def write_tco_report(
    inputs: TCOInputs,
    results: TCOResult,
    directory: str | Path,
    *,
    now: datetime | None = None,
    settings: AppSettings | None = None,
) -> Path:
    moment = now or utc_now()
    payload = generate_tco_report(inputs, results, generated_at=moment, settings=settings)
    return write_artifact(directory, export_filename(inputs.customer_name, "pdf", moment), payload)
