"""Reports and exports — formatting, PDF report, JSON export."""

from truck_tco.report.formatting import (
    CATEGORY_DISPLAY,
    CategoryDisplay,
    category_color,
    category_label,
    format_currency,
    format_number,
    format_percentage,
)
from truck_tco.report.files import export_filename, sanitize_customer_name
from truck_tco.report.json_export import (
    ExportDocument,
    build_export_document,
    export_json,
    load_export,
    write_json_export,
)
from truck_tco.report.pdf import generate_tco_report, write_tco_report

__all__ = [
    "CATEGORY_DISPLAY",
    "CategoryDisplay",
    "category_color",
    "category_label",
    "format_currency",
    "format_number",
    "format_percentage",
    "export_filename",
    "sanitize_customer_name",
    "ExportDocument",
    "build_export_document",
    "export_json",
    "load_export",
    "write_json_export",
    "generate_tco_report",
    "write_tco_report",
]
