"""Service layer entrypoints."""

from .calculation_store import CalculationStore, ResultDrift
from .export import (
    Branding,
    ReportExporter,
    ReportRequest,
    export_report,
    report_lines,
)

__all__ = [
    "Branding",
    "CalculationStore",
    "ReportExporter",
    "ReportRequest",
    "ResultDrift",
    "export_report",
    "report_lines",
]
