"""Hand-off of finished calculations to a document exporter.

Rendering itself is done by a ``ReportExporter`` implementation supplied by
the host application. This module builds the request, provides the lines a
report shows, and checks that what comes back is a plausible PDF.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from transitie.core.config import ReportSettings
from transitie.core.formatting import format_currency, format_date, format_tenure
from transitie.core.log import get_logger, log_context, timeit
from transitie.domain import (
    CalculationResult,
    CompensationInputs,
    EmploymentPeriod,
    ExportError,
    Party,
    SavedCalculation,
)

LOGGER = get_logger(__name__)

PDF_MARKER = b"%PDF-"
# Anything smaller cannot hold a page with the calculation on it.
MIN_DOCUMENT_BYTES = 512
FORMULA_FOOTER = "Formule: 1/3 bruto maandsalaris x dienstjaren"


@dataclass(frozen=True, slots=True)
class Branding:
    firm_name: str
    document_title: str

    @classmethod
    def from_settings(cls, settings: ReportSettings) -> "Branding":
        return cls(firm_name=settings.firm_name, document_title=settings.document_title)


@dataclass(frozen=True, slots=True)
class ReportRequest:
    """Everything an exporter needs; ``calculation_id`` is None for unsaved evaluations."""

    party: Party
    period: EmploymentPeriod
    inputs: CompensationInputs
    result: CalculationResult
    branding: Branding
    generated_on: date
    calculation_id: int | None = None

    @classmethod
    def for_saved(
        cls, saved: SavedCalculation, branding: Branding, *, generated_on: date | None = None
    ) -> "ReportRequest":
        return cls(
            party=saved.party,
            period=saved.period,
            inputs=saved.inputs,
            result=saved.result,
            branding=branding,
            generated_on=generated_on or date.today(),
            calculation_id=saved.id,
        )

    @property
    def filename(self) -> str:
        name = (self.party.employee_name or "").strip() or "berekening"
        safe = "".join(ch if ch.isalnum() or ch in "-_" else "-" for ch in name)
        return f"transitie-{safe}.pdf"


class ReportExporter(Protocol):
    def render(self, request: ReportRequest) -> bytes:
        """Return the finished document as bytes."""
        ...


def report_lines(request: ReportRequest) -> list[tuple[str, str]]:
    """Labelled lines shown in the body of a calculation report."""

    result = request.result
    lines: list[tuple[str, str]] = []
    if request.party.employer_name:
        lines.append(("Werkgever:", request.party.employer_name))
    if request.party.employee_name:
        lines.append(("Werknemer:", request.party.employee_name))
    lines.append(("Dienstverband:", format_tenure(result.tenure_years, result.tenure_months)))
    lines.append(
        (
            "",
            f"Van {format_date(request.period.start_date)} tot {format_date(request.period.end_date)}",
        )
    )
    lines.append(("Salaris (incl.):", f"{format_currency(result.total_monthly_salary)} per maand"))
    if result.bonus_monthly_equivalent is not None:
        lines.append(("Bonus per maand:", format_currency(result.bonus_monthly_equivalent)))
    if result.cap_applied:
        lines.append(("Berekend bedrag:", format_currency(result.raw_amount)))
        lines.append(("Maximum toegepast:", format_currency(result.cap_value_used)))
    lines.append(("Transitievergoeding", format_currency(result.capped_amount)))
    lines.append(
        ("", f"Gegenereerd op {format_date(request.generated_on)} | {FORMULA_FOOTER}")
    )
    return lines


def export_report(exporter: ReportExporter, request: ReportRequest) -> bytes:
    """Render ``request`` and verify the document before handing it on."""

    with log_context.bound(calculation_id=request.calculation_id):
        with timeit("Rendering calculation report", logger=LOGGER, unit="bytes") as timer:
            try:
                document = exporter.render(request)
            except ExportError:
                raise
            except Exception as exc:
                raise ExportError(f"Report exporter failed: {exc}") from exc

            if not isinstance(document, (bytes, bytearray)):
                raise ExportError("Report exporter did not return bytes")
            if not document.startswith(PDF_MARKER):
                raise ExportError("Report exporter returned a document without a PDF header")
            if len(document) <= MIN_DOCUMENT_BYTES:
                raise ExportError(
                    f"Report exporter returned only {len(document)} bytes"
                )
            timer.add(len(document))
    return bytes(document)
