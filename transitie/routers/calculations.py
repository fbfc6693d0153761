"""JSON endpoints for evaluating and managing transition compensation calculations."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from transitie.core.log import get_logger
from transitie.domain import (
    CalculationValidationError,
    CompensationEngine,
    ExportError,
    NotFound,
    Party,
)
from transitie.routers.dependencies import (
    get_branding,
    get_calculation_store,
    get_compensation_engine,
    get_report_exporter,
)
from transitie.schemas import (
    CalculationResultPayload,
    DeleteResponse,
    SaveCalculationRequest,
    SavedCalculationPayload,
    UpdateCalculationRequest,
)
from transitie.services import (
    Branding,
    CalculationStore,
    ReportExporter,
    ReportRequest,
    export_report,
)

router = APIRouter(prefix="/api/transitie", tags=["transitie"])
LOGGER = get_logger(__name__)


def _validation_error(exc: CalculationValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(exc), "fields": list(exc.fields)},
    )


def _not_found(exc: NotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


def _render(exporter: ReportExporter | None, request: ReportRequest) -> Response:
    if exporter is None:
        raise HTTPException(
            status_code=501,
            detail="No report exporter configured",
        )
    try:
        document = export_report(exporter, request)
    except ExportError as exc:
        LOGGER.error("Report export failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return Response(
        content=document,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{request.filename}"'},
    )


@router.get("/caps")
def list_caps(engine: CompensationEngine = Depends(get_compensation_engine)) -> dict[str, str]:
    """Statutory cap per calendar year."""

    return {str(year): format(amount, "f") for year, amount in engine.cap_table.items()}


@router.post("/evaluate", response_model=CalculationResultPayload)
def evaluate(
    payload: SaveCalculationRequest,
    engine: CompensationEngine = Depends(get_compensation_engine),
) -> CalculationResultPayload:
    try:
        result = engine.evaluate(payload.to_period(), payload.to_inputs())
    except CalculationValidationError as exc:
        raise _validation_error(exc) from exc
    return CalculationResultPayload.from_domain(result)


@router.post("/export")
def export_unsaved(
    payload: SaveCalculationRequest,
    engine: CompensationEngine = Depends(get_compensation_engine),
    exporter: ReportExporter | None = Depends(get_report_exporter),
    branding: Branding = Depends(get_branding),
) -> Response:
    try:
        period = payload.to_period()
        inputs = payload.to_inputs()
        result = engine.evaluate(period, inputs)
    except CalculationValidationError as exc:
        raise _validation_error(exc) from exc
    request = ReportRequest(
        party=payload.to_party(),
        period=period,
        inputs=inputs,
        result=result,
        branding=branding,
        generated_on=date.today(),
    )
    return _render(exporter, request)


@router.get("", response_model=list[SavedCalculationPayload])
def list_calculations(
    employee: str | None = Query(default=None),
    store: CalculationStore = Depends(get_calculation_store),
) -> list[SavedCalculationPayload]:
    return [SavedCalculationPayload.from_domain(saved) for saved in store.list_by_employee(employee)]


@router.post("", response_model=SavedCalculationPayload, status_code=201)
def save_calculation(
    payload: SaveCalculationRequest,
    store: CalculationStore = Depends(get_calculation_store),
) -> SavedCalculationPayload:
    try:
        saved = store.save(payload.to_party(), payload.to_period(), payload.to_inputs())
    except CalculationValidationError as exc:
        raise _validation_error(exc) from exc
    return SavedCalculationPayload.from_domain(saved)


@router.get("/{calculation_id}", response_model=SavedCalculationPayload)
def get_calculation(
    calculation_id: int,
    store: CalculationStore = Depends(get_calculation_store),
) -> SavedCalculationPayload:
    try:
        return SavedCalculationPayload.from_domain(store.get(calculation_id))
    except NotFound as exc:
        raise _not_found(exc) from exc


@router.patch("/{calculation_id}", response_model=SavedCalculationPayload)
def update_calculation(
    calculation_id: int,
    payload: UpdateCalculationRequest,
    store: CalculationStore = Depends(get_calculation_store),
) -> SavedCalculationPayload:
    party: Party | None = payload.to_party()
    try:
        saved = store.update(calculation_id, payload.to_period(), payload.to_inputs(), party=party)
    except NotFound as exc:
        raise _not_found(exc) from exc
    except CalculationValidationError as exc:
        raise _validation_error(exc) from exc
    return SavedCalculationPayload.from_domain(saved)


@router.delete("/{calculation_id}", response_model=DeleteResponse)
def delete_calculation(
    calculation_id: int,
    store: CalculationStore = Depends(get_calculation_store),
) -> DeleteResponse:
    try:
        store.delete(calculation_id)
    except NotFound as exc:
        raise _not_found(exc) from exc
    return DeleteResponse(success=True)


@router.get("/{calculation_id}/export")
def export_saved(
    calculation_id: int,
    store: CalculationStore = Depends(get_calculation_store),
    exporter: ReportExporter | None = Depends(get_report_exporter),
    branding: Branding = Depends(get_branding),
) -> Response:
    try:
        saved = store.get(calculation_id)
    except NotFound as exc:
        raise _not_found(exc) from exc
    return _render(exporter, ReportRequest.for_saved(saved, branding))
