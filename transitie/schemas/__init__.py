"""Pydantic schemas for request and response payloads."""

from .calculations import (
    AveragedBonusPayload,
    CalculationResultPayload,
    CompensationPayload,
    DeleteResponse,
    FixedBonusPayload,
    NoBonusPayload,
    SaveCalculationRequest,
    SavedCalculationPayload,
    UpdateCalculationRequest,
)

__all__ = [
    "AveragedBonusPayload",
    "CalculationResultPayload",
    "CompensationPayload",
    "DeleteResponse",
    "FixedBonusPayload",
    "NoBonusPayload",
    "SaveCalculationRequest",
    "SavedCalculationPayload",
    "UpdateCalculationRequest",
]
