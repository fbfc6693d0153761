"""Exceptions raised by the calculation engine and the calculation store."""
from __future__ import annotations

from typing import Iterable


class TransitieError(Exception):
    """Base class for all errors raised by this package."""


class CalculationValidationError(TransitieError):
    """Input problem the user can fix and resubmit."""

    fields: tuple[str, ...] = ()


class MissingRequiredField(CalculationValidationError):
    """One or more required inputs were not supplied.

    All missing fields are reported together in a single error.
    """

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = tuple(fields)
        super().__init__("Missing required fields: " + ", ".join(self.fields))


class InvalidPeriod(CalculationValidationError):
    fields = ("start_date", "end_date")

    def __init__(self, start_date: object, end_date: object) -> None:
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(f"End date {end_date} lies before start date {start_date}")


class InvalidAmount(CalculationValidationError):
    """An amount or percentage is negative, zero where it must be positive, or not finite."""

    def __init__(self, field: str, reason: str) -> None:
        self.fields = (field,)
        super().__init__(f"{field} {reason}")


class UnknownCapYear(CalculationValidationError):
    """The termination year has no statutory cap configured."""

    fields = ("end_date",)

    def __init__(self, year: int) -> None:
        self.year = year
        super().__init__(f"No statutory cap configured for {year}")


class DivisionByZeroTenure(CalculationValidationError):
    fields = ("start_date", "end_date")

    def __init__(self) -> None:
        super().__init__("Cannot average bonuses over a tenure of zero months")


class NotFound(TransitieError):
    def __init__(self, calculation_id: int) -> None:
        self.calculation_id = calculation_id
        super().__init__(f"Calculation {calculation_id} not found")


class ExportError(TransitieError):
    """The report exporter failed or returned a malformed document."""
