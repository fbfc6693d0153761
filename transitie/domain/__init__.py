"""Transition compensation calculation engine."""

from .bonus import BonusAverageCalculator, bonus_reference_years
from .caps import CapDecision, StatutoryCapResolver, StatutoryCapTable
from .engine import CompensationEngine
from .errors import (
    CalculationValidationError,
    DivisionByZeroTenure,
    ExportError,
    InvalidAmount,
    InvalidPeriod,
    MissingRequiredField,
    NotFound,
    TransitieError,
    UnknownCapYear,
)
from .models import (
    AveragedBonus,
    Bonus,
    BonusMode,
    CalculationResult,
    CompensationInputs,
    EmploymentPeriod,
    FixedBonus,
    NoBonus,
    Party,
    SavedCalculation,
)
from .salary import CompositeSalaryAggregator, SalaryBreakdown
from .tenure import Tenure, TenureCalculator

__all__ = [
    "AveragedBonus",
    "Bonus",
    "BonusAverageCalculator",
    "BonusMode",
    "CalculationResult",
    "CalculationValidationError",
    "CapDecision",
    "CompensationEngine",
    "CompensationInputs",
    "CompositeSalaryAggregator",
    "DivisionByZeroTenure",
    "EmploymentPeriod",
    "ExportError",
    "FixedBonus",
    "InvalidAmount",
    "InvalidPeriod",
    "MissingRequiredField",
    "NoBonus",
    "NotFound",
    "Party",
    "SalaryBreakdown",
    "SavedCalculation",
    "StatutoryCapResolver",
    "StatutoryCapTable",
    "Tenure",
    "TenureCalculator",
    "TransitieError",
    "UnknownCapYear",
    "bonus_reference_years",
]
