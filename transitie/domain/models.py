"""Value objects for transition compensation calculations."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Union

CENT = Decimal("0.01")
PERCENT_EXPONENT = Decimal("0.0001")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal(0)
    return Decimal(str(value))


def money(value: Any) -> Decimal:
    """Round to whole cents, half up."""
    d = to_decimal(value)
    if not d.is_finite():
        return d
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


def _percentage(value: Any) -> Decimal:
    d = to_decimal(value)
    if not d.is_finite():
        return d
    return d.quantize(PERCENT_EXPONENT, rounding=ROUND_HALF_UP)


def _optional_money(value: Any) -> Decimal | None:
    if value is None:
        return None
    return money(value)


class BonusMode(str, Enum):
    """How bonuses contribute to the monthly salary."""

    NONE = "none"
    FIXED = "fixed"
    AVERAGED = "averaged"


@dataclass(frozen=True, slots=True)
class NoBonus:
    mode = BonusMode.NONE


@dataclass(frozen=True, slots=True)
class FixedBonus:
    """A fixed bonus amount per month."""

    monthly_amount: Decimal

    mode = BonusMode.FIXED

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly_amount", money(self.monthly_amount))


@dataclass(frozen=True, slots=True)
class AveragedBonus:
    """Bonus totals of the three calendar years before the termination year.

    ``year_totals`` runs from the oldest year to the most recent one.
    ``other_total`` holds any other bonus paid within the same window.
    """

    year_totals: tuple[Decimal, Decimal, Decimal]
    other_total: Decimal = ZERO

    mode = BonusMode.AVERAGED

    def __post_init__(self) -> None:
        totals = tuple(money(value) for value in self.year_totals)
        if len(totals) != 3:
            raise ValueError("Exactly three yearly bonus totals are required")
        object.__setattr__(self, "year_totals", totals)
        object.__setattr__(self, "other_total", money(self.other_total))


Bonus = Union[NoBonus, FixedBonus, AveragedBonus]


@dataclass(frozen=True, slots=True)
class EmploymentPeriod:
    start_date: date | None
    end_date: date | None


@dataclass(frozen=True, slots=True)
class CompensationInputs:
    """Everything that makes up the monthly salary used in the calculation.

    Amounts are normalised to cents and percentages to four decimals on
    construction, so stored and recomputed inputs compare equal.
    """

    monthly_base_salary: Decimal | None
    includes_vacation_allowance: bool = True
    vacation_allowance_percent: Decimal = Decimal("8.0")
    includes_thirteenth_month: bool = False
    thirteenth_month_percent: Decimal = Decimal("8.3")
    bonus: Bonus = field(default_factory=NoBonus)
    overtime_monthly_amount: Decimal = ZERO
    other_monthly_amount: Decimal = ZERO
    # Informational only; it never enters the arithmetic.
    pension_considered: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly_base_salary", _optional_money(self.monthly_base_salary))
        object.__setattr__(
            self, "vacation_allowance_percent", _percentage(self.vacation_allowance_percent)
        )
        object.__setattr__(
            self, "thirteenth_month_percent", _percentage(self.thirteenth_month_percent)
        )
        object.__setattr__(self, "overtime_monthly_amount", money(self.overtime_monthly_amount))
        object.__setattr__(self, "other_monthly_amount", money(self.other_monthly_amount))

    @property
    def bonus_mode(self) -> BonusMode:
        return self.bonus.mode


@dataclass(frozen=True, slots=True)
class Party:
    employee_name: str | None
    employer_name: str | None = None


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Outcome of one evaluation; never edited by hand."""

    tenure_years: int
    tenure_months: int
    tenure_total_months: int
    total_monthly_salary: Decimal
    yearly_salary: Decimal
    raw_amount: Decimal
    capped_amount: Decimal
    cap_applied: bool
    cap_value_used: Decimal
    statutory_cap: Decimal
    bonus_monthly_equivalent: Decimal | None = None
    bonus_reference_years: tuple[int, int, int] | None = None

    @property
    def amount(self) -> Decimal:
        """The compensation owed, after the cap."""
        return self.capped_amount


@dataclass(frozen=True, slots=True)
class SavedCalculation:
    id: int
    party: Party
    period: EmploymentPeriod
    inputs: CompensationInputs
    result: CalculationResult
    created_at: datetime
    updated_at: datetime

    @property
    def employee_name(self) -> str | None:
        return self.party.employee_name

    @property
    def employer_name(self) -> str | None:
        return self.party.employer_name
