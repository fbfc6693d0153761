"""Request and response payloads for the calculation endpoints."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from transitie.domain import (
    AveragedBonus,
    Bonus,
    CalculationResult,
    CompensationInputs,
    EmploymentPeriod,
    FixedBonus,
    NoBonus,
    Party,
    SavedCalculation,
)

Amount = Annotated[Decimal, Field(ge=0, max_digits=14, decimal_places=2)]
Percentage = Annotated[Decimal, Field(ge=0, le=100, max_digits=9, decimal_places=4)]


def _fixed_point(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return format(value, "f")


class NoBonusPayload(BaseModel):
    mode: Literal["none"] = "none"

    def to_domain(self) -> Bonus:
        return NoBonus()


class FixedBonusPayload(BaseModel):
    mode: Literal["fixed"]
    monthly_amount: Amount

    def to_domain(self) -> Bonus:
        return FixedBonus(self.monthly_amount)

    @field_serializer("monthly_amount")
    def serialize_amount(self, value: Decimal) -> str:
        return format(value, "f")


class AveragedBonusPayload(BaseModel):
    """Bonus totals for the three years before the end year, oldest first."""

    mode: Literal["averaged"]
    year_totals: tuple[Amount, Amount, Amount]
    other_total: Amount = Decimal("0")

    def to_domain(self) -> Bonus:
        return AveragedBonus(year_totals=self.year_totals, other_total=self.other_total)

    @field_serializer("year_totals")
    def serialize_year_totals(self, value: tuple[Decimal, Decimal, Decimal]) -> list[str]:
        return [format(item, "f") for item in value]

    @field_serializer("other_total")
    def serialize_other_total(self, value: Decimal) -> str:
        return format(value, "f")


BonusPayload = Annotated[
    Union[NoBonusPayload, FixedBonusPayload, AveragedBonusPayload],
    Field(discriminator="mode"),
]


def bonus_payload(bonus: Bonus) -> NoBonusPayload | FixedBonusPayload | AveragedBonusPayload:
    if isinstance(bonus, FixedBonus):
        return FixedBonusPayload(mode="fixed", monthly_amount=bonus.monthly_amount)
    if isinstance(bonus, AveragedBonus):
        return AveragedBonusPayload(
            mode="averaged", year_totals=bonus.year_totals, other_total=bonus.other_total
        )
    return NoBonusPayload()


class CompensationPayload(BaseModel):
    """Employment period and pay components.

    Dates and base salary are optional here so that every missing field can
    be reported in one validation error by the engine.
    """

    start_date: date | None = None
    end_date: date | None = None
    monthly_base_salary: Amount | None = None
    includes_vacation_allowance: bool = True
    vacation_allowance_percent: Percentage = Decimal("8.0")
    includes_thirteenth_month: bool = False
    thirteenth_month_percent: Percentage = Decimal("8.3")
    bonus: BonusPayload = Field(default_factory=NoBonusPayload)
    overtime_monthly_amount: Amount = Decimal("0")
    other_monthly_amount: Amount = Decimal("0")
    pension_considered: bool = False

    def to_period(self) -> EmploymentPeriod:
        return EmploymentPeriod(start_date=self.start_date, end_date=self.end_date)

    def to_inputs(self) -> CompensationInputs:
        return CompensationInputs(
            monthly_base_salary=self.monthly_base_salary,
            includes_vacation_allowance=self.includes_vacation_allowance,
            vacation_allowance_percent=self.vacation_allowance_percent,
            includes_thirteenth_month=self.includes_thirteenth_month,
            thirteenth_month_percent=self.thirteenth_month_percent,
            bonus=self.bonus.to_domain(),
            overtime_monthly_amount=self.overtime_monthly_amount,
            other_monthly_amount=self.other_monthly_amount,
            pension_considered=self.pension_considered,
        )


class SaveCalculationRequest(CompensationPayload):
    employee_name: str | None = Field(default=None, max_length=200)
    employer_name: str | None = Field(default=None, max_length=200)

    def to_party(self) -> Party:
        return Party(employee_name=self.employee_name, employer_name=self.employer_name)


class UpdateCalculationRequest(CompensationPayload):
    """Full replacement of the inputs.

    Party names are optional: an omitted name keeps the stored one, and an
    empty ``employer_name`` clears the employer.
    """

    employee_name: str | None = Field(default=None, max_length=200)
    employer_name: str | None = Field(default=None, max_length=200)

    def to_party(self) -> Party | None:
        if "employee_name" not in self.model_fields_set and "employer_name" not in self.model_fields_set:
            return None
        return Party(employee_name=self.employee_name, employer_name=self.employer_name)


class CalculationResultPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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

    @classmethod
    def from_domain(cls, result: CalculationResult) -> "CalculationResultPayload":
        return cls.model_validate(result)

    @field_serializer(
        "total_monthly_salary",
        "yearly_salary",
        "raw_amount",
        "capped_amount",
        "cap_value_used",
        "statutory_cap",
        "bonus_monthly_equivalent",
    )
    def serialize_amount(self, value: Decimal | None) -> str | None:
        return _fixed_point(value)


class SavedCalculationPayload(BaseModel):
    id: int
    employee_name: str
    employer_name: str | None
    start_date: date
    end_date: date
    monthly_base_salary: Decimal
    includes_vacation_allowance: bool
    vacation_allowance_percent: Decimal
    includes_thirteenth_month: bool
    thirteenth_month_percent: Decimal
    bonus: BonusPayload
    overtime_monthly_amount: Decimal
    other_monthly_amount: Decimal
    pension_considered: bool
    result: CalculationResultPayload
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, saved: SavedCalculation) -> "SavedCalculationPayload":
        inputs = saved.inputs
        return cls(
            id=saved.id,
            employee_name=saved.employee_name or "",
            employer_name=saved.employer_name,
            start_date=saved.period.start_date,
            end_date=saved.period.end_date,
            monthly_base_salary=inputs.monthly_base_salary,
            includes_vacation_allowance=inputs.includes_vacation_allowance,
            vacation_allowance_percent=inputs.vacation_allowance_percent,
            includes_thirteenth_month=inputs.includes_thirteenth_month,
            thirteenth_month_percent=inputs.thirteenth_month_percent,
            bonus=bonus_payload(inputs.bonus),
            overtime_monthly_amount=inputs.overtime_monthly_amount,
            other_monthly_amount=inputs.other_monthly_amount,
            pension_considered=inputs.pension_considered,
            result=CalculationResultPayload.from_domain(saved.result),
            created_at=saved.created_at,
            updated_at=saved.updated_at,
        )

    @field_serializer(
        "monthly_base_salary",
        "vacation_allowance_percent",
        "thirteenth_month_percent",
        "overtime_monthly_amount",
        "other_monthly_amount",
    )
    def serialize_decimal(self, value: Decimal) -> str:
        return format(value, "f")


class DeleteResponse(BaseModel):
    success: bool = True
