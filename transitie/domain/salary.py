"""Composite monthly salary: base pay plus allowances and extras."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .models import ZERO, CompensationInputs, money

_HUNDRED = Decimal(100)


@dataclass(frozen=True, slots=True)
class SalaryBreakdown:
    base: Decimal
    vacation_allowance: Decimal
    thirteenth_month: Decimal
    bonus: Decimal
    overtime: Decimal
    other: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.base
            + self.vacation_allowance
            + self.thirteenth_month
            + self.bonus
            + self.overtime
            + self.other
        )


class CompositeSalaryAggregator:
    """Add allowances, bonus, overtime and other pay to the base salary.

    Both percentages are taken of the base salary only; they do not compound.
    """

    def aggregate(self, inputs: CompensationInputs, bonus_monthly: Decimal = ZERO) -> SalaryBreakdown:
        base = money(inputs.monthly_base_salary)

        vacation = ZERO
        if inputs.includes_vacation_allowance:
            vacation = money(base * inputs.vacation_allowance_percent / _HUNDRED)

        thirteenth = ZERO
        if inputs.includes_thirteenth_month:
            thirteenth = money(base * inputs.thirteenth_month_percent / _HUNDRED)

        return SalaryBreakdown(
            base=base,
            vacation_allowance=vacation,
            thirteenth_month=thirteenth,
            bonus=money(bonus_monthly),
            overtime=inputs.overtime_monthly_amount,
            other=inputs.other_monthly_amount,
        )
