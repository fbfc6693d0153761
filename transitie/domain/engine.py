"""Transition compensation (transitievergoeding) calculation."""
from __future__ import annotations

from decimal import Decimal

from transitie.core.log import get_logger

from .bonus import BonusAverageCalculator, bonus_reference_years
from .caps import StatutoryCapResolver, StatutoryCapTable
from .errors import InvalidAmount, MissingRequiredField
from .models import (
    ZERO,
    AveragedBonus,
    CalculationResult,
    CompensationInputs,
    EmploymentPeriod,
    FixedBonus,
    money,
)
from .salary import CompositeSalaryAggregator
from .tenure import TenureCalculator

LOGGER = get_logger(__name__)

_TWELVE = Decimal(12)
# A third of a month per year of service: monthly / 3 * months / 12.
_MONTHS_PER_MONTHLY_SALARY = Decimal(36)


def _check_amount(field: str, value: Decimal, *, positive: bool = False) -> None:
    if not value.is_finite():
        raise InvalidAmount(field, "must be a finite number")
    if positive and value <= 0:
        raise InvalidAmount(field, "must be greater than zero")
    if value < 0:
        raise InvalidAmount(field, "must not be negative")


class CompensationEngine:
    """Evaluate the transition compensation for one employment.

    The engine holds no state besides the cap table, so one instance can
    serve concurrent callers. Formula::

        raw    = total monthly salary / 3 * months of service / 12
        result = min(raw, max(statutory cap of the end year, yearly salary))
    """

    def __init__(
        self,
        cap_table: StatutoryCapTable,
        *,
        tenure_calculator: TenureCalculator | None = None,
        salary_aggregator: CompositeSalaryAggregator | None = None,
        bonus_calculator: BonusAverageCalculator | None = None,
    ) -> None:
        self.cap_table = cap_table
        self.cap_resolver = StatutoryCapResolver(cap_table)
        self.tenure_calculator = tenure_calculator or TenureCalculator()
        self.salary_aggregator = salary_aggregator or CompositeSalaryAggregator()
        self.bonus_calculator = bonus_calculator or BonusAverageCalculator()

    def validate(self, period: EmploymentPeriod, inputs: CompensationInputs) -> None:
        """Raise a validation error for inputs that cannot be evaluated."""

        missing = [
            name
            for name, value in (
                ("start_date", period.start_date),
                ("end_date", period.end_date),
                ("monthly_base_salary", inputs.monthly_base_salary),
            )
            if value is None
        ]
        if missing:
            raise MissingRequiredField(missing)

        _check_amount("monthly_base_salary", inputs.monthly_base_salary, positive=True)
        _check_amount("vacation_allowance_percent", inputs.vacation_allowance_percent)
        _check_amount("thirteenth_month_percent", inputs.thirteenth_month_percent)
        _check_amount("overtime_monthly_amount", inputs.overtime_monthly_amount)
        _check_amount("other_monthly_amount", inputs.other_monthly_amount)

        bonus = inputs.bonus
        if isinstance(bonus, FixedBonus):
            _check_amount("bonus.monthly_amount", bonus.monthly_amount)
        elif isinstance(bonus, AveragedBonus):
            for index, total in enumerate(bonus.year_totals):
                _check_amount(f"bonus.year_totals[{index}]", total)
            _check_amount("bonus.other_total", bonus.other_total)

    def evaluate(self, period: EmploymentPeriod, inputs: CompensationInputs) -> CalculationResult:
        self.validate(period, inputs)

        tenure = self.tenure_calculator.calculate(period.start_date, period.end_date)
        total_months = tenure.total_months

        bonus = inputs.bonus
        bonus_monthly = ZERO
        bonus_equivalent = None
        reference_years = None
        if isinstance(bonus, FixedBonus):
            bonus_monthly = bonus.monthly_amount
        elif isinstance(bonus, AveragedBonus):
            bonus_monthly = self.bonus_calculator.monthly_equivalent(bonus, total_months)
            bonus_equivalent = bonus_monthly
            reference_years = bonus_reference_years(period.end_date)

        salary = self.salary_aggregator.aggregate(inputs, bonus_monthly)
        total_monthly = money(salary.total)
        yearly = money(total_monthly * _TWELVE)
        raw = money(total_monthly * Decimal(total_months) / _MONTHS_PER_MONTHLY_SALARY)

        decision = self.cap_resolver.resolve(period.end_date.year, raw, yearly)

        result = CalculationResult(
            tenure_years=tenure.years,
            tenure_months=tenure.months,
            tenure_total_months=total_months,
            total_monthly_salary=total_monthly,
            yearly_salary=yearly,
            raw_amount=raw,
            capped_amount=decision.capped_amount,
            cap_applied=decision.cap_applied,
            cap_value_used=decision.max_allowed,
            statutory_cap=decision.statutory_cap,
            bonus_monthly_equivalent=bonus_equivalent,
            bonus_reference_years=reference_years,
        )
        LOGGER.debug(
            "Evaluated transition compensation: %s months, raw %s, capped %s (cap applied: %s)",
            total_months,
            raw,
            result.capped_amount,
            result.cap_applied,
        )
        return result
