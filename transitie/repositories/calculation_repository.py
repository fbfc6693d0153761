"""Data access for saved transition compensation calculations."""
from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import func, select

from transitie.domain.bonus import bonus_reference_years
from transitie.domain.models import (
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
    money,
)
from transitie.models import TransitieCalculation

from .base import BaseRepository


class TransitieCalculationRepository(BaseRepository):
    """Repository mapping ``TransitieCalculation`` rows to domain objects.

    The repository never commits; the calling service owns the transaction.
    """

    def get(self, calculation_id: int) -> TransitieCalculation | None:
        """Return the row for ``calculation_id``, deleted or not."""

        return self._session.get(TransitieCalculation, calculation_id)

    def add(
        self,
        party: Party,
        period: EmploymentPeriod,
        inputs: CompensationInputs,
        result: CalculationResult,
    ) -> TransitieCalculation:
        record = TransitieCalculation()
        self._apply_party(record, party)
        self._apply_inputs(record, period, inputs)
        self._apply_result(record, result)
        self._session.add(record)
        self._session.flush()
        return record

    def replace(
        self,
        record: TransitieCalculation,
        period: EmploymentPeriod,
        inputs: CompensationInputs,
        result: CalculationResult,
        *,
        party: Party | None = None,
        when: datetime | None = None,
    ) -> TransitieCalculation:
        if party is not None:
            self._apply_party(record, party)
        self._apply_inputs(record, period, inputs)
        self._apply_result(record, result)
        # Bump even when nothing changed; ``onupdate`` only fires on a real UPDATE.
        if when is not None:
            record.updated_at = when
        self._session.flush()
        return record

    def mark_deleted(self, record: TransitieCalculation, when: datetime) -> None:
        record.deleted_at = when
        self._session.flush()

    def list_active(self, *, employee: str | None = None) -> Sequence[TransitieCalculation]:
        pattern = self._search_pattern(employee)
        statement = select(TransitieCalculation).where(TransitieCalculation.deleted_at.is_(None))
        if pattern is not None:
            statement = statement.where(
                func.lower(TransitieCalculation.employee_name).like(pattern, escape="\\")
            )
        statement = statement.order_by(
            TransitieCalculation.created_at.desc(), TransitieCalculation.id.desc()
        )
        return self._session.scalars(statement).all()

    def to_domain(self, record: TransitieCalculation) -> SavedCalculation:
        period = EmploymentPeriod(
            start_date=self._coerce_date(record.start_date),
            end_date=self._coerce_date(record.end_date),
        )
        return SavedCalculation(
            id=int(record.id),
            party=Party(employee_name=record.employee_name, employer_name=record.employer_name),
            period=period,
            inputs=self._inputs_from_record(record),
            result=self._result_from_record(record, period),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def _apply_party(record: TransitieCalculation, party: Party) -> None:
        record.employee_name = (party.employee_name or "").strip()
        employer = (party.employer_name or "").strip()
        record.employer_name = employer or None

    @staticmethod
    def _apply_inputs(
        record: TransitieCalculation, period: EmploymentPeriod, inputs: CompensationInputs
    ) -> None:
        record.start_date = period.start_date
        record.end_date = period.end_date
        record.monthly_base_salary = inputs.monthly_base_salary
        record.includes_vacation_allowance = inputs.includes_vacation_allowance
        record.vacation_allowance_percent = inputs.vacation_allowance_percent
        record.includes_thirteenth_month = inputs.includes_thirteenth_month
        record.thirteenth_month_percent = inputs.thirteenth_month_percent
        record.overtime_monthly_amount = inputs.overtime_monthly_amount
        record.other_monthly_amount = inputs.other_monthly_amount
        record.pension_considered = inputs.pension_considered

        bonus = inputs.bonus
        record.bonus_mode = bonus.mode.value
        record.bonus_fixed_monthly = money(0)
        record.bonus_year1 = record.bonus_year2 = record.bonus_year3 = money(0)
        record.bonus_other_total = money(0)
        if isinstance(bonus, FixedBonus):
            record.bonus_fixed_monthly = bonus.monthly_amount
        elif isinstance(bonus, AveragedBonus):
            record.bonus_year1, record.bonus_year2, record.bonus_year3 = bonus.year_totals
            record.bonus_other_total = bonus.other_total

    @staticmethod
    def _apply_result(record: TransitieCalculation, result: CalculationResult) -> None:
        record.tenure_years = result.tenure_years
        record.tenure_months = result.tenure_months
        record.tenure_total_months = result.tenure_total_months
        record.total_monthly_salary = result.total_monthly_salary
        record.yearly_salary = result.yearly_salary
        record.raw_amount = result.raw_amount
        record.capped_amount = result.capped_amount
        record.cap_applied = result.cap_applied
        record.cap_value_used = result.cap_value_used
        record.statutory_cap = result.statutory_cap
        record.bonus_monthly_equivalent = result.bonus_monthly_equivalent

    def _inputs_from_record(self, record: TransitieCalculation) -> CompensationInputs:
        mode = BonusMode(record.bonus_mode)
        bonus: Bonus
        if mode is BonusMode.FIXED:
            bonus = FixedBonus(self._to_decimal(record.bonus_fixed_monthly))
        elif mode is BonusMode.AVERAGED:
            bonus = AveragedBonus(
                year_totals=(
                    self._to_decimal(record.bonus_year1),
                    self._to_decimal(record.bonus_year2),
                    self._to_decimal(record.bonus_year3),
                ),
                other_total=self._to_decimal(record.bonus_other_total),
            )
        else:
            bonus = NoBonus()

        return CompensationInputs(
            monthly_base_salary=self._to_decimal(record.monthly_base_salary),
            includes_vacation_allowance=bool(record.includes_vacation_allowance),
            vacation_allowance_percent=self._to_decimal(record.vacation_allowance_percent),
            includes_thirteenth_month=bool(record.includes_thirteenth_month),
            thirteenth_month_percent=self._to_decimal(record.thirteenth_month_percent),
            bonus=bonus,
            overtime_monthly_amount=self._to_decimal(record.overtime_monthly_amount),
            other_monthly_amount=self._to_decimal(record.other_monthly_amount),
            pension_considered=bool(record.pension_considered),
        )

    def _result_from_record(
        self, record: TransitieCalculation, period: EmploymentPeriod
    ) -> CalculationResult:
        bonus_equivalent = self._to_optional_decimal(record.bonus_monthly_equivalent)
        reference_years = None
        if record.bonus_mode == BonusMode.AVERAGED.value:
            reference_years = bonus_reference_years(period.end_date)
        return CalculationResult(
            tenure_years=int(record.tenure_years),
            tenure_months=int(record.tenure_months),
            tenure_total_months=int(record.tenure_total_months),
            total_monthly_salary=money(self._to_decimal(record.total_monthly_salary)),
            yearly_salary=money(self._to_decimal(record.yearly_salary)),
            raw_amount=money(self._to_decimal(record.raw_amount)),
            capped_amount=money(self._to_decimal(record.capped_amount)),
            cap_applied=bool(record.cap_applied),
            cap_value_used=money(self._to_decimal(record.cap_value_used)),
            statutory_cap=money(self._to_decimal(record.statutory_cap)),
            bonus_monthly_equivalent=money(bonus_equivalent) if bonus_equivalent is not None else None,
            bonus_reference_years=reference_years,
        )
