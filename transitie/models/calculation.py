"""ORM model for saved transition compensation calculations."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base

_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")
_MONEY = Numeric(14, 2, asdecimal=True)
# Derived figures: a year of pay, or up to ~10 000 years of service times a month of pay.
_RESULT_MONEY = Numeric(20, 2, asdecimal=True)
_PERCENT = Numeric(9, 4, asdecimal=True)


class TransitieCalculation(Base):
    """One saved calculation: party, inputs and the result computed from them.

    The result columns are only ever written together with the inputs they
    were computed from. ``deleted_at`` marks a deleted calculation.
    """

    __tablename__ = "transitie_calculation"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    employer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    employee_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    # inputs
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_base_salary: Mapped[Decimal] = mapped_column(_MONEY, nullable=False)
    includes_vacation_allowance: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    vacation_allowance_percent: Mapped[Decimal] = mapped_column(_PERCENT, nullable=False)
    includes_thirteenth_month: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    thirteenth_month_percent: Mapped[Decimal] = mapped_column(_PERCENT, nullable=False)
    bonus_mode: Mapped[str] = mapped_column(String(16), nullable=False, default="none")
    bonus_fixed_monthly: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    bonus_year1: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    bonus_year2: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    bonus_year3: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    bonus_other_total: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    overtime_monthly_amount: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    other_monthly_amount: Mapped[Decimal] = mapped_column(_MONEY, nullable=False, default=0)
    pension_considered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # result snapshot
    tenure_years: Mapped[int] = mapped_column(Integer, nullable=False)
    tenure_months: Mapped[int] = mapped_column(Integer, nullable=False)
    tenure_total_months: Mapped[int] = mapped_column(Integer, nullable=False)
    total_monthly_salary: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    yearly_salary: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    raw_amount: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    capped_amount: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    cap_applied: Mapped[bool] = mapped_column(Boolean, nullable=False)
    cap_value_used: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    statutory_cap: Mapped[Decimal] = mapped_column(_RESULT_MONEY, nullable=False)
    bonus_monthly_equivalent: Mapped[Decimal | None] = mapped_column(_RESULT_MONEY, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return (
            f"<TransitieCalculation id={self.id} employee={self.employee_name!r} "
            f"amount={self.capped_amount}>"
        )
