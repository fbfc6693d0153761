"""Monthly equivalent of bonuses paid over the last three years."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from .errors import DivisionByZeroTenure
from .models import AveragedBonus, money

REFERENCE_WINDOW_MONTHS = 36


def bonus_reference_years(end_date: date) -> tuple[int, int, int]:
    """The three calendar years before the termination year, oldest first."""
    return (end_date.year - 3, end_date.year - 2, end_date.year - 1)


class BonusAverageCalculator:
    """Spread the bonuses of the reference window over the months worked in it.

    Employees with less than three years of service divide by the months they
    actually worked rather than by 36.
    """

    def __init__(self, window_months: int = REFERENCE_WINDOW_MONTHS) -> None:
        self.window_months = window_months

    def divisor(self, tenure_total_months: int) -> int:
        return min(self.window_months, tenure_total_months)

    def monthly_equivalent(self, bonus: AveragedBonus, tenure_total_months: int) -> Decimal:
        divisor = self.divisor(tenure_total_months)
        if divisor <= 0:
            raise DivisionByZeroTenure()
        total = sum(bonus.year_totals, Decimal(0)) + bonus.other_total
        return money(total / divisor)
