"""Length of employment in whole years and remaining months."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .errors import InvalidPeriod


@dataclass(frozen=True, slots=True)
class Tenure:
    years: int
    months: int

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months


class TenureCalculator:
    """Count completed years and months between two dates.

    A month only counts once the day of the month of ``start`` has been
    reached again, so 15 March to 10 April is zero months.
    """

    def calculate(self, start: date, end: date) -> Tenure:
        if end < start:
            raise InvalidPeriod(start, end)

        years = end.year - start.year
        if (end.month, end.day) < (start.month, start.day):
            years -= 1

        months = end.month - start.month
        if end.day < start.day:
            months -= 1
        if months < 0:
            months += 12

        return Tenure(years=years, months=months)
