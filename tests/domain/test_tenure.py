from datetime import date

import pytest

from transitie.domain import InvalidPeriod, TenureCalculator


@pytest.fixture()
def calculator() -> TenureCalculator:
    return TenureCalculator()


def test_same_month_and_day_gives_whole_years(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2020, 3, 1), date(2026, 3, 1))

    assert (tenure.years, tenure.months, tenure.total_months) == (6, 0, 72)


def test_remainder_months_borrow_a_year(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2025, 6, 1), date(2026, 1, 1))

    assert (tenure.years, tenure.months) == (0, 7)
    assert tenure.total_months == 7


def test_month_is_not_complete_before_the_start_day(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2020, 3, 15), date(2026, 3, 10))

    assert (tenure.years, tenure.months) == (5, 11)


def test_period_crossing_new_year_by_a_few_days(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2020, 12, 15), date(2021, 1, 10))

    assert tenure.total_months == 0


def test_period_shorter_than_a_month_is_zero_not_negative(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2026, 1, 1), date(2026, 1, 20))

    assert tenure.total_months == 0
    assert tenure.years == 0


def test_identical_dates_are_allowed(calculator: TenureCalculator) -> None:
    tenure = calculator.calculate(date(2026, 1, 1), date(2026, 1, 1))

    assert tenure.total_months == 0


def test_end_before_start_is_rejected(calculator: TenureCalculator) -> None:
    with pytest.raises(InvalidPeriod):
        calculator.calculate(date(2026, 1, 1), date(2025, 12, 31))


@pytest.mark.parametrize(
    "start, end",
    [
        (date(1989, 1, 1), date(2026, 1, 1)),
        (date(2019, 5, 31), date(2024, 2, 29)),
        (date(2001, 11, 30), date(2025, 3, 1)),
        (date(2024, 2, 29), date(2025, 2, 28)),
    ],
)
def test_years_and_months_add_up_to_total(calculator: TenureCalculator, start, end) -> None:
    tenure = calculator.calculate(start, end)

    assert 0 <= tenure.months <= 11
    assert tenure.years * 12 + tenure.months == tenure.total_months
