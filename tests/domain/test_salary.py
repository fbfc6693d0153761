from decimal import Decimal

from transitie.domain import CompensationInputs, CompositeSalaryAggregator, FixedBonus


def test_all_components_add_up() -> None:
    inputs = CompensationInputs(
        monthly_base_salary=Decimal("4000"),
        vacation_allowance_percent=Decimal("8"),
        includes_thirteenth_month=True,
        thirteenth_month_percent=Decimal("8.3"),
        bonus=FixedBonus(Decimal("100")),
        overtime_monthly_amount=Decimal("50"),
        other_monthly_amount=Decimal("25"),
    )

    breakdown = CompositeSalaryAggregator().aggregate(inputs, Decimal("100"))

    assert breakdown.vacation_allowance == Decimal("320.00")
    assert breakdown.thirteenth_month == Decimal("332.00")
    assert breakdown.total == Decimal("4827.00")


def test_percentages_apply_to_base_only() -> None:
    inputs = CompensationInputs(
        monthly_base_salary=Decimal("3000"),
        includes_thirteenth_month=True,
        thirteenth_month_percent=Decimal("10"),
        vacation_allowance_percent=Decimal("10"),
    )

    breakdown = CompositeSalaryAggregator().aggregate(inputs)

    assert breakdown.vacation_allowance == breakdown.thirteenth_month == Decimal("300.00")
    assert breakdown.total == Decimal("3600.00")


def test_thirteenth_month_percentage_ignored_when_not_included() -> None:
    inputs = CompensationInputs(monthly_base_salary=Decimal("3000"), thirteenth_month_percent=Decimal("50"))

    breakdown = CompositeSalaryAggregator().aggregate(inputs)

    assert breakdown.thirteenth_month == Decimal("0")
    assert breakdown.total == Decimal("3240.00")


def test_vacation_allowance_can_be_switched_off() -> None:
    inputs = CompensationInputs(monthly_base_salary=Decimal("3000"), includes_vacation_allowance=False)

    breakdown = CompositeSalaryAggregator().aggregate(inputs)

    assert breakdown.total == Decimal("3000.00")


def test_components_are_rounded_to_cents() -> None:
    inputs = CompensationInputs(monthly_base_salary=Decimal("1234.56"))

    breakdown = CompositeSalaryAggregator().aggregate(inputs)

    assert breakdown.vacation_allowance == Decimal("98.76")
    assert breakdown.total == Decimal("1333.32")
    assert breakdown.total >= breakdown.base
