from datetime import date
from decimal import Decimal

import pytest

from transitie.core.formatting import format_amount, format_currency, format_date, format_tenure


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0"), "0,00"),
        (Decimal("999.5"), "999,50"),
        (Decimal("1234.5"), "1.234,50"),
        (Decimal("129600"), "129.600,00"),
        (Decimal("1234567.891"), "1.234.567,89"),
        (Decimal("-6480"), "-6.480,00"),
    ],
)
def test_format_amount(value: Decimal, expected: str) -> None:
    assert format_amount(value) == expected


def test_format_amount_without_decimals() -> None:
    assert format_amount(Decimal("102000"), decimals=0) == "102.000"


def test_format_currency() -> None:
    assert format_currency(Decimal("6480")) == "€ 6.480,00"


def test_format_date_and_tenure() -> None:
    assert format_date(date(2026, 3, 1)) == "1-3-2026"
    assert format_tenure(37, 0) == "37 jaar en 0 maanden"
