from decimal import Decimal

import pytest

from transitie.domain import StatutoryCapResolver, StatutoryCapTable, UnknownCapYear


def test_table_is_read_only_and_sorted(cap_table: StatutoryCapTable) -> None:
    assert list(cap_table) == [2024, 2025, 2026]
    assert cap_table[2026] == Decimal("102000.00")
    with pytest.raises(TypeError):
        cap_table[2027] = Decimal("1")  # type: ignore[index]


def test_unknown_year_is_never_defaulted(cap_table: StatutoryCapTable) -> None:
    with pytest.raises(UnknownCapYear) as excinfo:
        cap_table.cap_for(2031)

    assert excinfo.value.year == 2031


def test_statutory_cap_applies_below_yearly_salary(cap_table: StatutoryCapTable) -> None:
    decision = StatutoryCapResolver(cap_table).resolve(
        2026, Decimal("110000.00"), Decimal("60000.00")
    )

    assert decision.max_allowed == Decimal("102000.00")
    assert decision.capped_amount == Decimal("102000.00")
    assert decision.cap_applied is True


def test_yearly_salary_wins_when_higher(cap_table: StatutoryCapTable) -> None:
    decision = StatutoryCapResolver(cap_table).resolve(
        2026, Decimal("133200.00"), Decimal("129600.00")
    )

    assert decision.statutory_cap == Decimal("102000.00")
    assert decision.max_allowed == Decimal("129600.00")
    assert decision.capped_amount == Decimal("129600.00")
    assert decision.cap_applied is True


def test_amount_equal_to_cap_is_not_capped(cap_table: StatutoryCapTable) -> None:
    decision = StatutoryCapResolver(cap_table).resolve(
        2025, Decimal("98000.00"), Decimal("50000.00")
    )

    assert decision.cap_applied is False
    assert decision.capped_amount == Decimal("98000.00")
    assert decision.max_allowed == Decimal("98000.00")
