"""Statutory ceiling on transition compensation."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Iterator, Mapping

from .errors import UnknownCapYear
from .models import money


class StatutoryCapTable(Mapping[int, Decimal]):
    """Read-only ``year -> cap`` mapping, built once from configuration."""

    def __init__(self, caps: Mapping[int, object]) -> None:
        self._caps = MappingProxyType({int(year): money(amount) for year, amount in caps.items()})

    def __getitem__(self, year: int) -> Decimal:
        return self._caps[year]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._caps))

    def __len__(self) -> int:
        return len(self._caps)

    def __repr__(self) -> str:
        return f"StatutoryCapTable({dict(self.items())!r})"

    def cap_for(self, year: int) -> Decimal:
        try:
            return self._caps[year]
        except KeyError:
            raise UnknownCapYear(year) from None


@dataclass(frozen=True, slots=True)
class CapDecision:
    statutory_cap: Decimal
    max_allowed: Decimal
    capped_amount: Decimal
    cap_applied: bool


class StatutoryCapResolver:
    """Apply the cap: the larger of the year's statutory amount and one year's salary."""

    def __init__(self, table: StatutoryCapTable) -> None:
        self.table = table

    def resolve(self, year: int, raw_amount: Decimal, yearly_salary: Decimal) -> CapDecision:
        statutory_cap = self.table.cap_for(year)
        max_allowed = max(statutory_cap, money(yearly_salary))
        if raw_amount > max_allowed:
            return CapDecision(statutory_cap, max_allowed, max_allowed, True)
        return CapDecision(statutory_cap, max_allowed, raw_amount, False)
