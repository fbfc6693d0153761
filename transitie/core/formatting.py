"""Helper functions for formatting amounts and dates the Dutch way."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal


def format_amount(value: int | Decimal, decimals: int = 2) -> str:
    """Format ``value`` with ``.`` thousands and ``,`` decimal separators.

    Args:
        value: The amount to format
        decimals: Number of decimal places to show
    """
    d = Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    whole, _, fraction = f"{abs(d):f}".partition(".")
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    text = ".".join(groups)
    if fraction:
        text = f"{text},{fraction}"
    return f"{sign}{text}"


def format_currency(value: int | Decimal, symbol: str = "€", decimals: int = 2) -> str:
    """Format a currency value, e.g. ``€ 6.480,00``."""
    return f"{symbol} {format_amount(value, decimals=decimals)}"


def format_date(value: date) -> str:
    """Format a date as ``d-m-yyyy``."""
    return f"{value.day}-{value.month}-{value.year}"


def format_tenure(years: int, months: int) -> str:
    return f"{years} jaar en {months} maanden"
