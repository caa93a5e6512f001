"""Exact two-decimal money helpers."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Union[Decimal, str, int]) -> Decimal:
    """Convert a value to a Decimal rounded to cents.

    Floats are refused so binary rounding never leaks into stored amounts.
    """
    if isinstance(value, float):
        raise TypeError("money values must not be floats")
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
