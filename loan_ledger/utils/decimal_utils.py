"""Decimal arithmetic helpers"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Optional[Number]) -> Decimal:
    """
    Convert a numeric value to Decimal, treating None as zero.

    Floats go through str() so 0.1 becomes Decimal("0.1") and not the
    binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_decimal(value: Decimal, decimal_places: int = 2) -> Decimal:
    """
    Round a decimal value to specified decimal places.

    Args:
        value: Decimal value to round
        decimal_places: Number of decimal places (default 2)

    Returns:
        Rounded decimal value
    """
    quantize_value = Decimal(10) ** -decimal_places
    return value.quantize(quantize_value, rounding=ROUND_HALF_UP)


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """
    Sum decimal values.

    Args:
        values: Decimal values

    Returns:
        Sum of all values
    """
    return sum(values, Decimal("0"))


def nearly_equal(a: Decimal, b: Decimal, tolerance: Decimal = CENT) -> bool:
    """Check that two values differ by at most `tolerance`"""
    return abs(a - b) <= tolerance


def split_evenly(total: Decimal, parts: int) -> list[Decimal]:
    """
    Split a total into `parts` rounded shares that add up exactly.

    Every share but the last is round(total / parts); the last one takes
    whatever rounding left over, so 100 over 3 gives 33.33, 33.33, 33.34.

    Args:
        total: Amount to split
        parts: Number of shares

    Returns:
        List of shares (empty if parts is 0)
    """
    if parts <= 0:
        return []

    total = round_decimal(total)
    base = round_decimal(total / parts)
    last = round_decimal(base + (total - base * parts))

    return [base] * (parts - 1) + [last]
