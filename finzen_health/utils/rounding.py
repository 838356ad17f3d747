"""Rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_away_from_zero(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Unlike builtin round(): round(62.5) == 62, this gives 63.
    """
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
