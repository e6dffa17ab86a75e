"""Money / rounding helpers.

Centralized so the conversion engine and the HTTP layer use identical
rounding and formatting semantics.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    # -0.004 rounds to -0.00; report it as 0.00
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


def format_decimal(value: Decimal) -> str:
    """Plain fixed-point string (never exponent notation), keeping the exponent's digits."""
    return format(value, "f")
