from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Optional

from currency_service.services.money import round2
from .table import RateTable

"""Currency conversion engine.

Converts through the base currency: amount * rate_from gives base units,
dividing by rate_to gives target units, rounded half-up to 2 places.

Unknown codes come back as an ``UnknownCurrency`` value inside the outcome
instead of being raised, so the HTTP layer decides how to render them.
Identical source and target codes short-circuit before any lookup and the
amount is returned as given (unrounded).

Amounts are not bounded. The decimal context is widened to the operands so
the product is exact and the quotient keeps every integer digit plus the
places the final rounding looks at.
"""

# Floor for the working precision; small amounts never need more.
_PRECISION = 50
# Fractional digits kept in the truncated quotient (cents + half-up digit + 1).
_QUOTIENT_PLACES = 4


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


class UnknownCurrencyError(ValueError):
    def __init__(self, code: str):
        super().__init__(f"unknown currency:{code}")
        self.code = code


@dataclass(frozen=True)
class UnknownCurrency:
    code: str

    @property
    def message(self) -> str:
        return f"unknown currency:{self.code}"


@dataclass(frozen=True)
class ConversionOutcome:
    amount: Optional[Decimal] = None
    error: Optional[UnknownCurrency] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Decimal:
        if self.error is not None:
            raise UnknownCurrencyError(self.error.code)
        return self.amount  # type: ignore[return-value]


def convert(
    amount: Decimal, from_currency: str, to_currency: str, table: RateTable
) -> ConversionOutcome:
    if from_currency == to_currency:
        return ConversionOutcome(amount=amount)

    rate_from = table.get(from_currency)
    if rate_from is None:
        return ConversionOutcome(error=UnknownCurrency(from_currency))
    rate_to = table.get(to_currency)
    if rate_to is None:
        return ConversionOutcome(error=UnknownCurrency(to_currency))

    with localcontext() as ctx:
        ctx.prec = max(_PRECISION, _digits(amount) + _digits(rate_from))
        base = amount * rate_from
        # Truncating keeps any digit past the half-up position from carrying
        # into it, so the quantize below sees the same cents as the exact ratio.
        ctx.prec = max(
            _PRECISION, base.adjusted() - rate_to.adjusted() + 1 + _QUOTIENT_PLACES
        )
        ctx.rounding = ROUND_DOWN
        result = round2(base / rate_to)
    return ConversionOutcome(amount=result)
