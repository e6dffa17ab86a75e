from __future__ import annotations

"""Immutable exchange rate table.

Each rate is the amount of base currency per 1 unit of the keyed currency.
The table is built once at startup (see ``main.create_app``) and handed to
the conversion engine; nothing mutates it afterwards.
"""
from decimal import Decimal
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from currency_service.models.constants import BASE_CURRENCY

ONE = Decimal(1)


class RateTable(Mapping[str, Decimal]):
    __slots__ = ("_rates", "_base_currency")

    def __init__(self, rates: Mapping[str, Decimal], base_currency: str = BASE_CURRENCY):
        if not rates:
            raise ValueError("rate table cannot be empty")
        frozen = {}
        for code, rate in rates.items():
            rate = Decimal(rate)
            if not rate.is_finite() or rate <= 0:
                raise ValueError(f"rate for '{code}' must be positive, got {rate}")
            frozen[code] = rate
        if base_currency not in frozen:
            raise ValueError(f"base currency '{base_currency}' missing from rate table")
        if frozen[base_currency] != ONE:
            raise ValueError(
                f"base currency '{base_currency}' must have rate 1, got {frozen[base_currency]}"
            )
        self._rates = MappingProxyType(frozen)
        self._base_currency = base_currency

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def __getitem__(self, code: str) -> Decimal:
        return self._rates[code]

    def get(self, code: str, default: Optional[Decimal] = None) -> Optional[Decimal]:  # type: ignore[override]
        return self._rates.get(code, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __setattr__(self, name, value):
        if hasattr(self, "_base_currency"):
            raise AttributeError("RateTable is immutable")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        rates = ", ".join(f"{code}={rate}" for code, rate in self._rates.items())
        return f"RateTable(base={self._base_currency}, {rates})"
