from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ExchangeRequest(BaseModel):
    """Inbound body for POST /api/currency/exchange.

    ``from`` is a keyword, hence the aliased attribute names. Amount sign and
    magnitude are deliberately not validated.
    """

    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal = Field(..., description="Amount in the source currency")
    from_currency: str = Field(..., alias="from", description="Source currency code")
    to_currency: str = Field(..., alias="to", description="Target currency code")


class VersionInfo(BaseModel):
    version: str
