from __future__ import annotations

import json
from decimal import Decimal

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError
from starlette import status

from currency_service.models.exchange import ExchangeRequest
from currency_service.services.money import format_decimal
from currency_service.services.rates.conversion import convert
from currency_service.services.rates.table import RateTable

"""Currency router.

Endpoints:
    - POST /api/currency/exchange -> converted amount as a bare JSON number
      (e.g. 400.00), or 400 text/plain "unknown currency:<code>".

The body is decoded here rather than by FastAPI so JSON numbers become
Decimal straight from their text; the default decoder goes through float
and drops digits past ~17 significant places. The response is written by
hand for the same reason (400.00 would otherwise come back as 400.0).
"""

router = APIRouter(prefix="/api/currency", tags=["currency"])


def get_rate_table(request: Request) -> RateTable:
    return request.app.state.rate_table


async def parse_exchange_request(request: Request) -> ExchangeRequest:
    body = await request.body()
    try:
        data = json.loads(body, parse_float=Decimal)
    except ValueError as e:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body",),
                    "msg": "JSON decode error",
                    "input": {},
                    "ctx": {"error": str(e)},
                }
            ]
        ) from e
    try:
        return ExchangeRequest.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
        ) from e


@router.post(
    "/exchange",
    summary="Convert an amount between two currencies",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ExchangeRequest.model_json_schema()}
            },
        }
    },
    responses={
        200: {"content": {"application/json": {"schema": {"type": "number"}}}},
        400: {"content": {"text/plain": {}}, "description": "Unknown currency"},
    },
)
async def exchange(
    payload: ExchangeRequest = Depends(parse_exchange_request),
    table: RateTable = Depends(get_rate_table),
):
    outcome = convert(payload.amount, payload.from_currency, payload.to_currency, table)
    if outcome.error is not None:
        return PlainTextResponse(
            outcome.error.message, status_code=status.HTTP_400_BAD_REQUEST
        )
    return Response(
        content=format_decimal(outcome.amount),
        media_type="application/json",
    )
