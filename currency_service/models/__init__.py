"""Pydantic domain models for the Currency Exchange API."""

from .constants import BASE_CURRENCY, DEFAULT_RATES  # re-export
from .exchange import ExchangeRequest, VersionInfo

__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_RATES",
    "ExchangeRequest",
    "VersionInfo",
]
