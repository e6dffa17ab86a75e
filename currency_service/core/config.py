from decimal import Decimal
from functools import lru_cache
from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

from currency_service.models.constants import BASE_CURRENCY, DEFAULT_RATES


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    VERSION, HOST, PORT, BASE_CURRENCY, EXCHANGE_RATES). EXCHANGE_RATES is a JSON object of
    currency code -> rate, e.g. '{"PLN": "1.00", "EUR": "4.00"}'.
    """

    # Basic app metadata
    app_name: str = "Currency Exchange API"
    debug: bool = False
    version: str = "0.1.0"

    # Listener for the currency-service launcher
    host: str = "127.0.0.1"
    port: int = 8000

    # Rate table (base currency rate must be exactly 1)
    base_currency: str = BASE_CURRENCY
    exchange_rates: Dict[str, Decimal] = dict(DEFAULT_RATES)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
