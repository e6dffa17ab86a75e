from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from currency_service.core.config import Settings
from currency_service.main import create_app
from currency_service.services.rates.table import RateTable


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, version="1.0.0")


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def table() -> RateTable:
    return RateTable(
        {"PLN": Decimal("1.00"), "EUR": Decimal("4.00"), "USD": Decimal("4.10")},
        base_currency="PLN",
    )
