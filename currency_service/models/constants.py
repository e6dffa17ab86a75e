"""Domain constants for the built-in rate table.

Rates are PLN per 1 unit of the quoted currency; PLN is the base.
"""

from decimal import Decimal
from typing import Dict

BASE_CURRENCY: str = "PLN"

DEFAULT_RATES: Dict[str, Decimal] = {
    "PLN": Decimal("1.00"),  # base
    "EUR": Decimal("4.00"),
    "USD": Decimal("4.10"),
}
