"""Domain constants for workshop financial reporting."""

from decimal import Decimal

DEFAULT_TAX_RATE = Decimal("0.075")
DEFAULT_CURRENCY = "BRL"

REMOVED_PRODUCT_NAME = "Removed product"

DEFAULT_DISTRIBUTION_LIMIT = 5
ASSISTANT_RECENT_ENTRIES = 10
ASSISTANT_RECENT_EXPENSES = 5


__all__ = [
    "DEFAULT_TAX_RATE",
    "DEFAULT_CURRENCY",
    "REMOVED_PRODUCT_NAME",
    "DEFAULT_DISTRIBUTION_LIMIT",
    "ASSISTANT_RECENT_ENTRIES",
    "ASSISTANT_RECENT_EXPENSES",
]
