"""JSON-serializable business snapshot handed to the language model."""

from collections.abc import Sequence
from typing import Any

from src.domain.constants import (
    ASSISTANT_RECENT_ENTRIES,
    ASSISTANT_RECENT_EXPENSES,
    REMOVED_PRODUCT_NAME,
)
from src.domain.models.entities import Expense, Product, ProductionEntry
from src.domain.models.finance import FinancialConfig
from src.utils.decimal_utils import decimal_to_float
from src.utils.period_utils import date_key


def build_assistant_snapshot(
    products: Sequence[Product],
    entries: Sequence[ProductionEntry],
    expenses: Sequence[Expense],
    config: FinancialConfig,
    recent_limit: int = ASSISTANT_RECENT_ENTRIES,
    expense_limit: int = ASSISTANT_RECENT_EXPENSES,
) -> dict[str, Any]:
    """Summarize the catalog, recent production and expenses.

    Args:
        products: Catalog products.
        entries: Production entries; the most recent dates come first.
        expenses: Expenses; the most recent dates come first.
        config: Tax and currency settings.
        recent_limit: Maximum production entries to include.
        expense_limit: Maximum expenses to include.

    Returns:
        dict[str, Any]: Plain values only, ready for ``json.dumps``.
    """
    names = {product.id: product.name for product in products}
    recent_entries = sorted(
        entries,
        key=lambda entry: date_key(entry.date),
        reverse=True,
    )[: max(recent_limit, 0)]
    recent_expenses = sorted(
        expenses,
        key=lambda expense: date_key(expense.date),
        reverse=True,
    )[: max(expense_limit, 0)]
    return {
        "total_products": len(products),
        "tax_rate": float(config.tax_rate),
        "currency": config.currency_code,
        "profitability_model": [
            {
                "name": product.name,
                "sale_value": decimal_to_float(product.sale_value),
                "labor_cost": decimal_to_float(product.labor_cost),
                "unit_margin": decimal_to_float(product.unit_margin),
            }
            for product in products
        ],
        "recent_entries": [
            {
                "product": names.get(entry.product_id, REMOVED_PRODUCT_NAME),
                "quantity": entry.quantity,
                "date": date_key(entry.date),
            }
            for entry in recent_entries
        ],
        "recent_expenses": [
            {
                "description": expense.description,
                "value": decimal_to_float(expense.value),
                "date": date_key(expense.date),
            }
            for expense in recent_expenses
        ],
    }


__all__ = ["build_assistant_snapshot"]
