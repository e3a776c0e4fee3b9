"""Tests for the assistant business snapshot."""

import json
from decimal import Decimal

from src.domain.constants import REMOVED_PRODUCT_NAME
from src.domain.models.entities import Expense, Product, ProductionEntry
from src.domain.models.finance import FinancialConfig
from src.domain.services.assistant_snapshot import build_assistant_snapshot


def test_snapshot_is_json_serializable_and_bounded():
    """Recent lists are newest first and capped."""
    products = [
        Product(
            id="p1",
            name="Cushion",
            sale_value=Decimal("50"),
            labor_cost=Decimal("20"),
        )
    ]
    entries = [
        ProductionEntry(
            id=f"e{day}",
            product_id="p1" if day % 2 else "gone",
            date=f"2025-03-{day:02d}",
            quantity=day,
        )
        for day in range(1, 13)
    ]
    expenses = [
        Expense(
            id=f"x{month}",
            description=f"Rent {month}",
            value=Decimal("100.5"),
            date=f"2025-{month:02d}-01",
        )
        for month in range(1, 8)
    ]

    snapshot = build_assistant_snapshot(
        products, entries, expenses, FinancialConfig()
    )

    json.dumps(snapshot)
    assert snapshot["total_products"] == 1
    assert snapshot["tax_rate"] == 0.075
    assert snapshot["currency"] == "BRL"
    assert snapshot["profitability_model"] == [
        {
            "name": "Cushion",
            "sale_value": 50.0,
            "labor_cost": 20.0,
            "unit_margin": 30.0,
        }
    ]
    recent = snapshot["recent_entries"]
    assert len(recent) == 10
    assert recent[0] == {"product": REMOVED_PRODUCT_NAME, "quantity": 12, "date": "2025-03-12"}
    assert recent[1]["product"] == "Cushion"
    assert [item["date"][:7] for item in snapshot["recent_expenses"]] == [
        "2025-07",
        "2025-06",
        "2025-05",
        "2025-04",
        "2025-03",
    ]


def test_snapshot_limits_can_be_zero():
    """Zero limits produce empty recent lists."""
    snapshot = build_assistant_snapshot(
        [],
        [ProductionEntry(id="e1", product_id="p", date="2025-01-01", quantity=1)],
        [],
        FinancialConfig(),
        recent_limit=0,
        expense_limit=0,
    )

    assert snapshot["recent_entries"] == []
    assert snapshot["recent_expenses"] == []
