"""Shared fakes for application tests."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.workshop_session import WorkshopSession
from src.domain.errors import PersistenceError
from src.domain.models.entities import (
    Category,
    Expense,
    Product,
    ProductionEntry,
)


class InMemoryWorkshopRepository:
    """Repository fake keeping records in dictionaries.

    ``fail_on`` maps a method name to the call number (1-based) that raises
    PersistenceError.
    """

    def __init__(self) -> None:
        self.categories: dict[str, Category] = {}
        self.products: dict[str, Product] = {}
        self.entries: dict[str, ProductionEntry] = {}
        self.expenses: dict[str, Expense] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[str, int] = {}
        self._counts: dict[str, int] = {}
        self._next_id = 0

    def _track(self, method: str, detail: str = "") -> None:
        self._counts[method] = self._counts.get(method, 0) + 1
        if self.fail_on.get(method) == self._counts[method]:
            raise PersistenceError(f"{method} rejected")
        self.calls.append((method, detail))

    def _id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def list_categories(self):
        return list(self.categories.values())

    def create_category(self, request):
        self._track("create_category", request.name)
        category = Category(id=self._id(), name=request.name)
        self.categories[category.id] = category
        return category

    def update_category(self, category_id, changes):
        self._track("update_category", category_id)
        self.categories[category_id] = replace(
            self.categories[category_id], **changes
        )

    def delete_category(self, category_id):
        self._track("delete_category", category_id)
        self.categories.pop(category_id, None)

    def list_products(self):
        return list(self.products.values())

    def create_product(self, request):
        self._track("create_product", request.name)
        product = Product(
            id=self._id(),
            name=request.name,
            sale_value=request.sale_value,
            labor_cost=request.labor_cost,
            category_id=request.category_id,
        )
        self.products[product.id] = product
        return product

    def update_product(self, product_id, changes):
        self._track("update_product", product_id)
        self.products[product_id] = replace(self.products[product_id], **changes)

    def delete_product(self, product_id):
        self._track("delete_product", product_id)
        self.products.pop(product_id, None)

    def list_entries(self):
        return list(self.entries.values())

    def create_entry(self, request):
        self._track("create_entry", request.product_id)
        entry = ProductionEntry(
            id=self._id(),
            product_id=request.product_id,
            date=request.date,
            quantity=request.quantity,
            paid=request.paid,
            invoice_number=request.invoice_number,
        )
        self.entries[entry.id] = entry
        return entry

    def update_entry(self, entry_id, changes):
        self._track("update_entry", entry_id)
        self.entries[entry_id] = replace(self.entries[entry_id], **changes)

    def delete_entry(self, entry_id):
        self._track("delete_entry", entry_id)
        self.entries.pop(entry_id, None)

    def list_expenses(self):
        return list(self.expenses.values())

    def create_expense(self, request):
        self._track("create_expense", request.description)
        expense = Expense(
            id=self._id(),
            description=request.description,
            value=request.value,
            date=request.date,
        )
        self.expenses[expense.id] = expense
        return expense

    def update_expense(self, expense_id, changes):
        self._track("update_expense", expense_id)
        self.expenses[expense_id] = replace(self.expenses[expense_id], **changes)

    def delete_expense(self, expense_id):
        self._track("delete_expense", expense_id)
        self.expenses.pop(expense_id, None)


@pytest.fixture
def repository() -> InMemoryWorkshopRepository:
    repo = InMemoryWorkshopRepository()
    repo.products["p1"] = Product(
        id="p1",
        name="Almofada",
        sale_value=Decimal("50"),
        labor_cost=Decimal("20"),
        category_id="c1",
    )
    repo.categories["c1"] = Category(id="c1", name="Cushions")
    repo.entries["e1"] = ProductionEntry(
        id="e1", product_id="p1", date="2025-03-02", quantity=5
    )
    repo.entries["e2"] = ProductionEntry(
        id="e2", product_id="p1", date="2025-03-20", quantity=3
    )
    repo.expenses["x1"] = Expense(
        id="x1", description="Rent", value=Decimal("50"), date="2025-03-01"
    )
    return repo


@pytest.fixture
def session(repository) -> WorkshopSession:
    workshop = WorkshopSession(repository, logger=MagicMock())
    workshop.load()
    return workshop
