"""Port for reading and writing workshop records.

Each create call returns the stored record with its identifier; every call
is an independent request with no transaction spanning several calls.
"""

from typing import Any, Protocol

from src.domain.models.entities import (
    Category,
    Expense,
    NewCategory,
    NewExpense,
    NewProduct,
    NewProductionEntry,
    Product,
    ProductionEntry,
)


class WorkshopRepositoryPort(Protocol):
    """Port exposing the four workshop record collections."""

    def list_categories(self) -> list[Category]:
        """Return every category."""

    def create_category(self, request: NewCategory) -> Category:
        """Store a category and return it with its id."""

    def update_category(self, category_id: str, changes: dict[str, Any]) -> None:
        """Apply a partial update to a category."""

    def delete_category(self, category_id: str) -> None:
        """Remove a category."""

    def list_products(self) -> list[Product]:
        """Return every product."""

    def create_product(self, request: NewProduct) -> Product:
        """Store a product and return it with its id."""

    def update_product(self, product_id: str, changes: dict[str, Any]) -> None:
        """Apply a partial update to a product."""

    def delete_product(self, product_id: str) -> None:
        """Remove a product; dependent entries are left to the caller."""

    def list_entries(self) -> list[ProductionEntry]:
        """Return every production entry."""

    def create_entry(self, request: NewProductionEntry) -> ProductionEntry:
        """Store a production entry and return it with its id."""

    def update_entry(self, entry_id: str, changes: dict[str, Any]) -> None:
        """Apply a partial update to a production entry."""

    def delete_entry(self, entry_id: str) -> None:
        """Remove a production entry."""

    def list_expenses(self) -> list[Expense]:
        """Return every expense."""

    def create_expense(self, request: NewExpense) -> Expense:
        """Store an expense and return it with its id."""

    def update_expense(self, expense_id: str, changes: dict[str, Any]) -> None:
        """Apply a partial update to an expense."""

    def delete_expense(self, expense_id: str) -> None:
        """Remove an expense."""


__all__ = ["WorkshopRepositoryPort"]
