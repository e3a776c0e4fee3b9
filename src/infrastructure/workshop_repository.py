"""SQLAlchemy-backed repository for workshop records."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.workshop_repository import WorkshopRepositoryPort
from src.domain.errors import PersistenceError
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
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal, quantize_money
from src.utils.period_utils import date_key

UPDATABLE_COLUMNS: dict[str, frozenset[str]] = {
    "categories": frozenset({"name"}),
    "products": frozenset({"name", "sale_value", "labor_cost", "category_id"}),
    "production_entries": frozenset(
        {"date", "quantity", "paid", "invoice_number"}
    ),
    "expenses": frozenset({"description", "value", "date"}),
}
MONEY_COLUMNS = frozenset({"sale_value", "labor_cost", "value"})
DATE_COLUMNS = frozenset({"date"})

SELECT_CATEGORIES_SQL = text(
    """
    SELECT id, name
    FROM categories
    ORDER BY name
    """
)

SELECT_PRODUCTS_SQL = text(
    """
    SELECT id, name, sale_value, labor_cost, category_id
    FROM products
    ORDER BY name
    """
)

SELECT_ENTRIES_SQL = text(
    """
    SELECT id, product_id, date, quantity, paid, invoice_number
    FROM production_entries
    ORDER BY date DESC
    """
)

SELECT_EXPENSES_SQL = text(
    """
    SELECT id, description, value, date
    FROM expenses
    ORDER BY date DESC
    """
)

INSERT_CATEGORY_SQL = text(
    "INSERT INTO categories (id, name) VALUES (:id, :name)"
)

INSERT_PRODUCT_SQL = text(
    """
    INSERT INTO products (id, name, sale_value, labor_cost, category_id)
    VALUES (:id, :name, :sale_value, :labor_cost, :category_id)
    """
)

INSERT_ENTRY_SQL = text(
    """
    INSERT INTO production_entries (
        id,
        product_id,
        date,
        quantity,
        paid,
        invoice_number
    )
    VALUES (:id, :product_id, :date, :quantity, :paid, :invoice_number)
    """
)

INSERT_EXPENSE_SQL = text(
    """
    INSERT INTO expenses (id, description, value, date)
    VALUES (:id, :description, :value, :date)
    """
)


def _new_id() -> str:
    return uuid4().hex


def _bind_value(column: str, value: Any) -> Any:
    """Convert a domain value into a driver-friendly parameter."""
    if value is None:
        return None
    if column in MONEY_COLUMNS:
        return str(quantize_money(value))
    if column in DATE_COLUMNS:
        return date_key(value)
    return value


class SqlAlchemyWorkshopRepository(WorkshopRepositoryPort):
    """Repository persisting categories, products, entries and expenses.

    Every call opens its own transaction; there is no unit of work spanning
    several calls. Driver errors surface as PersistenceError.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the workshop engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._logger.error(f"Database error while trying to {action}: {exc}")
            raise PersistenceError(f"Could not {action}") from exc

    def _fetch(self, query) -> list[Any]:
        engine = self._db_port.get_workshop_engine()
        with engine.connect() as conn:
            return conn.execute(query).all()

    def _write(self, statement, params: dict[str, Any]) -> int:
        engine = self._db_port.get_workshop_engine()
        with engine.begin() as conn:
            result = conn.execute(statement, params)
        return result.rowcount

    def _update(self, table: str, record_id: str, changes: dict[str, Any]) -> None:
        allowed = UPDATABLE_COLUMNS[table]
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(
                f"Unsupported columns for {table}: {', '.join(sorted(unknown))}"
            )
        if not changes:
            return
        columns = sorted(changes)
        assignments = ", ".join(f"{column} = :{column}" for column in columns)
        params = {
            column: _bind_value(column, changes[column]) for column in columns
        }
        params["id"] = record_id
        with self._errors(f"update {table} id={record_id}"):
            self._write(
                text(f"UPDATE {table} SET {assignments} WHERE id = :id"),
                params,
            )

    def _delete(self, table: str, record_id: str) -> None:
        with self._errors(f"delete {table} id={record_id}"):
            self._write(
                text(f"DELETE FROM {table} WHERE id = :id"),
                {"id": record_id},
            )

    # Categories

    def list_categories(self) -> list[Category]:
        with self._errors("load categories"):
            rows = self._fetch(SELECT_CATEGORIES_SQL)
        return [Category(id=str(row.id), name=row.name) for row in rows]

    def create_category(self, request: NewCategory) -> Category:
        category = Category(id=_new_id(), name=request.name)
        with self._errors("create category"):
            self._write(
                INSERT_CATEGORY_SQL,
                {"id": category.id, "name": category.name},
            )
        return category

    def update_category(self, category_id: str, changes: dict[str, Any]) -> None:
        self._update("categories", category_id, changes)

    def delete_category(self, category_id: str) -> None:
        self._delete("categories", category_id)

    # Products

    def list_products(self) -> list[Product]:
        with self._errors("load products"):
            rows = self._fetch(SELECT_PRODUCTS_SQL)
        return [
            Product(
                id=str(row.id),
                name=row.name,
                sale_value=coerce_decimal(row.sale_value),
                labor_cost=coerce_decimal(row.labor_cost),
                category_id=(
                    str(row.category_id) if row.category_id is not None else None
                ),
            )
            for row in rows
        ]

    def create_product(self, request: NewProduct) -> Product:
        product = Product(
            id=_new_id(),
            name=request.name,
            sale_value=coerce_decimal(request.sale_value),
            labor_cost=coerce_decimal(request.labor_cost),
            category_id=request.category_id,
        )
        with self._errors("create product"):
            self._write(
                INSERT_PRODUCT_SQL,
                {
                    "id": product.id,
                    "name": product.name,
                    "sale_value": _bind_value("sale_value", product.sale_value),
                    "labor_cost": _bind_value("labor_cost", product.labor_cost),
                    "category_id": product.category_id,
                },
            )
        return product

    def update_product(self, product_id: str, changes: dict[str, Any]) -> None:
        self._update("products", product_id, changes)

    def delete_product(self, product_id: str) -> None:
        self._delete("products", product_id)

    # Production entries

    def list_entries(self) -> list[ProductionEntry]:
        with self._errors("load production entries"):
            rows = self._fetch(SELECT_ENTRIES_SQL)
        return [
            ProductionEntry(
                id=str(row.id),
                product_id=str(row.product_id),
                date=date_key(row.date),
                quantity=int(row.quantity),
                paid=bool(row.paid),
                invoice_number=row.invoice_number,
            )
            for row in rows
        ]

    def create_entry(self, request: NewProductionEntry) -> ProductionEntry:
        entry = ProductionEntry(
            id=_new_id(),
            product_id=request.product_id,
            date=date_key(request.date),
            quantity=int(request.quantity),
            paid=bool(request.paid),
            invoice_number=request.invoice_number,
        )
        with self._errors("create production entry"):
            self._write(
                INSERT_ENTRY_SQL,
                {
                    "id": entry.id,
                    "product_id": entry.product_id,
                    "date": entry.date,
                    "quantity": entry.quantity,
                    "paid": entry.paid,
                    "invoice_number": entry.invoice_number,
                },
            )
        return entry

    def update_entry(self, entry_id: str, changes: dict[str, Any]) -> None:
        self._update("production_entries", entry_id, changes)

    def delete_entry(self, entry_id: str) -> None:
        self._delete("production_entries", entry_id)

    # Expenses

    def list_expenses(self) -> list[Expense]:
        with self._errors("load expenses"):
            rows = self._fetch(SELECT_EXPENSES_SQL)
        return [
            Expense(
                id=str(row.id),
                description=row.description,
                value=coerce_decimal(row.value),
                date=date_key(row.date),
            )
            for row in rows
        ]

    def create_expense(self, request: NewExpense) -> Expense:
        expense = Expense(
            id=_new_id(),
            description=request.description,
            value=coerce_decimal(request.value),
            date=date_key(request.date),
        )
        with self._errors("create expense"):
            self._write(
                INSERT_EXPENSE_SQL,
                {
                    "id": expense.id,
                    "description": expense.description,
                    "value": _bind_value("value", expense.value),
                    "date": expense.date,
                },
            )
        return expense

    def update_expense(self, expense_id: str, changes: dict[str, Any]) -> None:
        self._update("expenses", expense_id, changes)

    def delete_expense(self, expense_id: str) -> None:
        self._delete("expenses", expense_id)


__all__ = ["SqlAlchemyWorkshopRepository"]
