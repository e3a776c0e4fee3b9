"""In-memory state holder for the workshop collections.

The session owns the four collections read by every aggregation call. Each
mutation is sent to the repository first; the local collection is replaced
only after the repository confirms the write, so the screen never shows a
record the store rejected. A single editor is assumed: concurrent writers
are last-write-wins at the store.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from src.application.ports.workshop_repository import WorkshopRepositoryPort
from src.domain.errors import ValidationError
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
from src.domain.policies.deletion import (
    DELETE_POLICIES,
    DeletePolicy,
    dependent_entries,
)
from src.domain.services.validation import warn_negative_margins
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal
from src.utils.period_utils import date_key, parse_year_month

ENTRY_FIELDS = frozenset({"date", "quantity", "invoice_number", "paid"})
PRODUCT_FIELDS = frozenset({"name", "sale_value", "labor_cost", "category_id"})
EXPENSE_FIELDS = frozenset({"description", "value", "date"})


@dataclass(frozen=True)
class WorkshopSnapshot:
    """Read-only view of the collections at one point in time."""

    categories: tuple[Category, ...] = ()
    products: tuple[Product, ...] = ()
    entries: tuple[ProductionEntry, ...] = ()
    expenses: tuple[Expense, ...] = ()


class WorkshopSession:
    """Hold the workshop collections and apply confirmed writes."""

    def __init__(
        self,
        repository: WorkshopRepositoryPort,
        logger=None,
        delete_policy: DeletePolicy = "cascade",
    ) -> None:
        """Initialize the session.

        Args:
            repository: Port persisting workshop records.
            logger: Optional logger compatible with logging.Logger-like API.
            delete_policy: What happens to entries of a deleted product.
        """
        if delete_policy not in DELETE_POLICIES:
            raise ValueError(f"Unsupported delete policy: {delete_policy}")
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._delete_policy = delete_policy
        self._snapshot = WorkshopSnapshot()

    @property
    def snapshot(self) -> WorkshopSnapshot:
        return self._snapshot

    @property
    def delete_policy(self) -> DeletePolicy:
        return self._delete_policy

    def load(self) -> WorkshopSnapshot:
        """Replace every collection with a fresh read from the repository."""
        self._snapshot = WorkshopSnapshot(
            categories=tuple(self._repository.list_categories()),
            products=tuple(self._repository.list_products()),
            entries=tuple(self._repository.list_entries()),
            expenses=tuple(self._repository.list_expenses()),
        )
        self._logger.info(
            f"Loaded {len(self._snapshot.products)} products, "
            f"{len(self._snapshot.entries)} entries, "
            f"{len(self._snapshot.expenses)} expenses"
        )
        warn_negative_margins(self._snapshot.products, self._logger)
        return self._snapshot

    # Categories

    def add_category(self, name: str) -> Category:
        cleaned = _require_text(name, "Category name")
        category = self._repository.create_category(NewCategory(name=cleaned))
        self._replace(categories=(*self._snapshot.categories, category))
        return category

    def rename_category(self, category_id: str, name: str) -> None:
        cleaned = _require_text(name, "Category name")
        self._repository.update_category(category_id, {"name": cleaned})
        self._replace(
            categories=tuple(
                replace(category, name=cleaned)
                if category.id == category_id
                else category
                for category in self._snapshot.categories
            )
        )

    def delete_category(self, category_id: str) -> None:
        """Delete a category, first moving its products to uncategorized."""
        for product in self._snapshot.products:
            if product.category_id == category_id:
                self.update_product(product.id, {"category_id": None})
        self._repository.delete_category(category_id)
        self._replace(
            categories=tuple(
                category
                for category in self._snapshot.categories
                if category.id != category_id
            )
        )

    # Products

    def add_product(self, request: NewProduct) -> Product:
        validated = _validate_product(request)
        product = self._repository.create_product(validated)
        self._replace(products=(*self._snapshot.products, product))
        self._logger.info(f"Created product id={product.id} name={product.name}")
        warn_negative_margins([product], self._logger)
        return product

    def update_product(self, product_id: str, changes: dict[str, Any]) -> None:
        cleaned = _restrict(changes, PRODUCT_FIELDS)
        if "name" in cleaned:
            cleaned["name"] = _require_text(cleaned["name"], "Product name")
        for key in ("sale_value", "labor_cost"):
            if key in cleaned:
                cleaned[key] = _require_money(cleaned[key], key)
        self._repository.update_product(product_id, cleaned)
        self._replace(
            products=tuple(
                replace(product, **cleaned) if product.id == product_id
                else product
                for product in self._snapshot.products
            )
        )

    def delete_product(
        self,
        product_id: str,
        policy: DeletePolicy | None = None,
    ) -> list[str]:
        """Delete a product and apply the delete policy to its entries.

        The product and each dependent entry are removed by separate,
        independent requests.

        Returns:
            list[str]: Ids of entries deleted along with the product.
        """
        selected = policy or self._delete_policy
        self._repository.delete_product(product_id)
        self._replace(
            products=tuple(
                product
                for product in self._snapshot.products
                if product.id != product_id
            )
        )
        if selected != "cascade":
            return []
        removed = []
        for entry in dependent_entries(self._snapshot.entries, product_id):
            self.delete_entry(entry.id)
            removed.append(entry.id)
        if removed:
            self._logger.info(
                f"Deleted {len(removed)} entries of product id={product_id}"
            )
        return removed

    # Production entries

    def add_entry(self, request: NewProductionEntry) -> ProductionEntry:
        validated = _validate_entry(request)
        entry = self._repository.create_entry(validated)
        self._replace(entries=(*self._snapshot.entries, entry))
        return entry

    def update_entry(self, entry_id: str, changes: dict[str, Any]) -> None:
        cleaned = _restrict(changes, ENTRY_FIELDS)
        if "quantity" in cleaned:
            cleaned["quantity"] = _require_quantity(cleaned["quantity"])
        if "date" in cleaned:
            cleaned["date"] = _require_date(cleaned["date"])
        self._repository.update_entry(entry_id, cleaned)
        self._replace(
            entries=tuple(
                replace(entry, **cleaned) if entry.id == entry_id else entry
                for entry in self._snapshot.entries
            )
        )

    def set_entry_paid(self, entry_id: str, paid: bool) -> None:
        self.update_entry(entry_id, {"paid": bool(paid)})

    def delete_entry(self, entry_id: str) -> None:
        self._repository.delete_entry(entry_id)
        self._replace(
            entries=tuple(
                entry for entry in self._snapshot.entries if entry.id != entry_id
            )
        )

    # Expenses

    def add_expense(self, request: NewExpense) -> Expense:
        validated = NewExpense(
            description=_require_text(request.description, "Description"),
            value=_require_money(request.value, "value"),
            date=_require_date(request.date),
        )
        expense = self._repository.create_expense(validated)
        self._replace(expenses=(*self._snapshot.expenses, expense))
        return expense

    def update_expense(self, expense_id: str, changes: dict[str, Any]) -> None:
        cleaned = _restrict(changes, EXPENSE_FIELDS)
        if "description" in cleaned:
            cleaned["description"] = _require_text(
                cleaned["description"], "Description"
            )
        if "value" in cleaned:
            cleaned["value"] = _require_money(cleaned["value"], "value")
        if "date" in cleaned:
            cleaned["date"] = _require_date(cleaned["date"])
        self._repository.update_expense(expense_id, cleaned)
        self._replace(
            expenses=tuple(
                replace(expense, **cleaned) if expense.id == expense_id
                else expense
                for expense in self._snapshot.expenses
            )
        )

    def delete_expense(self, expense_id: str) -> None:
        self._repository.delete_expense(expense_id)
        self._replace(
            expenses=tuple(
                expense
                for expense in self._snapshot.expenses
                if expense.id != expense_id
            )
        )

    def _replace(self, **collections) -> None:
        self._snapshot = replace(self._snapshot, **collections)


def _restrict(changes: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = set(changes) - allowed
    if unknown:
        raise ValidationError(f"Unsupported fields: {', '.join(sorted(unknown))}")
    return dict(changes)


def _require_text(value: str | None, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    return cleaned


def _require_money(value, label: str) -> Decimal:
    amount = coerce_decimal(value)
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{label} must be a non-negative amount")
    return amount


def _require_quantity(value) -> int:
    try:
        quantity = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Quantity must be a whole number") from exc
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    return quantity


def _require_date(value):
    if parse_year_month(value) is None:
        raise ValidationError(f"Invalid date: {date_key(value) or value!r}")
    return value


def _validate_product(request: NewProduct) -> NewProduct:
    return NewProduct(
        name=_require_text(request.name, "Product name"),
        sale_value=_require_money(request.sale_value, "sale_value"),
        labor_cost=_require_money(request.labor_cost, "labor_cost"),
        category_id=request.category_id or None,
    )


def _validate_entry(request: NewProductionEntry) -> NewProductionEntry:
    if not request.product_id:
        raise ValidationError("Product is required")
    return replace(
        request,
        date=_require_date(request.date),
        quantity=_require_quantity(request.quantity),
    )


__all__ = ["WorkshopSession", "WorkshopSnapshot"]
