"""Domain models for the workshop catalog, production and expenses."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

DateValue = date | str


@dataclass(frozen=True)
class Category:
    """Product grouping such as cushions or curtains."""

    id: str
    name: str


@dataclass(frozen=True)
class Product:
    """Catalog product with its unit economics.

    Attributes:
        id: Store identifier, stringified.
        name: Display name, matched case-insensitively on invoice import.
        sale_value: Total sale/manufacturing value per unit.
        labor_cost: Labor portion paid per unit.
        category_id: Owning category, or None when uncategorized.
    """

    id: str
    name: str
    sale_value: Decimal
    labor_cost: Decimal
    category_id: str | None = None

    @property
    def unit_margin(self) -> Decimal:
        """Return sale value minus labor cost; may be negative."""
        return self.sale_value - self.labor_cost


@dataclass(frozen=True)
class ProductionEntry:
    """N units of a product produced or invoiced on a given date."""

    id: str
    product_id: str
    date: DateValue
    quantity: int
    paid: bool = False
    invoice_number: str | None = None


@dataclass(frozen=True)
class Expense:
    """Standalone cost not tied to a product, such as rent."""

    id: str
    description: str
    value: Decimal
    date: DateValue


@dataclass(frozen=True)
class NewCategory:
    """Creation request for a category."""

    name: str


@dataclass(frozen=True)
class NewProduct:
    """Creation request for a product, not yet persisted."""

    name: str
    sale_value: Decimal
    labor_cost: Decimal
    category_id: str | None = None


@dataclass(frozen=True)
class NewProductionEntry:
    """Creation request for a production entry, not yet persisted."""

    product_id: str
    date: DateValue
    quantity: int
    paid: bool = False
    invoice_number: str | None = None


@dataclass(frozen=True)
class NewExpense:
    """Creation request for an expense, not yet persisted."""

    description: str
    value: Decimal
    date: DateValue


__all__ = [
    "DateValue",
    "Category",
    "Product",
    "ProductionEntry",
    "Expense",
    "NewCategory",
    "NewProduct",
    "NewProductionEntry",
    "NewExpense",
]
