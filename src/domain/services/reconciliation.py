"""Match invoice line items against the product catalog."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from decimal import Decimal
from logging import Logger

from src.domain.errors import MissingLaborCostError
from src.domain.models.entities import NewProduct, NewProductionEntry, Product
from src.domain.models.invoices import (
    InvoiceItem,
    InvoiceMeta,
    MatchedItem,
    PendingItem,
    ReconciliationResult,
)
from src.domain.policies.rounding import QuantityRounding, round_quantity
from src.domain.services.normalization import (
    normalize_invoice_number,
    normalize_product_name,
)
from src.utils.decimal_utils import coerce_decimal


def reconcile_invoice_items(
    items: Iterable[InvoiceItem],
    catalog: Iterable[Product],
    rounding: QuantityRounding = "floor",
) -> ReconciliationResult:
    """Split invoice items into catalog matches and new-product candidates.

    Names match when equal after trimming and case folding. When several
    catalog products share a normalized name the first one wins.

    Args:
        items: Items read from the invoice.
        catalog: Current products.
        rounding: How fractional quantities become whole units.

    Returns:
        ReconciliationResult: Every item lands in exactly one of the lists.
    """
    by_name: dict[str, Product] = {}
    for product in catalog:
        by_name.setdefault(normalize_product_name(product.name), product)

    matched: list[MatchedItem] = []
    unmatched: list[PendingItem] = []
    for item in items:
        quantity = round_quantity(item.quantity, rounding)
        product = by_name.get(normalize_product_name(item.name))
        if product is not None:
            matched.append(MatchedItem(product_id=product.id, quantity=quantity))
        else:
            unmatched.append(
                PendingItem(
                    name=item.name.strip(),
                    unit_price=coerce_decimal(item.unit_price),
                    quantity=quantity,
                )
            )
    return ReconciliationResult(matched=matched, unmatched=unmatched)


def merge_pending_items(unmatched: Iterable[PendingItem]) -> list[PendingItem]:
    """Collapse pending items that would become the same catalog product.

    Items are grouped by normalized name. Each group keeps the first name
    and unit price seen and the summed quantity, so one product is created
    per name.
    """
    merged: dict[str, PendingItem] = {}
    for item in unmatched:
        key = normalize_product_name(item.name)
        current = merged.get(key)
        if current is None:
            merged[key] = item
        else:
            merged[key] = replace(
                current, quantity=current.quantity + item.quantity
            )
    return list(merged.values())


def missing_labor_costs(
    unmatched: Iterable[PendingItem],
    labor_cost_by_name: Mapping[str, Decimal | None],
) -> list[str]:
    """Return names of pending items without a non-negative labor cost."""
    missing = []
    for item in unmatched:
        labor_cost = labor_cost_by_name.get(item.name)
        if labor_cost is None or coerce_decimal(labor_cost) < 0:
            missing.append(item.name)
    return missing


def resolve_unmatched(
    unmatched: Sequence[PendingItem],
    labor_cost_by_name: Mapping[str, Decimal | None],
    target_category_id: str | None,
) -> list[NewProduct]:
    """Build product creation requests for reviewed invoice items.

    Args:
        unmatched: Items with no catalog match.
        labor_cost_by_name: Labor cost supplied by the reviewer, per name.
        target_category_id: Category assigned to every new product.

    Returns:
        list[NewProduct]: One request per pending item, in input order.

    Raises:
        MissingLaborCostError: If any item lacks a non-negative labor cost.
    """
    missing = missing_labor_costs(unmatched, labor_cost_by_name)
    if missing:
        raise MissingLaborCostError(missing)
    return [
        NewProduct(
            name=item.name,
            sale_value=coerce_decimal(item.unit_price),
            labor_cost=coerce_decimal(labor_cost_by_name[item.name]),
            category_id=target_category_id,
        )
        for item in unmatched
    ]


def build_entries_from_invoice(
    matched: Iterable[MatchedItem],
    created: Iterable[MatchedItem],
    invoice_meta: InvoiceMeta,
    logger: Logger | None = None,
) -> list[NewProductionEntry]:
    """Build production entry requests for every resolved invoice item.

    Args:
        matched: Items matched to existing products.
        created: Newly created products paired with the invoiced quantity.
        invoice_meta: Date and invoice number stamped on each entry.
        logger: Optional logger for skipped items.

    Returns:
        list[NewProductionEntry]: Unpaid entries, matched items first.
        Items whose quantity rounded down to zero are skipped.
    """
    invoice_number = normalize_invoice_number(invoice_meta.invoice_number)
    entries = []
    for item in [*matched, *created]:
        if item.quantity <= 0:
            if logger is not None:
                logger.warning(
                    f"Skipping invoice item for product={item.product_id}: "
                    f"quantity {item.quantity} is not positive"
                )
            continue
        entries.append(
            NewProductionEntry(
                product_id=item.product_id,
                date=invoice_meta.date,
                quantity=item.quantity,
                paid=False,
                invoice_number=invoice_number,
            )
        )
    return entries


__all__ = [
    "reconcile_invoice_items",
    "merge_pending_items",
    "missing_labor_costs",
    "resolve_unmatched",
    "build_entries_from_invoice",
]
