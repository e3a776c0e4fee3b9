"""Domain models for invoice import and reconciliation."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.models.entities import DateValue


@dataclass(frozen=True)
class InvoiceItem:
    """Line item read from an invoice document."""

    name: str
    unit_price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class ParsedInvoice:
    """Invoice header and items as produced by the ingestion collaborator."""

    invoice_number: str
    date: DateValue
    items: list[InvoiceItem]


@dataclass(frozen=True)
class InvoiceMeta:
    """Date and number stamped on every entry created from an invoice."""

    date: DateValue
    invoice_number: str | None


@dataclass(frozen=True)
class MatchedItem:
    """Invoice item resolved to an existing catalog product."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class PendingItem:
    """Invoice item with no catalog match, awaiting a labor cost."""

    name: str
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True)
class ReconciliationResult:
    """Partition of invoice items into matched and unmatched."""

    matched: list[MatchedItem]
    unmatched: list[PendingItem]

    @property
    def needs_review(self) -> bool:
        """Return True when some items require human input."""
        return bool(self.unmatched)


__all__ = [
    "InvoiceItem",
    "ParsedInvoice",
    "InvoiceMeta",
    "MatchedItem",
    "PendingItem",
    "ReconciliationResult",
]
