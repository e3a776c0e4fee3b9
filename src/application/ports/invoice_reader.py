"""Port for reading structured invoice documents."""

from typing import Protocol

from src.domain.models.invoices import ParsedInvoice


class InvoiceReaderPort(Protocol):
    """Port turning raw invoice bytes into header and line items."""

    def read(self, payload: bytes) -> ParsedInvoice:
        """Parse ``payload`` into a ParsedInvoice."""


__all__ = ["InvoiceReaderPort"]
