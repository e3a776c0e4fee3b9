"""Read Brazilian NF-e XML documents into parsed invoices.

Both the bare ``NFe`` element and the ``nfeProc`` envelope are accepted, with
or without the ``http://www.portalfiscal.inf.br/nfe`` namespace.
"""

from collections.abc import Iterator
from decimal import Decimal, InvalidOperation
import xml.etree.ElementTree as ET

from src.domain.errors import InvoiceParseError
from src.domain.models.invoices import InvoiceItem, ParsedInvoice
from src.infrastructure.logging.logger import get_app_logger


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element.iter():
        if _local_name(child.tag) == name:
            yield child


def _first(element: ET.Element, name: str) -> ET.Element | None:
    return next(_children(element, name), None)


def _text(element: ET.Element, name: str) -> str:
    found = _first(element, name)
    if found is None or found.text is None:
        return ""
    return found.text.strip()


def _decimal(value: str, field: str) -> Decimal:
    try:
        return Decimal(value.replace(",", "."))
    except InvalidOperation as exc:
        raise InvoiceParseError(f"Invalid {field} value: {value!r}") from exc


class NfeInvoiceReader:
    """InvoiceReaderPort for NF-e XML payloads."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def read(self, payload: bytes) -> ParsedInvoice:
        """Parse an NF-e document.

        Args:
            payload: Raw XML bytes.

        Returns:
            ParsedInvoice: Invoice number, issue date and product lines.

        Raises:
            InvoiceParseError: If the XML is malformed or lacks required
                fields.
        """
        try:
            root = ET.fromstring(payload)
        except ET.ParseError as exc:
            raise InvoiceParseError(f"Malformed invoice XML: {exc}") from exc

        ide = _first(root, "ide")
        if ide is None:
            raise InvoiceParseError("Invoice header (ide) not found")
        invoice_number = _text(ide, "nNF")
        issued = _text(ide, "dhEmi") or _text(ide, "dEmi")
        if not invoice_number or not issued:
            raise InvoiceParseError("Invoice number or issue date missing")

        items = []
        for det in _children(root, "det"):
            prod = _first(det, "prod")
            if prod is None:
                continue
            name = _text(prod, "xProd")
            if not name:
                raise InvoiceParseError("Invoice item without description")
            items.append(
                InvoiceItem(
                    name=name,
                    unit_price=_decimal(_text(prod, "vUnCom") or "0", "vUnCom"),
                    quantity=_decimal(_text(prod, "qCom") or "0", "qCom"),
                )
            )
        if not items:
            raise InvoiceParseError("Invoice has no product lines")

        self._logger.info(
            f"Parsed NF-e {invoice_number} with {len(items)} items"
        )
        return ParsedInvoice(
            invoice_number=invoice_number,
            date=issued[:10],
            items=items,
        )


__all__ = ["NfeInvoiceReader"]
