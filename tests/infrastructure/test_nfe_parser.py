"""Tests for the NF-e XML reader."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import InvoiceParseError
from src.infrastructure.nfe_parser import NfeInvoiceReader

NFE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<nfeProc xmlns="http://www.portalfiscal.inf.br/nfe" versao="4.00">
  <NFe>
    <infNFe Id="NFe35250300000000000000550010000012341000012345">
      <ide>
        <nNF>1234</nNF>
        <dhEmi>2025-03-15T10:20:00-03:00</dhEmi>
      </ide>
      <det nItem="1">
        <prod>
          <xProd>Almofada</xProd>
          <qCom>4.0000</qCom>
          <vUnCom>50.0000000000</vUnCom>
        </prod>
      </det>
      <det nItem="2">
        <prod>
          <xProd>Cortina Nova</xProd>
          <qCom>1.5000</qCom>
          <vUnCom>120.50</vUnCom>
        </prod>
      </det>
    </infNFe>
  </NFe>
</nfeProc>
"""


def test_read_namespaced_document():
    """Header and items are read regardless of the namespace."""
    invoice = NfeInvoiceReader(logger=MagicMock()).read(NFE_XML)

    assert invoice.invoice_number == "1234"
    assert invoice.date == "2025-03-15"
    assert [item.name for item in invoice.items] == ["Almofada", "Cortina Nova"]
    assert invoice.items[1].quantity == Decimal("1.5")
    assert invoice.items[1].unit_price == Decimal("120.50")


def test_read_legacy_issue_date_without_namespace():
    """Older layouts use dEmi and may omit the namespace."""
    payload = (
        b"<NFe><infNFe><ide><nNF>9</nNF><dEmi>2010-05-01</dEmi></ide>"
        b"<det><prod><xProd>Toalha</xProd><qCom>2</qCom>"
        b"<vUnCom>10</vUnCom></prod></det></infNFe></NFe>"
    )

    invoice = NfeInvoiceReader(logger=MagicMock()).read(payload)

    assert invoice.date == "2010-05-01"
    assert invoice.items[0].quantity == Decimal("2")


@pytest.mark.parametrize(
    "payload",
    [
        b"<NFe><ide>",
        b"<NFe><det/></NFe>",
        b"<NFe><ide><nNF>1</nNF><dEmi>2010-05-01</dEmi></ide></NFe>",
        b"<NFe><ide><nNF>1</nNF><dEmi>2010-05-01</dEmi></ide>"
        b"<det><prod><xProd>A</xProd><qCom>x</qCom></prod></det></NFe>",
    ],
)
def test_invalid_documents_raise(payload):
    """Malformed XML, missing header or items are parse errors."""
    with pytest.raises(InvoiceParseError):
        NfeInvoiceReader(logger=MagicMock()).read(payload)
