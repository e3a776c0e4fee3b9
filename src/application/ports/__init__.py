"""Application ports package."""

from .assistant import AssistantPort
from .database import DatabaseEnginePort
from .invoice_reader import InvoiceReaderPort
from .report_formatter import ReportFormatterPort
from .workshop_repository import WorkshopRepositoryPort

__all__ = [
    "AssistantPort",
    "DatabaseEnginePort",
    "InvoiceReaderPort",
    "ReportFormatterPort",
    "WorkshopRepositoryPort",
]
