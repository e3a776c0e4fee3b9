"""Composition root for wiring infrastructure adapters."""

from src.application.ports.assistant import AssistantPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.invoice_reader import InvoiceReaderPort
from src.application.ports.report_formatter import ReportFormatterPort
from src.application.ports.workshop_repository import WorkshopRepositoryPort
from src.application.use_cases.workshop_session import WorkshopSession
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.gemini_assistant import GeminiAssistant, resolve_api_key
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.nfe_parser import NfeInvoiceReader
from src.infrastructure.report_export import (
    PdfReportFormatter,
    XlsxReportFormatter,
)
from src.infrastructure.settings import WorkshopSettings
from src.infrastructure.workshop_repository import SqlAlchemyWorkshopRepository


def build_settings() -> WorkshopSettings:
    """Return settings read from the environment."""
    return WorkshopSettings.from_env()


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_workshop_repository(
    db_port: DatabaseEnginePort | None = None,
) -> WorkshopRepositoryPort:
    """Return the SQLAlchemy workshop repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyWorkshopRepository(resolved_db, logger=get_app_logger())


def build_session(
    repository: WorkshopRepositoryPort | None = None,
    settings: WorkshopSettings | None = None,
) -> WorkshopSession:
    """Return a session configured with the delete policy from settings."""
    resolved_settings = settings or build_settings()
    return WorkshopSession(
        repository or build_workshop_repository(),
        logger=get_app_logger(),
        delete_policy=resolved_settings.delete_policy,
    )


def build_assistant() -> AssistantPort | None:
    """Return the Gemini assistant, or None when no credential is set."""
    if not resolve_api_key():
        get_app_logger().warning("GEMINI_API_KEY not set; assistant disabled")
        return None
    return GeminiAssistant()


def build_invoice_reader() -> InvoiceReaderPort:
    """Return the NF-e XML reader."""
    return NfeInvoiceReader(logger=get_app_logger())


def build_report_formatters(
    settings: WorkshopSettings | None = None,
) -> dict[str, ReportFormatterPort]:
    """Return report formatters keyed by file extension."""
    config = (settings or build_settings()).financial_config
    formatters = [XlsxReportFormatter(config), PdfReportFormatter(config)]
    return {formatter.extension: formatter for formatter in formatters}


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_workshop_repository",
    "build_session",
    "build_assistant",
    "build_invoice_reader",
    "build_report_formatters",
]
