"""Application use cases package."""

from .ask_assistant import AskAssistantUseCase, AssistantReply
from .bootstrap_schema import BootstrapSchemaResult, BootstrapSchemaUseCase
from .get_dashboard import DashboardView, GetDashboardUseCase
from .get_production_report import GetProductionReportUseCase
from .import_invoice import (
    ImportCommitResult,
    ImportState,
    InvoiceImportSession,
)
from .workshop_session import WorkshopSession, WorkshopSnapshot

__all__ = [
    "AskAssistantUseCase",
    "AssistantReply",
    "BootstrapSchemaResult",
    "BootstrapSchemaUseCase",
    "DashboardView",
    "GetDashboardUseCase",
    "GetProductionReportUseCase",
    "ImportCommitResult",
    "ImportState",
    "InvoiceImportSession",
    "WorkshopSession",
    "WorkshopSnapshot",
]
