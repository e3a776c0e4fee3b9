"""Tests for the composition root."""

from unittest.mock import MagicMock

from src.infrastructure import container
from src.infrastructure.nfe_parser import NfeInvoiceReader
from src.infrastructure.settings import WorkshopSettings
from src.infrastructure.workshop_repository import SqlAlchemyWorkshopRepository


def test_build_workshop_repository_uses_given_port():
    """The repository wraps the provided database port."""
    db_port = MagicMock()

    repository = container.build_workshop_repository(db_port)

    assert isinstance(repository, SqlAlchemyWorkshopRepository)


def test_build_session_applies_delete_policy():
    """Session delete policy comes from settings."""
    session = container.build_session(
        repository=MagicMock(),
        settings=WorkshopSettings(delete_policy="orphan"),
    )

    assert session.delete_policy == "orphan"


def test_build_assistant_returns_none_without_key(monkeypatch):
    """The assistant is disabled when no credential is configured."""
    monkeypatch.setattr(container, "resolve_api_key", lambda: None)

    assert container.build_assistant() is None


def test_build_assistant_with_key(monkeypatch):
    """A configured key yields the Gemini adapter."""
    monkeypatch.setattr(container, "resolve_api_key", lambda: "key")
    monkeypatch.setattr(container, "GeminiAssistant", lambda: "assistant")

    assert container.build_assistant() == "assistant"


def test_build_report_formatters_by_extension():
    """Formatters are keyed by file extension."""
    formatters = container.build_report_formatters(WorkshopSettings())

    assert sorted(formatters) == ["pdf", "xlsx"]


def test_build_invoice_reader():
    """The invoice reader parses NF-e documents."""
    assert isinstance(container.build_invoice_reader(), NfeInvoiceReader)
