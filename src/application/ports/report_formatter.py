"""Port for rendering production reports into documents."""

from typing import Protocol

from src.domain.models.finance import ProductionReport


class ReportFormatterPort(Protocol):
    """Port turning report lines and totals into a binary document."""

    extension: str
    mime_type: str

    def render(self, report: ProductionReport) -> bytes:
        """Return the document bytes for ``report``."""


__all__ = ["ReportFormatterPort"]
