"""Use case to build and export the detailed production report."""

from datetime import date

from src.application.ports.report_formatter import ReportFormatterPort
from src.application.use_cases.workshop_session import WorkshopSession
from src.domain.models.finance import FinancialConfig, ProductionReport
from src.domain.services.aggregation import build_production_report
from src.infrastructure.logging.logger import get_app_logger


class GetProductionReportUseCase:
    """Filter production by date range and product, then total it."""

    def __init__(
        self,
        session: WorkshopSession,
        config: FinancialConfig | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            session: State holder with the loaded collections.
            config: Tax and currency settings.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._session = session
        self._config = config or FinancialConfig()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        product_id: str | None = None,
    ) -> ProductionReport:
        """Return report lines, newest first, with consolidated totals.

        Args:
            start_date: Optional inclusive lower bound.
            end_date: Optional inclusive upper bound.
            product_id: Optional product to restrict production lines to.

        Returns:
            ProductionReport: Lines and totals for the selection.
        """
        snapshot = self._session.snapshot
        report = build_production_report(
            snapshot.entries,
            snapshot.products,
            snapshot.expenses,
            start_date=start_date,
            end_date=end_date,
            product_id=product_id,
            config=self._config,
        )
        self._logger.info(
            f"Report built: lines={len(report.lines)}, "
            f"start={report.start_date}, end={report.end_date}, "
            f"product={report.product_id}"
        )
        return report

    def export(
        self,
        report: ProductionReport,
        formatter: ReportFormatterPort,
    ) -> bytes:
        """Render ``report`` with the given formatter."""
        payload = formatter.render(report)
        self._logger.info(
            f"Exported report as {formatter.extension} ({len(payload)} bytes)"
        )
        return payload


__all__ = ["GetProductionReportUseCase"]
