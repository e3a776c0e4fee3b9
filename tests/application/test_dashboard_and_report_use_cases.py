"""Tests for the dashboard and production report use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.application.use_cases.get_production_report import (
    GetProductionReportUseCase,
)
from src.domain.models.finance import FinancialConfig, Period


def test_dashboard_combines_totals_series_and_distribution(session):
    """The view reflects the selected month only."""
    logger = MagicMock()
    use_case = GetDashboardUseCase(session, logger=logger)

    view = use_case.execute(Period(2025, 3))

    assert view.totals.revenue == Decimal("400")
    assert view.totals.final_net_profit == Decimal("172.0")
    assert [point.day for point in view.daily_series] == ["02", "20"]
    assert [(item.name, item.quantity) for item in view.distribution] == [
        ("Almofada", 8)
    ]
    assert view.products_count == 1
    logger.info.assert_called_once()


def test_dashboard_for_empty_month(session):
    """A month without data yields zero totals and empty charts."""
    view = GetDashboardUseCase(session, logger=MagicMock()).execute(
        Period(2030, 1)
    )

    assert view.totals.revenue == 0
    assert view.daily_series == []
    assert view.distribution == []


def test_report_use_case_filters_and_exports(session):
    """The report honours range and delegates rendering."""
    config = FinancialConfig(tax_rate=Decimal("0.1"), currency_code="EUR")
    use_case = GetProductionReportUseCase(
        session, config=config, logger=MagicMock()
    )

    report = use_case.execute("2025-03-10", "2025-03-31")

    assert [line.id for line in report.lines] == ["e2"]
    assert report.totals.currency_code == "EUR"
    assert report.totals.other_expenses == 0

    formatter = MagicMock()
    formatter.extension = "xlsx"
    formatter.render.return_value = b"data"
    assert use_case.export(report, formatter) == b"data"
    formatter.render.assert_called_once_with(report)
