"""Use case to compute the monthly dashboard figures."""

from dataclasses import dataclass

from src.application.use_cases.workshop_session import WorkshopSession
from src.domain.constants import DEFAULT_DISTRIBUTION_LIMIT
from src.domain.models.finance import (
    DailyProfit,
    FinancialConfig,
    Period,
    PeriodTotals,
    ProductQuantity,
)
from src.domain.services.aggregation import (
    DistributionRanking,
    compute_daily_series,
    compute_period_totals,
    compute_product_distribution,
    index_products,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardView:
    """Figures rendered on the dashboard page.

    Attributes:
        period: Month the figures cover, or None for all time.
        totals: Consolidated financial totals.
        daily_series: Gross and net profit per production date.
        distribution: Top products by units produced.
        products_count: Size of the catalog.
    """

    period: Period | None
    totals: PeriodTotals
    daily_series: list[DailyProfit]
    distribution: list[ProductQuantity]
    products_count: int


class GetDashboardUseCase:
    """Aggregate the session collections for one month."""

    def __init__(
        self,
        session: WorkshopSession,
        config: FinancialConfig | None = None,
        logger=None,
        distribution_limit: int = DEFAULT_DISTRIBUTION_LIMIT,
        ranking: DistributionRanking = "quantity",
    ) -> None:
        """Initialize the use case.

        Args:
            session: State holder with the loaded collections.
            config: Tax and currency settings.
            logger: Optional logger compatible with logging.Logger-like API.
            distribution_limit: Number of products in the distribution chart.
            ranking: Ordering rule for the distribution chart.
        """
        self._session = session
        self._config = config or FinancialConfig()
        self._logger = logger or get_app_logger()
        self._distribution_limit = distribution_limit
        self._ranking = ranking

    def execute(self, period: Period | None) -> DashboardView:
        """Return totals, daily series and product mix for ``period``."""
        snapshot = self._session.snapshot
        catalog = index_products(snapshot.products)
        totals = compute_period_totals(
            snapshot.entries,
            catalog,
            snapshot.expenses,
            period,
            self._config,
        )
        daily_series = list(
            compute_daily_series(
                snapshot.entries,
                catalog,
                period,
                self._config,
            )
        )
        distribution = list(
            compute_product_distribution(
                snapshot.entries,
                catalog,
                period,
                limit=self._distribution_limit,
                ranking=self._ranking,
            )
        )
        label = period.key if period else "all time"
        self._logger.info(
            f"Dashboard computed for {label}: entries={totals.logs_count}, "
            f"final_net_profit={totals.final_net_profit}"
        )
        return DashboardView(
            period=period,
            totals=totals,
            daily_series=daily_series,
            distribution=distribution,
            products_count=len(snapshot.products),
        )


__all__ = ["GetDashboardUseCase", "DashboardView"]
