"""Domain models for financial aggregates."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import DEFAULT_CURRENCY, DEFAULT_TAX_RATE
from src.domain.models.entities import DateValue

ZERO = Decimal("0")


@dataclass(frozen=True)
class FinancialConfig:
    """Tax and currency settings applied by the aggregation functions.

    Attributes:
        tax_rate: Fraction applied to positive gross profit only.
        currency_code: ISO code used when rendering amounts.
    """

    tax_rate: Decimal = DEFAULT_TAX_RATE
    currency_code: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class Period:
    """Calendar year-month used to scope aggregation."""

    year: int
    month: int

    @property
    def key(self) -> str:
        """Return the ``YYYY-MM`` form of the period."""
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class ReportLine:
    """Production entry enriched with its financial breakdown."""

    id: str
    product_id: str
    date: DateValue
    quantity: int
    product_name: str
    total_revenue: Decimal
    total_labor: Decimal
    gross_profit: Decimal
    tax_amount: Decimal
    net_profit: Decimal
    paid: bool = False
    invoice_number: str | None = None
    product_found: bool = True


@dataclass(frozen=True)
class PeriodTotals:
    """Aggregated financial figures for a set of report lines.

    Attributes:
        revenue: Sum of line revenue.
        labor_cost: Sum of line labor.
        gross_profit: Revenue minus labor.
        tax_amount: Sum of per-line tax (never negative).
        production_net_profit: Gross profit minus tax.
        total_quantity: Units across all lines.
        other_expenses: Sum of expenses in scope.
        final_net_profit: Production net profit minus other expenses.
        logs_count: Number of lines, including removed-product lines.
    """

    revenue: Decimal = ZERO
    labor_cost: Decimal = ZERO
    gross_profit: Decimal = ZERO
    tax_amount: Decimal = ZERO
    production_net_profit: Decimal = ZERO
    total_quantity: int = 0
    other_expenses: Decimal = ZERO
    final_net_profit: Decimal = ZERO
    logs_count: int = 0
    currency_code: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class DailyProfit:
    """Gross and net profit produced on one day of a period."""

    day: str
    date: str
    gross_profit: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class ProductQuantity:
    """Units produced for one product name."""

    name: str
    quantity: int


@dataclass(frozen=True)
class ProductionReport:
    """Report lines and their consolidated totals."""

    lines: list[ReportLine]
    totals: PeriodTotals
    start_date: str | None = None
    end_date: str | None = None
    product_id: str | None = None


__all__ = [
    "ZERO",
    "FinancialConfig",
    "Period",
    "ReportLine",
    "PeriodTotals",
    "DailyProfit",
    "ProductQuantity",
    "ProductionReport",
]
