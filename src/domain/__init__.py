"""Domain package for business rules and core models."""

from .constants import DEFAULT_CURRENCY, DEFAULT_TAX_RATE, REMOVED_PRODUCT_NAME
from .models import (
    Category,
    Expense,
    FinancialConfig,
    Period,
    PeriodTotals,
    Product,
    ProductionEntry,
    ProductionReport,
    ReportLine,
)
from .policies import DeletePolicy, round_quantity
from .services import (
    build_production_report,
    compute_daily_series,
    compute_period_totals,
    compute_product_distribution,
    compute_report_line,
    reconcile_invoice_items,
    resolve_unmatched,
    build_entries_from_invoice,
)

__all__ = [
    "Category",
    "Expense",
    "FinancialConfig",
    "Period",
    "PeriodTotals",
    "Product",
    "ProductionEntry",
    "ProductionReport",
    "ReportLine",
    "DEFAULT_CURRENCY",
    "DEFAULT_TAX_RATE",
    "REMOVED_PRODUCT_NAME",
    "DeletePolicy",
    "round_quantity",
    "build_production_report",
    "compute_daily_series",
    "compute_period_totals",
    "compute_product_distribution",
    "compute_report_line",
    "reconcile_invoice_items",
    "resolve_unmatched",
    "build_entries_from_invoice",
]
