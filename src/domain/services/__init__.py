"""Domain services package."""

from .aggregation import (
    build_production_report,
    compute_daily_series,
    compute_period_totals,
    compute_product_distribution,
    compute_report_line,
    compute_report_lines,
    filter_entries,
    filter_expenses,
    quick_range,
    summarize_lines,
)
from .assistant_snapshot import build_assistant_snapshot
from .normalization import normalize_invoice_number, normalize_product_name
from .reconciliation import (
    build_entries_from_invoice,
    merge_pending_items,
    missing_labor_costs,
    reconcile_invoice_items,
    resolve_unmatched,
)
from .validation import warn_negative_margins

__all__ = [
    "build_production_report",
    "compute_daily_series",
    "compute_period_totals",
    "compute_product_distribution",
    "compute_report_line",
    "compute_report_lines",
    "filter_entries",
    "filter_expenses",
    "quick_range",
    "summarize_lines",
    "build_assistant_snapshot",
    "normalize_invoice_number",
    "normalize_product_name",
    "build_entries_from_invoice",
    "merge_pending_items",
    "missing_labor_costs",
    "reconcile_invoice_items",
    "resolve_unmatched",
    "warn_negative_margins",
]
