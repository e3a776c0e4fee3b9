"""Financial aggregation over products, production entries and expenses.

Every function here is pure: inputs are read-only snapshots and outputs are
new value objects. Nothing raises for data-shape reasons; an entry whose
product no longer exists is valued at zero, and a date that cannot be read
simply matches no period.
"""

import calendar
from collections.abc import Iterable, Iterator, Mapping
from datetime import date, timedelta
from decimal import Decimal
from itertools import islice
from typing import Literal

from src.domain.constants import (
    DEFAULT_DISTRIBUTION_LIMIT,
    REMOVED_PRODUCT_NAME,
)
from src.domain.models.entities import Expense, Product, ProductionEntry
from src.domain.models.finance import (
    ZERO,
    DailyProfit,
    FinancialConfig,
    Period,
    PeriodTotals,
    ProductionReport,
    ProductQuantity,
    ReportLine,
)
from src.utils.decimal_utils import coerce_decimal
from src.utils.period_utils import date_key, day_component, parse_year_month

ProductLookup = Mapping[str, Product] | Iterable[Product]
DistributionRanking = Literal["quantity", "insertion"]
QuickRange = Literal["last_week", "current_month"]

DEFAULT_CONFIG = FinancialConfig()


def index_products(products: ProductLookup) -> dict[str, Product]:
    """Return products keyed by id."""
    if isinstance(products, Mapping):
        return dict(products)
    return {product.id: product for product in products}


def compute_tax(
    gross_profit: Decimal,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> Decimal:
    """Return the tax owed on a gross profit; losses are not taxed."""
    if gross_profit > 0:
        return gross_profit * config.tax_rate
    return ZERO


def compute_report_line(
    entry: ProductionEntry,
    products: ProductLookup,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> ReportLine:
    """Enrich one production entry with its financial breakdown.

    Args:
        entry: Production entry to value.
        products: Catalog as a list or an id-keyed mapping.
        config: Tax and currency settings.

    Returns:
        ReportLine: Derived line. Missing products yield zero amounts and
        the removed-product name.
    """
    if isinstance(products, Mapping):
        catalog = products
    else:
        catalog = index_products(products)
    product = catalog.get(entry.product_id)
    if product is None:
        return ReportLine(
            id=entry.id,
            product_id=entry.product_id,
            date=entry.date,
            quantity=entry.quantity,
            product_name=REMOVED_PRODUCT_NAME,
            total_revenue=ZERO,
            total_labor=ZERO,
            gross_profit=ZERO,
            tax_amount=ZERO,
            net_profit=ZERO,
            paid=entry.paid,
            invoice_number=entry.invoice_number,
            product_found=False,
        )

    quantity = entry.quantity
    total_revenue = coerce_decimal(product.sale_value) * quantity
    total_labor = coerce_decimal(product.labor_cost) * quantity
    gross_profit = total_revenue - total_labor
    tax_amount = compute_tax(gross_profit, config)
    return ReportLine(
        id=entry.id,
        product_id=entry.product_id,
        date=entry.date,
        quantity=quantity,
        product_name=product.name,
        total_revenue=total_revenue,
        total_labor=total_labor,
        gross_profit=gross_profit,
        tax_amount=tax_amount,
        net_profit=gross_profit - tax_amount,
        paid=entry.paid,
        invoice_number=entry.invoice_number,
    )


def in_period(value, period: Period | None) -> bool:
    """Return True when a stored date falls in ``period``.

    ``None`` means no filter. Unparsable dates never match a period.
    """
    if period is None:
        return True
    year_month = parse_year_month(value)
    if year_month is None:
        return False
    return year_month == (period.year, period.month)


def filter_entries_by_period(
    entries: Iterable[ProductionEntry],
    period: Period | None,
) -> list[ProductionEntry]:
    """Keep entries whose date year and month match ``period``."""
    return [entry for entry in entries if in_period(entry.date, period)]


def filter_expenses_by_period(
    expenses: Iterable[Expense],
    period: Period | None,
) -> list[Expense]:
    """Keep expenses whose date starts with the ``YYYY-MM`` of ``period``."""
    if period is None:
        return list(expenses)
    return [
        expense
        for expense in expenses
        if date_key(expense.date).startswith(period.key)
    ]


def summarize_lines(
    lines: Iterable[ReportLine],
    expenses: Iterable[Expense],
    config: FinancialConfig = DEFAULT_CONFIG,
) -> PeriodTotals:
    """Reduce report lines and expenses into consolidated totals.

    Args:
        lines: Report lines already scoped to the period or range.
        expenses: Expenses already scoped to the same period or range.
        config: Tax and currency settings.

    Returns:
        PeriodTotals: Sums of every monetary field plus the final balance.
    """
    revenue = ZERO
    labor_cost = ZERO
    gross_profit = ZERO
    tax_amount = ZERO
    total_quantity = 0
    logs_count = 0
    for line in lines:
        revenue += line.total_revenue
        labor_cost += line.total_labor
        gross_profit += line.gross_profit
        tax_amount += line.tax_amount
        total_quantity += line.quantity
        logs_count += 1

    other_expenses = sum(
        (coerce_decimal(expense.value) for expense in expenses),
        start=ZERO,
    )
    production_net_profit = gross_profit - tax_amount
    return PeriodTotals(
        revenue=revenue,
        labor_cost=labor_cost,
        gross_profit=gross_profit,
        tax_amount=tax_amount,
        production_net_profit=production_net_profit,
        total_quantity=total_quantity,
        other_expenses=other_expenses,
        final_net_profit=production_net_profit - other_expenses,
        logs_count=logs_count,
        currency_code=config.currency_code,
    )


def compute_period_totals(
    entries: Iterable[ProductionEntry],
    products: ProductLookup,
    expenses: Iterable[Expense],
    period: Period | None = None,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> PeriodTotals:
    """Compute revenue, labor, tax, net profit and final balance.

    Args:
        entries: All production entries.
        products: Catalog as a list or an id-keyed mapping.
        expenses: All expenses.
        period: Year-month to scope to, or None for everything.
        config: Tax and currency settings.

    Returns:
        PeriodTotals: Totals for the period.
    """
    catalog = index_products(products)
    lines = [
        compute_report_line(entry, catalog, config)
        for entry in filter_entries_by_period(entries, period)
    ]
    return summarize_lines(
        lines,
        filter_expenses_by_period(expenses, period),
        config,
    )


def compute_daily_series(
    entries: Iterable[ProductionEntry],
    products: ProductLookup,
    period: Period | None = None,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> Iterator[DailyProfit]:
    """Yield gross and net profit per production date, ascending.

    Entries whose product is missing are left out of the series.
    """
    catalog = index_products(products)
    gross_by_date: dict[str, Decimal] = {}
    net_by_date: dict[str, Decimal] = {}
    for entry in filter_entries_by_period(entries, period):
        line = compute_report_line(entry, catalog, config)
        if not line.product_found:
            continue
        key = date_key(entry.date)
        gross_by_date[key] = gross_by_date.get(key, ZERO) + line.gross_profit
        net_by_date[key] = net_by_date.get(key, ZERO) + line.net_profit

    for key in sorted(gross_by_date):
        yield DailyProfit(
            day=day_component(key),
            date=key,
            gross_profit=gross_by_date[key],
            net_profit=net_by_date[key],
        )


def compute_product_distribution(
    entries: Iterable[ProductionEntry],
    products: ProductLookup,
    period: Period | None = None,
    limit: int | None = DEFAULT_DISTRIBUTION_LIMIT,
    ranking: DistributionRanking = "quantity",
) -> Iterator[ProductQuantity]:
    """Yield units produced per product name, capped at ``limit`` groups.

    Args:
        entries: All production entries.
        products: Catalog as a list or an id-keyed mapping.
        period: Year-month to scope to, or None for everything.
        limit: Maximum groups to yield; None yields every group.
        ranking: ``quantity`` orders by total units descending with ties
            broken by name; ``insertion`` keeps first-seen order.
    """
    catalog = index_products(products)
    totals: dict[str, int] = {}
    for entry in filter_entries_by_period(entries, period):
        product = catalog.get(entry.product_id)
        if product is None:
            continue
        totals[product.name] = totals.get(product.name, 0) + entry.quantity

    groups = list(totals.items())
    if ranking == "quantity":
        groups.sort(key=lambda item: (-item[1], item[0]))
    if limit is not None:
        groups = list(islice(groups, max(limit, 0)))
    for name, quantity in groups:
        yield ProductQuantity(name=name, quantity=quantity)


def _within_range(value, start_date, end_date) -> bool:
    key = date_key(value)
    start = date_key(start_date) if start_date else ""
    end = date_key(end_date) if end_date else ""
    if start and key < start:
        return False
    if end and key > end:
        return False
    return True


def filter_entries(
    entries: Iterable[ProductionEntry],
    start_date=None,
    end_date=None,
    product_id: str | None = None,
) -> list[ProductionEntry]:
    """Keep entries inside an inclusive date range, optionally one product.

    Empty bounds are unbounded. Dates compare as ISO strings.
    """
    return [
        entry
        for entry in entries
        if _within_range(entry.date, start_date, end_date)
        and (not product_id or entry.product_id == product_id)
    ]


def filter_expenses(
    expenses: Iterable[Expense],
    start_date=None,
    end_date=None,
) -> list[Expense]:
    """Keep expenses inside an inclusive date range."""
    return [
        expense
        for expense in expenses
        if _within_range(expense.date, start_date, end_date)
    ]


def compute_report_lines(
    entries: Iterable[ProductionEntry],
    products: ProductLookup,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> list[ReportLine]:
    """Return report lines ordered by date, newest first."""
    catalog = index_products(products)
    lines = [compute_report_line(entry, catalog, config) for entry in entries]
    return sorted(lines, key=lambda line: date_key(line.date), reverse=True)


def build_production_report(
    entries: Iterable[ProductionEntry],
    products: ProductLookup,
    expenses: Iterable[Expense],
    *,
    start_date=None,
    end_date=None,
    product_id: str | None = None,
    config: FinancialConfig = DEFAULT_CONFIG,
) -> ProductionReport:
    """Build the detailed report used for on-screen tables and exports.

    Expenses are scoped by date range only; the product filter applies to
    production entries.
    """
    lines = compute_report_lines(
        filter_entries(entries, start_date, end_date, product_id),
        products,
        config,
    )
    totals = summarize_lines(
        lines,
        filter_expenses(expenses, start_date, end_date),
        config,
    )
    return ProductionReport(
        lines=lines,
        totals=totals,
        start_date=date_key(start_date) or None,
        end_date=date_key(end_date) or None,
        product_id=product_id or None,
    )


def quick_range(kind: QuickRange, today: date) -> tuple[date, date]:
    """Return the start and end dates of a preset report range."""
    if kind == "last_week":
        return today - timedelta(days=7), today
    last_day = calendar.monthrange(today.year, today.month)[1]
    return (
        date(today.year, today.month, 1),
        date(today.year, today.month, last_day),
    )


__all__ = [
    "DEFAULT_CONFIG",
    "index_products",
    "compute_tax",
    "compute_report_line",
    "in_period",
    "filter_entries_by_period",
    "filter_expenses_by_period",
    "summarize_lines",
    "compute_period_totals",
    "compute_daily_series",
    "compute_product_distribution",
    "filter_entries",
    "filter_expenses",
    "compute_report_lines",
    "build_production_report",
    "quick_range",
]
