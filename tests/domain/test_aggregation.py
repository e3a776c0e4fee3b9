"""Tests for the financial aggregation functions."""

from datetime import date
from decimal import Decimal

from src.domain.constants import REMOVED_PRODUCT_NAME
from src.domain.models.entities import Expense, Product, ProductionEntry
from src.domain.models.finance import FinancialConfig, Period
from src.domain.services import aggregation

CUSHION = Product(
    id="p1",
    name="Cushion",
    sale_value=Decimal("50"),
    labor_cost=Decimal("20"),
)
CURTAIN = Product(
    id="p2",
    name="Curtain",
    sale_value=Decimal("10"),
    labor_cost=Decimal("20"),
)
MONEY_FIELDS = (
    "revenue",
    "labor_cost",
    "gross_profit",
    "tax_amount",
    "production_net_profit",
    "other_expenses",
    "final_net_profit",
)


def _entry(entry_id, product_id, entry_date, quantity, **kwargs):
    return ProductionEntry(
        id=entry_id,
        product_id=product_id,
        date=entry_date,
        quantity=quantity,
        **kwargs,
    )


def test_report_line_for_profitable_entry():
    """A positive gross profit is taxed at 7.5%."""
    line = aggregation.compute_report_line(
        _entry("e1", "p1", "2025-03-10", 10),
        [CUSHION],
    )

    assert line.product_name == "Cushion"
    assert line.total_revenue == Decimal("500")
    assert line.total_labor == Decimal("200")
    assert line.gross_profit == Decimal("300")
    assert line.tax_amount == Decimal("22.5")
    assert line.net_profit == Decimal("277.5")
    assert line.product_found is True


def test_report_line_for_loss_is_untaxed():
    """A negative gross profit produces zero tax."""
    line = aggregation.compute_report_line(
        _entry("e1", "p2", "2025-03-10", 10),
        {"p2": CURTAIN},
    )

    assert line.gross_profit == Decimal("-100")
    assert line.tax_amount == Decimal("0")
    assert line.net_profit == Decimal("-100")


def test_report_line_for_missing_product_is_zero_valued():
    """Entries of deleted products stay visible with zero amounts."""
    entry = _entry("e9", "gone", "2025-03-10", 4, paid=True)

    line = aggregation.compute_report_line(entry, [CUSHION])

    assert line.id == "e9"
    assert line.quantity == 4
    assert line.paid is True
    assert line.product_name == REMOVED_PRODUCT_NAME
    assert line.product_found is False
    for field in (
        "total_revenue",
        "total_labor",
        "gross_profit",
        "tax_amount",
        "net_profit",
    ):
        assert getattr(line, field) == Decimal("0")


def test_custom_tax_rate_is_applied():
    """The tax rate comes from the financial config."""
    config = FinancialConfig(tax_rate=Decimal("0.10"), currency_code="EUR")

    line = aggregation.compute_report_line(
        _entry("e1", "p1", "2025-03-10", 1),
        [CUSHION],
        config,
    )

    assert line.tax_amount == Decimal("3.00")
    assert line.net_profit == Decimal("27.00")


def test_period_totals_subtract_expenses_of_the_month():
    """Final balance is production net profit minus period expenses."""
    entries = [
        _entry("e1", "p1", "2025-03-02", 5),
        _entry("e2", "p1", "2025-03-20", 3),
        _entry("e3", "p1", "2025-04-01", 7),
    ]
    expenses = [
        Expense(id="x1", description="Rent", value=Decimal("50"), date="2025-03-01"),
        Expense(id="x2", description="Power", value=Decimal("30"), date="2025-04-01"),
    ]

    totals = aggregation.compute_period_totals(
        entries,
        [CUSHION],
        expenses,
        Period(2025, 3),
    )

    assert totals.revenue == Decimal("400")
    assert totals.gross_profit == Decimal("240")
    assert totals.tax_amount == Decimal("18.0")
    assert totals.production_net_profit == Decimal("222.0")
    assert totals.other_expenses == Decimal("50")
    assert totals.final_net_profit == Decimal("172.0")
    assert totals.total_quantity == 8
    assert totals.logs_count == 2
    assert totals.currency_code == "BRL"


def test_period_totals_count_removed_product_entries():
    """Removed-product entries add to the count but not to the money."""
    entries = [
        _entry("e1", "p1", "2025-03-02", 1),
        _entry("e2", "gone", "2025-03-03", 9),
    ]

    totals = aggregation.compute_period_totals(
        entries, [CUSHION], [], Period(2025, 3)
    )

    assert totals.logs_count == 2
    assert totals.revenue == Decimal("50")


def test_expense_period_filter_by_month_prefix():
    """An expense dated on the first day belongs to that month only."""
    expense = Expense(
        id="x1", description="Rent", value=Decimal("10"), date="2025-03-01"
    )

    assert aggregation.filter_expenses_by_period([expense], Period(2025, 3)) == [
        expense
    ]
    assert aggregation.filter_expenses_by_period([expense], Period(2025, 4)) == []


def test_period_filter_scans_full_year_without_false_matches():
    """Each month only sees the entry dated in that month."""
    entries = [
        _entry(f"e{month}", "p1", f"2025-{month:02d}-15", month)
        for month in range(1, 13)
    ]
    entries.append(_entry("bad", "p1", "not-a-date", 100))
    entries.append(_entry("other", "p1", date(2024, 6, 15), 100))

    for month in range(1, 13):
        kept = aggregation.filter_entries_by_period(entries, Period(2025, month))
        assert [entry.id for entry in kept] == [f"e{month}"]
        series = list(
            aggregation.compute_daily_series(entries, [CUSHION], Period(2025, month))
        )
        assert [point.date for point in series] == [f"2025-{month:02d}-15"]


def test_totals_are_linear_over_partitions():
    """Totals of two disjoint subsets add up to the totals of the union."""
    entries = [
        _entry("e1", "p1", "2025-03-01", 3),
        _entry("e2", "p2", "2025-03-02", 4),
        _entry("e3", "p1", "2025-03-03", 2),
        _entry("e4", "gone", "2025-03-04", 5),
    ]
    products = [CUSHION, CURTAIN]
    period = Period(2025, 3)

    first = aggregation.compute_period_totals(entries[:2], products, [], period)
    second = aggregation.compute_period_totals(entries[2:], products, [], period)
    union = aggregation.compute_period_totals(entries, products, [], period)

    for field in MONEY_FIELDS:
        assert getattr(first, field) + getattr(second, field) == getattr(
            union, field
        )


def test_net_profit_identity_and_tax_floor():
    """Every line satisfies net = gross - tax and tax >= 0."""
    entries = [
        _entry(str(quantity), product.id, "2025-03-01", quantity)
        for quantity in range(1, 6)
        for product in (CUSHION, CURTAIN)
    ]

    lines = aggregation.compute_report_lines(entries, [CUSHION, CURTAIN])

    for line in lines:
        assert line.net_profit == line.gross_profit - line.tax_amount
        assert line.tax_amount >= 0
        if line.gross_profit <= 0:
            assert line.tax_amount == 0


def test_recomputation_is_idempotent():
    """Identical inputs give identical outputs."""
    entries = (
        _entry("e1", "p1", "2025-03-01", 3),
        _entry("e2", "p2", "2025-03-02", 4),
    )

    first = aggregation.compute_period_totals(entries, (CUSHION, CURTAIN), ())
    second = aggregation.compute_period_totals(entries, (CUSHION, CURTAIN), ())

    assert first == second


def test_daily_series_sums_per_day_and_skips_missing_products():
    """Daily points are ascending and ignore removed products."""
    entries = [
        _entry("e1", "p1", "2025-03-05", 1),
        _entry("e2", "p1", "2025-03-02", 2),
        _entry("e3", "p1", "2025-03-05", 1),
        _entry("e4", "gone", "2025-03-07", 1),
    ]

    series = list(
        aggregation.compute_daily_series(entries, [CUSHION], Period(2025, 3))
    )

    assert [point.day for point in series] == ["02", "05"]
    assert series[1].gross_profit == Decimal("60")
    assert series[1].net_profit == Decimal("55.5")


def test_distribution_ranks_by_quantity_with_name_tie_break():
    """Top products are ordered by units, then by name."""
    products = [
        Product(id=str(i), name=name, sale_value=Decimal("1"), labor_cost=Decimal("0"))
        for i, name in enumerate(["F", "E", "D", "C", "B", "A"])
    ]
    quantities = [1, 2, 3, 3, 9, 5]
    entries = [
        _entry(f"e{i}", str(i), "2025-03-01", quantity)
        for i, quantity in enumerate(quantities)
    ]

    ranked = list(aggregation.compute_product_distribution(entries, products))
    ordered = list(
        aggregation.compute_product_distribution(
            entries, products, ranking="insertion"
        )
    )

    assert [(item.name, item.quantity) for item in ranked] == [
        ("B", 9),
        ("A", 5),
        ("C", 3),
        ("D", 3),
        ("E", 2),
    ]
    assert [item.name for item in ordered] == ["F", "E", "D", "C", "B"]


def test_distribution_merges_products_sharing_a_name():
    """Groups are keyed by product name."""
    twin = Product(
        id="p3", name="Cushion", sale_value=Decimal("1"), labor_cost=Decimal("0")
    )
    entries = [
        _entry("e1", "p1", "2025-03-01", 2),
        _entry("e2", "p3", "2025-03-01", 3),
        _entry("e3", "gone", "2025-03-01", 3),
    ]

    result = list(
        aggregation.compute_product_distribution(entries, [CUSHION, twin], limit=None)
    )

    assert [(item.name, item.quantity) for item in result] == [("Cushion", 5)]


def test_production_report_filters_and_sorts_newest_first():
    """Range and product filters apply to entries; expenses by range only."""
    entries = [
        _entry("e1", "p1", "2025-03-01", 1),
        _entry("e2", "p2", "2025-03-10", 1),
        _entry("e3", "p1", "2025-03-20", 1),
        _entry("e4", "p1", "2025-04-02", 1),
    ]
    expenses = [
        Expense(id="x1", description="Rent", value=Decimal("5"), date="2025-03-01"),
        Expense(id="x2", description="Gas", value=Decimal("7"), date="2025-05-01"),
    ]

    report = aggregation.build_production_report(
        entries,
        [CUSHION, CURTAIN],
        expenses,
        start_date=date(2025, 3, 1),
        end_date="2025-03-31",
        product_id="p1",
    )

    assert [line.id for line in report.lines] == ["e3", "e1"]
    assert report.totals.other_expenses == Decimal("5")
    assert report.start_date == "2025-03-01"
    assert report.end_date == "2025-03-31"
    assert report.product_id == "p1"


def test_production_report_without_filters_includes_everything():
    """Empty bounds and product mean no filtering."""
    entries = [_entry("e1", "gone", "2024-01-01", 1)]

    report = aggregation.build_production_report(entries, [], [])

    assert len(report.lines) == 1
    assert report.start_date is None
    assert report.totals.logs_count == 1


def test_quick_ranges():
    """Last week spans seven days back; current month spans the month."""
    today = date(2024, 2, 10)

    assert aggregation.quick_range("last_week", today) == (
        date(2024, 2, 3),
        today,
    )
    assert aggregation.quick_range("current_month", today) == (
        date(2024, 2, 1),
        date(2024, 2, 29),
    )


def test_summarize_lines_reduces_mixed_margins():
    """Losses lower gross profit but are never taxed back."""
    config = FinancialConfig(currency_code="EUR")
    lines = [
        aggregation.compute_report_line(
            _entry("e1", "p1", "2025-05-02", 2), [CUSHION], config
        ),
        aggregation.compute_report_line(
            _entry("e2", "p2", "2025-05-03", 1), [CURTAIN], config
        ),
    ]
    expenses = [Expense("x1", "Thread", Decimal("25"), "2025-05-04")]

    totals = aggregation.summarize_lines(lines, expenses, config)

    assert totals.revenue == Decimal("110")
    assert totals.labor_cost == Decimal("60")
    assert totals.gross_profit == Decimal("50")
    assert totals.tax_amount == Decimal("4.5")
    assert totals.production_net_profit == Decimal("45.5")
    assert totals.other_expenses == Decimal("25")
    assert totals.final_net_profit == Decimal("20.5")
    assert totals.total_quantity == 3
    assert totals.logs_count == 2
    assert totals.currency_code == "EUR"


def test_month_only_dates_match_their_period():
    """Rows stored as YYYY-MM belong to that month and no other."""
    entries = [_entry("e1", "p1", "2025-03", 2)]
    expenses = [Expense("x1", "Rent", Decimal("30"), "2025-03")]

    march = aggregation.compute_period_totals(
        entries, [CUSHION], expenses, Period(2025, 3)
    )
    april = aggregation.compute_period_totals(
        entries, [CUSHION], expenses, Period(2025, 4)
    )

    assert march.logs_count == 1
    assert march.revenue == Decimal("100")
    assert march.other_expenses == Decimal("30")
    assert march.final_net_profit == Decimal("25.5")
    assert april.logs_count == 0
    assert april.revenue == Decimal("0")
    assert april.other_expenses == Decimal("0")


def test_break_even_line_is_counted_without_tax():
    """Zero gross profit owes no tax and still counts as a log."""
    sheet = Product(
        id="p3",
        name="Lençol",
        sale_value=Decimal("20"),
        labor_cost=Decimal("20"),
    )
    entries = [_entry("e1", "p3", "2025-06-01", 4)]

    line = aggregation.compute_report_line(entries[0], [sheet])
    totals = aggregation.compute_period_totals(
        entries, [sheet], [], Period(2025, 6)
    )

    assert line.gross_profit == Decimal("0")
    assert line.tax_amount == Decimal("0")
    assert line.net_profit == Decimal("0")
    assert totals.logs_count == 1
    assert totals.total_quantity == 4
    assert totals.tax_amount == Decimal("0")
    assert totals.final_net_profit == Decimal("0")
