"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.ask_assistant import (
    AskAssistantUseCase,
    AssistantReply,
)
from src.application.use_cases.get_dashboard import (
    DashboardView,
    GetDashboardUseCase,
)
from src.application.use_cases.get_production_report import (
    GetProductionReportUseCase,
)
from src.application.use_cases.import_invoice import (
    ImportState,
    InvoiceImportSession,
)
from src.application.use_cases.workshop_session import WorkshopSession
from src.domain.constants import REMOVED_PRODUCT_NAME
from src.domain.errors import WorkshopError
from src.domain.models.entities import (
    Category,
    NewExpense,
    NewProduct,
    NewProductionEntry,
    Product,
)
from src.domain.models.finance import (
    DailyProfit,
    Period,
    ProductionReport,
    ProductQuantity,
)
from src.domain.services.aggregation import quick_range
from src.infrastructure.container import (
    build_assistant,
    build_invoice_reader,
    build_report_formatters,
    build_session,
    build_settings,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.report_export import report_filename
from src.infrastructure.settings import WorkshopSettings
from src.utils.period_utils import date_key, month_prefix

PAGES = [
    "Dashboard",
    "Products",
    "Categories",
    "Production",
    "Expenses",
    "Reports",
    "Invoice import",
    "Assistant",
]
CURRENCY_SYMBOLS = {"BRL": "R$", "EUR": "€", "USD": "$"}
ALL_PRODUCTS = "All products"
NO_CATEGORY = "Uncategorized"


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Verify that the numpy/pandas stack used by Altair is importable.

    Returns:
        tuple[bool, str | None]: Status flag and an error message if any.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Chart dependencies unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Chart dependencies unavailable: numpy is incomplete."
    if not hasattr(pandas, "Timestamp"):
        return False, "Chart dependencies unavailable: pandas is incomplete."
    return True, None


@st.cache_data(show_spinner=False)
def _load_settings() -> WorkshopSettings:
    """Cached wrapper around build_settings for Streamlit sessions."""
    return build_settings()


def _get_session() -> WorkshopSession:
    """Return the per-browser session, loading the collections once."""
    session = st.session_state.get("workshop_session")
    if session is None:
        session = build_session(settings=_load_settings())
        session.load()
        st.session_state["workshop_session"] = session
    return session


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol} {value:,.2f}"


def _product_label(products: Sequence[Product], product_id: str) -> str:
    for product in products:
        if product.id == product_id:
            return product.name
    return REMOVED_PRODUCT_NAME


def _category_label(categories: Sequence[Category], category_id) -> str:
    for category in categories:
        if category.id == category_id:
            return category.name
    return NO_CATEGORY


def _daily_chart_data(series: Sequence[DailyProfit]) -> list[dict]:
    """Prepare Altair-ready rows for the daily profit chart."""
    data = []
    for point in series:
        data.append(
            {"day": point.day, "kind": "Gross", "amount": float(point.gross_profit)}
        )
        data.append(
            {"day": point.day, "kind": "Net", "amount": float(point.net_profit)}
        )
    return data


def _distribution_chart_data(
    distribution: Sequence[ProductQuantity],
) -> list[dict]:
    """Prepare Altair-ready rows for the product mix donut."""
    return [
        {"product": item.name, "quantity": item.quantity}
        for item in distribution
    ]


def _report_table(report: ProductionReport, currency_code: str) -> list[dict]:
    """Flatten report lines for st.dataframe."""
    return [
        {
            "Date": date_key(line.date),
            "Product": line.product_name,
            "Quantity": line.quantity,
            "Revenue": _format_currency(line.total_revenue, currency_code),
            "Labor": _format_currency(line.total_labor, currency_code),
            "Tax": _format_currency(line.tax_amount, currency_code),
            "Net profit": _format_currency(line.net_profit, currency_code),
            "Invoice": line.invoice_number or "",
            "Paid": "Yes" if line.paid else "No",
        }
        for line in report.lines
    ]


def _render_daily_chart(series: Sequence[DailyProfit]) -> None:
    st.subheader("Profit per day")
    if not series:
        st.info("No production recorded for this month.")
        return
    chart = alt.Chart(alt.Data(values=_daily_chart_data(series))).mark_bar().encode(
        x=alt.X("day:N", title="Day"),
        y=alt.Y("amount:Q", title="Amount"),
        color=alt.Color("kind:N", title=None),
        xOffset="kind:N",
        tooltip=["day:N", "kind:N", "amount:Q"],
    )
    st.altair_chart(chart, width="stretch")


def _render_distribution_chart(distribution: Sequence[ProductQuantity]) -> None:
    st.subheader("Top products")
    if not distribution:
        st.info("No products produced this month.")
        return
    chart = alt.Chart(
        alt.Data(values=_distribution_chart_data(distribution))
    ).mark_arc(innerRadius=60, cornerRadius=6, padAngle=0.02).encode(
        theta=alt.Theta("quantity:Q"),
        color=alt.Color("product:N", legend=alt.Legend(orient="bottom")),
        tooltip=["product:N", "quantity:Q"],
    )
    st.altair_chart(chart, width="stretch")


def _render_dashboard(session: WorkshopSession, settings: WorkshopSettings) -> None:
    today = date.today()
    year_col, month_col = st.columns(2)
    year = year_col.number_input(
        "Year", min_value=2000, max_value=2100, value=today.year, step=1
    )
    month = month_col.selectbox(
        "Month", list(range(1, 13)), index=today.month - 1
    )
    view: DashboardView = GetDashboardUseCase(
        session,
        config=settings.financial_config,
        distribution_limit=settings.distribution_limit,
    ).execute(Period(year=int(year), month=int(month)))
    totals = view.totals
    currency = totals.currency_code

    revenue_col, labor_col, tax_col, net_col = st.columns(4)
    revenue_col.metric("Revenue", _format_currency(totals.revenue, currency))
    labor_col.metric("Labor", _format_currency(totals.labor_cost, currency))
    tax_col.metric("Tax", _format_currency(totals.tax_amount, currency))
    net_col.metric(
        "Final net profit",
        _format_currency(totals.final_net_profit, currency),
    )
    st.caption(
        f"{totals.logs_count} entries, {totals.total_quantity} units, "
        f"other expenses {_format_currency(totals.other_expenses, currency)}, "
        f"{view.products_count} products in catalog"
    )

    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_daily_chart(view.daily_series)
    with chart_right:
        _render_distribution_chart(view.distribution)


def _render_products(session: WorkshopSession, settings: WorkshopSettings) -> None:
    snapshot = session.snapshot
    category_ids = [None, *[category.id for category in snapshot.categories]]
    with st.form("new_product", clear_on_submit=True):
        name = st.text_input("Name")
        sale_value = st.number_input("Sale value", min_value=0.0, step=1.0)
        labor_cost = st.number_input("Labor cost", min_value=0.0, step=1.0)
        category_id = st.selectbox(
            "Category",
            category_ids,
            format_func=lambda value: _category_label(snapshot.categories, value),
        )
        if st.form_submit_button("Add product"):
            session.add_product(
                NewProduct(
                    name=name,
                    sale_value=Decimal(str(sale_value)),
                    labor_cost=Decimal(str(labor_cost)),
                    category_id=category_id,
                )
            )
            st.success(f"Product {name} added.")

    currency = settings.currency_code
    st.dataframe(
        [
            {
                "Name": product.name,
                "Category": _category_label(
                    snapshot.categories, product.category_id
                ),
                "Sale value": _format_currency(product.sale_value, currency),
                "Labor cost": _format_currency(product.labor_cost, currency),
                "Unit margin": _format_currency(product.unit_margin, currency),
            }
            for product in session.snapshot.products
        ],
        width="stretch",
        hide_index=True,
    )
    if not session.snapshot.products:
        return
    selected = st.selectbox(
        "Edit product",
        [product.id for product in session.snapshot.products],
        format_func=lambda value: _product_label(session.snapshot.products, value),
    )
    product = next(p for p in session.snapshot.products if p.id == selected)
    new_sale = st.number_input(
        "New sale value", min_value=0.0, value=float(product.sale_value)
    )
    new_labor = st.number_input(
        "New labor cost", min_value=0.0, value=float(product.labor_cost)
    )
    save_col, delete_col = st.columns(2)
    if save_col.button("Save changes"):
        session.update_product(
            product.id,
            {
                "sale_value": Decimal(str(new_sale)),
                "labor_cost": Decimal(str(new_labor)),
            },
        )
        st.success("Product updated.")
    if delete_col.button("Delete product"):
        removed = session.delete_product(product.id)
        st.success(f"Product deleted with {len(removed)} production entries.")


def _render_categories(session: WorkshopSession, settings: WorkshopSettings) -> None:
    with st.form("new_category", clear_on_submit=True):
        name = st.text_input("Category name")
        if st.form_submit_button("Add category"):
            session.add_category(name)
            st.success(f"Category {name} added.")
    categories = session.snapshot.categories
    if not categories:
        st.info("No categories yet.")
        return
    for category in categories:
        count = sum(
            1 for product in session.snapshot.products
            if product.category_id == category.id
        )
        name_col, count_col, delete_col = st.columns(3)
        name_col.write(category.name)
        count_col.caption(f"{count} products")
        if delete_col.button("Delete", key=f"delete_category_{category.id}"):
            session.delete_category(category.id)
            st.success(f"Category {category.name} deleted.")


def _render_production(session: WorkshopSession, settings: WorkshopSettings) -> None:
    products = session.snapshot.products
    if not products:
        st.warning("Add a product before recording production.")
        return
    with st.form("new_entry", clear_on_submit=True):
        product_id = st.selectbox(
            "Product",
            [product.id for product in products],
            format_func=lambda value: _product_label(products, value),
        )
        entry_date = st.date_input("Date", value=date.today())
        quantity = st.number_input("Quantity", min_value=1, step=1, value=1)
        invoice_number = st.text_input("Invoice number")
        if st.form_submit_button("Record production"):
            session.add_entry(
                NewProductionEntry(
                    product_id=product_id,
                    date=date_key(entry_date),
                    quantity=int(quantity),
                    invoice_number=invoice_number.strip() or None,
                )
            )
            st.success("Production recorded.")

    entries = sorted(
        session.snapshot.entries,
        key=lambda entry: date_key(entry.date),
        reverse=True,
    )
    for entry in entries:
        label_col, paid_col, delete_col = st.columns([4, 1, 1])
        label_col.write(
            f"{date_key(entry.date)} · {_product_label(products, entry.product_id)}"
            f" × {entry.quantity}"
            + (f" · NF {entry.invoice_number}" if entry.invoice_number else "")
        )
        paid = paid_col.checkbox("Paid", value=entry.paid, key=f"paid_{entry.id}")
        if paid != entry.paid:
            session.set_entry_paid(entry.id, paid)
        if delete_col.button("Delete", key=f"delete_entry_{entry.id}"):
            session.delete_entry(entry.id)
            st.success("Entry deleted.")


def _render_expenses(session: WorkshopSession, settings: WorkshopSettings) -> None:
    today = date.today()
    with st.form("new_expense", clear_on_submit=True):
        description = st.text_input("Description")
        value = st.number_input("Value", min_value=0.0, step=1.0)
        month = st.selectbox("Month", list(range(1, 13)), index=today.month - 1)
        year = st.number_input(
            "Year", min_value=2000, max_value=2100, value=today.year, step=1
        )
        if st.form_submit_button("Add expense"):
            session.add_expense(
                NewExpense(
                    description=description,
                    value=Decimal(str(value)),
                    date=f"{month_prefix(int(year), int(month))}-01",
                )
            )
            st.success("Expense added.")

    for expense in sorted(
        session.snapshot.expenses,
        key=lambda item: date_key(item.date),
        reverse=True,
    ):
        label_col, delete_col = st.columns([5, 1])
        label_col.write(
            f"{date_key(expense.date)[:7]} · {expense.description} · "
            f"{_format_currency(expense.value, settings.currency_code)}"
        )
        if delete_col.button("Delete", key=f"delete_expense_{expense.id}"):
            session.delete_expense(expense.id)
            st.success("Expense deleted.")


def _render_reports(session: WorkshopSession, settings: WorkshopSettings) -> None:
    today = date.today()
    preset = st.radio(
        "Range",
        ["Current month", "Last week", "Custom"],
        horizontal=True,
    )
    if preset == "Custom":
        start_col, end_col = st.columns(2)
        start_date = start_col.date_input("Start", value=date(today.year, 1, 1))
        end_date = end_col.date_input("End", value=today)
    else:
        kind = "last_week" if preset == "Last week" else "current_month"
        start_date, end_date = quick_range(kind, today)
    products = session.snapshot.products
    product_id = st.selectbox(
        "Product",
        [None, *[product.id for product in products]],
        format_func=lambda value: (
            ALL_PRODUCTS if value is None else _product_label(products, value)
        ),
    )
    use_case = GetProductionReportUseCase(
        session, config=settings.financial_config
    )
    report = use_case.execute(start_date, end_date, product_id)
    currency = report.totals.currency_code
    st.dataframe(
        _report_table(report, currency),
        width="stretch",
        hide_index=True,
    )
    totals = report.totals
    first, second, third = st.columns(3)
    first.metric("Revenue", _format_currency(totals.revenue, currency))
    second.metric(
        "Other expenses", _format_currency(totals.other_expenses, currency)
    )
    third.metric(
        "Final net profit", _format_currency(totals.final_net_profit, currency)
    )

    for formatter in build_report_formatters(settings).values():
        st.download_button(
            f"Download {formatter.extension.upper()}",
            data=use_case.export(report, formatter),
            file_name=report_filename(formatter.extension, today),
            mime=formatter.mime_type,
        )


def _get_import_session(
    session: WorkshopSession,
    settings: WorkshopSettings,
) -> InvoiceImportSession:
    flow = st.session_state.get("invoice_import")
    if flow is None:
        flow = InvoiceImportSession(
            session, rounding=settings.quantity_rounding
        )
        st.session_state["invoice_import"] = flow
    return flow


def _render_invoice_import(
    session: WorkshopSession,
    settings: WorkshopSettings,
) -> None:
    flow = _get_import_session(session, settings)
    upload = st.file_uploader("NF-e XML", type=["xml"])
    if upload is not None and st.button("Read invoice"):
        flow.load(build_invoice_reader().read(upload.getvalue()))

    if flow.state in (ImportState.IDLE, ImportState.CANCELLED):
        st.info("Upload an NF-e file to import production.")
        return
    if flow.state == ImportState.COMMITTED:
        st.success("Invoice imported.")
        return
    if flow.state == ImportState.FAILED:
        st.error("The last import failed. Upload the invoice again.")
        return

    invoice = flow.invoice
    st.caption(
        f"Invoice {invoice.invoice_number} of {date_key(invoice.date)}: "
        f"{len(flow.matched)} matched items, {len(flow.pending)} new products"
    )
    categories = session.snapshot.categories
    flow.set_target_category(
        st.selectbox(
            "Category for new products",
            [None, *[category.id for category in categories]],
            format_func=lambda value: _category_label(categories, value),
        )
    )
    for item in flow.pending:
        labor = st.number_input(
            f"Labor cost for {item.name} "
            f"({_format_currency(item.unit_price, settings.currency_code)})",
            min_value=0.0,
            value=None,
            key=f"labor_{item.name}",
        )
        flow.set_labor_cost(item.name, labor)

    commit_col, cancel_col = st.columns(2)
    if commit_col.button(
        "Import",
        disabled=flow.state != ImportState.READY_TO_COMMIT,
    ):
        result = flow.commit()
        st.success(
            f"Created {len(result.products)} products and "
            f"{len(result.entries)} production entries."
        )
    if cancel_col.button("Cancel"):
        flow.cancel()


def _ask(
    session: WorkshopSession,
    settings: WorkshopSettings,
    question: str,
) -> AssistantReply:
    """Ask the assistant about the current collections."""
    snapshot = session.snapshot
    use_case = AskAssistantUseCase(
        build_assistant(), config=settings.financial_config
    )
    return use_case.execute(
        question,
        snapshot.products,
        snapshot.entries,
        snapshot.expenses,
    )


def _render_assistant(session: WorkshopSession, settings: WorkshopSettings) -> None:
    history = st.session_state.setdefault("assistant_history", [])
    for role, content in history:
        with st.chat_message(role):
            st.markdown(content)
    question = st.chat_input("Ask about production, margins or expenses")
    if not question:
        return
    history.append(("user", question))
    with st.chat_message("user"):
        st.markdown(question)
    with st.spinner("Analyzing..."):
        reply = _ask(session, settings, question)
    history.append(("assistant", reply.content))
    with st.chat_message("assistant"):
        st.markdown(reply.content)


RENDERERS = {
    "Dashboard": _render_dashboard,
    "Products": _render_products,
    "Categories": _render_categories,
    "Production": _render_production,
    "Expenses": _render_expenses,
    "Reports": _render_reports,
    "Invoice import": _render_invoice_import,
    "Assistant": _render_assistant,
}


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Workshop Dashboard", layout="wide")
    st.title("Workshop Dashboard")

    page = st.sidebar.selectbox("Page", PAGES)
    get_usage_logger().info(f"Page viewed: {page}")
    try:
        settings = _load_settings()
        session = _get_session()
        RENDERERS[page](session, settings)
    except WorkshopError as exc:
        st.error(str(exc))
    except RuntimeError as exc:
        st.error(f"Configuration error: {exc}")


if __name__ == "__main__":  # pragma: no cover
    main()
