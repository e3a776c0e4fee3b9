"""Render production reports as Excel workbooks and PDF documents."""

import io
from datetime import date, datetime

from openpyxl import Workbook
from openpyxl.styles import Font
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from src.domain.models.finance import FinancialConfig, ProductionReport
from src.utils.decimal_utils import (
    decimal_to_float,
    format_percent,
    quantize_money,
)
from src.utils.period_utils import date_key

REPORT_TITLE = "Detailed production report"
LINE_HEADERS = [
    "ID",
    "Date",
    "Product",
    "Quantity",
    "Revenue",
    "Labor",
    "Gross profit",
    "Net profit",
]
PDF_HEADERS = [
    "ID",
    "Date",
    "Product",
    "Qty",
    "Revenue",
    "Labor",
    "Gross profit",
    "Net profit",
]
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIME = "application/pdf"


def report_filename(extension: str, today: date | None = None) -> str:
    """Return the download name for a report exported on ``today``."""
    stamp = (today or date.today()).isoformat()
    return f"production_report_{stamp}.{extension.lstrip('.')}"


def _summary_rows(report: ProductionReport, tax_rate) -> list[tuple[str, object]]:
    totals = report.totals
    return [
        ("Revenue", totals.revenue),
        ("Labor", totals.labor_cost),
        ("Gross profit", totals.gross_profit),
        (f"Tax ({format_percent(tax_rate)})", totals.tax_amount),
        ("Other expenses", totals.other_expenses),
        ("Final net profit", totals.final_net_profit),
    ]


def _money(value, currency_code: str) -> str:
    return f"{currency_code} {quantize_money(value):,.2f}"


def _pdf_line_rows(report: ProductionReport, currency: str) -> list[list[str]]:
    rows = [list(PDF_HEADERS)]
    for line in report.lines:
        rows.append(
            [
                line.id[:8],
                date_key(line.date),
                line.product_name,
                str(line.quantity),
                _money(line.total_revenue, currency),
                _money(line.total_labor, currency),
                _money(line.gross_profit, currency),
                _money(line.net_profit, currency),
            ]
        )
    return rows


def export_report_xlsx(
    report: ProductionReport,
    config: FinancialConfig | None = None,
) -> bytes:
    """Write report lines and a summary sheet into an XLSX workbook.

    Args:
        report: Lines and totals to export.
        config: Tax settings used to label the tax row.

    Returns:
        bytes: Workbook contents.
    """
    config = config or FinancialConfig()
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Production"
    sheet.append(LINE_HEADERS)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for line in report.lines:
        sheet.append(
            [
                line.id,
                date_key(line.date),
                line.product_name,
                line.quantity,
                decimal_to_float(line.total_revenue),
                decimal_to_float(line.total_labor),
                decimal_to_float(line.gross_profit),
                decimal_to_float(line.net_profit),
            ]
        )

    summary = workbook.create_sheet("Summary")
    summary.append(["Item", f"Amount ({report.totals.currency_code})"])
    for cell in summary[1]:
        cell.font = Font(bold=True)
    for label, amount in _summary_rows(report, config.tax_rate):
        summary.append([label, decimal_to_float(amount)])
    summary.append(["Entries", report.totals.logs_count])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_report_pdf(
    report: ProductionReport,
    title: str = REPORT_TITLE,
    config: FinancialConfig | None = None,
    generated_at: datetime | None = None,
) -> bytes:
    """Lay out report lines and the consolidated block in a PDF.

    Args:
        report: Lines and totals to export.
        title: Heading printed above the table.
        config: Tax settings used to label the tax row.
        generated_at: Timestamp printed under the heading.

    Returns:
        bytes: PDF document contents.
    """
    config = config or FinancialConfig()
    currency = report.totals.currency_code
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        rightMargin=26,
        leftMargin=26,
        topMargin=26,
        bottomMargin=26,
    )
    styles = getSampleStyleSheet()
    story = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Generated at {stamp}", styles["Normal"]),
    ]
    if report.start_date or report.end_date:
        story.append(
            Paragraph(
                f"Range: {report.start_date or '...'} to {report.end_date or '...'}",
                styles["Normal"],
            )
        )
    story.append(Spacer(1, 12))

    lines_table = Table(_pdf_line_rows(report, currency), repeatRows=1)
    lines_table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.35, colors.grey),
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
                ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
            ]
        )
    )
    story.append(lines_table)
    story.append(Spacer(1, 18))

    story.append(Paragraph("Financial summary", styles["Heading2"]))
    summary_rows = [
        [label, _money(amount, currency)]
        for label, amount in _summary_rows(report, config.tax_rate)
    ]
    summary_table = Table(summary_rows)
    summary_table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.35, colors.grey),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ]
        )
    )
    story.append(summary_table)
    doc.build(story)
    return buffer.getvalue()


class XlsxReportFormatter:
    """ReportFormatterPort producing Excel workbooks."""

    extension = "xlsx"
    mime_type = XLSX_MIME

    def __init__(self, config: FinancialConfig | None = None) -> None:
        self._config = config

    def render(self, report: ProductionReport) -> bytes:
        return export_report_xlsx(report, config=self._config)


class PdfReportFormatter:
    """ReportFormatterPort producing PDF documents."""

    extension = "pdf"
    mime_type = PDF_MIME

    def __init__(
        self,
        config: FinancialConfig | None = None,
        title: str = REPORT_TITLE,
    ) -> None:
        self._config = config
        self._title = title

    def render(self, report: ProductionReport) -> bytes:
        return export_report_pdf(report, title=self._title, config=self._config)


__all__ = [
    "report_filename",
    "export_report_xlsx",
    "export_report_pdf",
    "XlsxReportFormatter",
    "PdfReportFormatter",
]
