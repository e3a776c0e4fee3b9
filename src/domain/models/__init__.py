"""Domain models package."""

from .entities import (
    Category,
    Expense,
    NewCategory,
    NewExpense,
    NewProduct,
    NewProductionEntry,
    Product,
    ProductionEntry,
)
from .finance import (
    DailyProfit,
    FinancialConfig,
    Period,
    PeriodTotals,
    ProductionReport,
    ProductQuantity,
    ReportLine,
)
from .invoices import (
    InvoiceItem,
    InvoiceMeta,
    MatchedItem,
    ParsedInvoice,
    PendingItem,
    ReconciliationResult,
)

__all__ = [
    "Category",
    "Product",
    "ProductionEntry",
    "Expense",
    "NewCategory",
    "NewProduct",
    "NewProductionEntry",
    "NewExpense",
    "FinancialConfig",
    "Period",
    "ReportLine",
    "PeriodTotals",
    "DailyProfit",
    "ProductQuantity",
    "ProductionReport",
    "InvoiceItem",
    "ParsedInvoice",
    "InvoiceMeta",
    "MatchedItem",
    "PendingItem",
    "ReconciliationResult",
]
