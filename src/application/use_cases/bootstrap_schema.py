"""Use case creating the workshop tables in an empty database.

Identifiers are text keys generated by the repository, dates are ISO
strings and money is stored as fixed-point numerics, so the same DDL runs on
PostgreSQL and SQLite. No foreign keys are declared: deleting a product
leaves its entries to the configured delete policy.
"""

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.logging.logger import get_app_logger

CREATE_CATEGORIES_SQL = """
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
)
"""

CREATE_PRODUCTS_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    sale_value NUMERIC(12, 2) NOT NULL DEFAULT 0,
    labor_cost NUMERIC(12, 2) NOT NULL DEFAULT 0,
    category_id TEXT
)
"""

CREATE_PRODUCTION_ENTRIES_SQL = """
CREATE TABLE IF NOT EXISTS production_entries (
    id TEXT PRIMARY KEY,
    product_id TEXT NOT NULL,
    date TEXT NOT NULL,
    quantity INTEGER NOT NULL,
    paid BOOLEAN NOT NULL DEFAULT FALSE,
    invoice_number TEXT
)
"""

CREATE_EXPENSES_SQL = """
CREATE TABLE IF NOT EXISTS expenses (
    id TEXT PRIMARY KEY,
    description TEXT NOT NULL,
    value NUMERIC(12, 2) NOT NULL DEFAULT 0,
    date TEXT NOT NULL
)
"""

SCHEMA_STATEMENTS: dict[str, str] = {
    "categories": CREATE_CATEGORIES_SQL,
    "products": CREATE_PRODUCTS_SQL,
    "production_entries": CREATE_PRODUCTION_ENTRIES_SQL,
    "expenses": CREATE_EXPENSES_SQL,
}


@dataclass(frozen=True)
class BootstrapSchemaResult:
    """Result of a schema bootstrap run.

    Attributes:
        tables: Names of the tables ensured, in creation order.
    """

    tables: list[str]


class BootstrapSchemaUseCase:
    """Ensure every workshop table exists."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            db_port: Port providing access to the workshop engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def run(self) -> BootstrapSchemaResult:
        """Create missing tables; existing tables are left untouched.

        Returns:
            BootstrapSchemaResult: Tables that now exist.
        """
        engine = self._db_port.get_workshop_engine()
        tables = self._create_tables(engine)
        self._logger.info(f"Schema ready: {', '.join(tables)}")
        return BootstrapSchemaResult(tables=tables)

    def _create_tables(self, engine: Engine) -> list[str]:
        with engine.begin() as conn:
            for statement in SCHEMA_STATEMENTS.values():
                conn.exec_driver_sql(statement)
        return list(SCHEMA_STATEMENTS)


__all__ = [
    "BootstrapSchemaUseCase",
    "BootstrapSchemaResult",
    "SCHEMA_STATEMENTS",
]
