"""Database engine helpers for the workshop data store.

The engine is created lazily from ``WORKSHOP_DB_URL`` and reused for the
lifetime of the process. PostgreSQL and SQLite files are both supported by
the schema; an in-memory SQLite URL is accepted for local trials.
"""

import os
from typing import Any

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool, StaticPool

from src.application.ports.database import DatabaseEnginePort

WORKSHOP_DB_URL_ENV = "WORKSHOP_DB_URL"
POOL_SIZE = 5
MAX_OVERFLOW = 5

_workshop_engine: Engine | None = None


def _require_db_url() -> str:
    """Load ``.env`` and return the workshop database URL.

    Raises:
        RuntimeError: If ``WORKSHOP_DB_URL`` is not set.
    """
    dotenv.load_dotenv()
    value = (os.getenv(WORKSHOP_DB_URL_ENV) or "").strip()
    if not value:
        raise RuntimeError(
            f"{WORKSHOP_DB_URL_ENV} is not set; point it at a PostgreSQL "
            "database or a SQLite file"
        )
    return value


def engine_options(db_url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to the backend.

    Streamlit reruns the page on worker threads, so SQLite connections must
    not be bound to the creating thread. An in-memory SQLite database only
    exists on one connection and therefore uses a static pool.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        dict[str, Any]: Pool and driver options.
    """
    url = make_url(db_url)
    options: dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if url.get_backend_name() != "sqlite":
        options.update(
            poolclass=QueuePool,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
        )
        return options

    options["connect_args"] = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    else:
        options.update(
            poolclass=QueuePool,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
        )
    return options


def get_workshop_engine() -> Engine:
    """Return the process-wide engine for the workshop database."""
    global _workshop_engine
    if _workshop_engine is None:
        db_url = _require_db_url()
        _workshop_engine = create_engine(db_url, **engine_options(db_url))
    return _workshop_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort backed by the module-level engine."""

    def get_workshop_engine(self) -> Engine:
        return get_workshop_engine()


__all__ = [
    "WORKSHOP_DB_URL_ENV",
    "engine_options",
    "get_workshop_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
