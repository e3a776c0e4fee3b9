"""Database ports for the workshop dashboard.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide a
concrete adapter that satisfies this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine backing the workshop data store.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_workshop_engine(self) -> Engine:
        """Get the engine for the workshop database.

        Returns:
            Engine: SQLAlchemy engine connected to the workshop backend.
        """


__all__ = ["DatabaseEnginePort"]
