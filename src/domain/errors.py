"""Domain-level exceptions."""


class WorkshopError(Exception):
    """Base class for errors surfaced to the dashboard user."""


class PersistenceError(WorkshopError):
    """Raised when the data store rejects a read or write."""


class ValidationError(WorkshopError, ValueError):
    """Raised when a form value is missing or out of range."""


class MissingLaborCostError(WorkshopError, ValueError):
    """Raised when new invoice products lack a non-negative labor cost."""

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        joined = ", ".join(self.names)
        super().__init__(f"Missing labor cost for: {joined}")


class InvoiceParseError(WorkshopError):
    """Raised when an invoice document cannot be read."""


class InvalidTransitionError(WorkshopError):
    """Raised when the invoice import flow is driven out of order."""


class InvoiceCommitError(WorkshopError):
    """Raised when an invoice commit fails part-way through.

    Attributes:
        cause: The persistence error that interrupted the commit.
        compensated: Whether every already-created record was removed.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        compensated: bool = True,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.compensated = compensated


__all__ = [
    "WorkshopError",
    "PersistenceError",
    "ValidationError",
    "MissingLaborCostError",
    "InvoiceParseError",
    "InvalidTransitionError",
    "InvoiceCommitError",
]
