"""Invoice import flow: parse, reconcile, review and commit.

The flow is a small state machine driven by the invoice page:

    idle -> parsed -> (ready_to_commit | awaiting_labor_input)
    awaiting_labor_input -> ready_to_commit
    ready_to_commit -> committed | failed
    any non-terminal state -> cancelled

Pending items sharing a normalized name are reviewed and created as one
product carrying the summed quantity.

A commit submits every record as an independent request. When one of them
fails, the records already created are deleted in reverse order before the
error is raised.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from src.application.use_cases.workshop_session import WorkshopSession
from src.domain.errors import (
    InvalidTransitionError,
    InvoiceCommitError,
    ValidationError,
    WorkshopError,
)
from src.domain.models.entities import Product, ProductionEntry
from src.domain.models.invoices import (
    InvoiceMeta,
    MatchedItem,
    ParsedInvoice,
    PendingItem,
    ReconciliationResult,
)
from src.domain.policies.rounding import QuantityRounding
from src.domain.services.normalization import normalize_product_name
from src.domain.services.reconciliation import (
    build_entries_from_invoice,
    merge_pending_items,
    missing_labor_costs,
    reconcile_invoice_items,
    resolve_unmatched,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


class ImportState(str, Enum):
    """States of the invoice import flow."""

    IDLE = "idle"
    PARSED = "parsed"
    AWAITING_LABOR_INPUT = "awaiting_labor_input"
    READY_TO_COMMIT = "ready_to_commit"
    COMMITTED = "committed"
    CANCELLED = "cancelled"
    FAILED = "failed"


TERMINAL_STATES = frozenset(
    {ImportState.COMMITTED, ImportState.CANCELLED, ImportState.FAILED}
)


@dataclass(frozen=True)
class ImportCommitResult:
    """Records created by a successful commit."""

    products: list[Product] = field(default_factory=list)
    entries: list[ProductionEntry] = field(default_factory=list)


class InvoiceImportSession:
    """Drive one invoice from parsed document to persisted production."""

    def __init__(
        self,
        session: WorkshopSession,
        logger=None,
        rounding: QuantityRounding = "floor",
        compensate: bool = True,
    ) -> None:
        """Initialize the import flow.

        Args:
            session: State holder used to create products and entries.
            logger: Optional logger compatible with logging.Logger-like API.
            rounding: How fractional invoice quantities become whole units.
            compensate: Whether a failed commit deletes what it created.
        """
        self._session = session
        self._logger = logger or get_app_logger()
        self._rounding = rounding
        self._compensate = compensate
        self._reset()

    def _reset(self) -> None:
        self._state = ImportState.IDLE
        self._invoice: ParsedInvoice | None = None
        self._result: ReconciliationResult | None = None
        self._pending: list[PendingItem] = []
        self._labor_costs: dict[str, Decimal | None] = {}
        self._target_category_id: str | None = None

    @property
    def state(self) -> ImportState:
        return self._state

    @property
    def invoice(self) -> ParsedInvoice | None:
        return self._invoice

    @property
    def matched(self) -> list[MatchedItem]:
        return list(self._result.matched) if self._result else []

    @property
    def pending(self) -> list[PendingItem]:
        return list(self._pending)

    @property
    def labor_costs(self) -> dict[str, Decimal | None]:
        return dict(self._labor_costs)

    @property
    def target_category_id(self) -> str | None:
        return self._target_category_id

    def load(self, invoice: ParsedInvoice) -> ReconciliationResult:
        """Reconcile a parsed invoice against the current catalog.

        Args:
            invoice: Header and items read from the document.

        Returns:
            ReconciliationResult: Matched items and review candidates.

        Raises:
            InvalidTransitionError: If another invoice is still in progress.
        """
        if self._state not in TERMINAL_STATES and self._state != ImportState.IDLE:
            raise InvalidTransitionError(
                f"Cannot load an invoice while {self._state.value}"
            )
        self._reset()
        self._invoice = invoice
        self._state = ImportState.PARSED
        self._result = reconcile_invoice_items(
            invoice.items,
            self._session.snapshot.products,
            self._rounding,
        )
        self._pending = merge_pending_items(self._result.unmatched)
        self._labor_costs = {item.name: None for item in self._pending}
        self._logger.info(
            f"Invoice {invoice.invoice_number} parsed: "
            f"matched={len(self._result.matched)}, "
            f"pending={len(self._pending)}"
        )
        self._advance()
        return self._result

    def set_labor_cost(self, name: str, value) -> None:
        """Record the labor cost chosen for a pending item.

        Names match pending items after trimming and case folding.

        Raises:
            InvalidTransitionError: If no invoice awaits review.
            ValidationError: If ``name`` is not a pending item.
        """
        self._require(ImportState.AWAITING_LABOR_INPUT, ImportState.READY_TO_COMMIT)
        key = self._pending_name(name)
        if key is None:
            raise ValidationError(f"Unknown invoice item: {name}")
        self._labor_costs[key] = None if value is None else coerce_decimal(value)
        self._advance()

    def set_target_category(self, category_id: str | None) -> None:
        """Choose the category assigned to every new product."""
        self._require(
            ImportState.PARSED,
            ImportState.AWAITING_LABOR_INPUT,
            ImportState.READY_TO_COMMIT,
        )
        self._target_category_id = category_id or None

    def cancel(self) -> None:
        """Discard the pending invoice without writing anything."""
        if self._state in TERMINAL_STATES:
            raise InvalidTransitionError(
                f"Cannot cancel an import that is {self._state.value}"
            )
        number = self._invoice.invoice_number if self._invoice else None
        self._reset()
        self._state = ImportState.CANCELLED
        self._logger.info(f"Invoice import cancelled: {number}")

    def commit(self) -> ImportCommitResult:
        """Create new products, then one production entry per item.

        Returns:
            ImportCommitResult: Products and entries created.

        Raises:
            InvalidTransitionError: If the import is not ready to commit.
            InvoiceCommitError: If a write failed; records created before the
                failure have been deleted unless compensation also failed.
        """
        self._require(ImportState.READY_TO_COMMIT)
        requests = resolve_unmatched(
            self._pending,
            self._labor_costs,
            self._target_category_id,
        )
        meta = InvoiceMeta(
            date=self._invoice.date,
            invoice_number=self._invoice.invoice_number,
        )

        products: list[Product] = []
        entries: list[ProductionEntry] = []
        try:
            created = []
            for request, pending in zip(requests, self._pending):
                product = self._session.add_product(request)
                products.append(product)
                created.append(
                    MatchedItem(product_id=product.id, quantity=pending.quantity)
                )
            for request in build_entries_from_invoice(
                self._result.matched,
                created,
                meta,
                logger=self._logger,
            ):
                entries.append(self._session.add_entry(request))
        except WorkshopError as exc:
            self._state = ImportState.FAILED
            compensated = self._rollback(products, entries)
            self._logger.error(
                f"Invoice {meta.invoice_number} commit failed after "
                f"{len(products)} products and {len(entries)} entries: {exc}"
            )
            raise InvoiceCommitError(
                f"Invoice import failed: {exc}",
                cause=exc,
                compensated=compensated,
            ) from exc

        self._state = ImportState.COMMITTED
        self._logger.info(
            f"Invoice {meta.invoice_number} committed: "
            f"products={len(products)}, entries={len(entries)}"
        )
        return ImportCommitResult(products=products, entries=entries)

    def _rollback(
        self,
        products: list[Product],
        entries: list[ProductionEntry],
    ) -> bool:
        if not self._compensate:
            return not products and not entries
        compensated = True
        for entry in reversed(entries):
            try:
                self._session.delete_entry(entry.id)
            except WorkshopError as exc:
                compensated = False
                self._logger.error(f"Could not remove entry id={entry.id}: {exc}")
        for product in reversed(products):
            try:
                self._session.delete_product(product.id, policy="orphan")
            except WorkshopError as exc:
                compensated = False
                self._logger.error(
                    f"Could not remove product id={product.id}: {exc}"
                )
        return compensated

    def _pending_name(self, name: str) -> str | None:
        wanted = normalize_product_name(name)
        for item in self._pending:
            if normalize_product_name(item.name) == wanted:
                return item.name
        return None

    def _advance(self) -> None:
        missing = missing_labor_costs(self.pending, self._labor_costs)
        if missing:
            self._state = ImportState.AWAITING_LABOR_INPUT
        else:
            self._state = ImportState.READY_TO_COMMIT

    def _require(self, *states: ImportState) -> None:
        if self._state not in states:
            allowed = ", ".join(state.value for state in states)
            raise InvalidTransitionError(
                f"Import is {self._state.value}; expected one of: {allowed}"
            )


__all__ = [
    "ImportState",
    "ImportCommitResult",
    "InvoiceImportSession",
]
