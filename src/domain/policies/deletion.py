"""What happens to production entries when their product is deleted.

``cascade`` deletes the dependent entries along with the product.
``orphan`` keeps them; they render as removed-product lines with zero value.
"""

from collections.abc import Iterable
from typing import Literal

from src.domain.models.entities import ProductionEntry

DeletePolicy = Literal["cascade", "orphan"]
DELETE_POLICIES: tuple[str, ...] = ("cascade", "orphan")


def dependent_entries(
    entries: Iterable[ProductionEntry],
    product_id: str,
) -> list[ProductionEntry]:
    """Return the entries referencing ``product_id``."""
    return [entry for entry in entries if entry.product_id == product_id]


__all__ = ["DeletePolicy", "DELETE_POLICIES", "dependent_entries"]
