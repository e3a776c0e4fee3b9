"""Domain policies package."""

from .deletion import DELETE_POLICIES, DeletePolicy, dependent_entries
from .rounding import QUANTITY_ROUNDING_MODES, QuantityRounding, round_quantity

__all__ = [
    "DELETE_POLICIES",
    "DeletePolicy",
    "dependent_entries",
    "QUANTITY_ROUNDING_MODES",
    "QuantityRounding",
    "round_quantity",
]
