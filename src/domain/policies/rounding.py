"""Rounding of fractional invoice quantities into whole units."""

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Literal

from src.utils.decimal_utils import coerce_decimal

QuantityRounding = Literal["floor", "round"]
QUANTITY_ROUNDING_MODES: tuple[str, ...] = ("floor", "round")


def round_quantity(value, mode: QuantityRounding = "floor") -> int:
    """Convert an invoice quantity to whole units.

    Args:
        value: Raw quantity, possibly fractional.
        mode: ``floor`` truncates toward negative infinity, ``round``
            rounds half-up.

    Returns:
        int: Whole-unit quantity.
    """
    quantity = coerce_decimal(value)
    rounding = ROUND_HALF_UP if mode == "round" else ROUND_FLOOR
    return int(quantity.quantize(Decimal("1"), rounding=rounding))


__all__ = ["QuantityRounding", "QUANTITY_ROUNDING_MODES", "round_quantity"]
