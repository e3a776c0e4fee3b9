"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, forms, or parsed documents.

    Returns:
        Decimal: Normalized numeric value. Unparsable values become zero.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents using half-up rounding."""
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_percent(rate: Decimal) -> str:
    """Format a fractional rate as a percentage, e.g. 0.075 as '7.5%'."""
    return f"{(coerce_decimal(rate) * 100).normalize():f}%"


def decimal_to_float(value: Decimal) -> float:
    """Convert a Decimal to float for JSON payloads and charts."""
    return float(quantize_money(value))


__all__ = [
    "CENT",
    "coerce_decimal",
    "quantize_money",
    "format_percent",
    "decimal_to_float",
]
