"""Helpers for reading calendar periods out of stored date values.

Stored dates may be ``datetime.date`` objects, full ISO strings
(``YYYY-MM-DD``) or month-only strings (``YYYY-MM``).
"""

from datetime import date, datetime


def date_key(value) -> str:
    """Return the ISO string form of a stored date value."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return ""
    return str(value).strip()


def parse_year_month(value) -> tuple[int, int] | None:
    """Extract ``(year, month)`` from a stored date value.

    Args:
        value: Date object or ISO-like string.

    Returns:
        tuple[int, int] | None: Year and month, or None when unparsable.
    """
    if isinstance(value, date):
        return value.year, value.month
    parts = date_key(value).split("-")
    if len(parts) < 2:
        return None
    year_text, month_text = parts[0], parts[1][:2]
    if len(year_text) != 4 or not year_text.isdigit():
        return None
    if len(month_text) != 2 or not month_text.isdigit():
        return None
    month = int(month_text)
    if not 1 <= month <= 12:
        return None
    return int(year_text), month


def day_component(value) -> str:
    """Return the two-digit day of a stored date, or an empty string."""
    parts = date_key(value).split("-")
    if len(parts) < 3:
        return ""
    return parts[2][:2]


def month_prefix(year: int, month: int) -> str:
    """Return the ``YYYY-MM`` prefix for a period."""
    return f"{year:04d}-{month:02d}"


__all__ = ["date_key", "parse_year_month", "day_component", "month_prefix"]
