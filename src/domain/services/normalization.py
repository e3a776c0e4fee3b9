"""Domain normalization helpers."""


def normalize_product_name(name: str | None) -> str:
    """Normalize product names for matching.

    Args:
        name: Raw product name from the catalog or an invoice.

    Returns:
        str: Trimmed, case-folded name; empty string for missing values.
    """
    if not name:
        return ""
    return name.strip().casefold()


def normalize_invoice_number(value: str | None) -> str | None:
    """Normalize invoice numbers, dropping blank values."""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


__all__ = ["normalize_product_name", "normalize_invoice_number"]
