"""Domain validation helpers."""

from collections.abc import Iterable
from logging import Logger

from src.domain.models.entities import Product


def warn_negative_margins(
    products: Iterable[Product],
    logger: Logger,
) -> list[str]:
    """Warn about products whose labor cost exceeds their sale value.

    Negative margins are allowed by the model; every sale of such a product
    is an untaxed loss.

    Args:
        products: Catalog products to inspect.
        logger: Logger used for warnings.

    Returns:
        list[str]: Ids of products with a negative unit margin.
    """
    flagged = []
    for product in products:
        if product.unit_margin < 0:
            logger.warning(
                f"Negative unit margin for product={product.name}: "
                f"{product.unit_margin}"
            )
            flagged.append(product.id)
    return flagged


__all__ = ["warn_negative_margins"]
