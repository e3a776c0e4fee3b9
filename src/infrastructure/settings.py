"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

import dotenv

from src.domain.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_DISTRIBUTION_LIMIT,
    DEFAULT_TAX_RATE,
)
from src.domain.models.finance import FinancialConfig
from src.domain.policies.deletion import DELETE_POLICIES
from src.domain.policies.rounding import QUANTITY_ROUNDING_MODES
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class WorkshopSettings:
    """Runtime settings for the workshop dashboard.

    Attributes:
        tax_rate: Fraction taxed on positive production gross profit.
        currency_code: ISO currency code used when formatting amounts.
        delete_policy: ``cascade`` or ``orphan`` for entries of a deleted
            product.
        quantity_rounding: ``floor`` or ``round`` for fractional invoice
            quantities.
        distribution_limit: Products shown in the dashboard distribution.
    """

    tax_rate: Decimal = DEFAULT_TAX_RATE
    currency_code: str = DEFAULT_CURRENCY
    delete_policy: str = "cascade"
    quantity_rounding: str = "floor"
    distribution_limit: int = DEFAULT_DISTRIBUTION_LIMIT

    @property
    def financial_config(self) -> FinancialConfig:
        """Return the tax and currency subset used by aggregation."""
        return FinancialConfig(
            tax_rate=self.tax_rate,
            currency_code=self.currency_code,
        )

    @classmethod
    def from_env(cls) -> "WorkshopSettings":
        """Build settings from environment variables.

        Invalid values fall back to the defaults with a warning.

        Returns:
            WorkshopSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        currency = os.getenv("WORKSHOP_CURRENCY", DEFAULT_CURRENCY).strip()
        return cls(
            tax_rate=cls._parse_tax_rate(
                os.getenv("WORKSHOP_TAX_RATE"), logger=logger
            ),
            currency_code=currency.upper() or DEFAULT_CURRENCY,
            delete_policy=cls._parse_choice(
                "WORKSHOP_DELETE_POLICY",
                DELETE_POLICIES,
                "cascade",
                logger=logger,
            ),
            quantity_rounding=cls._parse_choice(
                "WORKSHOP_QUANTITY_ROUNDING",
                QUANTITY_ROUNDING_MODES,
                "floor",
                logger=logger,
            ),
            distribution_limit=cls._parse_limit(
                os.getenv("WORKSHOP_DISTRIBUTION_LIMIT"), logger=logger
            ),
        )

    @staticmethod
    def _parse_tax_rate(raw_value: str | None, logger) -> Decimal:
        """Parse a tax rate between 0 and 1.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed rate, or the default when invalid.
        """
        if raw_value is None or not raw_value.strip():
            return DEFAULT_TAX_RATE
        try:
            rate = Decimal(raw_value.strip())
        except InvalidOperation:
            logger.warning(f"Invalid WORKSHOP_TAX_RATE {raw_value!r}; using default")
            return DEFAULT_TAX_RATE
        if not rate.is_finite() or not 0 <= rate <= 1:
            logger.warning(f"WORKSHOP_TAX_RATE {rate} out of range; using default")
            return DEFAULT_TAX_RATE
        return rate

    @staticmethod
    def _parse_choice(
        name: str,
        choices: tuple[str, ...],
        default: str,
        logger,
    ) -> str:
        value = os.getenv(name, default).strip().lower()
        if value not in choices:
            logger.warning(f"Unsupported {name} {value!r}; using {default}")
            return default
        return value

    @staticmethod
    def _parse_limit(raw_value: str | None, logger) -> int:
        if raw_value is None or not raw_value.strip():
            return DEFAULT_DISTRIBUTION_LIMIT
        try:
            limit = int(raw_value.strip())
        except ValueError:
            limit = 0
        if limit <= 0:
            logger.warning(
                f"Invalid WORKSHOP_DISTRIBUTION_LIMIT {raw_value!r}; using default"
            )
            return DEFAULT_DISTRIBUTION_LIMIT
        return limit


__all__ = ["WorkshopSettings"]
