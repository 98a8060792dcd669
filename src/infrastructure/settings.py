"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
import os

import dotenv

from src.domain.constants import (
    BASE_CURRENCY,
    LEDGER_NOTE_MAX_LENGTH,
    TECH_FEE_INCOME_MONTH,
    TECH_FEE_INCOME_THRESHOLD,
)
from src.infrastructure.logging.logger import get_app_logger


def _current_year() -> int:
    return date.today().year


@dataclass(frozen=True)
class LedgerSettings:
    """Settings of the reconciliation and projection runs.

    Attributes:
        base_currency: Currency of the ledger.
        tech_fee_income_month: Month in which the technician fee is income.
        tech_fee_income_threshold: Minimum technician fee booked as income.
        note_max_length: Maximum length of ledger notes.
        projection_year: Default calendar year to project.
    """

    base_currency: str = BASE_CURRENCY
    tech_fee_income_month: int = TECH_FEE_INCOME_MONTH
    tech_fee_income_threshold: Decimal = TECH_FEE_INCOME_THRESHOLD
    note_max_length: int = LEDGER_NOTE_MAX_LENGTH
    projection_year: int = field(default_factory=_current_year)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()
        base_currency = (
            os.getenv("BASE_CURRENCY", "").strip().upper()
            or defaults.base_currency
        )
        return cls(
            base_currency=base_currency,
            tech_fee_income_month=cls._read_int(
                "TECH_FEE_INCOME_MONTH",
                defaults.tech_fee_income_month,
                logger,
            ),
            tech_fee_income_threshold=cls._read_decimal(
                "TECH_FEE_INCOME_THRESHOLD",
                defaults.tech_fee_income_threshold,
                logger,
            ),
            note_max_length=cls._read_int(
                "LEDGER_NOTE_MAX_LENGTH",
                defaults.note_max_length,
                logger,
            ),
            projection_year=cls._read_int(
                "PROJECTION_YEAR",
                defaults.projection_year,
                logger,
            ),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read an integer variable, keeping the default when invalid.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value.
        """
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}'; using {default}")
            return default

    @staticmethod
    def _read_decimal(name: str, default: Decimal, logger) -> Decimal:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            value = Decimal(raw)
        except InvalidOperation:
            logger.warning(f"Invalid {name} '{raw}'; using {default}")
            return default
        if not value.is_finite():
            logger.warning(f"Invalid {name} '{raw}'; using {default}")
            return default
        return value


__all__ = ["LedgerSettings"]
