"""Domain validation helpers."""

from logging import Logger

from src.domain.constants import (
    SYNTHETIC_LOSS_ID,
    SYNTHETIC_MANUAL_EXPENSE_ID,
    SYNTHETIC_PROFIT_ID,
)
from src.domain.models import SyntheticEntry


NEGATIVE_SYNTHETIC_IDS = (SYNTHETIC_LOSS_ID, SYNTHETIC_MANUAL_EXPENSE_ID)
POSITIVE_SYNTHETIC_IDS = (SYNTHETIC_PROFIT_ID,)


def validate_synthetic_sign(entry: SyntheticEntry, logger: Logger) -> bool:
    """Warn when a synthetic entry's sign contradicts its label.

    Args:
        entry: Synthetic entry produced by receivable netting.
        logger: Logger used for warnings.

    Returns:
        bool: True when the sign is consistent.
    """
    if entry.id in NEGATIVE_SYNTHETIC_IDS and entry.amount > 0:
        logger.warning(
            f"Synthetic entry {entry.id} is positive: {entry.amount}"
        )
        return False
    if entry.id in POSITIVE_SYNTHETIC_IDS and entry.amount < 0:
        logger.warning(
            f"Synthetic entry {entry.id} is negative: {entry.amount}"
        )
        return False
    return True


__all__ = ["validate_synthetic_sign"]
