"""Domain package for reconciliation rules and core models."""

from .constants import BASE_CURRENCY
from .models import (
    AggregatedLedgerEntry,
    ClassificationResult,
    ExchangeRateTable,
    MatchType,
    ProjectionMonth,
    Transaction,
)

__all__ = [
    "BASE_CURRENCY",
    "AggregatedLedgerEntry",
    "ClassificationResult",
    "ExchangeRateTable",
    "MatchType",
    "ProjectionMonth",
    "Transaction",
]
