"""Domain models package."""

from .ledger import AggregatedLedgerEntry, ExchangeRateTable, SyntheticEntry
from .projection import (
    FixedAssetValuation,
    LiquidBreakdown,
    LiquidityCheck,
    ProjectionLine,
    ProjectionMonth,
)
from .recurring import (
    Asset,
    InsuranceYearRecord,
    OneOffEvent,
    RecurringDefinition,
)
from .transactions import ClassificationResult, MatchType, Transaction

__all__ = [
    "AggregatedLedgerEntry",
    "Asset",
    "ClassificationResult",
    "ExchangeRateTable",
    "FixedAssetValuation",
    "InsuranceYearRecord",
    "LiquidBreakdown",
    "LiquidityCheck",
    "MatchType",
    "OneOffEvent",
    "ProjectionLine",
    "ProjectionMonth",
    "RecurringDefinition",
    "SyntheticEntry",
    "Transaction",
]
