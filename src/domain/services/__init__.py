"""Domain services package."""

from .aggregation import aggregate_ledger, sort_ledger
from .classification import (
    CLASSIFICATION_RULES,
    ClassificationContext,
    build_classification_context,
    classify_transaction,
    classify_transactions,
)
from .fx import (
    ExchangePair,
    FxResolution,
    compute_exchange_rates,
    find_exchange_pairs,
    resolve_exchange_rates,
)
from .grouping import group_by, group_reduce
from .importing import (
    collect_manual_actions,
    generate_transaction_id,
    map_import_records,
)
from .projection import (
    applies_in_month,
    group_insurance_records,
    project_cash_flow,
)
from .receivables import NettingOutcome, net_receivables, synthetic_entries
from .validation import validate_synthetic_sign
from .valuation import (
    calculate_fixed_assets,
    calculate_liquid_breakdown,
    calculate_net_worth,
    check_liquidity,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationContext",
    "ExchangePair",
    "FxResolution",
    "NettingOutcome",
    "aggregate_ledger",
    "applies_in_month",
    "build_classification_context",
    "calculate_fixed_assets",
    "calculate_liquid_breakdown",
    "calculate_net_worth",
    "check_liquidity",
    "classify_transaction",
    "classify_transactions",
    "collect_manual_actions",
    "compute_exchange_rates",
    "find_exchange_pairs",
    "generate_transaction_id",
    "group_by",
    "group_insurance_records",
    "group_reduce",
    "map_import_records",
    "net_receivables",
    "project_cash_flow",
    "resolve_exchange_rates",
    "sort_ledger",
    "synthetic_entries",
    "validate_synthetic_sign",
]
