"""Domain models for imported transactions and their classification."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.domain.constants import (
    CREDIT_CARD_CATEGORY,
    INCOME_TYPES,
    RECEIVABLE_TYPES,
    REFUND_TYPES,
    TECH_FEE_KEYWORD,
    TRANSFER_CATEGORY,
    TRANSFER_TYPES,
)


class MatchType(str, Enum):
    """Outcome variant of the classification cascade."""

    TAG = "TAG"
    PROJECT_BUDGET = "PROJECT_BUDGET"
    PROJECT_EVENT = "PROJECT_EVENT"
    TECH_FEE_INCOME = "TECH_FEE_INCOME"
    IGNORE_TECH_FEE = "IGNORE_TECH_FEE"
    IGNORE_TRANSFER = "IGNORE_TRANSFER"
    RECEIVABLE_PENDING = "RECEIVABLE_PENDING"
    UNMATCHED_INCOME = "UNMATCHED_INCOME"
    UNMATCHED = "UNMATCHED"
    INFERRED_EXCHANGE = "INFERRED_EXCHANGE"


@dataclass(frozen=True)
class ClassificationResult:
    """Budget item a transaction was matched to.

    Attributes:
        target_id: Budget item ID (recurring ID, event ID or pseudo ID).
        target_name: Display name of the budget item.
        match_type: Variant describing which rule matched.
        note: Free-text debug note carried into the ledger.
    """

    target_id: str
    target_name: str
    match_type: MatchType
    note: str = ""


@dataclass
class Transaction:
    """Imported transaction annotated in place by the pipeline stages.

    The ID is derived from the raw record and never changes; the project,
    match status and classification are filled in by the classifier and the
    FX resolver.
    """

    id: str
    year_month: str
    account: str
    currency: str
    type: str
    category: str
    subcategory: str
    amount: Decimal
    fee: Decimal
    discount: Decimal
    name: str
    merchant: str
    date: str
    time: str
    project: str
    description: str
    tag: str
    counterparty: str
    match_status: str = ""
    manual_action: str = ""
    classification: ClassificationResult | None = None

    @property
    def match_type(self) -> MatchType | None:
        if self.classification is None:
            return None
        return self.classification.match_type

    @property
    def is_credit_card(self) -> bool:
        return CREDIT_CARD_CATEGORY in (self.category or "")

    @property
    def is_transfer(self) -> bool:
        return (
            self.type in TRANSFER_TYPES
            or self.category == TRANSFER_CATEGORY
            or self.is_credit_card
        )

    @property
    def is_receivable(self) -> bool:
        return self.type in RECEIVABLE_TYPES

    @property
    def is_refund(self) -> bool:
        return self.type in REFUND_TYPES

    @property
    def is_income(self) -> bool:
        return self.type in INCOME_TYPES

    @property
    def is_tech_fee(self) -> bool:
        return TECH_FEE_KEYWORD in (self.subcategory or "") or (
            TECH_FEE_KEYWORD in (self.name or "")
        )

    @property
    def exchange_value(self) -> Decimal:
        """Absolute leg value used for rate inference."""
        return abs(self.amount + self.fee - self.discount)

    @property
    def ledger_amount(self) -> Decimal:
        """Signed native amount folded into the ledger."""
        return self.amount + self.fee + self.discount


__all__ = ["MatchType", "ClassificationResult", "Transaction"]
