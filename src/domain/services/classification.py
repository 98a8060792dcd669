"""Rule cascade assigning every transaction to a budget item.

Rules are evaluated in order and the first one returning an outcome wins.
The last rule always matches, so every transaction ends up classified.
"""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import (
    DEFAULT_INCOME_SUBCATEGORY,
    GLOBAL_TRAVEL_CATEGORY,
    NON_RECURRING_INCOME_PREFIX,
    PROJECT_KEYWORD_GROUPS,
    STATUS_RECEIVABLE_PENDING,
    STATUS_TECH_FEE_IGNORED,
    STATUS_TECH_FEE_INCOME,
    STATUS_TRANSFER_IGNORED,
    STATUS_UNMATCHED,
    TAG_PATTERN,
    TECH_FEE_INCOME_MONTH,
    TECH_FEE_INCOME_NAME,
    TECH_FEE_INCOME_THRESHOLD,
    UNMATCHED_NAME,
)
from src.domain.models import (
    ClassificationResult,
    MatchType,
    OneOffEvent,
    RecurringDefinition,
    Transaction,
)
from src.utils.date_utils import parse_date


_TAG_RE = re.compile(TAG_PATTERN, re.IGNORECASE)


@dataclass(frozen=True)
class ClassificationContext:
    """Reference data the rules match against."""

    recurring_by_id: dict[str, RecurringDefinition]
    travel_events: tuple[OneOffEvent, ...] = ()
    tech_fee_income_month: int = TECH_FEE_INCOME_MONTH
    tech_fee_income_threshold: Decimal = TECH_FEE_INCOME_THRESHOLD


@dataclass(frozen=True)
class RuleOutcome:
    """Classification plus the match status shown on the transaction."""

    result: ClassificationResult
    status: str


Rule = Callable[[Transaction, ClassificationContext], RuleOutcome | None]


def build_classification_context(
    recurring: Iterable[RecurringDefinition],
    one_off_events: Iterable[OneOffEvent],
    tech_fee_income_month: int = TECH_FEE_INCOME_MONTH,
    tech_fee_income_threshold: Decimal = TECH_FEE_INCOME_THRESHOLD,
) -> ClassificationContext:
    """Index recurring items by ID and keep the global travel events."""
    return ClassificationContext(
        recurring_by_id={item.id: item for item in recurring},
        travel_events=tuple(
            event
            for event in one_off_events
            if event.category == GLOBAL_TRAVEL_CATEGORY
        ),
        tech_fee_income_month=tech_fee_income_month,
        tech_fee_income_threshold=tech_fee_income_threshold,
    )


def _matched(
    target_id: str,
    target_name: str,
    match_type: MatchType,
    note: str,
) -> RuleOutcome:
    return RuleOutcome(
        result=ClassificationResult(target_id, target_name, match_type, note),
        status=f"Matched: {target_id}",
    )


def tag_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """Match a ``#R<digits>`` tag against a known recurring item."""
    match = _TAG_RE.search(tx.tag or "")
    if not match:
        return None
    item_id = f"R{match.group(1)}"
    item = ctx.recurring_by_id.get(item_id)
    if item is None:
        return None
    return _matched(
        item_id, item.name, MatchType.TAG, f"Matched Tag: {tx.tag}"
    )


def project_budget_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """Map project keywords to the designated budget items."""
    project = (tx.project or "").lower()
    if not project:
        return None
    for keywords, item_id, default_name in PROJECT_KEYWORD_GROUPS:
        if any(keyword in project for keyword in keywords):
            item = ctx.recurring_by_id.get(item_id)
            return _matched(
                item_id,
                item.name if item else default_name,
                MatchType.PROJECT_BUDGET,
                f"Matched Project: {tx.project}",
            )
    return None


def project_event_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """Match the project label against global travel event names."""
    project = tx.project or ""
    if not project.strip():
        return None
    for event in ctx.travel_events:
        if event.name in project or project in event.name:
            return _matched(
                event.id,
                event.name,
                MatchType.PROJECT_EVENT,
                f"Matched Project: {project}",
            )
    return None


def tech_fee_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """Book the yearly technician fee as income, ignore the amortized ones."""
    if not tx.is_tech_fee:
        return None
    tx_date = parse_date(tx.date)
    month = tx_date.month if tx_date else 0
    if (
        month == ctx.tech_fee_income_month
        and tx.amount >= ctx.tech_fee_income_threshold
    ):
        return RuleOutcome(
            result=ClassificationResult(
                "", TECH_FEE_INCOME_NAME, MatchType.TECH_FEE_INCOME
            ),
            status=STATUS_TECH_FEE_INCOME,
        )
    return RuleOutcome(
        result=ClassificationResult("", "", MatchType.IGNORE_TECH_FEE),
        status=STATUS_TECH_FEE_IGNORED,
    )


def transfer_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    if not tx.is_transfer:
        return None
    return RuleOutcome(
        result=ClassificationResult("", "", MatchType.IGNORE_TRANSFER),
        status=STATUS_TRANSFER_IGNORED,
    )


def receivable_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """Hold receivables and refunds with a counterparty for netting."""
    if not (tx.is_receivable or tx.is_refund) or not tx.counterparty:
        return None
    return RuleOutcome(
        result=ClassificationResult("", "", MatchType.RECEIVABLE_PENDING),
        status=STATUS_RECEIVABLE_PENDING,
    )


def unmatched_income_rule(
    tx: Transaction,
    ctx: ClassificationContext,
) -> RuleOutcome | None:
    """File unmatched income under a per-subcategory pseudo budget item."""
    if not tx.is_income:
        return None
    subcategory = tx.subcategory or DEFAULT_INCOME_SUBCATEGORY
    return RuleOutcome(
        result=ClassificationResult(
            f"INC_{subcategory}",
            f"{NON_RECURRING_INCOME_PREFIX}/{subcategory}",
            MatchType.UNMATCHED_INCOME,
        ),
        status=f"Income: {subcategory}",
    )


def fallback_rule(tx: Transaction, ctx: ClassificationContext) -> RuleOutcome:
    return RuleOutcome(
        result=ClassificationResult(
            "",
            UNMATCHED_NAME,
            MatchType.UNMATCHED,
            f"[{tx.name}] Proj:{tx.project}",
        ),
        status=STATUS_UNMATCHED,
    )


CLASSIFICATION_RULES: tuple[Rule, ...] = (
    tag_rule,
    project_budget_rule,
    project_event_rule,
    tech_fee_rule,
    transfer_rule,
    receivable_rule,
    unmatched_income_rule,
    fallback_rule,
)


def evaluate_rules(
    tx: Transaction,
    ctx: ClassificationContext,
    rules: Sequence[Rule] = CLASSIFICATION_RULES,
) -> RuleOutcome:
    """Return the outcome of the first matching rule."""
    for rule in rules:
        outcome = rule(tx, ctx)
        if outcome is not None:
            return outcome
    return fallback_rule(tx, ctx)


def classify_transaction(
    tx: Transaction,
    ctx: ClassificationContext,
    rules: Sequence[Rule] = CLASSIFICATION_RULES,
) -> ClassificationResult:
    """Classify a transaction and record its match status in place."""
    outcome = evaluate_rules(tx, ctx, rules)
    tx.classification = outcome.result
    tx.match_status = outcome.status
    return outcome.result


def classify_transactions(
    transactions: Iterable[Transaction],
    ctx: ClassificationContext,
    rules: Sequence[Rule] = CLASSIFICATION_RULES,
) -> list[Transaction]:
    """Classify every transaction; returns the same objects, annotated."""
    classified = []
    for tx in transactions:
        classify_transaction(tx, ctx, rules)
        classified.append(tx)
    return classified


__all__ = [
    "ClassificationContext",
    "RuleOutcome",
    "Rule",
    "CLASSIFICATION_RULES",
    "build_classification_context",
    "tag_rule",
    "project_budget_rule",
    "project_event_rule",
    "tech_fee_rule",
    "transfer_rule",
    "receivable_rule",
    "unmatched_income_rule",
    "fallback_rule",
    "evaluate_rules",
    "classify_transaction",
    "classify_transactions",
]
