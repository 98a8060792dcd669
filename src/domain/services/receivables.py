"""Netting of pending receivables and refunds into synthetic ledger entries."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    ACTION_CLOSE,
    ACTION_EXCLUDE,
    ACTION_EXPENSE,
    ACTION_IGNORE,
    BASE_CURRENCY,
    SYNTHETIC_LOSS_ID,
    SYNTHETIC_MANUAL_EXPENSE_ID,
    SYNTHETIC_PROFIT_ID,
    UNKNOWN_COUNTERPARTY,
)
from src.domain.models import (
    ExchangeRateTable,
    MatchType,
    SyntheticEntry,
    Transaction,
)
from src.domain.services.grouping import group_by
from src.domain.services.normalization import normalize_key_text
from src.domain.services.validation import validate_synthetic_sign
from src.utils.date_utils import parse_date
from src.utils.decimal_utils import round_half_up


@dataclass(frozen=True)
class NettingOutcome:
    """Netted result of one counterparty + description group."""

    counterparty: str
    description: str
    net_amount: Decimal
    manual_action: str
    year_month: str
    status: str
    entry: SyntheticEntry | None


def _netting_key(tx: Transaction) -> tuple[str, str] | None:
    if tx.match_type != MatchType.RECEIVABLE_PENDING:
        return None
    return (tx.counterparty, normalize_key_text(tx.name))


def _group_status(manual_action: str, net_amount: Decimal) -> str:
    if manual_action == ACTION_EXPENSE:
        return "Netted: Manual Expense"
    if manual_action == ACTION_IGNORE:
        return "Netted: Ignored"
    if net_amount > 0:
        return "Netted: Profit"
    if manual_action == ACTION_CLOSE:
        return "Netted: Closed (Loss)"
    return f"Receivable: Pending (Net: {round_half_up(net_amount)})"


def _synthetic_entry(
    manual_action: str,
    net_amount: Decimal,
    counterparty: str,
    raw_name: str,
    year_month: str,
) -> SyntheticEntry | None:
    if manual_action == ACTION_EXPENSE:
        return SyntheticEntry(
            year_month=year_month,
            id=SYNTHETIC_MANUAL_EXPENSE_ID,
            name=f"{counterparty}代墊轉支出",
            amount=-abs(net_amount),
            note=f"Manual: {ACTION_EXPENSE} [{raw_name}]",
        )
    if manual_action == ACTION_IGNORE:
        return None
    if net_amount > 0:
        return SyntheticEntry(
            year_month=year_month,
            id=SYNTHETIC_PROFIT_ID,
            name=f"差額收入/{counterparty}",
            amount=abs(net_amount),
            note=f"Profit from {raw_name}",
        )
    if net_amount < 0 and manual_action == ACTION_CLOSE:
        return SyntheticEntry(
            year_month=year_month,
            id=SYNTHETIC_LOSS_ID,
            name=f"差額支出/{counterparty}",
            amount=-abs(net_amount),
            note=f"Loss closed: {raw_name}",
        )
    # Zero or still-open negative balances stay pending.
    return None


def net_receivable_group(
    group: list[Transaction],
    rates: ExchangeRateTable,
    base_currency: str = BASE_CURRENCY,
) -> NettingOutcome:
    """Net a group of pending receivables and rewrite their status.

    Legs marked ``排除`` are skipped entirely. Foreign legs are converted with
    the project, month, global rate fallback; legs without any rate stay
    native. The last manual action seen in the group decides the outcome.
    """
    counterparty = group[0].counterparty or UNKNOWN_COUNTERPARTY
    raw_name = group[0].name

    net_amount = Decimal("0")
    manual_action = ""
    for tx in group:
        if tx.manual_action == ACTION_EXCLUDE:
            continue
        net_amount += rates.convert(
            tx.amount,
            tx.currency,
            base_currency,
            project=tx.project,
            year_month=tx.year_month,
        )
        if tx.manual_action:
            manual_action = tx.manual_action

    latest = max(group, key=lambda tx: parse_date(tx.date) or date.min)
    status = _group_status(manual_action, net_amount)
    for tx in group:
        tx.match_status = status

    return NettingOutcome(
        counterparty=counterparty,
        description=raw_name,
        net_amount=net_amount,
        manual_action=manual_action,
        year_month=latest.year_month,
        status=status,
        entry=_synthetic_entry(
            manual_action,
            net_amount,
            counterparty,
            raw_name,
            latest.year_month,
        ),
    )


def net_receivables(
    transactions: Iterable[Transaction],
    rates: ExchangeRateTable,
    base_currency: str = BASE_CURRENCY,
    logger: Logger | None = None,
) -> list[NettingOutcome]:
    """Net every pending receivable group.

    Groups are keyed by counterparty and the case and whitespace normalized
    transaction name.
    """
    outcomes = []
    for group in group_by(transactions, _netting_key).values():
        outcome = net_receivable_group(group, rates, base_currency)
        if outcome.entry is not None and logger is not None:
            validate_synthetic_sign(outcome.entry, logger)
        outcomes.append(outcome)
    if logger is not None:
        produced = sum(1 for outcome in outcomes if outcome.entry is not None)
        logger.info(
            f"Netted {len(outcomes)} receivable groups into "
            f"{produced} synthetic entries"
        )
    return outcomes


def synthetic_entries(
    outcomes: Iterable[NettingOutcome],
) -> list[SyntheticEntry]:
    """Return the synthetic ledger entries of the netting outcomes."""
    return [outcome.entry for outcome in outcomes if outcome.entry is not None]


__all__ = [
    "NettingOutcome",
    "net_receivable_group",
    "net_receivables",
    "synthetic_entries",
]
