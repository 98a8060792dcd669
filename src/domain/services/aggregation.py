"""Folding of classified transactions into the monthly ledger."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    BASE_CURRENCY,
    EXCHANGE_SUBCATEGORY,
    LEDGER_NOTE_MAX_LENGTH,
    LEDGER_NOTE_SEPARATOR,
    UNMATCHED_LEDGER_ID,
)
from src.domain.models import (
    AggregatedLedgerEntry,
    ExchangeRateTable,
    MatchType,
    SyntheticEntry,
    Transaction,
)
from src.domain.services.grouping import group_reduce


SKIPPED_MATCH_TYPES = (
    MatchType.IGNORE_TRANSFER,
    MatchType.IGNORE_TECH_FEE,
    MatchType.RECEIVABLE_PENDING,
    MatchType.INFERRED_EXCHANGE,
)

LedgerKey = tuple[str, str, str]


@dataclass(frozen=True)
class _Contribution:
    key: LedgerKey
    amount: Decimal
    note: str = ""


@dataclass
class _LedgerAccumulator:
    amount: Decimal = Decimal("0")
    notes: list[str] = field(default_factory=list)

    def add(self, contribution: _Contribution) -> None:
        self.amount += contribution.amount
        if contribution.note and contribution.note not in self.notes:
            self.notes.append(contribution.note)


def _transaction_contribution(
    tx: Transaction,
    rates: ExchangeRateTable,
    base_currency: str,
) -> _Contribution | None:
    cls = tx.classification
    if cls is None or cls.match_type in SKIPPED_MATCH_TYPES:
        return None
    if tx.subcategory == EXCHANGE_SUBCATEGORY:
        return None

    if cls.match_type == MatchType.TECH_FEE_INCOME:
        return _Contribution(
            key=(tx.year_month, cls.target_id, cls.target_name),
            amount=abs(tx.amount),
        )

    amount = rates.convert(
        tx.ledger_amount,
        tx.currency,
        base_currency,
        project=tx.project,
        year_month=tx.year_month,
    )
    if cls.match_type == MatchType.UNMATCHED:
        key = (tx.year_month, UNMATCHED_LEDGER_ID, tx.name)
    else:
        key = (tx.year_month, cls.target_id, cls.target_name)
    return _Contribution(key=key, amount=amount, note=cls.note)


def _synthetic_contribution(entry: SyntheticEntry) -> _Contribution:
    return _Contribution(
        key=(entry.year_month, entry.id, entry.name),
        amount=entry.amount,
        note=entry.note,
    )


def _reduce(
    key: LedgerKey,
    contributions: list[_Contribution],
) -> _LedgerAccumulator:
    accumulator = _LedgerAccumulator()
    for contribution in contributions:
        accumulator.add(contribution)
    return accumulator


def sort_ledger(
    entries: Iterable[AggregatedLedgerEntry],
) -> list[AggregatedLedgerEntry]:
    """Sort by month descending, then budget item ID with blanks last."""
    by_id = sorted(
        entries,
        key=lambda entry: (not entry.budget_item_id, entry.budget_item_id),
    )
    return sorted(by_id, key=lambda entry: entry.year_month, reverse=True)


def aggregate_ledger(
    transactions: Iterable[Transaction],
    synthetic: Iterable[SyntheticEntry] = (),
    rates: ExchangeRateTable | None = None,
    base_currency: str = BASE_CURRENCY,
    note_max_length: int = LEDGER_NOTE_MAX_LENGTH,
    logger: Logger | None = None,
) -> list[AggregatedLedgerEntry]:
    """Fold classified transactions and synthetic entries into the ledger.

    Transfers, amortized fees, pending receivables, inferred exchanges and
    exchange subcategories are skipped. Technician fee income always counts
    as a positive amount. Unmatched transactions keep one line per name.
    Totals are recomputed from scratch on every call.

    Args:
        transactions: Classified transactions.
        synthetic: Entries produced by receivable netting.
        rates: Rate table used for foreign-currency transactions.
        base_currency: Currency of the ledger.
        note_max_length: Maximum length of the joined notes.
        logger: Optional logger for summary output.

    Returns:
        list[AggregatedLedgerEntry]: Sorted ledger lines.
    """
    rates = rates or ExchangeRateTable()
    contributions = [
        contribution
        for contribution in (
            _transaction_contribution(tx, rates, base_currency)
            for tx in transactions
        )
        if contribution is not None
    ]
    contributions.extend(_synthetic_contribution(entry) for entry in synthetic)

    folded = group_reduce(contributions, lambda item: item.key, _reduce)
    entries = [
        AggregatedLedgerEntry(
            year_month=year_month,
            budget_item_id=budget_item_id,
            name=name,
            amount=accumulator.amount,
            note=LEDGER_NOTE_SEPARATOR.join(accumulator.notes)[
                :note_max_length
            ],
        )
        for (year_month, budget_item_id, name), accumulator in folded.items()
    ]
    if logger is not None:
        logger.info(
            f"Aggregated {len(contributions)} contributions into "
            f"{len(entries)} ledger lines"
        )
    return sort_ledger(entries)


__all__ = ["SKIPPED_MATCH_TYPES", "aggregate_ledger", "sort_ledger"]
