"""Exchange-rate inference from paired internal transfers.

A currency exchange shows up in the import as two transfer legs sharing the
same date and time: one in the base currency and one in a foreign currency.
Summing those pairs per scope gives weighted rates at project, month and
global granularity.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal
from logging import Logger

from src.domain.constants import BASE_CURRENCY
from src.domain.models import (
    ClassificationResult,
    ExchangeRateTable,
    MatchType,
    Transaction,
)
from src.domain.services.grouping import group_by, group_reduce


@dataclass(frozen=True)
class ExchangePair:
    """Two legs of a single currency conversion."""

    legs: tuple[Transaction, Transaction]
    base_leg: Transaction
    foreign_leg: Transaction

    @property
    def currency(self) -> str:
        return self.foreign_leg.currency

    @property
    def year_month(self) -> str:
        return self.foreign_leg.year_month

    @property
    def project(self) -> str:
        return self.legs[0].project


@dataclass(frozen=True)
class FxResolution:
    """Result of the FX resolver stage."""

    rates: ExchangeRateTable
    pairs: list[ExchangePair]
    inferred_count: int


def build_project_currency_index(
    transactions: Iterable[Transaction],
    base_currency: str = BASE_CURRENCY,
) -> tuple[dict[str, set[str]], dict[str, set[str]]]:
    """Index which foreign currencies each matched project uses.

    Returns:
        tuple: ``project -> currencies`` and ``currency -> projects``.
    """
    project_currencies: dict[str, set[str]] = {}
    currency_projects: dict[str, set[str]] = {}
    for tx in transactions:
        if not tx.project or tx.currency == base_currency:
            continue
        if tx.match_type is None or tx.match_type == MatchType.UNMATCHED:
            continue
        project_currencies.setdefault(tx.project, set()).add(tx.currency)
        currency_projects.setdefault(tx.currency, set()).add(tx.project)
    return project_currencies, currency_projects


def find_exchange_pairs(
    transactions: Iterable[Transaction],
    base_currency: str = BASE_CURRENCY,
) -> list[ExchangePair]:
    """Group non-credit-card transfers by timestamp and keep balanced pairs.

    A group qualifies only when it has exactly two legs, one in the base
    currency and one in a foreign currency.
    """
    groups = group_by(
        transactions,
        lambda tx: (
            (tx.date, tx.time)
            if tx.is_transfer and not tx.is_credit_card
            else None
        ),
    )
    pairs = []
    for legs in groups.values():
        if len(legs) != 2:
            continue
        base_legs = [tx for tx in legs if tx.currency == base_currency]
        foreign_legs = [tx for tx in legs if tx.currency != base_currency]
        if len(base_legs) != 1 or len(foreign_legs) != 1:
            continue
        pairs.append(
            ExchangePair(
                legs=(legs[0], legs[1]),
                base_leg=base_legs[0],
                foreign_leg=foreign_legs[0],
            )
        )
    return pairs


def _mark_inferred(pair: ExchangePair, project: str) -> None:
    for tx in pair.legs:
        tx.project = project
        tx.match_status = f"Inferred: {project}"
        if tx.classification is None:
            tx.classification = ClassificationResult(
                "", "", MatchType.INFERRED_EXCHANGE
            )
        else:
            tx.classification = replace(
                tx.classification,
                match_type=MatchType.INFERRED_EXCHANGE,
            )


def infer_pair_projects(
    pairs: Iterable[ExchangePair],
    currency_projects: dict[str, set[str]],
) -> int:
    """Label exchange pairs with a project and mark them as exchanges.

    A project already present on either leg wins; otherwise the foreign
    currency must map to exactly one project.

    Returns:
        int: Number of pairs labeled.
    """
    labeled = 0
    for pair in pairs:
        existing = next((tx.project for tx in pair.legs if tx.project), "")
        if existing:
            _mark_inferred(pair, existing)
            labeled += 1
            continue
        candidates = currency_projects.get(pair.currency, set())
        if len(candidates) == 1:
            _mark_inferred(pair, next(iter(candidates)))
            labeled += 1
    return labeled


def _sum_pairs(
    key: object,
    members: list[ExchangePair],
) -> tuple[Decimal, Decimal]:
    base_total = sum(
        (pair.base_leg.exchange_value for pair in members),
        Decimal("0"),
    )
    foreign_total = sum(
        (pair.foreign_leg.exchange_value for pair in members),
        Decimal("0"),
    )
    return base_total, foreign_total


def _rates_by_scope(
    pairs: list[ExchangePair],
    scope,
) -> dict[str, dict[str, Decimal]]:
    sums = group_reduce(
        pairs,
        lambda pair: (
            (scope(pair), pair.currency) if scope(pair) is not None else None
        ),
        _sum_pairs,
    )
    rates: dict[str, dict[str, Decimal]] = {}
    for (scope_key, currency), (base_total, foreign_total) in sums.items():
        if foreign_total > 0:
            rates.setdefault(scope_key, {})[currency] = (
                base_total / foreign_total
            )
    return rates


def compute_exchange_rates(pairs: Iterable[ExchangePair]) -> ExchangeRateTable:
    """Derive sum(base) / sum(foreign) per project, month and globally."""
    pairs = list(pairs)
    project_rates = _rates_by_scope(
        pairs,
        lambda pair: pair.project or None,
    )
    monthly_rates = _rates_by_scope(pairs, lambda pair: pair.year_month)
    global_rates = _rates_by_scope(pairs, lambda pair: "").get("", {})
    return ExchangeRateTable(
        project_rates=project_rates,
        monthly_rates=monthly_rates,
        global_rates=global_rates,
    )


def resolve_exchange_rates(
    transactions: list[Transaction],
    base_currency: str = BASE_CURRENCY,
    logger: Logger | None = None,
) -> FxResolution:
    """Run the FX resolver over classified transactions.

    Pairs are labeled (mutating their project, status and match type) before
    the rates are computed, so project-scoped rates include inferred pairs.
    """
    _, currency_projects = build_project_currency_index(
        transactions, base_currency
    )
    pairs = find_exchange_pairs(transactions, base_currency)
    inferred = infer_pair_projects(pairs, currency_projects)
    rates = compute_exchange_rates(pairs)
    if logger is not None:
        logger.info(
            f"Found {len(pairs)} exchange pairs, "
            f"inferred {inferred} projects, "
            f"global rates={dict(rates.global_rates)}"
        )
    return FxResolution(rates=rates, pairs=pairs, inferred_count=inferred)


__all__ = [
    "ExchangePair",
    "FxResolution",
    "build_project_currency_index",
    "find_exchange_pairs",
    "infer_pair_projects",
    "compute_exchange_rates",
    "resolve_exchange_rates",
]
