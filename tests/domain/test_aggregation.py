"""Tests for folding classified transactions into the ledger."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import (
    AggregatedLedgerEntry,
    ClassificationResult,
    ExchangeRateTable,
    MatchType,
    SyntheticEntry,
    Transaction,
)
from src.domain.services.aggregation import aggregate_ledger, sort_ledger


def _tx(amount, result, **overrides) -> Transaction:
    values = {
        "id": "tx",
        "year_month": "2024-05",
        "account": "Cash",
        "currency": "TWD",
        "type": "支出",
        "category": "餐飲",
        "subcategory": "",
        "amount": Decimal(amount),
        "fee": Decimal("0"),
        "discount": Decimal("0"),
        "name": "Coffee",
        "merchant": "",
        "date": "2024/05/01",
        "time": "12:00",
        "project": "",
        "description": "",
        "tag": "",
        "counterparty": "",
    }
    values.update(overrides)
    tx = Transaction(**values)
    tx.classification = result
    return tx


GYM = ClassificationResult("R12", "Gym", MatchType.TAG, "Matched Tag: #R12")


def test_same_key_amounts_are_summed_and_notes_deduplicated():
    """Two contributions to one item should fold into one line."""
    ledger = aggregate_ledger(
        [_tx("-100", GYM), _tx("-50", GYM, name="Gym again")]
    )

    assert ledger == [
        AggregatedLedgerEntry(
            "2024-05", "R12", "Gym", Decimal("-150"), "Matched Tag: #R12"
        )
    ]


def test_fee_and_discount_are_included():
    """The ledger amount should be amount + fee + discount."""
    tx = _tx("-100", GYM, fee=Decimal("-10"), discount=Decimal("5"))

    assert aggregate_ledger([tx])[0].amount == Decimal("-105")


def test_ignored_and_pending_transactions_are_skipped():
    """Transfers, fees, receivables and exchanges should not be booked."""
    skipped = [
        _tx("-1", ClassificationResult("", "", match_type))
        for match_type in (
            MatchType.IGNORE_TRANSFER,
            MatchType.IGNORE_TECH_FEE,
            MatchType.RECEIVABLE_PENDING,
            MatchType.INFERRED_EXCHANGE,
        )
    ]
    skipped.append(_tx("-1", GYM, subcategory="兌換"))
    skipped.append(_tx("-1", None))

    assert aggregate_ledger(skipped) == []


def test_tech_fee_income_is_always_positive():
    """Technician fee income should be booked as a positive amount."""
    result = ClassificationResult(
        "", "Technician Fee Income", MatchType.TECH_FEE_INCOME
    )

    ledger = aggregate_ledger([_tx("-450000", result)])

    assert ledger[0].amount == Decimal("450000")


def test_unmatched_transactions_keep_one_line_per_name():
    """Unmatched lines should be keyed by the transaction name."""
    def unmatched(name):
        return ClassificationResult(
            "", "Waiting_Rules", MatchType.UNMATCHED, f"[{name}] Proj:"
        )

    ledger = aggregate_ledger(
        [
            _tx("-100", unmatched("Coffee"), name="Coffee"),
            _tx("-200", unmatched("Books"), name="Books"),
            _tx("-50", unmatched("Coffee"), name="Coffee"),
        ]
    )

    assert [(e.budget_item_id, e.name, e.amount) for e in ledger] == [
        ("UNMATCHED", "Coffee", Decimal("-150")),
        ("UNMATCHED", "Books", Decimal("-200")),
    ]


def test_foreign_amounts_use_rate_table():
    """Foreign transactions should be converted to the base currency."""
    rates = ExchangeRateTable(
        project_rates={"Trip": {"USD": Decimal("31")}},
        global_rates={"USD": Decimal("30")},
    )
    ledger = aggregate_ledger(
        [
            _tx("-10", GYM, currency="USD", project="Trip"),
            _tx("-10", GYM, currency="USD"),
            _tx("-10", GYM, currency="JPY"),
        ],
        rates=rates,
    )

    assert ledger[0].amount == Decimal("-620")


def test_synthetic_entries_are_added_without_sign_change():
    """Netting entries should be folded in as they are."""
    entry = SyntheticEntry(
        "2024-05", "R_REC_LOSS", "差額支出/Amy", Decimal("-500"), "Loss"
    )

    ledger = aggregate_ledger([], synthetic=[entry])

    assert ledger == [
        AggregatedLedgerEntry(
            "2024-05", "R_REC_LOSS", "差額支出/Amy", Decimal("-500"), "Loss"
        )
    ]


def test_notes_are_truncated():
    """Joined notes should be cut at the configured length."""
    transactions = [
        _tx("-1", ClassificationResult("R12", "Gym", MatchType.TAG, note))
        for note in ("alpha", "beta", "gamma")
    ]

    ledger = aggregate_ledger(transactions, note_max_length=10)

    assert ledger[0].note == "alpha; bet"


def test_sort_orders_months_desc_then_ids_with_blanks_last():
    """Ledger lines should sort by month desc, then ID asc."""
    entries = [
        AggregatedLedgerEntry("2024-05", "", "Tech", Decimal("1")),
        AggregatedLedgerEntry("2024-05", "UNMATCHED", "Misc", Decimal("1")),
        AggregatedLedgerEntry("2024-06", "R40", "Rent", Decimal("1")),
        AggregatedLedgerEntry("2024-05", "R12", "Gym", Decimal("1")),
    ]

    ordered = sort_ledger(entries)

    assert [(e.year_month, e.budget_item_id) for e in ordered] == [
        ("2024-06", "R40"),
        ("2024-05", "R12"),
        ("2024-05", "UNMATCHED"),
        ("2024-05", ""),
    ]


def test_aggregation_is_idempotent():
    """Aggregating the same classified set twice should be stable."""
    transactions = [
        _tx("-100", GYM),
        _tx("-30", GYM, year_month="2024-04"),
        _tx(
            "-5",
            ClassificationResult("", "Waiting_Rules", MatchType.UNMATCHED),
        ),
    ]
    logger = MagicMock()

    first = aggregate_ledger(transactions, logger=logger)
    second = aggregate_ledger(transactions, logger=logger)

    assert first == second
    assert len({(e.year_month, e.budget_item_id, e.name) for e in first}) == 3
