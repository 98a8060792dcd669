"""Tests for the classification rule cascade."""

from datetime import date
from decimal import Decimal

from src.domain.models import (
    MatchType,
    OneOffEvent,
    RecurringDefinition,
    Transaction,
)
from src.domain.services.classification import (
    build_classification_context,
    classify_transaction,
    classify_transactions,
    project_budget_rule,
    receivable_rule,
    tag_rule,
    tech_fee_rule,
    transfer_rule,
)


def _tx(**overrides) -> Transaction:
    values = {
        "id": "tx1",
        "year_month": "2024-05",
        "account": "Cash",
        "currency": "TWD",
        "type": "支出",
        "category": "餐飲",
        "subcategory": "午餐",
        "amount": Decimal("-120"),
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
    return Transaction(**values)


def _context(**kwargs):
    recurring = [
        RecurringDefinition(
            id="R12",
            name="Gym",
            type="Expense",
            category="Health",
            amount=Decimal("1500"),
            currency="TWD",
        ),
        RecurringDefinition(
            id="R35",
            name="Dining Out",
            type="Expense",
            category="Food",
            amount=Decimal("8000"),
            currency="TWD",
        ),
    ]
    events = [
        OneOffEvent(
            id="E3",
            name="Japan Trip 2024",
            type="Expense",
            amount=Decimal("60000"),
            date=date(2024, 5, 1),
            category="GlobalTravel",
        ),
        OneOffEvent(
            id="E4",
            name="New Laptop",
            type="Expense",
            amount=Decimal("50000"),
            date=date(2024, 6, 1),
            category="Gadgets",
        ),
    ]
    return build_classification_context(recurring, events, **kwargs)


def test_tag_rule_matches_known_item_case_insensitively():
    """A '#r12' tag should resolve to the R12 recurring item."""
    tx = _tx(tag="monthly #r12")

    result = classify_transaction(tx, _context())

    assert result.match_type == MatchType.TAG
    assert result.target_id == "R12"
    assert result.target_name == "Gym"
    assert tx.match_status == "Matched: R12"


def test_tag_rule_skips_unknown_items():
    """Tags pointing at unknown items should fall through."""
    assert tag_rule(_tx(tag="#R99"), _context()) is None


def test_tag_rule_wins_over_project_rule():
    """The first matching rule should decide the classification."""
    tx = _tx(tag="#R12", project="Food court")

    assert classify_transaction(tx, _context()).target_id == "R12"


def test_project_budget_rule_maps_keyword_groups():
    """Project keywords should map to the designated budget items."""
    ctx = _context()

    food = project_budget_rule(_tx(project="Weekend 吃喝"), ctx)
    transport = project_budget_rule(_tx(project="Daily Transport"), ctx)

    assert food.result.target_id == "R35"
    assert food.result.target_name == "Dining Out"
    assert transport.result.target_id == "R36"
    assert transport.result.target_name == "Transport"
    assert transport.result.match_type == MatchType.PROJECT_BUDGET


def test_project_event_rule_uses_bidirectional_containment():
    """A project contained in a travel event name should match it."""
    tx = _tx(project="Japan Trip")

    result = classify_transaction(tx, _context())

    assert result.match_type == MatchType.PROJECT_EVENT
    assert result.target_id == "E3"
    assert result.note == "Matched Project: Japan Trip"


def test_project_event_rule_ignores_other_event_categories():
    """Only global travel events should be matched by project."""
    result = classify_transaction(_tx(project="New Laptop"), _context())

    assert result.match_type == MatchType.UNMATCHED


def test_tech_fee_rule_books_large_july_payment_as_income():
    """The yearly technician fee should be booked as income."""
    tx = _tx(
        subcategory="技師牌費",
        date="2024/07/15",
        amount=Decimal("450000"),
    )

    outcome = tech_fee_rule(tx, _context())

    assert outcome.result.match_type == MatchType.TECH_FEE_INCOME
    assert outcome.status == "Tech Fee (Income)"


def test_tech_fee_rule_ignores_amortized_payments():
    """Other technician fee entries should be ignored."""
    tx = _tx(name="技師牌費 攤提", date="2024/03/15", amount=Decimal("-30000"))

    outcome = tech_fee_rule(tx, _context())

    assert outcome.result.match_type == MatchType.IGNORE_TECH_FEE


def test_tech_fee_rule_respects_configured_month_and_threshold():
    """Month and threshold should come from the context."""
    ctx = _context(
        tech_fee_income_month=3,
        tech_fee_income_threshold=Decimal("1000"),
    )
    tx = _tx(subcategory="技師牌費", date="2024/03/01", amount=Decimal("1000"))

    assert tech_fee_rule(tx, ctx).result.match_type == (
        MatchType.TECH_FEE_INCOME
    )


def test_transfer_rule_covers_types_and_credit_cards():
    """Transfers and credit card payments should be ignored."""
    ctx = _context()

    by_type = transfer_rule(_tx(type="Transfer"), ctx)
    by_category = transfer_rule(_tx(category="轉帳"), ctx)
    by_card = transfer_rule(_tx(category="信用卡還款"), ctx)

    for outcome in (by_type, by_category, by_card):
        assert outcome.result.match_type == MatchType.IGNORE_TRANSFER
        assert outcome.status == "Transfer - Ignored"
    assert transfer_rule(_tx(), ctx) is None


def test_receivable_rule_requires_counterparty():
    """Receivables are held for netting only when a counterparty is set."""
    ctx = _context()

    held = receivable_rule(_tx(type="應收款項", counterparty="Amy"), ctx)
    refund = receivable_rule(_tx(type="Refund", counterparty="Shop"), ctx)

    assert held.result.match_type == MatchType.RECEIVABLE_PENDING
    assert refund.result.match_type == MatchType.RECEIVABLE_PENDING
    assert receivable_rule(_tx(type="應收款項"), ctx) is None


def test_unmatched_income_gets_pseudo_item_per_subcategory():
    """Unmatched income should be filed under INC_<subcategory>."""
    tx = _tx(type="收入", subcategory="Bonus", amount=Decimal("5000"))

    result = classify_transaction(tx, _context())

    assert result.match_type == MatchType.UNMATCHED_INCOME
    assert result.target_id == "INC_Bonus"
    assert result.target_name == "非固定收入/Bonus"
    assert tx.match_status == "Income: Bonus"


def test_fallback_marks_transaction_unmatched_with_note():
    """Anything else should wait for a rule."""
    tx = _tx(name="Coffee", project="Misc")

    result = classify_transaction(tx, _context())

    assert result.match_type == MatchType.UNMATCHED
    assert result.target_name == "Waiting_Rules"
    assert result.note == "[Coffee] Proj:Misc"
    assert tx.match_status == "Waiting_Rules"


def test_classify_transactions_annotates_every_transaction():
    """Every transaction should receive a classification."""
    transactions = [_tx(id="a", tag="#R12"), _tx(id="b", type="Transfer")]

    classified = classify_transactions(transactions, _context())

    assert classified == transactions
    assert [tx.match_type for tx in transactions] == [
        MatchType.TAG,
        MatchType.IGNORE_TRANSFER,
    ]
