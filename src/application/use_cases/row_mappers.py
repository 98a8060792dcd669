"""Conversions between stored rows and domain models."""

from decimal import Decimal
from typing import Any

from src.domain.constants import (
    ACTION_DESCRIPTION,
    ACTION_OPTIONS,
    BASE_CURRENCY,
)
from src.domain.models import (
    AggregatedLedgerEntry,
    Asset,
    InsuranceYearRecord,
    OneOffEvent,
    RecurringDefinition,
    Transaction,
)
from src.utils.date_utils import parse_date
from src.utils.decimal_utils import parse_amount


_CENT = Decimal("0.01")


def _text(row: dict[str, Any], key: str, default: str = "") -> str:
    value = row.get(key)
    if value is None:
        return default
    cleaned = str(value).strip()
    return cleaned or default


def _optional_int(row: dict[str, Any], key: str) -> int | None:
    value = _text(row, key)
    if not value:
        return None
    amount = parse_amount(value)
    return int(amount) if amount else None


def _optional_amount(row: dict[str, Any], key: str) -> Decimal | None:
    if not _text(row, key):
        return None
    return parse_amount(row.get(key))


def _format_amount(value: Decimal) -> str:
    return str(value.quantize(_CENT))


def transaction_to_row(tx: Transaction) -> dict[str, str]:
    """Serialize a transaction into the persisted transaction row layout."""
    return {
        "ID": tx.id,
        "YearMonth": tx.year_month,
        "MOZE_Source_Account": tx.account,
        "MOZE_Currency": tx.currency,
        "MOZE_Type": tx.type,
        "MOZE_Category": tx.category,
        "MOZE_SubCategory": tx.subcategory,
        "MOZE_Amount": str(tx.amount),
        "MOZE_Fee": str(tx.fee),
        "MOZE_Discount": str(tx.discount),
        "MOZE_Name": tx.name,
        "MOZE_Merchant": tx.merchant,
        "MOZE_Date": tx.date,
        "MOZE_Time": tx.time,
        "MOZE_Project": tx.project,
        "MOZE_Description": tx.description,
        "MOZE_Tag": tx.tag,
        "MOZE_Who": tx.counterparty,
        "MOZE_Match_Status": tx.match_status,
        "Manual_Action": tx.manual_action,
        "Action_Options": ACTION_OPTIONS,
        "Action_Desc": ACTION_DESCRIPTION,
    }


def ledger_entry_to_row(entry: AggregatedLedgerEntry) -> dict[str, str]:
    """Serialize a ledger line into the persisted ledger row layout."""
    return {
        "YearMonth": entry.year_month,
        "Recurring_Item_ID": entry.budget_item_id,
        "Name_Category": entry.name,
        "Actual_Amount": _format_amount(entry.amount),
        "Note": entry.note,
    }


def row_to_ledger_entry(row: dict[str, Any]) -> AggregatedLedgerEntry:
    return AggregatedLedgerEntry(
        year_month=_text(row, "YearMonth"),
        budget_item_id=_text(row, "Recurring_Item_ID"),
        name=_text(row, "Name_Category"),
        amount=parse_amount(row.get("Actual_Amount")),
        note=_text(row, "Note"),
    )


def row_to_recurring(row: dict[str, Any], index: int) -> RecurringDefinition:
    """Build a recurring definition, applying the sheet defaults."""
    return RecurringDefinition(
        id=_text(row, "ID", f"R{index}"),
        name=_text(row, "Name", "Unnamed Item"),
        type=_text(row, "Type", "Expense"),
        category=_text(row, "Category", "General"),
        amount=parse_amount(row.get("Amount_Base")),
        currency=_text(row, "Currency", BASE_CURRENCY).upper(),
        frequency=_text(row, "Frequency", "12"),
        specific_month=_text(row, "Specific_Month"),
        payment_day=_optional_int(row, "Payment_Day"),
        start_date=parse_date(row.get("Start_Date")),
        end_date=parse_date(row.get("End_Date")),
        category_name=_text(row, "Category_Name"),
        note=_text(row, "Note"),
    )


def row_to_one_off(row: dict[str, Any], index: int) -> OneOffEvent:
    return OneOffEvent(
        id=_text(row, "ID", f"E{index}"),
        name=_text(row, "Name", "Unnamed Event"),
        type=_text(row, "Type", "Expense"),
        amount=parse_amount(row.get("Amount")),
        date=parse_date(row.get("Date")),
        category=_text(row, "Category"),
        status=_text(row, "Status"),
        note=_text(row, "Note"),
    )


def row_to_insurance(row: dict[str, Any]) -> InsuranceYearRecord:
    """Build a policy-year record; actual year-end value wins over expected."""
    cash_value = _optional_amount(row, "Actual_YearEnd")
    if not cash_value:
        cash_value = parse_amount(row.get("Expected_YearEnd"))
    return InsuranceYearRecord(
        policy_id=_text(row, "Policy_ID"),
        date=parse_date(row.get("Payment_Date")),
        year=_optional_int(row, "Year"),
        premium=parse_amount(row.get("Premium_Total")),
        cash_value=cash_value,
        accumulated_savings=parse_amount(row.get("Accu_Savings_Amount")),
        cost=parse_amount(row.get("Insurance_Cost")),
        expense_component=parse_amount(row.get("Calculation_EXP")),
        savings_component=parse_amount(row.get("Calculation_SAV")),
        gain_component=parse_amount(row.get("Calculation_WIN")),
    )


def row_to_asset(row: dict[str, Any], index: int) -> Asset:
    return Asset(
        id=_text(row, "ID", f"A{index}"),
        type=_text(row, "Type", "Other"),
        category=_text(row, "Category", "Uncategorized"),
        name=_text(row, "Name", "Unknown Asset"),
        quantity=parse_amount(row.get("Quantity")),
        currency=_text(row, "Currency", BASE_CURRENCY).upper(),
        unit_price=_optional_amount(row, "Unit_Price"),
        location=_text(row, "Location"),
        note=_text(row, "Note"),
    )


__all__ = [
    "transaction_to_row",
    "ledger_entry_to_row",
    "row_to_ledger_entry",
    "row_to_recurring",
    "row_to_one_off",
    "row_to_insurance",
    "row_to_asset",
]
