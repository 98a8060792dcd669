"""Mapping of parsed import records into transactions."""

import hashlib
from collections.abc import Iterable, Mapping
from typing import Any

from src.domain.constants import (
    BASE_CURRENCY,
    FIELD_ACCOUNT,
    FIELD_AMOUNT,
    FIELD_CATEGORY,
    FIELD_COUNTERPARTY,
    FIELD_CURRENCY,
    FIELD_DATE,
    FIELD_DESCRIPTION,
    FIELD_DISCOUNT,
    FIELD_FEE,
    FIELD_MERCHANT,
    FIELD_NAME,
    FIELD_PROJECT,
    FIELD_RECORD_TYPE,
    FIELD_SUBCATEGORY,
    FIELD_TAG,
    FIELD_TIME,
    TRANSACTION_ID_FIELDS,
    TRANSACTION_ID_LENGTH,
)
from src.domain.models import Transaction
from src.domain.services.normalization import normalize_currency
from src.utils.date_utils import to_year_month
from src.utils.decimal_utils import parse_amount


def _id_component(value: Any) -> str:
    # Absent columns have always hashed as the literal "undefined".
    if value is None:
        return "undefined"
    return str(value)


def generate_transaction_id(record: Mapping[str, Any]) -> str:
    """Return the deterministic ID of a raw import record.

    The ID is the first 12 hex characters of the MD5 digest of the
    pipe-joined date, time, name, amount, currency, category, subcategory
    and balance values, exactly as they appear in the record.

    Args:
        record: Parsed import record keyed by the export's column names.

    Returns:
        str: Stable transaction ID.
    """
    raw = "|".join(
        _id_component(record.get(field)) for field in TRANSACTION_ID_FIELDS
    )
    digest = hashlib.md5(raw.encode("utf-8")).hexdigest()
    return digest[:TRANSACTION_ID_LENGTH]


def map_import_record(
    record: Mapping[str, Any],
    manual_actions: Mapping[str, str] | None = None,
    base_currency: str = BASE_CURRENCY,
) -> Transaction:
    """Map a raw import record to a transaction.

    Args:
        record: Parsed import record keyed by the export's column names.
        manual_actions: Previously recorded manual actions by transaction ID.
        base_currency: Currency assumed when the record has none.

    Returns:
        Transaction: Unclassified transaction.
    """

    def text(field: str, default: str = "") -> str:
        value = record.get(field)
        return str(value) if value else default

    transaction_id = generate_transaction_id(record)
    date_value = text(FIELD_DATE)
    return Transaction(
        id=transaction_id,
        year_month=to_year_month(date_value),
        account=text(FIELD_ACCOUNT),
        currency=normalize_currency(record.get(FIELD_CURRENCY), base_currency),
        type=text(FIELD_RECORD_TYPE, "Expense"),
        category=text(FIELD_CATEGORY),
        subcategory=text(FIELD_SUBCATEGORY),
        amount=parse_amount(record.get(FIELD_AMOUNT)),
        fee=parse_amount(record.get(FIELD_FEE)),
        discount=parse_amount(record.get(FIELD_DISCOUNT)),
        name=text(FIELD_NAME),
        merchant=text(FIELD_MERCHANT),
        date=date_value,
        time=text(FIELD_TIME),
        project=text(FIELD_PROJECT),
        description=text(FIELD_DESCRIPTION),
        tag=text(FIELD_TAG),
        counterparty=text(FIELD_COUNTERPARTY),
        manual_action=(manual_actions or {}).get(transaction_id, ""),
    )


def map_import_records(
    records: Iterable[Mapping[str, Any]],
    manual_actions: Mapping[str, str] | None = None,
    base_currency: str = BASE_CURRENCY,
) -> list[Transaction]:
    """Map every raw record, carrying manual actions forward by ID."""
    return [
        map_import_record(record, manual_actions, base_currency)
        for record in records
    ]


def collect_manual_actions(
    rows: Iterable[Mapping[str, Any]],
) -> dict[str, str]:
    """Return ``ID -> Manual_Action`` for persisted rows that carry one."""
    actions: dict[str, str] = {}
    for row in rows:
        row_id = row.get("ID")
        action = row.get("Manual_Action")
        if row_id and action:
            actions[str(row_id)] = str(action)
    return actions


__all__ = [
    "generate_transaction_id",
    "map_import_record",
    "map_import_records",
    "collect_manual_actions",
]
