"""Degrading reads of the tables the use cases depend on."""

from collections.abc import Callable
from typing import Any, TypeVar

from src.application.ports.row_store import RowStorePort
from src.application.use_cases.row_mappers import (
    row_to_asset,
    row_to_insurance,
    row_to_ledger_entry,
    row_to_one_off,
    row_to_recurring,
)
from src.domain.constants import (
    TABLE_ASSETS,
    TABLE_INSURANCE,
    TABLE_LEDGER,
    TABLE_ONE_OFF,
    TABLE_RECURRING,
)
from src.domain.models import (
    AggregatedLedgerEntry,
    Asset,
    InsuranceYearRecord,
    OneOffEvent,
    RecurringDefinition,
)
from src.infrastructure.logging.logger import get_app_logger

ModelT = TypeVar("ModelT")


class ReferenceDataReader:
    """Read tables from the row store, degrading to empty on failure.

    A failed read is logged as a warning so a batch can still attempt a
    partial reconciliation or projection.
    """

    def __init__(self, row_store: RowStorePort, logger=None) -> None:
        """Initialize the reader.

        Args:
            row_store: Port providing whole-table reads.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._row_store = row_store
        self._logger = logger or get_app_logger()

    def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        try:
            rows = self._row_store.fetch_rows(table)
        except Exception as exc:
            self._logger.warning(f"Could not read {table}: {exc}")
            return []
        self._logger.info(f"Fetched {len(rows)} rows from {table}")
        return rows

    def _fetch_models(
        self,
        table: str,
        mapper: Callable[[dict[str, Any], int], ModelT],
    ) -> list[ModelT]:
        return [
            mapper(row, index)
            for index, row in enumerate(self.fetch_rows(table))
        ]

    def fetch_recurring(self) -> list[RecurringDefinition]:
        return self._fetch_models(TABLE_RECURRING, row_to_recurring)

    def fetch_one_off_events(self) -> list[OneOffEvent]:
        return self._fetch_models(TABLE_ONE_OFF, row_to_one_off)

    def fetch_insurance_records(self) -> list[InsuranceYearRecord]:
        return self._fetch_models(
            TABLE_INSURANCE,
            lambda row, _index: row_to_insurance(row),
        )

    def fetch_assets(self) -> list[Asset]:
        return self._fetch_models(TABLE_ASSETS, row_to_asset)

    def fetch_ledger(self) -> list[AggregatedLedgerEntry]:
        return self._fetch_models(
            TABLE_LEDGER,
            lambda row, _index: row_to_ledger_entry(row),
        )


__all__ = ["ReferenceDataReader"]
