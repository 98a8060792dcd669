"""Use case reconciling an import batch into transactions and the ledger.

This module defines the batch pipeline that:

* reads prior transactions and reference data (concurrently);
* maps the imported records, carrying manual actions forward by ID;
* classifies, resolves exchange rates and nets receivables;
* replaces the transactions of the imported months;
* rebuilds and overwrites the actual-expense ledger.
"""

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from src.application.ports.row_store import RowStorePort
from src.application.use_cases.reference_data import ReferenceDataReader
from src.application.use_cases.row_mappers import (
    ledger_entry_to_row,
    transaction_to_row,
)
from src.domain.constants import (
    BASE_CURRENCY,
    LEDGER_NOTE_MAX_LENGTH,
    TABLE_LEDGER,
    TABLE_TRANSACTIONS,
    TECH_FEE_INCOME_MONTH,
    TECH_FEE_INCOME_THRESHOLD,
)
from src.domain.models import (
    AggregatedLedgerEntry,
    ExchangeRateTable,
    Transaction,
)
from src.domain.services.aggregation import aggregate_ledger
from src.domain.services.classification import (
    build_classification_context,
    classify_transactions,
)
from src.domain.services.fx import resolve_exchange_rates
from src.domain.services.importing import (
    collect_manual_actions,
    map_import_records,
)
from src.domain.services.receivables import net_receivables, synthetic_entries
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SyncTransactionsResult:
    """Result of a reconciliation run.

    Attributes:
        success: Whether the batch was reconciled and persisted.
        message: Human-readable summary.
        transaction_count: Number of imported transactions.
        preserved_action_count: Imported transactions with a carried-over
            manual action.
        ledger_count: Number of ledger lines written.
        months: Month buckets replaced by the import.
        rates: Exchange rates derived from the batch.
        ledger: Ledger lines written.
    """

    success: bool
    message: str
    transaction_count: int = 0
    preserved_action_count: int = 0
    ledger_count: int = 0
    months: list[str] = field(default_factory=list)
    rates: ExchangeRateTable = field(default_factory=ExchangeRateTable)
    ledger: list[AggregatedLedgerEntry] = field(default_factory=list)


class SyncTransactionsUseCase:
    """Reconcile imported transactions into the persisted store.

    The use case depends only on the RowStorePort. Reference reads degrade
    to empty inputs; failures reading stored transactions or writing
    propagate to the caller.
    """

    def __init__(
        self,
        row_store: RowStorePort,
        logger=None,
        base_currency: str = BASE_CURRENCY,
        tech_fee_income_month: int = TECH_FEE_INCOME_MONTH,
        tech_fee_income_threshold: Decimal = TECH_FEE_INCOME_THRESHOLD,
        note_max_length: int = LEDGER_NOTE_MAX_LENGTH,
    ) -> None:
        """Initialize the use case.

        Args:
            row_store: Port providing whole-table reads and writes.
            logger: Optional logger compatible with logging.Logger-like API.
            base_currency: Currency of the ledger.
            tech_fee_income_month: Month in which the technician fee is income.
            tech_fee_income_threshold: Minimum amount of that income.
            note_max_length: Maximum length of ledger notes.
        """
        self._row_store = row_store
        self._logger = logger or get_app_logger()
        self._reader = ReferenceDataReader(row_store, logger=self._logger)
        self._base_currency = base_currency
        self._tech_fee_income_month = tech_fee_income_month
        self._tech_fee_income_threshold = tech_fee_income_threshold
        self._note_max_length = note_max_length

    def run(
        self,
        records: Iterable[Mapping[str, Any]],
    ) -> SyncTransactionsResult:
        """Execute the reconciliation batch.

        Args:
            records: Parsed import records keyed by the export's columns.

        Returns:
            SyncTransactionsResult: Summary of the run.
        """
        records = list(records)
        if not records:
            self._logger.warning("No import records to reconcile")
            return SyncTransactionsResult(
                success=False,
                message="No transactions found to import.",
            )
        self._logger.info(f"Reconciling {len(records)} import records")

        prior_rows, recurring, one_off_events = self._fetch_dependencies()
        manual_actions = collect_manual_actions(prior_rows)
        self._logger.info(
            f"Loaded {len(manual_actions)} manual actions from existing data"
        )

        transactions = map_import_records(
            records, manual_actions, self._base_currency
        )
        months = sorted(
            {tx.year_month for tx in transactions if tx.year_month}
        )
        self._logger.info(f"Updating months: {months}")

        context = build_classification_context(
            recurring,
            one_off_events,
            tech_fee_income_month=self._tech_fee_income_month,
            tech_fee_income_threshold=self._tech_fee_income_threshold,
        )
        classify_transactions(transactions, context)
        fx = resolve_exchange_rates(
            transactions, self._base_currency, logger=self._logger
        )
        outcomes = net_receivables(
            transactions,
            fx.rates,
            self._base_currency,
            logger=self._logger,
        )

        self._write_transactions(prior_rows, transactions, months)
        ledger = aggregate_ledger(
            transactions,
            synthetic_entries(outcomes),
            fx.rates,
            base_currency=self._base_currency,
            note_max_length=self._note_max_length,
            logger=self._logger,
        )
        self._write_ledger(ledger)

        preserved = sum(1 for tx in transactions if tx.manual_action)
        message = (
            f"Synced {len(transactions)} tx. History: {len(ledger)} items."
        )
        self._logger.info(message)
        return SyncTransactionsResult(
            success=True,
            message=message,
            transaction_count=len(transactions),
            preserved_action_count=preserved,
            ledger_count=len(ledger),
            months=months,
            rates=fx.rates,
            ledger=ledger,
        )

    def _fetch_dependencies(self):
        """Read prior transactions and reference data in parallel.

        A failed read of the stored transactions propagates; the reference
        tables degrade to empty.
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            prior = pool.submit(
                self._row_store.fetch_rows, TABLE_TRANSACTIONS
            )
            recurring = pool.submit(self._reader.fetch_recurring)
            one_off = pool.submit(self._reader.fetch_one_off_events)
            return prior.result(), recurring.result(), one_off.result()

    def _write_transactions(
        self,
        prior_rows: list[dict[str, Any]],
        transactions: list[Transaction],
        months: list[str],
    ) -> int:
        """Replace the stored transactions of the imported months.

        Args:
            prior_rows: Rows currently stored.
            transactions: Reconciled transactions of this batch.
            months: Month buckets covered by the batch.

        Returns:
            int: Number of rows written.
        """
        replaced = set(months)
        kept = [
            row for row in prior_rows if row.get("YearMonth") not in replaced
        ]
        rows = kept + [transaction_to_row(tx) for tx in transactions]
        count = self._row_store.replace_rows(TABLE_TRANSACTIONS, rows)
        self._logger.info(
            f"Wrote {count} transactions ({len(kept)} kept from other months)"
        )
        return count

    def _write_ledger(self, ledger: list[AggregatedLedgerEntry]) -> int:
        count = self._row_store.replace_rows(
            TABLE_LEDGER,
            [ledger_entry_to_row(entry) for entry in ledger],
        )
        self._logger.info(f"Wrote {count} ledger lines into {TABLE_LEDGER}")
        return count


__all__ = ["SyncTransactionsUseCase", "SyncTransactionsResult"]
