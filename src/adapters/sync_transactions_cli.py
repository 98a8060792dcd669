"""CLI adapter to reconcile an expense-tracker CSV export into the ledger.

This module wires the SyncTransactionsUseCase to the SQLAlchemy row store
and provides a command-line entry point for running one import batch.
"""

import argparse
import csv
from pathlib import Path
from typing import Any

from src.infrastructure.container import (
    build_database_adapter,
    build_row_store,
    build_sync_transactions_use_case,
)
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def _is_blank(record: dict[str, Any]) -> bool:
    return not any(str(value).strip() for value in record.values() if value)


def read_export(path: Path) -> list[dict[str, Any]]:
    """Read a CSV export into a list of column-keyed records.

    Args:
        path: Path to the CSV export.

    Returns:
        list[dict[str, Any]]: Records with blank rows removed.
    """
    with path.open(encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        return [record for record in reader if not _is_blank(record)]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconcile a CSV export into transactions and ledger."
    )
    parser.add_argument("csv_path", type=Path, help="CSV export to import")
    parser.add_argument(
        "--db-url",
        default=None,
        help="Database URL (defaults to LEDGER_DB_URL)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one reconciliation batch.

    Args:
        argv: Optional argument list; defaults to ``sys.argv``.

    Returns:
        int: Process exit status.
    """
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    get_usage_logger().info(f"sync_transactions_cli {args.csv_path}")

    row_store = None
    try:
        records = read_export(args.csv_path)
        row_store = build_row_store(build_database_adapter(args.db_url))
        use_case = build_sync_transactions_use_case(row_store)
        result = use_case.run(records)
    except Exception as exc:
        logger.exception(f"Sync failed: {exc}")
        print(f"Sync failed: {exc}")
        return 1
    finally:
        if row_store is not None:
            row_store.close()

    print(result.message)
    if not result.success:
        return 1
    print(f"Months replaced: {', '.join(result.months)}")
    print(f"Manual actions preserved: {result.preserved_action_count}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
