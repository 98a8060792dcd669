"""Row store backed by SQLAlchemy tables of text columns."""

from typing import Any

from sqlalchemy import inspect, text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.row_store import RowStorePort
from src.infrastructure.logging.logger import get_app_logger


def _collect_columns(rows: list[dict[str, Any]]) -> list[str]:
    """Return the union of row keys in first-seen order."""
    columns: dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(str(key), None)
    return list(columns)


def _to_text(value: Any) -> str | None:
    return None if value is None else str(value)


class SqlAlchemyRowStore(RowStorePort):
    """RowStorePort implementation storing every field as ``TEXT``.

    Tables are created on first write with one column per row key; keys
    unseen so far are added with ``ALTER TABLE``. Replacing a table runs the
    delete and the inserts in a single transaction.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the row store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def _quote(self, identifier: str) -> str:
        engine = self._db_port.get_ledger_engine()
        return engine.dialect.identifier_preparer.quote(identifier)

    def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        """Return every row of ``table`` as a field-keyed dict.

        Args:
            table: Table name.

        Returns:
            list[dict[str, Any]]: Rows in storage order, empty when the
            table does not exist.
        """
        engine = self._db_port.get_ledger_engine()
        if not inspect(engine).has_table(table):
            self._logger.warning(f"Table {table} does not exist yet")
            return []
        with engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT * FROM {self._quote(table)}")
            ).all()
        return [dict(row._mapping) for row in rows]

    def replace_rows(self, table: str, rows: list[dict[str, Any]]) -> int:
        """Replace the content of ``table`` with ``rows``.

        Args:
            table: Table name.
            rows: Flat rows to write.

        Returns:
            int: Number of rows inserted.
        """
        columns = _collect_columns(rows)
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            exists = self._ensure_table(conn, table, columns)
            if not exists:
                return 0
            conn.exec_driver_sql(f"DELETE FROM {self._quote(table)}")
            if rows:
                conn.execute(
                    self._insert_statement(table, columns),
                    [
                        {
                            f"p{index}": _to_text(row.get(column))
                            for index, column in enumerate(columns)
                        }
                        for row in rows
                    ],
                )
        self._logger.info(f"Replaced {table} with {len(rows)} rows")
        return len(rows)

    def close(self) -> None:
        self._db_port.dispose()

    def _ensure_table(self, conn, table: str, columns: list[str]) -> bool:
        """Create the table or add missing columns.

        Returns:
            bool: Whether the table exists after the call.
        """
        inspector = inspect(conn)
        if not inspector.has_table(table):
            if not columns:
                return False
            column_sql = ", ".join(
                f"{self._quote(column)} TEXT" for column in columns
            )
            conn.exec_driver_sql(
                f"CREATE TABLE {self._quote(table)} ({column_sql})"
            )
            return True
        existing = {column["name"] for column in inspector.get_columns(table)}
        for column in columns:
            if column not in existing:
                conn.exec_driver_sql(
                    f"ALTER TABLE {self._quote(table)} "
                    f"ADD COLUMN {self._quote(column)} TEXT"
                )
        return True

    def _insert_statement(self, table: str, columns: list[str]):
        names = ", ".join(self._quote(column) for column in columns)
        params = ", ".join(f":p{index}" for index in range(len(columns)))
        return text(
            f"INSERT INTO {self._quote(table)} ({names}) VALUES ({params})"
        )


__all__ = ["SqlAlchemyRowStore"]
