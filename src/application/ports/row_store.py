"""Port for reading and replacing named tables of flat rows."""

from typing import Any, Protocol


class RowStorePort(Protocol):
    """Port exposing whole-table reads and writes.

    Rows are flat mappings of field name to value. Writes replace the whole
    table; there are no incremental row patches.
    """

    def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        """Return every row of ``table`` (empty when the table is absent)."""

    def replace_rows(self, table: str, rows: list[dict[str, Any]]) -> int:
        """Replace the content of ``table`` and return the row count."""

    def close(self) -> None:
        """Release the underlying connection resources."""


__all__ = ["RowStorePort"]
