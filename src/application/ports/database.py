"""Database ports for the reconciliation pipeline.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the ledger database."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine holding transactions, ledger and reference tables.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger database.
        """

    def dispose(self) -> None:
        """Release pooled connections held by the engine."""


__all__ = ["DatabaseEnginePort"]
