"""Database infrastructure for the reconciliation pipeline.

This module exposes concrete helpers to create SQLAlchemy engines connected
to the ledger database. It belongs to the infrastructure layer because it
deals with external systems (PostgreSQL, SQLite).
"""

import os

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


LEDGER_DB_URL_ENV = "LEDGER_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    The ``.env`` file of the working directory is loaded first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite URLs use the dialect's default pool; other backends get a small
    connection pool with health checks.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation owning one SQLAlchemy engine.

    The engine is created on first use from ``LEDGER_DB_URL`` (unless one is
    passed in) and released by ``dispose``; each batch run constructs its own
    adapter instead of sharing a process-wide engine.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        db_url: str | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            engine: Optional pre-built engine.
            db_url: Optional database URL overriding ``LEDGER_DB_URL``.
        """
        self._engine = engine
        self._db_url = db_url

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger database.
        """
        if self._engine is None:
            db_url = self._db_url or _get_env_var(LEDGER_DB_URL_ENV)
            self._engine = _create_engine(db_url)
        return self._engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


__all__ = [
    "LEDGER_DB_URL_ENV",
    "SqlAlchemyDatabaseEngineAdapter",
]
