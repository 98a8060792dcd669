"""Simple CLI to validate the ledger database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer and runs a basic health
check against the configured ledger database.
"""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run a basic connectivity check against the ledger database."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
    finally:
        adapter.dispose()

    logger.info("Ledger connection is working.")


if __name__ == "__main__":
    main()
