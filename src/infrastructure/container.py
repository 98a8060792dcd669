"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_lookup import PriceLookupPort
from src.application.ports.row_store import RowStorePort
from src.application.use_cases.get_asset_valuation import (
    GetAssetValuationUseCase,
)
from src.application.use_cases.project_cash_flow import (
    ProjectCashFlowUseCase,
)
from src.application.use_cases.sync_transactions import (
    SyncTransactionsUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.price_lookup import InventoryPriceLookup
from src.infrastructure.row_store import SqlAlchemyRowStore
from src.infrastructure.settings import LedgerSettings


def build_database_adapter(db_url: str | None = None) -> DatabaseEnginePort:
    """Return a new database adapter owning its own engine."""
    return SqlAlchemyDatabaseEngineAdapter(db_url=db_url)


def build_row_store(
    db_port: DatabaseEnginePort | None = None,
) -> RowStorePort:
    """Return the row store over the ledger database."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRowStore(resolved_db, logger=get_app_logger())


def build_price_lookup(row_store: RowStorePort) -> PriceLookupPort:
    """Return the inventory-backed price lookup."""
    return InventoryPriceLookup(row_store, logger=get_app_logger())


def build_sync_transactions_use_case(
    row_store: RowStorePort,
    settings: LedgerSettings | None = None,
) -> SyncTransactionsUseCase:
    """Return the reconciliation use case configured from settings."""
    resolved = settings or LedgerSettings.from_env()
    return SyncTransactionsUseCase(
        row_store,
        logger=get_app_logger(),
        base_currency=resolved.base_currency,
        tech_fee_income_month=resolved.tech_fee_income_month,
        tech_fee_income_threshold=resolved.tech_fee_income_threshold,
        note_max_length=resolved.note_max_length,
    )


def build_project_cash_flow_use_case(
    row_store: RowStorePort,
) -> ProjectCashFlowUseCase:
    """Return the projection use case with the inventory price lookup."""
    return ProjectCashFlowUseCase(
        row_store,
        price_lookup=build_price_lookup(row_store),
        logger=get_app_logger(),
    )


def build_asset_valuation_use_case(
    row_store: RowStorePort,
) -> GetAssetValuationUseCase:
    """Return the valuation use case with the inventory price lookup."""
    return GetAssetValuationUseCase(
        row_store,
        price_lookup=build_price_lookup(row_store),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_row_store",
    "build_price_lookup",
    "build_sync_transactions_use_case",
    "build_project_cash_flow_use_case",
    "build_asset_valuation_use_case",
]
