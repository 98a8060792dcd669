"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.project_cash_flow import (
    ProjectCashFlowUseCase,
)
from src.infrastructure import container
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.price_lookup import InventoryPriceLookup
from src.infrastructure.row_store import SqlAlchemyRowStore
from src.infrastructure.settings import LedgerSettings


def test_build_database_adapter_returns_fresh_adapters():
    """Each batch should get its own adapter."""
    first = container.build_database_adapter("sqlite://")
    second = container.build_database_adapter("sqlite://")

    assert isinstance(first, SqlAlchemyDatabaseEngineAdapter)
    assert first is not second


def test_build_row_store_wraps_given_adapter():
    """The row store should use the supplied database port."""
    db_port = MagicMock()

    store = container.build_row_store(db_port)

    assert isinstance(store, SqlAlchemyRowStore)
    store.close()
    db_port.dispose.assert_called_once()


def test_build_sync_use_case_applies_settings():
    """Settings should flow into the reconciliation use case."""
    settings = LedgerSettings(
        base_currency="USD",
        tech_fee_income_month=5,
        tech_fee_income_threshold=Decimal("1"),
        note_max_length=50,
        projection_year=2026,
    )

    use_case = container.build_sync_transactions_use_case(
        MagicMock(),
        settings=settings,
    )

    assert use_case._base_currency == "USD"
    assert use_case._tech_fee_income_month == 5
    assert use_case._note_max_length == 50


def test_build_projection_use_case_uses_inventory_prices():
    """The projection use case should value assets from the inventory."""
    use_case = container.build_project_cash_flow_use_case(MagicMock())

    assert isinstance(use_case, ProjectCashFlowUseCase)
    assert isinstance(use_case._price_lookup, InventoryPriceLookup)
