"""Application use cases package."""

from .sync_transactions import (
    SyncTransactionsUseCase,
    SyncTransactionsResult,
)
from .project_cash_flow import ProjectCashFlowUseCase, CashFlowProjection
from .get_asset_valuation import GetAssetValuationUseCase, AssetValuation
from .reference_data import ReferenceDataReader

__all__ = [
    "SyncTransactionsUseCase",
    "SyncTransactionsResult",
    "ProjectCashFlowUseCase",
    "CashFlowProjection",
    "GetAssetValuationUseCase",
    "AssetValuation",
    "ReferenceDataReader",
]
