"""Application ports package."""

from .database import DatabaseEnginePort
from .price_lookup import PriceLookupPort
from .row_store import RowStorePort

__all__ = [
    "DatabaseEnginePort",
    "PriceLookupPort",
    "RowStorePort",
]
