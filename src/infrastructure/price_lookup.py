"""Price lookup backed by the unit prices of the asset inventory."""

from decimal import Decimal

from src.application.ports.price_lookup import PriceLookupPort
from src.application.ports.row_store import RowStorePort
from src.domain.constants import TABLE_ASSETS
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_amount


# Inventory names mapped to market ticker symbols.
TICKER_MAP = {
    "006208": "006208.TW",
    "TW-006208": "006208.TW",
    "00694B": "00694B.TWO",
    "TW-00694B": "00694B.TWO",
    "2330": "2330.TW",
    "TW-2330": "2330.TW",
    "VOO": "VOO",
    "BND": "BND",
    "QQQ": "QQQ",
    "AAPL": "AAPL",
    "TSLA": "TSLA",
    "NVDA": "NVDA",
    "MSFT": "MSFT",
    "GOOGL": "GOOGL",
    "BTC": "BTC-USD",
    "ETH": "ETH-USD",
    "SOL": "SOL-USD",
    "USDT": "USDT-USD",
    "USDC": "USDC-USD",
}


class InventoryPriceLookup(PriceLookupPort):
    """Serve unit prices recorded in the asset inventory.

    Prices are read once per instance. Each priced asset is registered under
    its name and under the ticker symbol its name maps to.
    """

    def __init__(
        self,
        row_store: RowStorePort,
        logger=None,
        ticker_map: dict[str, str] | None = None,
    ) -> None:
        """Initialize the lookup.

        Args:
            row_store: Port providing whole-table reads.
            logger: Optional logger compatible with logging.Logger-like API.
            ticker_map: Optional override of the name to ticker mapping.
        """
        self._row_store = row_store
        self._logger = logger or get_app_logger()
        self._ticker_map = TICKER_MAP if ticker_map is None else ticker_map
        self._prices: dict[str, Decimal] | None = None

    def get_price(self, instrument: str) -> Decimal | None:
        """Return the recorded unit price of ``instrument``.

        Args:
            instrument: Asset name or ticker symbol.

        Returns:
            Decimal | None: Unit price, or None when unavailable.
        """
        if self._prices is None:
            self._prices = self._load_prices()
        return self._prices.get(instrument)

    def _load_prices(self) -> dict[str, Decimal]:
        try:
            rows = self._row_store.fetch_rows(TABLE_ASSETS)
        except Exception as exc:
            self._logger.warning(f"Could not read unit prices: {exc}")
            return {}

        prices: dict[str, Decimal] = {}
        for row in rows:
            name = str(row.get("Name") or "").strip()
            raw_price = row.get("Unit_Price")
            if not name or raw_price is None or str(raw_price).strip() == "":
                continue
            price = parse_amount(raw_price)
            prices[name] = price
            for key in (name, name.upper()):
                ticker = self._ticker_map.get(key)
                if ticker:
                    prices[ticker] = price
        self._logger.info(f"Loaded unit prices for {len(prices)} instruments")
        return prices


__all__ = ["TICKER_MAP", "InventoryPriceLookup"]
