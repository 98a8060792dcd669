"""Use case to value the asset inventory and fixed assets."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.ports.price_lookup import PriceLookupPort
from src.application.ports.row_store import RowStorePort
from src.application.use_cases.reference_data import ReferenceDataReader
from src.domain.models import (
    FixedAssetValuation,
    LiquidBreakdown,
    LiquidityCheck,
)
from src.domain.services.projection import group_insurance_records
from src.domain.services.valuation import (
    calculate_fixed_assets,
    calculate_liquid_breakdown,
    calculate_net_worth,
    check_liquidity,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AssetValuation:
    """Valuation snapshot in the base currency.

    Attributes:
        liquid: Liquid holdings split by asset class.
        net_worth: Total value of the asset inventory.
        fixed: House equity and insurance cash value.
        liquidity: Liquid cash compared with the next one-off expense.
    """

    liquid: LiquidBreakdown
    net_worth: Decimal
    fixed: FixedAssetValuation
    liquidity: LiquidityCheck

    @property
    def total(self) -> Decimal:
        return self.liquid.total + self.fixed.total


class GetAssetValuationUseCase:
    """Value liquid holdings, fixed assets and upcoming liquidity."""

    def __init__(
        self,
        row_store: RowStorePort,
        price_lookup: PriceLookupPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            row_store: Port providing whole-table reads.
            price_lookup: Optional port returning instrument unit prices.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._price_lookup = price_lookup
        self._logger = logger or get_app_logger()
        self._reader = ReferenceDataReader(row_store, logger=self._logger)

    def execute(
        self,
        rates: Mapping[str, Decimal] | None = None,
        today: date | None = None,
    ) -> AssetValuation:
        """Return the valuation snapshot.

        Args:
            rates: Currency to base-currency rates.
            today: Valuation date; defaults to the current date.

        Returns:
            AssetValuation: Liquid, fixed and liquidity figures.
        """
        rates = rates or {}
        today = today or date.today()
        lookup = (
            self._price_lookup.get_price
            if self._price_lookup is not None
            else None
        )

        assets = self._reader.fetch_assets()
        one_off_events = self._reader.fetch_one_off_events()
        insurance = group_insurance_records(
            self._reader.fetch_insurance_records()
        )

        liquid = calculate_liquid_breakdown(assets, rates, lookup)
        net_worth = calculate_net_worth(assets, rates, lookup)
        fixed = calculate_fixed_assets(one_off_events, insurance, rates, today)
        liquidity = check_liquidity(
            assets, one_off_events, rates, today, lookup
        )

        self._logger.info(
            f"Valuation computed: liquid={liquid.total}, "
            f"fixed={fixed.total}, crisis={liquidity.has_crisis}"
        )
        return AssetValuation(
            liquid=liquid,
            net_worth=net_worth,
            fixed=fixed,
            liquidity=liquidity,
        )


__all__ = ["AssetValuation", "GetAssetValuationUseCase"]
