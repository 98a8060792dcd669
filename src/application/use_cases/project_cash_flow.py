"""Use case projecting a calendar year of cash flow."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.application.ports.price_lookup import PriceLookupPort
from src.application.ports.row_store import RowStorePort
from src.application.use_cases.get_asset_valuation import (
    GetAssetValuationUseCase,
)
from src.application.use_cases.reference_data import ReferenceDataReader
from src.domain.models import AggregatedLedgerEntry, ProjectionMonth
from src.domain.services.projection import (
    group_insurance_records,
    project_cash_flow,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class CashFlowProjection:
    """Projected months plus the recorded actuals of the same year.

    Attributes:
        target_year: Projected calendar year.
        initial_total: Net worth the projection starts from.
        months: Twelve projected months, January to December.
        actuals: Ledger lines recorded for the target year.
    """

    target_year: int
    initial_total: Decimal
    months: list[ProjectionMonth] = field(default_factory=list)
    actuals: list[AggregatedLedgerEntry] = field(default_factory=list)

    @property
    def ending_net_worth(self) -> Decimal:
        if not self.months:
            return self.initial_total
        return self.months[-1].projected_net_worth


class ProjectCashFlowUseCase:
    """Expand recurring items and one-off events into a monthly projection."""

    def __init__(
        self,
        row_store: RowStorePort,
        price_lookup: PriceLookupPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            row_store: Port providing whole-table reads.
            price_lookup: Optional port used to value the starting assets.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._row_store = row_store
        self._price_lookup = price_lookup
        self._logger = logger or get_app_logger()
        self._reader = ReferenceDataReader(row_store, logger=self._logger)

    def execute(
        self,
        target_year: int,
        rates: Mapping[str, Decimal] | None = None,
        initial_total: Decimal | None = None,
        today: date | None = None,
    ) -> CashFlowProjection:
        """Return the projection for ``target_year``.

        Args:
            target_year: Calendar year to project.
            rates: Currency to base-currency rates.
            initial_total: Starting net worth; defaults to the current
                liquid plus fixed asset valuation.
            today: Valuation date used for the default starting total.

        Returns:
            CashFlowProjection: Projected months and recorded actuals.
        """
        rates = rates or {}
        recurring = self._reader.fetch_recurring()
        one_off_events = self._reader.fetch_one_off_events()
        insurance = group_insurance_records(
            self._reader.fetch_insurance_records()
        )

        if initial_total is None:
            valuation = GetAssetValuationUseCase(
                self._row_store,
                price_lookup=self._price_lookup,
                logger=self._logger,
            ).execute(rates=rates, today=today)
            initial_total = valuation.total
        initial_total = coerce_decimal(initial_total)

        months = project_cash_flow(
            recurring,
            initial_total=initial_total,
            insurance=insurance,
            rates=rates,
            one_off_events=one_off_events,
            target_year=target_year,
        )
        prefix = f"{target_year}-"
        actuals = [
            entry
            for entry in self._reader.fetch_ledger()
            if entry.year_month.startswith(prefix)
        ]

        self._logger.info(
            f"Projected {len(months)} months of {target_year} from "
            f"{len(recurring)} recurring items and "
            f"{len(one_off_events)} one-off events"
        )
        return CashFlowProjection(
            target_year=target_year,
            initial_total=initial_total,
            months=months,
            actuals=actuals,
        )


__all__ = ["CashFlowProjection", "ProjectCashFlowUseCase"]
