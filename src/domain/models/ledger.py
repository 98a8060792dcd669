"""Domain models for exchange rates and the actual-expense ledger."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ExchangeRateTable:
    """Rates to the base currency derived from exchange pairs.

    Each mapping is ``scope -> currency -> rate``; the global mapping is
    ``currency -> rate``.
    """

    project_rates: dict[str, dict[str, Decimal]] = field(default_factory=dict)
    monthly_rates: dict[str, dict[str, Decimal]] = field(default_factory=dict)
    global_rates: dict[str, Decimal] = field(default_factory=dict)

    def lookup(
        self,
        currency: str,
        project: str = "",
        year_month: str = "",
    ) -> Decimal | None:
        """Return the most specific rate: project, then month, then global.

        Args:
            currency: Foreign currency code.
            project: Project label of the transaction.
            year_month: Month bucket of the transaction.

        Returns:
            Decimal | None: Rate to the base currency, or None.
        """
        rate = self.project_rates.get(project, {}).get(currency)
        if not rate:
            rate = self.monthly_rates.get(year_month, {}).get(currency)
        if not rate:
            rate = self.global_rates.get(currency)
        return rate or None

    def convert(
        self,
        amount: Decimal,
        currency: str,
        base_currency: str,
        project: str = "",
        year_month: str = "",
    ) -> Decimal:
        """Convert an amount, leaving it native when no rate is known."""
        if currency == base_currency:
            return amount
        rate = self.lookup(currency, project, year_month)
        if rate is None:
            return amount
        return amount * rate


@dataclass(frozen=True)
class SyntheticEntry:
    """Ledger contribution produced by receivable netting."""

    year_month: str
    id: str
    name: str
    amount: Decimal
    note: str


@dataclass(frozen=True)
class AggregatedLedgerEntry:
    """One persisted line of the month-by-budget-item ledger."""

    year_month: str
    budget_item_id: str
    name: str
    amount: Decimal
    note: str = ""


__all__ = ["ExchangeRateTable", "SyntheticEntry", "AggregatedLedgerEntry"]
