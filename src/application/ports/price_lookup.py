"""Port for instrument price lookups."""

from decimal import Decimal
from typing import Protocol


class PriceLookupPort(Protocol):
    """Port returning the current unit price of an instrument."""

    def get_price(self, instrument: str) -> Decimal | None:
        """Return the unit price, or None when unavailable."""


__all__ = ["PriceLookupPort"]
