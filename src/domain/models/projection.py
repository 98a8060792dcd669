"""Domain models for cash-flow projection and asset valuation."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ProjectionLine:
    """Drill-down line contributing to a projected month."""

    name: str
    amount: Decimal
    item_id: str
    is_converted: bool = False


@dataclass(frozen=True)
class ProjectionMonth:
    """Projected totals for one calendar month.

    Attributes:
        year: Calendar year.
        month: Month number (1-12).
        label: Display label such as ``Jan 2026``.
        income: Projected income.
        expense: Projected consumption.
        savings: Projected retained assets.
        insurance_gain: Cash-value gain already counted in savings.
        net: Net cash change for the month.
        projected_net_worth: Running projected net worth after the month.
    """

    year: int
    month: int
    label: str
    income: Decimal
    expense: Decimal
    savings: Decimal
    insurance_gain: Decimal
    net: Decimal
    projected_net_worth: Decimal
    income_items: list[ProjectionLine] = field(default_factory=list)
    expense_items: list[ProjectionLine] = field(default_factory=list)
    savings_items: list[ProjectionLine] = field(default_factory=list)


@dataclass(frozen=True)
class FixedAssetValuation:
    """House equity and insurance cash value in the base currency."""

    total: Decimal
    house: Decimal
    insurance: Decimal
    by_policy: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class LiquidBreakdown:
    """Liquid holdings split by asset class."""

    total: Decimal
    cash: Decimal
    stock: Decimal
    crypto: Decimal
    other: Decimal


@dataclass(frozen=True)
class LiquidityCheck:
    """Comparison of liquid cash with the next one-off expense."""

    liquid_cash: Decimal
    has_crisis: bool
    shortfall: Decimal


__all__ = [
    "ProjectionLine",
    "ProjectionMonth",
    "FixedAssetValuation",
    "LiquidBreakdown",
    "LiquidityCheck",
]
