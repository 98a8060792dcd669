"""Valuation of the asset inventory, fixed assets and upcoming liquidity."""

from collections.abc import Callable, Iterable, Mapping
from datetime import date
from decimal import Decimal

from src.domain.constants import (
    EXPENSE_TYPE,
    HOUSE_CATEGORY,
    INSURANCE_POLICY_CURRENCIES,
)
from src.domain.models import (
    Asset,
    FixedAssetValuation,
    InsuranceYearRecord,
    LiquidBreakdown,
    LiquidityCheck,
    OneOffEvent,
)
from src.domain.services.projection import rate_for
from src.utils.decimal_utils import round_half_up

PriceLookup = Callable[[str], Decimal | None]


def resolve_unit_price(
    name: str,
    price_lookup: PriceLookup | None,
) -> Decimal:
    """Return the unit price for an instrument name, defaulting to 1."""
    if price_lookup is not None:
        price = price_lookup(name)
        if price is None:
            price = price_lookup(name.upper())
        if price:
            return price
    return Decimal("1")


def asset_value(
    asset: Asset,
    rates: Mapping[str, Decimal],
    price_lookup: PriceLookup | None = None,
) -> Decimal:
    """Quantity times unit price times rate to base."""
    price = resolve_unit_price(asset.name, price_lookup)
    return asset.quantity * price * rate_for(asset.currency, rates)


def calculate_net_worth(
    assets: Iterable[Asset],
    rates: Mapping[str, Decimal],
    price_lookup: PriceLookup | None = None,
) -> Decimal:
    return sum(
        (asset_value(asset, rates, price_lookup) for asset in assets),
        Decimal("0"),
    )


def _is_cash(asset: Asset) -> bool:
    return asset.category == "Cash" or asset.type == "Fiat"


def calculate_liquid_breakdown(
    assets: Iterable[Asset],
    rates: Mapping[str, Decimal],
    price_lookup: PriceLookup | None = None,
) -> LiquidBreakdown:
    """Split liquid holdings into cash, stock, crypto and other."""
    cash = stock = crypto = other = Decimal("0")
    for asset in assets:
        value = asset_value(asset, rates, price_lookup)
        if _is_cash(asset):
            cash += value
        elif asset.category in ("Stock", "ETF") or asset.type == "Stock":
            stock += value
        elif asset.category == "Crypto" or asset.type == "Crypto":
            crypto += value
        else:
            other += value
    return LiquidBreakdown(
        total=round_half_up(cash + stock + crypto + other),
        cash=round_half_up(cash),
        stock=round_half_up(stock),
        crypto=round_half_up(crypto),
        other=round_half_up(other),
    )


def latest_cash_value(
    records: Iterable[InsuranceYearRecord],
    as_of: date,
) -> Decimal:
    """Cash value of the latest policy-year record dated on or before as_of."""
    value = Decimal("0")
    dated = sorted(
        (record for record in records if record.date is not None),
        key=lambda record: record.date,
    )
    for record in dated:
        if record.date > as_of:
            break
        value = record.cash_value
    return value


def calculate_fixed_assets(
    one_off_events: Iterable[OneOffEvent],
    insurance: Mapping[str, list[InsuranceYearRecord]],
    rates: Mapping[str, Decimal],
    today: date,
) -> FixedAssetValuation:
    """Value house equity and insurance cash value in the base currency.

    House equity is the sum of past ``House`` one-off events. Each insurance
    policy contributes the cash value of its latest past record, converted
    from the policy currency.
    """
    house = sum(
        (
            event.amount
            for event in one_off_events
            if event.category == HOUSE_CATEGORY
            and event.date is not None
            and event.date <= today
        ),
        Decimal("0"),
    )
    by_policy = {}
    for policy_id, currency in INSURANCE_POLICY_CURRENCIES.items():
        cash_value = latest_cash_value(insurance.get(policy_id, []), today)
        by_policy[policy_id] = round_half_up(
            cash_value * rate_for(currency, rates)
        )
    insurance_total = sum(by_policy.values(), Decimal("0"))
    return FixedAssetValuation(
        total=round_half_up(house + insurance_total),
        house=round_half_up(house),
        insurance=insurance_total,
        by_policy=by_policy,
    )


def check_liquidity(
    assets: Iterable[Asset],
    one_off_events: Iterable[OneOffEvent],
    rates: Mapping[str, Decimal],
    today: date,
    price_lookup: PriceLookup | None = None,
) -> LiquidityCheck:
    """Compare liquid cash with the next upcoming one-off expense."""
    liquid_cash = sum(
        (
            asset_value(asset, rates, price_lookup)
            for asset in assets
            if _is_cash(asset)
        ),
        Decimal("0"),
    )
    upcoming = sorted(
        (
            event
            for event in one_off_events
            if event.type == EXPENSE_TYPE
            and event.date is not None
            and event.date > today
        ),
        key=lambda event: event.date,
    )
    if upcoming and upcoming[0].amount > liquid_cash:
        return LiquidityCheck(
            liquid_cash=liquid_cash,
            has_crisis=True,
            shortfall=upcoming[0].amount - liquid_cash,
        )
    return LiquidityCheck(
        liquid_cash=liquid_cash,
        has_crisis=False,
        shortfall=Decimal("0"),
    )


__all__ = [
    "PriceLookup",
    "resolve_unit_price",
    "asset_value",
    "calculate_net_worth",
    "calculate_liquid_breakdown",
    "latest_cash_value",
    "calculate_fixed_assets",
    "check_liquidity",
]
