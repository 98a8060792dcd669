"""CLI adapter printing the current asset valuation."""

import argparse

from src.adapters.project_cash_flow_cli import _parse_rates
from src.infrastructure.container import (
    build_asset_valuation_use_case,
    build_database_adapter,
    build_row_store,
)
from src.infrastructure.logging.logger import get_app_logger


def main(argv: list[str] | None = None) -> int:
    """Value liquid and fixed assets and report liquidity."""
    parser = argparse.ArgumentParser(description="Print asset valuation.")
    parser.add_argument("--rate", action="append", default=[])
    parser.add_argument("--db-url", default=None)
    args = parser.parse_args(argv)
    logger = get_app_logger()

    row_store = build_row_store(build_database_adapter(args.db_url))
    try:
        use_case = build_asset_valuation_use_case(row_store)
        valuation = use_case.execute(rates=_parse_rates(args.rate, logger))
    finally:
        row_store.close()

    liquid = valuation.liquid
    print(
        f"Liquid: total={liquid.total}, cash={liquid.cash}, "
        f"stock={liquid.stock}, crypto={liquid.crypto}, other={liquid.other}"
    )
    print(
        f"Fixed: total={valuation.fixed.total}, "
        f"house={valuation.fixed.house}, "
        f"insurance={valuation.fixed.insurance}"
    )
    if valuation.liquidity.has_crisis:
        print(f"Liquidity shortfall: {valuation.liquidity.shortfall}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
