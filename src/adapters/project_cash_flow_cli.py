"""CLI adapter printing the cash-flow projection of a calendar year."""

import argparse
from decimal import Decimal, InvalidOperation

from src.infrastructure.container import (
    build_database_adapter,
    build_project_cash_flow_use_case,
    build_row_store,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def _parse_rates(values: list[str] | None, logger) -> dict[str, Decimal]:
    """Parse ``CUR=RATE`` pairs into a rate table.

    Args:
        values: Raw ``CUR=RATE`` strings.
        logger: Logger used for warnings.

    Returns:
        dict[str, Decimal]: Upper-cased currency to rate.
    """
    rates = {}
    for value in values or []:
        currency, _, raw_rate = value.partition("=")
        try:
            rates[currency.strip().upper()] = Decimal(raw_rate.strip())
        except InvalidOperation:
            logger.warning(
                f"Invalid rate '{value}'. Expected format CUR=RATE."
            )
    return rates


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Project twelve months of income, expense and savings."
    )
    parser.add_argument("--year", type=int, default=None)
    parser.add_argument(
        "--rate",
        action="append",
        default=[],
        help="Rate to the base currency, e.g. USD=31.5 (repeatable)",
    )
    parser.add_argument("--initial-total", type=Decimal, default=None)
    parser.add_argument("--db-url", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the projection and print one line per month."""
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    target_year = args.year or LedgerSettings.from_env().projection_year
    rates = _parse_rates(args.rate, logger)

    row_store = build_row_store(build_database_adapter(args.db_url))
    try:
        use_case = build_project_cash_flow_use_case(row_store)
        projection = use_case.execute(
            target_year=target_year,
            rates=rates,
            initial_total=args.initial_total,
        )
    finally:
        row_store.close()

    print(
        f"Projection {projection.target_year} "
        f"(start={projection.initial_total})"
    )
    for month in projection.months:
        print(
            f"{month.label}: income={month.income}, "
            f"expense={month.expense}, savings={month.savings}, "
            f"net={month.net}, net_worth={month.projected_net_worth}"
        )
    print(f"Recorded ledger lines: {len(projection.actuals)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
