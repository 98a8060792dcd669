"""Tests for the projection and valuation CLI adapters."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters import asset_valuation_cli, project_cash_flow_cli


def _month(label):
    return SimpleNamespace(
        label=label,
        income=Decimal("3000"),
        expense=Decimal("1000"),
        savings=Decimal("0"),
        net=Decimal("2000"),
        projected_net_worth=Decimal("12000"),
    )


def test_parse_rates_skips_invalid_pairs():
    """Invalid CUR=RATE values should be reported and skipped."""
    logger = MagicMock()

    rates = project_cash_flow_cli._parse_rates(["usd=30", "JPY=abc"], logger)

    assert rates == {"USD": Decimal("30")}
    logger.warning.assert_called_once()


def test_projection_main_prints_each_month(monkeypatch, capsys):
    """The CLI should print one line per projected month."""
    fake_store = MagicMock()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = SimpleNamespace(
        target_year=2026,
        initial_total=Decimal("10000"),
        months=[_month("Jan 2026"), _month("Feb 2026")],
        actuals=[],
    )
    monkeypatch.setattr(
        project_cash_flow_cli, "build_database_adapter", lambda url: None
    )
    monkeypatch.setattr(
        project_cash_flow_cli, "build_row_store", lambda db: fake_store
    )
    monkeypatch.setattr(
        project_cash_flow_cli,
        "build_project_cash_flow_use_case",
        lambda store: fake_use_case,
    )
    monkeypatch.setattr(
        project_cash_flow_cli, "get_app_logger", lambda: MagicMock()
    )

    exit_code = project_cash_flow_cli.main(
        ["--year", "2026", "--rate", "USD=30", "--initial-total", "10000"]
    )

    assert exit_code == 0
    fake_use_case.execute.assert_called_once_with(
        target_year=2026,
        rates={"USD": Decimal("30")},
        initial_total=Decimal("10000"),
    )
    fake_store.close.assert_called_once()
    out = capsys.readouterr().out
    assert "Jan 2026: income=3000" in out
    assert "Feb 2026" in out


def test_valuation_main_prints_shortfall(monkeypatch, capsys):
    """The valuation CLI should report a liquidity shortfall."""
    fake_store = MagicMock()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = SimpleNamespace(
        liquid=SimpleNamespace(
            total=Decimal("5000"),
            cash=Decimal("5000"),
            stock=Decimal("0"),
            crypto=Decimal("0"),
            other=Decimal("0"),
        ),
        fixed=SimpleNamespace(
            total=Decimal("0"),
            house=Decimal("0"),
            insurance=Decimal("0"),
        ),
        liquidity=SimpleNamespace(
            has_crisis=True,
            shortfall=Decimal("3000"),
        ),
    )
    monkeypatch.setattr(
        asset_valuation_cli, "build_database_adapter", lambda url: None
    )
    monkeypatch.setattr(
        asset_valuation_cli, "build_row_store", lambda db: fake_store
    )
    monkeypatch.setattr(
        asset_valuation_cli,
        "build_asset_valuation_use_case",
        lambda store: fake_use_case,
    )
    monkeypatch.setattr(
        asset_valuation_cli, "get_app_logger", lambda: MagicMock()
    )

    assert asset_valuation_cli.main([]) == 0
    fake_store.close.assert_called_once()
    assert "Liquidity shortfall: 3000" in capsys.readouterr().out
