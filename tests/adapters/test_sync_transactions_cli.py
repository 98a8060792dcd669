"""Tests for the sync_transactions_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters import sync_transactions_cli


CSV_CONTENT = (
    "日期,時間,名稱,金額,幣種,記錄類型\n"
    "2024/05/03,08:00,Gym fee,-1500,TWD,支出\n"
    ",,,,,\n"
    "2024/05/12,09:00,Coffee,-450,TWD,支出\n"
)


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("\ufeff" + CSV_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
def wiring(monkeypatch):
    """Replace the container builders with fakes."""
    fake_store = MagicMock()
    fake_use_case = MagicMock()
    captured = {}

    def _build_adapter(db_url):
        captured["db_url"] = db_url
        return "adapter"

    monkeypatch.setattr(
        sync_transactions_cli, "build_database_adapter", _build_adapter
    )
    monkeypatch.setattr(
        sync_transactions_cli, "build_row_store", lambda db_port: fake_store
    )
    monkeypatch.setattr(
        sync_transactions_cli,
        "build_sync_transactions_use_case",
        lambda row_store: fake_use_case,
    )
    monkeypatch.setattr(
        sync_transactions_cli, "get_app_logger", lambda: MagicMock()
    )
    monkeypatch.setattr(
        sync_transactions_cli, "get_usage_logger", lambda: MagicMock()
    )
    return SimpleNamespace(
        store=fake_store,
        use_case=fake_use_case,
        captured=captured,
    )


def test_read_export_strips_bom_and_blank_rows(csv_path):
    """The export reader should drop the BOM and empty lines."""
    records = sync_transactions_cli.read_export(csv_path)

    assert [record["名稱"] for record in records] == ["Gym fee", "Coffee"]
    assert records[0]["日期"] == "2024/05/03"


def test_main_runs_use_case_and_prints_summary(csv_path, wiring, capsys):
    """The CLI should run one batch and close the store."""
    wiring.use_case.run.return_value = SimpleNamespace(
        success=True,
        message="Synced 2 tx. History: 2 items.",
        months=["2024-05"],
        preserved_action_count=1,
    )

    exit_code = sync_transactions_cli.main(
        [str(csv_path), "--db-url", "sqlite:///ledger.db"]
    )

    assert exit_code == 0
    assert wiring.captured["db_url"] == "sqlite:///ledger.db"
    records = wiring.use_case.run.call_args.args[0]
    assert len(records) == 2
    wiring.store.close.assert_called_once()
    out = capsys.readouterr().out
    assert "Synced 2 tx" in out
    assert "2024-05" in out


def test_main_reports_failure_message(csv_path, wiring, capsys):
    """Exceptions should become a single failure message."""
    wiring.use_case.run.side_effect = RuntimeError("disk full")

    exit_code = sync_transactions_cli.main([str(csv_path)])

    assert exit_code == 1
    assert "Sync failed: disk full" in capsys.readouterr().out
    wiring.store.close.assert_called_once()


def test_main_returns_error_for_empty_batch(csv_path, wiring, capsys):
    """An unsuccessful result should produce a non-zero exit status."""
    wiring.use_case.run.return_value = SimpleNamespace(
        success=False,
        message="No transactions found to import.",
        months=[],
        preserved_action_count=0,
    )

    assert sync_transactions_cli.main([str(csv_path)]) == 1
    assert "No transactions" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path, wiring, capsys):
    """A missing export should fail before the store is opened."""
    exit_code = sync_transactions_cli.main([str(tmp_path / "missing.csv")])

    assert exit_code == 1
    assert "Sync failed" in capsys.readouterr().out
    wiring.store.close.assert_not_called()
