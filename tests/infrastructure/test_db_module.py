"""Tests for the infrastructure.db module."""

from unittest.mock import MagicMock

import pytest

from src.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_DB_URL", "postgresql://example")

    assert db_module._get_env_var("LEDGER_DB_URL") == "postgresql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("LEDGER_DB_URL", raising=False)

    with pytest.raises(RuntimeError, match="LEDGER_DB_URL"):
        db_module._get_env_var("LEDGER_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://ledger")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://ledger"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_keeps_sqlite_default_pool(monkeypatch):
    """SQLite URLs should not receive the QueuePool settings."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    db_module._create_engine("sqlite:///ledger.db")

    assert "poolclass" not in captured["kwargs"]


def test_adapter_creates_engine_once_from_environment(monkeypatch):
    """The adapter should build its engine lazily and reuse it."""
    created = []

    def fake_create_engine(url):
        created.append(url)
        return MagicMock(name=f"engine:{url}")

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_DB_URL", "postgresql://ledger")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()
    engine_one = adapter.get_ledger_engine()
    engine_two = adapter.get_ledger_engine()

    assert engine_one is engine_two
    assert created == ["postgresql://ledger"]


def test_adapter_prefers_explicit_url(monkeypatch):
    """An explicit URL should bypass the environment."""
    monkeypatch.setattr(db_module, "_create_engine", lambda url: url)

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(db_url="sqlite://")

    assert adapter.get_ledger_engine() == "sqlite://"


def test_dispose_releases_engine():
    """dispose should dispose the engine and forget it."""
    engine = MagicMock()
    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(engine=engine)

    adapter.dispose()
    adapter.dispose()

    engine.dispose.assert_called_once()
