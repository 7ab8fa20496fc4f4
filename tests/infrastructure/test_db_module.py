"""Tests for the infrastructure.db module."""

import pytest

from fincommand.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINCOMMAND_DB_URL", "postgresql://example")

    assert db_module._get_env_var("FINCOMMAND_DB_URL") == "postgresql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("FINCOMMAND_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("FINCOMMAND_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://records")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://records"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_adapter_creates_engine_once(monkeypatch):
    """The adapter should read the URL lazily and memoize the engine."""
    created = []

    class _Engine:
        disposed = False

        def dispose(self):
            self.disposed = True

    def fake_create_engine(url):
        created.append(url)
        return _Engine()

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINCOMMAND_DB_URL", "postgresql://records")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()
    engine_one = adapter.get_engine()
    engine_two = adapter.get_engine()

    assert engine_one is engine_two
    assert created == ["postgresql://records"]

    adapter.dispose()

    assert engine_one.disposed
    assert adapter.get_engine() is not engine_one
    assert created == ["postgresql://records", "postgresql://records"]


def test_adapter_prefers_explicit_url(monkeypatch):
    monkeypatch.setattr(db_module, "_create_engine", lambda url: f"engine:{url}")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(db_url="sqlite://")

    assert adapter.get_engine() == "engine:sqlite://"
