"""Tests for the init_db CLI adapter."""

from unittest.mock import MagicMock

import pytest

from fincommand.adapters import init_db_cli


def test_main_creates_schema_and_disposes(monkeypatch, sqlite_db, capsys):
    dispose = MagicMock()
    monkeypatch.setattr(sqlite_db, "dispose", dispose)
    monkeypatch.setattr(init_db_cli, "build_database_adapter", lambda: sqlite_db)
    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: MagicMock())

    init_db_cli.main()

    assert "Ensured 10 tables" in capsys.readouterr().out
    dispose.assert_called_once()


def test_main_disposes_when_schema_fails(monkeypatch):
    adapter = MagicMock()

    def _boom(db_port):
        raise RuntimeError("no database")

    monkeypatch.setattr(init_db_cli, "build_database_adapter", lambda: adapter)
    monkeypatch.setattr(init_db_cli, "ensure_schema", _boom)
    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: MagicMock())

    with pytest.raises(RuntimeError):
        init_db_cli.main()

    adapter.dispose.assert_called_once()
