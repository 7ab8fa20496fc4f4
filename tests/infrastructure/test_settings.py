"""Tests for infrastructure settings."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fincommand.infrastructure import settings as settings_module
from fincommand.infrastructure.settings import FinCommandSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: MagicMock())
    for name in (
        "FINCOMMAND_EXCHANGE_RATE",
        "FINCOMMAND_DELETE_BATCH_SIZE",
        "FINCOMMAND_PREFERENCES_FILE",
        "FINCOMMAND_APP_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults():
    settings = FinCommandSettings.from_env()

    assert settings.exchange_rate == Decimal("58.50")
    assert settings.delete_batch_size == 100
    assert settings.app_name == "FinCommand"
    assert settings.preferences_file.name == "preferences.json"
    assert settings.preferences_file.parent.name == "data"


def test_from_env_reads_values(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("FINCOMMAND_EXCHANGE_RATE", "60.25")
    monkeypatch.setenv("FINCOMMAND_DELETE_BATCH_SIZE", "25")
    monkeypatch.setenv("FINCOMMAND_PREFERENCES_FILE", str(tmp_path / "p.json"))
    monkeypatch.setenv("FINCOMMAND_APP_NAME", "Caja Chica")

    settings = FinCommandSettings.from_env()

    assert settings.exchange_rate == Decimal("60.25")
    assert settings.delete_batch_size == 25
    assert settings.preferences_file == (tmp_path / "p.json").resolve()
    assert settings.app_name == "Caja Chica"


def test_invalid_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("FINCOMMAND_EXCHANGE_RATE", "-1")
    monkeypatch.setenv("FINCOMMAND_DELETE_BATCH_SIZE", "muchos")

    settings = FinCommandSettings.from_env()

    assert settings.exchange_rate == Decimal("58.50")
    assert settings.delete_batch_size == 100
