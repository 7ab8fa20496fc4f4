"""Tests for the export_transactions CLI adapter."""

from datetime import date
from decimal import Decimal
from io import BytesIO
from unittest.mock import MagicMock

from openpyxl import load_workbook

from fincommand.adapters import export_transactions_cli
from fincommand.domain.models import TransactionType
from fincommand.domain.models.tabular import EXPORT_SHEET_NAME
from fincommand.infrastructure import container
from fincommand.infrastructure.settings import FinCommandSettings


def _patch_context(monkeypatch, tmp_path, sqlite_db):
    settings = FinCommandSettings(preferences_file=tmp_path / "prefs.json")
    context = container.build_app_context(settings=settings, db_port=sqlite_db)
    monkeypatch.setattr(
        export_transactions_cli, "build_app_context", lambda: context
    )
    monkeypatch.setattr(
        export_transactions_cli, "get_app_logger", lambda: MagicMock()
    )
    return context


def test_main_requires_owner(monkeypatch):
    logger = MagicMock()
    build = MagicMock()
    monkeypatch.delenv("FINCOMMAND_EXPORT_OWNER_ID", raising=False)
    monkeypatch.setattr(export_transactions_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(export_transactions_cli, "build_app_context", build)

    export_transactions_cli.main()

    logger.warning.assert_called_once()
    build.assert_not_called()


def test_main_writes_workbook(monkeypatch, tmp_path, sqlite_db, capsys):
    context = _patch_context(monkeypatch, tmp_path, sqlite_db)
    ledger = container.build_ledger_service(context, "owner-1")
    ledger.load()
    result = ledger.add_manual_transaction(
        entry_date=date(2024, 5, 2),
        section=TransactionType.INCOME,
        company_id=ledger.companies[0].id,
        amount_local=Decimal("1200"),
        description="Venta",
    )
    assert result.ok
    output = tmp_path / "out" / "ledger.xlsx"
    monkeypatch.setenv("FINCOMMAND_EXPORT_OWNER_ID", "owner-1")
    monkeypatch.setenv("FINCOMMAND_EXPORT_PATH", str(output))

    export_transactions_cli.main()

    workbook = load_workbook(BytesIO(output.read_bytes()))
    sheet = workbook[EXPORT_SHEET_NAME]
    values = [row for row in sheet.iter_rows(min_row=2, values_only=True)]
    assert len(values) == 1
    assert "Venta" in values[0]
    assert "Exported 1 transactions" in capsys.readouterr().out
