"""Tests for schema creation and the shared record store helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import CardStatus
from fincommand.infrastructure.record_store import (
    column_values,
    store_operation,
    to_db_value,
    update_statement,
)
from fincommand.infrastructure.schema import CREATE_TABLES_SQL, ensure_schema


def test_ensure_schema_is_idempotent(sqlite_db):
    assert ensure_schema(sqlite_db) == len(CREATE_TABLES_SQL)

    tables = set(inspect(sqlite_db.get_engine()).get_table_names())

    assert {
        "app_users",
        "companies",
        "transactions",
        "credit_cards",
        "subscriptions",
        "quick_counts",
        "weekly_debts",
        "user_settings",
        "clients",
        "client_tasks",
    } <= tables


def test_store_operation_wraps_sqlalchemy_errors():
    with pytest.raises(RecordStoreError) as excinfo:
        with store_operation("list_cards"):
            raise OperationalError("SELECT 1", {}, Exception("db down"))

    assert excinfo.value.operation == "list_cards"
    assert "db down" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_to_db_value_conversions():
    assert to_db_value(CardStatus.PAID) == "Pagada"
    assert to_db_value(Decimal("1.50")) == "1.50"
    assert to_db_value(date(2024, 1, 2)) == "2024-01-02"
    assert to_db_value(datetime(2024, 1, 2, 9, 5)) == "2024-01-02 09:05:00"
    assert to_db_value(True) is True
    assert to_db_value(None) is None


def test_column_values_and_update_statement():
    params = column_values(
        {"label": "Gold", "unknown": 1, "status": CardStatus.PENDING},
        {"label": "name", "status": "status"},
    )
    params["id"] = "card-1"

    statement = update_statement("credit_cards", params)

    assert params == {"name": "Gold", "status": "Pendiente", "id": "card-1"}
    assert str(statement) == (
        "UPDATE credit_cards SET name = :name, status = :status WHERE id = :id"
    )
