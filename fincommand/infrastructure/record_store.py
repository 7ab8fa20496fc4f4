"""Shared helpers for the SQLAlchemy repositories."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fincommand.domain.errors import RecordStoreError
from fincommand.utils.decimal_utils import to_db_number


@contextmanager
def store_operation(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into ``RecordStoreError``.

    Args:
        operation: Name reported to the user and in logs.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        detail = str(getattr(exc, "orig", None) or exc).splitlines()[0]
        raise RecordStoreError(operation, detail) from exc


def to_db_value(value: Any) -> Any:
    """Convert a domain value into a bind parameter."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return to_db_number(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return value


def column_values(
    values: Mapping[str, Any],
    columns: Mapping[str, str],
) -> dict[str, Any]:
    """Rename domain fields to columns and convert their values.

    Args:
        values: Domain field name to value.
        columns: Domain field name to column name.

    Returns:
        dict[str, Any]: Column name to bind value, unknown fields dropped.
    """
    return {
        columns[name]: to_db_value(value)
        for name, value in values.items()
        if name in columns
    }


def update_statement(table: str, params: Mapping[str, Any]):
    """Build ``UPDATE table SET ... WHERE id = :id`` for the given columns."""
    assignments = ", ".join(
        f"{column} = :{column}" for column in params if column != "id"
    )
    return text(f"UPDATE {table} SET {assignments} WHERE id = :id")


__all__ = [
    "store_operation",
    "to_db_value",
    "column_values",
    "update_statement",
]
