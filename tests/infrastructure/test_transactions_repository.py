"""Tests for the SQLAlchemy transactions repository."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import Transaction, TransactionPatch, TransactionType
from fincommand.infrastructure import transactions_repository as repo_module
from fincommand.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)


def _tx(tx_id: str, entry_date: date = date(2024, 1, 5)) -> Transaction:
    return Transaction(
        id=tx_id,
        date=entry_date,
        month="Enero",
        year=entry_date.year,
        category="Ventas Directas",
        description=f"Venta {tx_id}",
        amount_local=Decimal("1500.25"),
        amount_foreign=Decimal("25"),
        payment_method="Transferencia",
        company_id="c1",
        type=TransactionType.INCOME,
    )


def test_insert_and_list_round_trip(sqlite_db):
    repository = SqlAlchemyTransactionsRepository(sqlite_db, logger=MagicMock())
    repository.insert_transactions(
        "owner-1",
        [_tx("t1", date(2024, 1, 5)), _tx("t2", date(2024, 2, 1))],
    )
    repository.insert_transaction("owner-2", _tx("other"))

    stored = repository.list_transactions("owner-1")

    assert [t.id for t in stored] == ["t2", "t1"]
    assert stored[1] == _tx("t1", date(2024, 1, 5))


def test_update_writes_only_patched_columns(sqlite_db):
    repository = SqlAlchemyTransactionsRepository(sqlite_db, logger=MagicMock())
    repository.insert_transaction("owner-1", _tx("t1"))

    repository.update_transaction(
        "t1",
        TransactionPatch(description="Editada", type=TransactionType.EXPENSE),
    )

    (stored,) = repository.list_transactions("owner-1")
    assert stored.description == "Editada"
    assert stored.type is TransactionType.EXPENSE
    assert stored.amount_local == Decimal("1500.25")


def test_delete_transactions_in_chunks(sqlite_db):
    repository = SqlAlchemyTransactionsRepository(
        sqlite_db, delete_batch_size=2, logger=MagicMock()
    )
    repository.insert_transactions(
        "owner-1", [_tx(f"t{index}") for index in range(5)]
    )

    result = repository.delete_transactions(["t0", "t1", "t2", "t3"])

    assert result.ok
    assert result.succeeded_ids == ("t0", "t1", "t2", "t3")
    assert [t.id for t in repository.list_transactions("owner-1")] == ["t4"]


def test_failing_chunk_does_not_stop_the_rest(sqlite_db, monkeypatch):
    logger = MagicMock()
    repository = SqlAlchemyTransactionsRepository(
        sqlite_db, delete_batch_size=1, logger=logger
    )
    repository.insert_transactions("owner-1", [_tx("a"), _tx("b")])
    real_delete_chunk = repository._delete_chunk

    def flaky(chunk):
        if chunk == ["a"]:
            raise RecordStoreError("delete_transactions", "locked")
        real_delete_chunk(chunk)

    monkeypatch.setattr(repository, "_delete_chunk", flaky)

    result = repository.delete_transactions(["a", "b"])

    assert not result.ok
    assert result.failed_ids == ("a",)
    assert result.succeeded_ids == ("b",)
    logger.warning.assert_called_once()


def test_store_errors_are_wrapped(sqlite_db):
    repository = SqlAlchemyTransactionsRepository(sqlite_db, logger=MagicMock())
    repository.insert_transaction("owner-1", _tx("dup"))

    with pytest.raises(RecordStoreError) as excinfo:
        repository.insert_transaction("owner-1", _tx("dup"))

    assert excinfo.value.operation == "insert_transactions"


def test_default_batch_size():
    assert repo_module.DEFAULT_DELETE_BATCH_SIZE == 100


def test_same_day_rows_reload_newest_first(sqlite_db):
    repository = SqlAlchemyTransactionsRepository(sqlite_db, logger=MagicMock())
    repository.insert_transaction("owner-1", _tx("first"))
    repository.insert_transaction("owner-1", _tx("second"))
    repository.insert_transactions("owner-1", [_tx("imp-1"), _tx("imp-2")])

    stored = repository.list_transactions("owner-1")

    assert [t.id for t in stored] == ["imp-1", "imp-2", "second", "first"]
