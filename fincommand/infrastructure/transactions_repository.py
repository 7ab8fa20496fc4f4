"""SQLAlchemy-backed repository for ledger transactions."""

from datetime import datetime, timedelta

from sqlalchemy import bindparam, text

from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.transactions_repository import (
    BatchDeleteResult,
    TransactionsRepositoryPort,
)
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import Transaction, TransactionPatch, TransactionType
from fincommand.domain.services.patches import patch_changes
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.infrastructure.record_store import (
    column_values,
    store_operation,
    update_statement,
)
from fincommand.utils.date_utils import coerce_date
from fincommand.utils.decimal_utils import coerce_decimal

DEFAULT_DELETE_BATCH_SIZE = 100

TRANSACTION_COLUMNS = {
    "id": "id",
    "company_id": "company_id",
    "date": "date",
    "month": "month",
    "year": "year",
    "category": "type_category",
    "description": "description",
    "amount_local": "amount_rd",
    "amount_foreign": "amount_us",
    "payment_method": "payment_method",
    "type": "type",
}

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, company_id, date, month, year, type_category, description,
           amount_rd, amount_us, payment_method, type
    FROM transactions
    WHERE user_id = :user_id
    ORDER BY date DESC, created_at DESC
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, user_id, company_id, date, month, year, type_category,
        description, amount_rd, amount_us, payment_method, type, created_at
    )
    VALUES (
        :id, :user_id, :company_id, :date, :month, :year, :type_category,
        :description, :amount_rd, :amount_us, :payment_method, :type,
        :created_at
    )
    """
)

DELETE_TRANSACTION_SQL = text("DELETE FROM transactions WHERE id = :id")

DELETE_TRANSACTIONS_SQL = text(
    "DELETE FROM transactions WHERE id IN :ids"
).bindparams(bindparam("ids", expanding=True))


def _created_at(moment: datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


def _row_to_transaction(row) -> Transaction:
    entry_date = coerce_date(row.date)
    return Transaction(
        id=row.id,
        date=entry_date,
        month=row.month or "",
        year=int(row.year) if row.year is not None else entry_date.year,
        category=row.type_category or "",
        description=row.description or "",
        amount_local=coerce_decimal(row.amount_rd),
        amount_foreign=coerce_decimal(row.amount_us),
        payment_method=row.payment_method or "",
        company_id=row.company_id,
        type=TransactionType(row.type),
    )


class SqlAlchemyTransactionsRepository(TransactionsRepositoryPort):
    """Repository backed by SQLAlchemy for the ``transactions`` table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        delete_batch_size: int = DEFAULT_DELETE_BATCH_SIZE,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the record store engine.
            delete_batch_size: Maximum ids removed per DELETE statement.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._delete_batch_size = max(1, delete_batch_size)
        self._logger = logger or get_app_logger()
        self._last_stamp: datetime | None = None

    def list_transactions(self, owner_id: str) -> list[Transaction]:
        """Return the owner's transactions, most recent first."""
        engine = self._db_port.get_engine()
        with store_operation("list_transactions"):
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_TRANSACTIONS_SQL, {"user_id": owner_id}
                ).all()
        return [_row_to_transaction(row) for row in rows]

    def insert_transaction(
        self, owner_id: str, transaction: Transaction
    ) -> Transaction:
        self.insert_transactions(owner_id, [transaction])
        return transaction

    def insert_transactions(
        self, owner_id: str, transactions: list[Transaction]
    ) -> list[Transaction]:
        """Insert rows in one database transaction.

        The first row gets the newest ``created_at`` so that same-day rows
        reload in the order they are listed.
        """
        if not transactions:
            return []
        stamp = self._next_stamp(len(transactions))
        payload = [
            {
                **column_values(vars(t), TRANSACTION_COLUMNS),
                "user_id": owner_id,
                "created_at": _created_at(
                    stamp - timedelta(microseconds=index)
                ),
            }
            for index, t in enumerate(transactions)
        ]
        engine = self._db_port.get_engine()
        with store_operation("insert_transactions"):
            with engine.begin() as conn:
                conn.execute(INSERT_TRANSACTION_SQL, payload)
        return list(transactions)

    def update_transaction(
        self, transaction_id: str, patch: TransactionPatch
    ) -> None:
        params = column_values(patch_changes(patch), TRANSACTION_COLUMNS)
        if not params:
            return
        params["id"] = transaction_id
        engine = self._db_port.get_engine()
        with store_operation("update_transaction"):
            with engine.begin() as conn:
                conn.execute(update_statement("transactions", params), params)

    def delete_transaction(self, transaction_id: str) -> None:
        engine = self._db_port.get_engine()
        with store_operation("delete_transaction"):
            with engine.begin() as conn:
                conn.execute(DELETE_TRANSACTION_SQL, {"id": transaction_id})

    def delete_transactions(
        self, transaction_ids: list[str]
    ) -> BatchDeleteResult:
        """Delete ids in chunks; a failing chunk does not stop the rest.

        Args:
            transaction_ids: Ids to delete.

        Returns:
            BatchDeleteResult: Ids deleted and ids whose chunk failed.
        """
        succeeded: list[str] = []
        failed: list[str] = []
        errors: list[str] = []
        size = self._delete_batch_size
        for start in range(0, len(transaction_ids), size):
            chunk = transaction_ids[start:start + size]
            try:
                self._delete_chunk(chunk)
            except RecordStoreError as exc:
                self._logger.warning(
                    f"Delete chunk of {len(chunk)} transactions failed: {exc}"
                )
                failed.extend(chunk)
                errors.append(str(exc))
            else:
                succeeded.extend(chunk)
        return BatchDeleteResult(
            succeeded_ids=tuple(succeeded),
            failed_ids=tuple(failed),
            errors=tuple(errors),
        )

    def _next_stamp(self, count: int) -> datetime:
        """Return a creation stamp above every stamp this repository issued."""
        stamp = datetime.now()
        floor = (
            self._last_stamp + timedelta(microseconds=count)
            if self._last_stamp is not None
            else stamp
        )
        self._last_stamp = max(stamp, floor)
        return self._last_stamp

    def _delete_chunk(self, chunk: list[str]) -> None:
        engine = self._db_port.get_engine()
        with store_operation("delete_transactions"):
            with engine.begin() as conn:
                conn.execute(DELETE_TRANSACTIONS_SQL, {"ids": chunk})


__all__ = [
    "DEFAULT_DELETE_BATCH_SIZE",
    "SqlAlchemyTransactionsRepository",
]
