"""Port for ledger transaction storage."""

from dataclasses import dataclass, field
from typing import Protocol

from fincommand.domain.models import Transaction, TransactionPatch


@dataclass(frozen=True)
class BatchDeleteResult:
    """Outcome of a chunked delete.

    Attributes:
        succeeded_ids: Ids removed from the store.
        failed_ids: Ids whose chunk failed.
    """

    succeeded_ids: tuple[str, ...] = ()
    failed_ids: tuple[str, ...] = ()
    errors: tuple[str, ...] = field(default=(), compare=False)

    @property
    def ok(self) -> bool:
        return not self.failed_ids


class TransactionsRepositoryPort(Protocol):
    """Port exposing read and write access to transactions."""

    def list_transactions(self, owner_id: str) -> list[Transaction]:
        """Return every transaction of the owner."""

    def insert_transaction(
        self, owner_id: str, transaction: Transaction
    ) -> Transaction:
        """Store a transaction and return it with its assigned id."""

    def insert_transactions(
        self, owner_id: str, transactions: list[Transaction]
    ) -> list[Transaction]:
        """Store several transactions in one statement batch."""

    def update_transaction(
        self, transaction_id: str, patch: TransactionPatch
    ) -> None:
        """Write the set fields of ``patch``."""

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove one transaction."""

    def delete_transactions(self, transaction_ids: list[str]) -> BatchDeleteResult:
        """Remove many transactions in chunks, continuing past failures."""


__all__ = ["BatchDeleteResult", "TransactionsRepositoryPort"]
