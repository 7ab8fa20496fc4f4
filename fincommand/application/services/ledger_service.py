"""Command handlers for transactions and companies."""

from dataclasses import replace
from datetime import date

from fincommand.application.ports.companies_repository import (
    CompaniesRepositoryPort,
)
from fincommand.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from fincommand.application.services.command_result import (
    CommandResult,
    run_remote,
)
from fincommand.domain.errors import RecordStoreError, ValidationError
from fincommand.domain.models import (
    Company,
    CompanyPatch,
    LedgerTotals,
    MonthlyBucket,
    Transaction,
    TransactionPatch,
    TransactionType,
)
from fincommand.domain.services.ledger import (
    build_manual_transaction,
    compute_ledger_totals,
    compute_monthly_series,
    filter_by_company,
    filter_by_section,
    sort_for_display,
)
from fincommand.domain.services.patches import apply_patch, revert_patch
from fincommand.domain.services.settings import DEFAULT_COMPANY
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.utils.utils import new_record_id


class LedgerService:
    """Own the in-memory ledger of one owner and keep it in sync."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        companies_repository: CompaniesRepositoryPort,
        owner_id: str,
        logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            transactions_repository: Port storing transactions.
            companies_repository: Port storing companies.
            owner_id: Authenticated owner.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions_repository = transactions_repository
        self._companies_repository = companies_repository
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.transactions: list[Transaction] = []
        self.companies: list[Company] = []

    def load(self) -> CommandResult:
        """Fetch transactions and companies, seeding a default company."""
        try:
            self.transactions = self._transactions_repository.list_transactions(
                self._owner_id
            )
            self.companies = self._companies_repository.list_companies(
                self._owner_id
            )
            if not self.companies:
                seeded = self._companies_repository.insert_company(
                    self._owner_id,
                    replace(DEFAULT_COMPANY, id=new_record_id()),
                )
                self.companies = [seeded]
                self._logger.info("Seeded default company")
        except RecordStoreError as exc:
            self._logger.error(f"Loading ledger failed: {exc}")
            return CommandResult.failure("No se pudieron cargar los datos.")
        self._logger.info(
            f"Loaded {len(self.transactions)} transactions and "
            f"{len(self.companies)} companies"
        )
        return CommandResult.success()

    def visible_transactions(
        self,
        company_id: str | None,
        section: TransactionType | None = None,
    ) -> list[Transaction]:
        """Return the transactions to list, most recent first."""
        items = filter_by_company(self.transactions, company_id)
        if section is not None:
            items = filter_by_section(items, section)
        return sort_for_display(items)

    def totals(self, company_id: str | None) -> LedgerTotals:
        return compute_ledger_totals(self.transactions, company_id)

    def monthly_series(
        self, company_id: str | None, year: int
    ) -> list[MonthlyBucket]:
        return compute_monthly_series(self.transactions, company_id, year)

    def add_manual_transaction(
        self,
        *,
        entry_date: date,
        section: TransactionType,
        company_id: str,
        amount_local=None,
        amount_foreign=None,
        description: str = "",
        category: str = "",
        payment_method: str = "",
    ) -> CommandResult:
        """Validate the entry form and add the resulting transaction."""
        try:
            transaction = build_manual_transaction(
                entry_date=entry_date,
                section=section,
                company_id=company_id,
                amount_local=amount_local,
                amount_foreign=amount_foreign,
                description=description,
                category=category,
                payment_method=payment_method,
                transaction_id=new_record_id(),
            )
        except ValidationError as exc:
            return CommandResult.failure(str(exc))
        return self.add_transaction(transaction)

    def add_transaction(self, transaction: Transaction) -> CommandResult:
        if transaction.id is None:
            transaction = replace(transaction, id=new_record_id())
        self.transactions.insert(0, transaction)

        def _revert() -> None:
            self.transactions.remove(transaction)

        return run_remote(
            self._logger,
            "Insert transaction",
            lambda: self._transactions_repository.insert_transaction(
                self._owner_id, transaction
            ),
            revert=_revert,
            failure_message="No se pudo guardar la transacción.",
        )

    def add_transactions(self, transactions: list[Transaction]) -> CommandResult:
        """Prepend a batch of transactions, e.g. from an import."""
        batch = [
            t if t.id is not None else replace(t, id=new_record_id())
            for t in transactions
        ]
        self.transactions = batch + self.transactions
        batch_ids = {t.id for t in batch}

        def _revert() -> None:
            self.transactions = [
                t for t in self.transactions if t.id not in batch_ids
            ]

        return run_remote(
            self._logger,
            f"Insert {len(batch)} transactions",
            lambda: self._transactions_repository.insert_transactions(
                self._owner_id, batch
            ),
            revert=_revert,
            success_message=(
                f"Se importaron {len(batch)} registros exitosamente."
            ),
            failure_message="Error al guardar los datos importados.",
        )

    def update_transaction(
        self, transaction_id: str, patch: TransactionPatch
    ) -> CommandResult:
        """Merge ``patch`` into a transaction locally and in the store."""
        index = self._index_of(transaction_id)
        if index is None:
            return CommandResult.failure("Transacción no encontrada.")
        current = self.transactions[index]
        undo = revert_patch(current, patch)
        self.transactions[index] = apply_patch(current, patch)

        def _revert() -> None:
            position = self._index_of(transaction_id)
            if position is not None:
                self.transactions[position] = apply_patch(
                    self.transactions[position], undo
                )

        return run_remote(
            self._logger,
            f"Update transaction {transaction_id}",
            lambda: self._transactions_repository.update_transaction(
                transaction_id, patch
            ),
            revert=_revert,
            failure_message="No se pudo actualizar la transacción.",
        )

    def delete_transaction(self, transaction_id: str) -> CommandResult:
        result = run_remote(
            self._logger,
            f"Delete transaction {transaction_id}",
            lambda: self._transactions_repository.delete_transaction(
                transaction_id
            ),
            failure_message="No se pudo eliminar la transacción.",
        )
        if result.ok:
            self.transactions = [
                t for t in self.transactions if t.id != transaction_id
            ]
        return result

    def delete_transactions(self, transaction_ids: list[str]) -> CommandResult:
        """Bulk delete; only ids confirmed by the store leave the ledger."""
        if not transaction_ids:
            return CommandResult.success()
        outcome = self._transactions_repository.delete_transactions(
            list(transaction_ids)
        )
        removed = set(outcome.succeeded_ids)
        self.transactions = [
            t for t in self.transactions if t.id not in removed
        ]
        if outcome.failed_ids:
            self._logger.error(
                f"Bulk delete left {len(outcome.failed_ids)} of "
                f"{len(transaction_ids)} transactions: {list(outcome.errors)}"
            )
            return CommandResult.failure(
                f"No se pudieron eliminar {len(outcome.failed_ids)} "
                "registros."
            )
        self._logger.info(f"Deleted {len(removed)} transactions")
        return CommandResult.success(f"Se eliminaron {len(removed)} registros.")

    def add_company(self, name: str) -> CommandResult:
        if not name.strip():
            return CommandResult.failure("El nombre de la empresa es requerido.")
        company = replace(DEFAULT_COMPANY, id=new_record_id(), name=name.strip())
        self.companies.append(company)

        def _revert() -> None:
            self.companies.remove(company)

        return run_remote(
            self._logger,
            "Insert company",
            lambda: self._companies_repository.insert_company(
                self._owner_id, company
            ),
            revert=_revert,
            failure_message="No se pudo crear la empresa.",
        )

    def update_company(self, company_id: str, patch: CompanyPatch) -> CommandResult:
        index = next(
            (i for i, c in enumerate(self.companies) if c.id == company_id),
            None,
        )
        if index is None:
            return CommandResult.failure("Empresa no encontrada.")
        previous = self.companies[index]
        self.companies[index] = apply_patch(previous, patch)

        def _revert() -> None:
            self.companies[index] = previous

        return run_remote(
            self._logger,
            f"Update company {company_id}",
            lambda: self._companies_repository.update_company(company_id, patch),
            revert=_revert,
            failure_message="No se pudo actualizar la empresa.",
        )

    def _index_of(self, transaction_id: str) -> int | None:
        for index, transaction in enumerate(self.transactions):
            if transaction.id == transaction_id:
                return index
        return None


__all__ = ["LedgerService"]
