"""Use case to import transactions from a spreadsheet workbook."""

from datetime import date

from fincommand.application.ports.workbook_codec import WorkbookCodecPort
from fincommand.application.services.command_result import CommandResult
from fincommand.application.services.ledger_service import LedgerService
from fincommand.domain.errors import ImportDataError
from fincommand.domain.models import TransactionType
from fincommand.domain.services.tabular import parse_workbook_sheets
from fincommand.infrastructure.logging.logger import get_app_logger


class ImportTransactionsUseCase:
    """Read a workbook and append its rows to the ledger."""

    def __init__(
        self,
        codec: WorkbookCodecPort,
        ledger_service: LedgerService,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            codec: Port reading workbook bytes.
            ledger_service: Ledger receiving the imported transactions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._codec = codec
        self._ledger_service = ledger_service
        self._logger = logger or get_app_logger()

    def execute(
        self,
        data: bytes,
        company_id: str,
        active_section: TransactionType,
        today: date | None = None,
    ) -> CommandResult:
        """Import every readable row.

        Args:
            data: Workbook bytes uploaded by the user.
            company_id: Company receiving the rows.
            active_section: Type used when neither sheet nor row sets one.
            today: Fallback date for rows without a readable date.

        Returns:
            CommandResult: Outcome with a user-facing message.
        """
        try:
            sheets = self._codec.read_workbook(data)
            transactions = parse_workbook_sheets(
                sheets,
                today=today or date.today(),
                company_id=company_id,
                active_section=active_section,
            )
        except ImportDataError as exc:
            self._logger.warning(f"Import rejected: {exc}")
            return CommandResult.failure(str(exc))
        self._logger.info(f"Parsed {len(transactions)} rows from workbook")
        return self._ledger_service.add_transactions(transactions)


__all__ = ["ImportTransactionsUseCase"]
