"""Use case to export the ledger as a spreadsheet workbook."""

from collections.abc import Iterable

from fincommand.application.ports.workbook_codec import WorkbookCodecPort
from fincommand.domain.models import SheetRows, Transaction
from fincommand.domain.models.tabular import EXPORT_SHEET_NAME
from fincommand.domain.services.tabular import export_rows
from fincommand.infrastructure.logging.logger import get_app_logger


class ExportTransactionsUseCase:
    """Serialize transactions into the ``Transacciones`` workbook."""

    def __init__(self, codec: WorkbookCodecPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            codec: Port writing workbook bytes.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._codec = codec
        self._logger = logger or get_app_logger()

    def execute(self, transactions: Iterable[Transaction]) -> bytes:
        """Return workbook bytes; an empty ledger exports a template row.

        Args:
            transactions: Transactions to export, in display order.

        Returns:
            bytes: The serialized workbook.
        """
        rows = export_rows(transactions)
        self._logger.info(f"Exporting {len(rows)} rows to {EXPORT_SHEET_NAME}")
        return self._codec.write_workbook(
            SheetRows(name=EXPORT_SHEET_NAME, rows=rows)
        )


__all__ = ["ExportTransactionsUseCase"]
