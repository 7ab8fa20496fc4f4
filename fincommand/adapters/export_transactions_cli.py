"""CLI adapter to export an owner's ledger to an Excel workbook.

The owner and destination are read from ``FINCOMMAND_EXPORT_OWNER_ID`` and
``FINCOMMAND_EXPORT_PATH`` (default ``data/FinCommand_Data.xlsx``).
"""

import os
from pathlib import Path

from fincommand.application.use_cases.export_transactions import (
    ExportTransactionsUseCase,
)
from fincommand.domain.models.tabular import EXPORT_FILE_NAME
from fincommand.infrastructure.container import (
    build_app_context,
    build_ledger_service,
)
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.utils.utils import get_project_root


def _output_path() -> Path:
    raw = os.getenv("FINCOMMAND_EXPORT_PATH")
    if raw:
        return Path(raw).expanduser().resolve()
    return get_project_root() / "data" / EXPORT_FILE_NAME


def main() -> None:
    """Write the owner's transactions to the export workbook."""
    logger = get_app_logger()
    owner_id = os.getenv("FINCOMMAND_EXPORT_OWNER_ID")
    if not owner_id:
        logger.warning("FINCOMMAND_EXPORT_OWNER_ID is required to export.")
        return

    context = build_app_context()
    try:
        ledger = build_ledger_service(context, owner_id)
        result = ledger.load()
        if not result.ok:
            logger.error(result.message)
            return
        use_case = ExportTransactionsUseCase(context.codec, logger=logger)
        payload = use_case.execute(ledger.visible_transactions(None))
    finally:
        context.close()

    path = _output_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    print(f"Exported {len(ledger.transactions)} transactions to {path}")


if __name__ == "__main__":  # pragma: no cover
    main()
