"""Domain models for spreadsheet import and export."""

from dataclasses import dataclass, field

EXPORT_SHEET_NAME = "Transacciones"
EXPORT_FILE_NAME = "FinCommand_Data.xlsx"
EXPORT_HEADERS = (
    "Fecha",
    "Mes",
    "Tipo",
    "Concepto",
    "Monto RD",
    "Monto US",
    "Empresa ID",
)
EXPORT_COLUMN_WIDTHS = (12, 10, 10, 30, 12, 12, 10)


@dataclass(frozen=True)
class SheetRows:
    """Rows of one worksheet keyed by header."""

    name: str
    rows: list[dict] = field(default_factory=list)


__all__ = [
    "EXPORT_SHEET_NAME",
    "EXPORT_FILE_NAME",
    "EXPORT_HEADERS",
    "EXPORT_COLUMN_WIDTHS",
    "SheetRows",
]
