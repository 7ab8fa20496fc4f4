"""Conversion between transactions and spreadsheet rows."""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from fincommand.domain.constants import IMPORTED_LABEL, MONTH_NAMES
from fincommand.domain.errors import ImportDataError
from fincommand.domain.models import SheetRows, Transaction, TransactionType
from fincommand.domain.models.tabular import EXPORT_SHEET_NAME
from fincommand.utils.decimal_utils import coerce_decimal

SERIAL_EPOCH_OFFSET = 25569
SECONDS_PER_DAY = 86400
_UNIX_EPOCH = datetime(1970, 1, 1)
_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y", "%Y/%m/%d")

TEMPLATE_ROW = {
    "Fecha": "2024-01-01",
    "Mes": "Enero",
    "Tipo": "Ingreso",
    "Concepto": "Ejemplo de formato",
    "Monto RD": 1000,
    "Monto US": 0,
    "Empresa ID": "1",
}

NO_VALID_DATA_MESSAGE = (
    "No se encontraron datos válidos para importar. "
    "Verifica el formato del archivo."
)


def export_rows(transactions: Iterable[Transaction]) -> list[dict]:
    """Build export rows; an empty ledger yields the template row."""
    rows = [
        {
            "Fecha": t.date.isoformat(),
            "Mes": t.month,
            "Tipo": t.type.label,
            "Concepto": t.description,
            "Monto RD": t.amount_local,
            "Monto US": t.amount_foreign,
            "Empresa ID": t.company_id,
        }
        for t in transactions
    ]
    if not rows:
        rows.append(dict(TEMPLATE_ROW))
    return rows


def _first_present(row: dict, *keys):
    for key in keys:
        value = row.get(key)
        if value is not None and value != "" and value != 0:
            return value
    return None


def parse_cell_date(value) -> date | None:
    """Read a date from a spreadsheet cell.

    Args:
        value: Serial day number, date/datetime, or a literal date string.

    Returns:
        date | None: The parsed day, or None when the value is not a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = round((value - SERIAL_EPOCH_OFFSET) * SECONDS_PER_DAY)
        return (_UNIX_EPOCH + timedelta(seconds=seconds)).date()
    if isinstance(value, str):
        raw = value.strip()
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(raw[:10], fmt).date()
            except ValueError:
                continue
    return None


def parse_row(
    row: dict,
    *,
    today: date,
    company_id: str,
    active_section: TransactionType,
    type_override: TransactionType | None = None,
) -> Transaction:
    """Map one spreadsheet row to a transaction.

    Missing values are defaulted; an unreadable date keeps today's date with
    the month taken from the raw ``Mes`` column.
    """
    raw_date = _first_present(row, "Fecha", "Date")
    parsed = parse_cell_date(raw_date) if raw_date is not None else today
    if parsed is None:
        entry_date = today
        month = str(row.get("Mes") or IMPORTED_LABEL)
    else:
        entry_date = parsed
        month = MONTH_NAMES[parsed.month - 1]

    if type_override is not None:
        kind = type_override
    elif row.get("Tipo"):
        kind = (
            TransactionType.EXPENSE
            if "gasto" in str(row["Tipo"]).lower()
            else TransactionType.INCOME
        )
    else:
        kind = active_section

    return Transaction(
        id=None,
        date=entry_date,
        month=month,
        year=entry_date.year,
        category=IMPORTED_LABEL,
        description=str(
            _first_present(row, "Descripcion", "Concepto") or IMPORTED_LABEL
        ),
        amount_local=coerce_decimal(_first_present(row, "Monto RD", "RD$")),
        amount_foreign=coerce_decimal(_first_present(row, "Monto US", "US$")),
        payment_method=IMPORTED_LABEL,
        company_id=company_id,
        type=kind,
    )


def _find_sheet(sheets: Sequence[SheetRows], needle: str) -> SheetRows | None:
    for sheet in sheets:
        if needle in sheet.name.lower():
            return sheet
    return None


def select_sheets(
    sheets: Sequence[SheetRows],
) -> list[tuple[SheetRows, TransactionType | None]]:
    """Pick the sheets to import and the type each one forces.

    A ``Transacciones`` sheet wins; otherwise the first sheets named like
    "ingreso" and "gasto" force their type; otherwise the first sheet.
    """
    for sheet in sheets:
        if sheet.name == EXPORT_SHEET_NAME:
            return [(sheet, None)]
    income = _find_sheet(sheets, "ingreso")
    expense = _find_sheet(sheets, "gasto")
    if income is not None or expense is not None:
        selected = []
        if income is not None:
            selected.append((income, TransactionType.INCOME))
        if expense is not None:
            selected.append((expense, TransactionType.EXPENSE))
        return selected
    if sheets:
        return [(sheets[0], None)]
    return []


def parse_workbook_sheets(
    sheets: Sequence[SheetRows],
    *,
    today: date,
    company_id: str,
    active_section: TransactionType,
) -> list[Transaction]:
    """Convert workbook sheets into transactions.

    Raises:
        ImportDataError: When no row could be read.
    """
    transactions = []
    for sheet, override in select_sheets(sheets):
        for row in sheet.rows:
            transactions.append(
                parse_row(
                    row,
                    today=today,
                    company_id=company_id,
                    active_section=active_section,
                    type_override=override,
                )
            )
    if not transactions:
        raise ImportDataError(NO_VALID_DATA_MESSAGE)
    return transactions


__all__ = [
    "TEMPLATE_ROW",
    "NO_VALID_DATA_MESSAGE",
    "export_rows",
    "parse_cell_date",
    "parse_row",
    "select_sheets",
    "parse_workbook_sheets",
]
