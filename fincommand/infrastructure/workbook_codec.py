"""openpyxl-backed workbook reader and writer."""

from io import BytesIO
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from fincommand.application.ports.workbook_codec import WorkbookCodecPort
from fincommand.domain.errors import ImportDataError
from fincommand.domain.models import SheetRows
from fincommand.domain.models.tabular import EXPORT_COLUMN_WIDTHS, EXPORT_HEADERS


def _sheet_rows(worksheet) -> list[dict]:
    """Return data rows keyed by the first row's headers."""
    rows = worksheet.iter_rows(values_only=True)
    header_row = next(rows, None)
    if header_row is None:
        return []
    headers = [
        str(value).strip() if value is not None else "" for value in header_row
    ]
    records = []
    for values in rows:
        if values is None or all(value in (None, "") for value in values):
            continue
        record = {
            header: value
            for header, value in zip(headers, values)
            if header and value not in (None, "")
        }
        if record:
            records.append(record)
    return records


class OpenpyxlWorkbookCodec(WorkbookCodecPort):
    """Read and write ``.xlsx`` workbooks as header-keyed rows."""

    def __init__(
        self,
        headers: tuple[str, ...] = EXPORT_HEADERS,
        column_widths: tuple[int, ...] = EXPORT_COLUMN_WIDTHS,
    ) -> None:
        """Initialize the codec.

        Args:
            headers: Column order used when writing.
            column_widths: Character widths applied to written columns.
        """
        self._headers = headers
        self._column_widths = column_widths

    def read_workbook(self, data: bytes) -> list[SheetRows]:
        """Parse every worksheet of an uploaded workbook.

        Raises:
            ImportDataError: When the bytes are not a readable workbook.
        """
        try:
            workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
            raise ImportDataError(
                "No se pudo leer el archivo. Verifica que sea un Excel válido."
            ) from exc
        try:
            return [
                SheetRows(name=worksheet.title, rows=_sheet_rows(worksheet))
                for worksheet in workbook.worksheets
            ]
        finally:
            workbook.close()

    def write_workbook(self, sheet: SheetRows) -> bytes:
        """Write one sheet with a bold header row and fixed widths."""
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = sheet.name
        worksheet.append(list(self._headers))
        for cell in worksheet[1]:
            cell.font = Font(bold=True)
        for row in sheet.rows:
            worksheet.append([row.get(header) for header in self._headers])
        for index, width in enumerate(self._column_widths, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()


__all__ = ["OpenpyxlWorkbookCodec"]
