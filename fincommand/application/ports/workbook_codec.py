"""Port for reading and writing spreadsheet workbooks."""

from typing import Protocol

from fincommand.domain.models import SheetRows


class WorkbookCodecPort(Protocol):
    """Port converting workbook bytes to and from header-keyed rows."""

    def read_workbook(self, data: bytes) -> list[SheetRows]:
        """Return every sheet in workbook order."""

    def write_workbook(self, sheet: SheetRows) -> bytes:
        """Serialize one sheet into a workbook."""


__all__ = ["WorkbookCodecPort"]
