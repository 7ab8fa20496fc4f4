"""Error hierarchy shared by every layer."""


class FinCommandError(Exception):
    """Base class for recoverable, user-reportable failures."""


class ValidationError(FinCommandError):
    """Raised when user input cannot produce a valid entity."""


class RecordStoreError(FinCommandError):
    """Raised when a remote record-store call fails.

    Attributes:
        operation: Name of the store operation that failed.
    """

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        message = f"Record store operation '{operation}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AuthError(FinCommandError):
    """Raised when sign in, sign up or sign out fails."""


class ImportDataError(FinCommandError):
    """Raised when a workbook yields no importable rows."""


__all__ = [
    "FinCommandError",
    "ValidationError",
    "RecordStoreError",
    "AuthError",
    "ImportDataError",
]
