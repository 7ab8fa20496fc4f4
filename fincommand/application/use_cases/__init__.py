"""Application use cases package."""

from .export_transactions import ExportTransactionsUseCase
from .import_transactions import ImportTransactionsUseCase

__all__ = ["ExportTransactionsUseCase", "ImportTransactionsUseCase"]
