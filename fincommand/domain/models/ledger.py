"""Domain models for the transaction ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from .money import ZERO


class TransactionType(str, Enum):
    """Classification that partitions every ledger total."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def label(self) -> str:
        """Localized label used in spreadsheets and the UI."""
        return "Ingreso" if self is TransactionType.INCOME else "Gasto"


class OverviewPeriod(str, Enum):
    """Period filter for the general overview."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True)
class Transaction:
    """A single income or expense entry owned by one company."""

    id: str | None
    date: date
    month: str
    year: int
    category: str
    description: str
    amount_local: Decimal
    amount_foreign: Decimal
    payment_method: str
    company_id: str
    type: TransactionType


@dataclass(frozen=True)
class TransactionPatch:
    """Partial update for a transaction; None means unchanged."""

    date: date | None = None
    month: str | None = None
    year: int | None = None
    category: str | None = None
    description: str | None = None
    amount_local: Decimal | None = None
    amount_foreign: Decimal | None = None
    payment_method: str | None = None
    type: TransactionType | None = None


@dataclass(frozen=True)
class LedgerTotals:
    """Income and expense totals in both currencies."""

    income_local: Decimal = ZERO
    income_foreign: Decimal = ZERO
    expense_local: Decimal = ZERO
    expense_foreign: Decimal = ZERO

    @property
    def net_local(self) -> Decimal:
        """Return income minus expense in local currency."""
        return self.income_local - self.expense_local

    @property
    def net_foreign(self) -> Decimal:
        """Return income minus expense in foreign currency."""
        return self.income_foreign - self.expense_foreign


@dataclass(frozen=True)
class MonthlyBucket:
    """Local-currency income and expense for one calendar month."""

    index: int
    label: str
    income: Decimal = ZERO
    expense: Decimal = ZERO


@dataclass(frozen=True)
class Company:
    """Ledger group used to partition transactions."""

    id: str | None
    name: str
    logo: str | None = None
    theme: str = "green"
    primary_color: str = "#10b981"
    secondary_color: str = "#064e3b"


@dataclass(frozen=True)
class CompanyPatch:
    """Partial update for a company; None means unchanged."""

    name: str | None = None
    logo: str | None = None
    theme: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None


@dataclass(frozen=True)
class CompanyOverview:
    """Totals of one company for the selected overview period."""

    company: Company
    totals: LedgerTotals

    @property
    def is_positive(self) -> bool:
        return self.totals.net_local >= 0


__all__ = [
    "TransactionType",
    "OverviewPeriod",
    "Transaction",
    "TransactionPatch",
    "LedgerTotals",
    "MonthlyBucket",
    "Company",
    "CompanyPatch",
    "CompanyOverview",
]
