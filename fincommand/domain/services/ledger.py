"""Ledger aggregation services."""

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from fincommand.domain.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_PAYMENT_METHOD,
    MANUAL_EXPENSE_DESCRIPTION,
    MANUAL_INCOME_DESCRIPTION,
    MONTH_NAMES,
    SHORT_MONTH_NAMES,
)
from fincommand.domain.errors import ValidationError
from fincommand.domain.models import (
    Company,
    CompanyOverview,
    LedgerTotals,
    MonthlyBucket,
    OverviewPeriod,
    Transaction,
    TransactionType,
)
from fincommand.utils.decimal_utils import coerce_decimal


def month_name(value: date) -> str:
    """Return the Spanish month name for a date."""
    return MONTH_NAMES[value.month - 1]


def filter_by_company(
    transactions: Iterable[Transaction],
    company_id: str | None,
) -> list[Transaction]:
    """Keep transactions of one company; None keeps everything."""
    if company_id is None:
        return list(transactions)
    return [t for t in transactions if t.company_id == company_id]


def filter_by_section(
    transactions: Iterable[Transaction],
    section: TransactionType,
) -> list[Transaction]:
    return [t for t in transactions if t.type is section]


def compute_ledger_totals(
    transactions: Iterable[Transaction],
    company_id: str | None = None,
) -> LedgerTotals:
    """Sum income and expense in both currencies.

    Args:
        transactions: Transactions to aggregate.
        company_id: Optional company filter.

    Returns:
        LedgerTotals: Totals; an empty input yields zeros.
    """
    income_local = Decimal("0")
    income_foreign = Decimal("0")
    expense_local = Decimal("0")
    expense_foreign = Decimal("0")
    for t in filter_by_company(transactions, company_id):
        if t.type is TransactionType.INCOME:
            income_local += coerce_decimal(t.amount_local)
            income_foreign += coerce_decimal(t.amount_foreign)
        else:
            expense_local += coerce_decimal(t.amount_local)
            expense_foreign += coerce_decimal(t.amount_foreign)
    return LedgerTotals(
        income_local=income_local,
        income_foreign=income_foreign,
        expense_local=expense_local,
        expense_foreign=expense_foreign,
    )


def compute_monthly_series(
    transactions: Iterable[Transaction],
    company_id: str | None,
    year: int,
) -> list[MonthlyBucket]:
    """Bucket local income and expense by calendar month of ``year``.

    Returns:
        list[MonthlyBucket]: Always twelve buckets, January first.
    """
    income = [Decimal("0")] * 12
    expense = [Decimal("0")] * 12
    for t in filter_by_company(transactions, company_id):
        if t.year != year:
            continue
        index = t.date.month - 1
        if t.type is TransactionType.INCOME:
            income[index] += coerce_decimal(t.amount_local)
        else:
            expense[index] += coerce_decimal(t.amount_local)
    return [
        MonthlyBucket(
            index=index,
            label=SHORT_MONTH_NAMES[index],
            income=income[index],
            expense=expense[index],
        )
        for index in range(12)
    ]


def sort_for_display(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Order by date, most recent first; ties keep their input order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def filter_by_period(
    transactions: Iterable[Transaction],
    period: OverviewPeriod,
    today: date,
    year: int | None = None,
    month: int | None = None,
) -> list[Transaction]:
    """Filter transactions for the general overview.

    Args:
        transactions: Transactions of every company.
        period: Week (last seven days), month, year or all.
        today: Reference day.
        year: Selected year for month/year filters, defaults to today's.
        month: Selected month (1-12) for the month filter.

    Returns:
        list[Transaction]: Matching transactions in input order.
    """
    selected_year = year if year is not None else today.year
    selected_month = month if month is not None else today.month
    if period is OverviewPeriod.ALL:
        return list(transactions)
    if period is OverviewPeriod.YEAR:
        return [t for t in transactions if t.date.year == selected_year]
    if period is OverviewPeriod.MONTH:
        return [
            t
            for t in transactions
            if t.date.year == selected_year and t.date.month == selected_month
        ]
    week_start = today - timedelta(days=7)
    return [t for t in transactions if week_start <= t.date <= today]


def compute_company_overview(
    companies: Iterable[Company],
    transactions: Iterable[Transaction],
) -> list[CompanyOverview]:
    """Return per-company totals, in company order."""
    items = list(transactions)
    return [
        CompanyOverview(
            company=company,
            totals=compute_ledger_totals(items, company.id),
        )
        for company in companies
    ]


def build_manual_transaction(
    *,
    entry_date: date,
    section: TransactionType,
    company_id: str,
    amount_local=None,
    amount_foreign=None,
    description: str = "",
    category: str = "",
    payment_method: str = "",
    transaction_id: str | None = None,
) -> Transaction:
    """Build a transaction from the manual entry form.

    Raises:
        ValidationError: When both amounts are zero.
    """
    local = coerce_decimal(amount_local)
    foreign = coerce_decimal(amount_foreign)
    if local == 0 and foreign == 0:
        raise ValidationError("Ingresa un monto en RD$ o US$.")
    default_description = (
        MANUAL_INCOME_DESCRIPTION
        if section is TransactionType.INCOME
        else MANUAL_EXPENSE_DESCRIPTION
    )
    return Transaction(
        id=transaction_id,
        date=entry_date,
        month=month_name(entry_date),
        year=entry_date.year,
        category=category or DEFAULT_CATEGORY,
        description=description or default_description,
        amount_local=local,
        amount_foreign=foreign,
        payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
        company_id=company_id,
        type=section,
    )


__all__ = [
    "month_name",
    "filter_by_company",
    "filter_by_section",
    "compute_ledger_totals",
    "compute_monthly_series",
    "sort_for_display",
    "filter_by_period",
    "compute_company_overview",
    "build_manual_transaction",
]
