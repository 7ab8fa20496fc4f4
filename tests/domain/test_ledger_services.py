"""Tests for ledger aggregation services."""

from datetime import date
from decimal import Decimal

import pytest

from fincommand.domain.errors import ValidationError
from fincommand.domain.models import (
    Company,
    OverviewPeriod,
    Transaction,
    TransactionType,
)
from fincommand.domain.services.ledger import (
    build_manual_transaction,
    compute_company_overview,
    compute_ledger_totals,
    compute_monthly_series,
    filter_by_period,
    month_name,
    sort_for_display,
)


def _tx(
    tx_id: str,
    kind: TransactionType,
    local: str,
    foreign: str = "0",
    company_id: str = "c1",
    entry_date: date = date(2024, 3, 15),
) -> Transaction:
    return Transaction(
        id=tx_id,
        date=entry_date,
        month=month_name(entry_date),
        year=entry_date.year,
        category="Otros",
        description=tx_id,
        amount_local=Decimal(local),
        amount_foreign=Decimal(foreign),
        payment_method="Efectivo",
        company_id=company_id,
        type=kind,
    )


def test_totals_split_income_and_expense_per_currency():
    """Net values should be income minus expense in each currency."""
    transactions = [
        _tx("a", TransactionType.INCOME, "1000", "20"),
        _tx("b", TransactionType.INCOME, "500.50", "0"),
        _tx("c", TransactionType.EXPENSE, "300", "5"),
    ]

    totals = compute_ledger_totals(transactions)

    assert totals.income_local == Decimal("1500.50")
    assert totals.expense_local == Decimal("300")
    assert totals.net_local == Decimal("1200.50")
    assert totals.income_foreign == Decimal("20")
    assert totals.net_foreign == Decimal("15")


def test_totals_filter_by_company_and_default_to_zero():
    """A company without transactions should yield zero totals."""
    transactions = [_tx("a", TransactionType.INCOME, "100", company_id="c1")]

    assert compute_ledger_totals(transactions, "c2").net_local == 0
    assert compute_ledger_totals([], None).income_foreign == 0
    assert compute_ledger_totals(transactions, "c1").income_local == 100


def test_monthly_series_always_has_twelve_buckets():
    """Buckets should cover every month and skip other years."""
    transactions = [
        _tx("a", TransactionType.INCOME, "100", entry_date=date(2024, 1, 5)),
        _tx("b", TransactionType.EXPENSE, "40", entry_date=date(2024, 1, 9)),
        _tx("c", TransactionType.INCOME, "70", entry_date=date(2024, 12, 1)),
        _tx("d", TransactionType.INCOME, "999", entry_date=date(2023, 1, 1)),
    ]

    series = compute_monthly_series(transactions, None, 2024)

    assert len(series) == 12
    assert series[0].label == "Ene"
    assert series[0].income == Decimal("100")
    assert series[0].expense == Decimal("40")
    assert series[11].income == Decimal("70")
    assert all(bucket.income == 0 for bucket in series[1:11])


def test_sort_for_display_orders_most_recent_first():
    older = _tx("old", TransactionType.INCOME, "1", entry_date=date(2024, 1, 1))
    newer = _tx("new", TransactionType.INCOME, "1", entry_date=date(2024, 2, 1))

    assert [t.id for t in sort_for_display([older, newer])] == ["new", "old"]


def test_filter_by_period_variants():
    """Week, month, year and all filters should select the right rows."""
    today = date(2024, 3, 15)
    transactions = [
        _tx("recent", TransactionType.INCOME, "1", entry_date=date(2024, 3, 10)),
        _tx("march", TransactionType.INCOME, "1", entry_date=date(2024, 3, 1)),
        _tx("jan", TransactionType.INCOME, "1", entry_date=date(2024, 1, 20)),
        _tx("last", TransactionType.INCOME, "1", entry_date=date(2023, 3, 12)),
    ]

    def ids(period, **kwargs):
        return [
            t.id for t in filter_by_period(transactions, period, today, **kwargs)
        ]

    assert ids(OverviewPeriod.WEEK) == ["recent"]
    assert ids(OverviewPeriod.MONTH) == ["recent", "march"]
    assert ids(OverviewPeriod.MONTH, year=2023, month=3) == ["last"]
    assert ids(OverviewPeriod.YEAR) == ["recent", "march", "jan"]
    assert len(ids(OverviewPeriod.ALL)) == 4


def test_company_overview_keeps_company_order():
    companies = [Company(id="c2", name="B"), Company(id="c1", name="A")]
    transactions = [
        _tx("a", TransactionType.INCOME, "100", company_id="c1"),
        _tx("b", TransactionType.EXPENSE, "50", company_id="c2"),
    ]

    overview = compute_company_overview(companies, transactions)

    assert [item.company.id for item in overview] == ["c2", "c1"]
    assert overview[0].is_positive is False
    assert overview[1].totals.net_local == Decimal("100")


def test_build_manual_transaction_applies_defaults():
    """Blank description and category should fall back to defaults."""
    transaction = build_manual_transaction(
        entry_date=date(2024, 5, 2),
        section=TransactionType.EXPENSE,
        company_id="c1",
        amount_local="250",
    )

    assert transaction.month == "Mayo"
    assert transaction.year == 2024
    assert transaction.description == "Gasto Manual"
    assert transaction.category == "Otros"
    assert transaction.payment_method == "Efectivo"
    assert transaction.amount_foreign == 0


def test_build_manual_transaction_requires_an_amount():
    with pytest.raises(ValidationError):
        build_manual_transaction(
            entry_date=date(2024, 5, 2),
            section=TransactionType.INCOME,
            company_id="c1",
        )
