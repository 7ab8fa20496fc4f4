"""Tests for the Altair chart helpers."""

from decimal import Decimal

from fincommand.adapters.interface.streamlit import charts
from fincommand.domain.models import MonthlyBucket


def _buckets():
    return [
        MonthlyBucket(index=0, label="Ene", income=Decimal("100.50")),
        MonthlyBucket(index=1, label="Feb", expense=Decimal("40")),
    ]


def test_prepare_monthly_chart_data_emits_two_series_per_month():
    data = charts.prepare_monthly_chart_data(_buckets())

    assert data == [
        {"month": "Ene", "order": 0, "series": "Ingresos", "amount": 100.5},
        {"month": "Ene", "order": 0, "series": "Gastos", "amount": 0.0},
        {"month": "Feb", "order": 1, "series": "Ingresos", "amount": 0.0},
        {"month": "Feb", "order": 1, "series": "Gastos", "amount": 40.0},
    ]


def test_build_monthly_chart_keeps_calendar_order():
    chart = charts.build_monthly_chart(_buckets(), height=200)
    encoded = chart.to_dict()

    assert encoded["mark"]["type"] == "bar"
    assert encoded["height"] == 200
    assert encoded["encoding"]["x"]["sort"] == ["Ene", "Feb"]
    assert encoded["encoding"]["color"]["scale"]["range"] == [
        charts.INCOME_COLOR,
        charts.EXPENSE_COLOR,
    ]
    assert len(chart.data.values) == 4
