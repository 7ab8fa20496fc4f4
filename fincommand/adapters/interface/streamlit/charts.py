"""Altair charts for the Streamlit interface."""

from collections.abc import Sequence

import altair as alt

from fincommand.domain.models import MonthlyBucket

INCOME_LABEL = "Ingresos"
EXPENSE_LABEL = "Gastos"
INCOME_COLOR = "#10b981"
EXPENSE_COLOR = "#ef4444"


def prepare_monthly_chart_data(
    buckets: Sequence[MonthlyBucket],
) -> list[dict[str, str | float | int]]:
    """Flatten monthly buckets into long-format rows for a grouped bar chart.

    Args:
        buckets: Twelve monthly buckets, January first.

    Returns:
        list[dict]: One row per month and series.
    """
    data: list[dict[str, str | float | int]] = []
    for bucket in buckets:
        data.append(
            {
                "month": bucket.label,
                "order": bucket.index,
                "series": INCOME_LABEL,
                "amount": float(bucket.income),
            }
        )
        data.append(
            {
                "month": bucket.label,
                "order": bucket.index,
                "series": EXPENSE_LABEL,
                "amount": float(bucket.expense),
            }
        )
    return data


def build_monthly_chart(
    buckets: Sequence[MonthlyBucket],
    height: int = 280,
) -> alt.Chart:
    """Return a grouped bar chart of local income and expense per month."""
    data = prepare_monthly_chart_data(buckets)
    month_order = [bucket.label for bucket in buckets]
    return (
        alt.Chart(alt.Data(values=data))
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("month:N", sort=month_order, title=None),
            xOffset=alt.XOffset("series:N"),
            y=alt.Y("amount:Q", title="RD$"),
            color=alt.Color(
                "series:N",
                scale=alt.Scale(
                    domain=[INCOME_LABEL, EXPENSE_LABEL],
                    range=[INCOME_COLOR, EXPENSE_COLOR],
                ),
                legend=alt.Legend(orient="bottom", title=None),
            ),
            tooltip=[
                alt.Tooltip("month:N", title="Mes"),
                alt.Tooltip("series:N", title="Tipo"),
                alt.Tooltip("amount:Q", title="Monto", format=",.2f"),
            ],
        )
        .properties(height=height)
    )


__all__ = [
    "prepare_monthly_chart_data",
    "build_monthly_chart",
]
