"""Domain services package."""

from .credit_cards import (
    build_card_view,
    change_form_field,
    classify_urgency,
    days_until_due,
    derive_due_date,
    register_payment,
    remaining_balance,
)
from .currency import convert_foreign_to_local, convert_local_to_foreign
from .ledger import (
    compute_company_overview,
    compute_ledger_totals,
    compute_monthly_series,
    sort_for_display,
)
from .patches import apply_patch, patch_changes, revert_patch
from .quick_count import plan_cash_position
from .subscriptions import aggregate_subscriptions
from .tabular import export_rows, parse_workbook_sheets
from .work import build_agenda, is_late, next_status

__all__ = [
    "aggregate_subscriptions",
    "apply_patch",
    "build_agenda",
    "build_card_view",
    "change_form_field",
    "classify_urgency",
    "compute_company_overview",
    "compute_ledger_totals",
    "compute_monthly_series",
    "convert_foreign_to_local",
    "convert_local_to_foreign",
    "days_until_due",
    "derive_due_date",
    "export_rows",
    "is_late",
    "next_status",
    "parse_workbook_sheets",
    "patch_changes",
    "plan_cash_position",
    "register_payment",
    "remaining_balance",
    "revert_patch",
    "sort_for_display",
]
