"""Domain package for business rules and core models."""

from .constants import DEFAULT_APP_NAME, DEFAULT_EXCHANGE_RATE
from .errors import (
    AuthError,
    FinCommandError,
    ImportDataError,
    RecordStoreError,
    ValidationError,
)
from .models import (
    CreditCard,
    DualAmount,
    Subscription,
    Transaction,
    TransactionType,
)
from .services import (
    aggregate_subscriptions,
    compute_ledger_totals,
    plan_cash_position,
)

__all__ = [
    "DEFAULT_APP_NAME",
    "DEFAULT_EXCHANGE_RATE",
    "AuthError",
    "FinCommandError",
    "ImportDataError",
    "RecordStoreError",
    "ValidationError",
    "CreditCard",
    "DualAmount",
    "Subscription",
    "Transaction",
    "TransactionType",
    "aggregate_subscriptions",
    "compute_ledger_totals",
    "plan_cash_position",
]
