"""Domain models package."""

from .credit_cards import (
    CardStatus,
    CreditCard,
    CreditCardPatch,
    CreditCardView,
    Urgency,
)
from .ledger import (
    Company,
    CompanyOverview,
    CompanyPatch,
    LedgerTotals,
    MonthlyBucket,
    OverviewPeriod,
    Transaction,
    TransactionPatch,
    TransactionType,
)
from .money import DualAmount
from .quick_count import (
    CashPositionPlan,
    CashPositionSnapshot,
    SettlementMode,
    WeeklyObligation,
)
from .settings import AppSettings, AppSettingsPatch, UiPreferences
from .subscriptions import (
    Currency,
    Subscription,
    SubscriptionCategory,
    SubscriptionTotals,
)
from .tabular import SheetRows
from .work import Client, ClientTask, TaskStatus

__all__ = [
    "AppSettings",
    "AppSettingsPatch",
    "CardStatus",
    "CashPositionPlan",
    "CashPositionSnapshot",
    "Client",
    "ClientTask",
    "Company",
    "CompanyOverview",
    "CompanyPatch",
    "CreditCard",
    "CreditCardPatch",
    "CreditCardView",
    "Currency",
    "DualAmount",
    "LedgerTotals",
    "MonthlyBucket",
    "OverviewPeriod",
    "SettlementMode",
    "SheetRows",
    "Subscription",
    "SubscriptionCategory",
    "SubscriptionTotals",
    "TaskStatus",
    "Transaction",
    "TransactionPatch",
    "TransactionType",
    "UiPreferences",
    "Urgency",
    "WeeklyObligation",
]
