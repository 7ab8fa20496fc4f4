"""Application services package."""

from .command_result import CommandResult, run_remote
from .credit_card_service import CreditCardService
from .ledger_service import LedgerService
from .quick_count_service import QuickCountService
from .settings_service import SettingsService
from .subscription_service import SubscriptionService
from .work_service import WorkService

__all__ = [
    "CommandResult",
    "run_remote",
    "CreditCardService",
    "LedgerService",
    "QuickCountService",
    "SettingsService",
    "SubscriptionService",
    "WorkService",
]
