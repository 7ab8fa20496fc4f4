"""Application ports package."""

from .auth import AuthGatewayPort, AuthSession
from .companies_repository import CompaniesRepositoryPort
from .credit_cards_repository import CreditCardsRepositoryPort
from .database import DatabaseEnginePort
from .preferences import PreferencesStorePort
from .quick_count_repository import QuickCountRepositoryPort
from .subscriptions_repository import SubscriptionsRepositoryPort
from .transactions_repository import (
    BatchDeleteResult,
    TransactionsRepositoryPort,
)
from .user_settings_repository import UserSettingsRepositoryPort
from .work_repository import WorkRepositoryPort
from .workbook_codec import WorkbookCodecPort

__all__ = [
    "AuthGatewayPort",
    "AuthSession",
    "BatchDeleteResult",
    "CompaniesRepositoryPort",
    "CreditCardsRepositoryPort",
    "DatabaseEnginePort",
    "PreferencesStorePort",
    "QuickCountRepositoryPort",
    "SubscriptionsRepositoryPort",
    "TransactionsRepositoryPort",
    "UserSettingsRepositoryPort",
    "WorkRepositoryPort",
    "WorkbookCodecPort",
]
