"""Composition root for wiring infrastructure adapters."""

from fincommand.application.context import AppContext
from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.services import (
    CreditCardService,
    LedgerService,
    QuickCountService,
    SettingsService,
    SubscriptionService,
    WorkService,
)
from fincommand.infrastructure.auth_gateway import SqlAlchemyAuthGateway
from fincommand.infrastructure.companies_repository import (
    SqlAlchemyCompaniesRepository,
)
from fincommand.infrastructure.credit_cards_repository import (
    SqlAlchemyCreditCardsRepository,
)
from fincommand.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.infrastructure.preferences import JsonPreferencesStore
from fincommand.infrastructure.quick_count_repository import (
    SqlAlchemyQuickCountRepository,
)
from fincommand.infrastructure.settings import FinCommandSettings
from fincommand.infrastructure.subscriptions_repository import (
    SqlAlchemySubscriptionsRepository,
)
from fincommand.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)
from fincommand.infrastructure.user_settings_repository import (
    SqlAlchemyUserSettingsRepository,
)
from fincommand.infrastructure.work_repository import SqlAlchemyWorkRepository
from fincommand.infrastructure.workbook_codec import OpenpyxlWorkbookCodec


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_app_context(
    settings: FinCommandSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> AppContext:
    """Build the context shared by the interface for one process."""
    resolved_settings = settings or FinCommandSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    logger = get_app_logger()
    return AppContext(
        settings=resolved_settings,
        db_port=resolved_db,
        auth=SqlAlchemyAuthGateway(resolved_db),
        preferences=JsonPreferencesStore(resolved_settings.preferences_file),
        codec=OpenpyxlWorkbookCodec(),
        logger=logger,
    )


def build_ledger_service(context: AppContext, owner_id: str) -> LedgerService:
    """Return the ledger service of one owner."""
    return LedgerService(
        SqlAlchemyTransactionsRepository(
            context.db_port,
            delete_batch_size=context.settings.delete_batch_size,
        ),
        SqlAlchemyCompaniesRepository(context.db_port),
        owner_id,
        logger=context.logger,
    )


def build_credit_card_service(
    context: AppContext, owner_id: str
) -> CreditCardService:
    return CreditCardService(
        SqlAlchemyCreditCardsRepository(context.db_port),
        owner_id,
        logger=context.logger,
    )


def build_subscription_service(
    context: AppContext, owner_id: str
) -> SubscriptionService:
    return SubscriptionService(
        SqlAlchemySubscriptionsRepository(context.db_port),
        owner_id,
        logger=context.logger,
    )


def build_quick_count_service(
    context: AppContext, owner_id: str
) -> QuickCountService:
    return QuickCountService(
        SqlAlchemyQuickCountRepository(context.db_port),
        owner_id,
        default_exchange_rate=context.settings.exchange_rate,
        logger=context.logger,
    )


def build_work_service(context: AppContext, owner_id: str) -> WorkService:
    return WorkService(
        SqlAlchemyWorkRepository(context.db_port),
        owner_id,
        logger=context.logger,
    )


def build_settings_service(
    context: AppContext, owner_id: str
) -> SettingsService:
    return SettingsService(
        SqlAlchemyUserSettingsRepository(context.db_port),
        context.preferences,
        owner_id,
        logger=context.logger,
    )


__all__ = [
    "build_database_adapter",
    "build_app_context",
    "build_ledger_service",
    "build_credit_card_service",
    "build_subscription_service",
    "build_quick_count_service",
    "build_work_service",
    "build_settings_service",
]
