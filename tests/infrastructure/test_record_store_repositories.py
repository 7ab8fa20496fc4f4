"""Tests for the card, subscription, company, settings and work repositories."""

from datetime import date, datetime
from decimal import Decimal

from fincommand.domain.models import (
    AppSettingsPatch,
    CardStatus,
    Client,
    ClientTask,
    Company,
    CompanyPatch,
    CreditCard,
    CreditCardPatch,
    Currency,
    Subscription,
    SubscriptionCategory,
    TaskStatus,
)
from fincommand.domain.services.patches import CLEARED
from fincommand.infrastructure.companies_repository import (
    SqlAlchemyCompaniesRepository,
)
from fincommand.infrastructure.credit_cards_repository import (
    SqlAlchemyCreditCardsRepository,
)
from fincommand.infrastructure.subscriptions_repository import (
    SqlAlchemySubscriptionsRepository,
)
from fincommand.infrastructure.user_settings_repository import (
    SqlAlchemyUserSettingsRepository,
)
from fincommand.infrastructure.work_repository import SqlAlchemyWorkRepository


def test_credit_cards_round_trip_and_patch(sqlite_db):
    repository = SqlAlchemyCreditCardsRepository(sqlite_db)
    card = CreditCard(
        id="card-1",
        issuer="BHD",
        label="Gold",
        cutoff_date=date(2024, 1, 10),
        due_date=date(2024, 2, 4),
        debt_local=Decimal("5000"),
        debt_foreign=Decimal("120.50"),
        debt_label_foreign="Publicidad",
    )
    repository.insert_card("owner-1", card)

    assert repository.list_cards("owner-1") == [card]

    repository.update_card(
        "card-1",
        CreditCardPatch(paid_local=Decimal("2000"), status=CardStatus.PARTIALLY_PAID),
    )
    (stored,) = repository.list_cards("owner-1")
    assert stored.paid_local == Decimal("2000")
    assert stored.status is CardStatus.PARTIALLY_PAID
    assert stored.due_date == date(2024, 2, 4)

    repository.delete_card("card-1")
    assert repository.list_cards("owner-1") == []


def test_subscriptions_round_trip(sqlite_db):
    repository = SqlAlchemySubscriptionsRepository(sqlite_db)
    subscription = Subscription(
        id="s1",
        name="Netflix",
        amount=Decimal("15.99"),
        currency=Currency.FOREIGN,
        billing_day=12,
        card_id="card-1",
        category=SubscriptionCategory.LUXURY,
    )
    repository.insert_subscription("owner-1", subscription)

    assert repository.list_subscriptions("owner-1") == [subscription]
    assert repository.list_subscriptions("owner-2") == []

    repository.delete_subscription("s1")
    assert repository.list_subscriptions("owner-1") == []


def test_companies_keep_insertion_order(sqlite_db):
    repository = SqlAlchemyCompaniesRepository(sqlite_db)
    repository.insert_company("owner-1", Company(id="c1", name="Zeta"))
    repository.insert_company("owner-1", Company(id="c2", name="Alfa"))

    repository.update_company("c2", CompanyPatch(theme="red", logo="logo.png"))

    companies = repository.list_companies("owner-1")
    assert [c.id for c in companies] == ["c1", "c2"]
    assert companies[1].theme == "red"
    assert companies[1].logo == "logo.png"
    assert companies[1].primary_color == "#10b981"


def test_user_settings_upsert_touches_only_set_fields(sqlite_db):
    repository = SqlAlchemyUserSettingsRepository(sqlite_db)

    assert repository.get_settings("owner-1") is None

    repository.upsert_settings("owner-1", AppSettingsPatch(app_logo="a.png"))
    repository.upsert_settings("owner-1", AppSettingsPatch(app_name="Caja"))

    settings = repository.get_settings("owner-1")
    assert settings.app_name == "Caja"
    assert settings.app_logo == "a.png"


def test_work_repository_clients_and_tasks(sqlite_db):
    repository = SqlAlchemyWorkRepository(sqlite_db)
    repository.insert_client("owner-1", Client(id="c1", name="Ana"))
    task = ClientTask(
        id="t1",
        client_id="c1",
        description="Factura",
        due_at=datetime(2024, 1, 2, 15, 30),
    )
    repository.insert_task("owner-1", task)

    assert repository.list_clients("owner-1") == [Client(id="c1", name="Ana")]
    assert repository.list_tasks("owner-1") == [task]

    repository.update_task_status("t1", TaskStatus.CONFIRMED)
    assert repository.list_tasks("owner-1")[0].status is TaskStatus.CONFIRMED

    repository.delete_client_tasks("c1")
    repository.delete_client("c1")
    assert repository.list_tasks("owner-1") == []
    assert repository.list_clients("owner-1") == []


def test_credit_card_cleared_dates_persist_as_null(sqlite_db):
    repository = SqlAlchemyCreditCardsRepository(sqlite_db)
    repository.insert_card(
        "owner-1",
        CreditCard(
            id="card-1",
            issuer="BHD",
            label="Gold",
            cutoff_date=date(2024, 1, 10),
            due_date=date(2024, 2, 4),
        ),
    )

    repository.update_card(
        "card-1", CreditCardPatch(cutoff_date=CLEARED, due_date=CLEARED)
    )

    (stored,) = repository.list_cards("owner-1")
    assert stored.cutoff_date is None
    assert stored.due_date is None
    assert stored.label == "Gold"
