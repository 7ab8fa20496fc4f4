"""SQLAlchemy-backed repository for subscriptions."""

from sqlalchemy import text

from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.subscriptions_repository import (
    SubscriptionsRepositoryPort,
)
from fincommand.domain.models import Currency, Subscription, SubscriptionCategory
from fincommand.infrastructure.record_store import store_operation, to_db_value
from fincommand.utils.decimal_utils import coerce_decimal

SELECT_SUBSCRIPTIONS_SQL = text(
    """
    SELECT id, name, amount, currency, charge_day, card_id, category
    FROM subscriptions
    WHERE user_id = :user_id
    ORDER BY charge_day, name
    """
)

INSERT_SUBSCRIPTION_SQL = text(
    """
    INSERT INTO subscriptions (
        id, user_id, name, amount, currency, charge_day, card_id, category
    )
    VALUES (
        :id, :user_id, :name, :amount, :currency, :charge_day, :card_id,
        :category
    )
    """
)

DELETE_SUBSCRIPTION_SQL = text("DELETE FROM subscriptions WHERE id = :id")


class SqlAlchemySubscriptionsRepository(SubscriptionsRepositoryPort):
    """Repository backed by SQLAlchemy for the ``subscriptions`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        engine = self._db_port.get_engine()
        with store_operation("list_subscriptions"):
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_SUBSCRIPTIONS_SQL, {"user_id": owner_id}
                ).all()
        return [
            Subscription(
                id=row.id,
                name=row.name,
                amount=coerce_decimal(row.amount),
                currency=Currency(row.currency),
                billing_day=int(row.charge_day),
                card_id=row.card_id,
                category=(
                    SubscriptionCategory(row.category)
                    if row.category
                    else SubscriptionCategory.ESSENTIAL
                ),
            )
            for row in rows
        ]

    def insert_subscription(
        self, owner_id: str, subscription: Subscription
    ) -> Subscription:
        params = {
            "id": subscription.id,
            "user_id": owner_id,
            "name": subscription.name,
            "amount": to_db_value(subscription.amount),
            "currency": subscription.currency.value,
            "charge_day": subscription.billing_day,
            "card_id": subscription.card_id,
            "category": subscription.category.value,
        }
        engine = self._db_port.get_engine()
        with store_operation("insert_subscription"):
            with engine.begin() as conn:
                conn.execute(INSERT_SUBSCRIPTION_SQL, params)
        return subscription

    def delete_subscription(self, subscription_id: str) -> None:
        engine = self._db_port.get_engine()
        with store_operation("delete_subscription"):
            with engine.begin() as conn:
                conn.execute(DELETE_SUBSCRIPTION_SQL, {"id": subscription_id})


__all__ = ["SqlAlchemySubscriptionsRepository"]
