"""Port for subscription storage."""

from typing import Protocol

from fincommand.domain.models import Subscription


class SubscriptionsRepositoryPort(Protocol):
    """Port exposing read and write access to subscriptions."""

    def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        """Return the owner's subscriptions."""

    def insert_subscription(
        self, owner_id: str, subscription: Subscription
    ) -> Subscription:
        """Store a subscription and return it with its assigned id."""

    def delete_subscription(self, subscription_id: str) -> None:
        """Remove one subscription."""


__all__ = ["SubscriptionsRepositoryPort"]
