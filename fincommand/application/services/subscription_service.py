"""Command handlers for subscriptions."""

from fincommand.application.ports.subscriptions_repository import (
    SubscriptionsRepositoryPort,
)
from fincommand.application.services.command_result import (
    CommandResult,
    run_remote,
)
from fincommand.domain.errors import RecordStoreError, ValidationError
from fincommand.domain.models import (
    Currency,
    Subscription,
    SubscriptionCategory,
    SubscriptionTotals,
)
from fincommand.domain.services.subscriptions import (
    aggregate_subscriptions,
    build_subscription,
)
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.utils.utils import new_record_id


class SubscriptionService:
    """Own the owner's subscriptions and keep them in sync."""

    def __init__(
        self,
        repository: SubscriptionsRepositoryPort,
        owner_id: str,
        logger=None,
    ) -> None:
        self._repository = repository
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.subscriptions: list[Subscription] = []

    def load(self) -> CommandResult:
        try:
            self.subscriptions = self._repository.list_subscriptions(
                self._owner_id
            )
        except RecordStoreError as exc:
            self._logger.error(f"Loading subscriptions failed: {exc}")
            return CommandResult.failure(
                "No se pudieron cargar las suscripciones."
            )
        return CommandResult.success()

    def totals(self, exchange_rate) -> SubscriptionTotals:
        return aggregate_subscriptions(self.subscriptions, exchange_rate)

    def add_subscription(
        self,
        *,
        name: str,
        amount,
        card_id: str,
        currency: Currency = Currency.FOREIGN,
        billing_day=1,
        category: SubscriptionCategory = SubscriptionCategory.ESSENTIAL,
    ) -> CommandResult:
        """Validate the creation form and store the subscription."""
        try:
            subscription = build_subscription(
                name=name,
                amount=amount,
                card_id=card_id,
                currency=currency,
                billing_day=billing_day,
                category=category,
                subscription_id=new_record_id(),
            )
        except ValidationError as exc:
            return CommandResult.failure(str(exc))
        self.subscriptions.append(subscription)

        def _revert() -> None:
            self.subscriptions.remove(subscription)

        return run_remote(
            self._logger,
            "Insert subscription",
            lambda: self._repository.insert_subscription(
                self._owner_id, subscription
            ),
            revert=_revert,
            failure_message="No se pudo guardar la suscripción.",
        )

    def delete_subscription(self, subscription_id: str) -> CommandResult:
        result = run_remote(
            self._logger,
            f"Delete subscription {subscription_id}",
            lambda: self._repository.delete_subscription(subscription_id),
            failure_message="No se pudo eliminar la suscripción.",
        )
        if result.ok:
            self.subscriptions = [
                s for s in self.subscriptions if s.id != subscription_id
            ]
        return result


__all__ = ["SubscriptionService"]
