"""Recurring charge aggregation services."""

from collections.abc import Iterable
from decimal import Decimal

from fincommand.domain.errors import ValidationError
from fincommand.domain.models import (
    CreditCard,
    Currency,
    Subscription,
    SubscriptionCategory,
    SubscriptionTotals,
)
from fincommand.utils.decimal_utils import coerce_decimal

UNKNOWN_CARD_LABEL = "Tarjeta desconocida"


def aggregate_subscriptions(
    subscriptions: Iterable[Subscription],
    exchange_rate,
) -> SubscriptionTotals:
    """Sum subscriptions per currency and normalized to local currency.

    Args:
        subscriptions: Subscriptions to aggregate.
        exchange_rate: Local units per foreign unit.

    Returns:
        SubscriptionTotals: Unrounded totals.
    """
    rate = coerce_decimal(exchange_rate)
    total_local = Decimal("0")
    total_foreign = Decimal("0")
    for sub in subscriptions:
        amount = coerce_decimal(sub.amount)
        if sub.currency is Currency.LOCAL:
            total_local += amount
        else:
            total_foreign += amount
    return SubscriptionTotals(
        total_local=total_local,
        total_foreign=total_foreign,
        total_normalized_local=total_local + total_foreign * rate,
    )


def totals_by_category(
    subscriptions: Iterable[Subscription],
    exchange_rate,
) -> dict[SubscriptionCategory, Decimal]:
    """Return the local-normalized total per category."""
    items = list(subscriptions)
    return {
        category: aggregate_subscriptions(
            [sub for sub in items if sub.category is category],
            exchange_rate,
        ).total_normalized_local
        for category in SubscriptionCategory
    }


def describe_linked_card(cards: Iterable[CreditCard], card_id: str) -> str:
    for card in cards:
        if card.id == card_id:
            return f"{card.issuer} - {card.label}"
    return UNKNOWN_CARD_LABEL


def build_subscription(
    *,
    name: str,
    amount,
    card_id: str,
    currency: Currency = Currency.FOREIGN,
    billing_day=1,
    category: SubscriptionCategory = SubscriptionCategory.ESSENTIAL,
    subscription_id: str | None = None,
) -> Subscription:
    """Validate the creation form and build a subscription.

    Raises:
        ValidationError: When name, a positive amount or the card is missing.
    """
    value = coerce_decimal(amount)
    if not name or value <= 0 or not card_id:
        raise ValidationError(
            "Por favor completa el nombre, monto y tarjeta."
        )
    try:
        day = int(billing_day)
    except (TypeError, ValueError):
        day = 1
    return Subscription(
        id=subscription_id,
        name=name,
        amount=value,
        currency=currency,
        billing_day=min(31, max(1, day)),
        card_id=card_id,
        category=category,
    )


__all__ = [
    "UNKNOWN_CARD_LABEL",
    "aggregate_subscriptions",
    "totals_by_category",
    "describe_linked_card",
    "build_subscription",
]
