"""Domain models for recurring subscriptions."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .money import ZERO


class Currency(str, Enum):
    """Currency a subscription is billed in."""

    LOCAL = "RD$"
    FOREIGN = "US$"


class SubscriptionCategory(str, Enum):
    ESSENTIAL = "Importante"
    LUXURY = "Lujo"


@dataclass(frozen=True)
class Subscription:
    """A recurring charge billed to a linked credit card."""

    id: str | None
    name: str
    amount: Decimal
    currency: Currency
    billing_day: int
    card_id: str
    category: SubscriptionCategory = SubscriptionCategory.ESSENTIAL


@dataclass(frozen=True)
class SubscriptionTotals:
    """Subscription sums per currency plus a local-normalized total."""

    total_local: Decimal = ZERO
    total_foreign: Decimal = ZERO
    total_normalized_local: Decimal = ZERO


__all__ = [
    "Currency",
    "SubscriptionCategory",
    "Subscription",
    "SubscriptionTotals",
]
