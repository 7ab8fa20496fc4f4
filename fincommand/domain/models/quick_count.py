"""Domain models for the cash-position quick count."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from fincommand.domain.constants import DEFAULT_EXCHANGE_RATE

from .money import ZERO


class SettlementMode(str, Enum):
    FULL = "Completo"
    HALF = "Mitad"


@dataclass(frozen=True)
class WeeklyObligation:
    """A local-currency commitment due this week."""

    id: str | None
    concept: str
    amount: Decimal
    settlement_mode: SettlementMode = SettlementMode.FULL
    is_paid: bool = False


@dataclass(frozen=True)
class CashPositionSnapshot:
    """The owner's current cash position.

    Attributes:
        balances: Liquid balance per named source, local currency.
        exchange_rate: Local units per foreign unit, shared with subscriptions.
        ad_spend_foreign: Informational foreign ad spend.
        days_remaining: Days left to cover the shortfall.
        weekly_obligations: Commitments for the current week.
    """

    id: str | None = None
    balances: dict[str, Decimal] = field(default_factory=dict)
    exchange_rate: Decimal = DEFAULT_EXCHANGE_RATE
    ad_spend_foreign: Decimal = ZERO
    days_remaining: int = 1
    weekly_obligations: tuple[WeeklyObligation, ...] = ()


@dataclass(frozen=True)
class CashPositionPlan:
    """Derived quick-count figures."""

    total_available: Decimal
    total_obligations: Decimal
    shortfall: Decimal
    daily_target: Decimal
    ad_spend_local: Decimal = ZERO


__all__ = [
    "SettlementMode",
    "WeeklyObligation",
    "CashPositionSnapshot",
    "CashPositionPlan",
]
