"""Domain models for credit-card debt tracking."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from fincommand.domain.constants import DEFAULT_DEBT_LABEL

from .money import ZERO, DualAmount


class CardStatus(str, Enum):
    """Payment status stored with each card."""

    PENDING = "Pendiente"
    PARTIALLY_PAID = "Abonada"
    PAID = "Pagada"


class Urgency(Enum):
    """Urgency band derived from the days left until the due date."""

    PAID = ("Pagada", 0)
    ON_TRACK = ("A tiempo", 1)
    ATTENTION = ("Atención", 2)
    CRITICAL = ("Crítico", 3)
    OVERDUE = ("Vencida", 4)

    def __init__(self, label: str, severity: int) -> None:
        self.label = label
        self.severity = severity


@dataclass(frozen=True)
class CreditCard:
    """A credit obligation tracked in both currencies.

    Attributes:
        issuer: Bank name, used to pick the grace period.
        label: Card nickname.
        cutoff_date: Statement cutoff date.
        due_date: Payment due date, derived from the cutoff unless edited.
        debt_local: Statement debt in local currency.
        debt_foreign: Statement debt in foreign currency.
        debt_label_local: Kind of local debt (e.g. Consumo).
        debt_label_foreign: Kind of foreign debt (e.g. Publicidad).
        status: Cached payment status.
        paid_local: Cumulative payments in local currency.
        paid_foreign: Cumulative payments in foreign currency.
    """

    id: str | None
    issuer: str
    label: str
    cutoff_date: date | None = None
    due_date: date | None = None
    debt_local: Decimal = ZERO
    debt_foreign: Decimal = ZERO
    debt_label_local: str = DEFAULT_DEBT_LABEL
    debt_label_foreign: str = DEFAULT_DEBT_LABEL
    status: CardStatus = CardStatus.PENDING
    paid_local: Decimal = ZERO
    paid_foreign: Decimal = ZERO

    @property
    def debt(self) -> DualAmount:
        return DualAmount(self.debt_local, self.debt_foreign)

    @property
    def paid(self) -> DualAmount:
        return DualAmount(self.paid_local, self.paid_foreign)


@dataclass(frozen=True)
class CreditCardPatch:
    """Partial update for a card; None means unchanged, CLEARED means null."""

    issuer: str | None = None
    label: str | None = None
    cutoff_date: date | None = None
    due_date: date | None = None
    debt_local: Decimal | None = None
    debt_foreign: Decimal | None = None
    debt_label_local: str | None = None
    debt_label_foreign: str | None = None
    status: CardStatus | None = None
    paid_local: Decimal | None = None
    paid_foreign: Decimal | None = None


@dataclass(frozen=True)
class CreditCardView:
    """Card enriched with the values the cards page renders."""

    card: CreditCard
    days_until_due: int
    urgency: Urgency
    remaining: DualAmount


__all__ = [
    "CardStatus",
    "Urgency",
    "CreditCard",
    "CreditCardPatch",
    "CreditCardView",
]
