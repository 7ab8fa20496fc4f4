"""Debt reconciliation services for credit cards."""

from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

from fincommand.domain.constants import (
    ATTENTION_DAYS_THRESHOLD,
    CRITICAL_DAYS_THRESHOLD,
    DEFAULT_GRACE_PERIOD_DAYS,
    ISSUER_GRACE_PERIODS,
)
from fincommand.domain.errors import ValidationError
from fincommand.domain.models import (
    CardStatus,
    CreditCard,
    CreditCardView,
    DualAmount,
    Urgency,
)
from fincommand.utils.date_utils import to_local_day
from fincommand.utils.decimal_utils import coerce_decimal


def grace_period_days(issuer: str) -> int:
    """Return the grace period for an issuer name.

    Keywords are matched case-insensitively as substrings, in the order of
    ISSUER_GRACE_PERIODS; the first match wins.
    """
    issuer_lower = (issuer or "").lower()
    for keyword, days in ISSUER_GRACE_PERIODS:
        if keyword in issuer_lower:
            return days
    return DEFAULT_GRACE_PERIOD_DAYS


def derive_due_date(cutoff_date: date | None, issuer: str) -> date | None:
    """Derive the payment due date from the cutoff and the issuer.

    Args:
        cutoff_date: Statement cutoff date.
        issuer: Bank name.

    Returns:
        date | None: Cutoff plus grace period, or None without a cutoff.
    """
    if cutoff_date is None:
        return None
    return to_local_day(cutoff_date) + timedelta(
        days=grace_period_days(issuer)
    )


def days_until_due(due_date: date | None, today: date | datetime) -> int:
    """Return calendar days from ``today`` to ``due_date``.

    Both sides are compared as calendar days, so the time of day never shifts
    the result. A missing due date counts as due today. Negative values mean
    the card is overdue.
    """
    if due_date is None:
        return 0
    return (to_local_day(due_date) - to_local_day(today)).days


def classify_urgency(days: int, is_paid: bool) -> Urgency:
    """Map days until due to an urgency band; paid cards short-circuit."""
    if is_paid:
        return Urgency.PAID
    if days < 0:
        return Urgency.OVERDUE
    if days <= CRITICAL_DAYS_THRESHOLD:
        return Urgency.CRITICAL
    if days <= ATTENTION_DAYS_THRESHOLD:
        return Urgency.ATTENTION
    return Urgency.ON_TRACK


def compute_status(debt: DualAmount, paid: DualAmount) -> CardStatus:
    """Derive the payment status from debt and cumulative payments."""
    if paid.local >= debt.local and paid.foreign >= debt.foreign:
        return CardStatus.PAID
    if paid.local > 0 or paid.foreign > 0:
        return CardStatus.PARTIALLY_PAID
    return CardStatus.PENDING


def register_payment(
    card: CreditCard,
    added_local=None,
    added_foreign=None,
) -> CreditCard:
    """Add a payment to the cumulative paid amounts and recompute status.

    The status is always recomputed, overwriting any manually set value.
    """
    paid_local = coerce_decimal(card.paid_local) + coerce_decimal(added_local)
    paid_foreign = coerce_decimal(card.paid_foreign) + coerce_decimal(
        added_foreign
    )
    status = compute_status(
        card.debt,
        DualAmount(paid_local, paid_foreign),
    )
    return replace(
        card,
        paid_local=paid_local,
        paid_foreign=paid_foreign,
        status=status,
    )


def remaining_balance(card: CreditCard) -> DualAmount:
    """Return the outstanding debt per currency, never negative."""
    return (card.debt - card.paid).clamp_non_negative()


def build_card_view(card: CreditCard, today: date | datetime) -> CreditCardView:
    days = days_until_due(card.due_date, today)
    return CreditCardView(
        card=card,
        days_until_due=days,
        urgency=classify_urgency(days, card.status is CardStatus.PAID),
        remaining=remaining_balance(card),
    )


def new_card_form() -> CreditCard:
    """Return the blank card used by the creation form."""
    return CreditCard(id=None, issuer="", label="")


def change_form_field(form: CreditCard, field: str, value: Any) -> CreditCard:
    """Apply one edit-form change, re-deriving the due date when needed.

    Changing the issuer or the cutoff date recomputes the due date and drops
    any due date typed by hand before. Without a cutoff the due date is
    cleared.
    """
    updated = replace(form, **{field: value})
    if field in ("issuer", "cutoff_date"):
        updated = replace(
            updated,
            due_date=derive_due_date(updated.cutoff_date, updated.issuer),
        )
    return updated


def validate_card_form(form: CreditCard) -> CreditCard:
    """Normalize a card form before it is saved.

    Raises:
        ValidationError: When issuer or label are missing.
    """
    if not form.issuer or not form.label:
        raise ValidationError("El banco y el nombre de la tarjeta son requeridos.")
    return replace(
        form,
        debt_local=coerce_decimal(form.debt_local),
        debt_foreign=coerce_decimal(form.debt_foreign),
        paid_local=coerce_decimal(form.paid_local),
        paid_foreign=coerce_decimal(form.paid_foreign),
    )


def total_remaining(cards: list[CreditCard]) -> DualAmount:
    total = DualAmount(Decimal("0"), Decimal("0"))
    for card in cards:
        total = total + remaining_balance(card)
    return total


__all__ = [
    "grace_period_days",
    "derive_due_date",
    "days_until_due",
    "classify_urgency",
    "compute_status",
    "register_payment",
    "remaining_balance",
    "build_card_view",
    "new_card_form",
    "change_form_field",
    "validate_card_form",
    "total_remaining",
]
