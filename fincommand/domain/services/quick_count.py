"""Cash position planning services."""

from dataclasses import replace
from decimal import Decimal

from fincommand.domain.constants import (
    BALANCE_SOURCES,
    DEFAULT_EXCHANGE_RATE,
    MAX_DAYS_REMAINING,
    MIN_DAYS_REMAINING,
)
from fincommand.domain.models import (
    CashPositionPlan,
    CashPositionSnapshot,
    SettlementMode,
    WeeklyObligation,
)
from fincommand.utils.decimal_utils import coerce_decimal
from fincommand.utils.utils import new_record_id


def default_snapshot(exchange_rate=DEFAULT_EXCHANGE_RATE) -> CashPositionSnapshot:
    """Return the zeroed snapshot shown before anything is saved."""
    return CashPositionSnapshot(
        id=None,
        balances={source: Decimal("0") for source in BALANCE_SOURCES},
        exchange_rate=coerce_decimal(exchange_rate),
    )


def plan_cash_position(snapshot: CashPositionSnapshot) -> CashPositionPlan:
    """Compute available cash, the week's obligations and the daily target.

    Paid and unpaid obligations both count: the total is the week's full
    commitment, not what is still owed.
    """
    total_available = sum(
        (coerce_decimal(amount) for amount in snapshot.balances.values()),
        Decimal("0"),
    )
    total_obligations = sum(
        (coerce_decimal(item.amount) for item in snapshot.weekly_obligations),
        Decimal("0"),
    )
    shortfall = max(Decimal("0"), total_obligations - total_available)
    days = snapshot.days_remaining
    daily_target = shortfall / days if days > 0 else Decimal("0")
    return CashPositionPlan(
        total_available=total_available,
        total_obligations=total_obligations,
        shortfall=shortfall,
        daily_target=daily_target,
        ad_spend_local=coerce_decimal(snapshot.ad_spend_foreign)
        * coerce_decimal(snapshot.exchange_rate),
    )


def add_obligation(
    snapshot: CashPositionSnapshot,
    concept: str,
    amount,
) -> CashPositionSnapshot:
    """Append an unpaid, fully settled obligation.

    Blank concepts or zero amounts leave the snapshot unchanged.
    """
    value = coerce_decimal(amount)
    if not concept or value == 0:
        return snapshot
    obligation = WeeklyObligation(
        id=new_record_id(),
        concept=concept,
        amount=value,
    )
    return replace(
        snapshot,
        weekly_obligations=(*snapshot.weekly_obligations, obligation),
    )


def remove_obligation(
    snapshot: CashPositionSnapshot,
    obligation_id: str,
) -> CashPositionSnapshot:
    return replace(
        snapshot,
        weekly_obligations=tuple(
            item
            for item in snapshot.weekly_obligations
            if item.id != obligation_id
        ),
    )


def _map_obligation(snapshot, obligation_id, update) -> CashPositionSnapshot:
    return replace(
        snapshot,
        weekly_obligations=tuple(
            update(item) if item.id == obligation_id else item
            for item in snapshot.weekly_obligations
        ),
    )


def toggle_obligation_paid(
    snapshot: CashPositionSnapshot,
    obligation_id: str,
) -> CashPositionSnapshot:
    return _map_obligation(
        snapshot,
        obligation_id,
        lambda item: replace(item, is_paid=not item.is_paid),
    )


def toggle_settlement_mode(
    snapshot: CashPositionSnapshot,
    obligation_id: str,
) -> CashPositionSnapshot:
    def _flip(item: WeeklyObligation) -> WeeklyObligation:
        mode = (
            SettlementMode.HALF
            if item.settlement_mode is SettlementMode.FULL
            else SettlementMode.FULL
        )
        return replace(item, settlement_mode=mode)

    return _map_obligation(snapshot, obligation_id, _flip)


def update_obligation(
    snapshot: CashPositionSnapshot,
    obligation_id: str,
    *,
    concept: str | None = None,
    amount=None,
) -> CashPositionSnapshot:
    """Edit the concept or amount of one obligation in place."""

    def _edit(item: WeeklyObligation) -> WeeklyObligation:
        return replace(
            item,
            concept=item.concept if concept is None else concept,
            amount=item.amount if amount is None else coerce_decimal(amount),
        )

    return _map_obligation(snapshot, obligation_id, _edit)


def set_balance(
    snapshot: CashPositionSnapshot,
    source: str,
    amount,
) -> CashPositionSnapshot:
    balances = dict(snapshot.balances)
    balances[source] = coerce_decimal(amount)
    return replace(snapshot, balances=balances)


def set_days_remaining(
    snapshot: CashPositionSnapshot,
    days,
) -> CashPositionSnapshot:
    """Set the days used for the daily target, clamped into 1-31."""
    try:
        value = int(days)
    except (TypeError, ValueError):
        value = MIN_DAYS_REMAINING
    value = min(MAX_DAYS_REMAINING, max(MIN_DAYS_REMAINING, value))
    return replace(snapshot, days_remaining=value)


def snapshot_changed(
    current: CashPositionSnapshot,
    candidate: CashPositionSnapshot,
) -> bool:
    """Return True when saving ``candidate`` would change stored data."""
    sources = set(current.balances) | set(candidate.balances)
    for source in sources:
        if coerce_decimal(current.balances.get(source)) != coerce_decimal(
            candidate.balances.get(source)
        ):
            return True
    return (
        coerce_decimal(current.exchange_rate)
        != coerce_decimal(candidate.exchange_rate)
        or coerce_decimal(current.ad_spend_foreign)
        != coerce_decimal(candidate.ad_spend_foreign)
        or current.days_remaining != candidate.days_remaining
        or current.weekly_obligations != candidate.weekly_obligations
    )


__all__ = [
    "default_snapshot",
    "plan_cash_position",
    "add_obligation",
    "remove_obligation",
    "toggle_obligation_paid",
    "toggle_settlement_mode",
    "update_obligation",
    "set_balance",
    "set_days_remaining",
    "snapshot_changed",
]
