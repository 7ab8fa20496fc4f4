"""Entry-time currency conversion helpers."""

from decimal import Decimal

from fincommand.utils.decimal_utils import coerce_decimal, round_money


def convert_local_to_foreign(amount_local, exchange_rate) -> Decimal:
    """Convert a local amount to foreign currency for form pre-fill.

    Args:
        amount_local: Amount typed in local currency.
        exchange_rate: Local units per foreign unit.

    Returns:
        Decimal: Foreign amount rounded to cents, or zero without a rate.
    """
    rate = coerce_decimal(exchange_rate)
    if rate <= 0:
        return Decimal("0")
    return round_money(coerce_decimal(amount_local) / rate)


def convert_foreign_to_local(amount_foreign, exchange_rate) -> Decimal:
    """Convert a foreign amount to local currency without rounding."""
    return coerce_decimal(amount_foreign) * coerce_decimal(exchange_rate)


__all__ = ["convert_local_to_foreign", "convert_foreign_to_local"]
