"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, spreadsheets or forms.

    Returns:
        Decimal: Normalized numeric value. Blank or unparseable input is zero.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return Decimal("0")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round an amount to cents, half up."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_db_number(value: Decimal) -> str:
    """Serialize a Decimal for a NUMERIC bind parameter."""
    return str(coerce_decimal(value))


__all__ = ["coerce_decimal", "round_money", "to_db_number", "TWO_PLACES"]
