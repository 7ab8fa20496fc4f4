"""Helpers for date normalization."""

from datetime import date, datetime


def coerce_date(value) -> date | None:
    """Normalize a stored date value.

    Args:
        value: A date, datetime or ISO string as returned by the store.

    Returns:
        date | None: The calendar day, or None when the value is blank.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def coerce_datetime(value) -> datetime | None:
    """Normalize a stored timestamp value.

    Args:
        value: A datetime, date or ISO string as returned by the store.

    Returns:
        datetime | None: Naive datetime, or None when the value is blank.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raw = str(value).replace("Z", "+00:00")
    return datetime.fromisoformat(raw).replace(tzinfo=None)


def to_local_day(value: date | datetime) -> date:
    """Drop the time of day so comparisons happen at local midnight."""
    if isinstance(value, datetime):
        return value.date()
    return value


__all__ = ["coerce_date", "coerce_datetime", "to_local_day"]
