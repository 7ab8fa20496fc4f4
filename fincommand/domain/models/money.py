"""Dual-currency amount value object."""

from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class DualAmount:
    """An amount tracked independently in local and foreign currency.

    Attributes:
        local: Amount in the primary ledger currency (RD$).
        foreign: Amount in the secondary tracked currency (US$).
    """

    local: Decimal = ZERO
    foreign: Decimal = ZERO

    def __add__(self, other: "DualAmount") -> "DualAmount":
        return DualAmount(self.local + other.local, self.foreign + other.foreign)

    def __sub__(self, other: "DualAmount") -> "DualAmount":
        return DualAmount(self.local - other.local, self.foreign - other.foreign)

    def clamp_non_negative(self) -> "DualAmount":
        """Return a copy where negative components are floored at zero."""
        return DualAmount(max(ZERO, self.local), max(ZERO, self.foreign))

    @property
    def is_zero(self) -> bool:
        return self.local == 0 and self.foreign == 0


__all__ = ["DualAmount", "ZERO"]
