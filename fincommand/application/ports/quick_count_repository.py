"""Port for the quick count snapshot and its weekly obligations."""

from typing import Protocol

from fincommand.domain.models import CashPositionSnapshot, WeeklyObligation


class QuickCountRepositoryPort(Protocol):
    """Port exposing the owner's single cash position snapshot."""

    def get_snapshot(self, owner_id: str) -> CashPositionSnapshot | None:
        """Return the stored snapshot without obligations, if any."""

    def upsert_snapshot(
        self, owner_id: str, snapshot: CashPositionSnapshot
    ) -> str:
        """Insert or update the owner's snapshot and return its id."""

    def list_weekly_obligations(
        self, snapshot_id: str
    ) -> list[WeeklyObligation]:
        """Return the obligations of a snapshot in display order."""

    def replace_weekly_obligations(
        self, snapshot_id: str, obligations: list[WeeklyObligation]
    ) -> None:
        """Make the stored obligations equal to ``obligations``."""


__all__ = ["QuickCountRepositoryPort"]
