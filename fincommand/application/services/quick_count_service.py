"""Command handlers for the quick count snapshot."""

from dataclasses import replace

from fincommand.application.ports.quick_count_repository import (
    QuickCountRepositoryPort,
)
from fincommand.application.services.command_result import CommandResult
from fincommand.domain.constants import DEFAULT_EXCHANGE_RATE
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import CashPositionPlan, CashPositionSnapshot
from fincommand.domain.services.quick_count import (
    default_snapshot,
    plan_cash_position,
    snapshot_changed,
)
from fincommand.infrastructure.logging.logger import get_app_logger


class QuickCountService:
    """Own the owner's cash position snapshot."""

    def __init__(
        self,
        repository: QuickCountRepositoryPort,
        owner_id: str,
        default_exchange_rate=DEFAULT_EXCHANGE_RATE,
        logger=None,
    ) -> None:
        self._repository = repository
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.snapshot: CashPositionSnapshot = default_snapshot(
            default_exchange_rate
        )

    def load(self) -> CommandResult:
        """Fetch the stored snapshot and its obligations, if any."""
        try:
            stored = self._repository.get_snapshot(self._owner_id)
            if stored is not None and stored.id is not None:
                obligations = self._repository.list_weekly_obligations(
                    stored.id
                )
                self.snapshot = replace(
                    stored, weekly_obligations=tuple(obligations)
                )
        except RecordStoreError as exc:
            self._logger.error(f"Loading quick count failed: {exc}")
            return CommandResult.failure(
                "No se pudo cargar el conteo rápido."
            )
        return CommandResult.success()

    def plan(self) -> CashPositionPlan:
        return plan_cash_position(self.snapshot)

    def save(self, candidate: CashPositionSnapshot) -> CommandResult:
        """Persist ``candidate`` when it differs from the current snapshot.

        The snapshot row is upserted first so new owners get an id, then the
        obligations are synchronized against that id.
        """
        if not snapshot_changed(self.snapshot, candidate):
            return CommandResult.success()
        previous = self.snapshot
        self.snapshot = candidate
        try:
            snapshot_id = self._repository.upsert_snapshot(
                self._owner_id, candidate
            )
            self._repository.replace_weekly_obligations(
                snapshot_id, list(candidate.weekly_obligations)
            )
        except RecordStoreError as exc:
            self.snapshot = previous
            self._logger.error(f"Saving quick count failed: {exc}")
            return CommandResult.failure(
                "No se pudo guardar el conteo rápido."
            )
        self.snapshot = replace(candidate, id=snapshot_id)
        self._logger.info(
            f"Saved quick count with {len(candidate.weekly_obligations)} "
            "obligations"
        )
        return CommandResult.success("Cambios guardados.")


__all__ = ["QuickCountService"]
