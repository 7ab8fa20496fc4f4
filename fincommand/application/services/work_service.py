"""Command handlers for clients and tasks."""

from dataclasses import replace
from datetime import datetime

from fincommand.application.ports.work_repository import WorkRepositoryPort
from fincommand.application.services.command_result import (
    CommandResult,
    run_remote,
)
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import Client, ClientTask
from fincommand.domain.services.work import (
    ALL_CLIENTS,
    build_agenda,
    next_status,
    pending_counts,
)
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.utils.utils import new_record_id


class WorkService:
    """Own the owner's clients and tasks."""

    def __init__(
        self,
        repository: WorkRepositoryPort,
        owner_id: str,
        logger=None,
    ) -> None:
        self._repository = repository
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.clients: list[Client] = []
        self.tasks: list[ClientTask] = []

    def load(self) -> CommandResult:
        try:
            self.clients = self._repository.list_clients(self._owner_id)
            self.tasks = self._repository.list_tasks(self._owner_id)
        except RecordStoreError as exc:
            self._logger.error(f"Loading work manager failed: {exc}")
            return CommandResult.failure("No se pudieron cargar los clientes.")
        return CommandResult.success()

    def agenda(self, client_id: str = ALL_CLIENTS) -> list[ClientTask]:
        return build_agenda(self.tasks, client_id)

    def pending_counts(self) -> dict[str, int]:
        return pending_counts(self.tasks)

    def add_client(self, name: str, contact_info: str = "") -> CommandResult:
        if not name.strip():
            return CommandResult.failure("El nombre del cliente es requerido.")
        client = Client(
            id=new_record_id(), name=name.strip(), contact_info=contact_info
        )
        self.clients.append(client)

        def _revert() -> None:
            self.clients.remove(client)

        return run_remote(
            self._logger,
            "Insert client",
            lambda: self._repository.insert_client(self._owner_id, client),
            revert=_revert,
            failure_message="No se pudo guardar el cliente.",
        )

    def delete_client(self, client_id: str) -> CommandResult:
        """Delete a client after removing its tasks from the store."""

        def _delete() -> None:
            self._repository.delete_client_tasks(client_id)
            self._repository.delete_client(client_id)

        result = run_remote(
            self._logger,
            f"Delete client {client_id}",
            _delete,
            failure_message="No se pudo eliminar el cliente.",
        )
        if result.ok:
            self.tasks = [t for t in self.tasks if t.client_id != client_id]
            self.clients = [c for c in self.clients if c.id != client_id]
        return result

    def add_task(
        self, client_id: str, description: str, due_at: datetime
    ) -> CommandResult:
        if not description.strip() or due_at is None:
            return CommandResult.failure(
                "La descripción y la fecha son requeridas."
            )
        task = ClientTask(
            id=new_record_id(),
            client_id=client_id,
            description=description.strip(),
            due_at=due_at,
        )
        self.tasks.append(task)

        def _revert() -> None:
            self.tasks.remove(task)

        return run_remote(
            self._logger,
            "Insert task",
            lambda: self._repository.insert_task(self._owner_id, task),
            revert=_revert,
            failure_message="No se pudo guardar la tarea.",
        )

    def cycle_task_status(self, task_id: str) -> CommandResult:
        """Advance a task to its next status."""
        index = next(
            (i for i, t in enumerate(self.tasks) if t.id == task_id), None
        )
        if index is None:
            return CommandResult.failure("Tarea no encontrada.")
        previous = self.tasks[index]
        updated = replace(previous, status=next_status(previous.status))
        self.tasks[index] = updated

        def _revert() -> None:
            self.tasks[index] = previous

        return run_remote(
            self._logger,
            f"Update task {task_id}",
            lambda: self._repository.update_task_status(
                task_id, updated.status
            ),
            revert=_revert,
            failure_message="No se pudo actualizar la tarea.",
        )


__all__ = ["WorkService"]
