"""Port for clients and their tasks."""

from typing import Protocol

from fincommand.domain.models import Client, ClientTask, TaskStatus


class WorkRepositoryPort(Protocol):
    """Port exposing read and write access to clients and tasks."""

    def list_clients(self, owner_id: str) -> list[Client]:
        """Return the owner's clients."""

    def insert_client(self, owner_id: str, client: Client) -> Client:
        """Store a client and return it with its assigned id."""

    def delete_client(self, client_id: str) -> None:
        """Remove one client."""

    def list_tasks(self, owner_id: str) -> list[ClientTask]:
        """Return the owner's tasks."""

    def insert_task(self, owner_id: str, task: ClientTask) -> ClientTask:
        """Store a task and return it with its assigned id."""

    def update_task_status(self, task_id: str, status: TaskStatus) -> None:
        """Persist a task's new status."""

    def delete_client_tasks(self, client_id: str) -> None:
        """Remove every task of a client."""


__all__ = ["WorkRepositoryPort"]
