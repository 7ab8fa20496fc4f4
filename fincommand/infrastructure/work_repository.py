"""SQLAlchemy-backed repository for clients and their tasks."""

from sqlalchemy import text

from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.work_repository import WorkRepositoryPort
from fincommand.domain.models import Client, ClientTask, TaskStatus
from fincommand.infrastructure.record_store import store_operation, to_db_value
from fincommand.utils.date_utils import coerce_datetime

SELECT_CLIENTS_SQL = text(
    """
    SELECT id, name, contact_info
    FROM clients
    WHERE user_id = :user_id
    ORDER BY name
    """
)

INSERT_CLIENT_SQL = text(
    """
    INSERT INTO clients (id, user_id, name, contact_info)
    VALUES (:id, :user_id, :name, :contact_info)
    """
)

DELETE_CLIENT_SQL = text("DELETE FROM clients WHERE id = :id")

SELECT_TASKS_SQL = text(
    """
    SELECT id, client_id, description, due_date, status
    FROM client_tasks
    WHERE user_id = :user_id
    ORDER BY due_date
    """
)

INSERT_TASK_SQL = text(
    """
    INSERT INTO client_tasks (
        id, user_id, client_id, description, due_date, status
    )
    VALUES (:id, :user_id, :client_id, :description, :due_date, :status)
    """
)

UPDATE_TASK_STATUS_SQL = text(
    "UPDATE client_tasks SET status = :status WHERE id = :id"
)

DELETE_CLIENT_TASKS_SQL = text(
    "DELETE FROM client_tasks WHERE client_id = :client_id"
)


class SqlAlchemyWorkRepository(WorkRepositoryPort):
    """Repository backed by SQLAlchemy for ``clients`` and ``client_tasks``."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def list_clients(self, owner_id: str) -> list[Client]:
        engine = self._db_port.get_engine()
        with store_operation("list_clients"):
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_CLIENTS_SQL, {"user_id": owner_id}
                ).all()
        return [
            Client(id=row.id, name=row.name, contact_info=row.contact_info or "")
            for row in rows
        ]

    def insert_client(self, owner_id: str, client: Client) -> Client:
        self._write(
            "insert_client",
            INSERT_CLIENT_SQL,
            {
                "id": client.id,
                "user_id": owner_id,
                "name": client.name,
                "contact_info": client.contact_info,
            },
        )
        return client

    def delete_client(self, client_id: str) -> None:
        self._write("delete_client", DELETE_CLIENT_SQL, {"id": client_id})

    def list_tasks(self, owner_id: str) -> list[ClientTask]:
        engine = self._db_port.get_engine()
        with store_operation("list_tasks"):
            with engine.connect() as conn:
                rows = conn.execute(SELECT_TASKS_SQL, {"user_id": owner_id}).all()
        return [
            ClientTask(
                id=row.id,
                client_id=row.client_id,
                description=row.description,
                due_at=coerce_datetime(row.due_date),
                status=TaskStatus(row.status),
            )
            for row in rows
        ]

    def insert_task(self, owner_id: str, task: ClientTask) -> ClientTask:
        self._write(
            "insert_task",
            INSERT_TASK_SQL,
            {
                "id": task.id,
                "user_id": owner_id,
                "client_id": task.client_id,
                "description": task.description,
                "due_date": to_db_value(task.due_at),
                "status": task.status.value,
            },
        )
        return task

    def update_task_status(self, task_id: str, status: TaskStatus) -> None:
        self._write(
            "update_task_status",
            UPDATE_TASK_STATUS_SQL,
            {"id": task_id, "status": status.value},
        )

    def delete_client_tasks(self, client_id: str) -> None:
        self._write(
            "delete_client_tasks",
            DELETE_CLIENT_TASKS_SQL,
            {"client_id": client_id},
        )

    def _write(self, operation: str, statement, params: dict) -> None:
        engine = self._db_port.get_engine()
        with store_operation(operation):
            with engine.begin() as conn:
                conn.execute(statement, params)


__all__ = ["SqlAlchemyWorkRepository"]
