"""Client and task manager services."""

from collections.abc import Iterable
from datetime import datetime

from fincommand.domain.models import ClientTask, TaskStatus

ALL_CLIENTS = "all"

_NEXT_STATUS = {
    TaskStatus.PENDING: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.CONFIRMED,
    TaskStatus.CONFIRMED: TaskStatus.PENDING,
}


def next_status(status: TaskStatus) -> TaskStatus:
    """Cycle pending -> completed -> confirmed -> pending."""
    return _NEXT_STATUS[status]


def is_late(task: ClientTask, now: datetime) -> bool:
    return task.status is TaskStatus.PENDING and now > task.due_at


def build_agenda(
    tasks: Iterable[ClientTask],
    client_id: str = ALL_CLIENTS,
) -> list[ClientTask]:
    """Return tasks of one client (or all), earliest due first."""
    selected = [
        task
        for task in tasks
        if client_id == ALL_CLIENTS or task.client_id == client_id
    ]
    return sorted(selected, key=lambda task: task.due_at)


def pending_counts(tasks: Iterable[ClientTask]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for task in tasks:
        if task.status is TaskStatus.PENDING:
            counts[task.client_id] = counts.get(task.client_id, 0) + 1
    return counts


__all__ = [
    "ALL_CLIENTS",
    "next_status",
    "is_late",
    "build_agenda",
    "pending_counts",
]
