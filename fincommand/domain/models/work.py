"""Domain models for the client and task manager."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class Client:
    id: str | None
    name: str
    contact_info: str = ""


@dataclass(frozen=True)
class ClientTask:
    """A dated piece of work for a client."""

    id: str | None
    client_id: str
    description: str
    due_at: datetime
    status: TaskStatus = TaskStatus.PENDING


__all__ = ["TaskStatus", "Client", "ClientTask"]
