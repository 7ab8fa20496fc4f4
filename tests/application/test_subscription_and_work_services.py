"""Tests for the SubscriptionService and WorkService."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from fincommand.application.services.subscription_service import (
    SubscriptionService,
)
from fincommand.application.services.work_service import WorkService
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import (
    Client,
    ClientTask,
    Currency,
    SubscriptionCategory,
    TaskStatus,
)


def _subscription_service():
    repository = MagicMock()
    repository.list_subscriptions.return_value = []
    service = SubscriptionService(repository, "owner-1", logger=MagicMock())
    service.load()
    return service, repository


def test_add_subscription_updates_totals():
    service, repository = _subscription_service()

    result = service.add_subscription(
        name="Gym",
        amount="2000",
        card_id="card-1",
        currency=Currency.LOCAL,
        category=SubscriptionCategory.LUXURY,
    )

    assert result.ok
    assert service.totals("58.5").total_local == Decimal("2000")
    repository.insert_subscription.assert_called_once()


def test_add_subscription_validation_message():
    service, repository = _subscription_service()

    result = service.add_subscription(name="", amount="5", card_id="card-1")

    assert result.message == "Por favor completa el nombre, monto y tarjeta."
    repository.insert_subscription.assert_not_called()


def test_failed_subscription_insert_is_reverted():
    service, repository = _subscription_service()
    repository.insert_subscription.side_effect = RecordStoreError("insert")

    result = service.add_subscription(name="Gym", amount="5", card_id="c")

    assert not result.ok
    assert service.subscriptions == []


def test_delete_subscription_after_store_confirms():
    service, repository = _subscription_service()
    service.add_subscription(name="Gym", amount="5", card_id="c")
    sub_id = service.subscriptions[0].id

    assert service.delete_subscription(sub_id).ok
    assert service.subscriptions == []
    repository.delete_subscription.assert_called_once_with(sub_id)


def _work_service(clients=(), tasks=()):
    repository = MagicMock()
    repository.list_clients.return_value = list(clients)
    repository.list_tasks.return_value = list(tasks)
    service = WorkService(repository, "owner-1", logger=MagicMock())
    service.load()
    return service, repository


def test_delete_client_removes_tasks_first():
    client = Client(id="c1", name="Ana")
    task = ClientTask(
        id="t1",
        client_id="c1",
        description="Factura",
        due_at=datetime(2024, 1, 2, 10),
    )
    service, repository = _work_service([client], [task])
    calls = []
    repository.delete_client_tasks.side_effect = lambda cid: calls.append(
        ("tasks", cid)
    )
    repository.delete_client.side_effect = lambda cid: calls.append(
        ("client", cid)
    )

    result = service.delete_client("c1")

    assert result.ok
    assert calls == [("tasks", "c1"), ("client", "c1")]
    assert service.clients == []
    assert service.tasks == []


def test_cycle_task_status_persists_next_status():
    task = ClientTask(
        id="t1",
        client_id="c1",
        description="Factura",
        due_at=datetime(2024, 1, 2, 10),
    )
    service, repository = _work_service(tasks=[task])

    assert service.cycle_task_status("t1").ok
    assert service.tasks[0].status is TaskStatus.COMPLETED
    repository.update_task_status.assert_called_once_with(
        "t1", TaskStatus.COMPLETED
    )

    repository.update_task_status.side_effect = RecordStoreError("update")
    assert not service.cycle_task_status("t1").ok
    assert service.tasks[0].status is TaskStatus.COMPLETED


def test_add_client_and_task_validation():
    service, repository = _work_service()

    assert not service.add_client(" ").ok
    assert service.add_client("Ana", "809-555-0000").ok
    client_id = service.clients[0].id

    assert not service.add_task(client_id, "", datetime(2024, 1, 1)).ok
    assert service.add_task(client_id, "Llamar", datetime(2024, 1, 1, 9)).ok
    assert service.pending_counts() == {client_id: 1}
    assert service.agenda(client_id)[0].description == "Llamar"
    repository.insert_task.assert_called_once()
