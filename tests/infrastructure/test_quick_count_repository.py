"""Tests for the quick count repository."""

from decimal import Decimal
from unittest.mock import MagicMock

from fincommand.domain.models import (
    CashPositionSnapshot,
    SettlementMode,
    WeeklyObligation,
)
from fincommand.infrastructure.quick_count_repository import (
    SqlAlchemyQuickCountRepository,
)


def _snapshot(**kwargs) -> CashPositionSnapshot:
    values = {
        "id": "qc-1",
        "balances": {
            "Banco Popular": Decimal("1000"),
            "Banco BHD": Decimal("250.75"),
            "BanReservas": Decimal("0"),
            "Efectivo": Decimal("80"),
        },
        "exchange_rate": Decimal("58.5"),
        "ad_spend_foreign": Decimal("12"),
        "days_remaining": 6,
    }
    values.update(kwargs)
    return CashPositionSnapshot(**values)


def test_upsert_keeps_one_row_per_owner(sqlite_db):
    repository = SqlAlchemyQuickCountRepository(sqlite_db, logger=MagicMock())

    first_id = repository.upsert_snapshot("owner-1", _snapshot())
    second_id = repository.upsert_snapshot(
        "owner-1", _snapshot(id="other", days_remaining=3)
    )

    assert first_id == second_id == "qc-1"
    stored = repository.get_snapshot("owner-1")
    assert stored.days_remaining == 3
    assert stored.balances["Banco BHD"] == Decimal("250.75")
    assert stored.exchange_rate == Decimal("58.5")
    assert repository.get_snapshot("owner-2") is None


def test_replace_weekly_obligations_syncs_by_id(sqlite_db):
    logger = MagicMock()
    repository = SqlAlchemyQuickCountRepository(sqlite_db, logger=logger)
    snapshot_id = repository.upsert_snapshot("owner-1", _snapshot())
    rent = WeeklyObligation(id="w1", concept="Alquiler", amount=Decimal("1500"))
    power = WeeklyObligation(id="w2", concept="Luz", amount=Decimal("300"))
    repository.replace_weekly_obligations(snapshot_id, [rent, power])

    paid_power = WeeklyObligation(
        id="w2",
        concept="Luz",
        amount=Decimal("300"),
        settlement_mode=SettlementMode.HALF,
        is_paid=True,
    )
    water = WeeklyObligation(id="w3", concept="Agua", amount=Decimal("90"))
    repository.replace_weekly_obligations(snapshot_id, [paid_power, water])

    assert repository.list_weekly_obligations(snapshot_id) == [paid_power, water]
    logger.info.assert_called_with(
        "Synced weekly obligations: 1 updated, 1 inserted, 1 deleted"
    )


def test_empty_obligation_list_clears_rows(sqlite_db):
    repository = SqlAlchemyQuickCountRepository(sqlite_db, logger=MagicMock())
    snapshot_id = repository.upsert_snapshot("owner-1", _snapshot())
    repository.replace_weekly_obligations(
        snapshot_id,
        [WeeklyObligation(id="w1", concept="Agua", amount=Decimal("5"))],
    )

    repository.replace_weekly_obligations(snapshot_id, [])

    assert repository.list_weekly_obligations(snapshot_id) == []
