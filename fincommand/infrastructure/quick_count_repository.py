"""SQLAlchemy-backed repository for the quick count snapshot."""

from sqlalchemy import bindparam, text

from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.quick_count_repository import (
    QuickCountRepositoryPort,
)
from fincommand.domain.constants import BALANCE_SOURCES
from fincommand.domain.models import (
    CashPositionSnapshot,
    SettlementMode,
    WeeklyObligation,
)
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.infrastructure.record_store import store_operation, to_db_value
from fincommand.utils.decimal_utils import coerce_decimal
from fincommand.utils.utils import new_record_id

BALANCE_COLUMNS = dict(
    zip(
        BALANCE_SOURCES,
        ("banco_popular", "banco_bhd", "banco_ban_reservas", "efectivo"),
    )
)

SELECT_SNAPSHOT_SQL = text(
    """
    SELECT id, banco_popular, banco_bhd, banco_ban_reservas, efectivo,
           exchange_rate, ad_spend_us, days_for_calc
    FROM quick_counts
    WHERE user_id = :user_id
    """
)

UPSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO quick_counts (
        id, user_id, banco_popular, banco_bhd, banco_ban_reservas, efectivo,
        exchange_rate, ad_spend_us, days_for_calc
    )
    VALUES (
        :id, :user_id, :banco_popular, :banco_bhd, :banco_ban_reservas,
        :efectivo, :exchange_rate, :ad_spend_us, :days_for_calc
    )
    ON CONFLICT (user_id) DO UPDATE SET
        banco_popular = excluded.banco_popular,
        banco_bhd = excluded.banco_bhd,
        banco_ban_reservas = excluded.banco_ban_reservas,
        efectivo = excluded.efectivo,
        exchange_rate = excluded.exchange_rate,
        ad_spend_us = excluded.ad_spend_us,
        days_for_calc = excluded.days_for_calc
    """
)

SELECT_SNAPSHOT_ID_SQL = text(
    "SELECT id FROM quick_counts WHERE user_id = :user_id"
)

SELECT_OBLIGATIONS_SQL = text(
    """
    SELECT id, concept, amount, payment_type, is_paid
    FROM weekly_debts
    WHERE quick_count_id = :quick_count_id
    ORDER BY position
    """
)

SELECT_OBLIGATION_IDS_SQL = text(
    "SELECT id FROM weekly_debts WHERE quick_count_id = :quick_count_id"
)

INSERT_OBLIGATION_SQL = text(
    """
    INSERT INTO weekly_debts (
        id, quick_count_id, concept, amount, payment_type, is_paid, position
    )
    VALUES (
        :id, :quick_count_id, :concept, :amount, :payment_type, :is_paid,
        :position
    )
    """
)

UPDATE_OBLIGATION_SQL = text(
    """
    UPDATE weekly_debts
    SET concept = :concept,
        amount = :amount,
        payment_type = :payment_type,
        is_paid = :is_paid,
        position = :position
    WHERE id = :id AND quick_count_id = :quick_count_id
    """
)

DELETE_OBLIGATIONS_SQL = text(
    "DELETE FROM weekly_debts "
    "WHERE quick_count_id = :quick_count_id AND id IN :ids"
).bindparams(bindparam("ids", expanding=True))


class SqlAlchemyQuickCountRepository(QuickCountRepositoryPort):
    """Repository backed by SQLAlchemy for ``quick_counts`` and ``weekly_debts``."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the record store engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def get_snapshot(self, owner_id: str) -> CashPositionSnapshot | None:
        engine = self._db_port.get_engine()
        with store_operation("get_snapshot"):
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_SNAPSHOT_SQL, {"user_id": owner_id}
                ).first()
        if row is None:
            return None
        mapping = row._mapping
        return CashPositionSnapshot(
            id=row.id,
            balances={
                source: coerce_decimal(mapping[column])
                for source, column in BALANCE_COLUMNS.items()
            },
            exchange_rate=coerce_decimal(row.exchange_rate),
            ad_spend_foreign=coerce_decimal(row.ad_spend_us),
            days_remaining=int(row.days_for_calc or 1),
        )

    def upsert_snapshot(
        self, owner_id: str, snapshot: CashPositionSnapshot
    ) -> str:
        """Write the snapshot row and return the stored id."""
        params = {
            column: to_db_value(coerce_decimal(snapshot.balances.get(source)))
            for source, column in BALANCE_COLUMNS.items()
        }
        params.update(
            {
                "id": snapshot.id or new_record_id(),
                "user_id": owner_id,
                "exchange_rate": to_db_value(
                    coerce_decimal(snapshot.exchange_rate)
                ),
                "ad_spend_us": to_db_value(
                    coerce_decimal(snapshot.ad_spend_foreign)
                ),
                "days_for_calc": snapshot.days_remaining,
            }
        )
        engine = self._db_port.get_engine()
        with store_operation("upsert_snapshot"):
            with engine.begin() as conn:
                conn.execute(UPSERT_SNAPSHOT_SQL, params)
                return conn.execute(
                    SELECT_SNAPSHOT_ID_SQL, {"user_id": owner_id}
                ).scalar_one()

    def list_weekly_obligations(
        self, snapshot_id: str
    ) -> list[WeeklyObligation]:
        engine = self._db_port.get_engine()
        with store_operation("list_weekly_obligations"):
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_OBLIGATIONS_SQL, {"quick_count_id": snapshot_id}
                ).all()
        return [
            WeeklyObligation(
                id=row.id,
                concept=row.concept,
                amount=coerce_decimal(row.amount),
                settlement_mode=SettlementMode(row.payment_type),
                is_paid=bool(row.is_paid),
            )
            for row in rows
        ]

    def replace_weekly_obligations(
        self, snapshot_id: str, obligations: list[WeeklyObligation]
    ) -> None:
        """Synchronize stored obligations with ``obligations``.

        Rows whose id is still present are updated, new ids are inserted and
        ids no longer present are deleted, all in one database transaction.
        """
        engine = self._db_port.get_engine()
        with store_operation("replace_weekly_obligations"):
            with engine.begin() as conn:
                existing = set(
                    conn.execute(
                        SELECT_OBLIGATION_IDS_SQL,
                        {"quick_count_id": snapshot_id},
                    ).scalars()
                )
                payload = [
                    {
                        "id": item.id or new_record_id(),
                        "quick_count_id": snapshot_id,
                        "concept": item.concept,
                        "amount": to_db_value(coerce_decimal(item.amount)),
                        "payment_type": item.settlement_mode.value,
                        "is_paid": bool(item.is_paid),
                        "position": position,
                    }
                    for position, item in enumerate(obligations)
                ]
                keep = {row["id"] for row in payload}
                removed = sorted(existing - keep)
                if removed:
                    conn.execute(
                        DELETE_OBLIGATIONS_SQL,
                        {"quick_count_id": snapshot_id, "ids": removed},
                    )
                updates = [row for row in payload if row["id"] in existing]
                inserts = [row for row in payload if row["id"] not in existing]
                if updates:
                    conn.execute(UPDATE_OBLIGATION_SQL, updates)
                if inserts:
                    conn.execute(INSERT_OBLIGATION_SQL, inserts)
        self._logger.info(
            f"Synced weekly obligations: {len(updates)} updated, "
            f"{len(inserts)} inserted, {len(removed)} deleted"
        )


__all__ = ["BALANCE_COLUMNS", "SqlAlchemyQuickCountRepository"]
