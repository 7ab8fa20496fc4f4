"""SQLAlchemy-backed repository for credit cards."""

from sqlalchemy import text

from fincommand.application.ports.credit_cards_repository import (
    CreditCardsRepositoryPort,
)
from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.domain.constants import DEFAULT_DEBT_LABEL
from fincommand.domain.models import CardStatus, CreditCard, CreditCardPatch
from fincommand.domain.services.patches import patch_changes
from fincommand.infrastructure.record_store import (
    column_values,
    store_operation,
    update_statement,
)
from fincommand.utils.date_utils import coerce_date
from fincommand.utils.decimal_utils import coerce_decimal

CARD_COLUMNS = {
    "id": "id",
    "issuer": "bank",
    "label": "name",
    "cutoff_date": "cutoff_date",
    "due_date": "expiry_date",
    "debt_local": "debt_rd",
    "debt_foreign": "debt_us",
    "debt_label_local": "debt_type_rd",
    "debt_label_foreign": "debt_type_us",
    "status": "status",
    "paid_local": "payment_amount_rd",
    "paid_foreign": "payment_amount_us",
}

SELECT_CARDS_SQL = text(
    """
    SELECT id, bank, name, cutoff_date, expiry_date, debt_rd, debt_us,
           debt_type_rd, debt_type_us, status, payment_amount_rd,
           payment_amount_us
    FROM credit_cards
    WHERE user_id = :user_id
    ORDER BY bank, name
    """
)

INSERT_CARD_SQL = text(
    """
    INSERT INTO credit_cards (
        id, user_id, bank, name, cutoff_date, expiry_date, debt_rd, debt_us,
        debt_type_rd, debt_type_us, status, payment_amount_rd,
        payment_amount_us
    )
    VALUES (
        :id, :user_id, :bank, :name, :cutoff_date, :expiry_date, :debt_rd,
        :debt_us, :debt_type_rd, :debt_type_us, :status, :payment_amount_rd,
        :payment_amount_us
    )
    """
)

DELETE_CARD_SQL = text("DELETE FROM credit_cards WHERE id = :id")


def _row_to_card(row) -> CreditCard:
    return CreditCard(
        id=row.id,
        issuer=row.bank or "",
        label=row.name or "",
        cutoff_date=coerce_date(row.cutoff_date),
        due_date=coerce_date(row.expiry_date),
        debt_local=coerce_decimal(row.debt_rd),
        debt_foreign=coerce_decimal(row.debt_us),
        debt_label_local=row.debt_type_rd or DEFAULT_DEBT_LABEL,
        debt_label_foreign=row.debt_type_us or DEFAULT_DEBT_LABEL,
        status=CardStatus(row.status) if row.status else CardStatus.PENDING,
        paid_local=coerce_decimal(row.payment_amount_rd),
        paid_foreign=coerce_decimal(row.payment_amount_us),
    )


class SqlAlchemyCreditCardsRepository(CreditCardsRepositoryPort):
    """Repository backed by SQLAlchemy for the ``credit_cards`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the record store engine.
        """
        self._db_port = db_port

    def list_cards(self, owner_id: str) -> list[CreditCard]:
        engine = self._db_port.get_engine()
        with store_operation("list_cards"):
            with engine.connect() as conn:
                rows = conn.execute(SELECT_CARDS_SQL, {"user_id": owner_id}).all()
        return [_row_to_card(row) for row in rows]

    def insert_card(self, owner_id: str, card: CreditCard) -> CreditCard:
        params = {**column_values(vars(card), CARD_COLUMNS), "user_id": owner_id}
        engine = self._db_port.get_engine()
        with store_operation("insert_card"):
            with engine.begin() as conn:
                conn.execute(INSERT_CARD_SQL, params)
        return card

    def update_card(self, card_id: str, patch: CreditCardPatch) -> None:
        params = column_values(patch_changes(patch), CARD_COLUMNS)
        if not params:
            return
        params["id"] = card_id
        engine = self._db_port.get_engine()
        with store_operation("update_card"):
            with engine.begin() as conn:
                conn.execute(update_statement("credit_cards", params), params)

    def delete_card(self, card_id: str) -> None:
        engine = self._db_port.get_engine()
        with store_operation("delete_card"):
            with engine.begin() as conn:
                conn.execute(DELETE_CARD_SQL, {"id": card_id})


__all__ = ["SqlAlchemyCreditCardsRepository"]
