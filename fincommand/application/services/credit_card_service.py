"""Command handlers for credit cards."""

from dataclasses import replace
from datetime import date

from fincommand.application.ports.credit_cards_repository import (
    CreditCardsRepositoryPort,
)
from fincommand.application.services.command_result import (
    CommandResult,
    run_remote,
)
from fincommand.domain.errors import RecordStoreError, ValidationError
from fincommand.domain.models import CreditCard, CreditCardPatch, CreditCardView
from fincommand.domain.models.money import DualAmount
from fincommand.domain.services.credit_cards import (
    build_card_view,
    register_payment,
    total_remaining,
    validate_card_form,
)
from fincommand.domain.services.patches import or_cleared
from fincommand.infrastructure.logging.logger import get_app_logger
from fincommand.utils.utils import new_record_id


def _patch_from_card(card: CreditCard) -> CreditCardPatch:
    return CreditCardPatch(
        issuer=card.issuer,
        label=card.label,
        cutoff_date=or_cleared(card.cutoff_date),
        due_date=or_cleared(card.due_date),
        debt_local=card.debt_local,
        debt_foreign=card.debt_foreign,
        debt_label_local=card.debt_label_local,
        debt_label_foreign=card.debt_label_foreign,
        status=card.status,
        paid_local=card.paid_local,
        paid_foreign=card.paid_foreign,
    )


class CreditCardService:
    """Own the owner's credit cards and keep them in sync."""

    def __init__(
        self,
        repository: CreditCardsRepositoryPort,
        owner_id: str,
        logger=None,
    ) -> None:
        self._repository = repository
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.cards: list[CreditCard] = []

    def load(self) -> CommandResult:
        try:
            self.cards = self._repository.list_cards(self._owner_id)
        except RecordStoreError as exc:
            self._logger.error(f"Loading cards failed: {exc}")
            return CommandResult.failure("No se pudieron cargar las tarjetas.")
        self._logger.info(f"Loaded {len(self.cards)} cards")
        return CommandResult.success()

    def views(self, today: date) -> list[CreditCardView]:
        """Return cards with urgency and remaining balance, most urgent first."""
        views = [build_card_view(card, today) for card in self.cards]
        return sorted(
            views,
            key=lambda view: (-view.urgency.severity, view.days_until_due),
        )

    def total_remaining(self) -> DualAmount:
        return total_remaining(self.cards)

    def find(self, card_id: str) -> CreditCard | None:
        return next((c for c in self.cards if c.id == card_id), None)

    def save_card(self, form: CreditCard) -> CommandResult:
        """Insert a new card or overwrite an edited one.

        Args:
            form: Card built through the edit form; a None id means new.

        Returns:
            CommandResult: Outcome, with a validation notice when invalid.
        """
        try:
            card = validate_card_form(form)
        except ValidationError as exc:
            return CommandResult.failure(str(exc))
        if card.id is None:
            return self._insert(replace(card, id=new_record_id()))
        return self._replace(card)

    def register_payment(
        self,
        card_id: str,
        added_local=None,
        added_foreign=None,
    ) -> CommandResult:
        """Accumulate a payment and persist the recomputed status."""
        card = self.find(card_id)
        if card is None:
            return CommandResult.failure("Tarjeta no encontrada.")
        paid = register_payment(card, added_local, added_foreign)
        return self._replace(
            paid,
            CreditCardPatch(
                paid_local=paid.paid_local,
                paid_foreign=paid.paid_foreign,
                status=paid.status,
            ),
            success_message=f"Pago registrado. Estado: {paid.status.value}",
        )

    def delete_card(self, card_id: str) -> CommandResult:
        result = run_remote(
            self._logger,
            f"Delete card {card_id}",
            lambda: self._repository.delete_card(card_id),
            failure_message="No se pudo eliminar la tarjeta.",
        )
        if result.ok:
            self.cards = [c for c in self.cards if c.id != card_id]
        return result

    def _insert(self, card: CreditCard) -> CommandResult:
        self.cards.append(card)

        def _revert() -> None:
            self.cards.remove(card)

        return run_remote(
            self._logger,
            "Insert card",
            lambda: self._repository.insert_card(self._owner_id, card),
            revert=_revert,
            failure_message="No se pudo guardar la tarjeta.",
        )

    def _replace(
        self,
        card: CreditCard,
        patch: CreditCardPatch | None = None,
        success_message: str = "",
    ) -> CommandResult:
        index = next(
            (i for i, c in enumerate(self.cards) if c.id == card.id),
            None,
        )
        if index is None:
            return CommandResult.failure("Tarjeta no encontrada.")
        previous = self.cards[index]
        self.cards[index] = card

        def _revert() -> None:
            self.cards[index] = previous

        return run_remote(
            self._logger,
            f"Update card {card.id}",
            lambda: self._repository.update_card(
                card.id, patch or _patch_from_card(card)
            ),
            revert=_revert,
            success_message=success_message,
            failure_message="No se pudo actualizar la tarjeta.",
        )


__all__ = ["CreditCardService"]
