"""Port for credit card storage."""

from typing import Protocol

from fincommand.domain.models import CreditCard, CreditCardPatch


class CreditCardsRepositoryPort(Protocol):
    """Port exposing read and write access to credit cards."""

    def list_cards(self, owner_id: str) -> list[CreditCard]:
        """Return the owner's cards."""

    def insert_card(self, owner_id: str, card: CreditCard) -> CreditCard:
        """Store a card and return it with its assigned id."""

    def update_card(self, card_id: str, patch: CreditCardPatch) -> None:
        """Write the set fields of ``patch``."""

    def delete_card(self, card_id: str) -> None:
        """Remove one card."""


__all__ = ["CreditCardsRepositoryPort"]
