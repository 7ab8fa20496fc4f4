"""Ports for owner authentication."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class AuthSession:
    """The authenticated owner."""

    user_id: str
    email: str


SessionListener = Callable[[AuthSession | None], None]


class AuthGatewayPort(Protocol):
    """Port exposing sign in, sign up and session tracking."""

    def get_session(self) -> AuthSession | None:
        """Return the current session, if signed in."""

    def on_session_change(
        self, callback: SessionListener
    ) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Authenticate and start a session."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account and start a session."""

    def sign_out(self) -> None:
        """End the current session."""


__all__ = ["AuthSession", "SessionListener", "AuthGatewayPort"]
