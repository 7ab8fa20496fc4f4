"""Password authentication against the ``app_users`` table."""

import hashlib
import hmac
import secrets
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from fincommand.application.ports.auth import (
    AuthGatewayPort,
    AuthSession,
    SessionListener,
)
from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.domain.errors import AuthError, RecordStoreError
from fincommand.infrastructure.logging.logger import get_usage_logger
from fincommand.infrastructure.record_store import store_operation
from fincommand.utils.utils import new_record_id

PBKDF2_ITERATIONS = 240_000
MIN_PASSWORD_LENGTH = 6

SELECT_USER_SQL = text(
    "SELECT id, email, password_hash, salt FROM app_users WHERE email = :email"
)

INSERT_USER_SQL = text(
    """
    INSERT INTO app_users (id, email, password_hash, salt)
    VALUES (:id, :email, :password_hash, :salt)
    """
)


def hash_password(password: str, salt: str) -> str:
    """Return the hex PBKDF2-SHA256 digest of ``password``."""
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        bytes.fromhex(salt),
        PBKDF2_ITERATIONS,
    )
    return digest.hex()


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SqlAlchemyAuthGateway(AuthGatewayPort):
    """AuthGatewayPort implementation storing salted password hashes.

    The gateway keeps the current session in memory and notifies listeners
    on every sign in and sign out.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the gateway.

        Args:
            db_port: Port providing access to the record store engine.
            logger: Optional logger; defaults to the usage logger.
        """
        self._db_port = db_port
        self._logger = logger or get_usage_logger()
        self._session: AuthSession | None = None
        self._listeners: list[SessionListener] = []

    def get_session(self) -> AuthSession | None:
        return self._session

    def on_session_change(
        self, callback: SessionListener
    ) -> Callable[[], None]:
        """Register a listener called with the new session or None."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Authenticate an existing account.

        Raises:
            AuthError: When the credentials do not match.
        """
        normalized = _normalize_email(email)
        engine = self._db_port.get_engine()
        with store_operation("sign_in"):
            with engine.connect() as conn:
                row = conn.execute(SELECT_USER_SQL, {"email": normalized}).first()
        if row is None or not hmac.compare_digest(
            row.password_hash, hash_password(password or "", row.salt)
        ):
            self._logger.warning(f"Failed sign in for {normalized}")
            raise AuthError("Correo o contraseña incorrectos.")
        return self._start_session(AuthSession(user_id=row.id, email=row.email))

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account and sign it in.

        Raises:
            AuthError: On an invalid e-mail, short password or duplicate.
        """
        normalized = _normalize_email(email)
        if "@" not in normalized:
            raise AuthError("Ingresa un correo válido.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} "
                "caracteres."
            )
        salt = secrets.token_hex(16)
        user_id = new_record_id()
        params = {
            "id": user_id,
            "email": normalized,
            "password_hash": hash_password(password, salt),
            "salt": salt,
        }
        engine = self._db_port.get_engine()
        try:
            with store_operation("sign_up"):
                with engine.begin() as conn:
                    conn.execute(INSERT_USER_SQL, params)
        except RecordStoreError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise AuthError("Este correo ya está registrado.") from exc
            raise
        return self._start_session(AuthSession(user_id=user_id, email=normalized))

    def sign_out(self) -> None:
        if self._session is not None:
            self._logger.info(f"Signed out {self._session.email}")
        self._session = None
        self._notify()

    def _start_session(self, session: AuthSession) -> AuthSession:
        self._session = session
        self._logger.info(f"Signed in {session.email}")
        self._notify()
        return session

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "SqlAlchemyAuthGateway",
    "hash_password",
]
