"""SQLAlchemy-backed repository for per-owner branding settings."""

from sqlalchemy import text

from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.user_settings_repository import (
    UserSettingsRepositoryPort,
)
from fincommand.domain.constants import DEFAULT_APP_NAME
from fincommand.domain.models import AppSettings, AppSettingsPatch
from fincommand.domain.services.patches import patch_changes
from fincommand.infrastructure.record_store import column_values, store_operation

SETTINGS_COLUMNS = {"app_name": "app_name", "app_logo": "app_logo"}

SELECT_SETTINGS_SQL = text(
    "SELECT app_name, app_logo FROM user_settings WHERE user_id = :user_id"
)


def _upsert_statement(columns: list[str]):
    """Build an upsert writing only ``columns``."""
    names = ", ".join(["user_id", *columns])
    values = ", ".join(f":{column}" for column in ["user_id", *columns])
    updates = ", ".join(f"{column} = excluded.{column}" for column in columns)
    return text(
        f"INSERT INTO user_settings ({names}) VALUES ({values}) "
        f"ON CONFLICT (user_id) DO UPDATE SET {updates}"
    )


class SqlAlchemyUserSettingsRepository(UserSettingsRepositoryPort):
    """Repository backed by SQLAlchemy for the ``user_settings`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def get_settings(self, owner_id: str) -> AppSettings | None:
        engine = self._db_port.get_engine()
        with store_operation("get_settings"):
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_SETTINGS_SQL, {"user_id": owner_id}
                ).first()
        if row is None:
            return None
        return AppSettings(
            app_name=row.app_name or DEFAULT_APP_NAME,
            app_logo=row.app_logo or None,
        )

    def upsert_settings(self, owner_id: str, patch: AppSettingsPatch) -> None:
        """Insert or update the owner's row, touching only set fields."""
        params = column_values(patch_changes(patch), SETTINGS_COLUMNS)
        if not params:
            return
        statement = _upsert_statement(list(params))
        params["user_id"] = owner_id
        engine = self._db_port.get_engine()
        with store_operation("upsert_settings"):
            with engine.begin() as conn:
                conn.execute(statement, params)


__all__ = ["SqlAlchemyUserSettingsRepository"]
