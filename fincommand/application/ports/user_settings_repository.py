"""Port for per-owner application settings."""

from typing import Protocol

from fincommand.domain.models import AppSettings, AppSettingsPatch


class UserSettingsRepositoryPort(Protocol):
    """Port exposing the owner's branding settings."""

    def get_settings(self, owner_id: str) -> AppSettings | None:
        """Return stored settings, or None when never saved."""

    def upsert_settings(self, owner_id: str, patch: AppSettingsPatch) -> None:
        """Insert or update only the set fields of ``patch``."""


__all__ = ["UserSettingsRepositoryPort"]
