"""Command handlers for branding settings and local preferences."""

from collections.abc import Sequence
from dataclasses import replace

from fincommand.application.ports.preferences import PreferencesStorePort
from fincommand.application.ports.user_settings_repository import (
    UserSettingsRepositoryPort,
)
from fincommand.application.services.command_result import (
    CommandResult,
    run_remote,
)
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import (
    AppSettings,
    AppSettingsPatch,
    Company,
    UiPreferences,
)
from fincommand.domain.services.patches import apply_patch
from fincommand.domain.services.settings import resolve_selected_company
from fincommand.infrastructure.logging.logger import get_app_logger


class SettingsService:
    """Own branding settings and device preferences."""

    def __init__(
        self,
        repository: UserSettingsRepositoryPort,
        preferences_store: PreferencesStorePort,
        owner_id: str,
        logger=None,
    ) -> None:
        self._repository = repository
        self._preferences_store = preferences_store
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self.app_settings = AppSettings()
        self.preferences = preferences_store.load()

    def load(self) -> CommandResult:
        try:
            stored = self._repository.get_settings(self._owner_id)
        except RecordStoreError as exc:
            self._logger.error(f"Loading settings failed: {exc}")
            return CommandResult.failure("No se pudo cargar la configuración.")
        if stored is not None:
            self.app_settings = stored
        return CommandResult.success()

    def update_app_settings(self, patch: AppSettingsPatch) -> CommandResult:
        previous = self.app_settings
        self.app_settings = apply_patch(previous, patch)

        def _revert() -> None:
            self.app_settings = previous

        return run_remote(
            self._logger,
            "Upsert settings",
            lambda: self._repository.upsert_settings(self._owner_id, patch),
            revert=_revert,
            success_message="Configuración guardada.",
            failure_message="No se pudo guardar la configuración.",
        )

    def selected_company(self, companies: Sequence[Company]) -> Company | None:
        return resolve_selected_company(
            companies, self.preferences.selected_company_id
        )

    def select_company(self, company_id: str) -> None:
        self._store(replace(self.preferences, selected_company_id=company_id))

    def toggle_theme(self) -> UiPreferences:
        theme = "light" if self.preferences.is_dark else "dark"
        self._store(replace(self.preferences, theme=theme))
        return self.preferences

    def _store(self, preferences: UiPreferences) -> None:
        self.preferences = preferences
        self._preferences_store.save(preferences)


__all__ = ["SettingsService"]
