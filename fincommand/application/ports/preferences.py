"""Port for device-local UI preferences."""

from typing import Protocol

from fincommand.domain.models import UiPreferences


class PreferencesStorePort(Protocol):
    """Port persisting preferences outside the record store."""

    def load(self) -> UiPreferences:
        """Return stored preferences, or defaults."""

    def save(self, preferences: UiPreferences) -> None:
        """Persist preferences."""


__all__ = ["PreferencesStorePort"]
