"""JSON file store for device-local UI preferences."""

import json
from pathlib import Path

from fincommand.application.ports.preferences import PreferencesStorePort
from fincommand.domain.models import UiPreferences
from fincommand.infrastructure.logging.logger import get_app_logger


class JsonPreferencesStore(PreferencesStorePort):
    """Persist preferences as a small JSON document."""

    def __init__(self, path: Path, logger=None) -> None:
        self._path = Path(path)
        self._logger = logger or get_app_logger()

    def load(self) -> UiPreferences:
        """Return stored preferences; unreadable files yield defaults."""
        if not self._path.exists():
            return UiPreferences()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._logger.warning(
                f"Ignoring unreadable preferences at {self._path}: {exc}"
            )
            return UiPreferences()
        theme = payload.get("theme")
        return UiPreferences(
            theme=theme if theme in ("light", "dark") else "light",
            selected_company_id=payload.get("selected_company_id"),
        )

    def save(self, preferences: UiPreferences) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "theme": preferences.theme,
            "selected_company_id": preferences.selected_company_id,
        }
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


__all__ = ["JsonPreferencesStore"]
