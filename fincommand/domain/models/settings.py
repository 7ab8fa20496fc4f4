"""Domain models for application-level settings and preferences."""

from dataclasses import dataclass

from fincommand.domain.constants import DEFAULT_APP_NAME


@dataclass(frozen=True)
class AppSettings:
    """Branding stored per owner."""

    app_name: str = DEFAULT_APP_NAME
    app_logo: str | None = None


@dataclass(frozen=True)
class AppSettingsPatch:
    app_name: str | None = None
    app_logo: str | None = None


@dataclass(frozen=True)
class UiPreferences:
    """Preferences persisted on the local device."""

    theme: str = "light"
    selected_company_id: str | None = None

    @property
    def is_dark(self) -> bool:
        return self.theme == "dark"


__all__ = ["AppSettings", "AppSettingsPatch", "UiPreferences"]
