"""Tests for the QuickCountService and SettingsService."""

from decimal import Decimal
from unittest.mock import MagicMock

from fincommand.application.services.quick_count_service import (
    QuickCountService,
)
from fincommand.application.services.settings_service import SettingsService
from fincommand.domain.errors import RecordStoreError
from fincommand.domain.models import (
    AppSettings,
    AppSettingsPatch,
    CashPositionSnapshot,
    Company,
    UiPreferences,
    WeeklyObligation,
)
from fincommand.domain.services.quick_count import add_obligation, set_balance


def _quick_count_service(stored=None, obligations=()):
    repository = MagicMock()
    repository.get_snapshot.return_value = stored
    repository.list_weekly_obligations.return_value = list(obligations)
    repository.upsert_snapshot.return_value = "qc-1"
    service = QuickCountService(
        repository,
        "owner-1",
        default_exchange_rate=Decimal("60"),
        logger=MagicMock(),
    )
    return service, repository


def test_load_uses_default_rate_without_stored_snapshot():
    service, repository = _quick_count_service()

    assert service.load().ok
    assert service.snapshot.exchange_rate == Decimal("60")
    repository.list_weekly_obligations.assert_not_called()


def test_load_merges_stored_obligations():
    stored = CashPositionSnapshot(id="qc-1", days_remaining=4)
    obligation = WeeklyObligation(id="w1", concept="Agua", amount=Decimal("5"))
    service, _ = _quick_count_service(stored, [obligation])

    service.load()

    assert service.snapshot.days_remaining == 4
    assert service.snapshot.weekly_obligations == (obligation,)


def test_save_skips_unchanged_snapshot():
    service, repository = _quick_count_service()
    service.load()

    assert service.save(service.snapshot).ok
    repository.upsert_snapshot.assert_not_called()


def test_save_writes_snapshot_then_obligations():
    service, repository = _quick_count_service()
    service.load()
    candidate = add_obligation(service.snapshot, "Luz", "800")

    result = service.save(candidate)

    assert result.ok
    assert service.snapshot.id == "qc-1"
    assert service.snapshot.weekly_obligations == candidate.weekly_obligations
    repository.upsert_snapshot.assert_called_once_with("owner-1", candidate)
    repository.replace_weekly_obligations.assert_called_once_with(
        "qc-1", list(candidate.weekly_obligations)
    )


def test_failed_save_restores_previous_snapshot():
    service, repository = _quick_count_service()
    service.load()
    previous = service.snapshot
    repository.replace_weekly_obligations.side_effect = RecordStoreError("sync")

    result = service.save(set_balance(previous, "Efectivo", "10"))

    assert not result.ok
    assert service.snapshot is previous


def _settings_service(stored=None, preferences=None):
    repository = MagicMock()
    repository.get_settings.return_value = stored
    store = MagicMock()
    store.load.return_value = preferences or UiPreferences()
    service = SettingsService(repository, store, "owner-1", logger=MagicMock())
    service.load()
    return service, repository, store


def test_settings_load_and_update():
    service, repository, _ = _settings_service(AppSettings(app_name="Mi App"))

    assert service.app_settings.app_name == "Mi App"

    repository.upsert_settings.side_effect = RecordStoreError("upsert")
    result = service.update_app_settings(AppSettingsPatch(app_name="Otra"))

    assert not result.ok
    assert service.app_settings.app_name == "Mi App"


def test_selected_company_falls_back_to_first():
    service, _, store = _settings_service(
        preferences=UiPreferences(selected_company_id="gone")
    )
    companies = [Company(id="c1", name="A"), Company(id="c2", name="B")]

    assert service.selected_company(companies).id == "c1"

    service.select_company("c2")

    assert service.selected_company(companies).id == "c2"
    store.save.assert_called_with(
        UiPreferences(theme="light", selected_company_id="c2")
    )


def test_toggle_theme_persists_preference():
    service, _, store = _settings_service()

    assert service.toggle_theme().is_dark
    assert not service.toggle_theme().is_dark
    assert store.save.call_count == 2
