from __future__ import annotations

from datetime import timedelta

from core.reminder_plan import DEFAULT_OFFSETS
from core.settings import MAX_REMINDERS, CoreSettings, CoreSettingsManager


def test_defaults_when_nothing_is_stored(settings_store) -> None:
    settings = CoreSettingsManager(store=settings_store()).read_settings()

    assert settings == CoreSettings()
    assert settings.offsets == DEFAULT_OFFSETS
    assert settings.session_id == "workTime"


def test_reads_configured_values(settings_store) -> None:
    store = settings_store(
        {
            "Session/ReminderOffsets": ["30m", "1h30m"],
            "Session/NotificationTitle": "  Stretch  ",
            "Session/SessionId": "desk_time",
            "Notifications/SoundEnabled": "false",
            "Notifications/ClearDeliveredOnStop": 0,
            "Notifications/AuthorizeOnLaunch": True,
        }
    )

    settings = CoreSettingsManager(store=store).read_settings()

    assert settings.offsets == (timedelta(minutes=30), timedelta(hours=1, minutes=30))
    assert settings.notification_title == "Stretch"
    assert settings.session_id == "desk_time"
    assert settings.sound_enabled is False
    assert settings.clear_delivered_on_stop is False
    assert settings.authorize_on_launch is True


def test_single_offset_string_is_accepted(settings_store) -> None:
    store = settings_store({"Session/ReminderOffsets": "45m"})

    assert CoreSettingsManager(store=store).read_settings().offsets == (timedelta(minutes=45),)


def test_invalid_offsets_fall_back_to_defaults(settings_store) -> None:
    store = settings_store({"Session/ReminderOffsets": ["1h", "tomorrow"]})

    assert CoreSettingsManager(store=store).read_settings().offsets == DEFAULT_OFFSETS


def test_offsets_are_clamped_to_eight(settings_store) -> None:
    store = settings_store({"Session/ReminderOffsets": [f"{n}h" for n in range(1, 12)]})

    offsets = CoreSettingsManager(store=store).read_settings().offsets

    assert len(offsets) == MAX_REMINDERS
    assert offsets[-1] == timedelta(hours=8)


def test_long_title_is_truncated(settings_store) -> None:
    store = settings_store({"Session/NotificationTitle": "x" * 100})

    assert len(CoreSettingsManager(store=store).read_settings().notification_title) == 64


def test_bad_values_use_defaults(settings_store) -> None:
    store = settings_store(
        {
            "Session/SessionId": "work time!",
            "Notifications/SoundEnabled": "maybe",
            "Session/NotificationTitle": 42,
        }
    )

    settings = CoreSettingsManager(store=store).read_settings()

    assert settings.session_id == "workTime"
    assert settings.sound_enabled is True
    assert settings.notification_title == "Zihou"
