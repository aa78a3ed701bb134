"""
QSettings-backed configuration for the Zihou runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional, Tuple

from PySide6.QtCore import QSettings

from core.permission_store import APPLICATION_NAME, ORGANIZATION_NAME
from core.reminder_plan import DEFAULT_OFFSETS, DEFAULT_SESSION_ID, DEFAULT_TITLE
from shared.offsets import OffsetValidationError, parse_offsets
from zihou import logger as app_logger

_LOGGER = app_logger.get_logger()

MAX_REMINDERS = 8
MAX_TITLE_LENGTH = 64
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(eq=True)
class CoreSettings:
    offsets: Tuple[timedelta, ...] = field(default=DEFAULT_OFFSETS)
    notification_title: str = DEFAULT_TITLE
    session_id: str = DEFAULT_SESSION_ID
    sound_enabled: bool = True
    clear_delivered_on_stop: bool = True
    authorize_on_launch: bool = True


class CoreSettingsManager:
    """Loads persisted settings and clamps invalid data."""

    def __init__(self, *, store: Optional[Any] = None) -> None:
        self._store = store if store is not None else QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def read_settings(self) -> CoreSettings:
        return CoreSettings(
            offsets=self._read_offsets(),
            notification_title=self._read_title(),
            session_id=self._read_session_id(),
            sound_enabled=self._read_bool("Notifications/SoundEnabled", True),
            clear_delivered_on_stop=self._read_bool("Notifications/ClearDeliveredOnStop", True),
            authorize_on_launch=self._read_bool("Notifications/AuthorizeOnLaunch", True),
        )

    def _read_offsets(self) -> Tuple[timedelta, ...]:
        raw = self._store.value("Session/ReminderOffsets", None)
        if raw is None or raw == "":
            return DEFAULT_OFFSETS
        # QSettings hands back a plain string when the list has a single entry.
        if isinstance(raw, str):
            raw = [part for part in raw.split(",") if part.strip()]
        try:
            offsets = parse_offsets(raw)
        except (OffsetValidationError, TypeError) as exc:
            _LOGGER.warning("Invalid reminder offsets {!r} in settings ({}). Using defaults.", raw, exc)
            return DEFAULT_OFFSETS
        if not offsets:
            return DEFAULT_OFFSETS
        if len(offsets) > MAX_REMINDERS:
            _LOGGER.warning(
                "{} reminder offsets configured; keeping the first {}.",
                len(offsets),
                MAX_REMINDERS,
            )
            offsets = offsets[:MAX_REMINDERS]
        return tuple(offsets)

    def _read_title(self) -> str:
        raw = self._read_string("Session/NotificationTitle")
        if not raw:
            return DEFAULT_TITLE
        if len(raw) > MAX_TITLE_LENGTH:
            _LOGGER.warning("Notification title longer than {} characters; truncating.", MAX_TITLE_LENGTH)
            return raw[:MAX_TITLE_LENGTH]
        return raw

    def _read_session_id(self) -> str:
        raw = self._read_string("Session/SessionId")
        if not raw:
            return DEFAULT_SESSION_ID
        if not raw.replace("-", "").replace("_", "").isalnum():
            _LOGGER.warning("Session id {!r} has unexpected characters. Using {}.", raw, DEFAULT_SESSION_ID)
            return DEFAULT_SESSION_ID
        return raw

    def _read_string(self, name: str) -> Optional[str]:
        raw = self._store.value(name, None)
        if raw is None:
            return None
        if not isinstance(raw, str):
            _LOGGER.warning("Setting {} has unexpected type {}.", name, type(raw).__name__)
            return None
        return raw.strip()

    def _read_bool(self, name: str, default: bool) -> bool:
        raw = self._store.value(name, None)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            return bool(raw)
        lowered = str(raw).strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        _LOGGER.warning("Setting {} has unexpected value {!r}.", name, raw)
        return default
