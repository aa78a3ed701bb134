"""
Persistence of the user's notification permission decision using QSettings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from PySide6.QtCore import QSettings

from shared.reminder_definition import AuthorizationStatus

ORGANIZATION_NAME = "Zihou"
APPLICATION_NAME = "Zihou"

_STATUS_KEY = "Notifications/AuthorizationStatus"
_DECIDED_AT_KEY = "Notifications/DecidedAt"


class PermissionStore:
    """Thin wrapper over QSettings storing the authorization status and when it was decided."""

    def __init__(self, *, store: Optional[Any] = None) -> None:
        self._store = store if store is not None else QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def get_status(self) -> AuthorizationStatus:
        value = self._store.value(_STATUS_KEY, None)
        if not value:
            return AuthorizationStatus.NOT_DETERMINED
        try:
            return AuthorizationStatus(value)
        except ValueError:
            return AuthorizationStatus.NOT_DETERMINED

    def set_status(self, status: AuthorizationStatus) -> None:
        self._store.setValue(_STATUS_KEY, status.value)
        self._store.setValue(_DECIDED_AT_KEY, _utcnow_iso())
        self._store.sync()

    def record_decision(self, granted: bool) -> AuthorizationStatus:
        status = AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
        self.set_status(status)
        return status

    def get_decided_at(self) -> Optional[datetime]:
        value = self._store.value(_DECIDED_AT_KEY, None)
        if not value:
            return None
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None

    def reset(self) -> None:
        for key in (_STATUS_KEY, _DECIDED_AT_KEY):
            self._store.remove(key)
        self._store.sync()


def _utcnow_iso() -> str:
    """Return a UTC ISO-8601 timestamp without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
