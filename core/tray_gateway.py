"""
Notification gateway delivering reminders as system tray balloon messages.

Each reminder is a single-shot QTimer owned by the gateway. Permission lives
in the PermissionStore and is asked for with a non-modal message box.
Balloons close on their own after MESSAGE_DURATION_MS; "delivered" is the
gateway's record of what was shown this session, which cancel_all can clear.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import QApplication, QSystemTrayIcon, QWidget

from core.dialogs import ask_yes_no
from core.errors import ScheduleError
from core.permission_store import PermissionStore
from core.reminder_plan import milliseconds_until
from shared.reminder_definition import AuthorizationOptions, AuthorizationStatus, ReminderSpec
from zihou import logger as app_logger

MESSAGE_DURATION_MS = 10_000
# QTimer intervals are a signed 32-bit millisecond count.
MAX_TIMER_INTERVAL_MS = 2**31 - 1
PERMISSION_PROMPT = (
    "Zihou would like to show a reminder for every hour you work.\n\n"
    "Allow notifications?"
)


class QtNotificationGateway(QObject):
    reminderDelivered = Signal(str)

    def __init__(
        self,
        tray: QSystemTrayIcon,
        *,
        permission_store: Optional[PermissionStore] = None,
        prompt_parent: Optional[QWidget] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        messages_supported: Optional[Callable[[], bool]] = None,
    ) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._tray = tray
        self._permissions = permission_store or PermissionStore()
        self._prompt_parent = prompt_parent
        self._clock = clock
        self._messages_supported = messages_supported or _tray_supports_messages
        self._pending: Dict[str, Tuple[ReminderSpec, QTimer]] = {}
        self._delivered: Dict[str, ReminderSpec] = {}

    @property
    def pending_ids(self) -> list[str]:
        return sorted(self._pending)

    @property
    def delivered_ids(self) -> list[str]:
        return sorted(self._delivered)

    async def query_authorization(self) -> AuthorizationStatus:
        if not self._messages_supported():
            self._logger.warning("System tray messages are not supported on this desktop.")
            return AuthorizationStatus.UNKNOWN
        return self._permissions.get_status()

    async def request_authorization(self, options: AuthorizationOptions) -> bool:
        self._logger.debug("Asking the user for notification permission (options={}).", options)
        granted = await ask_yes_no(self._prompt_parent, "Zihou", PERMISSION_PROMPT)
        self._permissions.record_decision(granted)
        return granted

    async def schedule(self, spec: ReminderSpec) -> None:
        delay_ms = milliseconds_until(spec.fire_at, self._clock())
        if delay_ms < 0:
            raise ScheduleError(f"Reminder {spec.id} is already in the past.", reminder=spec)
        if delay_ms > MAX_TIMER_INTERVAL_MS:
            raise ScheduleError(f"Reminder {spec.id} is too far in the future for a timer.", reminder=spec)

        # Same identifier replaces the earlier request.
        self._discard(spec.id)

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(delay_ms)
        timer.timeout.connect(lambda reminder_id=spec.id: self._deliver(reminder_id))
        self._pending[spec.id] = (spec, timer)
        timer.start()

    async def cancel_all(self, session_id: str, *, include_delivered: bool = True) -> None:
        cancelled = [key for key, (spec, _) in self._pending.items() if spec.session_id == session_id]
        for key in cancelled:
            self._discard(key)
        if include_delivered:
            self._delivered = {
                key: spec for key, spec in self._delivered.items() if spec.session_id != session_id
            }
        self._logger.debug("Cancelled {} pending reminder(s) for session {}.", len(cancelled), session_id)

    def _deliver(self, reminder_id: str) -> None:
        entry = self._pending.pop(reminder_id, None)
        if entry is None:
            return
        spec, timer = entry
        timer.deleteLater()
        self._delivered[reminder_id] = spec

        self._logger.info("Delivering reminder {}: {}", reminder_id, spec.body)
        self._tray.showMessage(
            spec.title,
            spec.body,
            QSystemTrayIcon.MessageIcon.Information,
            MESSAGE_DURATION_MS,
        )
        if spec.sound:
            QApplication.beep()
        self.reminderDelivered.emit(reminder_id)

    def _discard(self, reminder_id: str) -> None:
        entry = self._pending.pop(reminder_id, None)
        if entry is None:
            return
        _, timer = entry
        timer.stop()
        timer.deleteLater()


def _tray_supports_messages() -> bool:
    return QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()
