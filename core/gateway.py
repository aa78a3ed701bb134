"""
Contract between the scheduler core and whatever actually delivers
notifications (the OS, a tray icon, or an in-memory fake).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared.reminder_definition import AuthorizationOptions, AuthorizationStatus, ReminderSpec


@runtime_checkable
class NotificationGateway(Protocol):
    async def query_authorization(self) -> AuthorizationStatus:
        """Return the current notification permission."""

    async def request_authorization(self, options: AuthorizationOptions) -> bool:
        """Ask the user for permission. Only called while the status is not determined."""

    async def schedule(self, spec: ReminderSpec) -> None:
        """Register one reminder. Raises ``ScheduleError`` when it cannot."""

    async def cancel_all(self, session_id: str, *, include_delivered: bool = True) -> None:
        """Drop every reminder of the session. Safe to call when nothing is scheduled."""
