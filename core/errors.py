"""
Errors reported by the session reminder scheduler.
"""

from __future__ import annotations

from typing import Optional

from shared.reminder_definition import AuthorizationStatus, ReminderSpec


class SchedulerError(Exception):
    """Base class for every error the scheduler reports to its caller."""


class AlreadyActiveError(SchedulerError):
    """Raised when a session is started while one is already in progress."""


class NotActiveError(SchedulerError):
    """Raised when a session is stopped while none is in progress."""


class SessionCancelledError(SchedulerError):
    """Raised by a pending start() that was abandoned by a concurrent stop()."""


class PermissionDeniedError(SchedulerError):
    """
    Notifications are not allowed, so the session did not start.

    ``escalation_available`` tells the UI whether the user can fix this from
    the notification settings. ``just_refused`` is set when the user declined
    the permission prompt during this very start.
    """

    def __init__(
        self,
        message: str,
        *,
        status: AuthorizationStatus,
        escalation_available: bool,
        just_refused: bool = False,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.escalation_available = escalation_available
        self.just_refused = just_refused


class ScheduleError(SchedulerError):
    """A single reminder could not be scheduled. Never fatal to the session."""

    def __init__(self, message: str, *, reminder: Optional[ReminderSpec] = None) -> None:
        super().__init__(message)
        self.reminder = reminder

    @property
    def reminder_id(self) -> Optional[str]:
        return self.reminder.id if self.reminder is not None else None
