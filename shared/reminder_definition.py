"""
Shared representation of a reminder notification and the authorization
vocabulary used by the scheduler core and the notification gateways.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum, Flag, auto


class AuthorizationStatus(Enum):
    AUTHORIZED = "authorized"
    PROVISIONAL = "provisional"
    DENIED = "denied"
    NOT_DETERMINED = "notDetermined"
    EPHEMERAL = "ephemeral"
    UNKNOWN = "unknown"

    @property
    def allows_delivery(self) -> bool:
        return self in _DELIVERABLE


_DELIVERABLE = frozenset(
    {
        AuthorizationStatus.AUTHORIZED,
        AuthorizationStatus.PROVISIONAL,
        AuthorizationStatus.EPHEMERAL,
    }
)


class AuthorizationOptions(Flag):
    ALERT = auto()
    BADGE = auto()
    SOUND = auto()

    @classmethod
    def default(cls) -> "AuthorizationOptions":
        return cls.ALERT | cls.BADGE | cls.SOUND


@dataclass(frozen=True, slots=True)
class ReminderSpec:
    """
    One reminder of a session: fires ``offset`` after the session started.

    ``id`` is derived from the session id and the 1-based offset index so the
    same plan always yields the same identifiers.
    """

    id: str
    session_id: str
    index: int
    offset: timedelta
    fire_at: datetime
    title: str
    body: str
    sound: bool = True
