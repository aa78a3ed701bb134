"""
In-memory record of whether a work session is running.
"""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple, Optional

from core.errors import AlreadyActiveError, NotActiveError


class SessionSnapshot(NamedTuple):
    active: bool
    started_at: Optional[datetime]


class SessionState:
    """Tracks the active flag and start time; both always change together."""

    def __init__(self) -> None:
        self._snapshot = SessionSnapshot(active=False, started_at=None)

    @property
    def active(self) -> bool:
        return self._snapshot.active

    @property
    def started_at(self) -> Optional[datetime]:
        return self._snapshot.started_at

    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def start(self, now: datetime) -> None:
        if self._snapshot.active:
            raise AlreadyActiveError(
                f"Session already active since {self._snapshot.started_at.isoformat()}."
            )
        self._snapshot = SessionSnapshot(active=True, started_at=now)

    def stop(self) -> None:
        if not self._snapshot.active:
            raise NotActiveError("No session is active.")
        self._snapshot = SessionSnapshot(active=False, started_at=None)
