"""
Notification gateway that keeps everything in memory.

Records each call it receives, which makes it the gateway of choice for
tests and for running the scheduler without a desktop session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from core.errors import ScheduleError
from shared.reminder_definition import AuthorizationOptions, AuthorizationStatus, ReminderSpec


@dataclass
class InMemoryNotificationGateway:
    status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED
    grant_on_request: bool = True
    failing_ids: Set[str] = field(default_factory=set)
    pending: Dict[str, ReminderSpec] = field(default_factory=dict)
    delivered: Dict[str, ReminderSpec] = field(default_factory=dict)
    calls: List[Tuple[str, Any]] = field(default_factory=list)

    async def query_authorization(self) -> AuthorizationStatus:
        self.calls.append(("query_authorization", None))
        return self.status

    async def request_authorization(self, options: AuthorizationOptions) -> bool:
        self.calls.append(("request_authorization", options))
        self.status = AuthorizationStatus.AUTHORIZED if self.grant_on_request else AuthorizationStatus.DENIED
        return self.grant_on_request

    async def schedule(self, spec: ReminderSpec) -> None:
        self.calls.append(("schedule", spec.id))
        if spec.id in self.failing_ids:
            raise ScheduleError(f"Reminder {spec.id} rejected.", reminder=spec)
        self.pending[spec.id] = spec

    async def cancel_all(self, session_id: str, *, include_delivered: bool = True) -> None:
        self.calls.append(("cancel_all", session_id))
        self.pending = {key: spec for key, spec in self.pending.items() if spec.session_id != session_id}
        if include_delivered:
            self.delivered = {
                key: spec for key, spec in self.delivered.items() if spec.session_id != session_id
            }

    def deliver_due(self, now: datetime) -> List[ReminderSpec]:
        """Move every pending reminder whose time has come to ``delivered``."""
        due = sorted(
            (spec for spec in self.pending.values() if spec.fire_at <= now),
            key=lambda spec: (spec.fire_at, spec.index),
        )
        for spec in due:
            del self.pending[spec.id]
            self.delivered[spec.id] = spec
        return due

    def call_names(self, name: Optional[str] = None) -> List[str]:
        names = [call for call, _ in self.calls]
        if name is None:
            return names
        return [call for call in names if call == name]
