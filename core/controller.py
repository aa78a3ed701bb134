"""
Scheduler controller driving one work session at a time.

Starting a session checks notification permission, builds the reminder plan
and hands every reminder to the gateway. Stopping cancels them again. Gateway
calls are serialized; a stop() issued while a start() is still pending
abandons that start.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from core import reminder_plan
from core.errors import (
    AlreadyActiveError,
    NotActiveError,
    PermissionDeniedError,
    ScheduleError,
    SessionCancelledError,
)
from core.gateway import NotificationGateway
from core.session_state import SessionSnapshot, SessionState
from shared.reminder_definition import AuthorizationOptions, AuthorizationStatus, ReminderSpec
from zihou import logger as app_logger

_T = TypeVar("_T")


class ControllerPhase(Enum):
    IDLE = "idle"
    AWAITING_AUTHORIZATION = "awaitingAuthorization"
    SCHEDULING = "scheduling"
    ACTIVE = "active"
    STOPPING = "stopping"


@dataclass(slots=True)
class StartResult:
    started_at: datetime
    scheduled: List[ReminderSpec] = field(default_factory=list)
    errors: List[ScheduleError] = field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SchedulerController:
    def __init__(
        self,
        gateway: NotificationGateway,
        *,
        offsets: Sequence[timedelta] = reminder_plan.DEFAULT_OFFSETS,
        session_id: str = reminder_plan.DEFAULT_SESSION_ID,
        title: str = reminder_plan.DEFAULT_TITLE,
        sound: bool = True,
        clear_delivered_on_stop: bool = True,
        authorization_options: Optional[AuthorizationOptions] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._logger = app_logger.get_logger()
        self._gateway = gateway
        self._offsets = tuple(offsets)
        self._session_id = session_id
        self._title = title
        self._sound = sound
        self._clear_delivered_on_stop = clear_delivered_on_stop
        self._authorization_options = authorization_options or AuthorizationOptions.default()
        self._clock = clock

        self._state = SessionState()
        self._phase = ControllerPhase.IDLE
        self._gateway_lock = asyncio.Lock()
        # Bumped by stop(); a pending start() compares against it before each gateway call.
        self._generation = 0
        self._listeners: List[Callable[[ControllerPhase], None]] = []

    @property
    def phase(self) -> ControllerPhase:
        return self._phase

    @property
    def is_working(self) -> bool:
        return self._state.active

    @property
    def session(self) -> SessionSnapshot:
        return self._state.snapshot()

    @property
    def session_id(self) -> str:
        return self._session_id

    def add_listener(self, callback: Callable[[ControllerPhase], None]) -> None:
        """Register a callback invoked with the new phase after every transition."""
        self._listeners.append(callback)

    async def authorize(self) -> AuthorizationStatus:
        """
        Check (and if needed request) notification permission without starting
        a session. Raises ``PermissionDeniedError`` when delivery is not allowed.
        """
        if self._phase is not ControllerPhase.IDLE:
            raise AlreadyActiveError("Authorization is checked by the session in progress.")
        return await self._ensure_authorized(None)

    async def start(self) -> StartResult:
        if self._phase is not ControllerPhase.IDLE:
            raise AlreadyActiveError(f"A session is already in progress ({self._phase.value}).")

        self._generation += 1
        generation = self._generation
        self._set_phase(ControllerPhase.AWAITING_AUTHORIZATION)
        self._logger.info("Starting work session {}.", self._session_id)

        try:
            await self._ensure_authorized(generation)
            self._check_current(generation)
            self._set_phase(ControllerPhase.SCHEDULING)
            result = await self._schedule_plan(generation)
            self._check_current(generation)
        except SessionCancelledError:
            self._logger.info("Pending start of session {} abandoned by stop().", self._session_id)
            raise
        except BaseException:
            await self._recover_failed_start(generation)
            raise

        self._state.start(result.started_at)
        self._set_phase(ControllerPhase.ACTIVE)
        self._logger.info(
            "Session {} active: {} reminder(s) scheduled, {} failed.",
            self._session_id,
            len(result.scheduled),
            len(result.errors),
        )
        return result

    async def stop(self) -> None:
        if self._phase in (ControllerPhase.IDLE, ControllerPhase.STOPPING):
            raise NotActiveError("No session is active.")

        if self._phase is not ControllerPhase.ACTIVE:
            self._logger.info("Stop requested while session start is pending ({}).", self._phase.value)
        self._generation += 1
        self._set_phase(ControllerPhase.STOPPING)
        try:
            async with self._gateway_lock:
                await self._gateway.cancel_all(
                    self._session_id,
                    include_delivered=self._clear_delivered_on_stop,
                )
        finally:
            if self._state.active:
                self._state.stop()
            self._set_phase(ControllerPhase.IDLE)
        self._logger.info("Session {} ended; reminders cancelled.", self._session_id)

    async def _ensure_authorized(self, generation: Optional[int]) -> AuthorizationStatus:
        status = await self._call(generation, self._gateway.query_authorization)

        if status.allows_delivery:
            self._logger.info("Notification permission available ({}).", status.value)
            return status

        if status is AuthorizationStatus.NOT_DETERMINED:
            granted = await self._call(
                generation,
                self._gateway.request_authorization,
                self._authorization_options,
            )
            if not granted:
                self._logger.error("Notification permission was not granted.")
                raise PermissionDeniedError(
                    "Notification permission was not granted.",
                    status=AuthorizationStatus.DENIED,
                    escalation_available=True,
                    just_refused=True,
                )
            self._logger.info("Notification permission granted.")
            return AuthorizationStatus.AUTHORIZED

        if status is AuthorizationStatus.DENIED:
            self._logger.warning("Notifications are denied; enable them in the notification settings.")
            raise PermissionDeniedError(
                "Notifications are denied. Enable them in the notification settings.",
                status=status,
                escalation_available=True,
            )

        self._logger.error("Unsupported notification authorization status {}.", status.value)
        raise PermissionDeniedError(
            "Notifications cannot be delivered on this system.",
            status=status,
            escalation_available=False,
        )

    async def _schedule_plan(self, generation: int) -> StartResult:
        started_at = self._clock()
        reminders = reminder_plan.generate(
            started_at,
            self._offsets,
            session_id=self._session_id,
            title=self._title,
            sound=self._sound,
        )
        result = StartResult(started_at=started_at)
        for reminder in reminders:
            try:
                await self._call(generation, self._gateway.schedule, reminder)
            except ScheduleError as exc:
                if exc.reminder is None:
                    exc.reminder = reminder
                self._logger.warning("Failed to schedule reminder {}: {}", reminder.id, exc)
                result.errors.append(exc)
            else:
                self._logger.debug("Scheduled reminder {} at {}.", reminder.id, reminder.fire_at.isoformat())
                result.scheduled.append(reminder)
        return result

    async def _recover_failed_start(self, generation: int) -> None:
        if generation != self._generation:
            return
        try:
            if self._phase is ControllerPhase.SCHEDULING:
                self._logger.warning("Session start failed mid-scheduling; cancelling submitted reminders.")
                async with self._gateway_lock:
                    await self._gateway.cancel_all(self._session_id, include_delivered=False)
        finally:
            self._set_phase(ControllerPhase.IDLE)

    async def _call(self, generation: Optional[int], operation: Callable[..., Awaitable[_T]], *args) -> _T:
        async with self._gateway_lock:
            self._check_current(generation)
            return await operation(*args)

    def _check_current(self, generation: Optional[int]) -> None:
        if generation is not None and generation != self._generation:
            raise SessionCancelledError(f"Start of session {self._session_id} was abandoned.")

    def _set_phase(self, phase: ControllerPhase) -> None:
        if phase is self._phase:
            return
        self._logger.debug("Session {} phase {} -> {}.", self._session_id, self._phase.value, phase.value)
        self._phase = phase
        for listener in list(self._listeners):
            listener(phase)
