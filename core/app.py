"""
Application coordinator wiring the tray icon, gateway, controller and window.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Set

from PySide6.QtCore import QObject
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from core.controller import ControllerPhase, SchedulerController
from core.errors import (
    AlreadyActiveError,
    NotActiveError,
    PermissionDeniedError,
    SessionCancelledError,
)
from core.permission_store import PermissionStore
from core.session_window import SessionWindow
from core.settings import CoreSettings, CoreSettingsManager
from core.tray_gateway import QtNotificationGateway
from shared.offsets import format_offset
from shared.reminder_definition import AuthorizationStatus
from zihou import logger as app_logger

APP_NAME = "Zihou"
APP_VERSION = "1.0.0"


class AppCoordinator(QObject):
    def __init__(
        self,
        *,
        settings_manager: Optional[CoreSettingsManager] = None,
        permission_store: Optional[PermissionStore] = None,
    ) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._settings_manager = settings_manager or CoreSettingsManager()
        self._permissions = permission_store or PermissionStore()
        self._settings: CoreSettings = self._settings_manager.read_settings()
        self._manual_shutdown_requested = False
        self._tasks: Set[asyncio.Task] = set()

        self._window = SessionWindow(feedback_sound=self._settings.sound_enabled)

        self._tray = QSystemTrayIcon(self)
        tray_icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
        self._tray.setIcon(tray_icon)
        self._tray.setToolTip(f"{APP_NAME} v{APP_VERSION}")

        menu = QMenu()
        self._start_action = QAction("Start session", menu)
        self._stop_action = QAction("End session", menu)
        show_action = QAction("Show window", menu)
        exit_action = QAction("Exit", menu)
        menu.addAction(self._start_action)
        menu.addAction(self._stop_action)
        menu.addAction(show_action)
        menu.addSeparator()
        menu.addAction(exit_action)
        self._tray.setContextMenu(menu)
        self._menu = menu

        self._gateway = QtNotificationGateway(
            self._tray,
            permission_store=self._permissions,
            prompt_parent=self._window,
        )
        self._controller = SchedulerController(
            self._gateway,
            offsets=self._settings.offsets,
            session_id=self._settings.session_id,
            title=self._settings.notification_title,
            sound=self._settings.sound_enabled,
            clear_delivered_on_stop=self._settings.clear_delivered_on_stop,
        )
        self._controller.add_listener(self._on_phase_changed)
        self._gateway.reminderDelivered.connect(self._on_reminder_delivered)

        self._window.startRequested.connect(self.request_start)
        self._window.stopRequested.connect(self.request_stop)
        self._start_action.triggered.connect(self.request_start)
        self._stop_action.triggered.connect(self.request_stop)
        show_action.triggered.connect(self._show_window)
        exit_action.triggered.connect(self.shutdown)

    @property
    def controller(self) -> SchedulerController:
        return self._controller

    @property
    def gateway(self) -> QtNotificationGateway:
        return self._gateway

    @property
    def tray_tooltip(self) -> str:
        return self._tray.toolTip()

    @property
    def manual_shutdown_requested(self) -> bool:
        return self._manual_shutdown_requested

    def start(self) -> None:
        self._logger.info(
            "Starting application coordinator. Reminder offsets: {}",
            ", ".join(format_offset(offset) for offset in self._settings.offsets),
        )
        self._tray.show()
        self._on_phase_changed(self._controller.phase)
        self._show_window()
        if self._settings.authorize_on_launch:
            self._spawn(self._authorize_on_launch())

    def shutdown(self) -> None:
        self._logger.info("Shutting down application on user request.")
        self._manual_shutdown_requested = True
        if self._controller.phase is not ControllerPhase.IDLE:
            self._spawn(self._stop_then_quit())
            return
        self._quit()

    def request_start(self) -> None:
        self._spawn(self._start_session())

    def request_stop(self) -> None:
        self._spawn(self._stop_session())

    async def _authorize_on_launch(self) -> None:
        try:
            status = await self._controller.authorize()
        except PermissionDeniedError as exc:
            self._logger.warning("Notifications unavailable at launch: {}", exc)
        except AlreadyActiveError:
            self._logger.debug("Launch authorization skipped; a session is already starting.")
        else:
            self._logger.debug("Launch authorization status: {}", status.value)

    async def _start_session(self) -> None:
        try:
            result = await self._controller.start()
        except AlreadyActiveError as exc:
            self._logger.debug("Start ignored: {}", exc)
        except SessionCancelledError:
            self._logger.debug("Start abandoned because the session was ended.")
        except PermissionDeniedError as exc:
            self._logger.warning("Session not started: {}", exc)
            if await self._window.ask_to_enable_notifications(exc):
                self._logger.info("User re-enabled notifications from the app.")
                self._permissions.set_status(AuthorizationStatus.AUTHORIZED)
                self.request_start()
        else:
            for error in result.errors:
                self._logger.error("Reminder {} not scheduled: {}", error.reminder_id, error)
            if result.errors:
                self._tray.showMessage(
                    APP_NAME,
                    f"{len(result.errors)} reminder(s) could not be scheduled.",
                    QSystemTrayIcon.MessageIcon.Warning,
                )

    async def _stop_session(self) -> None:
        try:
            await self._controller.stop()
        except NotActiveError as exc:
            self._logger.debug("Stop ignored: {}", exc)

    async def _stop_then_quit(self) -> None:
        try:
            await self._stop_session()
        finally:
            self._quit()

    def _quit(self) -> None:
        self._window.close()
        self._tray.hide()
        QApplication.instance().quit()

    def _spawn(self, coroutine) -> None:
        task = asyncio.ensure_future(coroutine)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.opt(exception=exc).error("Session action failed.")

    def _on_phase_changed(self, phase: ControllerPhase) -> None:
        self._window.show_phase(phase)
        self._start_action.setEnabled(phase is ControllerPhase.IDLE)
        self._stop_action.setEnabled(phase not in (ControllerPhase.IDLE, ControllerPhase.STOPPING))
        self._refresh_tooltip()

    def _on_reminder_delivered(self, reminder_id: str) -> None:
        self._logger.debug("Reminder {} shown.", reminder_id)
        self._refresh_tooltip()

    def _refresh_tooltip(self) -> None:
        phase = self._controller.phase
        state = "working" if phase is ControllerPhase.ACTIVE else phase.value
        shown = len(self._gateway.delivered_ids)
        if shown:
            state = f"{state}, {shown} reminder(s) shown"
        self._tray.setToolTip(f"{APP_NAME} v{APP_VERSION} ({state})")

    def _show_window(self) -> None:
        self._window.show()
        self._window.raise_()
        self._window.activateWindow()
