"""
Entry point for the Zihou application.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from PySide6 import QtAsyncio
from PySide6.QtCore import QDir, QLockFile
from PySide6.QtWidgets import QApplication

from core.app import APP_NAME, AppCoordinator
from zihou import logger as app_logger

_LOGGER = app_logger.get_logger()
_LOCK_FILE_NAME = "zihou.lock"


class _InstanceGuard:
    """Lock file guard preventing two copies from scheduling reminders at once."""

    def __init__(self, path: Path) -> None:
        self._lock = QLockFile(str(path))
        self._lock.setStaleLockTime(0)

    def acquire(self) -> bool:
        return self._lock.tryLock(100)

    def release(self) -> None:
        if self._lock.isLocked():
            self._lock.unlock()


async def _launch(coordinator: AppCoordinator) -> None:
    coordinator.start()


def main(argv: Optional[list[str]] = None) -> int:
    """Launch the application; a second instance exits silently."""
    guard = _InstanceGuard(Path(QDir.tempPath()) / _LOCK_FILE_NAME)
    if not guard.acquire():
        _LOGGER.debug("Zihou instance already running; exiting silently.")
        return 0

    try:
        app = QApplication(list(argv if argv is not None else sys.argv))
        app.setApplicationName(APP_NAME)
        app.setQuitOnLastWindowClosed(False)
        coordinator = AppCoordinator()
        QtAsyncio.run(_launch(coordinator), keep_running=True, quit_qapp=True, handle_sigint=True)
    except Exception:
        _LOGGER.exception("Zihou crashed.")
        return 1
    finally:
        guard.release()

    _LOGGER.info("Zihou exited (manual shutdown: {}).", coordinator.manual_shutdown_requested)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
