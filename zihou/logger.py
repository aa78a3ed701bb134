"""
Logging setup for Zihou.

Two loguru sinks: the console, at ``ZIHOU_LOG_LEVEL`` (INFO by default), and
``zihou.log`` under ``$ZIHOU_LOG_DIR`` (``~/.local/state/zihou``) at DEBUG.
The file keeps every session phase change, each permission decision and each
reminder scheduled, shown or cancelled, so a missed reminder can be traced.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_DIR = Path(os.environ.get("ZIHOU_LOG_DIR", str(Path.home() / ".local" / "state" / "zihou")))
DEFAULT_LOG_PATH = LOG_DIR / "zihou.log"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def configure(log_path: Optional[Path] = None, *, console_level: Optional[str] = None) -> None:
    """Install the console and file sinks once per process."""
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or DEFAULT_LOG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    level = (console_level or os.environ.get("ZIHOU_LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    # pythonw / frozen GUI builds run without a console.
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger, configuring it on first use."""
    configure()
    return _logger
