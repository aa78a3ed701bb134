from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict

import pytest

os.environ.setdefault("ZIHOU_LOG_DIR", tempfile.mkdtemp(prefix="zihou-logs-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.memory_gateway import InMemoryNotificationGateway  # noqa: E402

SESSION_START = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class DictSettings:
    """Stand-in for QSettings backed by a plain dict."""

    def __init__(self, values: Dict[str, Any] | None = None) -> None:
        self.values: Dict[str, Any] = dict(values or {})
        self.sync_count = 0

    def value(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def setValue(self, key: str, value: Any) -> None:  # noqa: N802
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)

    def sync(self) -> None:
        self.sync_count += 1


@pytest.fixture
def gateway() -> InMemoryNotificationGateway:
    return InMemoryNotificationGateway()


@pytest.fixture
def clock():
    return lambda: SESSION_START


@pytest.fixture
def settings_store():
    def _make(values: Dict[str, Any] | None = None) -> DictSettings:
        return DictSettings(values)

    return _make


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


class BeepCounter:
    """Replaces QApplication in a module so beeps can be counted."""

    beeps = 0

    @classmethod
    def beep(cls) -> None:
        cls.beeps += 1


@pytest.fixture
def beeps():
    BeepCounter.beeps = 0
    return BeepCounter
