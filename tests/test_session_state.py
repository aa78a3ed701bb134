from __future__ import annotations

import pytest

from core.errors import AlreadyActiveError, NotActiveError
from core.session_state import SessionState

from conftest import SESSION_START


def test_new_state_is_inactive() -> None:
    state = SessionState()
    assert state.active is False
    assert state.started_at is None


def test_start_sets_active_and_timestamp_together() -> None:
    state = SessionState()
    state.start(SESSION_START)

    snapshot = state.snapshot()
    assert snapshot.active is True
    assert snapshot.started_at == SESSION_START


def test_start_twice_raises() -> None:
    state = SessionState()
    state.start(SESSION_START)

    with pytest.raises(AlreadyActiveError):
        state.start(SESSION_START)
    assert state.started_at == SESSION_START


def test_stop_clears_timestamp() -> None:
    state = SessionState()
    state.start(SESSION_START)
    state.stop()

    assert state.snapshot() == (False, None)


def test_stop_when_inactive_raises() -> None:
    with pytest.raises(NotActiveError):
        SessionState().stop()
