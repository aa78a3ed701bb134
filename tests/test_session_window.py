from __future__ import annotations

import pytest

from core.controller import ControllerPhase
from core.errors import PermissionDeniedError
from core.session_window import CLOCK_IN_TEXT, CLOCK_OUT_TEXT, SessionWindow
from shared.reminder_definition import AuthorizationStatus


@pytest.fixture
def window(qapp, monkeypatch, beeps):
    monkeypatch.setattr("core.session_window.QApplication", beeps)
    return SessionWindow()


def test_clock_in_emits_start_and_beeps(window, beeps) -> None:
    started = []
    window.startRequested.connect(lambda: started.append(True))

    window._toggle_button.click()

    assert started == [True]
    assert beeps.beeps == 1


def test_clock_out_once_active(window) -> None:
    stopped = []
    window.stopRequested.connect(lambda: stopped.append(True))

    window.show_phase(ControllerPhase.ACTIVE)
    assert window._toggle_button.text() == CLOCK_OUT_TEXT
    window._toggle_button.click()

    assert stopped == [True]


def test_feedback_sound_can_be_disabled(qapp, monkeypatch, beeps) -> None:
    monkeypatch.setattr("core.session_window.QApplication", beeps)
    window = SessionWindow(feedback_sound=False)

    window._toggle_button.click()

    assert beeps.beeps == 0
    assert window._toggle_button.text() == CLOCK_IN_TEXT


@pytest.mark.asyncio
async def test_fresh_refusal_is_not_asked_again(window, monkeypatch) -> None:
    asked = []

    async def fake_ask(parent, title, text):
        asked.append(text)
        return True

    monkeypatch.setattr("core.session_window.ask_yes_no", fake_ask)
    error = PermissionDeniedError(
        "Notification permission was not granted.",
        status=AuthorizationStatus.DENIED,
        escalation_available=True,
        just_refused=True,
    )

    assert await window.ask_to_enable_notifications(error) is False
    assert asked == []


@pytest.mark.asyncio
async def test_earlier_denial_offers_to_enable(window, monkeypatch) -> None:
    async def fake_ask(parent, title, text):
        return True

    monkeypatch.setattr("core.session_window.ask_yes_no", fake_ask)
    error = PermissionDeniedError(
        "Notifications are denied.",
        status=AuthorizationStatus.DENIED,
        escalation_available=True,
    )

    assert await window.ask_to_enable_notifications(error) is True
