"""
Main window with the on/off duty status and the clock in / clock out button.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QApplication, QLabel, QPushButton, QVBoxLayout, QWidget

from core.controller import ControllerPhase
from core.dialogs import ask_yes_no, inform
from core.errors import PermissionDeniedError

WORKING_LABEL = "On duty"
OFF_LABEL = "Off duty"
CLOCK_IN_TEXT = "Clock in"
CLOCK_OUT_TEXT = "Clock out"

_BUTTON_STYLE = """
QPushButton {{
    padding: 0 24px;
    border-radius: 10px;
    background-color: {color};
    color: white;
    font-weight: 600;
}}
QPushButton:disabled {{
    background-color: #6b7280;
}}
"""
_GREEN = "#16a34a"
_RED = "#dc2626"


class SessionWindow(QWidget):
    startRequested = Signal()
    stopRequested = Signal()

    def __init__(self, parent: QWidget | None = None, *, feedback_sound: bool = True) -> None:
        super().__init__(parent)
        self.setWindowTitle("Zihou")
        self._working = False
        self._feedback_sound = feedback_sound

        self._status_label = QLabel(OFF_LABEL)
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._status_label.setStyleSheet("font-weight: bold; font-size: 22px;")

        self._toggle_button = QPushButton(CLOCK_IN_TEXT)
        self._toggle_button.setMinimumHeight(40)
        self._toggle_button.setCursor(Qt.CursorShape.PointingHandCursor)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(20)
        layout.addWidget(self._status_label)
        layout.addWidget(self._toggle_button, alignment=Qt.AlignmentFlag.AlignCenter)

        self._toggle_button.clicked.connect(self._on_toggle)  # type: ignore[arg-type]
        self._render()

    def show_phase(self, phase: ControllerPhase) -> None:
        """Refresh from the controller phase; transitional phases disable the button."""
        self._working = phase in (ControllerPhase.ACTIVE, ControllerPhase.STOPPING)
        pending = phase in (ControllerPhase.AWAITING_AUTHORIZATION, ControllerPhase.SCHEDULING)
        # A pending start can still be abandoned, so clock out stays available.
        self._toggle_button.setEnabled(phase is not ControllerPhase.STOPPING)
        self._render(pending=pending)

    async def ask_to_enable_notifications(self, error: PermissionDeniedError) -> bool:
        """
        Tell the user the session did not start. Returns True when they choose
        to enable notifications from here.
        """
        if error.just_refused:
            # Already asked by the permission prompt during this start.
            return False
        if not error.escalation_available:
            inform(self, "Zihou", str(error))
            return False
        return await ask_yes_no(self, "Zihou", f"{error}\n\nEnable notifications for Zihou now?")

    def _on_toggle(self) -> None:
        if self._feedback_sound:
            QApplication.beep()
        if self._toggle_button.text() == CLOCK_OUT_TEXT:
            self.stopRequested.emit()
        else:
            self.startRequested.emit()

    def _render(self, *, pending: bool = False) -> None:
        working = self._working or pending
        self._status_label.setText(WORKING_LABEL if working else OFF_LABEL)
        self._toggle_button.setText(CLOCK_OUT_TEXT if working else CLOCK_IN_TEXT)
        self._toggle_button.setStyleSheet(_BUTTON_STYLE.format(color=_RED if working else _GREEN))
