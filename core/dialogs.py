"""
Non-modal question dialogs that can be awaited from a coroutine.
"""

from __future__ import annotations

import asyncio

from PySide6.QtWidgets import QMessageBox, QWidget


async def ask_yes_no(parent: QWidget | None, title: str, text: str) -> bool:
    """Show a Yes/No question without blocking the event loop; True on Yes."""
    loop = asyncio.get_running_loop()
    answer: asyncio.Future[bool] = loop.create_future()

    box = QMessageBox(
        QMessageBox.Icon.Question,
        title,
        text,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        parent,
    )

    def _on_finished(_result: int) -> None:
        if answer.done():
            return
        clicked = box.standardButton(box.clickedButton())
        answer.set_result(clicked == QMessageBox.StandardButton.Yes)

    box.finished.connect(_on_finished)
    box.open()
    try:
        return await answer
    finally:
        box.deleteLater()


def inform(parent: QWidget | None, title: str, text: str) -> None:
    box = QMessageBox(QMessageBox.Icon.Warning, title, text, QMessageBox.StandardButton.Ok, parent)
    box.finished.connect(box.deleteLater)
    box.open()
