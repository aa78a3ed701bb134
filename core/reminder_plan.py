"""
Reminder plan generation.

Turns a session start time and a list of elapsed-time offsets into the
reminders a gateway should deliver. Everything here is pure.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from shared.reminder_definition import ReminderSpec

DEFAULT_SESSION_ID = "workTime"
DEFAULT_TITLE = "Zihou"
DEFAULT_OFFSETS: tuple[timedelta, ...] = tuple(timedelta(hours=hour) for hour in range(1, 9))
BODY_TEMPLATE = "⌛️ {elapsed} {verb} passed. Take a walk and move your body."


def generate(
    started_at: datetime,
    offsets: Sequence[timedelta] = DEFAULT_OFFSETS,
    *,
    session_id: str = DEFAULT_SESSION_ID,
    title: str = DEFAULT_TITLE,
    sound: bool = True,
) -> List[ReminderSpec]:
    """
    Build one reminder per offset, in the order the offsets are given.

    Reminder ids are ``<session_id>-<n>`` where ``n`` is the 1-based position
    of the offset, so calling this twice for the same session yields ids that
    compare equal.
    """
    reminders: List[ReminderSpec] = []
    for index, offset in enumerate(offsets, start=1):
        if offset <= timedelta(0):
            raise ValueError(f"Reminder offset #{index} must be positive, got {offset}.")
        reminders.append(
            ReminderSpec(
                id=reminder_id(session_id, index),
                session_id=session_id,
                index=index,
                offset=offset,
                fire_at=started_at + offset,
                title=title,
                body=describe_body(offset),
                sound=sound,
            )
        )
    return reminders


def reminder_id(session_id: str, index: int) -> str:
    return f"{session_id}-{index}"


def describe_body(offset: timedelta) -> str:
    elapsed = describe_offset(offset)
    verb = "has" if elapsed.startswith("1 ") else "have"
    return BODY_TEMPLATE.format(elapsed=elapsed, verb=verb)


def describe_offset(offset: timedelta) -> str:
    """Render an offset as whole hours, else whole minutes, else seconds."""
    total = int(offset.total_seconds())
    if total % 3600 == 0:
        return _plural(total // 3600, "hour")
    if total % 60 == 0:
        return _plural(total // 60, "minute")
    return _plural(total, "second")


def milliseconds_until(fire_at: datetime, now: datetime) -> int:
    """Delay to hand to a timer; negative when ``fire_at`` is already past."""
    return int((fire_at - now).total_seconds() * 1000)


def _plural(amount: int, unit: str) -> str:
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"
