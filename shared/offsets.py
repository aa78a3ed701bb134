"""
Parsing and formatting of reminder offsets such as ``1h``, ``90m`` or ``1h30m``.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any, Iterable, List

_OFFSET_PATTERN = re.compile(
    r"^(?:(?P<hours>\d+)h)?(?:(?P<minutes>\d+)m)?(?:(?P<seconds>\d+)s)?$"
)


class OffsetValidationError(ValueError):
    """Raised when a configured reminder offset is missing or malformed."""


def parse_offset(value: Any) -> timedelta:
    """
    Parse a compact duration string into a positive ``timedelta``.

    Accepts any combination of ``<n>h``, ``<n>m`` and ``<n>s`` in that order,
    for example ``"8h"``, ``"45m"`` or ``"1h30m"``.
    """
    if not isinstance(value, str):
        raise OffsetValidationError("offset must be a string.")

    cleaned = value.strip().lower().replace(" ", "")
    match = _OFFSET_PATTERN.match(cleaned)
    if not cleaned or match is None:
        raise OffsetValidationError(
            f"offset {value!r} must look like 1h, 90m, 1h30m or 45s."
        )

    parts = {name: int(amount) for name, amount in match.groupdict().items() if amount}
    offset = timedelta(**parts)
    if offset <= timedelta(0):
        raise OffsetValidationError(f"offset {value!r} must be greater than zero.")
    return offset


def parse_offsets(values: Iterable[Any]) -> List[timedelta]:
    """Parse every entry, keeping the configured order."""
    return [parse_offset(value) for value in values]


def format_offset(offset: timedelta) -> str:
    """Return the compact form understood by :func:`parse_offset`."""
    total = int(offset.total_seconds())
    if total <= 0:
        raise OffsetValidationError("offset must be greater than zero.")

    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = ""
    if hours:
        text += f"{hours}h"
    if minutes:
        text += f"{minutes}m"
    if seconds:
        text += f"{seconds}s"
    return text
