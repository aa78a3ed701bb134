from __future__ import annotations

from datetime import timedelta

import pytest

from shared.offsets import OffsetValidationError, format_offset, parse_offset, parse_offsets


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1h", timedelta(hours=1)),
        ("90m", timedelta(minutes=90)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("45s", timedelta(seconds=45)),
        (" 2H ", timedelta(hours=2)),
    ],
)
def test_parse_offset(text, expected) -> None:
    assert parse_offset(text) == expected


@pytest.mark.parametrize("text", ["", "h", "1d", "30m1h", "0h", "-1h", "soon"])
def test_parse_offset_rejects_malformed(text) -> None:
    with pytest.raises(OffsetValidationError):
        parse_offset(text)


def test_parse_offset_rejects_non_strings() -> None:
    with pytest.raises(OffsetValidationError):
        parse_offset(3600)


def test_parse_offsets_keeps_order() -> None:
    assert parse_offsets(["2h", "1h"]) == [timedelta(hours=2), timedelta(hours=1)]


def test_format_offset() -> None:
    assert format_offset(timedelta(hours=1, minutes=30)) == "1h30m"
    assert format_offset(timedelta(seconds=45)) == "45s"
    with pytest.raises(OffsetValidationError):
        format_offset(timedelta(0))
