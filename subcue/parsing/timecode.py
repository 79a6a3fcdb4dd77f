"""SubRip timecode parsing.

Accepted timing line grammar::

    [-](H+:)?M+:S+(,mmm)?  -->  [-](H+:)?M+:S+(,mmm)?

Hours and milliseconds may be omitted (degraded files such as
``02:04,567 --> 02:08,901`` or ``00:02 --> 00:03``); both default to 0. A
``.`` is tolerated in place of the ``,`` millisecond separator. Values are
returned in microseconds and negative values are preserved, not clamped.
"""

from __future__ import annotations

import re

from subcue.errors import UnparsableTimecodeError

__all__ = [
    "TIMECODE_PATTERN",
    "TIMING_LINE_RE",
    "parse_timecode",
    "parse_timing_line",
    "is_timing_line",
]

TIMECODE_PATTERN = r"(-)?(?:(\d+):)?(\d+):(\d+)(?:[,.](\d+))?"

_TIMECODE_RE = re.compile(rf"^\s*{TIMECODE_PATTERN}\s*$")
TIMING_LINE_RE = re.compile(rf"^\s*{TIMECODE_PATTERN}\s*-->\s*{TIMECODE_PATTERN}\s*$")


def _millis(digits: str | None) -> int:
    """Millisecond group as an integer; ``,5`` is 5 ms and ``,2345`` is 2345 ms."""
    return int(digits or 0)


def _to_us(groups: tuple[str | None, ...]) -> int:
    sign, hours, minutes, seconds, millis = groups
    total_ms = (int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)) * 1000
    total_ms += _millis(millis)
    us = total_ms * 1000
    return -us if sign else us


def parse_timecode(value: str) -> int:
    """Convert a single ``[H:]MM:SS[,mmm]`` timestamp to microseconds.

    Args:
        value: Timestamp string.

    Returns:
        int: Offset in microseconds, negative when the value carries a ``-``.

    Raises:
        UnparsableTimecodeError: If the string is not a timestamp.
    """
    match = _TIMECODE_RE.match(value)
    if not match:
        raise UnparsableTimecodeError(f"Invalid timecode '{value}'")
    return _to_us(match.groups())


def parse_timing_line(line: str) -> tuple[int, int]:
    """Parse a ``start --> end`` timing line.

    Args:
        line: The timing line of a SubRip block.

    Returns:
        tuple[int, int]: ``(start_us, end_us)``.

    Raises:
        UnparsableTimecodeError: If the line matches no accepted variant.
    """
    match = TIMING_LINE_RE.match(line)
    if not match:
        raise UnparsableTimecodeError(f"Invalid timing line '{line}'")
    groups = match.groups()
    return _to_us(groups[:5]), _to_us(groups[5:])


def is_timing_line(line: str) -> bool:
    """Return True when ``line`` would be accepted by :func:`parse_timing_line`."""
    return TIMING_LINE_RE.match(line) is not None
