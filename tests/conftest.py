"""Shared test fixtures for the subcue test suite."""

from __future__ import annotations

import logging
import struct
from collections.abc import Callable, Iterator

import pytest

TYPICAL_SRT = (
    "1\n"
    "00:00:00,000 --> 00:00:01,234\n"
    "This is the first subtitle.\n"
    "\n"
    "2\n"
    "00:00:02,345 --> 00:00:03,456\n"
    "This is the second subtitle.\n"
    "Second subtitle with second line.\n"
    "\n"
    "3\n"
    "00:00:04,567 --> 00:00:08,901\n"
    "This is the third subtitle.\n"
)

EXTRA_BLANK_LINE_SRT = TYPICAL_SRT.replace("subtitle.\n\n2", "subtitle.\n\n\n\n2")

MISSING_TIMECODE_SRT = TYPICAL_SRT.replace("2\n00:00:02,345 --> 00:00:03,456\n", "2\n")

MISSING_SEQUENCE_SRT = TYPICAL_SRT.replace("\n2\n00:00:02,345", "\n00:00:02,345")

UNEXPECTED_END_SRT = TYPICAL_SRT.split("3\n", 1)[0] + "3\n"

NO_HOURS_AND_MILLIS_SRT = (
    "1\n"
    "00:00,000 --> 00:01,234\n"
    "This is the first subtitle.\n"
    "\n"
    "2\n"
    "00:00:02 --> 00:00:03\n"
    "This is the second subtitle.\n"
    "Second subtitle with second line.\n"
    "\n"
    "3\n"
    "00:04,567 --> 00:08,901\n"
    "This is the third subtitle.\n"
)

WITH_TAGS_SRT = (
    "1\n"
    "00:00:00,000 --> 00:00:01,000\n"
    "This is the first subtitle.\n"
    "\n"
    "2\n"
    "00:00:02,000 --> 00:00:03,000\n"
    "This is the second subtitle.\n"
    "\n"
    "3\n"
    "00:00:04,000 --> 00:00:05,000\n"
    "{\\an2}This is the third subtitle.\n"
    "\n"
    "4\n"
    "00:00:06,000 --> 00:00:07,000\n"
    "This is the {\\an8}fourth subtitle.{\\an2}\n"
    "\n"
    "5\n"
    "00:00:08,000 --> 00:00:09,000\n"
    "{ \\an2}This is the fifth subtitle.\n"
)

NEGATIVE_TIMESTAMPS_SRT = (
    "1\n"
    "-00:00:01,000 --> 00:00:02,000\n"
    "Starts before zero.\n"
)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo ``configure_logging`` side effects between tests."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture
def typical_srt() -> bytes:
    """Three well-formed SubRip cues separated by gaps."""
    return TYPICAL_SRT.encode("utf-8")


@pytest.fixture
def srt_samples() -> dict[str, bytes]:
    """Degraded SubRip variants keyed by the defect they carry."""
    return {
        "extra_blank_line": EXTRA_BLANK_LINE_SRT.encode("utf-8"),
        "missing_timecode": MISSING_TIMECODE_SRT.encode("utf-8"),
        "missing_sequence": MISSING_SEQUENCE_SRT.encode("utf-8"),
        "unexpected_end": UNEXPECTED_END_SRT.encode("utf-8"),
        "no_hours_and_millis": NO_HOURS_AND_MILLIS_SRT.encode("utf-8"),
        "with_tags": WITH_TAGS_SRT.encode("utf-8"),
        "negative_timestamps": NEGATIVE_TIMESTAMPS_SRT.encode("utf-8"),
    }


def build_box(box_type: bytes, payload: bytes = b"") -> bytes:
    """Serialize one ``[size][type][payload]`` box."""
    return struct.pack(">I4s", 8 + len(payload), box_type) + payload


def build_cue_box(text: str | None = None, settings: str | None = None) -> bytes:
    """Serialize a ``vttc`` box with optional ``sttg`` and ``payl`` children."""
    children = b""
    if settings is not None:
        children += build_box(b"sttg", settings.encode("utf-8"))
    if text is not None:
        children += build_box(b"payl", text.encode("utf-8"))
    return build_box(b"vttc", children)


@pytest.fixture
def make_box() -> Callable[[bytes, bytes], bytes]:
    """Return the raw box serializer."""
    return build_box


@pytest.fixture
def make_cue_box() -> Callable[..., bytes]:
    """Return the ``vttc`` cue box serializer."""
    return build_cue_box
