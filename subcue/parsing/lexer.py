"""Text cue lexer for SubRip input.

Turns a byte range into :class:`CueBlock` records:

1. A byte-order mark selects UTF-8, UTF-16LE or UTF-16BE and is stripped;
   otherwise the caller hint or ``DEFAULT_TEXT_ENCODING`` applies.
2. Lines are split on ``\\r\\n``, ``\\r`` or ``\\n``; runs of blank
   (whitespace-only) lines separate blocks.
3. An all-digit first line is the sequence number; the next line is the
   timing line and the rest is cue text.

A sequence number that directly follows the previous cue's text, with no
blank line in between, still starts a new block when the line after it is a
valid timing line.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from subcue.errors import PreconditionViolationError
from subcue.parsing.byte_cursor import ByteCursor
from subcue.parsing.timecode import is_timing_line
from subcue.utils.constant import DEFAULT_TEXT_ENCODING, SUPPORTED_TEXT_ENCODINGS

logger = logging.getLogger(__name__)

__all__ = ["CueBlock", "TextCueLexer", "detect_bom", "normalize_encoding"]

# Longest BOM first so UTF-8's three bytes are not mistaken for anything else
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class CueBlock:
    """One candidate cue between blank-line separators.

    Attributes:
        sequence: Leading sequence number, or None when absent.
        timing_line: Line expected to hold the timecode range; None when the
            block ended before it.
        text_lines: Remaining lines of the block, untrimmed.
        line_number: 1-based line number of the block's first line.

    """

    sequence: int | None
    timing_line: str | None
    text_lines: tuple[str, ...]
    line_number: int


def normalize_encoding(name: str) -> str:
    """Return the canonical codec name for a supported text encoding.

    Raises:
        PreconditionViolationError: If the encoding is unknown or unsupported.
    """
    try:
        canonical = codecs.lookup(name).name
    except LookupError as exc:
        raise PreconditionViolationError(f"Unknown text encoding '{name}'") from exc
    # codecs reports "iso8859-1" for latin-1
    if canonical == "iso8859-1":
        canonical = "latin-1"
    if canonical not in SUPPORTED_TEXT_ENCODINGS:
        supported = sorted(SUPPORTED_TEXT_ENCODINGS)
        raise PreconditionViolationError(
            f"Unsupported text encoding '{name}'. Supported encodings are: {supported}"
        )
    return canonical


def detect_bom(head: bytes) -> tuple[str | None, int]:
    """Identify a byte-order mark at the start of ``head``.

    Returns:
        tuple[str | None, int]: ``(encoding, bom_length)``, or ``(None, 0)``.
    """
    for bom, encoding in _BOMS:
        if head.startswith(bom):
            return encoding, len(bom)
    return None, 0


def _is_sequence_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.isascii() and stripped.isdigit()


def _has_timing_line(block: list[str]) -> bool:
    """True when the block lines gathered so far already include their timing line."""
    if not block:
        return False
    if is_timing_line(block[0]):
        return True
    return len(block) > 1 and _is_sequence_line(block[0]) and is_timing_line(block[1])


class TextCueLexer:
    """Splits a SubRip byte range into cue blocks.

    Args:
        encoding: Encoding hint for input without a byte-order mark.

    """

    def __init__(self, encoding: str | None = None) -> None:
        self.encoding = normalize_encoding(encoding or DEFAULT_TEXT_ENCODING)

    def decode_text(self, cursor: ByteCursor) -> str:
        """Decode the cursor's remaining bytes, honouring any byte-order mark.

        Args:
            cursor: Cursor positioned at the start of the range; consumed.

        Returns:
            str: Decoded text without the BOM.
        """
        encoding, bom_length = detect_bom(cursor.peek(3))
        if encoding is None:
            encoding = self.encoding
        else:
            cursor.skip(bom_length)
        return cursor.read_string(cursor.bytes_left(), encoding)

    def split_lines(self, text: str) -> list[str]:
        """Split text on any line terminator; a trailing terminator adds no line."""
        if not text:
            return []
        lines = _LINE_BREAK_RE.split(text)
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def iter_blocks(self, cursor: ByteCursor) -> Iterator[CueBlock]:
        """Decode the cursor range and yield its cue blocks in order."""
        lines = self.split_lines(self.decode_text(cursor))
        yield from self.iter_blocks_from_lines(lines)

    def iter_blocks_from_lines(self, lines: list[str]) -> Iterator[CueBlock]:
        """Group lines into blocks and interpret each block's header lines."""
        current: list[str] = []
        first_line = 0
        for i, line in enumerate(lines):
            if not line.strip():
                if current:
                    yield self._make_block(current, first_line)
                    current = []
                continue
            if (
                _has_timing_line(current)
                and _is_sequence_line(line)
                and i + 1 < len(lines)
                and is_timing_line(lines[i + 1])
            ):
                # Sequence number glued to the previous cue's text
                logger.debug("Splitting block at line %d: missing blank separator", i + 1)
                yield self._make_block(current, first_line)
                current = []
            if not current:
                first_line = i + 1
            current.append(line)
        if current:
            yield self._make_block(current, first_line)

    @staticmethod
    def _make_block(lines: list[str], line_number: int) -> CueBlock:
        sequence: int | None = None
        index = 0
        if _is_sequence_line(lines[0]):
            sequence = int(lines[0].strip())
            index = 1
        timing_line = lines[index] if index < len(lines) else None
        return CueBlock(
            sequence=sequence,
            timing_line=timing_line,
            text_lines=tuple(lines[index + 1 :]),
            line_number=line_number,
        )
