"""Base class shared by the format decoders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sized

from subcue.config import OutputOptions
from subcue.cues.models import CueReplacementBehavior, CuesWithTiming
from subcue.errors import PreconditionViolationError
from subcue.parsing.byte_cursor import ByteCursor

__all__ = ["SubtitleDecoder", "check_range"]


def check_range(data: Sized, offset: int, length: int | None) -> tuple[int, int]:
    """Validate a caller-supplied byte range.

    Args:
        data: The input buffer.
        offset: Start of the range.
        length: Length of the range, or None for "up to the end".

    Returns:
        tuple[int, int]: ``(offset, length)`` with ``length`` resolved.

    Raises:
        PreconditionViolationError: If the range does not fit in ``data``.
    """
    size = len(data)
    if length is None:
        length = size - offset
    if offset < 0 or length < 0 or offset + length > size:
        raise PreconditionViolationError(
            f"Invalid range offset={offset} length={length} for {size} bytes"
        )
    return offset, length


class SubtitleDecoder(ABC):
    """Decodes one subtitle payload into ordered :class:`CuesWithTiming`.

    Instances keep a scratch :class:`ByteCursor` that is reused across calls,
    so a decoder must not be shared between threads. Decoding is otherwise
    pure: the same byte range always yields the same events.
    """

    format_name: str = ""
    cue_replacement_behavior: CueReplacementBehavior = CueReplacementBehavior.MERGE

    def __init__(self) -> None:
        self._cursor = ByteCursor()

    def parse(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        length: int | None = None,
        *,
        output_options: OutputOptions | None = None,
    ) -> list[CuesWithTiming]:
        """Decode ``data[offset:offset + length]``.

        Args:
            data: Input buffer.
            offset: Start of the range to decode.
            length: Length of the range; None decodes to the end.
            output_options: Optional event window.

        Returns:
            list[CuesWithTiming]: Decoded events.

        Raises:
            PreconditionViolationError: If the range is invalid.
        """
        offset, length = check_range(data, offset, length)
        self._cursor.reset(data, limit=offset + length)
        self._cursor.set_position(offset)
        try:
            return self._parse(self._cursor, output_options)
        finally:
            # Drop the reference to the caller's buffer
            self._cursor.reset(b"")

    @abstractmethod
    def _parse(
        self, cursor: ByteCursor, output_options: OutputOptions | None
    ) -> list[CuesWithTiming]:
        """Decode the cursor range; implemented per format."""

    def reset(self) -> None:
        """Clear any state carried between calls (none by default)."""
        self._cursor.reset(b"")
