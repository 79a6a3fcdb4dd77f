"""Box reader for ISO BMFF-style ``[size:uint32][type:uint32][payload]`` records.

Provides:
- BoxType: closed enumeration of the WebVTT-in-MP4 sample box types
- Box: position/size record for one box
- BoxReader: iterates boxes in a cursor scope and recurses into containers

Unlike a general MP4 demuxer there is no 64-bit ``largesize`` and no
"extends to end" size: every box header is exactly 8 bytes and a declared
size must fit in the enclosing scope.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from subcue.errors import MalformedContainerError
from subcue.parsing.byte_cursor import ByteCursor

logger = logging.getLogger(__name__)

__all__ = ["BOX_HEADER_SIZE", "BoxType", "Box", "BoxReader", "fourcc"]

# Every box starts with size(4) + type(4)
BOX_HEADER_SIZE = 8


def fourcc(code: int) -> str:
    """Render a 32-bit type code as its four-character string."""
    return code.to_bytes(4, "big").decode("latin-1")


class BoxType(int, enum.Enum):
    """Box types found in a WebVTT MP4 sample (ISO/IEC 14496-30)."""

    VTTC = 0x76747463  # 'vttc' cue box
    VTTE = 0x76747465  # 'vtte' empty cue box
    VTTA = 0x76747461  # 'vtta' additional text (comments)
    STTG = 0x73747467  # 'sttg' cue settings
    PAYL = 0x7061796C  # 'payl' cue payload
    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int) -> BoxType:
        """Map a raw type code to a member, falling back to ``UNKNOWN``."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_container(self) -> bool:
        return self is BoxType.VTTC


@dataclass(frozen=True)
class Box:
    """One box header plus the location of its payload.

    Attributes:
        type: Recognized type, or ``BoxType.UNKNOWN``.
        code: Raw 32-bit type code as read.
        offset: Absolute offset of the size field.
        size: Declared total size including the header.

    """

    type: BoxType
    code: int
    offset: int
    size: int

    @property
    def payload_offset(self) -> int:
        return self.offset + BOX_HEADER_SIZE

    @property
    def payload_size(self) -> int:
        return self.size - BOX_HEADER_SIZE

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def fourcc(self) -> str:
        return fourcc(self.code)


class BoxReader:
    """Iterates the boxes of a cursor scope.

    The reader holds no state of its own between calls; all positions live in
    the cursor it wraps.
    """

    def __init__(self, cursor: ByteCursor):
        self._cursor = cursor

    @property
    def cursor(self) -> ByteCursor:
        return self._cursor

    def iter_boxes(self, end: int | None = None) -> Iterator[Box]:
        """Yield the boxes between the cursor position and ``end``.

        After each yield the cursor is moved to the end of that box, whether or
        not the consumer read its payload, so unknown boxes are skipped by
        exactly ``size - 8`` payload bytes.

        Args:
            end: Exclusive end of the scope; defaults to the cursor limit.

        Yields:
            Box: Each box in order.

        Raises:
            MalformedContainerError: If fewer than 8 header bytes remain, if a
                size is below 8, or if a size overruns the scope.
        """
        cursor = self._cursor
        scope_end = cursor.limit if end is None else end
        if scope_end > cursor.limit:
            raise MalformedContainerError(
                f"box scope end {scope_end} exceeds input limit {cursor.limit}"
            )
        while cursor.position < scope_end:
            offset = cursor.position
            remaining = scope_end - offset
            if remaining < BOX_HEADER_SIZE:
                raise MalformedContainerError(
                    f"incomplete box header at offset {offset}: {remaining} bytes left"
                )
            size = cursor.read_uint32()
            code = cursor.read_uint32()
            if size < BOX_HEADER_SIZE:
                raise MalformedContainerError(
                    f"box '{fourcc(code)}' at offset {offset} declares size {size}, "
                    f"below the {BOX_HEADER_SIZE}-byte header"
                )
            if size > remaining:
                raise MalformedContainerError(
                    f"box '{fourcc(code)}' at offset {offset} declares size {size}, "
                    f"only {remaining} bytes remain in scope"
                )
            box = Box(type=BoxType.from_code(code), code=code, offset=offset, size=size)
            if box.type is BoxType.UNKNOWN:
                logger.debug("Skipping unknown box '%s' (%d bytes)", box.fourcc, size)
            yield box
            cursor.set_position(box.end)

    def iter_children(self, box: Box) -> Iterator[Box]:
        """Yield the child boxes of a container box.

        The children get an independent byte scope ending at ``box.end``.

        Raises:
            ValueError: If ``box`` is not a container type.
        """
        if not box.type.is_container:
            raise ValueError(f"box '{box.fourcc}' is not a container")
        self._cursor.set_position(box.payload_offset)
        yield from self.iter_boxes(box.end)

    def read_payload(self, box: Box, encoding: str = "utf-8") -> str:
        """Decode a leaf box payload; its length is implied by the box size."""
        return self._cursor.slice_as_string(box.payload_offset, box.payload_size, encoding)
