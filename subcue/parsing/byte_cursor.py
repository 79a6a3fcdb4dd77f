"""Bounds-checked, position-tracking view over a byte buffer.

Every read is checked against both the end of the buffer and an explicit
caller-supplied limit, so a nested parse can be scoped to a sub-range without
copying. Slices go through ``memoryview``.
"""

from __future__ import annotations

import struct

from subcue.errors import TruncatedInputError

__all__ = ["ByteCursor"]

_UINT32 = struct.Struct(">I")
_INT32 = struct.Struct(">i")


class ByteCursor:
    """Big-endian reader over ``data[position:limit]``.

    A decoder keeps one instance as scratch and calls :meth:`reset` per parse,
    which makes the decoder unsafe to share between threads.
    """

    __slots__ = ("_data", "_view", "_limit", "_position")

    def __init__(self, data: bytes | bytearray | memoryview = b"", limit: int | None = None):
        self._data: bytes | bytearray | memoryview = b""
        self._view = memoryview(b"")
        self._limit = 0
        self._position = 0
        self.reset(data, limit)

    def reset(self, data: bytes | bytearray | memoryview, limit: int | None = None) -> None:
        """Point the cursor at a new buffer and rewind it to position 0.

        Args:
            data: Buffer to read from; never modified.
            limit: Exclusive upper bound for reads; defaults to ``len(data)``.

        Raises:
            TruncatedInputError: If ``limit`` lies outside the buffer.
        """
        view = memoryview(data)
        if limit is None:
            limit = len(view)
        if not 0 <= limit <= len(view):
            raise TruncatedInputError(f"limit {limit} outside buffer of {len(view)} bytes")
        self._data = data
        self._view = view
        self._limit = limit
        self._position = 0

    @property
    def data(self) -> bytes | bytearray | memoryview:
        return self._data

    @property
    def position(self) -> int:
        return self._position

    @property
    def limit(self) -> int:
        return self._limit

    def set_position(self, position: int) -> None:
        """Move to an absolute position in ``[0, limit]``."""
        if not 0 <= position <= self._limit:
            raise TruncatedInputError(f"position {position} outside [0, {self._limit}]")
        self._position = position

    def bytes_left(self) -> int:
        """Number of readable bytes between the position and the limit."""
        return self._limit - self._position

    def _require(self, count: int) -> None:
        if count < 0:
            raise TruncatedInputError(f"negative byte count {count}")
        if count > self.bytes_left():
            raise TruncatedInputError(
                f"need {count} bytes at position {self._position}, "
                f"only {self.bytes_left()} left before limit {self._limit}"
            )

    def skip(self, count: int) -> None:
        """Advance by ``count`` bytes."""
        self._require(count)
        self._position += count

    def peek(self, count: int) -> bytes:
        """Return up to ``count`` bytes without advancing."""
        end = min(self._position + max(count, 0), self._limit)
        return self._view[self._position : end].tobytes()

    def read_bytes(self, count: int) -> bytes:
        """Read ``count`` raw bytes."""
        self._require(count)
        out = self._view[self._position : self._position + count].tobytes()
        self._position += count
        return out

    def read_uint32(self) -> int:
        """Read an unsigned big-endian 32-bit integer."""
        self._require(4)
        (value,) = _UINT32.unpack_from(self._view, self._position)
        self._position += 4
        return value

    def read_int32(self) -> int:
        """Read a signed big-endian 32-bit integer."""
        self._require(4)
        (value,) = _INT32.unpack_from(self._view, self._position)
        self._position += 4
        return value

    def slice_as_string(self, start: int, length: int, encoding: str = "utf-8") -> str:
        """Decode ``length`` bytes at absolute ``start`` without moving.

        Undecodable sequences become U+FFFD rather than failing.

        Raises:
            TruncatedInputError: If the slice crosses the limit.
        """
        if start < 0 or length < 0 or start + length > self._limit:
            raise TruncatedInputError(
                f"slice {start}+{length} outside [0, {self._limit}]"
            )
        return str(self._view[start : start + length], encoding, "replace")

    def read_string(self, length: int, encoding: str = "utf-8") -> str:
        """Decode ``length`` bytes at the position and advance past them."""
        text = self.slice_as_string(self._position, length, encoding)
        self._position += length
        return text
