"""Error taxonomy for subtitle decoding.

Binary container problems are fatal for the whole payload, while text-format
problems are recovered from one block at a time and never leave the decoder.
"""

from __future__ import annotations

__all__ = [
    "SubtitleDecodeError",
    "TruncatedInputError",
    "MalformedContainerError",
    "UnparsableTimecodeError",
    "PreconditionViolationError",
]


class SubtitleDecodeError(Exception):
    """Base class for every error raised while decoding subtitles."""


class TruncatedInputError(SubtitleDecodeError):
    """Raised when a read needs more bytes than remain before the limit."""


class MalformedContainerError(SubtitleDecodeError):
    """Raised when a box header is short or declares an impossible size."""


class UnparsableTimecodeError(SubtitleDecodeError, ValueError):
    """Raised when a timing line matches none of the accepted variants.

    The SubRip decoder catches this per block; callers never see it.
    """


class PreconditionViolationError(SubtitleDecodeError, ValueError):
    """Raised for caller errors such as an invalid offset/length range."""
