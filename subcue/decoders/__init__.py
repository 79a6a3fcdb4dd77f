"""Registry of subtitle decoders.

Allows easy extension with new input formats by adding a decoder class and
registering it in the ``DECODERS`` dictionary.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass

from subcue.cues.models import CueReplacementBehavior
from subcue.utils.constant import FORMAT_BY_EXTENSION

from .base import SubtitleDecoder, check_range
from .mp4_webvtt import Mp4WebvttDecoder
from .subrip import SubRipDecoder

__all__ = [
    "DecoderSpec",
    "DECODERS",
    "SubtitleDecoder",
    "SubRipDecoder",
    "Mp4WebvttDecoder",
    "get_decoder",
    "get_decoder_spec",
    "detect_format",
]

# First box types that identify a WebVTT MP4 sample
_MP4_WEBVTT_BOXES = frozenset({b"vttc", b"vtte", b"vtta"})


@dataclass
class DecoderSpec:
    """Metadata and class for a specific input format.

    Attributes:
        decoder_class: The decoder class producing CuesWithTiming events.
        description: Human-readable format name.
        binary: Whether the input is a binary box container.
        accepts_encoding: Whether an ``encoding`` hint is meaningful.

    """

    decoder_class: type[SubtitleDecoder]
    description: str
    binary: bool
    accepts_encoding: bool

    @property
    def cue_replacement_behavior(self) -> CueReplacementBehavior:
        return self.decoder_class.cue_replacement_behavior


# A registry mapping format names to their respective decoder specifications.
DECODERS: dict[str, DecoderSpec] = {
    "srt": DecoderSpec(
        decoder_class=SubRipDecoder,
        description="SubRip text subtitles",
        binary=False,
        accepts_encoding=True,
    ),
    "mp4vtt": DecoderSpec(
        decoder_class=Mp4WebvttDecoder,
        description="WebVTT cues boxed in an MP4 sample",
        binary=True,
        accepts_encoding=False,
    ),
}


def get_decoder_spec(format_name: str) -> DecoderSpec:
    """Retrieve the DecoderSpec metadata for the given input format name.

    Parameters:
        format_name (str): Case-insensitive format identifier (e.g., "srt").

    Returns:
        DecoderSpec: The metadata and decoder class for the requested format.

    Raises:
        ValueError: If the specified format_name is not supported.
    """
    spec = DECODERS.get(format_name.lower())
    if not spec:
        supported = list(DECODERS.keys())
        raise ValueError(f"Unsupported format: '{format_name}'. Supported formats are: {supported}")
    return spec


def get_decoder(format_name: str, *, encoding: str | None = None) -> SubtitleDecoder:
    """Create a decoder instance for the given format name.

    Parameters:
        format_name (str): Format identifier, case-insensitive.
        encoding (str | None): Text encoding hint, used by text formats only.

    Returns:
        SubtitleDecoder: A fresh decoder; use one instance per thread.

    Raises:
        ValueError: If `format_name` is not supported.
    """
    spec = get_decoder_spec(format_name)
    if spec.accepts_encoding:
        return spec.decoder_class(encoding=encoding)  # type: ignore[call-arg]
    return spec.decoder_class()


def detect_format(
    data: bytes | bytearray | memoryview,
    filename: str | pathlib.Path | None = None,
    offset: int = 0,
    length: int | None = None,
) -> str:
    """Guess the input format from the file extension, then from the bytes.

    Byte sniffing looks at the first box header of the range to be decoded,
    ``data[offset:offset + length]``, not at the start of the buffer.

    Returns:
        str: A key of ``DECODERS``; ``"srt"`` when nothing else matches.

    Raises:
        PreconditionViolationError: If the bytes are sniffed and the range
            does not fit in ``data``.
    """
    if filename is not None:
        guessed = FORMAT_BY_EXTENSION.get(pathlib.Path(filename).suffix.lower())
        if guessed is not None:
            return guessed
    offset, length = check_range(data, offset, length)
    head = bytes(data[offset : offset + min(length, 8)])
    if len(head) == 8 and head[4:8] in _MP4_WEBVTT_BOXES:
        return "mp4vtt"
    return "srt"
