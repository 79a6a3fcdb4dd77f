"""High-level decoding entry point."""

from __future__ import annotations

import logging

from subcue.config import DecoderConfig, OutputOptions
from subcue.cues.models import DecodeResult
from subcue.decoders import detect_format, get_decoder

logger = logging.getLogger(__name__)

__all__ = ["decode", "decode_with_config"]


def decode(
    data: bytes | bytearray | memoryview,
    format_name: str | None = None,
    *,
    offset: int = 0,
    length: int | None = None,
    encoding: str | None = None,
    output_options: OutputOptions | None = None,
) -> DecodeResult:
    """Decode a subtitle payload with a freshly created decoder.

    Args:
        data: Input buffer.
        format_name: Decoder key; detected from the bytes when None.
        offset: Start of the range to decode.
        length: Length of the range; None decodes to the end.
        encoding: Text encoding hint for SubRip input.
        output_options: Optional event window.

    Returns:
        DecodeResult: The format used and the decoded events.

    Raises:
        SubtitleDecodeError: For fatal binary errors or an invalid range.
        ValueError: If ``format_name`` is unknown.
    """
    if format_name is None:
        format_name = detect_format(data, offset=offset, length=length)
        logger.debug("Detected input format: %s", format_name)
    decoder = get_decoder(format_name, encoding=encoding)
    events = decoder.parse(data, offset, length, output_options=output_options)
    return DecodeResult(format_name=decoder.format_name, events=events)


def decode_with_config(data: bytes | bytearray | memoryview, config: DecoderConfig) -> DecodeResult:
    """Decode using the settings grouped in a :class:`DecoderConfig`."""
    return decode(
        data,
        config.format_name,
        offset=config.offset,
        length=config.length,
        encoding=config.encoding,
        output_options=config.output_options,
    )
