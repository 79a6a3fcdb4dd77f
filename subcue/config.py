"""Configuration dataclasses for subtitle decoding.

This module defines configuration objects that group related settings so the
CLI and the public ``decode`` helper pass one object instead of many flags.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from subcue.utils.constant import DEFAULT_OUTPUT_FORMAT


@dataclass(frozen=True)
class OutputOptions:
    """Selects which events a decoder returns, and in which order.

    Attributes:
        start_time_us: Only events ending after this time are emitted first;
            ``None`` emits everything in time order.
        output_all_cues: When ``start_time_us`` is set, append the events
            before it after the others instead of dropping them.

    """

    start_time_us: int | None = None
    output_all_cues: bool = False

    @classmethod
    def all_cues(cls) -> OutputOptions:
        """Emit every event in time order."""
        return cls()

    @classmethod
    def only_cues_after(cls, start_time_us: int) -> OutputOptions:
        """Emit only events that end after ``start_time_us``.

        ``only_cues_after(0)`` discards cues placed before zero by negative
        timestamps.
        """
        return cls(start_time_us=start_time_us, output_all_cues=False)

    @classmethod
    def cues_after_then_remaining_before(cls, start_time_us: int) -> OutputOptions:
        """Emit events after ``start_time_us`` first, then the earlier ones."""
        return cls(start_time_us=start_time_us, output_all_cues=True)


@dataclass
class DecoderConfig:
    """Groups decoding-related settings.

    Attributes:
        format_name: Decoder key (``"srt"`` or ``"mp4vtt"``); ``None`` detects it.
        encoding: Text encoding hint for BOM-less SubRip input.
        offset: Start of the byte range to decode.
        length: Length of the byte range; ``None`` means up to the end.
        output_options: Event selection applied after decoding.

    """

    format_name: str | None = None
    encoding: str | None = None
    offset: int = 0
    length: int | None = None
    output_options: OutputOptions = field(default_factory=OutputOptions.all_cues)


@dataclass
class OutputConfig:
    """Groups output-related settings.

    Attributes:
        output_format: Formatter key (json, jsonl, srt, vtt, txt).
        keep_styles: Re-emit bold/italic/underline tags in srt/vtt output.

    """

    output_format: str = DEFAULT_OUTPUT_FORMAT
    keep_styles: bool = True


@dataclass
class UIConfig:
    """Groups UI and logging settings.

    Attributes:
        verbose: Enable detailed diagnostic output.
        quiet: Suppress non-error output.

    """

    verbose: bool = False
    quiet: bool = False
