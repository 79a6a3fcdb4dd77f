"""Formatter for Web Video Text Tracks format (.vtt)."""

from subcue.cues.models import DecodeResult

from ._styles import render_event_text, split_us, timed_events


def _format_timestamp(us: int) -> str:
    """Convert a non-negative microsecond offset to a WebVTT timestamp.

    Args:
        us: Offset in microseconds (must be >= 0).

    Returns:
        str: Timestamp string in ``HH:MM:SS.mmm`` format.
    """
    h, m, s, ms = split_us(us)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def to_vtt(result: DecodeResult, keep_styles: bool = True) -> str:
    """Convert a ``DecodeResult`` to a VTT formatted string.

    Args:
        result: The DecodeResult object containing timed events.
        keep_styles: If ``True``, wrap styled ranges in ``<b>``/``<i>``/``<u>``.

    Returns:
        A string in VTT format.

    """
    vtt_lines = ["WEBVTT", ""]
    for event in timed_events(result):
        start_time = _format_timestamp(event.start_time_us)
        end_time = _format_timestamp(event.end_time_us)
        vtt_lines.append(f"{start_time} --> {end_time}")
        vtt_lines.append(render_event_text(event, keep_styles))
        vtt_lines.append("")  # Add a blank line between entries
    return "\n".join(vtt_lines)
