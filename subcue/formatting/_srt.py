"""Formatter for SubRip Subtitle format (.srt)."""

from subcue.cues.models import DecodeResult

from ._styles import render_event_text, split_us, timed_events


def _format_timestamp(us: int) -> str:
    """Format a non-negative microsecond offset as an SRT timestamp ``HH:MM:SS,mmm``.

    Parameters:
        us (int): Offset in microseconds (must be >= 0); sub-millisecond
            precision is truncated.

    Returns:
        str: Timestamp string formatted as `HH:MM:SS,mmm`.

    Raises:
        AssertionError: If `us` is negative.
    """
    h, m, s, ms = split_us(us)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def to_srt(result: DecodeResult, keep_styles: bool = True) -> str:
    """Convert a ``DecodeResult`` to an SRT formatted string.

    Args:
        result: The DecodeResult object containing timed events.
        keep_styles: If ``True``, wrap styled ranges in ``<b>``/``<i>``/``<u>``.

    Returns:
        A string in SRT format.

    """
    srt_lines = []
    for i, event in enumerate(timed_events(result), start=1):
        start_time = _format_timestamp(event.start_time_us)
        end_time = _format_timestamp(event.end_time_us)
        srt_lines.append(str(i))
        srt_lines.append(f"{start_time} --> {end_time}")
        srt_lines.append(render_event_text(event, keep_styles))
        srt_lines.append("")  # Add a blank line between entries
    return "\n".join(srt_lines)
