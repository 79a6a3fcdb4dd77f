"""Formatter for plain text (.txt) output."""

from subcue.cues.models import DecodeResult


def to_txt(result: DecodeResult, **kwargs: object) -> str:
    """Format a DecodeResult as plain text.

    Each non-empty event contributes its cue texts, one per line; events are
    separated by a blank line. Styles and timing are dropped.

    Parameters:
        result (DecodeResult): The decoded result.
        **kwargs: Additional keyword arguments (ignored for plain text output).

    Returns:
        str: The joined texts; an empty string when nothing is displayed.
    """
    blocks = [
        "\n".join(cue.text for cue in event.cues) for event in result.events if not event.is_clear
    ]
    return "\n\n".join(blocks)
