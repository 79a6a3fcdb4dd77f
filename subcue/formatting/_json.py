"""Formatter for JSON (.json) output."""

from subcue.cues.models import DecodeResult


def to_json(result: DecodeResult, **kwargs: object) -> str:
    """Convert a DecodeResult into a JSON-formatted string.

    Parameters:
        result: The DecodeResult to serialize.
        **kwargs: Additional arguments; ignored for JSON output.

    Returns:
        JSON string representation of the result (pretty-printed with two-space indentation).
    """
    return result.model_dump_json(indent=2)
