"""Formatter for JSON Lines (.jsonl) output.

Each line contains a JSON object representing a single *CuesWithTiming* event
in the decoded result.
"""

from __future__ import annotations

from subcue.cues.models import DecodeResult


def to_jsonl(result: DecodeResult, **kwargs: object) -> str:  # noqa: D401
    """Convert a ``DecodeResult`` into JSON Lines string (one event per line).

    Args:
        result: The decoded result containing events.
        **kwargs: Additional arguments (ignored for JSONL output).

    Returns:
        A JSON Lines string where each line is a JSON object for one event.

    """
    return "\n".join(event.model_dump_json() for event in result.events)
