"""Registry of output formatters for decoded subtitle events.

Allows easy extension with new formats by adding a formatter function and
registering it in the ``FORMATTERS`` dictionary.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from subcue.cues.models import DecodeResult

from ._json import to_json
from ._jsonl import to_jsonl
from ._srt import to_srt
from ._txt import to_txt
from ._vtt import to_vtt


@dataclass
class FormatterSpec:
    """Metadata and function for a specific output format.

    Attributes:
        format_func: The formatter function that converts DecodeResult to string.
        timed_only: Whether events without a known start/duration are skipped.
        supports_styles: Whether the format can re-emit bold/italic/underline.
        file_extension: The file extension for this format (including the dot).

    """

    format_func: Callable[..., str]
    timed_only: bool
    supports_styles: bool
    file_extension: str


# A registry mapping format names to their respective formatter specifications.
FORMATTERS: dict[str, FormatterSpec] = {
    "json": FormatterSpec(
        format_func=to_json,
        timed_only=False,
        supports_styles=False,
        file_extension=".json",
    ),
    "jsonl": FormatterSpec(
        format_func=to_jsonl,
        timed_only=False,
        supports_styles=False,
        file_extension=".jsonl",
    ),
    "srt": FormatterSpec(
        format_func=to_srt,
        timed_only=True,
        supports_styles=True,
        file_extension=".srt",
    ),
    "vtt": FormatterSpec(
        format_func=to_vtt,
        timed_only=True,
        supports_styles=True,
        file_extension=".vtt",
    ),
    "txt": FormatterSpec(
        format_func=to_txt,
        timed_only=False,
        supports_styles=False,
        file_extension=".txt",
    ),
}


def get_formatter(format_name: str) -> Callable[..., str]:
    """Get the formatter function registered for the given format name.

    Parameters:
        format_name (str): Format identifier, case-insensitive (e.g., "srt", "json").

    Returns:
        Callable[..., str]: Formatter that converts a ``DecodeResult`` to a
            formatted string.

    Raises:
        ValueError: If `format_name` is not supported.
    """
    return get_formatter_spec(format_name).format_func


def get_formatter_spec(format_name: str) -> FormatterSpec:
    """Retrieve the FormatterSpec metadata for the given output format name.

    Parameters:
        format_name (str): Case-insensitive format identifier (e.g., "txt", "json").

    Returns:
        FormatterSpec: The metadata and formatter function for the requested format.

    Raises:
        ValueError: If the specified format_name is not supported.
    """
    spec = FORMATTERS.get(format_name.lower())
    if not spec:
        supported = list(FORMATTERS.keys())
        raise ValueError(f"Unsupported format: '{format_name}'. Supported formats are: {supported}")
    return spec


def format_result(result: DecodeResult, format_name: str, *, keep_styles: bool = True) -> str:
    """Render ``result`` with the named formatter.

    Args:
        result: Decoded events.
        format_name: Key of ``FORMATTERS``.
        keep_styles: Forwarded to formatters that support styles.

    Returns:
        str: The formatted output.
    """
    spec = get_formatter_spec(format_name)
    if spec.supports_styles:
        return spec.format_func(result, keep_styles=keep_styles)
    return spec.format_func(result)
