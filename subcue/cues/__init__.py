"""Cue data model and timing merge."""

from subcue.cues.models import (
    AnchorType,
    Cue,
    CueReplacementBehavior,
    CuesWithTiming,
    DecodeResult,
    LineType,
    SpanStyle,
    StyleSpan,
    TextAlignment,
    VerticalType,
)

__all__ = [
    "AnchorType",
    "Cue",
    "CueReplacementBehavior",
    "CuesWithTiming",
    "DecodeResult",
    "LineType",
    "SpanStyle",
    "StyleSpan",
    "TextAlignment",
    "VerticalType",
]
