"""Common data models for decoded subtitle cues.

This module defines the immutable pydantic models shared by both decoders,
the timing merge and the output formatters.
"""

from __future__ import annotations

import enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "AnchorType",
    "LineType",
    "TextAlignment",
    "VerticalType",
    "SpanStyle",
    "CueReplacementBehavior",
    "StyleSpan",
    "Cue",
    "CuesWithTiming",
    "DecodeResult",
]


class AnchorType(str, enum.Enum):  # noqa: UP042
    """Reference point of a cue box along one axis."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


class LineType(str, enum.Enum):  # noqa: UP042
    """How ``Cue.line`` is interpreted."""

    FRACTIONAL = "fractional"
    NUMBER = "number"


class TextAlignment(str, enum.Enum):  # noqa: UP042
    """Alignment of the text inside its cue box."""

    START = "start"
    CENTER = "center"
    END = "end"


class VerticalType(str, enum.Enum):  # noqa: UP042
    """Vertical writing direction."""

    RL = "rl"
    LR = "lr"


class SpanStyle(str, enum.Enum):  # noqa: UP042
    """Character styles carried by a :class:`StyleSpan`."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


class CueReplacementBehavior(str, enum.Enum):  # noqa: UP042
    """How events from successive parse calls combine on the consumer side.

    ``MERGE``: events from a later call are added to the ones already known.
    ``REPLACE``: each call's events replace whatever was shown before.
    """

    MERGE = "merge"
    REPLACE = "replace"


class StyleSpan(BaseModel):
    """A styled character range of ``Cue.text``."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, description="Inclusive start offset into the cue text.")
    end: int = Field(..., description="Exclusive end offset into the cue text.")
    style: SpanStyle = Field(..., description="Style applied to the range.")

    @model_validator(mode="after")
    def _check_range(self) -> StyleSpan:
        if self.end <= self.start:
            raise ValueError(f"empty or inverted span: {self.start}..{self.end}")
        return self


class Cue(BaseModel):
    """One displayable unit of text plus its placement attributes."""

    model_config = ConfigDict(frozen=True)

    text: str = Field("", description="Plain text; line breaks are '\\n'.")
    spans: tuple[StyleSpan, ...] = Field((), description="Bold/italic/underline ranges.")
    text_alignment: TextAlignment | None = Field(None, description="Alignment inside the box.")
    line: float | None = Field(None, description="Line position; None means automatic.")
    line_type: LineType = Field(LineType.NUMBER, description="Interpretation of `line`.")
    line_anchor: AnchorType = Field(AnchorType.START, description="Vertical anchor.")
    position: Annotated[float, Field(ge=0.0, le=1.0)] | None = Field(
        None, description="Fractional horizontal position."
    )
    position_anchor: AnchorType = Field(AnchorType.START, description="Horizontal anchor.")
    size: Annotated[float, Field(ge=0.0, le=1.0)] | None = Field(
        None, description="Fractional box size."
    )
    vertical_type: VerticalType | None = Field(None, description="Vertical writing direction.")

    @model_validator(mode="after")
    def _check_spans(self) -> Cue:
        length = len(self.text)
        for span in self.spans:
            if span.end > length:
                raise ValueError(f"span {span.start}..{span.end} exceeds text length {length}")
        return self

    def styled_ranges(self, style: SpanStyle) -> list[str]:
        """Return the text covered by every span of the given style.

        Args:
            style: The style to look up.

        Returns:
            list[str]: Covered substrings in span order.
        """
        return [self.text[s.start : s.end] for s in self.spans if s.style is style]


class CuesWithTiming(BaseModel):
    """A timed activation event bundling zero or more cues.

    ``start_time_us`` and ``duration_us`` are ``None`` when unset, e.g. when an
    MP4 sample timestamp supplies the absolute timing, or for the final clear
    event whose end is unknown.
    """

    model_config = ConfigDict(frozen=True)

    cues: tuple[Cue, ...] = Field((), description="Cues in rendering order.")
    start_time_us: int | None = Field(None, description="Start offset in microseconds.")
    duration_us: Annotated[int, Field(ge=0)] | None = Field(
        None, description="Duration in microseconds."
    )

    @property
    def end_time_us(self) -> int | None:
        """End offset in microseconds, or None when start or duration is unset."""
        if self.start_time_us is None or self.duration_us is None:
            return None
        return self.start_time_us + self.duration_us

    @property
    def is_clear(self) -> bool:
        """True when the event displays nothing."""
        return not self.cues


class DecodeResult(BaseModel):
    """Full decoding result handed to output formatters."""

    format_name: str = Field(..., description="Decoder that produced the events.")
    events: list[CuesWithTiming] = Field(..., description="Ordered activation events.")
