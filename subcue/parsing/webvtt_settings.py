"""WebVTT cue settings parsing (the content of an ``sttg`` box).

A settings list is a sequence of ``name:value`` tokens, e.g.
``line:10% position:25%,line-left align:start size:50% vertical:rl``.
Unknown names and unparsable values are skipped one setting at a time with a
warning; they never fail the enclosing cue.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

from subcue.cues.models import (
    AnchorType,
    Cue,
    LineType,
    StyleSpan,
    TextAlignment,
    VerticalType,
)
from subcue.utils.constant import WEBVTT_DEFAULT_SIZE

logger = logging.getLogger(__name__)

__all__ = ["CueTextAlign", "WebvttCueSettings", "parse_cue_settings"]

_CUE_SETTING_RE = re.compile(r"(\S+?):(\S+)")


class CueTextAlign(str, enum.Enum):  # noqa: UP042
    """Values of the ``align:`` cue setting."""

    START = "start"
    LEFT = "left"
    CENTER = "center"
    END = "end"
    RIGHT = "right"


_ALIGN_VALUES: dict[str, CueTextAlign] = {
    "start": CueTextAlign.START,
    "left": CueTextAlign.LEFT,
    "center": CueTextAlign.CENTER,
    "middle": CueTextAlign.CENTER,
    "end": CueTextAlign.END,
    "right": CueTextAlign.RIGHT,
}

_LINE_ANCHORS: dict[str, AnchorType] = {
    "start": AnchorType.START,
    "center": AnchorType.MIDDLE,
    "middle": AnchorType.MIDDLE,
    "end": AnchorType.END,
}

_POSITION_ANCHORS: dict[str, AnchorType] = {
    "line-left": AnchorType.START,
    "start": AnchorType.START,
    "center": AnchorType.MIDDLE,
    "middle": AnchorType.MIDDLE,
    "line-right": AnchorType.END,
    "end": AnchorType.END,
}

_VERTICAL_VALUES: dict[str, VerticalType] = {
    "rl": VerticalType.RL,
    "lr": VerticalType.LR,
}


@dataclass
class WebvttCueSettings:
    """Mutable accumulator for the settings of one cue.

    ``None`` marks a value that was not set explicitly; :meth:`to_cue`
    derives the final placement from the alignment in that case.
    """

    text_align: CueTextAlign = CueTextAlign.CENTER
    line: float | None = None
    line_type: LineType = LineType.NUMBER
    line_anchor: AnchorType = AnchorType.START
    position: float | None = None
    position_anchor: AnchorType | None = None
    size: float = WEBVTT_DEFAULT_SIZE
    vertical_type: VerticalType | None = None

    def to_cue(self, text: str = "", spans: tuple[StyleSpan, ...] = ()) -> Cue:
        """Resolve derived values and build the :class:`Cue`."""
        position = self.position if self.position is not None else _derive_position(self.text_align)
        position_anchor = (
            self.position_anchor
            if self.position_anchor is not None
            else _derive_position_anchor(self.text_align)
        )
        return Cue(
            text=text,
            spans=spans,
            text_alignment=_layout_alignment(self.text_align),
            line=_compute_line(self.line, self.line_type),
            line_type=self.line_type,
            line_anchor=self.line_anchor,
            position=position,
            position_anchor=position_anchor,
            size=min(self.size, _max_size(position_anchor, position)),
            vertical_type=self.vertical_type,
        )


def parse_cue_settings(settings: str) -> WebvttCueSettings:
    """Parse a cue settings list.

    Args:
        settings: Settings text as stored in the ``sttg`` box.

    Returns:
        WebvttCueSettings: Accumulated settings with defaults for the rest.
    """
    result = WebvttCueSettings()
    for match in _CUE_SETTING_RE.finditer(settings):
        name, value = match.group(1), match.group(2)
        try:
            if name == "line":
                _parse_line(value, result)
            elif name == "align":
                result.text_align = _parse_text_align(value)
            elif name == "position":
                _parse_position(value, result)
            elif name == "size":
                result.size = _parse_percentage(value)
            elif name == "vertical":
                result.vertical_type = _parse_vertical(value)
            else:
                logger.warning("Unknown cue setting %s:%s", name, value)
        except (ValueError, OverflowError):
            logger.warning("Skipping bad cue setting: %s", match.group())
    return result


def _parse_percentage(value: str) -> float:
    if not value.endswith("%"):
        raise ValueError("Percentages must end with %")
    fraction = float(value[:-1]) / 100
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"Percentage out of range: {value}")
    return fraction


def _parse_line(value: str, result: WebvttCueSettings) -> None:
    number, _, anchor = value.partition(",")
    if anchor:
        if anchor not in _LINE_ANCHORS:
            raise ValueError(f"Invalid line anchor: {anchor}")
        result.line_anchor = _LINE_ANCHORS[anchor]
    if number.endswith("%"):
        # Out-of-range fractions are kept and clamped to 1.0 in to_cue()
        result.line = float(number[:-1]) / 100
        result.line_type = LineType.FRACTIONAL
    else:
        result.line = float(int(number))
        result.line_type = LineType.NUMBER


def _parse_position(value: str, result: WebvttCueSettings) -> None:
    number, _, anchor = value.partition(",")
    if anchor:
        if anchor not in _POSITION_ANCHORS:
            raise ValueError(f"Invalid position anchor: {anchor}")
        result.position_anchor = _POSITION_ANCHORS[anchor]
    result.position = _parse_percentage(number)


def _parse_text_align(value: str) -> CueTextAlign:
    align = _ALIGN_VALUES.get(value)
    if align is None:
        logger.warning("Invalid alignment value: %s", value)
        return CueTextAlign.CENTER
    return align


def _parse_vertical(value: str) -> VerticalType:
    vertical = _VERTICAL_VALUES.get(value)
    if vertical is None:
        raise ValueError(f"Invalid vertical value: {value}")
    return vertical


def _compute_line(line: float | None, line_type: LineType) -> float | None:
    if line is not None and line_type is LineType.FRACTIONAL and not 0.0 <= line <= 1.0:
        return 1.0
    # None means automatic line placement
    return line


def _derive_position(align: CueTextAlign) -> float:
    if align is CueTextAlign.LEFT:
        return 0.0
    if align is CueTextAlign.RIGHT:
        return 1.0
    return 0.5


def _derive_position_anchor(align: CueTextAlign) -> AnchorType:
    if align in (CueTextAlign.LEFT, CueTextAlign.START):
        return AnchorType.START
    if align in (CueTextAlign.RIGHT, CueTextAlign.END):
        return AnchorType.END
    return AnchorType.MIDDLE


def _layout_alignment(align: CueTextAlign) -> TextAlignment:
    if align in (CueTextAlign.START, CueTextAlign.LEFT):
        return TextAlignment.START
    if align in (CueTextAlign.END, CueTextAlign.RIGHT):
        return TextAlignment.END
    return TextAlignment.CENTER


def _max_size(anchor: AnchorType, position: float) -> float:
    if anchor is AnchorType.START:
        return 1.0 - position
    if anchor is AnchorType.END:
        return position
    return position * 2 if position <= 0.5 else (1.0 - position) * 2
