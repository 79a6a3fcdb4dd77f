"""Inline markup parsing for cue text.

Two dialects share one span builder:

* SubRip: SSA override blocks (``{\\an8}``, ``{\\b1}`` … ``{\\b0}``) and
  HTML-like tags (``<b>``, ``<i>``, ``<u>``, ``<font …>``, ``<br>``).
* WebVTT cue text: ``<b>``, ``<i>``, ``<u>`` plus the class, voice, language
  and ruby tags, whose markup is removed while the text is kept (``<rt>``
  annotations are dropped entirely).

Parsing is lenient per tag. Something that only looks like a tag, e.g.
``{ \\an2}`` or ``< b>``, stays in the text verbatim. A closing tag without an
opener is ignored. An opener left unclosed applies to the end of the text.
HTML entities are unescaped in the text between tags.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from subcue.cues.models import AnchorType, Cue, LineType, SpanStyle, StyleSpan
from subcue.utils.constant import (
    SUBRIP_END_FRACTION,
    SUBRIP_MID_FRACTION,
    SUBRIP_START_FRACTION,
)

__all__ = [
    "StyledText",
    "Placement",
    "ALIGNMENT_ANCHORS",
    "DEFAULT_PLACEMENT",
    "fraction_for_anchor",
    "placement_for_alignment_tag",
    "parse_subrip_text",
    "parse_webvtt_cue_text",
    "build_subrip_cue",
]

# ---------------------------------------------------------------------------
# Regex helpers
# ---------------------------------------------------------------------------
# A "{" followed directly by a backslash; "{ \an2}" is literal text.
_SSA_TAG_RE = re.compile(r"\{\\.*?\}")
_SSA_ALIGNMENT_RE = re.compile(r"^\{\\an([1-9])\}$")
_SSA_STYLE_RE = re.compile(r"\\([biu])([01])")

# "<" must be followed by a tag name (or "/" + name); "< b>" is literal text.
_HTML_TAG_RE = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9]*)([.\s][^<>]*)?>")
# WebVTT inline timestamps such as <00:00:01.500>
_VTT_TIMESTAMP_TAG_RE = re.compile(r"<\d[\d:.]*>")

_STYLE_TAGS: dict[str, SpanStyle] = {
    "b": SpanStyle.BOLD,
    "i": SpanStyle.ITALIC,
    "u": SpanStyle.UNDERLINE,
}

# {\anN} -> (line anchor, position anchor), numeric-keypad layout
ALIGNMENT_ANCHORS: dict[int, tuple[AnchorType, AnchorType]] = {
    1: (AnchorType.END, AnchorType.START),
    2: (AnchorType.END, AnchorType.MIDDLE),
    3: (AnchorType.END, AnchorType.END),
    4: (AnchorType.MIDDLE, AnchorType.START),
    5: (AnchorType.MIDDLE, AnchorType.MIDDLE),
    6: (AnchorType.MIDDLE, AnchorType.END),
    7: (AnchorType.START, AnchorType.START),
    8: (AnchorType.START, AnchorType.MIDDLE),
    9: (AnchorType.START, AnchorType.END),
}


@dataclass(frozen=True)
class StyledText:
    """Plain text plus its style spans."""

    text: str
    spans: tuple[StyleSpan, ...] = ()


@dataclass(frozen=True)
class Placement:
    """Resolved ``(line_anchor, position_anchor, line, position)`` of a cue."""

    line_anchor: AnchorType = AnchorType.START
    position_anchor: AnchorType = AnchorType.START
    line: float | None = None
    position: float | None = None
    line_type: LineType = LineType.NUMBER


DEFAULT_PLACEMENT = Placement()


def fraction_for_anchor(anchor: AnchorType) -> float:
    """Fractional line/position used for an anchor chosen by ``{\\anN}``."""
    if anchor is AnchorType.START:
        return SUBRIP_START_FRACTION
    if anchor is AnchorType.END:
        return SUBRIP_END_FRACTION
    return SUBRIP_MID_FRACTION


def placement_for_alignment_tag(tag: str) -> Placement | None:
    """Resolve an ``{\\anN}`` tag to its placement, or None for other tags."""
    match = _SSA_ALIGNMENT_RE.match(tag)
    if not match:
        return None
    line_anchor, position_anchor = ALIGNMENT_ANCHORS[int(match.group(1))]
    return Placement(
        line_anchor=line_anchor,
        position_anchor=position_anchor,
        line=fraction_for_anchor(line_anchor),
        position=fraction_for_anchor(position_anchor),
        line_type=LineType.FRACTIONAL,
    )


@dataclass
class _SpanBuilder:
    """Accumulates text and open/close style events into spans."""

    parts: list[str] = field(default_factory=list)
    length: int = 0
    open_styles: list[tuple[SpanStyle, int]] = field(default_factory=list)
    spans: list[StyleSpan] = field(default_factory=list)

    def append(self, text: str) -> None:
        if text:
            self.parts.append(text)
            self.length += len(text)

    def open(self, style: SpanStyle) -> None:
        self.open_styles.append((style, self.length))

    def close(self, style: SpanStyle) -> None:
        for i in range(len(self.open_styles) - 1, -1, -1):
            if self.open_styles[i][0] is style:
                _, start = self.open_styles.pop(i)
                self._add_span(style, start, self.length)
                return
        # unmatched closer: ignored

    def _add_span(self, style: SpanStyle, start: int, end: int) -> None:
        if end > start:
            self.spans.append(StyleSpan(start=start, end=end, style=style))

    def build(self) -> StyledText:
        for style, start in self.open_styles:
            self._add_span(style, start, self.length)
        self.open_styles.clear()
        spans = sorted(self.spans, key=lambda s: (s.start, s.end))
        return StyledText(text="".join(self.parts), spans=tuple(spans))


# ---------------------------------------------------------------------------
# SubRip
# ---------------------------------------------------------------------------
def _strip_ssa_tags(line: str, tags: list[str]) -> list[tuple[str, str | None]]:
    """Split a line into ``(text, ssa_tag)`` pieces, collecting tags in order."""
    pieces: list[tuple[str, str | None]] = []
    last = 0
    for match in _SSA_TAG_RE.finditer(line):
        tag = match.group()
        tags.append(tag)
        pieces.append((line[last : match.start()], tag))
        last = match.end()
    pieces.append((line[last:], None))
    return pieces


def _feed_html(builder: _SpanBuilder, text: str, *, vtt: bool) -> None:
    """Consume text containing HTML-like tags into the span builder."""
    if vtt:
        text = _VTT_TIMESTAMP_TAG_RE.sub("", text)
    last = 0
    for match in _HTML_TAG_RE.finditer(text):
        builder.append(_unescape(text[last : match.start()], vtt=vtt))
        last = match.end()
        closing, name = match.group(1), match.group(2).lower()
        style = _STYLE_TAGS.get(name)
        if style is not None:
            if closing:
                builder.close(style)
            else:
                builder.open(style)
        elif name == "br" and not vtt:
            builder.append("\n")
        # font, c, v, lang, ruby and unknown tags: markup dropped, text kept
    builder.append(_unescape(text[last:], vtt=vtt))


def _unescape(text: str, *, vtt: bool) -> str:
    if "&" not in text:
        return text
    text = html.unescape(text)
    return text.replace("\xa0", " ") if vtt else text


def parse_subrip_text(lines: Sequence[str]) -> tuple[StyledText, Placement]:
    """Parse the text lines of one SubRip block.

    Args:
        lines: Raw text lines; each is trimmed before parsing.

    Returns:
        tuple[StyledText, Placement]: The cue text with spans, and the
        placement selected by the first ``{\\anN}`` tag (default anchors when
        there is none).
    """
    builder = _SpanBuilder()
    tags: list[str] = []
    for index, raw_line in enumerate(lines):
        if index:
            builder.append("\n")
        for text, tag in _strip_ssa_tags(raw_line.strip(), tags):
            _feed_html(builder, text, vtt=False)
            if tag is not None:
                _apply_ssa_styles(builder, tag)
    return builder.build(), _first_alignment(tags)


def _apply_ssa_styles(builder: _SpanBuilder, tag: str) -> None:
    for name, state in _SSA_STYLE_RE.findall(tag):
        style = _STYLE_TAGS[name]
        if state == "1":
            builder.open(style)
        else:
            builder.close(style)


def _first_alignment(tags: Iterable[str]) -> Placement:
    for tag in tags:
        placement = placement_for_alignment_tag(tag)
        if placement is not None:
            # Subsequent alignment tags are ignored
            return placement
    return DEFAULT_PLACEMENT


def build_subrip_cue(styled: StyledText, placement: Placement) -> Cue:
    """Combine parsed text and placement into a :class:`Cue`."""
    return Cue(
        text=styled.text,
        spans=styled.spans,
        line=placement.line,
        line_type=placement.line_type,
        line_anchor=placement.line_anchor,
        position=placement.position,
        position_anchor=placement.position_anchor,
    )


# ---------------------------------------------------------------------------
# WebVTT
# ---------------------------------------------------------------------------
_RT_BLOCK_RE = re.compile(r"<rt(?:[.\s][^<>]*)?>.*?(?:</rt>|(?=</ruby>)|$)", re.DOTALL)


def parse_webvtt_cue_text(markup: str) -> StyledText:
    """Parse WebVTT cue text (the ``payl`` box content) into styled text.

    Args:
        markup: Cue text, already trimmed by the caller.

    Returns:
        StyledText: Text with tags removed and bold/italic/underline spans.
    """
    builder = _SpanBuilder()
    _feed_html(builder, _RT_BLOCK_RE.sub("", markup), vtt=True)
    return builder.build()
