"""Shared helpers for the subtitle re-rendering formatters."""

from __future__ import annotations

from collections.abc import Iterator

from subcue.cues.models import Cue, CuesWithTiming, DecodeResult, SpanStyle

_TAGS: dict[SpanStyle, str] = {
    SpanStyle.BOLD: "b",
    SpanStyle.ITALIC: "i",
    SpanStyle.UNDERLINE: "u",
}


def timed_events(result: DecodeResult) -> Iterator[CuesWithTiming]:
    """Yield the events that can be written with explicit timestamps.

    Clear events, events with unset timing and events starting before zero
    are skipped.
    """
    for event in result.events:
        if event.is_clear or event.start_time_us is None or event.duration_us is None:
            continue
        if event.start_time_us < 0:
            continue
        yield event


def render_cue_text(cue: Cue, keep_styles: bool = True) -> str:
    """Return the cue text, wrapping styled ranges in ``<b>``/``<i>``/``<u>``.

    Overlapping spans are closed and reopened at each boundary so that the
    emitted tags always nest properly.
    """
    if not keep_styles or not cue.spans:
        return cue.text
    text = cue.text
    boundaries = sorted({0, len(text)} | {s.start for s in cue.spans} | {s.end for s in cue.spans})
    out: list[str] = []
    stack: list[SpanStyle] = []
    for start, end in zip(boundaries, boundaries[1:]):
        active = [
            style
            for style in _TAGS
            if any(s.style is style and s.start <= start and s.end >= end for s in cue.spans)
        ]
        keep = 0
        while keep < len(stack) and stack[keep] in active:
            keep += 1
        for style in reversed(stack[keep:]):
            out.append(f"</{_TAGS[style]}>")
        del stack[keep:]
        for style in active:
            if style not in stack:
                out.append(f"<{_TAGS[style]}>")
                stack.append(style)
        out.append(text[start:end])
    for style in reversed(stack):
        out.append(f"</{_TAGS[style]}>")
    return "".join(out)


def render_event_text(event: CuesWithTiming, keep_styles: bool = True) -> str:
    """Join the rendered texts of all cues of an event, one per line group."""
    return "\n".join(render_cue_text(cue, keep_styles) for cue in event.cues)


def split_us(us: int) -> tuple[int, int, int, int]:
    """Split a non-negative microsecond offset into ``(h, m, s, ms)``."""
    assert us >= 0, "non-negative timestamp required"
    ms_total = us // 1000
    s_total, ms = divmod(ms_total, 1000)
    m_total, s = divmod(s_total, 60)
    h, m = divmod(m_total, 60)
    return h, m, s, ms
