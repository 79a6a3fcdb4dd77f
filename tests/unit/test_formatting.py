"""Unit tests for the output formatter registry and formatters."""

from __future__ import annotations

import json

import pytest

from subcue import decode
from subcue.cues.models import Cue, CuesWithTiming, DecodeResult, SpanStyle, StyleSpan
from subcue.formatting import FORMATTERS, format_result, get_formatter, get_formatter_spec
from subcue.formatting._srt import to_srt
from subcue.formatting._styles import render_cue_text


def _result(*events: CuesWithTiming) -> DecodeResult:
    return DecodeResult(format_name="srt", events=list(events))


def test_registry() -> None:
    assert set(FORMATTERS) == {"json", "jsonl", "srt", "vtt", "txt"}
    assert get_formatter("SRT") is to_srt
    assert get_formatter_spec("vtt").file_extension == ".vtt"
    assert get_formatter_spec("srt").timed_only


def test_unknown_formatter() -> None:
    with pytest.raises(ValueError, match="Unsupported format: 'docx'"):
        get_formatter("docx")


def test_srt_round_trip(typical_srt: bytes) -> None:
    """Re-rendering a clean SubRip file reproduces it."""
    assert format_result(decode(typical_srt), "srt") == typical_srt.decode("utf-8")


def test_vtt_output(typical_srt: bytes) -> None:
    text = format_result(decode(typical_srt), "vtt")

    assert text.startswith(
        "WEBVTT\n\n00:00:00.000 --> 00:00:01.234\nThis is the first subtitle.\n\n"
    )
    assert "00:00:04.567 --> 00:00:08.901\nThis is the third subtitle.\n" in text


def test_untimed_and_negative_events_are_skipped() -> None:
    result = _result(
        CuesWithTiming(cues=(Cue(text="untimed"),)),
        CuesWithTiming(cues=(Cue(text="early"),), start_time_us=-5_000, duration_us=10_000),
        CuesWithTiming(cues=(Cue(text="kept"),), start_time_us=3_600_000_000, duration_us=1_000),
    )

    assert to_srt(result) == "1\n01:00:00,000 --> 01:00:00,001\nkept\n"


def test_event_with_several_cues() -> None:
    result = _result(
        CuesWithTiming(cues=(Cue(text="A"), Cue(text="B")), start_time_us=0, duration_us=1_000)
    )
    assert to_srt(result) == "1\n00:00:00,000 --> 00:00:00,001\nA\nB\n"


def test_styles_kept_or_dropped() -> None:
    cue = Cue(text="bold", spans=(StyleSpan(start=0, end=4, style=SpanStyle.BOLD),))
    result = _result(CuesWithTiming(cues=(cue,), start_time_us=0, duration_us=1_000))

    assert "<b>bold</b>" in format_result(result, "vtt")
    assert "<b>" not in format_result(result, "srt", keep_styles=False)


@pytest.mark.parametrize(
    ("text", "spans", "expected"),
    [
        (
            "abcdef",
            [(0, 4, SpanStyle.BOLD), (2, 6, SpanStyle.ITALIC)],
            "<b>ab<i>cd</i></b><i>ef</i>",
        ),
        ("abc", [(0, 3, SpanStyle.UNDERLINE), (1, 2, SpanStyle.BOLD)], "<u>a<b>b</b>c</u>"),
        ("plain", [], "plain"),
    ],
)
def test_render_cue_text(
    text: str, spans: list[tuple[int, int, SpanStyle]], expected: str
) -> None:
    """Overlapping spans are re-opened so tags always nest."""
    cue = Cue(
        text=text,
        spans=tuple(StyleSpan(start=s, end=e, style=style) for s, e, style in spans),
    )
    assert render_cue_text(cue) == expected


def test_json_and_jsonl(typical_srt: bytes) -> None:
    result = decode(typical_srt)

    payload = json.loads(format_result(result, "json"))
    lines = format_result(result, "jsonl").splitlines()

    assert payload["format_name"] == "srt"
    assert len(payload["events"]) == 6
    assert len(lines) == 6
    assert json.loads(lines[0])["duration_us"] == 1_234_000


def test_txt(typical_srt: bytes) -> None:
    assert format_result(decode(typical_srt), "txt") == (
        "This is the first subtitle.\n\n"
        "This is the second subtitle.\nSecond subtitle with second line.\n\n"
        "This is the third subtitle."
    )
