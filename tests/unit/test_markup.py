"""Unit tests for SubRip and WebVTT inline markup parsing."""

from __future__ import annotations

import pytest

from subcue.cues.models import AnchorType, LineType, SpanStyle, StyleSpan
from subcue.parsing.markup import (
    DEFAULT_PLACEMENT,
    StyledText,
    build_subrip_cue,
    parse_subrip_text,
    parse_webvtt_cue_text,
    placement_for_alignment_tag,
)


def _spans(styled: StyledText) -> list[tuple[int, int, SpanStyle]]:
    return [(s.start, s.end, s.style) for s in styled.spans]


class TestSubripText:
    """HTML-like and SSA style tags in SubRip cue text."""

    def test_bold_and_italic_spans(self) -> None:
        styled, _ = parse_subrip_text(["<b>bold</b> and <i>italic</i>"])

        assert styled.text == "bold and italic"
        assert _spans(styled) == [(0, 4, SpanStyle.BOLD), (9, 15, SpanStyle.ITALIC)]

    def test_lines_are_trimmed_and_joined(self) -> None:
        styled, _ = parse_subrip_text(["  first  ", "\tsecond "])
        assert styled.text == "first\nsecond"

    def test_span_across_lines(self) -> None:
        styled, _ = parse_subrip_text(["<i>abc", "def</i>"])

        assert styled.text == "abc\ndef"
        assert _spans(styled) == [(0, 7, SpanStyle.ITALIC)]

    def test_unclosed_tag_runs_to_end(self) -> None:
        styled, _ = parse_subrip_text(["Hello <i>word"])

        assert styled.text == "Hello word"
        assert _spans(styled) == [(6, 10, SpanStyle.ITALIC)]

    def test_unmatched_closer_is_ignored(self) -> None:
        styled, _ = parse_subrip_text(["plain</b> text"])

        assert styled.text == "plain text"
        assert styled.spans == ()

    def test_font_removed_and_br_breaks_line(self) -> None:
        styled, _ = parse_subrip_text(['<font color="red">red</font><br>next'])
        assert styled.text == "red\nnext"

    def test_entities_are_unescaped(self) -> None:
        styled, _ = parse_subrip_text(["Tom &amp; Jerry"])
        assert styled.text == "Tom & Jerry"

    def test_malformed_tag_stays_literal(self) -> None:
        styled, _ = parse_subrip_text(["< b>x"])
        assert styled.text == "< b>x"

    def test_ssa_bold_override(self) -> None:
        styled, _ = parse_subrip_text(["{\\b1}bold{\\b0}"])

        assert styled.text == "bold"
        assert _spans(styled) == [(0, 4, SpanStyle.BOLD)]


class TestAlignmentTags:
    """``{\\anN}`` placement resolution."""

    def test_bottom_center(self) -> None:
        styled, placement = parse_subrip_text(["{\\an2}This is the third subtitle."])

        assert styled.text == "This is the third subtitle."
        assert placement.line_anchor is AnchorType.END
        assert placement.position_anchor is AnchorType.MIDDLE
        assert placement.line == pytest.approx(0.92)
        assert placement.position == pytest.approx(0.5)
        assert placement.line_type is LineType.FRACTIONAL

    @pytest.mark.parametrize(
        ("tag", "line_anchor", "position_anchor"),
        [
            ("{\\an1}", AnchorType.END, AnchorType.START),
            ("{\\an5}", AnchorType.MIDDLE, AnchorType.MIDDLE),
            ("{\\an7}", AnchorType.START, AnchorType.START),
            ("{\\an9}", AnchorType.START, AnchorType.END),
        ],
    )
    def test_keypad_layout(
        self, tag: str, line_anchor: AnchorType, position_anchor: AnchorType
    ) -> None:
        placement = placement_for_alignment_tag(tag)

        assert placement is not None
        assert (placement.line_anchor, placement.position_anchor) == (line_anchor, position_anchor)

    def test_first_alignment_tag_wins(self) -> None:
        styled, placement = parse_subrip_text(["This is the {\\an8}fourth subtitle.{\\an2}"])

        assert styled.text == "This is the fourth subtitle."
        assert placement.line_anchor is AnchorType.START
        assert placement.position_anchor is AnchorType.MIDDLE

    def test_spaced_tag_is_literal(self) -> None:
        styled, placement = parse_subrip_text(["{ \\an2}This is the fifth subtitle."])

        assert styled.text == "{ \\an2}This is the fifth subtitle."
        assert placement == DEFAULT_PLACEMENT

    def test_default_cue_placement(self) -> None:
        cue = build_subrip_cue(StyledText("x"), DEFAULT_PLACEMENT)

        assert cue.line is None
        assert cue.position is None
        assert cue.line_anchor is AnchorType.START
        assert cue.position_anchor is AnchorType.START
        assert cue.line_type is LineType.NUMBER


class TestWebvttText:
    """WebVTT cue text tags."""

    def test_voice_tag_removed_and_bold_kept(self) -> None:
        styled = parse_webvtt_cue_text("<v Bob>Hi <b>there</b></v>")

        assert styled.text == "Hi there"
        assert styled.spans == (StyleSpan(start=3, end=8, style=SpanStyle.BOLD),)

    def test_class_and_language_tags_removed(self) -> None:
        styled = parse_webvtt_cue_text("<c.yellow>Yellow</c> <lang en>text</lang>")
        assert styled.text == "Yellow text"

    def test_ruby_annotation_dropped(self) -> None:
        styled = parse_webvtt_cue_text("<ruby>漢<rt>kan</rt>字<rt>ji</rt></ruby>")
        assert styled.text == "漢字"

    def test_timestamp_tags_removed(self) -> None:
        styled = parse_webvtt_cue_text("one <00:00:01.500>two")
        assert styled.text == "one two"

    def test_entities_and_nbsp(self) -> None:
        styled = parse_webvtt_cue_text("a&nbsp;b&lt;c")
        assert styled.text == "a b<c"

    def test_italic_across_newline(self) -> None:
        styled = parse_webvtt_cue_text("<i>first line\nsecond</i>")

        assert styled.text == "first line\nsecond"
        assert _spans(styled) == [(0, 17, SpanStyle.ITALIC)]
