"""Unit tests for the SubRip text lexer."""

from __future__ import annotations

import codecs

import pytest

from subcue.errors import PreconditionViolationError
from subcue.parsing.byte_cursor import ByteCursor
from subcue.parsing.lexer import CueBlock, TextCueLexer, detect_bom, normalize_encoding


def _blocks(text: str) -> list[CueBlock]:
    lexer = TextCueLexer()
    return list(lexer.iter_blocks_from_lines(lexer.split_lines(text)))


def test_split_lines_handles_every_terminator() -> None:
    lexer = TextCueLexer()

    assert lexer.split_lines("a\r\nb\rc\nd\n") == ["a", "b", "c", "d"]
    assert lexer.split_lines("") == []
    assert lexer.split_lines("a\n\n") == ["a", ""]


def test_typical_blocks(typical_srt: bytes) -> None:
    """Each block carries its sequence, timing line, text and line number."""
    blocks = list(TextCueLexer().iter_blocks(ByteCursor(typical_srt)))

    assert [b.sequence for b in blocks] == [1, 2, 3]
    assert [b.line_number for b in blocks] == [1, 5, 10]
    assert blocks[0].timing_line == "00:00:00,000 --> 00:00:01,234"
    assert blocks[1].text_lines == (
        "This is the second subtitle.",
        "Second subtitle with second line.",
    )


def test_blank_line_runs_separate_once() -> None:
    blocks = _blocks(
        "1\n00:00:01,000 --> 00:00:02,000\nA\n\n \n\t\n2\n00:00:03,000 --> 00:00:04,000\nB\n"
    )
    assert [b.text_lines for b in blocks] == [("A",), ("B",)]


def test_sequence_number_is_optional() -> None:
    blocks = _blocks("00:00:01,000 --> 00:00:02,000\nNo number\n")

    assert len(blocks) == 1
    assert blocks[0].sequence is None
    assert blocks[0].timing_line == "00:00:01,000 --> 00:00:02,000"
    assert blocks[0].text_lines == ("No number",)


def test_glued_sequence_starts_new_block() -> None:
    """A sequence line followed by a timing line splits a block without a blank line."""
    blocks = _blocks(
        "1\n00:00:00,000 --> 00:00:01,000\nA\n2\n00:00:02,000 --> 00:00:03,000\nB\n"
    )

    assert [b.sequence for b in blocks] == [1, 2]
    assert [b.text_lines for b in blocks] == [("A",), ("B",)]
    assert blocks[1].line_number == 4


def test_digit_text_line_stays_text() -> None:
    blocks = _blocks("1\n00:00:00,000 --> 00:00:01,000\nThe answer is\n42\n")

    assert len(blocks) == 1
    assert blocks[0].text_lines == ("The answer is", "42")


def test_block_ending_after_sequence_has_no_timing_line() -> None:
    blocks = _blocks("3\n")

    assert blocks == [CueBlock(sequence=3, timing_line=None, text_lines=(), line_number=1)]


@pytest.mark.parametrize(
    ("head", "expected"),
    [
        (codecs.BOM_UTF8 + b"1", ("utf-8", 3)),
        (b"\xff\xfe1\x00", ("utf-16-le", 2)),
        (b"\xfe\xff\x001", ("utf-16-be", 2)),
        (b"1\n0", (None, 0)),
    ],
)
def test_detect_bom(head: bytes, expected: tuple[str | None, int]) -> None:
    assert detect_bom(head) == expected


def test_bom_overrides_encoding_hint() -> None:
    data = codecs.BOM_UTF8 + "Café".encode()
    lexer = TextCueLexer("latin-1")

    assert lexer.decode_text(ByteCursor(data)) == "Café"


def test_encoding_hint_applies_without_bom() -> None:
    data = "Café".encode("latin-1")
    assert TextCueLexer("latin-1").decode_text(ByteCursor(data)) == "Café"


@pytest.mark.parametrize(
    ("name", "expected"),
    [("UTF8", "utf-8"), ("ISO-8859-1", "latin-1"), ("utf_16_le", "utf-16-le")],
)
def test_normalize_encoding(name: str, expected: str) -> None:
    assert normalize_encoding(name) == expected


@pytest.mark.parametrize("name", ["cp1252", "no-such-codec"])
def test_unsupported_encodings_raise(name: str) -> None:
    with pytest.raises(PreconditionViolationError):
        TextCueLexer(name)
