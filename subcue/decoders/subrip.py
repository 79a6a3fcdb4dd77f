"""Decoder for SubRip (.srt) text subtitles.

Malformed blocks are skipped one at a time with a warning; nothing a text
file contains can make :meth:`SubRipDecoder.parse` raise, so callers must not
assume that the number of blocks equals the number of cues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from subcue.config import OutputOptions
from subcue.cues.models import CueReplacementBehavior, CuesWithTiming
from subcue.cues.timing import TimedCue, build_events
from subcue.decoders.base import SubtitleDecoder
from subcue.errors import UnparsableTimecodeError
from subcue.parsing.byte_cursor import ByteCursor
from subcue.parsing.lexer import CueBlock, TextCueLexer
from subcue.parsing.markup import build_subrip_cue, parse_subrip_text
from subcue.parsing.timecode import parse_timing_line

logger = logging.getLogger(__name__)

__all__ = ["SubRipDecoder"]


class SubRipDecoder(SubtitleDecoder):
    """Decodes SubRip text into display events.

    Args:
        encoding: Encoding for input without a byte-order mark; defaults to
            ``SUBCUE_DEFAULT_ENCODING``.

    """

    format_name = "srt"
    cue_replacement_behavior = CueReplacementBehavior.MERGE

    def __init__(self, encoding: str | None = None) -> None:
        super().__init__()
        self._lexer = TextCueLexer(encoding)

    @property
    def encoding(self) -> str:
        return self._lexer.encoding

    def _parse(
        self, cursor: ByteCursor, output_options: OutputOptions | None
    ) -> list[CuesWithTiming]:
        return build_events(self._iter_timed_cues(cursor), output_options)

    def _iter_timed_cues(self, cursor: ByteCursor) -> Iterator[TimedCue]:
        for block in self._lexer.iter_blocks(cursor):
            timed = self._parse_block(block)
            if timed is not None:
                yield timed

    @staticmethod
    def _parse_block(block: CueBlock) -> TimedCue | None:
        if block.timing_line is None:
            logger.warning("Unexpected end of block at line %d", block.line_number)
            return None
        try:
            start_us, end_us = parse_timing_line(block.timing_line)
        except UnparsableTimecodeError:
            logger.warning(
                "Skipping invalid timing at line %d: %s", block.line_number, block.timing_line
            )
            return None
        styled, placement = parse_subrip_text(block.text_lines)
        return TimedCue(cue=build_subrip_cue(styled, placement), start_us=start_us, end_us=end_us)
