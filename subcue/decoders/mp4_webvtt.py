"""Decoder for WebVTT embedded in MP4 samples (ISO/IEC 14496-30).

A sample is a sequence of boxes. Each ``vttc`` box is one cue whose children
are an optional ``sttg`` settings box and an optional ``payl`` text box.
Peers of ``vttc`` (``vtte``, ``vtta``, unknown types) are skipped by size.

Structural problems are fatal: a short header or an impossible size raises
:class:`~subcue.errors.MalformedContainerError` for the whole sample.
"""

from __future__ import annotations

import logging

from subcue.config import OutputOptions
from subcue.cues.models import Cue, CueReplacementBehavior, CuesWithTiming
from subcue.cues.timing import apply_output_options
from subcue.decoders.base import SubtitleDecoder
from subcue.parsing.boxes import Box, BoxReader, BoxType
from subcue.parsing.byte_cursor import ByteCursor
from subcue.parsing.markup import StyledText, parse_webvtt_cue_text
from subcue.parsing.webvtt_settings import WebvttCueSettings, parse_cue_settings

logger = logging.getLogger(__name__)

__all__ = ["Mp4WebvttDecoder"]


class Mp4WebvttDecoder(SubtitleDecoder):
    """Decodes one MP4 WebVTT sample.

    The sample carries no timing of its own, so the result is exactly one
    :class:`CuesWithTiming` with unset start and duration; the caller applies
    the container sample timestamp.
    """

    format_name = "mp4vtt"
    cue_replacement_behavior = CueReplacementBehavior.REPLACE

    def _parse(
        self, cursor: ByteCursor, output_options: OutputOptions | None
    ) -> list[CuesWithTiming]:
        reader = BoxReader(cursor)
        cues: list[Cue] = []
        for box in reader.iter_boxes():
            if box.type is BoxType.VTTC:
                cues.append(self._parse_cue_box(reader, box))
            elif box.type is not BoxType.UNKNOWN:
                logger.debug("Ignoring sample-level box '%s'", box.fourcc)
        event = CuesWithTiming(cues=tuple(cues), start_time_us=None, duration_us=None)
        return apply_output_options([event], output_options)

    @staticmethod
    def _parse_cue_box(reader: BoxReader, box: Box) -> Cue:
        settings: WebvttCueSettings | None = None
        styled: StyledText | None = None
        for child in reader.iter_children(box):
            if child.type is BoxType.STTG:
                settings = parse_cue_settings(reader.read_payload(child))
            elif child.type is BoxType.PAYL:
                styled = parse_webvtt_cue_text(reader.read_payload(child).strip())
            else:
                # Other cue box children are not supported and are ignored
                logger.debug("Ignoring cue box child '%s'", child.fourcc)
        if styled is None:
            styled = StyledText("")
        if settings is None:
            settings = WebvttCueSettings()
        return settings.to_cue(styled.text, styled.spans)
