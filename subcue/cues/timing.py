"""Timing merge: turn individually timed cues into discrete display events.

Every cue start and end is a boundary. Each interval between consecutive
boundaries becomes one :class:`CuesWithTiming` holding the cues active in it,
in source order (so start-time ties keep source order). Adjacent intervals
with the same active set are merged into one maximal run. An interval where
nothing is active yields an empty "clear" event, and the final boundary
yields a clear event whose duration is unset.

:func:`apply_output_options` then windows the ordered events around an
optional start time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from subcue.config import OutputOptions
from subcue.cues.models import Cue, CuesWithTiming

logger = logging.getLogger(__name__)

__all__ = ["TimedCue", "build_events", "apply_output_options"]


@dataclass(frozen=True)
class TimedCue:
    """A cue with its own start/end, before merging."""

    cue: Cue
    start_us: int
    end_us: int


def build_events(
    timed_cues: Iterable[TimedCue],
    output_options: OutputOptions | None = None,
) -> list[CuesWithTiming]:
    """Merge timed cues into ordered activation events.

    Args:
        timed_cues: Cues in source order.
        output_options: Optional event window; defaults to all cues.

    Returns:
        list[CuesWithTiming]: Events in non-decreasing start order (before
        windowing), ending with a clear event of unset duration.
    """
    cues: list[TimedCue] = []
    for timed in timed_cues:
        if timed.end_us < timed.start_us:
            logger.warning(
                "Dropping cue ending before it starts (%d > %d us)", timed.start_us, timed.end_us
            )
            continue
        cues.append(timed)
    if not cues:
        return []

    boundaries = sorted({t for c in cues for t in (c.start_us, c.end_us)})
    starts: dict[int, list[int]] = {}
    ends: dict[int, list[int]] = {}
    for index, timed in enumerate(cues):
        if timed.start_us == timed.end_us:
            logger.debug("Dropping zero-length cue at %d us", timed.start_us)
            continue
        starts.setdefault(timed.start_us, []).append(index)
        ends.setdefault(timed.end_us, []).append(index)

    events: list[CuesWithTiming] = []
    active: set[int] = set()
    run_start: int | None = None
    run_members: tuple[int, ...] | None = None
    for boundary in boundaries:
        active.difference_update(ends.get(boundary, ()))
        active.update(starts.get(boundary, ()))
        members = tuple(sorted(active))
        if members == run_members or (run_members is None and not members):
            continue
        if run_members is not None and run_start is not None:
            events.append(_event(cues, run_members, run_start, boundary - run_start))
        run_start, run_members = boundary, members
    if run_members is not None and run_start is not None:
        # Nothing is active after the last boundary
        events.append(_event(cues, run_members, run_start, None))

    return apply_output_options(events, output_options)


def _event(
    cues: Sequence[TimedCue], members: tuple[int, ...], start_us: int, duration_us: int | None
) -> CuesWithTiming:
    return CuesWithTiming(
        cues=tuple(cues[i].cue for i in members),
        start_time_us=start_us,
        duration_us=duration_us,
    )


def apply_output_options(
    events: list[CuesWithTiming], output_options: OutputOptions | None
) -> list[CuesWithTiming]:
    """Window time-ordered events around ``output_options.start_time_us``.

    Events ending at or before the start time are dropped, or appended after
    the others when ``output_all_cues`` is set. An event straddling the start
    time is split: its tail is emitted first and its head goes with the
    earlier events.

    Args:
        events: Events in time order with known start times.
        output_options: Window to apply; ``None`` or no start time is a no-op.

    Returns:
        list[CuesWithTiming]: The selected events.
    """
    if output_options is None or output_options.start_time_us is None:
        return events
    start = output_options.start_time_us
    after: list[CuesWithTiming] = []
    before: list[CuesWithTiming] = []
    for event in events:
        event_start = event.start_time_us
        event_end = event.end_time_us
        if event_start is None or event_start >= start:
            after.append(event)
        elif event_end is not None and event_end <= start:
            before.append(event)
        elif not event.is_clear:
            # Straddles the start time; a straddling clear event is dropped
            after.append(
                event.model_copy(
                    update={
                        "start_time_us": start,
                        "duration_us": None if event_end is None else event_end - start,
                    }
                )
            )
            before.append(event.model_copy(update={"duration_us": start - event_start}))
    if output_options.output_all_cues:
        return after + before
    return after
