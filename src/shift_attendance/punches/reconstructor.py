"""Turn one worker-day of punch events into work/break intervals.

The reconstruction is a fold over the events in timestamp order. The
accumulator carries two cursors: when the current work span started and when
the current break started. Punches that make no sense in the current state
(a second clock-in, a break-start before clocking in, ...) are ignored rather
than rejected, so any event list yields a result.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime
from functools import reduce
from typing import Iterable, Optional, Sequence

from ..core.enums import IntervalKind, PunchKind
from .model import Interval, IntervalSummary, PunchEvent


@dataclass(frozen=True)
class _Cursor:
    work_start: Optional[datetime] = None
    work_location: Optional[str] = None
    break_start: Optional[datetime] = None
    break_location: Optional[str] = None
    intervals: tuple[Interval, ...] = ()


def _close(intervals: tuple[Interval, ...], kind: IntervalKind, start: datetime, end: datetime, location: Optional[str]):
    # Equal timestamps would give an empty span; keep only positive durations.
    if end <= start:
        return intervals
    return intervals + (Interval(kind=kind, start=start, end=end, location_label=location),)


def _on_clock_in(c: _Cursor, e: PunchEvent) -> _Cursor:
    if c.work_start is not None:
        return c
    return replace(c, work_start=e.timestamp, work_location=e.location_label)


def _on_break_start(c: _Cursor, e: PunchEvent) -> _Cursor:
    if c.work_start is None or c.break_start is not None:
        return c
    return replace(
        c,
        intervals=_close(c.intervals, IntervalKind.WORK, c.work_start, e.timestamp, e.location_label),
        work_start=None,
        work_location=None,
        break_start=e.timestamp,
        break_location=e.location_label,
    )


def _on_break_end(c: _Cursor, e: PunchEvent) -> _Cursor:
    if c.break_start is None:
        return c
    return replace(
        c,
        intervals=_close(c.intervals, IntervalKind.BREAK, c.break_start, e.timestamp, e.location_label),
        break_start=None,
        break_location=None,
        work_start=e.timestamp,
        work_location=e.location_label,
    )


def _on_clock_out(c: _Cursor, e: PunchEvent) -> _Cursor:
    intervals = c.intervals
    if c.work_start is not None:
        intervals = _close(intervals, IntervalKind.WORK, c.work_start, e.timestamp, e.location_label)
    # A forgotten break-end is closed by the clock-out as well.
    if c.break_start is not None:
        intervals = _close(intervals, IntervalKind.BREAK, c.break_start, e.timestamp, e.location_label)
    return _Cursor(intervals=intervals)


_HANDLERS = {
    PunchKind.CLOCK_IN: _on_clock_in,
    PunchKind.BREAK_START: _on_break_start,
    PunchKind.BREAK_END: _on_break_end,
    PunchKind.CLOCK_OUT: _on_clock_out,
}


def _step(cursor: _Cursor, event: PunchEvent) -> _Cursor:
    handler = _HANDLERS.get(event.kind)
    if handler is None:
        return cursor
    return handler(cursor, event)


def reconstruct(events: Iterable[PunchEvent]) -> list[Interval]:
    """Rebuild work/break intervals for the events of a single (user, day).

    Events are sorted by timestamp first; storage order is never trusted.
    A work span or break still running at the end of the list is returned
    as an open interval (``end=None``).
    """

    ordered = sorted(events, key=lambda e: e.timestamp)
    final = reduce(_step, ordered, _Cursor())

    intervals = list(final.intervals)
    if final.work_start is not None:
        intervals.append(Interval(IntervalKind.WORK, final.work_start, None, final.work_location))
    if final.break_start is not None:
        intervals.append(Interval(IntervalKind.BREAK, final.break_start, None, final.break_location))
    return intervals


def summarize(intervals: Sequence[Interval], now: datetime) -> IntervalSummary:
    work_seconds = 0.0
    break_seconds = 0.0
    for it in intervals:
        seconds = max(it.duration(now).total_seconds(), 0.0)
        if it.kind == IntervalKind.WORK:
            work_seconds += seconds
        else:
            break_seconds += seconds

    return IntervalSummary(
        work_minutes=int(work_seconds // 60),
        break_minutes=int(break_seconds // 60),
        is_working=any(it.is_open and it.kind == IntervalKind.WORK for it in intervals),
        is_on_break=any(it.is_open and it.kind == IntervalKind.BREAK for it in intervals),
    )


def group_by_user(events: Iterable[PunchEvent]) -> dict[int, list[PunchEvent]]:
    grouped: dict[int, list[PunchEvent]] = defaultdict(list)
    for e in events:
        grouped[e.user_id].append(e)
    return dict(grouped)
