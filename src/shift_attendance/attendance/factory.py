from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..core.enums import IntervalKind, ShiftType
from ..punches.model import Interval
from ..schedules.model import ShiftSchedule
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.indeterminate_strategy import IndeterminateStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


def _has_unexplained_gap(
    work: Sequence[Interval],
    breaks: Sequence[Interval],
    window_start: datetime,
    window_end: datetime,
    now: datetime,
) -> bool:
    """True when the worker was off the clock, not on break, inside the window."""

    for prev, nxt in zip(work, work[1:]):
        gap_start = prev.effective_end(now)
        gap_end = nxt.start
        if gap_start >= gap_end:
            continue
        if gap_start >= window_end or gap_end <= window_start:
            continue
        covered = any(b.start <= gap_start and b.effective_end(now) >= gap_end for b in breaks)
        if not covered:
            return True
    return False


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Order matters: absence first, then late+early together, then an
    ambiguous interruption, then late or early alone.
    """

    def for_day(
        self,
        *,
        intervals: Sequence[Interval],
        schedule: Optional[ShiftSchedule],
        now: datetime,
        grace_minutes: int = 0,
    ) -> AttendanceStrategy:
        if not schedule or schedule.shift_type == ShiftType.OFF:
            return NormalStrategy()

        work = sorted((it for it in intervals if it.kind == IntervalKind.WORK), key=lambda it: it.start)
        if not work:
            return AbsentStrategy()

        breaks = [it for it in intervals if it.kind == IntervalKind.BREAK]
        start, end = schedule.window()

        late = start is not None and work[0].start > start + timedelta(minutes=grace_minutes)
        last_end = max(it.effective_end(now) for it in work)
        early = end is not None and last_end < end

        if late and early:
            return IndeterminateStrategy("late arrival and early departure")
        if start is not None and end is not None and _has_unexplained_gap(work, breaks, start, end, now):
            return IndeterminateStrategy("work interrupted inside the scheduled window")
        if late:
            return LateStrategy()
        if early:
            return EarlyLeaveStrategy()
        return NormalStrategy()
