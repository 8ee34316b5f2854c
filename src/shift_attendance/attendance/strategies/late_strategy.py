from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus, IntervalKind
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, minutes_between


class LateStrategy(AttendanceStrategy):
    """First clock-in after the scheduled start."""

    def decide(self, *, intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime) -> StatusDecision:
        start, _ = schedule.window() if schedule else (None, None)
        first = min((it.start for it in intervals if it.kind == IntervalKind.WORK), default=None)
        note = None
        if start is not None and first is not None:
            note = f"late by {minutes_between(start, first)} min"
        return StatusDecision(status=AttendanceStatus.LATE, note=note)
