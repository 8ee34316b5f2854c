from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus, IntervalKind
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, minutes_between


class EarlyLeaveStrategy(AttendanceStrategy):
    """Last work span ends before the scheduled end."""

    def decide(self, *, intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime) -> StatusDecision:
        _, end = schedule.window() if schedule else (None, None)
        last = max((it.effective_end(now) for it in intervals if it.kind == IntervalKind.WORK), default=None)
        note = None
        if end is not None and last is not None:
            note = f"left {minutes_between(last, end)} min early"
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, note=note)
