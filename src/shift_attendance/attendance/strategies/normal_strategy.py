from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Worked the scheduled window (or there is no window to compare against)."""

    def decide(self, *, intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.NORMAL)
