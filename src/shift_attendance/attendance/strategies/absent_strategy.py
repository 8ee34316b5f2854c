from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Scheduled, but no work interval at all."""

    def decide(self, *, intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
