from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision


class IndeterminateStrategy(AttendanceStrategy):
    """Explicit "cannot decide" outcome; carries the reason as note."""

    def __init__(self, reason: str):
        self._reason = reason

    @property
    def reason(self) -> str:
        return self._reason

    def decide(self, *, intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.INDETERMINATE, note=self._reason)
