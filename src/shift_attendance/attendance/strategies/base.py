from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import AttendanceStatus
from ...punches.model import Interval
from ...schedules.model import ShiftSchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(
        self,
        *,
        intervals: Sequence[Interval],
        schedule: Optional[ShiftSchedule],
        now: datetime,
    ) -> StatusDecision:
        raise NotImplementedError


def minutes_between(earlier: datetime, later: datetime) -> int:
    return int((later - earlier).total_seconds() // 60)
