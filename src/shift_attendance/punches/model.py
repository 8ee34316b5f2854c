from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import IntervalKind, PunchKind


@dataclass(frozen=True)
class PunchEvent:
    """Thực thể miền (domain): một lần bấm giờ (vào/ra ca, bắt đầu/kết thúc nghỉ)."""

    user_id: int
    kind: PunchKind
    timestamp: datetime
    location_label: Optional[str] = None


@dataclass(frozen=True)
class Interval:
    """A reconstructed span of work or break time; ``end is None`` means still open."""

    kind: IntervalKind
    start: datetime
    end: Optional[datetime] = None
    location_label: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def effective_end(self, now: datetime) -> datetime:
        return self.end if self.end is not None else max(now, self.start)

    def duration(self, now: datetime) -> timedelta:
        return self.effective_end(now) - self.start

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "location": self.location_label,
        }


@dataclass(frozen=True)
class IntervalSummary:
    work_minutes: int
    break_minutes: int
    is_working: bool
    is_on_break: bool

    def to_dict(self) -> dict:
        return {
            "work_minutes": self.work_minutes,
            "break_minutes": self.break_minutes,
            "is_working": self.is_working,
            "is_on_break": self.is_on_break,
        }
