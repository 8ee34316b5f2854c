from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.enums import ShiftStatus, ShiftType


@dataclass(frozen=True)
class ShiftSchedule:
    """Thực thể miền (domain): ca làm đã xếp cho một nhân viên trong một ngày."""

    shift_id: int
    user_id: int
    work_date: date
    shift_type: ShiftType
    scheduled_start: Optional[time]
    scheduled_end: Optional[time]
    status: ShiftStatus = ShiftStatus.ADJUSTING
    note: Optional[str] = None

    def window(self) -> tuple[Optional[datetime], Optional[datetime]]:
        """Scheduled start/end as datetimes on ``work_date``.

        An end at or before the start belongs to the next day (overnight shift).
        """

        start = datetime.combine(self.work_date, self.scheduled_start) if self.scheduled_start else None
        end = datetime.combine(self.work_date, self.scheduled_end) if self.scheduled_end else None
        if start is not None and end is not None and end <= start:
            end += timedelta(days=1)
        return start, end

    def to_dict(self) -> dict:
        return {
            "shift_id": self.shift_id,
            "user_id": self.user_id,
            "work_date": self.work_date.isoformat(),
            "shift_type": self.shift_type.value,
            "start_time": self.scheduled_start.strftime("%H:%M") if self.scheduled_start else None,
            "end_time": self.scheduled_end.strftime("%H:%M") if self.scheduled_end else None,
            "status": self.status.value,
            "note": self.note or "",
        }
