from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Loại sự kiện chấm công (time-clock punch)."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class IntervalKind(str, Enum):
    WORK = "work"
    BREAK = "break"


class ShiftType(str, Enum):
    NORMAL = "normal"
    EARLY = "early"
    LATE = "late"
    OFF = "off"


class ShiftStatus(str, Enum):
    """Trạng thái duyệt ca: chỉ ADJUSTING <-> CONFIRMED."""

    ADJUSTING = "adjusting"
    CONFIRMED = "confirmed"


class AttendanceStatus(str, Enum):
    """Kết quả phân loại chấm công so với lịch ca."""

    NORMAL = "NORMAL"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"
    INDETERMINATE = "INDETERMINATE"


class BatchOperationType(str, Enum):
    SHIFT_TEMPLATE_APPLY = "shift_template_apply"
    SHIFT_APPROVE = "shift_approve"
    SHIFT_CANCEL_APPROVAL = "shift_cancel_approval"


class BatchRunStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"
