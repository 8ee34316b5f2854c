from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusRule:
    """One version of the status -> display label configuration.

    A version applies to every day on or after ``effective_from``'s date
    until a later version takes over.
    """

    rule_id: int
    effective_from: datetime
    normal_label: str
    late_label: str
    early_leave_label: str
    absence_label: str
    indeterminate_label: str

    def label_for(self, status: AttendanceStatus) -> Optional[str]:
        label = {
            AttendanceStatus.NORMAL: self.normal_label,
            AttendanceStatus.LATE: self.late_label,
            AttendanceStatus.EARLY_LEAVE: self.early_leave_label,
            AttendanceStatus.ABSENT: self.absence_label,
            AttendanceStatus.INDETERMINATE: self.indeterminate_label,
        }.get(status)
        return label or None

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "effective_from": self.effective_from.isoformat(),
            "normal_label": self.normal_label,
            "late_label": self.late_label,
            "early_leave_label": self.early_leave_label,
            "absence_label": self.absence_label,
            "indeterminate_label": self.indeterminate_label,
        }


DEFAULT_STATUS_RULE = StatusRule(
    rule_id=0,
    effective_from=datetime.min,
    normal_label="Normal",
    late_label="Late",
    early_leave_label="Early departure",
    absence_label="Absent",
    indeterminate_label="Indeterminate",
)


@dataclass(frozen=True)
class StatusLabel:
    status: AttendanceStatus
    label: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {"status": self.status.value, "label": self.label, "note": self.note}
