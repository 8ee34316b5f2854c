from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..punches.model import Interval, IntervalSummary
from ..punches.reconstructor import summarize
from ..punches.service import PunchTimelineService
from ..schedules.model import ShiftSchedule
from ..schedules.repository import ScheduleRepository
from .classifier import AttendanceClassifier
from .model import StatusLabel, StatusRule
from .repository import StatusRuleRepository


@dataclass(frozen=True)
class AttendanceDay:
    user_id: int
    work_date: date
    intervals: list[Interval]
    summary: IntervalSummary
    schedule: Optional[ShiftSchedule]
    status: StatusLabel

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "work_date": self.work_date.isoformat(),
            "intervals": [it.to_dict() for it in self.intervals],
            "summary": self.summary.to_dict(),
            "schedule": self.schedule.to_dict() if self.schedule else None,
            "status": self.status.to_dict(),
        }


class AttendanceService:
    def __init__(
        self,
        timeline: PunchTimelineService,
        schedules: ScheduleRepository,
        rules: StatusRuleRepository,
        *,
        classifier: AttendanceClassifier | None = None,
    ):
        self._timeline = timeline
        self._schedules = schedules
        self._rules = rules
        self._classifier = classifier or AttendanceClassifier()

    def day_status(self, *, user_id: int, work_date: date, now: datetime | None = None) -> AttendanceDay:
        now = now or now_local()
        schedule = self._schedules.get_for_user_and_date(user_id=int(user_id), work_date=work_date)
        _, window_end = schedule.window() if schedule else (None, None)
        intervals = self._timeline.intervals_for(user_id=user_id, work_date=work_date, until=window_end)
        versions = self._rules.list_versions()

        status = self._classifier.classify(intervals, schedule, versions, now=now)
        return AttendanceDay(
            user_id=int(user_id),
            work_date=work_date,
            intervals=intervals,
            summary=summarize(intervals, now),
            schedule=schedule,
            status=status,
        )


class StatusRuleService:
    """Versioned status labels; at most one version per effective date."""

    def __init__(self, rules: StatusRuleRepository):
        self._rules = rules

    def list_versions(self) -> list[StatusRule]:
        return list(self._rules.list_versions())

    def create_version(
        self,
        *,
        effective_from: datetime,
        normal_label: str,
        late_label: str,
        early_leave_label: str,
        absence_label: str,
        indeterminate_label: str,
        supersede: bool = False,
    ) -> int:
        labels = {
            "normal_label": require_non_empty(normal_label, "normal_label"),
            "late_label": require_non_empty(late_label, "late_label"),
            "early_leave_label": require_non_empty(early_leave_label, "early_leave_label"),
            "absence_label": require_non_empty(absence_label, "absence_label"),
            "indeterminate_label": require_non_empty(indeterminate_label, "indeterminate_label"),
        }

        same_day = [v for v in self._rules.list_versions() if v.effective_from.date() == effective_from.date()]
        if not same_day:
            return self._rules.create(effective_from=effective_from, **labels)

        if not supersede:
            raise ValidationError(
                f"A status rule already takes effect on {effective_from.date().isoformat()}; "
                "supersede it explicitly"
            )

        target = same_day[-1]
        if not self._rules.replace(rule_id=target.rule_id, effective_from=effective_from, **labels):
            raise ValidationError("Replacing the status rule failed")
        return target.rule_id
