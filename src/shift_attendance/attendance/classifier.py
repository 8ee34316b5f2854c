from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..punches.model import Interval
from ..schedules.model import ShiftSchedule
from .factory import AttendanceStrategyFactory
from .model import DEFAULT_STATUS_RULE, StatusLabel, StatusRule
from .rules import resolve_rule

logger = logging.getLogger(__name__)


class AttendanceClassifier:
    """Compare reconstructed intervals with the scheduled shift and label the day."""

    def __init__(
        self,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
    ):
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def classify(
        self,
        intervals: Sequence[Interval],
        schedule: Optional[ShiftSchedule],
        rules: Sequence[StatusRule],
        *,
        now: datetime | None = None,
    ) -> StatusLabel:
        now = now or now_local()
        work_date = self._work_date(intervals, schedule, now)

        resolution = resolve_rule(rules, work_date)
        if resolution.ambiguous:
            logger.warning("Several status rules share the effective date for %s", work_date, extra={"work_date": work_date})
            rule = resolution.rule or DEFAULT_STATUS_RULE
            return StatusLabel(
                status=AttendanceStatus.INDETERMINATE,
                label=rule.indeterminate_label or DEFAULT_STATUS_RULE.indeterminate_label,
                note="conflicting status rule versions",
            )
        rule = resolution.rule or DEFAULT_STATUS_RULE

        strategy = self._factory.for_day(
            intervals=intervals,
            schedule=schedule,
            now=now,
            grace_minutes=self._grace_minutes,
        )
        decision = strategy.decide(intervals=intervals, schedule=schedule, now=now)

        label = rule.label_for(decision.status)
        if label is None:
            return StatusLabel(
                status=AttendanceStatus.INDETERMINATE,
                label=rule.indeterminate_label or DEFAULT_STATUS_RULE.indeterminate_label,
                note=f"no label configured for {decision.status.value}",
            )
        return StatusLabel(status=decision.status, label=label, note=decision.note)

    @staticmethod
    def _work_date(intervals: Sequence[Interval], schedule: Optional[ShiftSchedule], now: datetime):
        if schedule is not None:
            return schedule.work_date
        if intervals:
            return min(it.start for it in intervals).date()
        return now.date()
