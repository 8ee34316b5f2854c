from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local
from ..core.constants import OVERNIGHT_CLOCK_OUT_ALLOWANCE_MINUTES
from ..core.enums import PunchKind
from .model import Interval, PunchEvent
from .reconstructor import group_by_user, reconstruct, summarize
from .repository import PunchRepository


def _carry_over(events: Sequence[PunchEvent], boundary: datetime) -> list[PunchEvent]:
    """Keep the day's events plus the next-day events up to the first clock-out.

    Anything the worker punches after that belongs to the next shift.
    """

    kept: list[PunchEvent] = []
    for e in sorted(events, key=lambda e: e.timestamp):
        kept.append(e)
        if e.timestamp >= boundary and e.kind == PunchKind.CLOCK_OUT:
            break
    return kept


class PunchTimelineService:
    """Read side for punches: intervals per worker-day, recomputed on every call."""

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def intervals_for(
        self,
        *,
        user_id: int,
        work_date: date,
        until: Optional[datetime] = None,
    ) -> list[Interval]:
        """Intervals of one worker-day.

        ``until`` is the scheduled end of the day's shift. When it falls after
        midnight the read follows the worker into the next day.
        """

        day_start, day_end = day_bounds(work_date)
        if until is None or until <= day_end:
            events = self._punches.list_for_user_day(user_id=int(user_id), work_date=work_date)
            return reconstruct(events)

        read_until = until + timedelta(minutes=OVERNIGHT_CLOCK_OUT_ALLOWANCE_MINUTES)
        events = self._punches.list_for_user_range(user_id=int(user_id), start=day_start, end=read_until)
        return reconstruct(_carry_over(events, day_end))

    def day_timeline(
        self,
        *,
        work_date: date,
        user_ids: Optional[Sequence[int]] = None,
        now: Optional[datetime] = None,
    ) -> list[dict]:
        now = now or now_local()
        events = self._punches.list_for_day(work_date=work_date, user_ids=user_ids)
        grouped = group_by_user(events)

        # Users asked for explicitly still get a (possibly empty) row.
        for uid in user_ids or ():
            grouped.setdefault(int(uid), [])

        rows: list[dict] = []
        for uid in sorted(grouped):
            intervals = reconstruct(grouped[uid])
            rows.append(
                {
                    "user_id": uid,
                    "intervals": [it.to_dict() for it in intervals],
                    "summary": summarize(intervals, now).to_dict(),
                }
            )
        return rows
