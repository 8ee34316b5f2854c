from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import PunchEvent


class PunchRepository(Protocol):
    def list_for_user_day(self, *, user_id: int, work_date: date) -> Sequence[PunchEvent]:
        """Punches recorded on ``work_date``; no ordering guarantee."""

        raise NotImplementedError

    def list_for_user_range(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with ``start <= timestamp < end``."""

        raise NotImplementedError

    def list_for_day(self, *, work_date: date, user_ids: Optional[Sequence[int]] = None) -> Sequence[PunchEvent]:
        raise NotImplementedError
