from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PunchEvent
from .repository import PunchRepository


def _to_event(r: dict) -> PunchEvent:
    return PunchEvent(
        user_id=int(r["user_id"]),
        kind=PunchKind(r["record_type"]),
        timestamp=r["recorded_at"],
        location_label=r.get("location_name"),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user_day(self, *, user_id: int, work_date: date) -> Sequence[PunchEvent]:
        start, end = day_bounds(work_date)
        return self.list_for_user_range(user_id=user_id, start=start, end=end)

    def list_for_user_range(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, record_type, recorded_at, location_name
                FROM time_records
                WHERE user_id=%s AND recorded_at >= %s AND recorded_at < %s
                ORDER BY recorded_at
                """,
                (int(user_id), start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_for_day(self, *, work_date: date, user_ids: Optional[Sequence[int]] = None) -> Sequence[PunchEvent]:
        start, end = day_bounds(work_date)
        clauses = ["recorded_at >= %s", "recorded_at < %s"]
        params: list[object] = [start, end]

        if user_ids:
            placeholders = ",".join(["%s"] * len(user_ids))
            clauses.append(f"user_id IN ({placeholders})")
            params.extend(int(u) for u in user_ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, record_type, recorded_at, location_name
                FROM time_records
                WHERE {where}
                ORDER BY user_id, recorded_at
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]
