from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

import mysql.connector

from ..core.constants import MSG_ALREADY_EXISTS
from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import PreconditionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ShiftSchedule
from .repository import ScheduleRepository

_COLUMNS = "shift_id, user_id, shift_date, shift_type, start_time, end_time, shift_status, note"


def _to_schedule(r: dict) -> ShiftSchedule:
    return ShiftSchedule(
        shift_id=int(r["shift_id"]),
        user_id=int(r["user_id"]),
        work_date=r["shift_date"],
        shift_type=ShiftType(r["shift_type"]),
        scheduled_start=normalize_mysql_time(r.get("start_time")),
        scheduled_end=normalize_mysql_time(r.get("end_time")),
        status=ShiftStatus(r["shift_status"]),
        note=r.get("note"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def get_for_user_and_date(self, *, user_id: int, work_date: date) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE user_id=%s AND shift_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftSchedule]:
        clauses = ["1=1"]
        params: list[object] = []
        if start is not None:
            clauses.append("shift_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("shift_date <= %s")
            params.append(end)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("shift_status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {where}
                ORDER BY shift_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        shift_type: ShiftType,
        scheduled_start: Optional[time],
        scheduled_end: Optional[time],
        status: ShiftStatus,
        note: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO shifts(user_id, shift_date, shift_type, start_time, end_time, shift_status, note)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, shift_type.value, scheduled_start, scheduled_end, status.value, note),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_shift_user_date: another writer created the shift first.
            raise PreconditionError(MSG_ALREADY_EXISTS)

    def update_from_template(
        self,
        *,
        shift_id: int,
        shift_type: ShiftType,
        scheduled_start: Optional[time],
        scheduled_end: Optional[time],
        note: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET shift_type=%s, start_time=%s, end_time=%s, note=%s
                WHERE shift_id=%s
                """,
                (shift_type.value, scheduled_start, scheduled_end, note, int(shift_id)),
            )
            return cur.rowcount > 0

    def transition_status(
        self,
        *,
        shift_id: int,
        expected: ShiftStatus,
        new: ShiftStatus,
        note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if note is None:
                cur.execute(
                    "UPDATE shifts SET shift_status=%s WHERE shift_id=%s AND shift_status=%s",
                    (new.value, int(shift_id), expected.value),
                )
            else:
                cur.execute(
                    "UPDATE shifts SET shift_status=%s, note=%s WHERE shift_id=%s AND shift_status=%s",
                    (new.value, note, int(shift_id), expected.value),
                )
            return cur.rowcount > 0
