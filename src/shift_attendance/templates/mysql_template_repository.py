from __future__ import annotations

from typing import Optional

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time, parse_weekdays
from .model import ShiftTemplate
from .repository import TemplateRepository


class MySQLTemplateRepository(TemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, location_id, name, shift_type, start_time, end_time,
                       break_duration, applicable_days, is_active
                FROM shift_templates
                WHERE template_id=%s
                """,
                (int(template_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftTemplate(
                template_id=int(r["template_id"]),
                location_id=int(r["location_id"]),
                name=r["name"],
                shift_type=ShiftType(r["shift_type"]),
                start_time=normalize_mysql_time(r.get("start_time")),
                end_time=normalize_mysql_time(r.get("end_time")),
                break_duration_minutes=int(r["break_duration"]) if r.get("break_duration") is not None else None,
                applicable_weekdays=parse_weekdays(r.get("applicable_days")),
                is_active=bool(r.get("is_active", 1)),
            )
