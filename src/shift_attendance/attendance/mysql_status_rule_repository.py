from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StatusRule
from .repository import StatusRuleRepository


class MySQLStatusRuleRepository(StatusRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_versions(self) -> Sequence[StatusRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, effective_from, normal_label, late_label,
                       early_leave_label, absence_label, indeterminate_label
                FROM status_rules
                ORDER BY effective_from ASC, rule_id ASC
                """
            )
            return [
                StatusRule(
                    rule_id=int(r["rule_id"]),
                    effective_from=r["effective_from"],
                    normal_label=r["normal_label"],
                    late_label=r["late_label"],
                    early_leave_label=r["early_leave_label"],
                    absence_label=r["absence_label"],
                    indeterminate_label=r["indeterminate_label"],
                )
                for r in fetchall(cur)
            ]

    def create(
        self,
        *,
        effective_from: datetime,
        normal_label: str,
        late_label: str,
        early_leave_label: str,
        absence_label: str,
        indeterminate_label: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO status_rules(effective_from, normal_label, late_label,
                                         early_leave_label, absence_label, indeterminate_label)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (effective_from, normal_label, late_label, early_leave_label, absence_label, indeterminate_label),
            )
            return int(cur.lastrowid)

    def replace(
        self,
        *,
        rule_id: int,
        effective_from: datetime,
        normal_label: str,
        late_label: str,
        early_leave_label: str,
        absence_label: str,
        indeterminate_label: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE status_rules
                SET effective_from=%s, normal_label=%s, late_label=%s,
                    early_leave_label=%s, absence_label=%s, indeterminate_label=%s
                WHERE rule_id=%s
                """,
                (
                    effective_from,
                    normal_label,
                    late_label,
                    early_leave_label,
                    absence_label,
                    indeterminate_label,
                    int(rule_id),
                ),
            )
            return cur.rowcount > 0
