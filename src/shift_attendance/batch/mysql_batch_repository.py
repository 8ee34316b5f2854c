from __future__ import annotations

from typing import Sequence

from ..core.enums import BatchOperationType, BatchRunStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json
from .model import BatchOperationRecord
from .repository import BatchOperationRepository


class MySQLBatchOperationRepository(BatchOperationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, record: BatchOperationRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO batch_operations(operation_type, target_count, success_count, error_count, skipped_count,
                                             error_details, status, executed_at, completed_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.operation_type.value,
                    int(record.target_count),
                    int(record.success_count),
                    int(record.error_count),
                    int(record.skipped_count),
                    dump_json(record.error_details) if record.error_details else None,
                    record.status.value,
                    record.executed_at,
                    record.completed_at,
                ),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, limit: int) -> Sequence[BatchOperationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT operation_id, operation_type, target_count, success_count, error_count, skipped_count,
                       error_details, status, executed_at, completed_at
                FROM batch_operations
                ORDER BY executed_at DESC, operation_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                BatchOperationRecord(
                    operation_id=int(r["operation_id"]),
                    operation_type=BatchOperationType(r["operation_type"]),
                    target_count=int(r["target_count"]),
                    success_count=int(r["success_count"]),
                    error_count=int(r["error_count"]),
                    skipped_count=int(r.get("skipped_count") or 0),
                    error_details=load_json(r.get("error_details")) or [],
                    status=BatchRunStatus(r["status"]),
                    executed_at=r["executed_at"],
                    completed_at=r["completed_at"],
                )
                for r in fetchall(cur)
            ]
