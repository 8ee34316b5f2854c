from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.classifier import AttendanceClassifier
from .attendance.mysql_status_rule_repository import MySQLStatusRuleRepository
from .attendance.repository import StatusRuleRepository
from .attendance.service import AttendanceService, StatusRuleService
from .batch.mysql_batch_repository import MySQLBatchOperationRepository
from .batch.repository import BatchOperationRepository
from .batch.service import ApprovalQueueService, BatchMutator
from .core.constants import DEFAULT_BATCH_WORKERS, DEFAULT_GRACE_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchTimelineService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .templates.mysql_template_repository import MySQLTemplateRepository
from .templates.repository import TemplateRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    punches_repo: PunchRepository
    schedules_repo: ScheduleRepository
    templates_repo: TemplateRepository
    status_rules_repo: StatusRuleRepository
    batch_operations_repo: BatchOperationRepository

    timeline_service: PunchTimelineService
    attendance_service: AttendanceService
    status_rule_service: StatusRuleService
    batch_mutator: BatchMutator
    approval_queue_service: ApprovalQueueService


def wire(
    *,
    punches_repo: PunchRepository,
    schedules_repo: ScheduleRepository,
    templates_repo: TemplateRepository,
    status_rules_repo: StatusRuleRepository,
    batch_operations_repo: BatchOperationRepository,
    batch_max_workers: int = DEFAULT_BATCH_WORKERS,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    timeline_service = PunchTimelineService(punches_repo)
    attendance_service = AttendanceService(
        timeline_service,
        schedules_repo,
        status_rules_repo,
        classifier=AttendanceClassifier(grace_minutes=grace_minutes),
    )
    status_rule_service = StatusRuleService(status_rules_repo)
    batch_mutator = BatchMutator(
        schedules_repo,
        templates_repo,
        batch_operations_repo,
        max_workers=batch_max_workers,
    )

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        schedules_repo=schedules_repo,
        templates_repo=templates_repo,
        status_rules_repo=status_rules_repo,
        batch_operations_repo=batch_operations_repo,
        timeline_service=timeline_service,
        attendance_service=attendance_service,
        status_rule_service=status_rule_service,
        batch_mutator=batch_mutator,
        approval_queue_service=ApprovalQueueService(schedules_repo),
    )


def build_container(
    *,
    db_config: dict,
    batch_max_workers: int = DEFAULT_BATCH_WORKERS,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        punches_repo=MySQLPunchRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        templates_repo=MySQLTemplateRepository(conn),
        status_rules_repo=MySQLStatusRuleRepository(conn),
        batch_operations_repo=MySQLBatchOperationRepository(conn),
        batch_max_workers=batch_max_workers,
        grace_minutes=grace_minutes,
        conn=conn,
    )
