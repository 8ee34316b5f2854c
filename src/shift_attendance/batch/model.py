from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import BatchOperationType, BatchRunStatus
from ..schedules.model import ShiftSchedule


@dataclass(frozen=True)
class BatchError:
    target_key: str
    message: str

    def to_dict(self) -> dict:
        return {"target_key": self.target_key, "message": self.message}


@dataclass(frozen=True)
class TargetSucceeded:
    target_key: str
    affected_id: Optional[int] = None


@dataclass(frozen=True)
class TargetFailed:
    target_key: str
    message: str


TargetResult = Union[TargetSucceeded, TargetFailed]


@dataclass(frozen=True)
class BatchOutcome:
    """Tally returned to the calling screen; success_count + error_count == target_count."""

    operation_type: BatchOperationType
    target_count: int
    success_count: int
    error_count: int
    errors: list[BatchError] = field(default_factory=list)
    affected_ids: list[int] = field(default_factory=list)
    cancelled: bool = False
    skipped_count: int = 0

    @property
    def run_status(self) -> BatchRunStatus:
        if self.cancelled:
            return BatchRunStatus.CANCELLED
        if self.error_count == 0:
            return BatchRunStatus.COMPLETED
        if self.success_count == 0:
            return BatchRunStatus.FAILED
        return BatchRunStatus.PARTIAL

    def to_dict(self) -> dict:
        return {
            "operation_type": self.operation_type.value,
            "target_count": self.target_count,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
            "affected_ids": list(self.affected_ids),
            "cancelled": self.cancelled,
            "skipped_count": self.skipped_count,
            "status": self.run_status.value,
        }


@dataclass(frozen=True)
class BatchOperationRecord:
    """Audit row written once per batch invocation.

    ``target_count`` counts every requested target, including the
    ``skipped_count`` ones a cancelled run never started.
    """

    operation_type: BatchOperationType
    target_count: int
    success_count: int
    error_count: int
    error_details: list[dict]
    status: BatchRunStatus
    executed_at: datetime
    completed_at: datetime
    skipped_count: int = 0
    operation_id: Optional[int] = None

    @classmethod
    def from_outcome(cls, outcome: BatchOutcome, *, executed_at: datetime, completed_at: datetime) -> "BatchOperationRecord":
        return cls(
            operation_type=outcome.operation_type,
            target_count=outcome.target_count + outcome.skipped_count,
            success_count=outcome.success_count,
            error_count=outcome.error_count,
            error_details=[e.to_dict() for e in outcome.errors],
            status=outcome.run_status,
            executed_at=executed_at,
            completed_at=completed_at,
            skipped_count=outcome.skipped_count,
        )

    def to_dict(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "operation_type": self.operation_type.value,
            "target_count": self.target_count,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "error_details": self.error_details,
            "skipped_count": self.skipped_count,
            "status": self.status.value,
            "executed_at": self.executed_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
        }


@dataclass(frozen=True)
class PendingUserGroup:
    """One worker's shifts awaiting approval, as shown on the approval screen."""

    user_id: int
    shifts: list[ShiftSchedule]

    @property
    def earliest_date(self) -> Optional[date]:
        return min((s.work_date for s in self.shifts), default=None)

    @property
    def latest_date(self) -> Optional[date]:
        return max((s.work_date for s in self.shifts), default=None)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "pending_count": len(self.shifts),
            "date_from": self.earliest_date.isoformat() if self.earliest_date else None,
            "date_to": self.latest_date.isoformat() if self.latest_date else None,
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass(frozen=True)
class PendingPage:
    groups: list[PendingUserGroup]
    total_users: int
    page: int
    page_size: int

    def to_dict(self) -> dict:
        return {
            "items": [g.to_dict() for g in self.groups],
            "total_users": self.total_users,
            "page": self.page,
            "page_size": self.page_size,
        }


@dataclass(frozen=True)
class ApprovalStats:
    total_pending: int
    total_confirmed: int
    pending_by_type: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "total_pending": self.total_pending,
            "total_confirmed": self.total_confirmed,
            "pending_by_type": dict(self.pending_by_type),
        }
