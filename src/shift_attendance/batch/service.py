from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import clean_note, require_positive_ids
from ..core.constants import (
    APPROVAL_NOTE_PREFIX,
    DEFAULT_BATCH_WORKERS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_PENDING_PAGE_SIZE,
    MSG_ALREADY_EXISTS,
    MSG_NOT_AWAITING_APPROVAL,
    MSG_NOT_CONFIRMED,
    MSG_SHIFT_NOT_FOUND,
    TEMPLATE_NOTE_PREFIX,
)
from ..core.enums import BatchOperationType, ShiftStatus, ShiftType
from ..core.exceptions import NotFoundError, PreconditionError, ValidationError
from ..schedules.model import ShiftSchedule
from ..schedules.repository import ScheduleRepository
from ..templates.expander import expand
from ..templates.model import ShiftTemplate
from ..templates.repository import TemplateRepository
from .model import ApprovalStats, BatchOperationRecord, BatchOutcome, PendingPage, PendingUserGroup
from .repository import BatchOperationRepository
from .results import fold_outcome
from .runner import BatchTarget, CancellationToken, run_targets

logger = logging.getLogger(__name__)


def _append_approval_note(existing: Optional[str], note: str) -> str:
    line = f"{APPROVAL_NOTE_PREFIX}{note}"
    return f"{existing}\n{line}" if existing else line


class BatchMutator:
    """Bulk shift mutations with per-target failure isolation.

    Each target re-reads the shift right before writing, and status changes
    are compare-and-set, so a concurrent edit shows up as a precondition
    error on that target rather than being overwritten.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        templates: TemplateRepository,
        operations: BatchOperationRepository,
        *,
        max_workers: int = DEFAULT_BATCH_WORKERS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._schedules = schedules
        self._templates = templates
        self._operations = operations
        self._max_workers = int(max_workers)
        self._clock = clock

    # Template application

    def apply_template(
        self,
        *,
        template_id: int,
        user_ids: Iterable[int],
        dates: Iterable[date],
        override_existing: bool = False,
        cancel_token: Optional[CancellationToken] = None,
    ) -> BatchOutcome:
        template = self._load_template(template_id)
        return self._apply(template, user_ids, list(dates), override_existing, cancel_token)

    def apply_template_to_range(
        self,
        *,
        template_id: int,
        user_ids: Iterable[int],
        start_date: date,
        end_date: date,
        override_existing: bool = False,
        cancel_token: Optional[CancellationToken] = None,
    ) -> BatchOutcome:
        template = self._load_template(template_id)
        dates = expand(template, start_date, end_date)
        return self._apply(template, user_ids, dates, override_existing, cancel_token)

    def _load_template(self, template_id: int) -> ShiftTemplate:
        # Outside any target: a failure here aborts the whole batch.
        template = self._templates.get_by_id(int(template_id))
        if template is None:
            raise NotFoundError(f"Shift template {template_id} not found")
        return template

    def _apply(
        self,
        template: ShiftTemplate,
        user_ids: Iterable[int],
        dates: Sequence[date],
        override_existing: bool,
        cancel_token: Optional[CancellationToken],
    ) -> BatchOutcome:
        users = list(dict.fromkeys(require_positive_ids(user_ids, "user_ids")))
        days = list(dict.fromkeys(dates))
        targets = [BatchTarget(key=f"{uid}@{d.isoformat()}", payload=(uid, d)) for uid in users for d in days]

        def action(payload: tuple[int, date]) -> int:
            uid, d = payload
            return self._apply_one(template, uid, d, override_existing)

        return self._run(BatchOperationType.SHIFT_TEMPLATE_APPLY, targets, action, cancel_token)

    def _apply_one(self, template: ShiftTemplate, user_id: int, work_date: date, override_existing: bool) -> int:
        note = f"{TEMPLATE_NOTE_PREFIX}{template.name}"
        existing = self._schedules.get_for_user_and_date(user_id=user_id, work_date=work_date)

        if existing is not None:
            if not override_existing:
                raise PreconditionError(MSG_ALREADY_EXISTS)
            updated = self._schedules.update_from_template(
                shift_id=existing.shift_id,
                shift_type=template.shift_type,
                scheduled_start=template.start_time,
                scheduled_end=template.end_time,
                note=note,
            )
            if not updated:
                raise PreconditionError(MSG_SHIFT_NOT_FOUND)
            return existing.shift_id

        return self._schedules.create(
            user_id=user_id,
            work_date=work_date,
            shift_type=template.shift_type,
            scheduled_start=template.start_time,
            scheduled_end=template.end_time,
            status=ShiftStatus.ADJUSTING,
            note=note,
        )

    # Approval

    def approve(
        self,
        shift_ids: Iterable[int],
        note: Optional[str] = None,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> BatchOutcome:
        ids = list(dict.fromkeys(require_positive_ids(shift_ids, "shift_ids")))
        if not ids:
            raise ValidationError("No shifts selected for approval")
        note = clean_note(note)

        targets = [BatchTarget(key=str(sid), payload=sid) for sid in ids]
        return self._run(
            BatchOperationType.SHIFT_APPROVE,
            targets,
            lambda sid: self._approve_one(sid, note),
            cancel_token,
        )

    def _approve_one(self, shift_id: int, note: Optional[str]) -> int:
        shift = self._schedules.get_by_id(shift_id)
        if shift is None:
            raise NotFoundError(MSG_SHIFT_NOT_FOUND)
        if shift.status != ShiftStatus.ADJUSTING:
            raise PreconditionError(MSG_NOT_AWAITING_APPROVAL)

        new_note = _append_approval_note(shift.note, note) if note else None
        ok = self._schedules.transition_status(
            shift_id=shift_id,
            expected=ShiftStatus.ADJUSTING,
            new=ShiftStatus.CONFIRMED,
            note=new_note,
        )
        if not ok:
            # Someone changed the shift between our read and write.
            raise PreconditionError(MSG_NOT_AWAITING_APPROVAL)
        return shift_id

    def cancel_approval(
        self,
        shift_ids: Iterable[int],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> BatchOutcome:
        ids = list(dict.fromkeys(require_positive_ids(shift_ids, "shift_ids")))
        targets = [BatchTarget(key=str(sid), payload=sid) for sid in ids]
        return self._run(BatchOperationType.SHIFT_CANCEL_APPROVAL, targets, self._cancel_one, cancel_token)

    def _cancel_one(self, shift_id: int) -> int:
        shift = self._schedules.get_by_id(shift_id)
        if shift is None:
            raise NotFoundError(MSG_SHIFT_NOT_FOUND)
        if shift.status != ShiftStatus.CONFIRMED:
            raise PreconditionError(MSG_NOT_CONFIRMED)

        ok = self._schedules.transition_status(
            shift_id=shift_id,
            expected=ShiftStatus.CONFIRMED,
            new=ShiftStatus.ADJUSTING,
        )
        if not ok:
            raise PreconditionError(MSG_NOT_CONFIRMED)
        return shift_id

    def approve_all_for_user(
        self,
        user_id: int,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        note: Optional[str] = None,
    ) -> BatchOutcome:
        pending = self._schedules.list_range(
            start=date_from,
            end=date_to,
            user_id=int(user_id),
            status=ShiftStatus.ADJUSTING,
        )
        if not pending:
            return fold_outcome(BatchOperationType.SHIFT_APPROVE, [])
        return self.approve([s.shift_id for s in pending], note)

    def list_history(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[BatchOperationRecord]:
        return list(self._operations.list_recent(limit=int(limit)))

    # Shared execution

    def _run(
        self,
        operation_type: BatchOperationType,
        targets: list[BatchTarget],
        action,
        cancel_token: Optional[CancellationToken],
    ) -> BatchOutcome:
        executed_at = self._clock()
        logger.info(
            "Batch %s started with %d targets",
            operation_type.value,
            len(targets),
            extra={"operation_type": operation_type.value, "target_count": len(targets)},
        )

        report = run_targets(targets, action, max_workers=self._max_workers, cancel_token=cancel_token)
        outcome = fold_outcome(
            operation_type,
            report.results,
            cancelled=report.cancelled,
            skipped_count=report.skipped_count,
        )

        self._record_audit(outcome, executed_at=executed_at, completed_at=self._clock())
        logger.info(
            "Batch %s finished: %d ok, %d failed, %d skipped",
            operation_type.value,
            outcome.success_count,
            outcome.error_count,
            outcome.skipped_count,
            extra={
                "operation_type": operation_type.value,
                "target_count": outcome.target_count,
                "success_count": outcome.success_count,
                "error_count": outcome.error_count,
            },
        )
        return outcome

    def _record_audit(self, outcome: BatchOutcome, *, executed_at: datetime, completed_at: datetime) -> None:
        record = BatchOperationRecord.from_outcome(outcome, executed_at=executed_at, completed_at=completed_at)
        try:
            self._operations.record(record)
        except Exception:
            # The tally is already final; a lost audit row must not change it.
            logger.exception(
                "Could not record batch operation audit",
                extra={"operation_type": outcome.operation_type.value},
            )


class ApprovalQueueService:
    """Read side of the approval screen: what is still waiting, and how much."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def pending_shifts(
        self,
        *,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        shift_type: Optional[ShiftType] = None,
    ) -> list[ShiftSchedule]:
        shifts = self._schedules.list_range(
            start=date_from,
            end=date_to,
            user_id=int(user_id) if user_id is not None else None,
            status=ShiftStatus.ADJUSTING,
        )
        return [s for s in shifts if shift_type is None or s.shift_type == shift_type]

    def pending_by_user(
        self,
        *,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        shift_type: Optional[ShiftType] = None,
        page: int = 1,
        page_size: int = DEFAULT_PENDING_PAGE_SIZE,
    ) -> PendingPage:
        if page < 1 or page_size < 1:
            raise ValidationError("page and page_size must be positive")

        grouped: dict[int, list[ShiftSchedule]] = defaultdict(list)
        for s in self.pending_shifts(user_id=user_id, date_from=date_from, date_to=date_to, shift_type=shift_type):
            grouped[s.user_id].append(s)

        user_ids = sorted(grouped)
        offset = (page - 1) * page_size
        groups = [PendingUserGroup(user_id=uid, shifts=grouped[uid]) for uid in user_ids[offset:offset + page_size]]
        return PendingPage(groups=groups, total_users=len(user_ids), page=page, page_size=page_size)

    def approval_stats(self, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> ApprovalStats:
        shifts = self._schedules.list_range(start=date_from, end=date_to)
        pending = [s for s in shifts if s.status == ShiftStatus.ADJUSTING]

        by_type = {t.value: 0 for t in ShiftType}
        for s in pending:
            by_type[s.shift_type.value] += 1

        return ApprovalStats(
            total_pending=len(pending),
            total_confirmed=sum(1 for s in shifts if s.status == ShiftStatus.CONFIRMED),
            pending_by_type=by_type,
        )
