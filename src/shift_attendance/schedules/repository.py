from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, ShiftType
from .model import ShiftSchedule


class ScheduleRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def get_for_user_and_date(self, *, user_id: int, work_date: date) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftSchedule]:
        raise NotImplementedError

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
        """Insert a shift row. Returns shift_id."""

        raise NotImplementedError

    def update_from_template(
        self,
        *,
        shift_id: int,
        shift_type: ShiftType,
        scheduled_start: Optional[time],
        scheduled_end: Optional[time],
        note: Optional[str],
    ) -> bool:
        """Overwrite type/time/note in place; id and status are kept."""

        raise NotImplementedError

    def transition_status(
        self,
        *,
        shift_id: int,
        expected: ShiftStatus,
        new: ShiftStatus,
        note: Optional[str] = None,
    ) -> bool:
        """Compare-and-set the status.

        Returns False when the row is gone or no longer in ``expected`` state.
        ``note`` (when given) replaces the shift note in the same write.
        """

        raise NotImplementedError
