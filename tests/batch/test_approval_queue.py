from datetime import date, time

import pytest

from shift_attendance.batch.service import ApprovalQueueService
from shift_attendance.core.enums import ShiftStatus, ShiftType
from shift_attendance.core.exceptions import ValidationError

MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)


@pytest.fixture
def queue(schedules_repo):
    return ApprovalQueueService(schedules_repo)


def _late(schedules_repo, *, user_id, work_date, status=ShiftStatus.ADJUSTING):
    return schedules_repo.create(
        user_id=user_id,
        work_date=work_date,
        shift_type=ShiftType.LATE,
        scheduled_start=time(22, 0),
        scheduled_end=time(6, 0),
        status=status,
    )


def test_pending_shifts_only_returns_adjusting(queue, schedules_repo):
    pending = schedules_repo.add(user_id=1, work_date=MONDAY)
    schedules_repo.add(user_id=2, work_date=MONDAY, status=ShiftStatus.CONFIRMED)

    assert queue.pending_shifts() == [pending]


def test_pending_shifts_filters(queue, schedules_repo):
    schedules_repo.add(user_id=1, work_date=MONDAY)
    tuesday = schedules_repo.add(user_id=1, work_date=TUESDAY)
    schedules_repo.add(user_id=2, work_date=TUESDAY)
    late_id = _late(schedules_repo, user_id=3, work_date=TUESDAY)

    assert queue.pending_shifts(user_id=1, date_from=TUESDAY) == [tuesday]
    assert [s.shift_id for s in queue.pending_shifts(shift_type=ShiftType.LATE)] == [late_id]
    assert len(queue.pending_shifts(date_to=MONDAY)) == 1


def test_pending_by_user_groups_and_pages(queue, schedules_repo):
    for user_id in (3, 1, 2):
        schedules_repo.add(user_id=user_id, work_date=MONDAY)
    schedules_repo.add(user_id=1, work_date=TUESDAY)

    first = queue.pending_by_user(page=1, page_size=2)
    second = queue.pending_by_user(page=2, page_size=2)

    assert first.total_users == 3
    assert [g.user_id for g in first.groups] == [1, 2]
    assert [g.user_id for g in second.groups] == [3]
    group = first.to_dict()["items"][0]
    assert group["pending_count"] == 2
    assert (group["date_from"], group["date_to"]) == ("2026-03-02", "2026-03-03")


def test_pending_by_user_past_last_page_is_empty(queue, schedules_repo):
    schedules_repo.add(user_id=1, work_date=MONDAY)

    page = queue.pending_by_user(page=5, page_size=10)

    assert page.groups == []
    assert page.total_users == 1


@pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0), (-1, 5)])
def test_pending_by_user_rejects_bad_paging(queue, page, page_size):
    with pytest.raises(ValidationError):
        queue.pending_by_user(page=page, page_size=page_size)


def test_approval_stats_counts_by_status_and_type(queue, schedules_repo):
    schedules_repo.add(user_id=1, work_date=MONDAY)
    _late(schedules_repo, user_id=2, work_date=MONDAY)
    schedules_repo.add(user_id=3, work_date=MONDAY, status=ShiftStatus.CONFIRMED)
    schedules_repo.add(user_id=4, work_date=TUESDAY)

    stats = queue.approval_stats(date_to=MONDAY)

    assert stats.total_pending == 2
    assert stats.total_confirmed == 1
    assert stats.pending_by_type == {"normal": 1, "early": 0, "late": 1, "off": 0}
