from datetime import date, datetime, time

from shift_attendance.attendance.factory import AttendanceStrategyFactory
from shift_attendance.attendance.strategies.absent_strategy import AbsentStrategy
from shift_attendance.attendance.strategies.early_strategy import EarlyLeaveStrategy
from shift_attendance.attendance.strategies.indeterminate_strategy import IndeterminateStrategy
from shift_attendance.attendance.strategies.late_strategy import LateStrategy
from shift_attendance.attendance.strategies.normal_strategy import NormalStrategy
from shift_attendance.core.enums import IntervalKind, ShiftType
from shift_attendance.punches.model import Interval
from shift_attendance.schedules.model import ShiftSchedule

DAY = date(2026, 3, 2)
END_OF_DAY = datetime(2026, 3, 2, 23, 0)


def at(hour: int, minute: int = 0, day: int = 2) -> datetime:
    return datetime(2026, 3, day, hour, minute)


def shift(start=time(9, 0), end=time(18, 0), shift_type=ShiftType.NORMAL) -> ShiftSchedule:
    return ShiftSchedule(
        shift_id=1,
        user_id=1,
        work_date=DAY,
        shift_type=shift_type,
        scheduled_start=start,
        scheduled_end=end,
    )


def work(start: datetime, end=None) -> Interval:
    return Interval(IntervalKind.WORK, start, end)


def pause(start: datetime, end=None) -> Interval:
    return Interval(IntervalKind.BREAK, start, end)


def pick(intervals, schedule, now=END_OF_DAY, grace_minutes=0):
    return AttendanceStrategyFactory().for_day(
        intervals=intervals, schedule=schedule, now=now, grace_minutes=grace_minutes
    )


def test_factory_on_time_full_day_is_normal():
    assert isinstance(pick([work(at(9), at(18))], shift()), NormalStrategy)


def test_factory_clock_in_exactly_at_start_is_not_late():
    assert isinstance(pick([work(at(9), at(18, 30))], shift()), NormalStrategy)


def test_factory_late_arrival():
    assert isinstance(pick([work(at(9, 1), at(18))], shift()), LateStrategy)


def test_factory_late_within_grace_is_normal():
    assert isinstance(pick([work(at(9, 4), at(18))], shift(), grace_minutes=5), NormalStrategy)


def test_factory_early_departure():
    assert isinstance(pick([work(at(9), at(17, 59))], shift()), EarlyLeaveStrategy)


def test_factory_late_and_early_is_indeterminate():
    strategy = pick([work(at(10), at(17))], shift())

    assert isinstance(strategy, IndeterminateStrategy)
    assert "late" in strategy.reason


def test_factory_no_work_is_absent():
    assert isinstance(pick([], shift()), AbsentStrategy)


def test_factory_break_only_is_absent():
    assert isinstance(pick([pause(at(12), at(13))], shift()), AbsentStrategy)


def test_factory_without_schedule_is_normal():
    assert isinstance(pick([work(at(11), at(12))], None), NormalStrategy)


def test_factory_day_off_is_normal():
    assert isinstance(pick([], shift(start=None, end=None, shift_type=ShiftType.OFF)), NormalStrategy)


def test_factory_gap_covered_by_break_is_normal():
    intervals = [work(at(9), at(12)), pause(at(12), at(13)), work(at(13), at(18))]

    assert isinstance(pick(intervals, shift()), NormalStrategy)


def test_factory_unexplained_gap_inside_window_is_indeterminate():
    intervals = [work(at(9), at(12)), work(at(14), at(18))]

    strategy = pick(intervals, shift())

    assert isinstance(strategy, IndeterminateStrategy)
    assert "interrupted" in strategy.reason


def test_factory_gap_outside_window_is_ignored():
    intervals = [work(at(9), at(18)), work(at(19), at(20))]

    assert isinstance(pick(intervals, shift()), NormalStrategy)


def test_factory_open_work_interval_uses_now():
    assert isinstance(pick([work(at(9))], shift(), now=at(12)), EarlyLeaveStrategy)
    assert isinstance(pick([work(at(9))], shift(), now=at(18, 30)), NormalStrategy)


def test_factory_overnight_shift_ends_next_day():
    night = shift(start=time(22, 0), end=time(6, 0))

    assert isinstance(pick([work(at(22), at(6, day=3))], night, now=at(7, day=3)), NormalStrategy)
    assert isinstance(pick([work(at(22), at(5, day=3))], night, now=at(7, day=3)), EarlyLeaveStrategy)
