from datetime import datetime

from shift_attendance.core.enums import IntervalKind, PunchKind
from shift_attendance.punches.model import Interval, PunchEvent
from shift_attendance.punches.reconstructor import group_by_user, reconstruct, summarize


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute)


def punch(kind: PunchKind, when: datetime, user_id: int = 1, location: str = "HQ") -> PunchEvent:
    return PunchEvent(user_id=user_id, kind=kind, timestamp=when, location_label=location)


def spans(intervals):
    return [(it.kind, it.start, it.end) for it in intervals]


def test_full_day_with_one_break():
    events = [
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.BREAK_START, at(12)),
        punch(PunchKind.BREAK_END, at(13)),
        punch(PunchKind.CLOCK_OUT, at(18)),
    ]

    assert spans(reconstruct(events)) == [
        (IntervalKind.WORK, at(9), at(12)),
        (IntervalKind.BREAK, at(12), at(13)),
        (IntervalKind.WORK, at(13), at(18)),
    ]


def test_clock_in_only_gives_open_work_interval():
    intervals = reconstruct([punch(PunchKind.CLOCK_IN, at(9))])

    assert spans(intervals) == [(IntervalKind.WORK, at(9), None)]
    assert intervals[0].is_open


def test_clock_out_closes_dangling_break():
    events = [
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.BREAK_START, at(12)),
        punch(PunchKind.CLOCK_OUT, at(18)),
    ]

    assert spans(reconstruct(events)) == [
        (IntervalKind.WORK, at(9), at(12)),
        (IntervalKind.BREAK, at(12), at(18)),
    ]


def test_break_still_running_is_open():
    events = [punch(PunchKind.CLOCK_IN, at(9)), punch(PunchKind.BREAK_START, at(12))]

    assert spans(reconstruct(events)) == [
        (IntervalKind.WORK, at(9), at(12)),
        (IntervalKind.BREAK, at(12), None),
    ]


def test_second_clock_in_is_ignored():
    events = [
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.CLOCK_IN, at(10)),
        punch(PunchKind.CLOCK_OUT, at(17)),
    ]

    assert spans(reconstruct(events)) == [(IntervalKind.WORK, at(9), at(17))]


def test_break_punches_without_clock_in_are_ignored():
    events = [
        punch(PunchKind.BREAK_START, at(8)),
        punch(PunchKind.BREAK_END, at(8, 30)),
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.CLOCK_OUT, at(17)),
    ]

    assert spans(reconstruct(events)) == [(IntervalKind.WORK, at(9), at(17))]


def test_clock_out_without_clock_in_yields_nothing():
    assert reconstruct([punch(PunchKind.CLOCK_OUT, at(18))]) == []


def test_empty_input():
    assert reconstruct([]) == []


def test_storage_order_is_not_trusted():
    ordered = [
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.BREAK_START, at(12)),
        punch(PunchKind.BREAK_END, at(13)),
        punch(PunchKind.CLOCK_OUT, at(18)),
    ]
    shuffled = [ordered[2], ordered[3], ordered[0], ordered[1]]

    assert reconstruct(shuffled) == reconstruct(ordered)


def test_reconstruct_is_repeatable():
    events = [punch(PunchKind.CLOCK_IN, at(9)), punch(PunchKind.BREAK_START, at(12))]

    assert reconstruct(events) == reconstruct(events)


def test_equal_timestamps_do_not_produce_empty_spans():
    events = [
        punch(PunchKind.CLOCK_IN, at(9)),
        punch(PunchKind.BREAK_START, at(9)),
        punch(PunchKind.BREAK_END, at(10)),
        punch(PunchKind.CLOCK_OUT, at(17)),
    ]

    intervals = reconstruct(events)

    assert spans(intervals) == [
        (IntervalKind.BREAK, at(9), at(10)),
        (IntervalKind.WORK, at(10), at(17)),
    ]
    assert all(it.start < it.end for it in intervals)


def test_intervals_never_overlap():
    events = [
        punch(PunchKind.CLOCK_IN, at(8)),
        punch(PunchKind.BREAK_START, at(10)),
        punch(PunchKind.BREAK_END, at(10, 15)),
        punch(PunchKind.BREAK_START, at(12)),
        punch(PunchKind.BREAK_END, at(13)),
        punch(PunchKind.CLOCK_OUT, at(17)),
        punch(PunchKind.CLOCK_IN, at(18)),
        punch(PunchKind.CLOCK_OUT, at(20)),
    ]

    intervals = reconstruct(events)

    assert len(intervals) == 6
    for prev, nxt in zip(intervals, intervals[1:]):
        assert prev.end <= nxt.start


def test_location_comes_from_closing_punch():
    events = [
        punch(PunchKind.CLOCK_IN, at(9), location="Gate A"),
        punch(PunchKind.CLOCK_OUT, at(17), location="Gate B"),
    ]

    assert reconstruct(events)[0].location_label == "Gate B"


def test_summarize_counts_open_interval_up_to_now():
    intervals = [
        Interval(IntervalKind.WORK, at(9), at(12)),
        Interval(IntervalKind.BREAK, at(12), at(12, 45)),
        Interval(IntervalKind.WORK, at(12, 45), None),
    ]

    summary = summarize(intervals, now=at(14))

    assert summary.work_minutes == 180 + 75
    assert summary.break_minutes == 45
    assert summary.is_working
    assert not summary.is_on_break


def test_summarize_open_interval_starting_after_now_counts_zero():
    summary = summarize([Interval(IntervalKind.BREAK, at(15), None)], now=at(14))

    assert summary.break_minutes == 0
    assert summary.is_on_break


def test_group_by_user_keeps_each_users_events():
    events = [
        punch(PunchKind.CLOCK_IN, at(9), user_id=1),
        punch(PunchKind.CLOCK_IN, at(9, 5), user_id=2),
        punch(PunchKind.CLOCK_OUT, at(17), user_id=1),
    ]

    grouped = group_by_user(events)

    assert sorted(grouped) == [1, 2]
    assert [e.kind for e in grouped[1]] == [PunchKind.CLOCK_IN, PunchKind.CLOCK_OUT]
    assert len(grouped[2]) == 1
