from dataclasses import replace
from datetime import date, timedelta

from shift_attendance.templates.expander import expand


def test_expand_weekdays_only(weekday_template):
    # 2026-03-02 is a Monday.
    days = expand(weekday_template, date(2026, 3, 2), date(2026, 3, 15))

    assert len(days) == 10
    assert all(d.isoweekday() <= 5 for d in days)
    assert days[0] == date(2026, 3, 2)
    assert days[-1] == date(2026, 3, 13)


def test_expand_single_day_matches_weekday_membership(weekday_template):
    for offset in range(7):
        day = date(2026, 3, 2) + timedelta(days=offset)

        expected = [day] if day.isoweekday() in weekday_template.applicable_weekdays else []
        assert expand(weekday_template, day, day) == expected


def test_expand_inverted_range_is_empty(weekday_template):
    assert expand(weekday_template, date(2026, 3, 10), date(2026, 3, 2)) == []


def test_expand_without_weekdays_is_empty(weekday_template):
    template = replace(weekday_template, applicable_weekdays=frozenset())

    assert expand(template, date(2026, 3, 2), date(2026, 3, 31)) == []


def test_expand_defaults_to_every_day(weekday_template):
    template = replace(weekday_template, applicable_weekdays=frozenset(range(1, 8)))

    assert len(expand(template, date(2026, 2, 1), date(2026, 2, 28))) == 28


def test_expand_sunday_only(weekday_template):
    template = replace(weekday_template, applicable_weekdays=frozenset({7}))

    assert expand(template, date(2026, 3, 1), date(2026, 3, 31)) == [
        date(2026, 3, 1),
        date(2026, 3, 8),
        date(2026, 3, 15),
        date(2026, 3, 22),
        date(2026, 3, 29),
    ]
