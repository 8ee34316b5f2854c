from __future__ import annotations

from datetime import date

from ..common.datetime_utils import iter_days
from .model import ShiftTemplate


def expand(template: ShiftTemplate, start_date: date, end_date: date) -> list[date]:
    """Concrete dates in [start_date, end_date] that fall on the template's weekdays.

    Both endpoints are inclusive. An empty weekday set or an inverted range
    gives an empty list.
    """

    weekdays = template.applicable_weekdays
    if not weekdays:
        return []
    return [d for d in iter_days(start_date, end_date) if d.isoweekday() in weekdays]
