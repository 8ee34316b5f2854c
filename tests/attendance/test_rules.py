from dataclasses import replace
from datetime import date, datetime

import pytest

from fakes import InMemoryStatusRules
from shift_attendance.attendance.model import StatusRule
from shift_attendance.attendance.rules import resolve_rule
from shift_attendance.attendance.service import StatusRuleService
from shift_attendance.core.exceptions import ValidationError

V1 = StatusRule(
    rule_id=1,
    effective_from=datetime(2025, 1, 1),
    normal_label="Normal",
    late_label="Late",
    early_leave_label="Early",
    absence_label="Absent",
    indeterminate_label="Unknown",
)
V2 = replace(V1, rule_id=2, effective_from=datetime(2026, 4, 1), late_label="Late arrival")

LABELS = {
    "normal_label": "Normal",
    "late_label": "Late",
    "early_leave_label": "Early",
    "absence_label": "Absent",
    "indeterminate_label": "Unknown",
}


def test_resolve_before_first_version_has_no_rule():
    resolution = resolve_rule([V1, V2], date(2024, 12, 31))

    assert resolution.rule is None
    assert not resolution.ambiguous


def test_resolve_picks_latest_not_after_date():
    assert resolve_rule([V1, V2], date(2026, 3, 31)).rule == V1
    assert resolve_rule([V1, V2], date(2026, 4, 1)).rule == V2
    assert resolve_rule([V2, V1], date(2027, 1, 1)).rule == V2


def test_resolve_flags_identical_effective_instant():
    twin = replace(V2, rule_id=3)

    assert resolve_rule([V1, V2, twin], date(2026, 5, 1)).ambiguous
    # Older days still resolve cleanly.
    assert resolve_rule([V1, V2, twin], date(2026, 1, 1)).rule == V1


def test_resolve_same_day_versions_pick_the_later_instant():
    morning = replace(V1, rule_id=3, effective_from=datetime(2026, 1, 1, 8, 0))
    evening = replace(V1, rule_id=4, effective_from=datetime(2026, 1, 1, 20, 0), late_label="Late (evening)")

    resolution = resolve_rule([V1, evening, morning], date(2026, 6, 1))

    assert not resolution.ambiguous
    assert resolution.rule == evening


def test_create_version_adds_new_date():
    repo = InMemoryStatusRules([V1])
    service = StatusRuleService(repo)

    rule_id = service.create_version(effective_from=datetime(2026, 7, 1), **LABELS)

    assert rule_id == 2
    assert [v.rule_id for v in service.list_versions()] == [1, 2]


def test_create_version_rejects_same_date_without_supersede():
    service = StatusRuleService(InMemoryStatusRules([V1]))

    with pytest.raises(ValidationError):
        service.create_version(effective_from=datetime(2025, 1, 1, 12, 0), **LABELS)


def test_create_version_supersede_replaces_in_place():
    repo = InMemoryStatusRules([V1])
    service = StatusRuleService(repo)

    rule_id = service.create_version(
        effective_from=datetime(2025, 1, 1),
        supersede=True,
        **{**LABELS, "late_label": "Tardy"},
    )

    assert rule_id == 1
    assert len(repo.versions) == 1
    assert repo.versions[0].late_label == "Tardy"


def test_create_version_requires_every_label():
    service = StatusRuleService(InMemoryStatusRules())

    with pytest.raises(ValidationError):
        service.create_version(effective_from=datetime(2026, 7, 1), **{**LABELS, "absence_label": "  "})
