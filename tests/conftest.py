from __future__ import annotations

import pytest

from fakes import FIXED_NOW, WEEKDAY_TEMPLATE, InMemoryBatchOperations, InMemorySchedules, InMemoryTemplates
from shift_attendance.batch.service import BatchMutator


@pytest.fixture
def schedules_repo():
    return InMemorySchedules()


@pytest.fixture
def templates_repo():
    return InMemoryTemplates({WEEKDAY_TEMPLATE.template_id: WEEKDAY_TEMPLATE})


@pytest.fixture
def operations_repo():
    return InMemoryBatchOperations()


@pytest.fixture
def weekday_template():
    return WEEKDAY_TEMPLATE


@pytest.fixture
def make_mutator(schedules_repo, templates_repo, operations_repo):
    def _make(*, schedules=None, templates=None, operations=None, max_workers: int = 1) -> BatchMutator:
        return BatchMutator(
            schedules or schedules_repo,
            templates or templates_repo,
            operations or operations_repo,
            max_workers=max_workers,
            clock=lambda: FIXED_NOW,
        )

    return _make
