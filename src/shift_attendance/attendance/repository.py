from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import StatusRule


class StatusRuleRepository(Protocol):
    def list_versions(self) -> Sequence[StatusRule]:
        """All versions, ascending by effective_from."""

        raise NotImplementedError

    def create(
        self,
        *,
        effective_from: datetime,
        normal_label: str,
        late_label: str,
        early_leave_label: str,
        absence_label: str,
        indeterminate_label: str,
    ) -> int:
        raise NotImplementedError

    def replace(
        self,
        *,
        rule_id: int,
        effective_from: datetime,
        normal_label: str,
        late_label: str,
        early_leave_label: str,
        absence_label: str,
        indeterminate_label: str,
    ) -> bool:
        raise NotImplementedError
