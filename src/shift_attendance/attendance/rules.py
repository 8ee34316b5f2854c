from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from .model import StatusRule


@dataclass(frozen=True)
class RuleResolution:
    rule: Optional[StatusRule]
    ambiguous: bool = False


def resolve_rule(versions: Sequence[StatusRule], work_date: date) -> RuleResolution:
    """Pick the version effective on ``work_date``.

    That is the version with the latest ``effective_from`` whose date is not
    after ``work_date``. Two versions with the very same ``effective_from``
    cannot be told apart, so the result is flagged ambiguous instead of
    picking one.
    """

    candidates = [v for v in versions if v.effective_from.date() <= work_date]
    if not candidates:
        return RuleResolution(rule=None)

    latest = max(v.effective_from for v in candidates)
    winners = [v for v in candidates if v.effective_from == latest]
    if len(winners) > 1:
        return RuleResolution(rule=winners[0], ambiguous=True)
    return RuleResolution(rule=winners[0])
