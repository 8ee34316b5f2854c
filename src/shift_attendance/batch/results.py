from __future__ import annotations

from typing import Iterable

from ..core.enums import BatchOperationType
from .model import BatchError, BatchOutcome, TargetFailed, TargetResult, TargetSucceeded


def fold_outcome(
    operation_type: BatchOperationType,
    results: Iterable[TargetResult],
    *,
    cancelled: bool = False,
    skipped_count: int = 0,
) -> BatchOutcome:
    """Reduce per-target results into one tally.

    Every result counts exactly once, so the counts always add up to
    ``target_count``.
    """

    success = 0
    errors: list[BatchError] = []
    affected: list[int] = []
    for r in results:
        if isinstance(r, TargetSucceeded):
            success += 1
            if r.affected_id is not None:
                affected.append(r.affected_id)
        elif isinstance(r, TargetFailed):
            errors.append(BatchError(target_key=r.target_key, message=r.message))
        else:
            raise TypeError(f"Unsupported batch result: {r!r}")

    return BatchOutcome(
        operation_type=operation_type,
        target_count=success + len(errors),
        success_count=success,
        error_count=len(errors),
        errors=errors,
        affected_ids=affected,
        cancelled=cancelled,
        skipped_count=int(skipped_count),
    )
