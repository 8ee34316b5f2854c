"""Run one action per batch target, sequentially or on a small thread pool.

Failures are turned into ``TargetFailed`` results inside each target, so
nothing a single target raises can stop the rest of the batch.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

from ..core.constants import MAX_BATCH_WORKERS
from ..core.exceptions import DomainError
from .model import TargetFailed, TargetResult, TargetSucceeded

logger = logging.getLogger(__name__)

P = TypeVar("P")


class CancellationToken:
    """Cooperative stop flag: no new targets start once cancelled."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class BatchTarget(Generic[P]):
    key: str
    payload: P


@dataclass(frozen=True)
class RunReport:
    results: list[TargetResult]
    skipped_count: int
    cancelled: bool


def _attempt(target: BatchTarget[P], action: Callable[[P], Optional[int]]) -> TargetResult:
    try:
        affected_id = action(target.payload)
    except DomainError as exc:
        logger.warning("Batch target %s rejected: %s", target.key, exc, extra={"target_key": target.key})
        return TargetFailed(target_key=target.key, message=str(exc))
    except Exception as exc:
        # Infrastructure failure: fatal for this target only.
        logger.exception("Batch target %s failed", target.key, extra={"target_key": target.key})
        return TargetFailed(target_key=target.key, message=str(exc) or exc.__class__.__name__)
    return TargetSucceeded(target_key=target.key, affected_id=affected_id)


def _clamp_workers(max_workers: int) -> int:
    return max(1, min(int(max_workers), MAX_BATCH_WORKERS))


def run_targets(
    targets: Sequence[BatchTarget[P]],
    action: Callable[[P], Optional[int]],
    *,
    max_workers: int = 1,
    cancel_token: Optional[CancellationToken] = None,
) -> RunReport:
    workers = _clamp_workers(max_workers)
    token = cancel_token or CancellationToken()
    results: list[TargetResult] = []
    started = 0

    if workers == 1:
        for target in targets:
            if token.cancelled:
                break
            started += 1
            results.append(_attempt(target, action))
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="batch") as pool:
            in_flight: set[Future] = set()
            for target in targets:
                while len(in_flight) >= workers:
                    done, in_flight = wait(in_flight, return_when=FIRST_COMPLETED)
                    results.extend(f.result() for f in done)
                if token.cancelled:
                    break
                in_flight.add(pool.submit(_attempt, target, action))
                started += 1
            if in_flight:
                done, _ = wait(in_flight)
                results.extend(f.result() for f in done)

    skipped = len(targets) - started
    return RunReport(results=results, skipped_count=skipped, cancelled=token.cancelled and skipped > 0)
