import threading

import pytest

from shift_attendance.batch.model import TargetFailed, TargetSucceeded
from shift_attendance.batch.runner import BatchTarget, CancellationToken, run_targets
from shift_attendance.core.exceptions import PreconditionError


def _targets(n):
    return [BatchTarget(key=str(i), payload=i) for i in range(1, n + 1)]


@pytest.mark.parametrize("workers", [1, 4])
def test_every_target_gets_one_result(workers):
    def action(i):
        if i % 3 == 0:
            raise PreconditionError("not awaiting approval")
        return i

    report = run_targets(_targets(10), action, max_workers=workers)

    assert len(report.results) == 10
    assert sorted(r.target_key for r in report.results) == sorted(str(i) for i in range(1, 11))
    failed = [r for r in report.results if isinstance(r, TargetFailed)]
    assert sorted(r.target_key for r in failed) == ["3", "6", "9"]
    assert not report.cancelled


def test_unexpected_exception_is_isolated():
    def action(i):
        if i == 2:
            raise ConnectionError("lost connection")
        return i

    report = run_targets(_targets(3), action)

    assert [type(r) for r in report.results] == [TargetSucceeded, TargetFailed, TargetSucceeded]
    assert report.results[1].message == "lost connection"


def test_exception_without_message_uses_class_name():
    def action(i):
        raise RuntimeError()

    report = run_targets(_targets(1), action)

    assert report.results[0].message == "RuntimeError"


def test_pool_never_exceeds_worker_limit():
    lock = threading.Lock()
    running = 0
    peak = 0

    def action(i):
        nonlocal running, peak
        with lock:
            running += 1
            peak = max(peak, running)
        threading.Event().wait(0.01)
        with lock:
            running -= 1
        return i

    report = run_targets(_targets(20), action, max_workers=3)

    assert len(report.results) == 20
    assert 1 <= peak <= 3


def test_worker_count_is_clamped():
    report = run_targets(_targets(5), lambda i: i, max_workers=0)

    assert len(report.results) == 5


def test_cancellation_stops_new_targets():
    token = CancellationToken()

    def action(i):
        if i == 2:
            token.cancel()
        return i

    report = run_targets(_targets(5), action, cancel_token=token)

    assert [r.target_key for r in report.results] == ["1", "2"]
    assert report.skipped_count == 3
    assert report.cancelled


def test_cancel_after_last_target_is_not_a_cancelled_run():
    token = CancellationToken()

    def action(i):
        if i == 3:
            token.cancel()
        return i

    report = run_targets(_targets(3), action, cancel_token=token)

    assert report.skipped_count == 0
    assert not report.cancelled


def test_token_cancelled_up_front_runs_nothing_on_pool():
    token = CancellationToken()
    token.cancel()

    report = run_targets(_targets(6), lambda i: i, max_workers=3, cancel_token=token)

    assert report.results == []
    assert report.skipped_count == 6
    assert report.cancelled
