from __future__ import annotations

from typing import Protocol, Sequence

from .model import BatchOperationRecord


class BatchOperationRepository(Protocol):
    def record(self, record: BatchOperationRecord) -> int:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[BatchOperationRecord]:
        """Newest first."""

        raise NotImplementedError
