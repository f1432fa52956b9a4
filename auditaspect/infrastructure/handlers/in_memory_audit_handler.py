"""In-memory audit handler.

Records one AuditRecord per phase in a bounded, thread-safe buffer. Useful in
tests and for inspecting recent activity in development.
"""

from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime
from threading import Lock
from typing import Any
from uuid import UUID

from auditaspect.domain.enums import Phase
from auditaspect.domain.value_objects import InvocationContext


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditRecord:
    """One recorded phase notification."""

    phase: Phase
    target: str
    invocation_id: UUID
    recorded_at: datetime
    return_value: Any = None
    error: Exception | None = None

    def __str__(self) -> str:
        return f"{self.phase.value}:{self.target}"


class InMemoryAuditHandler:
    """Audit handler keeping the most recent records in memory.

    Thread Safety:
        - Appends and snapshots are guarded by a lock.

    Args:
        max_records: Oldest records are dropped beyond this size; ``None``
            keeps everything.
    """

    def __init__(self, *, max_records: int | None = 10_000) -> None:
        self._records: deque[AuditRecord] = deque(maxlen=max_records)
        self._lock = Lock()

    @property
    def records(self) -> tuple[AuditRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def events(self) -> list[str]:
        """Records rendered as ``PHASE:Owner#method`` strings."""
        return [str(record) for record in self.records]

    def count(self, phase: Phase, target: str) -> int:
        return sum(1 for r in self.records if r.phase is phase and r.target == target)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def before(self, context: InvocationContext) -> None:
        self._append(Phase.BEFORE, context)

    def after_returning(self, context: InvocationContext, return_value: Any) -> None:
        self._append(Phase.AFTER_RETURNING, context, return_value=return_value)

    def after_throwing(self, context: InvocationContext, error: Exception) -> None:
        self._append(Phase.AFTER_THROWING, context, error=error)

    def _append(self, phase: Phase, context: InvocationContext, **outcome: Any) -> None:
        record = AuditRecord(
            phase=phase,
            target=context.target,
            invocation_id=context.invocation_id,
            recorded_at=datetime.now(UTC),
            **outcome,
        )
        with self._lock:
            self._records.append(record)
