"""Per-handler outcomes and the per-phase report that collects them.

Every handler invocation yields a HandlerOutcome tagged Success or Failure.
The dispatcher returns one PhaseReport per phase trigger; the weaver never
acts on it, so the report is purely an observation surface (tests, callers
driving the dispatcher directly).
"""

from dataclasses import dataclass

from auditaspect.core.errors import AuditHandlerError
from auditaspect.core.result import Failure, Result, Success
from auditaspect.domain.enums import Phase


@dataclass(frozen=True, slots=True, kw_only=True)
class HandlerOutcome:
    """Outcome of invoking one named handler for one phase.

    Attributes:
        handler_name: Registry name of the handler.
        phase: Phase the handler was invoked for.
        result: ``Success(value=None)`` or ``Failure(error=...)``.
        duration_ns: Handler wall time, ``None`` when timing is disabled or
            the handler was never invoked (unknown name).
    """

    handler_name: str
    phase: Phase
    result: Result[None, AuditHandlerError]
    duration_ns: int | None = None

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, Success)

    @property
    def error(self) -> AuditHandlerError | None:
        match self.result:
            case Failure(error=error):
                return error
            case _:
                return None


@dataclass(frozen=True, slots=True, kw_only=True)
class PhaseReport:
    """All handler outcomes for one phase of one invocation.

    Attributes:
        phase: The dispatched phase.
        target: Call site key (``Owner#method``).
        handler_names: Resolved handler names, in dispatch order.
        outcomes: One outcome per resolved name, same order.
        total_duration_ns: Wall time of the whole handler loop, ``None`` when
            timing is disabled or nothing was dispatched.
    """

    phase: Phase
    target: str
    handler_names: tuple[str, ...] = ()
    outcomes: tuple[HandlerOutcome, ...] = ()
    total_duration_ns: int | None = None

    @classmethod
    def skipped_for(cls, phase: Phase, target: str) -> "PhaseReport":
        """Report for a call site with no resolved handlers."""
        return cls(phase=phase, target=target)

    @property
    def skipped(self) -> bool:
        """True when no handlers were resolved (the expected no-op path)."""
        return not self.handler_names

    @property
    def succeeded(self) -> tuple[HandlerOutcome, ...]:
        return tuple(o for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> tuple[HandlerOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.succeeded)
