"""Phase dispatcher.

Drives the resolved audit handlers for one phase of one intercepted call.

Architecture:
    - Resolves handler names per phase trigger (ConfigurationResolver)
    - Looks names up in the frozen handler registry
    - Fail-open per handler: a failure is recorded and logged, never raised,
      and never prevents the next handler from running
    - Sequential, in resolved order, on the calling thread (no fan-out)
    - Returns a PhaseReport of tagged Success/Failure outcomes

Usage:
    >>> dispatcher = PhaseDispatcher(
    ...     registry=InMemoryHandlerRegistry({"dbAudit": DbAuditHandler()}),
    ...     resolver=ConfigurationResolver(),
    ...     logger=get_logger(),
    ... )
    >>> report = dispatcher.dispatch(Phase.BEFORE, context)
    >>> [o.handler_name for o in report.failed]
    []
"""

from contextlib import suppress
from inspect import isawaitable
from time import perf_counter_ns
from typing import Any

from auditaspect.core.errors import (
    AuditHandlerError,
    HandlerExecutionError,
    UnknownHandlerError,
    describe_error,
)
from auditaspect.core.result import Failure, Success
from auditaspect.domain.enums import Phase
from auditaspect.domain.protocols import (
    AuditHandler,
    HandlerRegistryProtocol,
    LoggerProtocol,
)
from auditaspect.domain.value_objects import (
    HandlerOutcome,
    InvocationContext,
    PhaseReport,
)
from auditaspect.infrastructure.dispatch.configuration_resolver import (
    ConfigurationResolver,
)


class PhaseDispatcher:
    """Sequential, fail-open dispatcher of audit handler phases.

    Each call to dispatch() is an independent IDLE -> RESOLVING ->
    DISPATCHING -> DONE cycle. Nothing links a BEFORE dispatch to the
    AFTER_* dispatch of the same call; the weaver triggers each one.

    Thread Safety:
        - Holds no per-call state; the registry is frozen and the resolver
          is pure, so one instance serves every thread.
        - Handlers run on the caller's thread, one at a time.

    Attributes:
        _registry: Frozen name -> handler lookup.
        _resolver: Handler-name resolution for call sites.
        _logger: Diagnostic sink.
        _timing_enabled: Measure phase and handler durations.

    Design Decisions:
        - **Fail-open**: handler failures logged and reported, not propagated
        - **Ordered**: handlers run strictly in resolved order
        - **Synchronous**: handlers may rely on state bound to the calling
          thread for the duration of the business call
        - **No retry**: a failing handler fails again on the next call
    """

    def __init__(
        self,
        *,
        registry: HandlerRegistryProtocol,
        resolver: ConfigurationResolver | None = None,
        logger: LoggerProtocol,
        timing_enabled: bool = True,
    ) -> None:
        """Initialize dispatcher.

        Args:
            registry: Handler registry (built once at startup, read-only).
            resolver: Resolver for handler names; defaults to a new
                ConfigurationResolver.
            logger: Logger for phase diagnostics and handler failures.
            timing_enabled: When False, durations are reported as ``None``.
        """
        self._registry = registry
        self._resolver = resolver or ConfigurationResolver()
        self._logger = logger
        self._timing_enabled = timing_enabled

    @property
    def resolver(self) -> ConfigurationResolver:
        return self._resolver

    def dispatch(self, phase: Phase, context: InvocationContext) -> PhaseReport:
        """Notify every resolved handler of ``phase`` for ``context``.

        Flow:
            1. Resolve handler names for the call site
            2. If none, log at debug and return a skipped report (no-op)
            3. For each name in order: look up, invoke, record the outcome
            4. Log phase completion and return the report

        Args:
            phase: Which phase operation to invoke on each handler.
            context: The intercepted call. AFTER_RETURNING reads
                ``context.return_value``; AFTER_THROWING reads
                ``context.error``.

        Returns:
            PhaseReport: One outcome per resolved handler name.

        Notes:
            - NEVER raises for handler-side problems (fail-open guarantee)
            - No handlers = no-op (not an error)
        """
        target = context.target
        handler_names = self._resolver.resolve(context.site)

        if not handler_names:
            self._log(
                "debug",
                "audit_phase_skipped",
                phase=phase.value,
                target=target,
                reason="no_handlers",
            )
            return PhaseReport.skipped_for(phase, target)

        self._log(
            "debug",
            "audit_phase_started",
            phase=phase.value,
            target=target,
            invocation_id=str(context.invocation_id),
            handlers_count=len(handler_names),
            handlers=list(handler_names),
            **self._business_error_fields(phase, context),
        )

        t0 = perf_counter_ns()
        outcomes = tuple(
            self._invoke(name, phase, context, target) for name in handler_names
        )
        total_ns = perf_counter_ns() - t0 if self._timing_enabled else None

        self._log(
            "debug",
            "audit_phase_completed",
            phase=phase.value,
            target=target,
            invocation_id=str(context.invocation_id),
            total_duration_ns=total_ns,
            failed_count=sum(1 for o in outcomes if not o.succeeded),
            **self._business_error_fields(phase, context),
        )

        return PhaseReport(
            phase=phase,
            target=target,
            handler_names=handler_names,
            outcomes=outcomes,
            total_duration_ns=total_ns,
        )

    def _invoke(
        self,
        name: str,
        phase: Phase,
        context: InvocationContext,
        target: str,
    ) -> HandlerOutcome:
        handler = self._registry.lookup(name)
        if handler is None:
            error = UnknownHandlerError.for_name(name)
            self._log(
                "warning",
                "audit_handler_unknown",
                phase=phase.value,
                handler=name,
                target=target,
                error_code=error.code.value,
            )
            return HandlerOutcome(
                handler_name=name, phase=phase, result=Failure(error=error)
            )

        t0 = perf_counter_ns()
        try:
            returned = self._call_phase(handler, phase, context)
        except Exception as e:
            duration_ns = self._elapsed(t0)
            self._log(
                "warning",
                "audit_handler_failed",
                phase=phase.value,
                handler=name,
                target=target,
                duration_ns=duration_ns,
                error_type=type(e).__name__,
                error_message=describe_error(e),
                exc_info=e,
            )
            return self._failed(
                name, phase, HandlerExecutionError.from_exception(name, e), duration_ns
            )

        duration_ns = self._elapsed(t0)

        if isawaitable(returned):
            # Never scheduled: the call's thread-bound state is gone by then
            close = getattr(returned, "close", None)
            if callable(close):
                close()
            error = HandlerExecutionError.not_synchronous(name, returned)
            self._log(
                "warning",
                "audit_handler_failed",
                phase=phase.value,
                handler=name,
                target=target,
                duration_ns=duration_ns,
                error_code=error.code.value,
                error_type=error.error_type,
                error_message=error.message,
            )
            return self._failed(name, phase, error, duration_ns)

        self._log(
            "debug",
            "audit_handler_succeeded",
            phase=phase.value,
            handler=name,
            target=target,
            duration_ns=duration_ns,
        )
        return HandlerOutcome(
            handler_name=name,
            phase=phase,
            result=Success(value=None),
            duration_ns=duration_ns,
        )

    @staticmethod
    def _call_phase(
        handler: AuditHandler, phase: Phase, context: InvocationContext
    ) -> Any:
        match phase:
            case Phase.BEFORE:
                return handler.before(context)
            case Phase.AFTER_RETURNING:
                return handler.after_returning(context, context.return_value)
            case Phase.AFTER_THROWING:
                return handler.after_throwing(context, context.error)

    @staticmethod
    def _failed(
        name: str, phase: Phase, error: AuditHandlerError, duration_ns: int | None
    ) -> HandlerOutcome:
        return HandlerOutcome(
            handler_name=name,
            phase=phase,
            result=Failure(error=error),
            duration_ns=duration_ns,
        )

    @staticmethod
    def _business_error_fields(
        phase: Phase, context: InvocationContext
    ) -> dict[str, str]:
        if phase is not Phase.AFTER_THROWING or context.error is None:
            return {}
        return {
            "err_type": type(context.error).__name__,
            "err_message": describe_error(context.error),
        }

    def _elapsed(self, t0: int) -> int | None:
        return perf_counter_ns() - t0 if self._timing_enabled else None

    def _log(self, level: str, event: str, **fields: Any) -> None:
        # A failing diagnostic sink must not end the handler loop
        with suppress(Exception):
            getattr(self._logger, level)(event, **fields)
