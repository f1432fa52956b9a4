"""Handler capability (port) for audit observers.

Any object registered under a name in the handler registry must expose the
three phase operations below. Handlers are invoked synchronously on the
thread making the business call, in configured order, one at a time.

Contract obligations on implementations:
    - Thread-safe: the same instance is invoked from many threads at once.
    - Non-blocking: no timeout is imposed, a slow handler delays the caller.
    - Synchronous: returning an awaitable is recorded as a failure and the
      awaitable is discarded.
    - Exceptions are caught and logged by the dispatcher and never reach the
      business call, but they still count as a failed outcome.

Usage:
    >>> class LoggerAudit:
    ...     def before(self, context):
    ...         logger.info("audit_before", target=context.target)
    ...
    ...     def after_returning(self, context, return_value):
    ...         logger.info("audit_after_returning", target=context.target)
    ...
    ...     def after_throwing(self, context, error):
    ...         logger.warning("audit_after_throwing", error_type=type(error).__name__)
"""

from typing import Any, Protocol, runtime_checkable

from auditaspect.domain.value_objects import InvocationContext


@runtime_checkable
class AuditHandler(Protocol):
    """Three-phase observer capability (structural, no inheritance required)."""

    def before(self, context: InvocationContext) -> None:
        """Called immediately before the intercepted call runs.

        Args:
            context: The current invocation (target, arguments, id).
        """
        ...

    def after_returning(self, context: InvocationContext, return_value: Any) -> None:
        """Called after the intercepted call returns normally.

        Args:
            context: The current invocation.
            return_value: Value returned by the call, may be ``None``.
        """
        ...

    def after_throwing(self, context: InvocationContext, error: Exception) -> None:
        """Called after the intercepted call raises.

        Args:
            context: The current invocation.
            error: The exception raised by the call (never ``None``). The
                same object is re-raised to the caller afterwards.
        """
        ...


class BaseAuditHandler:
    """Convenience base with no-op phase operations.

    Subclass and override only the phases you care about.
    """

    def before(self, context: InvocationContext) -> None:
        return None

    def after_returning(self, context: InvocationContext, return_value: Any) -> None:
        return None

    def after_throwing(self, context: InvocationContext, error: Exception) -> None:
        return None
