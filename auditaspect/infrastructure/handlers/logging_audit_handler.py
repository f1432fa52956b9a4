"""Logging audit handler.

Writes one structured log record per phase. Register it under a name (for
example ``loggerAudit``) and reference that name from ``@auditable``.

Log Levels:
    - INFO: BEFORE and AFTER_RETURNING (normal operations)
    - WARNING: AFTER_THROWING (the business call failed)

Structured Fields:
    - target: ``Owner#method``
    - invocation_id: correlates the phases of one call
    - args_count / kwargs_keys: argument shape only, never values
    - return_type: type name of the returned value
    - error_type / error_message: for AFTER_THROWING
"""

from typing import Any

from auditaspect.core.errors import describe_error
from auditaspect.domain.protocols import LoggerProtocol
from auditaspect.domain.value_objects import InvocationContext


class LoggingAuditHandler:
    """Audit handler that logs each phase through LoggerProtocol.

    Attributes:
        _logger: Logger with ``audit_handler`` bound.
    """

    def __init__(self, logger: LoggerProtocol, *, name: str = "loggerAudit") -> None:
        self._logger = logger.bind(audit_handler=name)

    def before(self, context: InvocationContext) -> None:
        self._logger.info(
            "audit_call_started",
            target=context.target,
            invocation_id=str(context.invocation_id),
            args_count=len(context.args),
            kwargs_keys=sorted(context.kwargs),
        )

    def after_returning(self, context: InvocationContext, return_value: Any) -> None:
        self._logger.info(
            "audit_call_succeeded",
            target=context.target,
            invocation_id=str(context.invocation_id),
            return_type=type(return_value).__name__,
            elapsed_ns=context.elapsed_ns,
        )

    def after_throwing(self, context: InvocationContext, error: Exception) -> None:
        self._logger.warning(
            "audit_call_failed",
            target=context.target,
            invocation_id=str(context.invocation_id),
            error_type=type(error).__name__,
            error_message=describe_error(error),
            elapsed_ns=context.elapsed_ns,
        )
