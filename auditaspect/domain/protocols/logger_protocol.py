"""LoggerProtocol definition for structured logging.

The audit engine's diagnostic sink. Every record is a short snake_case event
name plus key-value context, so records can be filtered and aggregated by an
external logging or metrics collaborator.

Log Levels:
    - DEBUG: Phase start/completion, per-handler success, skipped phases
    - WARNING: Unknown handlers, handler failures
    - ERROR: Dispatcher faults caught by the weaver

Context Binding:
    Use bind() or with_context() to create scoped loggers with permanent
    context (target, invocation_id) automatically included in all logs.

Security:
    - Handlers and adapters MUST NOT log raw call arguments that may contain
      secrets; log argument counts or masked values instead.

Usage:
    from auditaspect.core.container import get_logger

    logger = get_logger()
    logger.debug("audit_phase_started", phase="BEFORE", target="Svc#ok")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.

        Example:
            handler_logger = logger.bind(handler="loggerAudit")
            handler_logger.info("audit_before", target="Svc#ok")
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind() - return logger with bound context."""
        ...
