"""Error values recorded for individual handler invocations.

Two failure kinds exist at the handler boundary:

- UnknownHandlerError: a configured name has no registry entry.
- HandlerExecutionError: the handler's phase operation raised, or returned an
  awaitable instead of completing on the calling thread.

Both are terminal at the handler boundary. They are recorded in the phase
report and logged; they never propagate to the business call.
"""

from dataclasses import dataclass

from auditaspect.core.enums import ErrorCode
from auditaspect.core.errors.domain_error import DomainError


def describe_error(exc: BaseException) -> str:
    """Return ``str(exc)``, or a fallback when the exception cannot render itself.

    Exceptions crossing the handler boundary are arbitrary objects; their
    ``__str__`` may raise. The fallback is ``repr(exc)``, then the class name.
    """
    try:
        return str(exc)
    except Exception:
        try:
            return repr(exc)
        except Exception:
            return f"<unprintable {type(exc).__name__}>"


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditHandlerError(DomainError):
    """Base for errors tied to a single named handler.

    Attributes:
        handler_name: Registry name of the handler that failed.
    """

    handler_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UnknownHandlerError(AuditHandlerError):
    """A configured handler name has no registry entry."""

    @classmethod
    def for_name(cls, handler_name: str) -> "UnknownHandlerError":
        return cls(
            code=ErrorCode.UNKNOWN_HANDLER,
            message=f"No audit handler registered under '{handler_name}'",
            handler_name=handler_name,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class HandlerExecutionError(AuditHandlerError):
    """A handler's phase operation did not complete normally.

    Attributes:
        error_type: Class name of the exception raised by the handler.
        error_message: Rendered message of that exception (see describe_error).
    """

    error_type: str
    error_message: str

    @classmethod
    def from_exception(
        cls, handler_name: str, exc: Exception
    ) -> "HandlerExecutionError":
        """Classify an exception raised inside a handler."""
        error_type = type(exc).__name__
        return cls(
            code=ErrorCode.HANDLER_EXECUTION_FAILED,
            message=f"Audit handler '{handler_name}' raised {error_type}",
            handler_name=handler_name,
            error_type=error_type,
            error_message=describe_error(exc),
        )

    @classmethod
    def not_synchronous(
        cls, handler_name: str, returned: object
    ) -> "HandlerExecutionError":
        """Classify a handler that returned an awaitable."""
        returned_type = type(returned).__name__
        return cls(
            code=ErrorCode.HANDLER_NOT_SYNCHRONOUS,
            message=(
                f"Audit handler '{handler_name}' returned {returned_type}; "
                "handlers must complete on the calling thread"
            ),
            handler_name=handler_name,
            error_type=returned_type,
            error_message="awaitable discarded",
        )
