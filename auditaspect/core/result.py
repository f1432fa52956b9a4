"""Result types for railway-oriented programming.

Handler invocations report their outcome as data instead of raising. The
dispatcher wraps every handler call in a Result so that callers inspect a
PhaseReport rather than catching exceptions.

Usage:
    def lookup(name: str) -> Result[AuditHandler, UnknownHandlerError]:
        handler = registry.lookup(name)
        if handler is None:
            return Failure(error=UnknownHandlerError.for_name(name))
        return Success(value=handler)

    match lookup("dbAudit"):
        case Success(value=handler):
            handler.before(context)
        case Failure(error=error):
            logger.warning("audit_handler_unknown", code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value (``None`` for side-effect calls).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error value describing what went wrong.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
