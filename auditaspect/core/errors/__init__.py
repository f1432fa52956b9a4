"""Core errors package.

Usage:
    from auditaspect.core.errors import DomainError, UnknownHandlerError
"""

from auditaspect.core.errors.domain_error import DomainError
from auditaspect.core.errors.handler_errors import (
    AuditHandlerError,
    HandlerExecutionError,
    UnknownHandlerError,
    describe_error,
)

__all__ = [
    "DomainError",
    "AuditHandlerError",
    "UnknownHandlerError",
    "HandlerExecutionError",
    "describe_error",
]
