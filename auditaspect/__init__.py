"""auditaspect - declarative audit handlers around method calls.

Attach handler names to functions, methods or classes with ``@auditable``;
the named handlers are notified before the call, after it returns and after
it raises. Handler failures are isolated from the business call.

Usage:
    from auditaspect import auditable

    @auditable("dbAudit", "inMemoryAudit")
    class DemoService:
        def ok(self, s: str) -> str:
            return s.upper()
"""

from auditaspect.core.errors import (
    AuditHandlerError,
    HandlerExecutionError,
    UnknownHandlerError,
)
from auditaspect.core.result import Failure, Result, Success
from auditaspect.domain.enums import Phase
from auditaspect.domain.protocols import (
    AuditHandler,
    BaseAuditHandler,
    HandlerRegistryProtocol,
    LoggerProtocol,
)
from auditaspect.domain.value_objects import (
    AuditConfig,
    HandlerOutcome,
    InvocationContext,
    InvocationSite,
    PhaseReport,
)
from auditaspect.infrastructure.dispatch import ConfigurationResolver, PhaseDispatcher
from auditaspect.infrastructure.registry import InMemoryHandlerRegistry
from auditaspect.interception import AuditWeaver, auditable

__version__ = "0.1.0"

__all__ = [
    "auditable",
    "AuditWeaver",
    "AuditConfig",
    "AuditHandler",
    "BaseAuditHandler",
    "AuditHandlerError",
    "ConfigurationResolver",
    "Failure",
    "HandlerExecutionError",
    "HandlerOutcome",
    "HandlerRegistryProtocol",
    "InMemoryHandlerRegistry",
    "InvocationContext",
    "InvocationSite",
    "LoggerProtocol",
    "Phase",
    "PhaseDispatcher",
    "PhaseReport",
    "Result",
    "Success",
    "UnknownHandlerError",
]
